"""Serialization helpers for solver configurations."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, IO, Optional, Union

from .elimination import DEFAULT_PIVOT_TOLERANCE

DEFAULT_INPUT_PATH = "input.txt"
DEFAULT_GOLDEN_PATH = "golden.txt"
DEFAULT_OUTPUT_PATH = "output.txt"
DEFAULT_VERIFY_TOLERANCE = 1e-9

_JSONSource = Union[str, Path, IO[str]]


@dataclass(frozen=True)
class OutputMessages:
    """Texts written to the output file when no solution can be reported."""

    no_solution: str = "no solution"
    wrong_input: str = "wrong input"

    @classmethod
    def legacy(cls) -> "OutputMessages":
        """Messages byte-compatible with consumers of the older output files."""

        return cls(no_solution="no solution", wrong_input="wrong imput")


def _to_float(value: Any, default: float) -> float:
    if value is None:
        return default
    return float(value)


@dataclass
class SolverConfig:
    """File locations and numeric settings for one solver run."""

    input_path: str = DEFAULT_INPUT_PATH
    golden_path: str = DEFAULT_GOLDEN_PATH
    output_path: str = DEFAULT_OUTPUT_PATH
    tolerance: float = DEFAULT_PIVOT_TOLERANCE
    verify_tolerance: float = DEFAULT_VERIFY_TOLERANCE
    messages: OutputMessages = field(default_factory=OutputMessages)

    def with_base_dir(self, base_dir: Union[str, Path]) -> "SolverConfig":
        """Return a copy whose relative paths are resolved against ``base_dir``."""

        base = Path(base_dir)

        def resolve(value: str) -> str:
            path = Path(value)
            return str(path if path.is_absolute() else base / path)

        return SolverConfig(
            input_path=resolve(self.input_path),
            golden_path=resolve(self.golden_path),
            output_path=resolve(self.output_path),
            tolerance=self.tolerance,
            verify_tolerance=self.verify_tolerance,
            messages=self.messages,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representing the configuration."""

        return {
            "input_path": self.input_path,
            "golden_path": self.golden_path,
            "output_path": self.output_path,
            "tolerance": self.tolerance,
            "verify_tolerance": self.verify_tolerance,
            "messages": {
                "no_solution": self.messages.no_solution,
                "wrong_input": self.messages.wrong_input,
            },
        }

    def to_json(self, *, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolverConfig":
        """Create a configuration from a dictionary.

        Missing keys fall back to the defaults and unknown keys are ignored.
        ``"legacy_messages": true`` selects :meth:`OutputMessages.legacy`;
        an explicit ``"messages"`` object overrides individual texts.
        """

        base_messages = OutputMessages.legacy() if data.get("legacy_messages") else OutputMessages()
        raw_messages = data.get("messages") or {}
        if not isinstance(raw_messages, dict):
            raise ValueError("'messages' must be an object")
        messages = OutputMessages(
            no_solution=str(raw_messages.get("no_solution", base_messages.no_solution)),
            wrong_input=str(raw_messages.get("wrong_input", base_messages.wrong_input)),
        )
        return cls(
            input_path=str(data.get("input_path", DEFAULT_INPUT_PATH)),
            golden_path=str(data.get("golden_path", DEFAULT_GOLDEN_PATH)),
            output_path=str(data.get("output_path", DEFAULT_OUTPUT_PATH)),
            tolerance=_to_float(data.get("tolerance"), DEFAULT_PIVOT_TOLERANCE),
            verify_tolerance=_to_float(data.get("verify_tolerance"), DEFAULT_VERIFY_TOLERANCE),
            messages=messages,
        )

    @classmethod
    def from_json(cls, source: _JSONSource) -> "SolverConfig":
        """Load a configuration from a JSON file path or file-like object."""

        if hasattr(source, "read"):
            data = json.load(source)  # type: ignore[arg-type]
        else:
            path = Path(source)
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError("Solver configuration JSON must contain an object at the top level")
        return cls.from_dict(data)

    def save(self, target: Union[str, Path, IO[str]], *, indent: Optional[int] = 2) -> None:
        """Write the configuration to disk or a file-like object."""

        payload = self.to_json(indent=indent)
        if hasattr(target, "write"):
            target.write(payload)  # type: ignore[arg-type]
        else:
            path = Path(target)
            path.write_text(payload, encoding="utf-8")


__all__ = [
    "DEFAULT_GOLDEN_PATH",
    "DEFAULT_INPUT_PATH",
    "DEFAULT_OUTPUT_PATH",
    "DEFAULT_VERIFY_TOLERANCE",
    "OutputMessages",
    "SolverConfig",
]
