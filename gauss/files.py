"""Text input and output for the solver.

Input files start with the number of equations ``R`` on the first line,
followed by ``R`` lines of ``R + 1`` whitespace-separated numbers.  Golden
files hold the expected solution on a single line.  The output file receives
either the solution values or one of the :class:`OutputMessages` texts.
"""
from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import OutputMessages
from .elimination import SolveResult, SolveStatus
from .matrix import AugmentedMatrix

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Outcome names shared by the writer and golden files.
OUTCOME_SOLVED = "solved"
OUTCOME_NO_SOLUTION = "no_solution"
OUTCOME_WRONG_INPUT = "wrong_input"

FAILURE_TEXTS = {
    "no solution": OUTCOME_NO_SOLUTION,
    "wrong input": OUTCOME_WRONG_INPUT,
    "wrong imput": OUTCOME_WRONG_INPUT,
}


class InputFormatError(ValueError):
    """Raised when input text cannot be read as an augmented matrix."""


def _parse_token(token: str, line_number: int) -> float:
    try:
        return float(token)
    except ValueError:
        raise InputFormatError(f"Line {line_number}: '{token}' is not a number") from None


def parse_input(text: str) -> AugmentedMatrix:
    """Build an :class:`AugmentedMatrix` from input text.

    The row count line must hold a single non-negative integer.  Rows with the
    wrong number of tokens, or too many/few rows, are kept as read so that
    ``exists_wrong_row`` reports them.
    """

    lines = [(number, line.split()) for number, line in enumerate(text.splitlines(), start=1)]
    lines = [(number, tokens) for number, tokens in lines if tokens]
    if not lines:
        raise InputFormatError("Input is empty")

    header_number, header = lines[0]
    if len(header) != 1:
        raise InputFormatError(f"Line {header_number}: expected the row count alone, got {len(header)} tokens")
    try:
        rows = int(header[0])
    except ValueError:
        raise InputFormatError(f"Line {header_number}: row count '{header[0]}' is not an integer") from None
    if rows < 0:
        raise InputFormatError(f"Line {header_number}: row count must not be negative")

    cells = [[_parse_token(token, number) for token in tokens] for number, tokens in lines[1:]]
    return AugmentedMatrix(cells, rows=rows)


def read_input(path: PathLike) -> AugmentedMatrix:
    return parse_input(Path(path).read_text(encoding="utf-8"))


def check_input(text: str) -> bool:
    """True when ``text`` parses to a matrix with a valid augmented shape."""

    try:
        matrix = parse_input(text)
    except InputFormatError as exc:
        logger.debug("Input re-check failed: %s", exc)
        return False
    return not matrix.exists_wrong_row()


def read_golden(path: PathLike) -> List[str]:
    """Return the whitespace-separated tokens of the golden file's first line."""

    text = Path(path).read_text(encoding="utf-8")
    lines = text.splitlines()
    return lines[0].split() if lines else []


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def golden_outcome(tokens: Sequence[str]) -> Optional[str]:
    """Classify golden tokens as a solution or a failure text.

    Returns one of the ``OUTCOME_*`` names, or None when the tokens are
    neither all numbers nor a known failure text.
    """

    if tokens and all(_is_number(token) for token in tokens):
        return OUTCOME_SOLVED
    return FAILURE_TEXTS.get(" ".join(tokens).lower())


def format_value(value: float) -> str:
    """Format a solution value: integral values drop the fractional part."""

    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


class OutputFile:
    """Output target with explicit overwrite and append operations."""

    def __init__(self, path: PathLike):
        self.path = Path(path)

    def write(self, text: str) -> None:
        self.path.write_text(text, encoding="utf-8")

    def append(self, text: str) -> None:
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(text)

    def clear(self) -> None:
        self.write("")


def written_outcome(
    result: Union[SolveResult, Sequence[float], None],
    input_text: str,
) -> str:
    """Outcome name that :func:`write_in_file` reports for ``result``.

    ``None`` and results without a unique solution are ``no_solution``.  A
    malformed result, or an ``input_text`` that fails :func:`check_input`, is
    ``wrong_input``.
    """

    if result is None:
        return OUTCOME_NO_SOLUTION
    if isinstance(result, SolveResult):
        if result.status in (SolveStatus.INCONSISTENT, SolveStatus.SINGULAR):
            return OUTCOME_NO_SOLUTION
        if result.status is SolveStatus.MALFORMED:
            return OUTCOME_WRONG_INPUT
    if not check_input(input_text):
        return OUTCOME_WRONG_INPUT
    return OUTCOME_SOLVED


def write_in_file(
    result: Union[SolveResult, Sequence[float], None],
    output: OutputFile,
    input_text: str,
    messages: Optional[OutputMessages] = None,
) -> str:
    """Write a solve outcome to ``output`` and return its outcome name.

    Failures overwrite the file with one :class:`OutputMessages` text.  A
    solution truncates the file, then appends each value as ``"<value> "`` in
    solution order.
    """

    messages = messages or OutputMessages()
    outcome = written_outcome(result, input_text)

    if outcome == OUTCOME_NO_SOLUTION:
        output.write(messages.no_solution)
        return outcome
    if outcome == OUTCOME_WRONG_INPUT:
        output.write(messages.wrong_input)
        return outcome

    if isinstance(result, SolveResult):
        values: Sequence[float] = result.solution or []
    else:
        values = result or []
    output.clear()
    for value in values:
        output.append(f"{format_value(value)} ")
    return outcome


__all__ = [
    "FAILURE_TEXTS",
    "InputFormatError",
    "OUTCOME_NO_SOLUTION",
    "OUTCOME_SOLVED",
    "OUTCOME_WRONG_INPUT",
    "OutputFile",
    "check_input",
    "format_value",
    "golden_outcome",
    "parse_input",
    "read_golden",
    "read_input",
    "write_in_file",
    "written_outcome",
]
