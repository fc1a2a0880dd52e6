"""
Test Case Loader for Verification Module.

Discovers and loads test cases from the test_values/ directory.
Automatically pairs {case_id}_input.txt with {case_id}_golden.txt.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from gauss.files import read_golden

from .schemas import (
    OUTCOME_SOLVED,
    ValidationError,
    expected_outcome,
    validate_golden,
    validate_input,
)

INPUT_SUFFIX = "_input.txt"
GOLDEN_SUFFIX = "_golden.txt"


@dataclass
class TestCase:
    """
    Represents a single test case with input text and golden values.

    Attributes:
        case_id: Unique identifier for this test case
        input_path: Path to the input matrix file
        golden_path: Path to the golden values file
        input_text: Raw input file contents
        golden: Raw golden tokens
        outcome: Expected outcome name (see schemas.OUTCOME_*)
        errors: Any validation errors encountered during loading
    """
    __test__ = False

    case_id: str
    input_path: Path
    golden_path: Path
    input_text: str = ""
    golden: List[str] = field(default_factory=list)
    outcome: Optional[str] = None
    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Return True if the test case has no validation errors."""
        return len(self.errors) == 0

    @property
    def expected_values(self) -> List[float]:
        """Golden values as floats (empty unless a solution is expected)."""
        if self.outcome != OUTCOME_SOLVED:
            return []
        return [float(t) for t in self.golden]


class TestLoader:
    """
    Discovers and loads test cases from a directory.

    Usage:
        loader = TestLoader("test_values")
        cases = loader.discover()

        for case in cases:
            if case.is_valid:
                print(f"Loaded {case.case_id}: expects {case.outcome}")
    """
    __test__ = False

    def __init__(self, test_dir: str = "test_values"):
        """
        Initialize the loader.

        Args:
            test_dir: Path to directory containing case files
        """
        self.test_dir = Path(test_dir)

    def discover(self) -> List[TestCase]:
        """
        Discover and load all test cases from the test directory.

        Returns:
            List of TestCase objects (may include invalid cases with errors)
        """
        cases: List[TestCase] = []

        if not self.test_dir.exists():
            return cases

        for case_id in self.get_available_cases():
            case = self.load_single(case_id)
            if case is not None:
                cases.append(case)

        return cases

    def load_single(self, case_id: str) -> Optional[TestCase]:
        """
        Load a single test case by ID.

        Args:
            case_id: Case identifier (file name prefix)

        Returns:
            TestCase, or None if the input file does not exist
        """
        input_path = self.test_dir / f"{case_id}{INPUT_SUFFIX}"
        golden_path = self.test_dir / f"{case_id}{GOLDEN_SUFFIX}"

        if not input_path.exists():
            return None

        if not golden_path.exists():
            return TestCase(
                case_id=case_id,
                input_path=input_path,
                golden_path=golden_path,
                errors=[ValidationError(
                    "golden_path",
                    f"Golden file not found: {golden_path}"
                )]
            )

        return self._load_case(case_id, input_path, golden_path)

    def _load_case(self, case_id: str, input_path: Path, golden_path: Path) -> TestCase:
        """
        Load and validate a single test case.

        Args:
            case_id: Case identifier
            input_path: Path to input file
            golden_path: Path to golden file

        Returns:
            TestCase with loaded data and any validation errors
        """
        errors: List[ValidationError] = []
        input_text = ""
        golden: List[str] = []

        try:
            golden = read_golden(golden_path)
            errors.extend(validate_golden(golden))
        except (OSError, UnicodeDecodeError) as e:
            errors.append(ValidationError(
                "golden_path",
                f"Error reading golden file: {e}"
            ))

        outcome = expected_outcome(golden)

        try:
            input_text = input_path.read_text(encoding="utf-8")
            if outcome is not None:
                errors.extend(validate_input(input_text, outcome))
        except (OSError, UnicodeDecodeError) as e:
            errors.append(ValidationError(
                "input_path",
                f"Error reading input file: {e}"
            ))

        return TestCase(
            case_id=case_id,
            input_path=input_path,
            golden_path=golden_path,
            input_text=input_text,
            golden=golden,
            outcome=outcome,
            errors=errors,
        )

    def get_available_cases(self) -> List[str]:
        """
        Get sorted list of available case IDs without loading them.

        Returns:
            List of case ID strings
        """
        if not self.test_dir.exists():
            return []

        input_files = self.test_dir.glob(f"*{INPUT_SUFFIX}")
        return sorted(f.name[: -len(INPUT_SUFFIX)] for f in input_files)


def create_sample_case(case_id: str, test_dir: Path) -> List[Path]:
    """
    Write a sample input/golden pair for a new test case.

    The sample is the 2x2 system x + 2y = 3, 4x + 5y = 6 with solution (-1, 2).

    Args:
        case_id: Identifier for the new case
        test_dir: Directory to write the files into

    Returns:
        Paths of the created input and golden files
    """
    test_dir.mkdir(parents=True, exist_ok=True)
    input_path = test_dir / f"{case_id}{INPUT_SUFFIX}"
    golden_path = test_dir / f"{case_id}{GOLDEN_SUFFIX}"
    input_path.write_text("2\n1 2 3\n4 5 6\n", encoding="utf-8")
    golden_path.write_text("-1 2\n", encoding="utf-8")
    return [input_path, golden_path]


__all__ = [
    "TestCase",
    "TestLoader",
    "create_sample_case",
]
