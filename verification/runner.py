"""
Test Runner for Verification Module.

Executes the solver for each test case, collecting results in a structured
format for comparison with the golden values.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from gauss import DEFAULT_PIVOT_TOLERANCE, OutputMessages, SolveResult, SolveStatus, gauss
from gauss.files import InputFormatError, OutputFile, parse_input, write_in_file

from .loader import TestCase
from .schemas import OUTCOME_SOLVED


@dataclass
class SolverResults:
    """
    Contains solver output structured for comparison with golden data.

    Attributes:
        case_id: Test case identifier
        success: Whether the solver ran without raising
        error_message: Error message if the solver raised
        status: Solve status, None if the solver raised
        outcome: Outcome name comparable with TestCase.outcome
        solution: Solution values (empty unless solved)
        output_text: Text the solver would write to its output file
        residual_norm: Max |Ax - b| over the original equations
        result: Full SolveResult (for additional analysis)
    """
    case_id: str
    success: bool = True
    error_message: str = ""
    status: Optional[SolveStatus] = None
    outcome: Optional[str] = None
    solution: List[float] = field(default_factory=list)
    output_text: str = ""
    residual_norm: float = 0.0
    result: Optional[SolveResult] = None


class MemoryOutput(OutputFile):
    """OutputFile that keeps the written text in memory instead of on disk."""

    def __init__(self):
        self.text = ""

    def write(self, text: str) -> None:
        self.text = text

    def append(self, text: str) -> None:
        self.text += text


class TestRunner:
    """
    Executes the solver for verification test cases.

    Usage:
        runner = TestRunner()
        result = runner.run_case(test_case)

        # Or run every valid case
        results = runner.run_all(cases)
    """
    __test__ = False

    def __init__(
        self,
        tolerance: float = DEFAULT_PIVOT_TOLERANCE,
        messages: Optional[OutputMessages] = None,
        verbose: bool = False,
    ):
        """
        Initialize the test runner.

        Args:
            tolerance: Pivot tolerance passed to the solver
            messages: Failure texts used to render output_text
            verbose: If True, print progress messages
        """
        self.tolerance = tolerance
        self.messages = messages or OutputMessages()
        self.verbose = verbose

    def run_case(self, case: TestCase) -> SolverResults:
        """
        Run the solver for a single test case.

        Args:
            case: TestCase containing input text

        Returns:
            SolverResults containing solver outputs
        """
        result = SolverResults(case_id=case.case_id)

        if not case.is_valid:
            result.success = False
            result.error_message = "; ".join(e.message for e in case.errors)
            return result

        try:
            try:
                matrix = parse_input(case.input_text)
            except InputFormatError:
                solve_result = SolveResult.failed(SolveStatus.MALFORMED)
                original = None
            else:
                original = matrix.copy()
                solve_result = gauss(matrix, tolerance=self.tolerance)

            result.result = solve_result
            result.status = solve_result.status
            output = MemoryOutput()
            result.outcome = write_in_file(solve_result, output, case.input_text, self.messages)
            result.output_text = output.text

            if result.outcome == OUTCOME_SOLVED:
                result.solution = list(solve_result.solution or [])
                if original is not None and result.solution:
                    result.residual_norm = max(abs(r) for r in original.residuals(result.solution))

            if self.verbose:
                print(f"  ✓ {case.case_id}: {solve_result.message}")

        except Exception as e:
            result.success = False
            result.error_message = str(e)
            if self.verbose:
                print(f"  ✗ {case.case_id}: {e}")

        return result

    def run_all(self, cases: List[TestCase]) -> List[SolverResults]:
        """
        Run all valid test cases.

        Args:
            cases: List of test cases to execute

        Returns:
            List of SolverResults objects
        """
        results: List[SolverResults] = []

        for case in cases:
            if case.is_valid:
                results.append(self.run_case(case))
            elif self.verbose:
                print(f"\n⚠ Skipping invalid case: {case.case_id}")
                for error in case.errors:
                    print(f"  - {error.path}: {error.message}")

        return results


__all__ = [
    "SolverResults",
    "MemoryOutput",
    "TestRunner",
]
