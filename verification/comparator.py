"""
Error Comparator for Verification Module.

Computes error statistics between solver outputs and golden values.
Provides per-unknown and aggregate metrics for validation.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .loader import TestCase
from .runner import SolverResults
from .schemas import OUTCOME_SOLVED


@dataclass
class FieldComparison:
    """
    Comparison results for the solution vector.

    Attributes:
        field_name: Name of the compared field
        model_values: Values from solver
        ref_values: Golden values
        abs_errors: Absolute errors per unknown
        rel_errors: Relative errors (%) per unknown
        signs: Error signs ('+' or '-') per unknown
        max_abs: Maximum absolute error
        mean_abs: Mean absolute error
        max_rel: Maximum relative error (%)
        mean_rel: Mean relative error (%)
        rms: Root mean square error
        count: Number of unknowns compared
    """
    field_name: str
    model_values: List[float] = field(default_factory=list)
    ref_values: List[float] = field(default_factory=list)
    abs_errors: List[float] = field(default_factory=list)
    rel_errors: List[float] = field(default_factory=list)
    signs: List[str] = field(default_factory=list)
    max_abs: float = 0.0
    mean_abs: float = 0.0
    max_rel: float = 0.0
    mean_rel: float = 0.0
    rms: float = 0.0
    count: int = 0

    def within_tolerance(self, abs_tol: float, rel_tol: float) -> bool:
        """Every unknown is within abs_tol or within rel_tol percent."""
        return all(
            a <= abs_tol or r <= rel_tol
            for a, r in zip(self.abs_errors, self.rel_errors)
        )


@dataclass
class CaseComparison:
    """
    Complete comparison results for one test case.

    Attributes:
        case_id: Test case identifier
        expected_outcome: Outcome the golden file expects
        actual_outcome: Outcome the solver produced
        solution: FieldComparison for the solution values (solved cases only)
        length_mismatch: True if solution and golden lengths differ
        residual_norm: Max |Ax - b| of the solver's solution
        overall_max_rel_error: Maximum relative error across all unknowns
        overall_pass: True if outcome matches and errors are within tolerance
        notes: Human-readable reasons for a failure
    """
    case_id: str
    expected_outcome: Optional[str]
    actual_outcome: Optional[str]
    solution: Optional[FieldComparison] = None
    length_mismatch: bool = False
    residual_norm: float = 0.0
    overall_max_rel_error: float = 0.0
    overall_pass: bool = True
    notes: List[str] = field(default_factory=list)

    @property
    def outcome_matches(self) -> bool:
        return self.expected_outcome == self.actual_outcome


# =============================================================================
# Default Tolerances
# =============================================================================

DEFAULT_TOLERANCES = {
    "solution": {"abs": 1e-9, "rel": 1e-6},    # ±1e-9 or ±1e-6 %
    "default": {"abs": 1e-9, "rel": 1e-6},
}


def get_tolerance(field_name: str, metric: str = "rel") -> float:
    """
    Get the tolerance for a field.

    Args:
        field_name: Name of the field
        metric: 'abs' for absolute, 'rel' for relative (%)

    Returns:
        Tolerance value
    """
    tols = DEFAULT_TOLERANCES.get(field_name.lower(), DEFAULT_TOLERANCES["default"])
    return tols[metric]


# =============================================================================
# Comparison Functions
# =============================================================================

def compare_field(
    field_name: str,
    model_values: List[float],
    ref_values: List[float],
) -> FieldComparison:
    """
    Compare a field element by element.

    Unlike load magnitudes, solution values keep their sign: x = -1 against
    a golden 1 is a 200 % error.

    Args:
        field_name: Name of the field being compared
        model_values: Values from solver
        ref_values: Golden values

    Returns:
        FieldComparison with all error metrics
    """
    comparison = FieldComparison(
        field_name=field_name,
        model_values=list(model_values),
        ref_values=list(ref_values),
        count=min(len(model_values), len(ref_values)),
    )

    if comparison.count == 0:
        return comparison

    abs_errors = []
    rel_errors = []
    signs = []

    for i in range(comparison.count):
        diff = model_values[i] - ref_values[i]
        abs_errors.append(abs(diff))

        ref_mag = abs(ref_values[i])
        if ref_mag > 1e-12:
            rel_err = 100.0 * abs(diff) / ref_mag
        else:
            rel_err = 0.0 if abs(diff) < 1e-12 else 100.0
        rel_errors.append(rel_err)

        signs.append("+" if diff >= 0 else "-")

    comparison.abs_errors = abs_errors
    comparison.rel_errors = rel_errors
    comparison.signs = signs

    comparison.max_abs = max(abs_errors)
    comparison.mean_abs = sum(abs_errors) / len(abs_errors)
    comparison.max_rel = max(rel_errors)
    comparison.mean_rel = sum(rel_errors) / len(rel_errors)
    comparison.rms = math.sqrt(sum(e**2 for e in abs_errors) / len(abs_errors))

    return comparison


def compare_results(
    case: TestCase,
    solver_result: SolverResults,
    abs_tol: Optional[float] = None,
    rel_tol: Optional[float] = None,
) -> CaseComparison:
    """
    Complete comparison of a solver run against its golden file.

    Args:
        case: Test case with golden data
        solver_result: Output of TestRunner.run_case
        abs_tol: Absolute tolerance (default from DEFAULT_TOLERANCES)
        rel_tol: Relative tolerance in percent (default from DEFAULT_TOLERANCES)

    Returns:
        CaseComparison with outcome and error metrics
    """
    abs_tol = get_tolerance("solution", "abs") if abs_tol is None else abs_tol
    rel_tol = get_tolerance("solution", "rel") if rel_tol is None else rel_tol

    comparison = CaseComparison(
        case_id=case.case_id,
        expected_outcome=case.outcome,
        actual_outcome=solver_result.outcome,
        residual_norm=solver_result.residual_norm,
    )

    if not solver_result.success:
        comparison.overall_pass = False
        comparison.notes.append(f"Solver failed: {solver_result.error_message}")
        return comparison

    if not comparison.outcome_matches:
        comparison.overall_pass = False
        comparison.notes.append(
            f"Expected {case.outcome}, got {solver_result.outcome}"
        )
        return comparison

    if case.outcome != OUTCOME_SOLVED:
        return comparison

    expected = case.expected_values
    comparison.solution = compare_field("solution", solver_result.solution, expected)
    comparison.overall_max_rel_error = comparison.solution.max_rel

    if len(solver_result.solution) != len(expected):
        comparison.length_mismatch = True
        comparison.overall_pass = False
        comparison.notes.append(
            f"Solution has {len(solver_result.solution)} values, golden has {len(expected)}"
        )

    if not comparison.solution.within_tolerance(abs_tol, rel_tol):
        comparison.overall_pass = False
        comparison.notes.append(
            f"Max error {comparison.solution.max_abs:.3e} exceeds tolerance"
        )

    return comparison


__all__ = [
    "FieldComparison",
    "CaseComparison",
    "DEFAULT_TOLERANCES",
    "get_tolerance",
    "compare_field",
    "compare_results",
]
