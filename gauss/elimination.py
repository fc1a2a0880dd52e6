"""Gaussian elimination over an augmented matrix.

The solve runs in a fixed order: shape check, inconsistency check, forward
elimination, a second degeneracy check on the reduced matrix, and backward
substitution.  Algebraic failures are reported through :class:`SolveResult`
rather than exceptions so callers can tell a malformed system from one with
no unique solution.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol

logger = logging.getLogger(__name__)

# Relative to the largest input coefficient: after elimination, entries at or
# below tolerance * max|a_ij| count as zero.
DEFAULT_PIVOT_TOLERANCE = 1e-12


class MatrixLike(Protocol):
    """Operations the elimination routines need from a matrix."""

    def rows(self) -> int: ...

    def cols(self) -> int: ...

    def get(self, i: int, j: int) -> float: ...

    def combine_row(self, target: int, source: int, factor: float) -> None: ...

    def swap_with_nonzero_row(self, row: int, col: int) -> None: ...

    def exists_zero_row(self, tolerance: float = 0.0) -> bool: ...

    def exists_wrong_row(self) -> bool: ...

    def singular_pivot(self, tolerance: float = 0.0) -> Optional[int]: ...


class SolveStatus(str, Enum):
    SOLVED = "solved"
    MALFORMED = "malformed"
    INCONSISTENT = "inconsistent"
    SINGULAR = "singular"


_STATUS_MESSAGES = {
    SolveStatus.SOLVED: "System solved",
    SolveStatus.MALFORMED: "Matrix shape does not match an augmented system",
    SolveStatus.INCONSISTENT: "System is inconsistent: an equation reduces to 0 = k",
    SolveStatus.SINGULAR: "System has no unique solution: zero pivot after elimination",
}


@dataclass(frozen=True)
class SolveResult:
    """Outcome of :func:`gauss`; ``solution`` is set only when solved."""

    status: SolveStatus
    solution: Optional[List[float]] = None

    @property
    def ok(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def message(self) -> str:
        return _STATUS_MESSAGES[self.status]

    @classmethod
    def solved(cls, solution: List[float]) -> "SolveResult":
        return cls(SolveStatus.SOLVED, list(solution))

    @classmethod
    def failed(cls, status: SolveStatus) -> "SolveResult":
        if status is SolveStatus.SOLVED:
            raise ValueError("A failed result needs a failure status")
        return cls(status, None)


def gauss_forward(matrix: MatrixLike) -> None:
    """Reduce ``matrix`` in place to upper-triangular form.

    Pivot rows are processed top to bottom.  A zero pivot is repaired by
    swapping in the first lower row that is nonzero in the pivot column; if
    there is none the column is already clear below the pivot and the row is
    left alone.
    """

    rows = matrix.rows()
    for pivot in range(rows - 1):
        if matrix.get(pivot, pivot) == 0:
            matrix.swap_with_nonzero_row(pivot, pivot)
        pivot_value = matrix.get(pivot, pivot)
        for row in range(pivot + 1, rows):
            entry = matrix.get(row, pivot)
            if entry == 0:
                continue
            matrix.combine_row(row, pivot, -entry / pivot_value)


def gauss_backward(matrix: MatrixLike) -> List[float]:
    """Solve an upper-triangular augmented matrix from the last row up.

    The diagonal must be free of zeros; a zero pivot raises
    ``ZeroDivisionError``.
    """

    rows = matrix.rows()
    rhs_col = matrix.cols() - 1
    solution = [0.0] * rows
    for i in range(rows - 1, -1, -1):
        remainder = matrix.get(i, rhs_col)
        for j in range(i + 1, rows):
            remainder -= matrix.get(i, j) * solution[j]
        solution[i] = remainder / matrix.get(i, i)
    return solution


def coefficient_scale(matrix: MatrixLike) -> float:
    """Largest coefficient magnitude, excluding the right-hand side column."""

    rows = matrix.rows()
    return max((abs(matrix.get(i, j)) for i in range(rows) for j in range(rows)), default=0.0)


def gauss(matrix: MatrixLike, tolerance: float = DEFAULT_PIVOT_TOLERANCE) -> SolveResult:
    """Solve the augmented system held by ``matrix``.

    ``tolerance`` is scaled by the largest coefficient magnitude, so a
    uniformly scaled system classifies the same way as the unscaled one.

    The matrix is mutated by forward elimination and should not be reused
    for another solve.
    """

    if matrix.exists_wrong_row():
        logger.info("Rejected: malformed matrix shape")
        return SolveResult.failed(SolveStatus.MALFORMED)
    logger.debug("Shape checked: %d x %d", matrix.rows(), matrix.cols())

    if matrix.exists_zero_row():
        logger.info("Rejected: inconsistent equation in input")
        return SolveResult.failed(SolveStatus.INCONSISTENT)
    logger.debug("Degeneracy checked")

    threshold = tolerance * coefficient_scale(matrix)
    gauss_forward(matrix)
    logger.debug("Forward elimination done, zero threshold %g", threshold)

    if matrix.exists_zero_row(threshold):
        logger.info("Rejected: elimination produced an inconsistent equation")
        return SolveResult.failed(SolveStatus.INCONSISTENT)
    singular_row = matrix.singular_pivot(threshold)
    if singular_row is not None:
        logger.info("Rejected: zero pivot in row %d after elimination", singular_row)
        return SolveResult.failed(SolveStatus.SINGULAR)

    solution = gauss_backward(matrix)
    logger.info("Solved system with %d unknown(s)", len(solution))
    return SolveResult.solved(solution)


__all__ = [
    "DEFAULT_PIVOT_TOLERANCE",
    "MatrixLike",
    "SolveResult",
    "SolveStatus",
    "coefficient_scale",
    "gauss",
    "gauss_backward",
    "gauss_forward",
]
