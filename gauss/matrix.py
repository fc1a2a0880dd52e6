"""Augmented matrix used by the elimination engine."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple


class MatrixIndexError(IndexError):
    """Raised when a row or column index falls outside the matrix."""


class AugmentedMatrix:
    """Coefficients plus a right-hand-side column, ``rows x (rows + 1)``.

    ``rows`` is the declared number of equations.  It normally equals the
    number of stored rows, but the parser keeps malformed input as it was read
    so that :meth:`exists_wrong_row` can report it instead of the constructor
    failing.  The shape never changes after construction; the only mutators are
    :meth:`combine_row` and :meth:`swap_with_nonzero_row`.
    """

    def __init__(self, cells: Iterable[Iterable[float]], rows: Optional[int] = None):
        self._cells: List[List[float]] = [[float(value) for value in row] for row in cells]
        self._rows = len(self._cells) if rows is None else int(rows)
        if self._rows < 0:
            raise ValueError("Row count must not be negative")

    def __repr__(self) -> str:
        return f"AugmentedMatrix(rows={self._rows}, cols={self.cols()}, cells={self._cells!r})"

    def rows(self) -> int:
        return self._rows

    def cols(self) -> int:
        return self._rows + 1

    def _check_row(self, i: int) -> None:
        if not 0 <= i < self._rows or i >= len(self._cells):
            raise MatrixIndexError(f"Row index {i} out of range for {self._rows} rows")

    def _check_col(self, i: int, j: int) -> None:
        if not 0 <= j < self.cols() or j >= len(self._cells[i]):
            raise MatrixIndexError(f"Column index {j} out of range for {self.cols()} columns")

    def get(self, i: int, j: int) -> float:
        self._check_row(i)
        self._check_col(i, j)
        return self._cells[i][j]

    def row(self, i: int) -> Tuple[float, ...]:
        self._check_row(i)
        return tuple(self._cells[i])

    def combine_row(self, target: int, source: int, factor: float) -> None:
        """Replace row ``target`` with ``target + factor * source``."""

        self._check_row(target)
        self._check_row(source)
        if target == source:
            raise ValueError("Cannot combine a row with itself")
        source_row = self._cells[source]
        target_row = self._cells[target]
        for col in range(self.cols()):
            target_row[col] += factor * source_row[col]

    def swap_with_nonzero_row(self, row: int, col: int) -> None:
        """Exchange ``row`` with the first row below it that is nonzero in ``col``.

        Nothing happens when every row below holds a zero in that column; the
        resulting degeneracy is left for :meth:`exists_zero_row` and
        :meth:`singular_pivot` to report.
        """

        self._check_row(row)
        self._check_col(row, col)
        for candidate in range(row + 1, self._rows):
            if self._cells[candidate][col] != 0:
                self._cells[row], self._cells[candidate] = self._cells[candidate], self._cells[row]
                return

    def exists_zero_row(self, tolerance: float = 0.0) -> bool:
        """Return True if some equation reads ``0 = k`` with ``k`` nonzero."""

        for cells in self._cells:
            if len(cells) < 2:
                continue
            coefficients, rhs = cells[:-1], cells[-1]
            if all(abs(value) <= tolerance for value in coefficients) and abs(rhs) > tolerance:
                return True
        return False

    def exists_wrong_row(self) -> bool:
        """Return True if the stored rows do not form a ``rows x (rows + 1)`` grid."""

        if len(self._cells) != self._rows:
            return True
        width = self.cols()
        return any(len(cells) != width for cells in self._cells)

    def singular_pivot(self, tolerance: float = 0.0) -> Optional[int]:
        """Index of the first diagonal entry with magnitude ``<= tolerance``."""

        for i in range(min(self._rows, len(self._cells))):
            if abs(self._cells[i][i]) <= tolerance:
                return i
        return None

    def residuals(self, solution: Sequence[float]) -> List[float]:
        """Per-equation ``sum(a_ij * x_j) - b_i`` for a candidate solution."""

        if len(solution) != self._rows:
            raise ValueError("Solution length does not match the number of unknowns")
        result: List[float] = []
        for cells in self._cells:
            lhs = sum(a * x for a, x in zip(cells[:-1], solution))
            result.append(lhs - cells[-1])
        return result

    def to_list(self) -> List[List[float]]:
        return [list(cells) for cells in self._cells]

    def copy(self) -> "AugmentedMatrix":
        return AugmentedMatrix(self._cells, rows=self._rows)


__all__ = [
    "AugmentedMatrix",
    "MatrixIndexError",
]
