"""Gaussian elimination into (implicit or explicit) triangular form."""

from __future__ import annotations

from typing import Optional

import numpy as np

from linalg.numeric import Field


def _workspace(matrix: np.ndarray, inplace: bool) -> np.ndarray:
    if inplace:
        if not isinstance(matrix, np.ndarray) or matrix.ndim != 2:
            raise TypeError("in-place reduction requires a 2-D numpy array")
        if matrix.dtype.kind not in "fcO":
            raise TypeError(f"in-place reduction cannot divide in dtype {matrix.dtype}")
        return matrix
    work = np.array(matrix)
    if work.ndim != 2:
        raise ValueError("matrix must be 2-D")
    if work.dtype.kind in "biu":
        work = work.astype(float)
    return work


def _first_pivot_row(matrix: np.ndarray, col: int, candidates) -> Optional[int]:
    for row in candidates:
        if matrix[row, col] != 0:
            return row
    return None


def implicit_reduce(
    matrix: np.ndarray, cols: Optional[int] = None, *, inplace: bool = False
) -> np.ndarray:
    """Eliminate every pivot column everywhere except its pivot row.

    Rows are never reordered. A column without a usable row is skipped as
    free. Only the first ``cols`` columns are considered as pivot columns.
    """
    work = _workspace(matrix, inplace)
    rows, width = work.shape
    limit = width if cols is None else min(cols, width)
    fixed: list[int] = []

    for col in range(limit):
        if len(fixed) == rows:
            break
        row = _first_pivot_row(work, col, (r for r in range(rows) if r not in fixed))
        if row is None:
            continue
        fixed.append(row)

        pivot: Field = work[row, col]
        for target in range(rows):
            if target == row:
                continue
            factor = work[target, col] / pivot
            if factor == 0:
                continue
            work[target] -= factor * work[row]
    return work


def explicit_reduce(
    matrix: np.ndarray, cols: Optional[int] = None, *, inplace: bool = False
) -> tuple[np.ndarray, int]:
    """Row-echelon form: reduce implicitly, then swap pivot rows into place.

    Returns the reduced matrix and the number of row swaps performed.
    """
    work = implicit_reduce(matrix, cols, inplace=inplace)
    rows, width = work.shape
    limit = width if cols is None else min(cols, width)
    swaps = 0
    target = 0

    for col in range(limit):
        if target >= rows:
            break
        row = _first_pivot_row(work, col, range(target, rows))
        if row is None:
            continue
        if row != target:
            work[[target, row]] = work[[row, target]]
            swaps += 1
        target += 1
    return work, swaps


def det(matrix: np.ndarray) -> Field:
    """Determinant as the signed product of the echelon-form diagonal."""
    work = np.asarray(matrix)
    if work.ndim != 2 or work.shape[0] != work.shape[1]:
        raise ValueError("det(A) requires A to be a square matrix")
    reduced, swaps = explicit_reduce(work, inplace=False)
    result = -1 if swaps % 2 else 1
    for idx in range(reduced.shape[0]):
        result = result * reduced[idx, idx]
    return result
