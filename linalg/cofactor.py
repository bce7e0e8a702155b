"""Determinant by Laplace (cofactor) expansion.

Only ring operations are used, so integer and rational matrices give exact
results. The cost grows factorially; use :func:`linalg.gaussian.det` for
floating-point matrices of any real size.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from linalg.numeric import R


def det_cofactor(matrix: Union[np.ndarray, Sequence[Sequence[R]]]) -> R:
    rows = matrix.tolist() if isinstance(matrix, np.ndarray) else [list(row) for row in matrix]
    if any(len(row) != len(rows) for row in rows):
        raise ValueError("det(A) requires A to be a square matrix")
    return _expand(rows)


def _expand(rows: list[list[R]]) -> R:
    size = len(rows)
    if size == 0:
        return 1
    if size == 1:
        return rows[0][0]
    if size == 2:
        return rows[0][0] * rows[1][1] - rows[1][0] * rows[0][1]

    total = 0
    for col, head in enumerate(rows[0]):
        minor = [row[:col] + row[col + 1:] for row in rows[1:]]
        term = head * _expand(minor)
        total = total + term if col % 2 == 0 else total - term
    return total
