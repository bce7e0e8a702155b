"""Condensed simplex tableau with out-of-band basis bookkeeping."""

from __future__ import annotations

import hashlib
from typing import Sequence

import numpy as np


class Tableau:
    """Dense tableau whose basic unit columns are kept implicit.

    Rows ``0 .. constraint_rows - 1`` hold the constraints, the remaining rows
    hold objective rows. The last column is the right-hand side. ``basis[i]``
    names the (1-based) variable owning constraint row ``i`` and
    ``nonbasis[j]`` the variable owning column ``j``.
    """

    def __init__(
        self,
        data: np.ndarray,
        basis: Sequence[int],
        nonbasis: Sequence[int],
        *,
        constraint_rows: int,
    ) -> None:
        front = np.array(data, dtype=float)
        if front.ndim != 2:
            raise ValueError("tableau data must be 2-D")
        if len(basis) != constraint_rows:
            raise ValueError("basis must name one variable per constraint row")
        if len(nonbasis) != front.shape[1] - 1:
            raise ValueError("nonbasis must name one variable per non-RHS column")
        self._front = front
        self._back = np.empty_like(front)
        self.basis = list(basis)
        self.nonbasis = list(nonbasis)
        self.constraint_rows = constraint_rows

    @classmethod
    def phase_one(
        cls,
        c: np.ndarray,
        A: np.ndarray,
        b: np.ndarray,
        A_eq: np.ndarray,
        b_eq: np.ndarray,
    ) -> "Tableau":
        """Build the ``(m + 2) x (n + 1)`` tableau for the artificial problem.

        The helper row is the sum of the equality rows, the last row holds the
        negated cost vector.
        """
        n = c.size
        m1 = A.shape[0]
        m2 = A_eq.shape[0]
        m = m1 + m2

        data = np.zeros((m + 2, n + 1), dtype=float)
        if m1:
            data[:m1, :n] = A
            data[:m1, n] = b
        if m2:
            data[m1:m, :n] = A_eq
            data[m1:m, n] = b_eq
            for row in range(m1, m):
                data[m] += data[row]
        data[m + 1, :n] = -c

        return cls(
            data,
            basis=range(n + 1, n + m + 1),
            nonbasis=range(1, n + 1),
            constraint_rows=m,
        )

    @property
    def data(self) -> np.ndarray:
        view = self._front.view()
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> tuple[int, int]:
        return self._front.shape

    @property
    def rhs_col(self) -> int:
        return self._front.shape[1] - 1

    def __getitem__(self, key):
        return self._front[key]

    def content_hash(self) -> bytes:
        digest = hashlib.blake2b(digest_size=16)
        digest.update(np.asarray(self._front.shape, dtype=np.int64).tobytes())
        digest.update(self._front.tobytes())
        return digest.digest()

    def pivot(self, row: int, col: int) -> None:
        """Exchange the variables of ``row`` and ``col`` (Gauss-Jordan step).

        Every entry is computed from the pre-step buffer into the back buffer,
        which then becomes the front buffer.
        """
        old = self._front
        new = self._back
        pv = old[row, col]
        if pv == 0:
            raise ZeroDivisionError(f"pivot element at ({row}, {col}) is zero")

        np.subtract(old, np.multiply.outer(old[:, col], old[row, :]) / pv, out=new)
        new[row, :] = old[row, :] / pv
        new[:, col] = -old[:, col] / pv
        new[row, col] = 1 / pv

        self._front, self._back = new, old
        self.basis[row], self.nonbasis[col] = self.nonbasis[col], self.basis[row]

    def drop_columns_above(self, threshold: int) -> "Tableau":
        """Return the Phase-2 tableau.

        Keeps the columns whose variable index is ``<= threshold`` plus the
        RHS, the constraint rows, and the last (real objective) row.
        """
        keep = [j for j, var in enumerate(self.nonbasis) if var <= threshold]
        cols = keep + [self.rhs_col]
        m = self.constraint_rows

        data = np.empty((m + 1, len(cols)), dtype=float)
        data[:m] = self._front[:m][:, cols]
        data[m] = self._front[-1, cols]

        return Tableau(
            data,
            basis=self.basis,
            nonbasis=[self.nonbasis[j] for j in keep],
            constraint_rows=m,
        )

    def solution(self, n: int) -> np.ndarray:
        """Read the values of the decision variables ``1..n``."""
        x = np.zeros(n, dtype=float)
        for row, var in enumerate(self.basis):
            if var <= n:
                x[var - 1] = self._front[row, -1]
        return x
