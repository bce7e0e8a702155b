"""Pivot selection rules for the condensed simplex tableau."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from solver.tableau import Tableau


@dataclass(frozen=True)
class Pivot:
    """Pivot cell; ``row`` is ``None`` when the entering column is unbounded."""

    row: Optional[int]
    col: int

    @property
    def bounded(self) -> bool:
        return self.row is not None


def choose_entering_column(
    tableau: Tableau | np.ndarray, objective_row: int, limit: int
) -> Optional[int]:
    """Smallest positive reduced cost among columns ``0 .. limit - 1``.

    Ties go to the lowest column index. ``None`` means the row is optimal.
    """
    best = np.inf
    pivot_col = None
    for col in range(limit):
        value = tableau[objective_row, col]
        if value <= 0:
            continue
        if value < best:
            best = value
            pivot_col = col
    return pivot_col


def choose_leaving_row(
    tableau: Tableau | np.ndarray, col: int, rows: int, rhs_col: int
) -> Optional[int]:
    """Minimum non-negative ratio ``rhs / entry`` over rows with a non-zero entry."""
    best = np.inf
    pivot_row = None
    for row in range(rows):
        entry = tableau[row, col]
        if entry == 0:
            continue
        ratio = tableau[row, rhs_col] / entry
        if ratio < 0:
            continue
        if ratio < best:
            best = ratio
            pivot_row = row
    return pivot_row


def select_pivot(tableau: Tableau, objective_row: int) -> Optional[Pivot]:
    """Choose the next pivot cell, or ``None`` once no column improves."""
    col = choose_entering_column(tableau, objective_row, tableau.rhs_col)
    if col is None:
        return None
    row = choose_leaving_row(tableau, col, tableau.constraint_rows, tableau.rhs_col)
    return Pivot(row=row, col=col)


class StateHistory:
    """Remembers tableau content hashes seen within one phase."""

    def __init__(self) -> None:
        self._seen: set[bytes] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def visit(self, tableau: Tableau) -> bool:
        """Record the tableau; return ``False`` if it was already visited."""
        key = tableau.content_hash()
        if key in self._seen:
            return False
        self._seen.add(key)
        return True
