"""Tableau storage and pivot rules shared by the simplex phases."""

from .pivoting import Pivot, StateHistory, choose_entering_column, choose_leaving_row, select_pivot
from .tableau import Tableau

__all__ = [
    "Pivot",
    "StateHistory",
    "Tableau",
    "choose_entering_column",
    "choose_leaving_row",
    "select_pivot",
]
