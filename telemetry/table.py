"""Plain-text rendering of simplex tableaus for verbose tracing."""

from __future__ import annotations

from typing import Optional

from tabulate import tabulate

from solver.tableau import Tableau


def render_tableau(
    tableau: Tableau,
    *,
    phase: int,
    iteration: int,
    pivot: Optional[tuple[int, int]] = None,
) -> str:
    """Render ``tableau`` with one column per non-basic variable plus the RHS.

    Rows are labelled with their basic variable; the objective rows follow as
    ``(H)`` (Phase 1 only) and ``(P)``. The pivot cell, if given, is bracketed.
    """
    objective_labels = ["(H)", "(P)"] if phase == 1 else ["(P)"]
    row_labels = [f"x{var}" for var in tableau.basis] + objective_labels
    headers = [f"P{phase}:{iteration}"] + [f"x{var}" for var in tableau.nonbasis] + ["RHS"]

    rows = []
    for i, label in enumerate(row_labels):
        cells = [f"{tableau[i, j]:.4f}" for j in range(tableau.shape[1])]
        if pivot is not None and pivot[0] == i:
            cells[pivot[1]] = f"[{cells[pivot[1]]}]"
        rows.append([label] + cells)

    return tabulate(
        rows,
        headers=headers,
        tablefmt="presto",
        colalign=["right"] * len(headers),
        floatfmt=".4f",
    )
