"""Reference linear program solve built on SciPy, used to cross-check results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.optimize import linprog

if TYPE_CHECKING:
    from simplex import LinearProgram


@dataclass
class LPSolution:
    x: np.ndarray
    status: int
    objective: float


class LPSolverError(RuntimeError):
    pass


def solve_lp(problem: LinearProgram) -> LPSolution:
    """Solve ``problem`` with HiGHS under the same ``x >= 0`` standard form."""
    n = problem.n
    res = linprog(
        problem.c,
        A_ub=problem.A if problem.inequality_rows else None,
        b_ub=problem.b if problem.inequality_rows else None,
        A_eq=problem.A_eq if problem.equality_rows else None,
        b_eq=problem.b_eq if problem.equality_rows else None,
        bounds=[(0, None)] * n,
        method="highs",
    )
    if not res.success:
        raise LPSolverError(res.message)
    return LPSolution(np.asarray(res.x, dtype=float), res.status, float(res.fun) + problem.offset)


def objectives_agree(objective: float, reference: LPSolution, *, tol: float = 1e-6) -> bool:
    return abs(objective - reference.objective) <= tol * max(1.0, abs(reference.objective))
