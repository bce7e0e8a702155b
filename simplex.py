"""Two-phase simplex method on a condensed tableau."""

from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass
from typing import Any, Optional, TextIO, Union

import numpy as np

from solver.pivoting import StateHistory, select_pivot
from solver.tableau import Tableau
from telemetry.table import render_tableau

logger = logging.getLogger(__name__)


class SimplexError(RuntimeError):
    """Raised when the solver is used with an ill-formed problem."""


class DimensionMismatchError(SimplexError, ValueError):
    """The matrices of a linear program do not fit together."""


@dataclass(frozen=True)
class LinearProgram:
    """Minimize ``c^T x + offset`` s.t. ``A x <= b``, ``A_eq x = b_eq``, ``x >= 0``."""

    c: np.ndarray
    A: Optional[np.ndarray] = None
    b: Optional[np.ndarray] = None
    A_eq: Optional[np.ndarray] = None
    b_eq: Optional[np.ndarray] = None
    offset: float = 0.0

    def __post_init__(self) -> None:
        c = np.array(self.c, dtype=float)
        if c.ndim == 2 and c.shape[1] == 1:
            c = c[:, 0]
        if c.ndim != 1:
            raise DimensionMismatchError("objective vector c must be a single column")
        if c.size == 0:
            raise DimensionMismatchError("objective vector c must not be empty")
        n = c.size

        A, b = _constraint_block(self.A, self.b, n, "A", "b")
        A_eq, b_eq = _constraint_block(self.A_eq, self.b_eq, n, "A_eq", "b_eq")

        for name, value in (("c", c), ("A", A), ("b", b), ("A_eq", A_eq), ("b_eq", b_eq)):
            value.flags.writeable = False
            object.__setattr__(self, name, value)
        object.__setattr__(self, "offset", float(self.offset))

    @property
    def n(self) -> int:
        return self.c.size

    @property
    def inequality_rows(self) -> int:
        return self.A.shape[0]

    @property
    def equality_rows(self) -> int:
        return self.A_eq.shape[0]

    @property
    def num_variables(self) -> int:
        """Decision variables plus one slack or artificial per constraint."""
        return self.n + self.inequality_rows + self.equality_rows


LOP = LinearProgram


def _constraint_block(
    A: Any, b: Any, n: int, a_name: str, b_name: str
) -> tuple[np.ndarray, np.ndarray]:
    A = np.zeros((0, n)) if A is None else np.array(A, dtype=float)
    b = np.zeros(0) if b is None else np.array(b, dtype=float)

    if A.ndim == 1 and A.size == 0:
        A = A.reshape(0, n)
    if A.ndim != 2:
        raise DimensionMismatchError(f"constraint matrix {a_name} must be 2-D")
    if A.shape[0] == 0:
        A = np.zeros((0, n))
    elif A.shape[1] != n:
        raise DimensionMismatchError(
            f"{a_name} has {A.shape[1]} columns, expected {n} to match c"
        )

    if b.ndim == 2 and b.shape[1] == 1:
        b = b[:, 0]
    if b.ndim != 1 or b.size != A.shape[0]:
        raise DimensionMismatchError(f"{b_name} must be a vector with one entry per row of {a_name}")
    return A, b


@dataclass(frozen=True)
class SolveOptions:
    verbose: bool = False
    max_iterations: int = 8

    def __post_init__(self) -> None:
        if not isinstance(self.verbose, (bool, np.bool_)):
            raise ValueError(f"verbose must be a bool, got {self.verbose!r}")
        cap = self.max_iterations
        if isinstance(cap, (bool, np.bool_)) or not isinstance(cap, (int, np.integer)):
            raise ValueError(f"max_iterations must be an integer, got {cap!r}")
        if cap < 1:
            raise ValueError("max_iterations must be a positive integer")
        object.__setattr__(self, "max_iterations", int(cap))
        object.__setattr__(self, "verbose", bool(self.verbose))


@dataclass(frozen=True)
class PivotStep:
    phase: int
    iteration: int
    row: int
    col: int
    entering: int
    leaving: int
    objective: float
    basis: tuple[int, ...]
    nonbasis: tuple[int, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "iteration": self.iteration,
            "row": self.row,
            "col": self.col,
            "entering": self.entering,
            "leaving": self.leaving,
            "objective": self.objective,
            "basis": list(self.basis),
            "nonbasis": list(self.nonbasis),
        }


class FailureReason(enum.Enum):
    PHASE_ITERATIONS_EXCEEDED = "phase_iterations_exceeded"
    CYCLE_DETECTED = "cycle_detected"
    INFEASIBLE = "infeasible"
    UNBOUNDED = "unbounded"


@dataclass(frozen=True)
class SimplexSolution:
    x: np.ndarray
    objective: float
    iterations: tuple[int, int]
    steps: tuple[PivotStep, ...] = ()

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SimplexFailure:
    reason: FailureReason
    phase: int
    iterations: tuple[int, int]
    steps: tuple[PivotStep, ...] = ()

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if self.reason is FailureReason.PHASE_ITERATIONS_EXCEEDED:
            return f"Exceeded phase {self.phase} max iterations"
        if self.reason is FailureReason.CYCLE_DETECTED:
            return f"Phase {self.phase} cycle found"
        if self.reason is FailureReason.INFEASIBLE:
            return "Problem is infeasible"
        return "Problem is unbounded"


SimplexResult = Union[SimplexSolution, SimplexFailure]


class SimplexSolver:
    """Two-phase tableau simplex for :class:`LinearProgram` instances.

    Phase 1 minimizes the sum of the equality-row artificials; Phase 2 drops
    the artificial columns and minimizes the real objective. Algorithmic
    outcomes (infeasible, unbounded, cycling, iteration cap) are returned as
    :class:`SimplexFailure`, never raised.
    """

    def __init__(
        self,
        options: Optional[SolveOptions] = None,
        *,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._options = options or SolveOptions()
        self._stream = stream

    @property
    def options(self) -> SolveOptions:
        return self._options

    def solve(self, problem: LinearProgram) -> SimplexResult:
        steps: list[PivotStep] = []
        tableau = Tableau.phase_one(problem.c, problem.A, problem.b, problem.A_eq, problem.b_eq)

        phase1, reason = self._run_phase(tableau, 1, steps)
        if reason is not None:
            return self._failure(reason, 1, (phase1, 0), steps)

        # Artificials of the equality rows carry the largest indices.
        threshold = problem.n + problem.inequality_rows
        helper_value = tableau[tableau.constraint_rows, tableau.rhs_col]
        if helper_value != 0 or max(tableau.basis, default=0) > threshold:
            return self._failure(FailureReason.INFEASIBLE, 1, (phase1, 0), steps)

        tableau = tableau.drop_columns_above(threshold)
        logger.debug(
            "phase 1 finished after %d pivots; phase 2 tableau has shape %s",
            phase1,
            tableau.shape,
        )

        phase2, reason = self._run_phase(tableau, 2, steps)
        if reason is not None:
            return self._failure(reason, 2, (phase1, phase2), steps)

        x = tableau.solution(problem.n)
        objective = float(tableau[-1, -1] + problem.offset)
        logger.info("optimal objective %.6g after %d + %d pivots", objective, phase1, phase2)
        return SimplexSolution(
            x=x,
            objective=objective,
            iterations=(phase1, phase2),
            steps=tuple(steps),
        )

    def _run_phase(
        self, tableau: Tableau, phase: int, steps: list[PivotStep]
    ) -> tuple[int, Optional[FailureReason]]:
        objective_row = tableau.constraint_rows
        history = StateHistory()
        iteration = 0

        while True:
            pivot = select_pivot(tableau, objective_row)
            if pivot is None:
                break
            if not pivot.bounded:
                return iteration, FailureReason.UNBOUNDED
            if iteration >= self._options.max_iterations:
                return iteration, FailureReason.PHASE_ITERATIONS_EXCEEDED
            if not history.visit(tableau):
                return iteration, FailureReason.CYCLE_DETECTED
            iteration += 1

            self._trace(tableau, phase, iteration, (pivot.row, pivot.col))
            entering = tableau.nonbasis[pivot.col]
            leaving = tableau.basis[pivot.row]
            tableau.pivot(pivot.row, pivot.col)

            step = PivotStep(
                phase=phase,
                iteration=iteration,
                row=pivot.row,
                col=pivot.col,
                entering=entering,
                leaving=leaving,
                objective=float(tableau[objective_row, tableau.rhs_col]),
                basis=tuple(tableau.basis),
                nonbasis=tuple(tableau.nonbasis),
            )
            steps.append(step)
            logger.debug(
                "phase %d pivot %d at (%d, %d): x%d enters, x%d leaves",
                phase,
                iteration,
                pivot.row,
                pivot.col,
                entering,
                leaving,
            )

        self._trace(tableau, phase, iteration)
        return iteration, None

    def _trace(
        self,
        tableau: Tableau,
        phase: int,
        iteration: int,
        pivot: Optional[tuple[int, int]] = None,
    ) -> None:
        if not self._options.verbose:
            return
        stream = self._stream if self._stream is not None else sys.stdout
        print(render_tableau(tableau, phase=phase, iteration=iteration, pivot=pivot), file=stream)
        print(file=stream)

    def _failure(
        self,
        reason: FailureReason,
        phase: int,
        iterations: tuple[int, int],
        steps: list[PivotStep],
    ) -> SimplexFailure:
        failure = SimplexFailure(reason=reason, phase=phase, iterations=iterations, steps=tuple(steps))
        logger.info("simplex stopped in phase %d: %s", phase, failure.message)
        return failure


def linprog(problem: LinearProgram, options: Optional[SolveOptions] = None) -> SimplexResult:
    """Solve ``problem`` with a fresh :class:`SimplexSolver`."""
    return SimplexSolver(options).solve(problem)
