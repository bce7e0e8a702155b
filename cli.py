"""Command-line interface for solving linear programs from YAML files."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from config import Config, load_config
from plots.metrics import generate_plots
from simplex import SimplexSolution, SimplexSolver
from solver.lp_solver import LPSolverError, objectives_agree, solve_lp
from telemetry.writer import write_history

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_MISMATCH = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Two-phase simplex solver")
    parser.add_argument(
        "--config",
        required=True,
        help="Path to YAML problem configuration.",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Output directory for the pivot trace and plots.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print every tableau while solving.",
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Pivot limit per phase (overrides the configuration).",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Cross-check the objective against the HiGHS solver.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    cfg = _apply_overrides(load_config(args.config), args)

    result = SimplexSolver(cfg.options).solve(cfg.problem)

    if args.out is not None:
        out_dir = Path(args.out)
        if cfg.output.trace:
            write_history(out_dir / "trace.jsonl", result.steps)
        if cfg.output.plots:
            generate_plots(result.steps, out_dir / "plots")

    if not result.ok:
        print(f"error: {result.message}")
        return EXIT_FAILED

    _print_solution(result)
    if cfg.check:
        return _cross_check(cfg, result)
    return EXIT_OK


def _apply_overrides(cfg: Config, args: argparse.Namespace) -> Config:
    options = cfg.options
    if args.verbose:
        options = dataclasses.replace(options, verbose=True)
    if args.max_iterations is not None:
        options = dataclasses.replace(options, max_iterations=args.max_iterations)
    return dataclasses.replace(cfg, options=options, check=cfg.check or args.check)


def _print_solution(result: SimplexSolution) -> None:
    with np.printoptions(precision=6, suppress=True):
        print(f"x = {result.x}")
    print(f"objective = {result.objective:.6g}")
    print(f"pivots = {result.iterations[0]} + {result.iterations[1]}")


def _cross_check(cfg: Config, result: SimplexSolution) -> int:
    try:
        reference = solve_lp(cfg.problem)
    except LPSolverError as exc:
        print(f"reference solver failed: {exc}", file=sys.stderr)
        return EXIT_MISMATCH
    if not objectives_agree(result.objective, reference):
        print(f"reference objective {reference.objective:.6g} differs", file=sys.stderr)
        return EXIT_MISMATCH
    print("reference objective agrees")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
