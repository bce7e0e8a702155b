"""Configuration loading for the simplex command line."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import numpy as np
import yaml

from simplex import LinearProgram, SolveOptions


@dataclass
class OutputConfig:
    trace: bool = True
    plots: bool = False


@dataclass
class Config:
    problem: LinearProgram
    options: SolveOptions
    output: OutputConfig
    check: bool
    base_path: Path


def _load_array(path: Path) -> np.ndarray:
    if not path.exists():
        raise FileNotFoundError(path)
    if path.suffix == ".npy":
        return np.load(path)
    if path.suffix in {".csv", ".txt"}:
        return np.loadtxt(path, delimiter=",", ndmin=1)
    raise ValueError(f"unsupported matrix file type: {path}")


def _array_entry(raw: dict[str, Any], key: str, base: Path) -> Optional[np.ndarray]:
    """Read ``key`` inline or from the file named by ``key + '_path'``."""
    path_key = f"{key}_path"
    if raw.get(path_key) is not None:
        return _load_array(base / str(raw[path_key]))
    if raw.get(key) is None:
        return None
    return np.asarray(raw[key], dtype=float)


def load_problem(raw: dict[str, Any], base: Path) -> LinearProgram:
    c = _array_entry(raw, "c", base)
    if c is None:
        raise KeyError("problem.c (or problem.c_path) is required")

    A = _array_entry(raw, "A", base)
    A_eq = _array_entry(raw, "A_eq", base)
    # A single-row CSV loads as a vector.
    if A is not None and A.ndim == 1 and A.size:
        A = A.reshape(1, -1)
    if A_eq is not None and A_eq.ndim == 1 and A_eq.size:
        A_eq = A_eq.reshape(1, -1)

    return LinearProgram(
        c=c,
        A=A,
        b=_array_entry(raw, "b", base),
        A_eq=A_eq,
        b_eq=_array_entry(raw, "b_eq", base),
        offset=float(raw.get("offset", raw.get("lambda", 0.0))),
    )


def load_config(path: str | Path) -> Config:
    cfg_path = Path(path).expanduser().resolve()
    with cfg_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    base = cfg_path.parent

    problem_raw = raw.get("problem") or {}
    options_raw = raw.get("options") or {}
    output_raw = raw.get("output") or {}

    options = SolveOptions(
        verbose=options_raw.get("verbose", False),
        max_iterations=options_raw.get("max_iterations", 8),
    )
    output = OutputConfig(
        trace=bool(output_raw.get("trace", True)),
        plots=bool(output_raw.get("plots", False)),
    )

    return Config(
        problem=load_problem(problem_raw, base),
        options=options,
        output=output,
        check=bool(raw.get("check", False)),
        base_path=base,
    )
