"""Plotting utilities for simplex pivot traces."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import matplotlib.pyplot as plt
import numpy as np

from simplex import PivotStep


def generate_plots(steps: Iterable[PivotStep], out_dir: str | Path) -> list[Path]:
    """Plot the phase objective after every pivot, one figure per phase."""
    records = list(steps)
    if not records:
        return []
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=True)

    written = []
    for phase, label in ((1, "helper objective (H)"), (2, "objective (P)")):
        phase_steps = [step for step in records if step.phase == phase]
        if not phase_steps:
            continue
        t = np.array([step.iteration for step in phase_steps], dtype=float)
        values = np.array([step.objective for step in phase_steps], dtype=float)

        plt.figure(figsize=(6, 4))
        plt.plot(t, values, marker="o", label=label)
        plt.xlabel("pivot")
        plt.ylabel("tableau objective cell")
        plt.title(f"Phase {phase}")
        plt.legend()
        plt.tight_layout()
        target = out_path / f"phase{phase}_objective.png"
        plt.savefig(target, dpi=150)
        plt.close()
        written.append(target)
    return written
