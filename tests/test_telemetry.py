import numpy as np

from simplex import LinearProgram, linprog
from solver.tableau import Tableau
from telemetry.table import render_tableau
from telemetry.writer import read_history, write_history


def test_render_marks_pivot_and_objective_rows():
    tableau = Tableau(
        np.array([[2.0, 1.0, 4.0], [1.0, 3.0, 5.0], [0.0, 1.0, 9.0], [-1.0, 2.0, 0.0]]),
        basis=[3, 4],
        nonbasis=[1, 2],
        constraint_rows=2,
    )
    text = render_tableau(tableau, phase=1, iteration=2, pivot=(1, 0))
    lines = text.splitlines()
    assert "P1:2" in lines[0]
    assert "x1" in lines[0] and "x2" in lines[0] and "RHS" in lines[0]
    assert lines[2].strip().startswith("x3")
    assert "[1.0000]" in lines[3]
    assert "2.0000" in lines[2] and "4.0000" in lines[2]
    assert "(H)" in text and "(P)" in text
    assert lines[1].startswith("-") and "+" in lines[1]
    assert len(lines) == 1 + 1 + 2 + 2


def test_phase_two_render_has_single_objective_row():
    tableau = Tableau(np.array([[1.0, 2.0], [3.0, 4.0]]), basis=[2], nonbasis=[1], constraint_rows=1)
    text = render_tableau(tableau, phase=2, iteration=0)
    assert "(H)" not in text
    assert "(P)" in text
    assert "[" not in text


def test_history_roundtrip(tmp_path):
    result = linprog(LinearProgram(c=[-1, -1], A=[[1, 0], [0, 1]], b=[1, 1]))
    target = tmp_path / "nested" / "trace.jsonl"
    assert write_history(target, result.steps) == 2
    records = read_history(target)
    assert records[-1]["objective"] == -2.0
    assert records[-1]["basis"] == [1, 2]
    assert records == [step.to_dict() for step in result.steps]
