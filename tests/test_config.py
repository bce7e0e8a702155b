import numpy as np
import pytest
import yaml

from config import load_config
from simplex import DimensionMismatchError


def _write(path, payload):
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    return path


def test_inline_problem_and_options(tmp_path):
    cfg_path = _write(
        tmp_path / "lop.yaml",
        {
            "problem": {
                "c": [4, -2, -5, 0],
                "A": [[-5, 2, 9, 0], [-2, 1, 4, 0]],
                "b": [2, 1],
                "A_eq": [[-13, 7, 27, -1]],
                "b_eq": [3],
                "offset": 1.5,
            },
            "options": {"verbose": True, "max_iterations": 12},
            "output": {"plots": True},
            "check": True,
        },
    )
    cfg = load_config(cfg_path)
    assert cfg.problem.n == 4
    assert cfg.problem.A.shape == (2, 4)
    assert cfg.problem.A_eq.shape == (1, 4)
    assert cfg.problem.offset == 1.5
    assert cfg.options.verbose is True
    assert cfg.options.max_iterations == 12
    assert cfg.output.trace is True
    assert cfg.output.plots is True
    assert cfg.check is True
    assert cfg.base_path == tmp_path.resolve()


def test_defaults_when_sections_missing(tmp_path):
    cfg = load_config(_write(tmp_path / "lop.yaml", {"problem": {"c": [1, 1], "A_eq": [[1, 1]], "b_eq": [2]}}))
    assert cfg.options.verbose is False
    assert cfg.options.max_iterations == 8
    assert cfg.problem.inequality_rows == 0
    assert cfg.problem.equality_rows == 1
    assert cfg.check is False


def test_arrays_from_files_relative_to_config(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    np.savetxt(data_dir / "A.csv", np.array([[1.0, 0.0, -1.0, 0.0, 0.0]]), delimiter=",")
    np.save(data_dir / "A_eq.npy", np.array([[1.0, -1.0, 0.0, -1.0, 0.0], [0.0, 1.0, -2.0, 0.0, -1.0]]))
    cfg = load_config(
        _write(
            tmp_path / "lop.yaml",
            {
                "problem": {
                    "c": [1, -3, 2, 0, 0],
                    "A_path": "data/A.csv",
                    "b": [4],
                    "A_eq_path": "data/A_eq.npy",
                    "b_eq": [1, 1],
                }
            },
        )
    )
    assert cfg.problem.A.shape == (1, 5)
    assert cfg.problem.A_eq.shape == (2, 5)


def test_missing_objective_is_an_error(tmp_path):
    with pytest.raises(KeyError):
        load_config(_write(tmp_path / "lop.yaml", {"problem": {"A": [[1.0]], "b": [1.0]}}))


def test_missing_and_unsupported_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(_write(tmp_path / "a.yaml", {"problem": {"c_path": "missing.csv"}}))
    (tmp_path / "c.json").write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(_write(tmp_path / "b.yaml", {"problem": {"c_path": "c.json"}}))


def test_fractional_iteration_cap_is_rejected(tmp_path):
    payload = {"problem": {"c": [1.0]}, "options": {"max_iterations": 2.5}}
    with pytest.raises(ValueError):
        load_config(_write(tmp_path / "lop.yaml", payload))


def test_inconsistent_problem_is_rejected(tmp_path):
    with pytest.raises(DimensionMismatchError):
        load_config(_write(tmp_path / "lop.yaml", {"problem": {"c": [1, 2], "A": [[1, 2, 3]], "b": [1]}}))
