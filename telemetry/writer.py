"""Pivot-step history as JSON lines."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Mapping, Union

from simplex import PivotStep

Record = Union[PivotStep, Mapping[str, object]]


def write_history(path: str | Path, records: Iterable[Record]) -> int:
    """Write one JSON object per record; return the number of lines written."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with target.open("w", encoding="utf-8") as handle:
        for record in records:
            payload = record.to_dict() if isinstance(record, PivotStep) else dict(record)
            handle.write(json.dumps(payload, default=_json_fallback))
            handle.write("\n")
            count += 1
    return count


def read_history(path: str | Path) -> list[dict[str, object]]:
    with Path(path).open("r", encoding="utf-8") as handle:
        return [json.loads(line) for line in handle if line.strip()]


def _json_fallback(obj):
    if hasattr(obj, "tolist"):
        return obj.tolist()
    raise TypeError(f"object of type {type(obj)!r} is not JSON serializable")
