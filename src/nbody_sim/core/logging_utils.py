"""Buffered recording of simulation runs to disk."""
from __future__ import annotations

import csv
import itertools
import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from .system import SimulatedSystem


def _json_default(value: object) -> object:
    if isinstance(value, Decimal):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _cell(value: object) -> str:
    # Decimals keep every digit in plain notation, which float parsers accept.
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, float):
        return f"{value:.10g}"
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, default=_json_default)
    return str(value)


class _CsvStream:
    """One CSV file whose rows are held in memory until ``threshold`` is reached."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self.threshold = max(1, threshold)
        self.pending: List[List[str]] = []
        self._fh = path.open("w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._fh, lineterminator="\n")
        self._writer.writerow(header)

    def append(self, values: Sequence[object]) -> None:
        self.pending.append([_cell(v) for v in values])
        if len(self.pending) >= self.threshold:
            self.flush()

    def flush(self) -> None:
        if not self.pending:
            return
        self._writer.writerows(self.pending)
        self._fh.flush()
        self.pending.clear()

    def close(self) -> None:
        if self._fh.closed:
            return
        self.flush()
        self._fh.close()


def _unique_run_dir(root_dir: Path, run_id: Optional[str]) -> Path:
    base = run_id or datetime.now().strftime("%Y%m%d_%H%M%S") + "_run"
    name = base
    for n in itertools.count(1):
        if not (root_dir / name).exists():
            break
        name = f"{base}_{n}" if run_id else f"{base}_{n:02d}"
    run_dir = root_dir / name
    run_dir.mkdir(parents=True)
    return run_dir


class RunLogger:
    """Records a run as ``timeseries.csv``, ``events.csv`` and ``meta.json``.

    Parameters
    ----------
    root_dir:
        Directory holding one folder per run. ``last_run.txt`` in it names the
        most recent run.
    run_id:
        Folder name for this run. Defaults to ``YYYYmmdd_HHMMSS_run``; a taken
        name gets a numbered suffix.
    timeseries_flush_threshold, events_flush_threshold:
        Buffered rows per file before they are written out.
    """

    TIMESERIES_HEADER = ["step", "name", "x", "y", "z", "vx", "vy", "vz"]
    EVENTS_HEADER = ["step", "type", "name", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.run_dir = _unique_run_dir(self.root_dir, run_id)
        self.run_id = self.run_dir.name

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"
        self._timeseries = _CsvStream(
            self.timeseries_path, self.TIMESERIES_HEADER, timeseries_flush_threshold
        )
        self._events = _CsvStream(self.events_path, self.EVENTS_HEADER, events_flush_threshold)

        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        text = json.dumps(meta, indent=2, sort_keys=True, default=_json_default)
        self.meta_path.write_text(text, encoding="utf-8")

    def log_system(self, system: "SimulatedSystem") -> None:
        """Append one row per body at the system's current iteration count."""

        with system.lock:
            step = system.iteration_count
            for body in system.elements:
                self.log_ts([step, body.name, *body.position, *body.velocity])

    def log_ts(self, values: Sequence[object]) -> None:
        self._timeseries.append(values)

    def log_event(self, values: Sequence[object]) -> None:
        self._events.append(values)

    def flush(self) -> None:
        self._timeseries.flush()
        self._events.flush()

    def close(self) -> None:
        self._timeseries.close()
        self._events.close()

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["RunLogger"]
