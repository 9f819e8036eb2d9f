"""Run recording for sandbox sessions."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence


def _allocate_run_dir(root_dir: Path, run_id: Optional[str]) -> Path:
    """Create a fresh run directory, suffixing the id until it is unused."""

    base = run_id or datetime.now().strftime("%Y%m%d_%H%M%S") + "_run"
    candidate = base
    suffix = 1
    while (root_dir / candidate).exists():
        candidate = f"{base}_{suffix}" if run_id else f"{base}_{suffix:02d}"
        suffix += 1
    run_dir = root_dir / candidate
    run_dir.mkdir(parents=True, exist_ok=False)
    return run_dir


class _CsvTable:
    """One CSV file with rows held back until ``threshold`` accumulate."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self._fh = path.open("w", newline="")
        self._fh.write(",".join(header) + "\n")
        self._rows: list[str] = []
        self._threshold = max(1, threshold)

    def append(self, row: str) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if not self._rows:
            return
        self._fh.write("\n".join(self._rows) + "\n")
        self._fh.flush()
        self._rows.clear()

    def close(self) -> None:
        self.flush()
        self._fh.close()


class RunLogger:
    """Records per-tick body states and control events of one run.

    Each run gets its own directory below ``root_dir`` holding
    ``timeseries.csv``, ``events.csv`` and ``meta.json``; the id of the newest
    run is kept in ``root_dir/last_run.txt``.
    """

    TIMESERIES_HEADER = ["tick", "body", "x", "y", "vx", "vy"]
    EVENTS_HEADER = ["tick", "type", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 500,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.run_dir = _allocate_run_dir(self.root_dir, run_id)
        self.run_id = self.run_dir.name

        self.meta_path = self.run_dir / "meta.json"
        self._timeseries = _CsvTable(
            self.run_dir / "timeseries.csv", self.TIMESERIES_HEADER, timeseries_flush_threshold
        )
        self._events = _CsvTable(self.run_dir / "events.csv", self.EVENTS_HEADER, events_flush_threshold)
        self.closed = False

        (self.root_dir / "last_run.txt").write_text(self.run_id, encoding="utf-8")

    @property
    def timeseries_path(self) -> Path:
        return self._timeseries.path

    @property
    def events_path(self) -> Path:
        return self._events.path

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[float]) -> None:
        self._timeseries.append(",".join(self._format_value(v) for v in values))

    def log_event(self, tick: int, event_type: str, details: object = "") -> None:
        """Append an event; dict details become ``key=value`` pairs joined by ``;``."""

        if isinstance(details, dict):
            details = ";".join(f"{key}={value}" for key, value in sorted(details.items()))
        self._events.append(f"{tick},{event_type},{str(details).replace(',', ';')}")

    def close(self) -> None:
        if self.closed:
            return
        self._timeseries.close()
        self._events.close()
        self.closed = True

    @staticmethod
    def _format_value(value: float) -> str:
        # full precision so a run can be replayed bit for bit
        if isinstance(value, int):
            return str(value)
        return f"{value:.17g}"

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["RunLogger"]
