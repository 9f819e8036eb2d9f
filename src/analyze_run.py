"""Analyze a recorded sandbox run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from orbit_sandbox.core.config import sim_cfg_from_mapping
from orbit_sandbox.core.model import Body
from orbit_sandbox.core.physics import total_energy


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"


def load_timeseries(path: Path) -> Dict[int, Dict[str, np.ndarray]]:
    """Return per-body columns keyed by body index."""

    rows: Dict[int, Dict[str, List[float]]] = {}
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            index = int(row["body"])
            columns = rows.setdefault(index, {"tick": [], "x": [], "y": [], "vx": [], "vy": []})
            for key in columns:
                columns[key].append(float(row[key]))
    return {
        index: {key: np.asarray(values) for key, values in columns.items()}
        for index, columns in rows.items()
    }


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row or row.get("tick") is None:
                continue
            details: dict[str, str] = {}
            for item in (row.get("details") or "").split(";"):
                if "=" in item:
                    key, value = item.split("=", 1)
                    details[key] = value
            events.append({"tick": int(row["tick"]), "type": row["type"], "details": details})
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def energy_series(meta: dict, ts: Dict[int, Dict[str, np.ndarray]]) -> tuple[np.ndarray, np.ndarray]:
    """Total energy at every tick logged for all bodies."""

    cfg = sim_cfg_from_mapping(meta.get("cfg", {}))
    masses = {int(b["index"]): float(b["mass"]) for b in meta.get("bodies", [])}
    indices = sorted(i for i in ts if i in masses)
    if not indices:
        return np.array([]), np.array([])
    length = min(ts[i]["tick"].size for i in indices)
    ticks = ts[indices[0]]["tick"][:length]
    energies = np.empty(length)
    for k in range(length):
        bodies = [
            Body(
                masses[i],
                (ts[i]["x"][k], ts[i]["y"][k]),
                (ts[i]["vx"][k], ts[i]["vy"][k]),
            )
            for i in indices
        ]
        energies[k] = total_energy(bodies, cfg)
    return ticks, energies


def relative_drift(energies: np.ndarray) -> float:
    if energies.size == 0:
        return 0.0
    denom = energies[0] if abs(energies[0]) > 1e-12 else 1.0
    return float((energies[-1] - energies[0]) / denom)


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {}
    for event in events:
        summary[event["type"]] = summary.get(event["type"], 0) + 1
    return summary


def _body_color(meta: dict, index: int) -> tuple[float, float, float]:
    for body in meta.get("bodies", []):
        if int(body["index"]) == index:
            r, g, b = body.get("color", [200, 200, 200])
            return (r / 255.0, g / 255.0, b / 255.0)
    return (0.8, 0.8, 0.8)


def plot_trajectories(fig_dir: Path, meta: dict, ts: Dict[int, Dict[str, np.ndarray]]) -> None:
    names = {int(b["index"]): b.get("name", f"body {b['index']}") for b in meta.get("bodies", [])}
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.set_facecolor("black")
    for index, columns in sorted(ts.items()):
        ax.plot(
            columns["x"],
            columns["y"],
            lw=1.0,
            color=_body_color(meta, index),
            label=names.get(index, f"body {index}"),
        )
    ax.set_aspect("equal", "box")
    # screen coordinates grow downwards
    ax.invert_yaxis()
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Trajectories")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "trajectories.png", dpi=150)
    plt.close(fig)


def plot_energy(fig_dir: Path, ticks: np.ndarray, energies: np.ndarray, rel_drift: float) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ticks, energies, color="#ffa94d")
    ax.set_xlabel("tick")
    ax.set_ylabel("Total energy")
    ax.set_title(f"Total energy – relative drift ΔE/E = {rel_drift:.2e}")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "energy.png", dpi=150)
    plt.close(fig)


def print_summary(
    run_dir: Path,
    ticks: np.ndarray,
    rel_drift: float,
    event_summary: Dict[str, int],
) -> None:
    print(f"Run: {run_dir.name}")
    if ticks.size:
        print(f" Ticks logged: {int(ticks[0])}..{int(ticks[-1])}")
    print(f" Relative energy drift ΔE/E = {rel_drift:.3e}")
    if event_summary:
        print(" Events:" + ",".join(f" {etype}: {count}" for etype, count in sorted(event_summary.items())))
    else:
        print(" Events: none")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded sandbox run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path to a specific run directory")
    parser.add_argument("--runs-root", default=str(Path("data") / "runs"), help="Directory holding runs")
    args = parser.parse_args(argv)

    base_runs_dir = Path(args.runs_root)
    if args.run_dir:
        run_path = Path(args.run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / args.run_dir
    else:
        last_run_file = base_runs_dir / "last_run.txt"
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_id = last_run_file.read_text(encoding="utf-8").strip()
        run_path = base_runs_dir / run_id

    if not run_path.is_dir():
        parser.error(f"Run directory not found: {run_path}")

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME

    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing meta/timeseries/events files.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)

    ts = load_timeseries(ts_path)
    if not ts:
        parser.error("timeseries.csv is empty, nothing to analyze.")
    events = load_events(ev_path)

    fig_dir = ensure_fig_dir(run_path)
    ticks, energies = energy_series(meta, ts)
    rel_drift = relative_drift(energies)

    plot_trajectories(fig_dir, meta, ts)
    plot_energy(fig_dir, ticks, energies, rel_drift)
    print_summary(run_path, ticks, rel_drift, summarize_events(events))


if __name__ == "__main__":
    main()
