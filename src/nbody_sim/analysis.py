"""Post-processing of recorded runs with numpy and matplotlib."""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .core.model import Satellite

TIMESERIES_FILENAME = "timeseries.csv"
FIGS_SUBDIR = "figs"
STATE_COLUMNS = ("x", "y", "z", "vx", "vy", "vz")

Trajectories = Dict[str, Dict[str, np.ndarray]]


def state_arrays(bodies: Iterable[Satellite]) -> Tuple[np.ndarray, np.ndarray]:
    """Float ``(N, 3)`` arrays of positions and velocities, for renderers."""

    bodies = list(bodies)
    positions = np.array([body.position.to_tuple() for body in bodies], dtype=float)
    velocities = np.array([body.velocity.to_tuple() for body in bodies], dtype=float)
    return positions.reshape(-1, 3), velocities.reshape(-1, 3)


def load_trajectories(path: Path) -> Trajectories:
    """Read a ``timeseries.csv`` into per-body column arrays, in first-seen order."""

    columns: Dict[str, Dict[str, List[float]]] = {}
    with Path(path).open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            if not row or not row.get("name"):
                continue
            body = columns.setdefault(
                row["name"], {key: [] for key in ("step", *STATE_COLUMNS)}
            )
            body["step"].append(int(row["step"]))
            for key in STATE_COLUMNS:
                body[key].append(float(row[key]))

    return {
        name: {
            key: np.asarray(values, dtype=int if key == "step" else float)
            for key, values in body.items()
        }
        for name, body in columns.items()
    }


def positions(trajectory: Dict[str, np.ndarray]) -> np.ndarray:
    return np.column_stack((trajectory["x"], trajectory["y"], trajectory["z"]))


def separation(trajectories: Trajectories, first: str, second: str) -> np.ndarray:
    """Distance between two bodies at every recorded step."""

    a = positions(trajectories[first])
    b = positions(trajectories[second])
    if a.shape != b.shape:
        raise ValueError(f"{first!r} and {second!r} were not recorded at the same steps")
    return np.linalg.norm(a - b, axis=1)


def extent_over_time(trajectories: Trajectories) -> Tuple[np.ndarray, np.ndarray]:
    """Per-step minimum and maximum corners of the bounding box, shape ``(steps, 3)``."""

    if not trajectories:
        raise ValueError("no trajectories recorded")
    stacked = np.stack([positions(t) for t in trajectories.values()])
    return stacked.min(axis=0), stacked.max(axis=0)


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = Path(run_dir) / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def plot_trajectories(fig_dir: Path, trajectories: Trajectories) -> Path:
    fig, ax = plt.subplots(figsize=(6, 6))
    for name, trajectory in trajectories.items():
        ax.plot(trajectory["x"], trajectory["y"], lw=1.2, label=name)
        ax.scatter(trajectory["x"][-1:], trajectory["y"][-1:], s=20)
    ax.set_aspect("equal", "datalim")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title("Trajectories (x-y)")
    if trajectories:
        ax.legend()
    fig.tight_layout()
    out_path = Path(fig_dir) / "trajectories_xy.png"
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


__all__ = [
    "ensure_fig_dir",
    "extent_over_time",
    "load_trajectories",
    "plot_trajectories",
    "positions",
    "separation",
    "state_arrays",
]
