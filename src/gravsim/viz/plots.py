"""
Static plots of particle snapshots and trajectories.

Coordinates follow the screen convention of the interactive viewer:
x to the right, y DOWN.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.collections import PatchCollection
from matplotlib.figure import Figure
from matplotlib.patches import Circle

if TYPE_CHECKING:
    from gravsim.analysis.trajectories import TrajectoryRecorder
    from gravsim.core.simulation import Snapshot

BACKGROUND_COLOR = (0.5, 0.5, 0.5)
PARTICLE_COLOR = (0.6, 0.5, 1.0)


def particle_circles(snapshot: "Snapshot") -> list[Circle]:
    """One circle patch per particle, radius from the snapshot's radius policy."""
    return [
        Circle((float(x), float(y)), float(r))
        for (x, y), r in zip(snapshot.positions, snapshot.radii)
    ]


def plot_snapshot(
    snapshot: "Snapshot",
    title: str | None = None,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (6, 6),
    extent: tuple[float, float, float, float] | None = None,
    color=PARTICLE_COLOR,
    background=BACKGROUND_COLOR,
) -> tuple[Figure, Axes]:
    """
    Draw every particle of a snapshot as a filled circle.

    Args:
        snapshot: Simulation snapshot
        title: Plot title (defaults to the snapshot step)
        ax: Existing axes (creates new if None)
        extent: (xmin, xmax, ymin, ymax); fitted to the particles if None
        color: Particle face color
        background: Axes background color

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.set_facecolor(background)
    collection = PatchCollection(particle_circles(snapshot), facecolor=color, edgecolor="none")
    ax.add_collection(collection)

    if extent is None:
        extent = _fit_extent(snapshot)
    xmin, xmax, ymin, ymax = extent
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymax, ymin)  # y down
    ax.set_aspect("equal")

    ax.set_title(title if title is not None else f"Step {snapshot.step}")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    return fig, ax


def plot_trajectories(
    recorder: "TrajectoryRecorder",
    title: str = "Particle Trajectories",
    figsize: tuple[float, float] = (8, 8),
    colors: Sequence | None = None,
    show_start: bool = True,
    show_end: bool = True,
) -> Figure:
    """
    Plot every recorded trajectory on the same axes.

    Args:
        recorder: TrajectoryRecorder with recorded snapshots
        title: Plot title
        colors: Optional list of colors for each trajectory
        show_start: Mark starting positions
        show_end: Mark ending positions

    Returns:
        Figure
    """
    fig, ax = plt.subplots(figsize=figsize)

    if colors is None:
        cmap_lines = matplotlib.colormaps["tab10"]
        colors = [cmap_lines(i % 10) for i in range(len(recorder))]

    for pid in range(len(recorder)):
        x_traj, y_traj = recorder.get_trajectory_arrays(pid)
        color = colors[pid] if pid < len(colors) else "black"

        if len(x_traj) == 0:
            continue

        ax.plot(x_traj, y_traj, color=color, linewidth=1.5, zorder=2, label=f"particle {pid}")
        if show_start:
            ax.scatter(
                [x_traj[0]], [y_traj[0]],
                color=color, s=60, marker="o", zorder=3,
                edgecolors="white", linewidths=1
            )
        if show_end:
            ax.scatter(
                [x_traj[-1]], [y_traj[-1]],
                color=color, s=60, marker="s", zorder=3,
                edgecolors="white", linewidths=1
            )

    ax.invert_yaxis()
    ax.set_aspect("equal", adjustable="datalim")
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    if len(recorder) > 0:
        ax.legend(loc="upper right", fontsize=8)

    fig.tight_layout()
    return fig


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)


def _fit_extent(snapshot: "Snapshot", margin: float = 10.0) -> tuple[float, float, float, float]:
    if len(snapshot) == 0:
        return 0.0, 100.0, 0.0, 100.0
    pos = snapshot.positions
    r = float(np.max(snapshot.radii))
    return (
        float(pos[:, 0].min()) - r - margin,
        float(pos[:, 0].max()) + r + margin,
        float(pos[:, 1].min()) - r - margin,
        float(pos[:, 1].max()) + r + margin,
    )
