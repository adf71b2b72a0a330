"""
SimulationViewer: interactive matplotlib window around a Simulation.

The viewer is the outer loop the core expects:
- a FuncAnimation timer calls advance(dt) once per frame
- mouse motion over the axes calls set_pointer((x, y))
- leaving the axes or the figure calls set_pointer(None)
- a left click inside the axes calls trigger_spawn()
- every frame redraws the particles from a snapshot

dt is the measured wall-clock time between frames, capped at max_dt so a
stalled window (dragging, resizing) doesn't produce one huge step.
Set fixed_dt to step with a constant delta instead.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.backend_bases import MouseButton
from matplotlib.collections import PatchCollection

from gravsim.viz.plots import BACKGROUND_COLOR, PARTICLE_COLOR, particle_circles

if TYPE_CHECKING:
    from gravsim.core.simulation import Simulation

logger = logging.getLogger(__name__)


@dataclass
class ViewerConfig:
    """Configuration for the interactive viewer."""

    width: float = 512.0  # Visible surface, simulation units
    height: float = 512.0
    background: tuple[float, float, float] = BACKGROUND_COLOR
    particle_color: tuple[float, float, float] = PARTICLE_COLOR
    interval_ms: int = 16  # Animation timer interval
    max_dt: float = 0.1  # Cap on measured frame delta
    fixed_dt: float | None = None  # Constant delta instead of wall clock
    title: str = "gravsim"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if self.max_dt <= 0:
            raise ValueError("max_dt must be positive")
        if self.fixed_dt is not None and self.fixed_dt <= 0:
            raise ValueError("fixed_dt must be positive")


class SimulationViewer:
    """Matplotlib front end: feeds pointer, clicks and frame time to a Simulation."""

    def __init__(
        self,
        simulation: "Simulation",
        config: ViewerConfig | None = None,
        time_source: Callable[[], float] = time.perf_counter,
    ):
        self.simulation = simulation
        self.config = config if config is not None else ViewerConfig()
        self._time_source = time_source
        self._last_time: float | None = None
        self.animation: FuncAnimation | None = None

        cfg = self.config
        dpi = 100
        self.fig, self.ax = plt.subplots(figsize=(cfg.width / dpi, cfg.height / dpi), dpi=dpi)
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title(cfg.title)
        self.ax.set_facecolor(cfg.background)
        self.ax.set_xlim(0, cfg.width)
        self.ax.set_ylim(cfg.height, 0)  # screen coordinates: y down
        self.ax.set_aspect("equal")
        self.ax.set_xticks([])
        self.ax.set_yticks([])

        self.collection = PatchCollection([], facecolor=cfg.particle_color, edgecolor="none")
        self.ax.add_collection(self.collection)
        self.title = self.ax.set_title("")

        self._cids = [
            self.fig.canvas.mpl_connect("motion_notify_event", self.on_motion),
            self.fig.canvas.mpl_connect("axes_leave_event", self.on_leave),
            self.fig.canvas.mpl_connect("figure_leave_event", self.on_leave),
            self.fig.canvas.mpl_connect("button_press_event", self.on_click),
        ]

        self.redraw()

    # ─── input ──────────────────────────────────────────────────────────

    def on_motion(self, event):
        if event.inaxes is self.ax and event.xdata is not None and event.ydata is not None:
            self.simulation.set_pointer((event.xdata, event.ydata))
        else:
            self.simulation.set_pointer(None)

    def on_leave(self, event):
        self.simulation.set_pointer(None)

    def on_click(self, event):
        if event.button != MouseButton.LEFT or event.inaxes is not self.ax:
            return
        # Click without a preceding motion event still knows where it is
        self.on_motion(event)
        pid = self.simulation.trigger_spawn()
        if pid is not None:
            logger.info("Spawned particle %d (%d total)", pid, len(self.simulation))

    # ─── frame loop ─────────────────────────────────────────────────────

    def next_dt(self) -> float:
        """Frame delta for the next step."""
        if self.config.fixed_dt is not None:
            return self.config.fixed_dt

        now = self._time_source()
        if self._last_time is None:
            dt = self.config.interval_ms / 1000.0
        else:
            dt = now - self._last_time
        self._last_time = now
        return min(dt, self.config.max_dt)

    def tick(self):
        """Advance one step and redraw."""
        self.simulation.advance(self.next_dt())
        return self.redraw()

    def redraw(self):
        snapshot = self.simulation.snapshot()
        self.collection.set_paths(particle_circles(snapshot))
        self.title.set_text(f"{len(snapshot)} particles")
        return self.collection, self.title

    def _animate(self, frame):
        return self.tick()

    def start(self) -> FuncAnimation:
        """Create the animation timer (kept on self so it isn't garbage collected)."""
        self._last_time = None
        self.animation = FuncAnimation(
            self.fig,
            self._animate,
            interval=self.config.interval_ms,
            blit=False,
            cache_frame_data=False,
        )
        return self.animation

    def show(self):
        """Start the animation and block in the matplotlib event loop."""
        self.start()
        plt.show()

    def close(self):
        for cid in self._cids:
            self.fig.canvas.mpl_disconnect(cid)
        plt.close(self.fig)
