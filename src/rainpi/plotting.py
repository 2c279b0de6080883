"""Matplotlib rendering of the raindrop point clouds and the running estimate."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .aggregate import Statistics
from .session import Snapshot


INSIDE_COLOR = "blue"
OUTSIDE_COLOR = "red"
NO_ESTIMATE = "n/a"


def quarter_circle(step: float = 0.001) -> Tuple[np.ndarray, np.ndarray]:
    if step <= 0 or step > 1:
        raise ValueError("step must be in (0, 1]")
    xs = np.linspace(0.0, 1.0, int(round(1.0 / step)) + 1)
    ys = np.sqrt(np.clip(1.0 - xs * xs, 0.0, None))
    return xs, ys


def format_estimate(estimate: Optional[float], digits: int = 6) -> str:
    if estimate is None:
        return NO_ESTIMATE
    return f"{estimate:.{digits}f}"


def format_formula(stats: Statistics) -> str:
    inside = stats.inside or "Inside"
    total = stats.total or "Total"
    return f"π = 4 * ( {inside} / {total} )"


class RainPlot:
    """Square [0, 1] axes with the quarter circle and both point clouds."""

    def __init__(self, ax):
        self.ax = ax
        ax.set_xlim(0.0, 1.0)
        ax.set_ylim(0.0, 1.0)
        ax.set_xticks([0.0, 0.5, 1.0])
        ax.set_yticks([0.0, 0.5, 1.0])
        ax.set_aspect("equal")
        ax.set_autoscale_on(False)

        xs, ys = quarter_circle()
        (self.circle,) = ax.plot(xs, ys, color="black", linewidth=1.0)
        empty = np.empty((0, 2), dtype=np.float32)
        self.inside_points = ax.scatter(empty[:, 0], empty[:, 1], s=2, color=INSIDE_COLOR, label="Inside")
        self.outside_points = ax.scatter(empty[:, 0], empty[:, 1], s=2, color=OUTSIDE_COLOR, label="Outside")
        self.inside_label = ax.text(
            0.0, 1.01, "", transform=ax.transAxes, ha="left", va="bottom", color=INSIDE_COLOR, fontsize=12
        )
        self.outside_label = ax.text(
            1.0, 1.01, "", transform=ax.transAxes, ha="right", va="bottom", color=OUTSIDE_COLOR, fontsize=12
        )
        self.summary = ax.figure.suptitle("")

    def update(self, snapshot: Snapshot) -> None:
        stats = snapshot.statistics
        self.inside_points.set_offsets(snapshot.inside_xy)
        self.outside_points.set_offsets(snapshot.outside_xy)
        self.inside_label.set_text(f"Inside: {stats.inside}")
        self.outside_label.set_text(f"Outside: {stats.outside}")
        self.summary.set_text(
            f"Raindrops: {stats.total}    {format_formula(stats)} = {format_estimate(stats.estimate)}"
        )
        self.ax.figure.canvas.draw_idle()
