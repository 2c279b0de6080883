"""Interactive raindrop window and the ``rainpi`` command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.widgets import Button

from .aggregate import Statistics
from .config import configure_simulation
from .plotting import RainPlot, format_estimate, format_formula
from .session import CadenceState, Simulation, Snapshot
from .timer import CanvasScheduler, ManualScheduler


log = logging.getLogger(__name__)

BUTTON_COLOR = "0.85"
BUTTON_HOVER = "0.95"
BUTTON_DISABLED = "0.6"
START_LABEL = "Let It Rain"
STOP_LABEL = "Stop The Rain"


class RainApp:
    def __init__(self, simulation: Simulation, figure=None, scheduler=None):
        self.simulation = simulation
        self.figure = figure if figure is not None else plt.figure(figsize=(7, 8))
        simulation.scheduler = scheduler if scheduler is not None else CanvasScheduler(self.figure.canvas)

        plot_ax = self.figure.add_axes([0.1, 0.22, 0.8, 0.68])
        self.plot = RainPlot(plot_ax)

        self.manual_buttons: Dict[int, Button] = {}
        sizes = simulation.config.manual_batch_sizes
        width = 0.7 / (len(sizes) + 2)
        for i, size in enumerate(sizes):
            ax = self.figure.add_axes([0.1 + i * width, 0.05, width * 0.95, 0.07])
            button = Button(ax, str(size), color=BUTTON_COLOR, hovercolor=BUTTON_HOVER)
            button.on_clicked(self._drop(size))
            self.manual_buttons[size] = button
        toggle_ax = self.figure.add_axes([0.1 + len(sizes) * width, 0.05, width * 2, 0.07])
        self.toggle = Button(toggle_ax, START_LABEL, color=BUTTON_COLOR, hovercolor=BUTTON_HOVER)
        self.toggle.on_clicked(self._toggle_rain)

        simulation.subscribe(self._render)
        self._render(simulation.snapshot())

    def _drop(self, size: int):
        def handler(_event):
            self.simulation.generate_batch(size)
        return handler

    def _toggle_rain(self, _event) -> None:
        if self.simulation.running:
            self.simulation.stop_cadence()
        else:
            self.simulation.start_cadence()

    def _render(self, snapshot: Snapshot) -> None:
        running = snapshot.state is CadenceState.RUNNING
        for button in self.manual_buttons.values():
            color = BUTTON_DISABLED if running else BUTTON_COLOR
            button.color = color
            button.hovercolor = color if running else BUTTON_HOVER
            button.ax.set_facecolor(color)
        self.toggle.label.set_text(STOP_LABEL if running else START_LABEL)
        self.plot.update(snapshot)

    def show(self) -> None:
        plt.show()


def run_headless(simulation: Simulation, ticks: int) -> Statistics:
    """Let it rain for ``ticks`` periods on a virtual clock."""
    if ticks < 0:
        raise ValueError("ticks must be non-negative")
    scheduler = ManualScheduler()
    simulation.scheduler = scheduler
    log.info("headless run: %d ticks of %d ms", ticks, simulation.config.period_ms)
    simulation.start_cadence()
    scheduler.advance(ticks * simulation.config.period_ms)
    simulation.stop_cadence()
    return simulation.statistics()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rainpi", description="Estimate pi by letting it rain on a unit square.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random source")
    parser.add_argument("--batch-size", type=int, default=100, help="raindrops per cadence tick")
    parser.add_argument("--period-ms", type=int, default=500, help="cadence period in milliseconds")
    parser.add_argument(
        "--headless",
        type=int,
        metavar="TICKS",
        default=None,
        help="run the cadence for TICKS periods without a window and print the result",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log cadence progress to the terminal")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = configure_simulation(
        batch_size=args.batch_size,
        period_ms=args.period_ms,
        seed=args.seed,
        progress_to_terminal=args.verbose,
    )
    if args.verbose:
        logging.getLogger("rainpi").setLevel(logging.DEBUG)

    simulation = Simulation(config=cfg)
    if args.headless is not None:
        stats = run_headless(simulation, args.headless)
        print(f"Raindrops: {stats.total} (inside {stats.inside}, outside {stats.outside})")
        print(f"{format_formula(stats)} = {format_estimate(stats.estimate)}")
        if stats.stderr is not None:
            print(f"stderr {stats.stderr:.6f}, error {stats.error:+.6f}")
        return 0

    app = RainApp(simulation)
    app.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
