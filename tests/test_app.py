"""Rendering and command line tests (Agg backend)."""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from rainpi.aggregate import Statistics
from rainpi.app import START_LABEL, STOP_LABEL, RainApp, main, run_headless
from rainpi.plotting import format_estimate, format_formula, quarter_circle
from rainpi.sampler import Sampler
from rainpi.session import Simulation
from rainpi.timer import ManualScheduler


def test_quarter_circle_endpoints():
    xs, ys = quarter_circle()
    assert len(xs) == 1001
    assert xs[0] == 0.0 and ys[0] == 1.0
    assert xs[-1] == 1.0 and ys[-1] == 0.0
    np.testing.assert_allclose(xs * xs + ys * ys, 1.0)


def test_formatting_placeholders():
    empty = Statistics(total=0, inside=0, outside=0, estimate=None, stderr=None, error=None)
    assert format_estimate(None) == "n/a"
    assert format_formula(empty) == "π = 4 * ( Inside / Total )"
    full = Statistics(total=4, inside=3, outside=1, estimate=3.0, stderr=0.0, error=0.0)
    assert format_formula(full) == "π = 4 * ( 3 / 4 )"
    assert format_estimate(3.0) == "3.000000"


def test_app_buttons_drive_simulation():
    sched = ManualScheduler()
    sim = Simulation(sampler=Sampler(seed=8))
    fig = plt.figure()
    try:
        app = RainApp(sim, figure=fig, scheduler=sched)
        assert app.toggle.label.get_text() == START_LABEL
        app._drop(10)(None)
        assert sim.samples.total == 10

        app._toggle_rain(None)
        assert app.toggle.label.get_text() == STOP_LABEL
        app._drop(1000)(None)
        sched.advance(1000)
        assert sim.samples.total == 210
        assert app.plot.inside_label.get_text() == f"Inside: {sim.samples.inside_count}"
        assert len(app.plot.inside_points.get_offsets()) == sim.samples.inside_count

        app._toggle_rain(None)
        assert app.toggle.label.get_text() == START_LABEL
        assert sorted(app.manual_buttons) == [1, 10, 100, 1000]
    finally:
        plt.close(fig)


def test_run_headless():
    sim = Simulation(sampler=Sampler(seed=4))
    stats = run_headless(sim, 3)
    assert stats.total == 300
    assert not sim.running


def test_run_headless_rejects_negative_ticks():
    with pytest.raises(ValueError):
        run_headless(Simulation(), -1)


def test_main_headless(capsys):
    assert main(["--headless", "2", "--seed", "1", "--batch-size", "50"]) == 0
    out = capsys.readouterr().out
    assert "Raindrops: 100" in out
    assert "π = 4 * (" in out
