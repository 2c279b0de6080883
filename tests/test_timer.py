"""Unit tests for repeating tasks and schedulers."""

import threading

import pytest

from rainpi.timer import CanvasScheduler, ManualScheduler, RepeatingTask, ThreadScheduler


def test_cancelled_task_does_not_fire():
    calls = []
    task = RepeatingTask(100, calls.append)
    assert task.fire() is True
    task.cancel()
    assert task.fire() is False
    assert calls == [task]
    assert task.ticks == 1


def test_rejects_non_positive_period():
    with pytest.raises(ValueError):
        RepeatingTask(0, lambda t: None)
    with pytest.raises(ValueError):
        ManualScheduler().call_every(-5, lambda t: None)


def test_manual_scheduler_fires_each_elapsed_period():
    sched = ManualScheduler()
    calls = []
    sched.call_every(500, calls.append)
    assert sched.advance(499) == 0
    assert sched.advance(1) == 1
    assert sched.advance(1000) == 2
    assert len(calls) == 3
    assert sched.now_ms == 1500


def test_manual_scheduler_orders_ticks_across_tasks():
    sched = ManualScheduler()
    order = []
    sched.call_every(300, lambda t: order.append(("slow", sched.now_ms)))
    sched.call_every(200, lambda t: order.append(("fast", sched.now_ms)))
    sched.advance(600)
    assert order == [("fast", 200), ("slow", 300), ("fast", 400), ("slow", 600), ("fast", 600)]


def test_manual_scheduler_drops_cancelled_tasks():
    sched = ManualScheduler()
    calls = []
    task = sched.call_every(100, calls.append)
    sched.advance(250)
    task.cancel()
    assert sched.pending == 0
    assert sched.advance(1000) == 0
    assert len(calls) == 2


def test_cancel_from_inside_callback_stops_further_ticks():
    sched = ManualScheduler()
    calls = []

    def once(task):
        calls.append(task)
        task.cancel()

    sched.call_every(100, once)
    sched.advance(1000)
    assert len(calls) == 1


def test_thread_scheduler_ticks_until_cancelled():
    fired = threading.Event()
    calls = []

    def callback(task):
        calls.append(task)
        if len(calls) >= 2:
            fired.set()

    task = ThreadScheduler().call_every(10, callback)
    try:
        assert fired.wait(timeout=5.0)
    finally:
        task.cancel()
    count = len(calls)
    assert task.fire() is False
    assert len(calls) == count


class FakeTimer:
    def __init__(self, interval):
        self.interval = interval
        self.callbacks = []
        self.started = False

    def add_callback(self, func):
        self.callbacks.append(func)

    def start(self):
        self.started = True

    def stop(self):
        self.started = False

    def tick(self):
        for cb in list(self.callbacks):
            cb()


class FakeCanvas:
    def __init__(self):
        self.timers = []

    def new_timer(self, interval):
        timer = FakeTimer(interval)
        self.timers.append(timer)
        return timer


def test_canvas_scheduler_wraps_gui_timer():
    canvas = FakeCanvas()
    calls = []
    task = CanvasScheduler(canvas).call_every(500, calls.append)
    (timer,) = canvas.timers
    assert timer.interval == 500
    assert timer.started
    timer.tick()
    timer.tick()
    assert len(calls) == 2
    task.cancel()
    assert not timer.started
    timer.tick()
    assert len(calls) == 2
