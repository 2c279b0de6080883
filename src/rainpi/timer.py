"""Cancellable repeating tasks and the schedulers that drive them."""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional


log = logging.getLogger(__name__)


def _check_period(period_ms) -> int:
    if isinstance(period_ms, bool) or not isinstance(period_ms, (int, float)):
        raise TypeError("period_ms must be a number")
    if period_ms <= 0:
        raise ValueError("period_ms must be positive")
    return period_ms


class RepeatingTask:
    """Handle for a callback invoked every ``period_ms`` until cancelled.

    The callback receives the task itself so owners can tell stale handles
    apart from the current one. Once cancelled, ``fire`` is a no-op.
    """

    def __init__(self, period_ms: int, callback: Callable[["RepeatingTask"], None]):
        self.period_ms = _check_period(period_ms)
        self._callback = callback
        self._cancelled = threading.Event()
        self.ticks = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def fire(self) -> bool:
        if self._cancelled.is_set():
            return False
        self.ticks += 1
        self._callback(self)
        return True


class ManualScheduler:
    """Virtual clock; ticks are only delivered by ``advance``."""

    def __init__(self):
        self.now_ms = 0
        self._tasks: List[tuple[RepeatingTask, float]] = []

    def call_every(self, period_ms: int, callback: Callable[[RepeatingTask], None]) -> RepeatingTask:
        task = RepeatingTask(period_ms, callback)
        self._tasks.append((task, self.now_ms + task.period_ms))
        return task

    @property
    def pending(self) -> int:
        return sum(1 for task, _ in self._tasks if not task.cancelled)

    def advance(self, elapsed_ms) -> int:
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must be non-negative")
        target = self.now_ms + elapsed_ms
        fired = 0
        while True:
            self._tasks = [(t, due) for t, due in self._tasks if not t.cancelled]
            due_tasks = [(due, i) for i, (_t, due) in enumerate(self._tasks) if due <= target]
            if not due_tasks:
                break
            due, index = min(due_tasks)
            task, _ = self._tasks[index]
            self._tasks[index] = (task, due + task.period_ms)
            self.now_ms = due
            if task.fire():
                fired += 1
        self.now_ms = target
        return fired


class _ThreadTask(RepeatingTask):
    def __init__(self, period_ms, callback):
        super().__init__(period_ms, callback)
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    def _arm(self) -> None:
        with self._lock:
            if self.cancelled:
                return
            self._timer = threading.Timer(self.period_ms / 1000.0, self._run)
            self._timer.daemon = True
            self._timer.start()

    def _run(self) -> None:
        try:
            self.fire()
        except Exception:
            log.exception("repeating task callback failed; cancelling")
            self.cancel()
            raise
        self._arm()

    def cancel(self) -> None:
        super().cancel()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class ThreadScheduler:
    """Delivers ticks from re-armed ``threading.Timer`` daemon threads."""

    def call_every(self, period_ms: int, callback: Callable[[RepeatingTask], None]) -> RepeatingTask:
        task = _ThreadTask(period_ms, callback)
        task._arm()
        return task


class _CanvasTask(RepeatingTask):
    def __init__(self, period_ms, callback, timer):
        super().__init__(period_ms, callback)
        self._timer = timer

    def cancel(self) -> None:
        super().cancel()
        self._timer.stop()


class CanvasScheduler:
    """Delivers ticks through a GUI canvas timer (``canvas.new_timer``).

    Works with matplotlib figure canvases; the GUI event loop calls back on
    its own thread, so no extra locking is needed on the receiving side.
    """

    def __init__(self, canvas):
        self.canvas = canvas

    def call_every(self, period_ms: int, callback: Callable[[RepeatingTask], None]) -> RepeatingTask:
        period_ms = _check_period(period_ms)
        timer = self.canvas.new_timer(interval=int(period_ms))
        task = _CanvasTask(period_ms, callback, timer)
        timer.add_callback(task.fire)
        timer.start()
        return task
