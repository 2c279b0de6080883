"""Simulation session: accumulated raindrops and the cadence state machine."""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .aggregate import EMPTY, SampleSet, Statistics, point_cloud, summarize
from .config import SimulationConfig, get_config
from .sampler import Sampler
from .timer import ManualScheduler, RepeatingTask


log = logging.getLogger(__name__)


class CadenceState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True, eq=False)
class Snapshot:
    statistics: Statistics
    state: CadenceState
    inside_xy: np.ndarray
    outside_xy: np.ndarray

    @property
    def total(self) -> int:
        return self.statistics.total

    @property
    def estimate(self) -> Optional[float]:
        return self.statistics.estimate


Listener = Callable[[Snapshot], None]


class Simulation:
    """Owns the sample set and the Idle/Running cadence controller.

    Manual batches are only accepted while idle. Starting the cadence arms a
    repeating task on ``scheduler`` that appends ``config.batch_size`` raindrops
    every ``config.period_ms``; stopping cancels it, and a tick from a
    cancelled or superseded task does nothing.
    """

    def __init__(
        self,
        sampler: Optional[Sampler] = None,
        scheduler=None,
        config: Optional[SimulationConfig] = None,
    ):
        self.config = config or get_config() or SimulationConfig()
        self.sampler = sampler if sampler is not None else Sampler(seed=self.config.seed)
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._lock = threading.RLock()
        self._samples: SampleSet = EMPTY
        self._task: Optional[RepeatingTask] = None
        self._listeners: List[Listener] = []

    @property
    def state(self) -> CadenceState:
        return CadenceState.RUNNING if self._task is not None else CadenceState.IDLE

    @property
    def running(self) -> bool:
        return self._task is not None

    @property
    def samples(self) -> SampleSet:
        return self._samples

    def statistics(self) -> Statistics:
        return summarize(self._samples)

    def snapshot(self) -> Snapshot:
        with self._lock:
            samples = self._samples
            state = self.state
        return Snapshot(
            statistics=summarize(samples),
            state=state,
            inside_xy=point_cloud(samples.inside),
            outside_xy=point_cloud(samples.outside),
        )

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    def _append_batch(self, size: int) -> int:
        batch = self.sampler.generate(size)
        self._samples = self._samples.append(batch)
        return len(batch)

    def generate_batch(self, size: int) -> int:
        """Append ``size`` new raindrops; rejected (returns 0) while raining."""
        with self._lock:
            if self._task is not None:
                log.debug("manual batch of %d rejected while cadence is running", size)
                return 0
            added = self._append_batch(size)
        self._notify()
        return added

    def start_cadence(self) -> RepeatingTask:
        with self._lock:
            if self._task is not None:
                return self._task
            self._task = self.scheduler.call_every(self.config.period_ms, self._on_tick)
            log.info(
                "cadence started: %d raindrops every %d ms",
                self.config.batch_size,
                self.config.period_ms,
            )
            task = self._task
        self._notify()
        return task

    def stop_cadence(self) -> None:
        with self._lock:
            task = self._task
            if task is None:
                return
            self._task = None
            task.cancel()
            log.info("cadence stopped after %d ticks (%d raindrops)", task.ticks, self._samples.total)
        self._notify()

    def _on_tick(self, task: RepeatingTask) -> None:
        with self._lock:
            if task is not self._task or task.cancelled:
                return
            self._append_batch(self.config.batch_size)
        self._notify()

    def reset(self) -> None:
        with self._lock:
            if self._task is not None:
                self._task.cancel()
                self._task = None
            self._samples = EMPTY
            log.info("session reset")
        self._notify()
