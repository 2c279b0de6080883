"""Public package API for the rainpi Monte Carlo pi simulation."""

from .aggregate import SampleSet, Statistics, estimate, point_cloud, summarize
from .config import ConfigError, SimulationConfig, clear_config, configure_simulation, get_config
from .sampler import Sample, Sampler, rain
from .session import CadenceState, Simulation, Snapshot
from .timer import CanvasScheduler, ManualScheduler, RepeatingTask, ThreadScheduler

__all__ = [
    "Sample",
    "Sampler",
    "rain",
    "SampleSet",
    "Statistics",
    "estimate",
    "summarize",
    "point_cloud",
    "CadenceState",
    "Simulation",
    "Snapshot",
    "RepeatingTask",
    "ManualScheduler",
    "ThreadScheduler",
    "CanvasScheduler",
    "ConfigError",
    "SimulationConfig",
    "configure_simulation",
    "get_config",
    "clear_config",
]
