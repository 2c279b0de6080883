"""Simulation configuration and validation for rainpi."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


DEFAULT_BATCH_SIZE = 100
DEFAULT_PERIOD_MS = 500
DEFAULT_MANUAL_BATCH_SIZES: Tuple[int, ...] = (1, 10, 100, 1000)


@dataclass(frozen=True)
class SimulationConfig:
    batch_size: int = DEFAULT_BATCH_SIZE
    period_ms: int = DEFAULT_PERIOD_MS
    manual_batch_sizes: Tuple[int, ...] = DEFAULT_MANUAL_BATCH_SIZES
    seed: Optional[int] = None
    progress_to_terminal: bool = False

_CONFIG: Optional[SimulationConfig] = None

class ConfigError(ValueError):
    pass

def _positive_int(value, name: str) -> int:
    if value is None:
        raise ConfigError(f"{name} cannot be null")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer")
    if value <= 0:
        raise ConfigError(f"{name} must be positive")
    return value

def enable_terminal_progress() -> None:
    logger = logging.getLogger("rainpi")
    if any(getattr(h, "_rainpi_terminal", False) for h in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[rainpi] %(message)s"))
    handler._rainpi_terminal = True
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

#user-inputted data is validated here and put in an instance of SimulationConfig
def configure_simulation(
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    period_ms: int = DEFAULT_PERIOD_MS,
    manual_batch_sizes: Optional[Iterable[int]] = None,
    seed: Optional[int] = None,
    progress_to_terminal: bool = False,
) -> SimulationConfig:
    """Configure the cadence and sampling defaults used by new simulations.

    The returned config also becomes the process default picked up by
    ``Simulation`` when no explicit config is passed.
    """
    batch_size = _positive_int(batch_size, "batch_size")
    period_ms = _positive_int(period_ms, "period_ms")

    if manual_batch_sizes is None:
        sizes = DEFAULT_MANUAL_BATCH_SIZES
    else:
        sizes = tuple(_positive_int(s, "manual batch size") for s in manual_batch_sizes)
    if not sizes:
        raise ConfigError("manual_batch_sizes cannot be empty")

    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError("seed must be an integer if set")

    cfg = SimulationConfig(
        batch_size=batch_size,
        period_ms=period_ms,
        manual_batch_sizes=sizes,
        seed=seed,
        progress_to_terminal=progress_to_terminal,
    )
    if progress_to_terminal:
        enable_terminal_progress()

    global _CONFIG
    _CONFIG = cfg
    return cfg

def get_config() -> Optional[SimulationConfig]:
    return _CONFIG

def clear_config() -> None:
    global _CONFIG
    _CONFIG = None
