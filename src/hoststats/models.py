"""Data models for tmux-host-stats."""

from dataclasses import dataclass
from enum import IntEnum


class MemoryMode(IntEnum):
    """Memory display modes for the status line."""

    DEFAULT = 0
    FREE_MEMORY = 1
    USAGE_PERCENTAGE = 2


class CpuMode(IntEnum):
    """CPU display modes for the status line."""

    DEFAULT = 0  # Max 100%
    PER_CORE = 1  # Max 100% * online cores


@dataclass(slots=True, frozen=True)
class MemoryStatus:
    """Immutable memory reading, all values in megabytes."""

    total_mem: float
    used_mem: float
    free_mem: float


@dataclass(slots=True, frozen=True)
class CpuSnapshot:
    """Cumulative CPU counters at one point in time."""

    busy_ticks: float
    idle_ticks: float

    @property
    def total_ticks(self) -> float:
        """Get busy plus idle ticks."""
        return self.busy_ticks + self.idle_ticks


@dataclass(slots=True, frozen=True)
class LoadAverages:
    """Load averages already rounded to two decimals."""

    values: tuple[float, ...]
    load_percent: int | None = None  # None when unavailable


@dataclass(slots=True, frozen=True)
class StatusReport:
    """Result of one sample-and-render cycle."""

    memory: MemoryStatus
    cpu_percent: float
    cpu_multiplier: float
    loads: LoadAverages
    line: str
