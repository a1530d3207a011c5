"""
Raw host counter sources.

Each source is a narrow protocol returning an instantaneous snapshot, so the
sampling and formatting code can run against fixture data. The psutil
implementations are the ones used at runtime.
"""

from typing import Protocol

import psutil

from hoststats.models import CpuSnapshot


class CpuCounterSource(Protocol):
    """Source of cumulative CPU busy/idle counters."""

    def read(self) -> CpuSnapshot: ...


class MemoryCounterSource(Protocol):
    """Source of (total_bytes, used_bytes) memory counters."""

    def read(self) -> tuple[int, int]: ...


class LoadAverageSource(Protocol):
    """Source of the raw 1, 5 and 15 minute load averages."""

    def read(self) -> tuple[float, float, float]: ...


class CoreCountSource(Protocol):
    """Source of the number of online CPU cores."""

    def read(self) -> int: ...


class PsutilCpuCounters:
    """CPU counters from psutil.cpu_times()."""

    def read(self) -> CpuSnapshot:
        times = psutil.cpu_times()
        # iowait only exists on Linux
        idle = times.idle + getattr(times, "iowait", 0.0)
        # guest time is already included in user and nice
        total = sum(times) - getattr(times, "guest", 0.0) - getattr(times, "guest_nice", 0.0)
        return CpuSnapshot(busy_ticks=total - idle, idle_ticks=idle)


class PsutilMemoryCounters:
    """Memory counters from psutil.virtual_memory()."""

    def read(self) -> tuple[int, int]:
        mem = psutil.virtual_memory()
        return mem.total, mem.total - mem.available


class PsutilLoadAverages:
    """Load averages from psutil.getloadavg()."""

    def read(self) -> tuple[float, float, float]:
        return psutil.getloadavg()


class PsutilCoreCount:
    """Online logical cores from psutil.cpu_count()."""

    def read(self) -> int:
        # cpu_count() returns None when undetermined
        return psutil.cpu_count() or 1
