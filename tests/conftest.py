"""Shared fixture sources for tmux-host-stats tests."""

import time
from collections.abc import Iterable

import pytest

from hoststats.config import StatsConfig
from hoststats.models import CpuSnapshot
from hoststats.monitor import HostStatsCollector
from hoststats.stats import CpuSampler, LoadAverageReader, MemoryReader

MB = 1024**2


class FakeCpuCounters:
    """Returns the given snapshots in order, repeating the last one."""

    def __init__(self, snapshots: Iterable[CpuSnapshot]) -> None:
        self._snapshots = list(snapshots)
        self.reads = 0

    def read(self) -> CpuSnapshot:
        snapshot = self._snapshots[min(self.reads, len(self._snapshots) - 1)]
        self.reads += 1
        return snapshot


class FakeMemoryCounters:
    def __init__(self, total_bytes: int, used_bytes: int) -> None:
        self._counters = (total_bytes, used_bytes)

    def read(self) -> tuple[int, int]:
        return self._counters


class FakeLoadAverages:
    def __init__(self, averages: tuple[float, float, float]) -> None:
        self._averages = averages

    def read(self) -> tuple[float, float, float]:
        return self._averages


class FakeCoreCount:
    def __init__(self, cores: int) -> None:
        self._cores = cores

    def read(self) -> int:
        return self._cores


class FailingSource:
    """Any source whose OS query fails."""

    def read(self):
        raise OSError("counters unavailable")


class RecordingSleep:
    """Stands in for time.sleep and records the requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_collector(sleep):
    """Factory building a collector over fixture sources."""

    def _make(
        config: StatsConfig | None = None,
        cpu=(CpuSnapshot(100, 900), CpuSnapshot(150, 950)),
        memory=(16003 * MB, 11156 * MB),
        loads=(1.2349, 0.5, 0.25),
        cores=4,
        cpu_source=None,
        memory_source=None,
        load_source=None,
    ) -> HostStatsCollector:
        core_count = FakeCoreCount(cores)
        return HostStatsCollector(
            config or StatsConfig(),
            cpu_sampler=CpuSampler(cpu_source or FakeCpuCounters(cpu), sleep=sleep),
            memory_reader=MemoryReader(memory_source or FakeMemoryCounters(*memory)),
            load_reader=LoadAverageReader(load_source or FakeLoadAverages(loads), core_count),
            core_count=core_count,
        )

    return _make


class PacedSleep:
    """Short real sleep so a monitor loop does not spin."""

    def __call__(self, seconds: float) -> None:
        time.sleep(0.01)


@pytest.fixture
def paced_collector(make_collector):
    """Collector over fixture sources that pauses briefly per cycle."""
    collector = make_collector()
    collector._cpu_sampler._sleep = PacedSleep()
    return collector
