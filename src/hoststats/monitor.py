"""Collection engine for tmux-host-stats."""

import logging
import threading
import time
from collections.abc import Callable
from queue import Queue

from hoststats.config import StatsConfig
from hoststats.errors import HostStatsError
from hoststats.formatting import render
from hoststats.models import CpuMode, StatusReport
from hoststats.sources import (
    CoreCountSource,
    PsutilCoreCount,
    PsutilCpuCounters,
    PsutilLoadAverages,
    PsutilMemoryCounters,
)
from hoststats.stats import CpuSampler, LoadAverageReader, MemoryReader

logger = logging.getLogger(__name__)


class HostStatsCollector:
    """Runs one full sample-and-render cycle."""

    def __init__(
        self,
        config: StatsConfig,
        cpu_sampler: CpuSampler,
        memory_reader: MemoryReader,
        load_reader: LoadAverageReader,
        core_count: CoreCountSource,
    ) -> None:
        self._config = config
        self._cpu_sampler = cpu_sampler
        self._memory_reader = memory_reader
        self._load_reader = load_reader
        self._core_count = core_count

    @classmethod
    def from_psutil(
        cls,
        config: StatsConfig,
        sleep: Callable[[float], object] | None = None,
    ) -> "HostStatsCollector":
        """Build a collector reading the local host through psutil."""
        core_count = PsutilCoreCount()
        return cls(
            config,
            cpu_sampler=CpuSampler(PsutilCpuCounters(), sleep=sleep or time.sleep),
            memory_reader=MemoryReader(PsutilMemoryCounters()),
            load_reader=LoadAverageReader(PsutilLoadAverages(), core_count),
            core_count=core_count,
        )

    @property
    def config(self) -> StatsConfig:
        """Get the configuration this collector renders with."""
        return self._config

    def cpu_multiplier(self) -> float:
        """Get the CPU display multiplier for the configured cpu mode."""
        if self._config.cpu_mode == CpuMode.PER_CORE:
            return float(self._core_count.read())
        return 1.0

    def collect(self) -> StatusReport:
        """
        Sample memory, CPU and load and render the status line.

        Blocks for the configured CPU sampling delay.

        Raises:
            MemoryUnavailable: If memory counters cannot be read.
            SamplingUnavailable: If CPU counters cannot be read.
        """
        memory = self._memory_reader.read()
        cpu_percent = self._cpu_sampler.percentage(self._config.cpu_delay)
        loads = self._load_reader.read(self._config.averages_count)
        multiplier = self.cpu_multiplier()

        line = render(memory, self._config.mem_mode, cpu_percent, loads, multiplier)
        logger.debug("rendered status line %r", line)
        return StatusReport(
            memory=memory,
            cpu_percent=cpu_percent,
            cpu_multiplier=multiplier,
            loads=loads,
            line=line,
        )


class StatusMonitor:
    """
    Repeats collection cycles in a background thread.

    Runs in a separate daemon thread and pushes reports to a thread-safe Queue.
    The CPU sampling delay is the refresh period, so there is no extra wait
    between cycles.
    """

    def __init__(
        self,
        update_queue: Queue[StatusReport],
        collector: HostStatsCollector | None = None,
        config: StatsConfig | None = None,
    ) -> None:
        """
        Initialize the StatusMonitor.

        Args:
            update_queue: Thread-safe queue to push reports to.
            collector: Collector to run. Default reads the host via psutil,
                sleeping on the monitor's stop event so stop() is prompt.
            config: Config for the default collector. Default StatsConfig().
        """
        self._queue = update_queue
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._collector = collector or HostStatsCollector.from_psutil(
            config or StatsConfig(),
            sleep=self._stop_event.wait,
        )

    @property
    def collector(self) -> HostStatsCollector:
        """Get the collector run on each cycle."""
        return self._collector

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the monitoring thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name="StatusMonitor",
        )
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop the monitoring thread.

        Args:
            timeout: How long to wait for thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def _poll_loop(self) -> None:
        """Main polling loop running in the background thread."""
        while not self._stop_event.is_set():
            try:
                report = self._collector.collect()
            except HostStatsError as exc:
                logger.warning("collection failed, retrying next cycle: %s", exc)
                # Avoid spinning when the failure happens before the CPU delay
                self._stop_event.wait(timeout=self._collector.config.cpu_delay)
                continue
            except Exception:
                logger.exception("unexpected collection error, retrying next cycle")
                self._stop_event.wait(timeout=self._collector.config.cpu_delay)
                continue

            if not self._stop_event.is_set():
                self._queue.put(report)
