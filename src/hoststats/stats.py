"""Samplers and readers turning raw host counters into metrics."""

import logging
import time
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal

import psutil

from hoststats.errors import MemoryUnavailable, SamplingUnavailable
from hoststats.models import CpuSnapshot, LoadAverages, MemoryStatus
from hoststats.sources import CoreCountSource, CpuCounterSource, LoadAverageSource, MemoryCounterSource
from hoststats.units import Unit, convert

logger = logging.getLogger(__name__)

MAX_LOAD_AVERAGES = 3
FALLBACK_LOAD_AVERAGES = (0.0, 0.0, 0.0)

_TWO_PLACES = Decimal("0.01")


class CpuSampler:
    """
    Measures CPU busy percentage from two counter snapshots.

    The delay between the snapshots is chosen by the caller: a shorter delay
    answers sooner but gives a noisier estimate.
    """

    def __init__(
        self,
        source: CpuCounterSource,
        sleep: Callable[[float], object] | None = None,
    ) -> None:
        """
        Initialize the CpuSampler.

        Args:
            source: Source of cumulative CPU counters.
            sleep: Blocking delay function taking seconds. Default time.sleep.
        """
        self._source = source
        self._sleep = sleep or time.sleep

    def percentage(self, delay: float) -> float:
        """
        Sample the CPU busy percentage over delay seconds.

        The result is nominally within 0-100 and is not clamped.

        Raises:
            SamplingUnavailable: If the counters cannot be read.
        """
        first = self._snapshot()
        if delay > 0:
            self._sleep(delay)
        second = self._snapshot()

        busy_delta = second.busy_ticks - first.busy_ticks
        idle_delta = second.idle_ticks - first.idle_ticks
        total_delta = busy_delta + idle_delta
        logger.debug("cpu delta busy=%s idle=%s over %.3fs", busy_delta, idle_delta, delay)
        if total_delta == 0:
            return 0.0
        return busy_delta / total_delta * 100.0

    def _snapshot(self) -> CpuSnapshot:
        try:
            return self._source.read()
        except (OSError, psutil.Error) as exc:
            raise SamplingUnavailable(str(exc)) from exc


class MemoryReader:
    """Reads the current memory status in megabytes."""

    def __init__(self, source: MemoryCounterSource) -> None:
        self._source = source

    def read(self) -> MemoryStatus:
        """
        Read total, used and free memory.

        Raises:
            MemoryUnavailable: If the counters cannot be read. No default
                status is substituted.
        """
        try:
            total_bytes, used_bytes = self._source.read()
        except (OSError, psutil.Error) as exc:
            raise MemoryUnavailable(str(exc)) from exc

        total = convert(total_bytes, Unit.BYTES, Unit.MEGABYTES)
        used = convert(used_bytes, Unit.BYTES, Unit.MEGABYTES)
        return MemoryStatus(total_mem=total, used_mem=used, free_mem=max(total - used, 0.0))


def round_half_away(value: float) -> float:
    """Round to two decimals, halves away from zero (1.235 -> 1.24)."""
    # str() gives the shortest repr, so 1.235 is not seen as 1.23499...
    return float(Decimal(str(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def load_percent(first_average: float, core_count: int) -> int:
    """Express a load average as 0-100, where 100 means twice the core count."""
    percent = int(first_average / max(core_count, 1) * 0.5 * 100.0)
    return min(max(percent, 0), 100)


class LoadAverageReader:
    """Reads up to three load averages."""

    def __init__(self, source: LoadAverageSource, core_count: CoreCountSource) -> None:
        self._source = source
        self._core_count = core_count

    def read(self, count: int = MAX_LOAD_AVERAGES) -> LoadAverages:
        """
        Read the first count load averages, rounded to two decimals.

        A failed OS query is not an error: the result degrades to three zeros
        whatever count was asked for, and the next refresh tries again.

        Raises:
            ValueError: If count is outside 0-3.
        """
        if not 0 <= count <= MAX_LOAD_AVERAGES:
            raise ValueError(f"count must be between 0 and {MAX_LOAD_AVERAGES}, got {count}")
        if count == 0:
            return LoadAverages(values=())

        try:
            raw = self._source.read()
        except (OSError, psutil.Error) as exc:
            logger.warning("load averages unavailable, showing zeros: %s", exc)
            return LoadAverages(values=FALLBACK_LOAD_AVERAGES)

        values = tuple(round_half_away(avg) for avg in raw[:count])
        return LoadAverages(
            values=values,
            load_percent=load_percent(raw[0], self._core_count.read()),
        )
