"""Run configuration built once from the command line."""

import argparse
from dataclasses import dataclass

from hoststats.errors import InvalidArgument
from hoststats.models import CpuMode, MemoryMode
from hoststats.stats import MAX_LOAD_AVERAGES

MICROSECONDS = 1_000_000
# Compensates for time spent outside the sampling window
DEFAULT_SAMPLE_OFFSET_US = 10_000


@dataclass(slots=True, frozen=True)
class StatsConfig:
    """Read-only settings for one sample-and-render cycle."""

    interval: int = 1
    mem_mode: MemoryMode = MemoryMode.FREE_MEMORY
    cpu_mode: CpuMode = CpuMode.DEFAULT
    averages_count: int = MAX_LOAD_AVERAGES
    sample_offset_us: int = DEFAULT_SAMPLE_OFFSET_US

    def __post_init__(self) -> None:
        """
        Check every value is in range and coerce the modes to their enums.

        Raises:
            InvalidArgument: If any value is out of range.
        """
        if self.interval < 1:
            raise InvalidArgument(
                "interval", self.interval, "Status interval argument must be one or greater."
            )
        if self.mem_mode not in list(MemoryMode):
            raise InvalidArgument(
                "mem-mode", self.mem_mode, "Valid mem-mode arguments are: 0, 1, 2"
            )
        if self.cpu_mode not in list(CpuMode):
            raise InvalidArgument("cpu-mode", self.cpu_mode, "Valid cpu-mode arguments are: 0, 1")
        if not 0 <= self.averages_count <= MAX_LOAD_AVERAGES:
            raise InvalidArgument(
                "averages-count", self.averages_count, "Valid averages-count arguments are: 0, 1, 2, 3"
            )
        if not 0 <= self.sample_offset_us < self.interval * MICROSECONDS:
            raise InvalidArgument(
                "sample-offset-us",
                self.sample_offset_us,
                "Sample offset must be zero or greater and shorter than the interval.",
            )
        # Frozen, so bypass __setattr__
        object.__setattr__(self, "mem_mode", MemoryMode(self.mem_mode))
        object.__setattr__(self, "cpu_mode", CpuMode(self.cpu_mode))

    @property
    def cpu_delay_us(self) -> int:
        """Get the CPU sampling delay in microseconds."""
        return self.interval * MICROSECONDS - self.sample_offset_us

    @property
    def cpu_delay(self) -> float:
        """Get the CPU sampling delay in seconds."""
        return self.cpu_delay_us / MICROSECONDS

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "StatsConfig":
        """
        Build a validated config from parsed arguments.

        Raises:
            InvalidArgument: If any value is out of range.
        """
        return cls(
            interval=args.interval,
            mem_mode=args.mem_mode,
            cpu_mode=args.cpu_mode,
            averages_count=args.averages_count,
            sample_offset_us=args.sample_offset_us,
        )
