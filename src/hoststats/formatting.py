"""Rendering of metrics into the tmux status line."""

import math

from hoststats.models import LoadAverages, MemoryMode, MemoryStatus
from hoststats.units import Unit, convert


def mem_string(memory: MemoryStatus, mode: MemoryMode = MemoryMode.DEFAULT) -> str:
    """
    Format the memory segment.

    Examples:
        DEFAULT:          11156/16003MB
        FREE_MEMORY:      512.00MB or 2.00GB
        USAGE_PERCENTAGE: 50.00%
    """
    if mode == MemoryMode.FREE_MEMORY:
        free_gb = convert(memory.free_mem, Unit.MEGABYTES, Unit.GIGABYTES)
        # Below 1 GB show MB instead
        if free_gb < 1.0:
            return f"{memory.free_mem:.2f}MB"
        return f"{free_gb:.2f}GB"

    if mode == MemoryMode.USAGE_PERCENTAGE:
        percent = memory.used_mem / memory.total_mem * 100.0 if memory.total_mem else 0.0
        return f"{percent:.2f}%"

    return f"{math.floor(memory.used_mem)}/{math.floor(memory.total_mem)}MB"


def cpu_string(percentage: float, multiplier: float = 1.0) -> str:
    """Format the CPU segment, dropping the decimal at 100 and above."""
    value = percentage * multiplier
    precision = 0 if value >= 100.0 else 1
    return f" {value:.{precision}f}"


def load_string(loads: LoadAverages) -> str:
    """Format the load segment, empty when no averages were requested."""
    if not loads.values:
        return ""
    return " " + " ".join(f"{avg:.2f}" for avg in loads.values)


def render(
    memory: MemoryStatus,
    mode: MemoryMode,
    cpu_pct: float,
    loads: LoadAverages,
    multiplier: float = 1.0,
) -> str:
    """Compose the full status line: memory, then CPU, then load."""
    return mem_string(memory, mode) + cpu_string(cpu_pct, multiplier) + load_string(loads)
