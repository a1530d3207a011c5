"""Tests for StatsConfig."""

import argparse

import pytest

from hoststats.config import DEFAULT_SAMPLE_OFFSET_US, StatsConfig
from hoststats.errors import InvalidArgument
from hoststats.models import CpuMode, MemoryMode


def namespace(**overrides) -> argparse.Namespace:
    values = {
        "interval": 1,
        "mem_mode": 1,
        "cpu_mode": 0,
        "averages_count": 3,
        "sample_offset_us": DEFAULT_SAMPLE_OFFSET_US,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestStatsConfig:
    """Tests for StatsConfig defaults and derived values."""

    def test_defaults(self):
        config = StatsConfig()

        assert config.interval == 1
        assert config.mem_mode is MemoryMode.FREE_MEMORY
        assert config.cpu_mode is CpuMode.DEFAULT
        assert config.averages_count == 3

    def test_cpu_delay(self):
        """Test the delay is the interval minus the offset."""
        config = StatsConfig(interval=2)

        assert config.cpu_delay_us == 1_990_000
        assert config.cpu_delay == pytest.approx(1.99)

    def test_custom_offset(self):
        assert StatsConfig(interval=1, sample_offset_us=0).cpu_delay == 1.0

    def test_is_frozen(self):
        config = StatsConfig()

        with pytest.raises(AttributeError):
            config.interval = 5


class TestFromArgs:
    """Tests for StatsConfig.from_args validation."""

    def test_valid(self):
        config = StatsConfig.from_args(namespace(interval=5, mem_mode=2, cpu_mode=1, averages_count=0))

        assert config == StatsConfig(
            interval=5,
            mem_mode=MemoryMode.USAGE_PERCENTAGE,
            cpu_mode=CpuMode.PER_CORE,
            averages_count=0,
        )

    def test_interval_below_one(self):
        with pytest.raises(InvalidArgument) as exc_info:
            StatsConfig.from_args(namespace(interval=0))

        assert exc_info.value.name == "interval"
        assert exc_info.value.message == "Status interval argument must be one or greater."

    @pytest.mark.parametrize("mem_mode", [-1, 3])
    def test_mem_mode_out_of_range(self, mem_mode):
        with pytest.raises(InvalidArgument):
            StatsConfig.from_args(namespace(mem_mode=mem_mode))

    @pytest.mark.parametrize("cpu_mode", [-1, 2])
    def test_cpu_mode_out_of_range(self, cpu_mode):
        with pytest.raises(InvalidArgument):
            StatsConfig.from_args(namespace(cpu_mode=cpu_mode))

    @pytest.mark.parametrize("count", [-1, 4])
    def test_averages_count_out_of_range(self, count):
        with pytest.raises(InvalidArgument) as exc_info:
            StatsConfig.from_args(namespace(averages_count=count))

        assert exc_info.value.context == {"name": "averages-count", "value": count}

    @pytest.mark.parametrize("offset", [-1, 1_000_000])
    def test_offset_out_of_range(self, offset):
        with pytest.raises(InvalidArgument):
            StatsConfig.from_args(namespace(sample_offset_us=offset))


class TestDirectConstruction:
    """Tests for validation when StatsConfig is built directly."""

    def test_averages_count_checked(self):
        """Test an out of range count is rejected without going through from_args."""
        with pytest.raises(InvalidArgument) as exc_info:
            StatsConfig(averages_count=4)

        assert exc_info.value.name == "averages-count"

    def test_interval_checked(self):
        with pytest.raises(InvalidArgument):
            StatsConfig(interval=0)

    def test_offset_checked(self):
        with pytest.raises(InvalidArgument):
            StatsConfig(interval=1, sample_offset_us=1_000_000)

    def test_modes_checked(self):
        with pytest.raises(InvalidArgument):
            StatsConfig(mem_mode=5)
        with pytest.raises(InvalidArgument):
            StatsConfig(cpu_mode=-1)

    def test_int_modes_become_enums(self):
        """Test plain integer modes are stored as their enum members."""
        config = StatsConfig(mem_mode=2, cpu_mode=1)

        assert config.mem_mode is MemoryMode.USAGE_PERCENTAGE
        assert config.cpu_mode is CpuMode.PER_CORE
