"""Command line entry point for tmux-host-stats."""

import argparse
import sys
from importlib import metadata

from hoststats.config import DEFAULT_SAMPLE_OFFSET_US, StatsConfig
from hoststats.errors import HostStatsError, InvalidArgument
from hoststats.logging_setup import configure_logging, get_logger
from hoststats.models import CpuMode, MemoryMode
from hoststats.monitor import HostStatsCollector
from hoststats.stats import MAX_LOAD_AVERAGES

DIST_NAME = "tmux-host-stats"


def installed_version() -> str:
    """Get the installed distribution version."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=DIST_NAME,
        description="Print CPU, memory and load averages as one tmux status line.",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=int,
        default=1,
        help="tmux status refresh interval in seconds. Default: 1",
    )
    parser.add_argument(
        "-m",
        "--mem-mode",
        type=int,
        default=int(MemoryMode.FREE_MEMORY),
        help="Memory display mode. 0: Used/total, 1: Free memory, 2: Usage percent. Default: 1",
    )
    parser.add_argument(
        "-t",
        "--cpu-mode",
        type=int,
        default=int(CpuMode.DEFAULT),
        help="CPU %% display mode. 0: Max 100%%, 1: Max 100%% * number of cores. Default: 0",
    )
    parser.add_argument(
        "-a",
        "--averages-count",
        type=int,
        default=MAX_LOAD_AVERAGES,
        help="How many load averages to show (0-3). Default: 3",
    )
    parser.add_argument(
        "--sample-offset-us",
        type=int,
        default=DEFAULT_SAMPLE_OFFSET_US,
        help="Microseconds cut from the CPU sampling window for overhead. Default: 10000",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for stderr diagnostics. Default: WARNING",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show a live preview of the status line instead of printing once",
    )
    parser.add_argument("-v", "--version", action="version", version=installed_version())
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for tmux-host-stats."""
    args = build_parser().parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    logger = get_logger()

    try:
        config = StatsConfig.from_args(args)
    except InvalidArgument as exc:
        print(exc.message, file=sys.stderr)
        return 1
    logger.debug("running with %s", config)

    if args.preview:
        from hoststats.app import HostStatsApp

        HostStatsApp(config).run()
        return 0

    try:
        report = HostStatsCollector.from_psutil(config).collect()
    except HostStatsError as exc:
        print(exc.message, file=sys.stderr)
        return 1

    print(report.line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
