"""Exceptions raised by tmux-host-stats."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class HostStatsError(Exception):
    """Base class for all tmux-host-stats errors, with context."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        """Store the message and context and log the error."""
        self.message = message
        self.context = context or {}
        super().__init__(message)
        logger.debug("%s | context=%s", message, self.context)


class InvalidArgument(HostStatsError):
    """Raised when a command line value is out of range."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(reason, context={"name": name, "value": value})


class SamplingUnavailable(HostStatsError):
    """Raised when CPU counters cannot be read."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"CPU counters unavailable: {reason}", context={"reason": reason})


class MemoryUnavailable(HostStatsError):
    """Raised when memory counters cannot be read."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Memory counters unavailable: {reason}", context={"reason": reason})
