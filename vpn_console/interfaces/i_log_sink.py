"""Logging interface (adapter pattern)."""

from typing import Protocol


class ILogSink(Protocol):
    """Interface for log output shared by adapters, core and handlers."""

    def log(self, level: str, message: str) -> None:
        """Write log entry; level is debug, info, warn or error."""
        ...
