"""Stdout logging adapter."""

import sys
from datetime import datetime

# Levels that go to stderr
STDERR_LEVELS = ("warn", "error")


class StdoutAdapter:
    """Adapter for stdout logging."""

    def __init__(self, min_level: str = "info"):
        self.levels = ["debug", "info", "warn", "error"]
        self.min_index = self.levels.index(min_level)

    def log(self, level: str, message: str) -> None:
        """Write log entry to stdout (warnings and errors to stderr)."""
        if level in self.levels and self.levels.index(level) < self.min_index:
            return

        timestamp = datetime.now().isoformat()
        stream = sys.stderr if level in STDERR_LEVELS else sys.stdout
        print(f"[{timestamp}] {level.upper()}: {message}", file=stream)
