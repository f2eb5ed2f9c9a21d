"""
Per-command invocation counter.

Counts attempts, not successes: the dispatcher increments before the rate
limiter or the registry lookup gets a say.
"""

from __future__ import annotations

import threading


class CommandCounter:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}

    def increment(self, command_name: str) -> int:
        """Add one to a command's count (starting from 0) and return the new value."""
        with self._lock:
            count = self._counts.get(command_name, 0) + 1
            self._counts[command_name] = count
            return count

    def get(self, command_name: str) -> int:
        with self._lock:
            return self._counts.get(command_name, 0)

    def snapshot(self) -> dict[str, int]:
        """Copy of all counts, safe to read without the lock."""
        with self._lock:
            return dict(self._counts)
