"""
In-memory bucket rate limiter for prefix commands.

State is per (bucket name, scope key) and lives only as long as the process.
Restarts reset every window, which is fine for spam control.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass

from domain.models.bucket import Bucket


@dataclass(frozen=True)
class Admission:
    allowed: bool
    is_first_try: bool = False
    retry_after: float = 0.0
    queued: bool = False  # Rejected, but holds a waiter slot for the next window

    @property
    def retry_after_seconds(self) -> int:
        """Whole seconds to wait, rounded up."""
        return int(math.ceil(max(0.0, self.retry_after)))

    @classmethod
    def admitted(cls) -> "Admission":
        return cls(allowed=True)


@dataclass
class _KeyState:
    used_count: int = 0
    window_start: float | None = None
    delay_until: float = 0.0
    notified: bool = False
    waiters: int = 0


class RateLimiter:
    """
    Fixed-window counter per scope key, with an optional minimum delay between uses.

    Only the first rejection in a window reports is_first_try=True so callers
    can tell the user once instead of on every attempt.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state: dict[tuple[str, int], _KeyState] = {}

    def check_and_consume(self, bucket: Bucket, scope_key: int, *, waiting: bool = False) -> Admission:
        """
        Admit or reject one invocation against a bucket.

        Args:
            bucket: Bucket settings
            scope_key: Partition key (channel id, user id, ...)
            waiting: True when re-checking a caller that held a waiter slot;
                the slot is released and the caller is never re-queued
        """
        now = time.monotonic()
        with self._lock:
            state = self._state.setdefault((bucket.name, scope_key), _KeyState())
            if waiting:
                state.waiters = max(0, state.waiters - 1)

            if bucket.limit is not None and (
                state.window_start is None or now - state.window_start >= bucket.window
            ):
                state.used_count = 0
                state.window_start = now
                state.notified = False

            waits: list[float] = []
            if bucket.delay > 0 and now < state.delay_until:
                waits.append(state.delay_until - now)
            if bucket.limit is not None and state.used_count >= bucket.limit:
                waits.append(state.window_start + bucket.window - now)

            if not waits:
                if bucket.limit is not None:
                    state.used_count += 1
                if bucket.delay > 0:
                    state.delay_until = now + bucket.delay
                state.notified = False
                return Admission.admitted()

            is_first_try = not state.notified
            state.notified = True
            queued = False
            if not waiting and state.waiters < bucket.await_limit:
                state.waiters += 1
                queued = True
            return Admission(
                allowed=False,
                is_first_try=is_first_try,
                retry_after=max(waits),
                queued=queued,
            )

    def release_waiter(self, bucket: Bucket, scope_key: int) -> None:
        """Give back a waiter slot without re-checking admission."""
        with self._lock:
            state = self._state.get((bucket.name, scope_key))
            if state is not None:
                state.waiters = max(0, state.waiters - 1)

    def used_count(self, bucket: Bucket, scope_key: int) -> int:
        """Admissions counted in the current window (0 once the window has expired)."""
        now = time.monotonic()
        with self._lock:
            state = self._state.get((bucket.name, scope_key))
            if state is None or state.window_start is None:
                return 0
            if bucket.limit is not None and now - state.window_start >= bucket.window:
                return 0
            return state.used_count

    def reset(self) -> None:
        with self._lock:
            self._state.clear()
