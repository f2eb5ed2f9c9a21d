"""
Rate-limit bucket configuration.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable

if TYPE_CHECKING:
    from domain.models.command import Invocation

DelayAction = Callable[[Any], Awaitable[None]]

# Pacing only: one use per user every few seconds, no cap
EMOJI_BUCKET = "emoji"
# Capped per channel, with a waiter slot and a stopwatch reaction
COMPLICATED_BUCKET = "complicated"


class BucketScope(str, enum.Enum):
    """What a bucket partitions its usage by."""

    GLOBAL = "global"
    USER = "user"
    CHANNEL = "channel"
    GUILD = "guild"

    def key_for(self, invocation: Invocation) -> int:
        """Return the scope key an invocation is counted under."""
        if self is BucketScope.USER:
            return invocation.user_id
        if self is BucketScope.CHANNEL:
            return invocation.channel_id
        if self is BucketScope.GUILD:
            # DMs have no guild; fall back to the channel so they stay partitioned
            return invocation.guild_id if invocation.guild_id is not None else invocation.channel_id
        return 0


@dataclass(frozen=True)
class Bucket:
    """
    Immutable rate-limit settings shared by every command that names this bucket.

    Attributes:
        name: Registry key commands refer to
        limit: Admissions allowed per window (None = no cap)
        window: Window length in seconds
        delay: Minimum seconds between two admissions for one scope key
        scope: How usage is partitioned
        await_limit: How many rejected callers may wait for the next window
        delay_action: Coroutine run with the message on every rejection
    """

    name: str
    limit: int | None = None
    window: float = 0.0
    delay: float = 0.0
    scope: BucketScope = BucketScope.USER
    await_limit: int = 0
    delay_action: DelayAction | None = None
