"""
Command domain models.

A Command is registered once at startup and never mutated. An Invocation is
built per inbound message and discarded once dispatch finishes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Awaitable, Callable

if TYPE_CHECKING:
    from services.result import Result

CommandHandler = Callable[["CommandContext"], Awaitable["Result | None"]]


@dataclass(frozen=True)
class Command:
    """A named command bound to a handler and an optional rate-limit bucket."""

    name: str
    handler: CommandHandler
    description: str = ""
    usage: str = ""
    bucket: str | None = None  # Bucket name, resolved by the dispatcher


@dataclass(frozen=True)
class ParsedCommand:
    """Command name and arguments split out of a prefixed message."""

    name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class Invocation:
    """One attempt to run a command, derived from an inbound message."""

    command_name: str
    user_id: int
    user_name: str
    channel_id: int
    guild_id: int | None = None
    args: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_message(cls, message: Any, parsed: ParsedCommand) -> "Invocation":
        guild = getattr(message, "guild", None)
        return cls(
            command_name=parsed.name,
            user_id=message.author.id,
            user_name=message.author.name,
            channel_id=message.channel.id,
            guild_id=guild.id if guild is not None else None,
            args=parsed.args,
        )


@dataclass(frozen=True)
class CommandContext:
    """What a handler receives: the raw platform message plus its invocation."""

    message: Any
    invocation: Invocation

    @property
    def args(self) -> tuple[str, ...]:
        return self.invocation.args
