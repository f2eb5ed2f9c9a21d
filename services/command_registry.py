"""
Registry of prefix commands and rate-limit buckets.

Filled once at startup by each command module's setup(); read-only after that.
"""

from __future__ import annotations

import logging

from domain.models.bucket import Bucket
from domain.models.command import Command, CommandHandler

logger = logging.getLogger("price_bot.services.command_registry")


class CommandRegistry:
    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._buckets: dict[str, Bucket] = {}

    def add_bucket(self, bucket: Bucket) -> None:
        if bucket.name in self._buckets:
            raise ValueError(f"Bucket '{bucket.name}' is already registered")
        self._buckets[bucket.name] = bucket
        logger.debug(f"Registered bucket '{bucket.name}'")

    def add_command(self, command: Command) -> None:
        """
        Register a command.

        Raises:
            ValueError: if the name is taken or the command names an unknown bucket
        """
        if command.name in self._commands:
            raise ValueError(f"Command '{command.name}' is already registered")
        if command.bucket is not None and command.bucket not in self._buckets:
            raise ValueError(f"Command '{command.name}' uses unknown bucket '{command.bucket}'")
        self._commands[command.name] = command
        logger.debug(f"Registered command '{command.name}'")

    def command(
        self,
        name: str,
        *,
        description: str = "",
        usage: str = "",
        bucket: str | None = None,
    ):
        """Decorator form of add_command."""

        def decorator(handler: CommandHandler) -> CommandHandler:
            self.add_command(
                Command(name=name, handler=handler, description=description, usage=usage, bucket=bucket)
            )
            return handler

        return decorator

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def get_bucket(self, name: str) -> Bucket | None:
        return self._buckets.get(name)

    def commands(self) -> list[Command]:
        """All commands, sorted by name."""
        return sorted(self._commands.values(), key=lambda c: c.name)

    def names(self) -> list[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
