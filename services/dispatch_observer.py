"""
Dispatch hooks.

The dispatcher calls these at fixed points for every inbound message:

    normal_message   - message did not start with the prefix (observability only)
    before           - a command name was parsed; returning False suppresses it
    unknown_command  - the name matched no registered command
    dispatch_error   - the command was rejected before running (rate limited)
    after            - the handler finished; error is None on success

Every call is wrapped by the dispatcher, so an exception raised here is logged
and dropped rather than affecting the command.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from domain.models.dispatch import DispatchError
from services.error_codes import RATE_LIMITED
from utils.formatting import format_retry_message
from utils.message_safety import safe_send

logger = logging.getLogger("price_bot.services.dispatch_observer")


class DispatchObserver(ABC):
    """Interface for the fixed set of dispatch hooks."""

    @abstractmethod
    async def before(self, message: Any, command_name: str) -> bool:
        """Called before lookup and admission. Return False to drop the command silently."""
        ...

    @abstractmethod
    async def after(self, message: Any, command_name: str, error: DispatchError | None) -> None:
        """Called once the handler has run (never after a rejection)."""
        ...

    @abstractmethod
    async def unknown_command(self, message: Any, command_name: str) -> None:
        ...

    @abstractmethod
    async def normal_message(self, message: Any) -> None:
        ...

    @abstractmethod
    async def dispatch_error(self, message: Any, error: DispatchError, command_name: str) -> None:
        ...


class LoggingDispatchObserver(DispatchObserver):
    """Logs every stage and tells users once per window when they are rate limited."""

    async def before(self, message: Any, command_name: str) -> bool:
        logger.info(f"Got command '{command_name}' by user '{message.author.name}'")
        return True

    async def after(self, message: Any, command_name: str, error: DispatchError | None) -> None:
        if error is None:
            logger.info(f"Processed command '{command_name}'")
        else:
            logger.warning(f"Command '{command_name}' returned error {error}")

    async def unknown_command(self, message: Any, command_name: str) -> None:
        logger.info(f"Could not find command named '{command_name}'")

    async def normal_message(self, message: Any) -> None:
        logger.debug(f"Message is not a command '{message.content}'")

    async def dispatch_error(self, message: Any, error: DispatchError, command_name: str) -> None:
        if error.code != RATE_LIMITED:
            return
        logger.info(
            f"Command '{command_name}' rate limited in channel {message.channel.id} "
            f"(retry in {error.retry_after:.1f}s, first_try={error.is_first_try}, queued={error.queued})"
        )
        # Queued calls run by themselves later; otherwise only the first rejection in a window gets a reply
        if error.is_first_try and not error.queued:
            await safe_send(message.channel, format_retry_message(error.retry_after_seconds))
