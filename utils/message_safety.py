"""
Best-effort wrappers around Discord send/reply/react calls.

Hooks and delay actions must never fail a dispatch because Discord refused a
message (rate limits, missing permissions, deleted channel). These helpers log
and return False instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any

import discord

from utils.formatting import STOPWATCH_EMOJI

logger = logging.getLogger("price_bot.utils.message_safety")


async def safe_send(channel: Any, content: str) -> bool:
    """Send a message to a channel. Returns True if Discord accepted it."""
    try:
        await channel.send(content)
        return True
    except discord.HTTPException as exc:
        logger.warning(f"Failed to send message to channel {getattr(channel, 'id', '?')}: {exc}")
        return False


async def safe_reply(message: Any, content: str) -> bool:
    """Reply to a message (with a reference to it). Returns True on success."""
    try:
        await message.reply(content)
        return True
    except discord.HTTPException as exc:
        logger.warning(f"Failed to reply to message {getattr(message, 'id', '?')}: {exc}")
        return False


async def safe_react(message: Any, emoji: str) -> bool:
    """Add a reaction to a message. Returns True on success."""
    try:
        await message.add_reaction(emoji)
        return True
    except discord.HTTPException as exc:
        logger.warning(f"Failed to react to message {getattr(message, 'id', '?')}: {exc}")
        return False


async def react_stopwatch(message: Any) -> None:
    """Delay action for rate-limited buckets: mark the rejected message."""
    await safe_react(message, STOPWATCH_EMOJI)
