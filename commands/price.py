"""
ETH price command.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord.ext import commands

from domain.models.bucket import COMPLICATED_BUCKET
from domain.models.command import Command, CommandContext
from services.result import Result
from utils.formatting import GENERIC_FAILURE_MESSAGE, format_eth_price
from utils.message_safety import safe_reply

if TYPE_CHECKING:
    from services.price_service import PriceService

logger = logging.getLogger("price_bot.commands.price")


class PriceCommands(commands.Cog):
    """Commands backed by the price API."""

    def __init__(self, bot: commands.Bot, price_service: PriceService):
        self.bot = bot
        self.price_service = price_service

    async def price(self, ctx: CommandContext) -> Result:
        """
        Reply with the current ETH/USD price.

        API failures get a generic reply and still count as a handled
        command; only an undeliverable reply is reported as a failure.
        """
        result = await self.price_service.fetch_eth_price()
        if result:
            content = format_eth_price(result.value)
        else:
            logger.info(f"Price lookup failed for user {ctx.invocation.user_id}: {result}")
            content = GENERIC_FAILURE_MESSAGE

        if not await safe_reply(ctx.message, content):
            return Result.fail("Could not deliver price reply")
        return Result.ok()


async def setup(bot: commands.Bot):
    """Setup function called when loading the cog."""
    registry = getattr(bot, "command_registry", None)
    price_service = getattr(bot, "price_service", None)

    if registry is None or price_service is None:
        logger.warning("price cog: services not exposed on bot, skipping")
        return

    cog = PriceCommands(bot, price_service)
    registry.add_command(
        Command(
            name="price",
            handler=cog.price,
            description="Show the current price of ETH in USD",
            usage="price",
            bucket=COMPLICATED_BUCKET,
        )
    )
    await bot.add_cog(cog)
    logger.info("PriceCommands cog loaded")
