"""
Generated help listing for prefix commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from domain.models.command import Command, CommandContext
from services.result import Result

if TYPE_CHECKING:
    from services.command_registry import CommandRegistry

logger = logging.getLogger("price_bot.commands.help")

MAX_SUGGESTION_DISTANCE = 3


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings (insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def closest_name(name: str, candidates: list[str], max_distance: int = MAX_SUGGESTION_DISTANCE) -> str | None:
    """Closest candidate within max_distance, ties broken alphabetically."""
    scored = sorted((levenshtein(name, c), c) for c in candidates)
    if scored and scored[0][0] <= max_distance:
        return scored[0][1]
    return None


class HelpCommands(commands.Cog):
    """Help listing generated from the command registry."""

    def __init__(self, bot: commands.Bot, registry: CommandRegistry, prefix: str = "!"):
        self.bot = bot
        self.registry = registry
        self.prefix = prefix

    def build_overview_embed(self) -> discord.Embed:
        embed = discord.Embed(
            title="Help",
            description=(
                f"Hello! Use `{self.prefix}` as a prefix for commands\n\n"
                "If you want more information about a specific command, "
                "just pass the command as argument."
            ),
            color=discord.Color.blurple(),
        )
        for command in self.registry.commands():
            embed.add_field(
                name=f"{self.prefix}{command.name}",
                value=command.description or "No description",
                inline=False,
            )
        return embed

    def build_command_embed(self, command: Command) -> discord.Embed:
        embed = discord.Embed(
            title=f"{self.prefix}{command.name}",
            description=command.description or "No description",
            color=discord.Color.blurple(),
        )
        embed.add_field(name="Usage", value=f"`{self.prefix}{command.usage or command.name}`", inline=False)
        if command.bucket:
            embed.add_field(name="Rate limit bucket", value=command.bucket, inline=False)
        return embed

    def not_found_text(self, name: str) -> str:
        text = f"Could not find: `{name}`."
        suggestion = closest_name(name, self.registry.names())
        if suggestion:
            text += f" Did you mean `{suggestion}`?"
        return text

    async def help(self, ctx: CommandContext) -> Result:
        """Show all commands, or details for the command named in the first argument."""
        if not ctx.args:
            await ctx.message.channel.send(embed=self.build_overview_embed())
            return Result.ok()

        name = ctx.args[0]
        if name.startswith(self.prefix):
            name = name[len(self.prefix):]
        command = self.registry.get(name)
        if command is None:
            await ctx.message.channel.send(self.not_found_text(name))
            return Result.ok()

        await ctx.message.channel.send(embed=self.build_command_embed(command))
        return Result.ok()


async def setup(bot: commands.Bot):
    """Setup function called when loading the cog."""
    registry = getattr(bot, "command_registry", None)
    dispatcher = getattr(bot, "command_dispatcher", None)

    if registry is None or dispatcher is None:
        logger.warning("help cog: services not exposed on bot, skipping")
        return

    cog = HelpCommands(bot, registry, prefix=dispatcher.prefix)
    # Not rate limited
    registry.add_command(
        Command(
            name="help",
            handler=cog.help,
            description="List commands, or show details for one",
            usage="help [command]",
        )
    )
    await bot.add_cog(cog)
    logger.info("HelpCommands cog loaded")
