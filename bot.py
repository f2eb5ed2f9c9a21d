"""
Main Discord bot entry for the ETH price bot.
"""

import logging
import sys

from config import LOG_LEVEL

# Configure logging BEFORE importing discord to prevent duplicate handlers
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,  # Override any existing handlers (e.g., from discord.py)
)
logger = logging.getLogger("price_bot")

import discord
from discord.ext import commands

# discord.py adds its own handler to the 'discord' logger on import
_discord_logger = logging.getLogger("discord")
_discord_logger.handlers.clear()
_discord_logger.setLevel(logging.INFO)

from config import (
    COMMAND_DELIMITERS,
    COMMAND_PREFIX,
    COMPLICATED_BUCKET_AWAIT_LIMIT,
    COMPLICATED_BUCKET_LIMIT,
    COMPLICATED_BUCKET_WINDOW_SECONDS,
    EMOJI_BUCKET_DELAY_SECONDS,
    ETHERSCAN_API_URL,
    IGNORE_BOTS,
    PRICE_API_TIMEOUT_SECONDS,
    ConfigMissingError,
    Secrets,
    load_secrets,
)
from infrastructure.service_container import ServiceConfig, ServiceContainer

intents = discord.Intents.default()
intents.message_content = True

# Prefix commands go through our own Dispatcher, not discord.py's command handling
bot = commands.Bot(command_prefix=COMMAND_PREFIX, intents=intents, help_command=None)

# Lazy-initialized service container
_container: ServiceContainer | None = None

EXTENSIONS = [
    "commands.price",
    "commands.help",
]


def build_container(secrets: Secrets) -> ServiceContainer:
    """Create and initialize the service container from environment config."""
    container = ServiceContainer(
        ServiceConfig(
            etherscan_api_key=secrets.etherscan_api_key,
            etherscan_api_url=ETHERSCAN_API_URL,
            price_api_timeout_seconds=PRICE_API_TIMEOUT_SECONDS,
            command_prefix=COMMAND_PREFIX,
            command_delimiters=COMMAND_DELIMITERS,
            ignore_bots=IGNORE_BOTS,
            emoji_bucket_delay_seconds=EMOJI_BUCKET_DELAY_SECONDS,
            complicated_bucket_limit=COMPLICATED_BUCKET_LIMIT,
            complicated_bucket_window_seconds=COMPLICATED_BUCKET_WINDOW_SECONDS,
            complicated_bucket_await_limit=COMPLICATED_BUCKET_AWAIT_LIMIT,
        )
    )
    container.initialize()
    container.expose_to_bot(bot)
    return container


async def _load_extensions():
    """Load command extensions if not already loaded."""
    loaded_extensions = []
    failed_extensions = []

    for ext in EXTENSIONS:
        if ext in bot.extensions:
            logger.debug(f"Extension {ext} already loaded, skipping")
            continue
        try:
            await bot.load_extension(ext)
            loaded_extensions.append(ext)
            logger.info(f"Loaded extension: {ext}")
        except Exception as exc:
            failed_extensions.append(ext)
            logger.error(f"Failed to load extension {ext}: {exc}", exc_info=True)

    logger.info(
        f"Extension loading complete: {len(loaded_extensions)} loaded, {len(failed_extensions)} failed"
    )


@bot.event
async def setup_hook():
    """Load command cogs."""
    await _load_extensions()


@bot.event
async def on_ready():
    logger.info(f"{bot.user.name} is connected!")


@bot.event
async def on_message(message: discord.Message):
    """Route every inbound message through the command dispatcher."""
    if _container is None:
        return
    await _container.dispatcher.dispatch(message)


def main():
    """Run the bot."""
    global _container

    try:
        secrets = load_secrets()
    except ConfigMissingError as exc:
        logger.error(f"ERROR: {exc}")
        sys.exit(1)

    _container = build_container(secrets)

    try:
        # We've already configured logging above with our preferred format
        bot.run(secrets.discord_token, log_handler=None)
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (Ctrl+C)")
    except Exception as exc:
        logger.error(f"Bot crashed: {exc}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
