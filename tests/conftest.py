"""
Pytest fixtures for tests.

Discord objects are MagicMocks with AsyncMock send/reply/react methods, so
no test ever talks to the gateway. The rate limiter clock is replaced by a
controllable FakeClock.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from commands import help as help_commands
from commands import price as price_commands
from domain.models.bucket import Bucket, BucketScope
from services.command_registry import CommandRegistry
from services.dispatch_observer import LoggingDispatchObserver
from services.dispatcher import Dispatcher
from services.result import Result
from utils.rate_limiter import RateLimiter


# =============================================================================
# CENTRALIZED CONSTANTS
# =============================================================================

TEST_GUILD_ID = 12345
TEST_CHANNEL_ID = 1001
TEST_CHANNEL_ID_SECONDARY = 1002
TEST_USER_ID = 501


class FakeClock:
    """Stands in for time.monotonic; advance() moves time forward."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingObserver(LoggingDispatchObserver):
    """Logging observer that also records each hook call."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.allow = True

    async def before(self, message, command_name):
        self.calls.append(("before", command_name))
        await super().before(message, command_name)
        return self.allow

    async def after(self, message, command_name, error):
        self.calls.append(("after", command_name, error))
        await super().after(message, command_name, error)

    async def unknown_command(self, message, command_name):
        self.calls.append(("unknown_command", command_name))
        await super().unknown_command(message, command_name)

    async def normal_message(self, message):
        self.calls.append(("normal_message", message.content))
        await super().normal_message(message)

    async def dispatch_error(self, message, error, command_name):
        self.calls.append(("dispatch_error", command_name, error))
        await super().dispatch_error(message, error, command_name)

    def hooks(self) -> list[str]:
        return [call[0] for call in self.calls]


def make_message(
    content: str,
    *,
    user_id: int = TEST_USER_ID,
    user_name: str = "alice",
    channel_id: int = TEST_CHANNEL_ID,
    guild_id: int | None = TEST_GUILD_ID,
    is_bot: bool = False,
):
    """Build a mock discord.Message."""
    message = MagicMock()
    message.id = 9000
    message.content = content
    message.author.id = user_id
    message.author.name = user_name
    message.author.bot = is_bot
    message.channel.id = channel_id
    message.channel.send = AsyncMock()
    if guild_id is None:
        message.guild = None
    else:
        message.guild.id = guild_id
    message.reply = AsyncMock()
    message.add_reaction = AsyncMock()
    return message


async def load_command_cogs(container):
    """Expose an initialized container to a mock bot and run each command cog's setup()."""
    bot = MagicMock()
    bot.add_cog = AsyncMock()
    container.expose_to_bot(bot)
    await price_commands.setup(bot)
    await help_commands.setup(bot)
    return bot


@pytest.fixture
def fake_clock(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr("utils.rate_limiter.time.monotonic", clock)
    return clock


@pytest.fixture
def limiter(fake_clock):
    return RateLimiter()


@pytest.fixture
def channel_bucket():
    """Two uses per channel per 30 seconds, one waiter."""
    return Bucket(
        name="complicated",
        limit=2,
        window=30.0,
        scope=BucketScope.CHANNEL,
        await_limit=1,
    )


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def echo_handler():
    handler = AsyncMock(return_value=Result.ok())
    return handler


@pytest.fixture
def registry(channel_bucket, echo_handler):
    registry = CommandRegistry()
    registry.add_bucket(channel_bucket)
    registry.command("echo", description="Echo")(echo_handler)
    registry.command("limited", description="Rate limited", bucket="complicated")(echo_handler)
    return registry


@pytest.fixture
def dispatcher(registry, limiter, observer):
    """Dispatcher whose queued retries sleep for no real time."""

    async def no_sleep(_seconds):
        return None

    return Dispatcher(registry, limiter, observer, sleep=no_sleep)
