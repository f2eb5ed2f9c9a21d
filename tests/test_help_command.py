"""Tests for the generated !help command."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
import pytest_asyncio

from commands.help import closest_name, levenshtein
from domain.models.dispatch import DispatchOutcome
from infrastructure.service_container import ServiceConfig, ServiceContainer
from tests.conftest import load_command_cogs, make_message


@pytest_asyncio.fixture
async def container(fake_clock):
    container = ServiceContainer(ServiceConfig(etherscan_api_key="test-key"))
    container.initialize()
    await load_command_cogs(container)
    return container


class TestLevenshtein:
    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("", "", 0),
            ("price", "price", 0),
            ("price", "prise", 1),
            ("price", "pric", 1),
            ("help", "hlep", 2),
            ("", "help", 4),
            ("kitten", "sitting", 3),
        ],
    )
    def test_distance(self, a, b, expected):
        assert levenshtein(a, b) == expected
        assert levenshtein(b, a) == expected

    def test_closest_name_within_distance(self):
        assert closest_name("prcie", ["help", "price"]) == "price"

    def test_closest_name_too_far(self):
        assert closest_name("balance", ["help", "price"]) is None


class TestHelpCommand:
    @pytest.mark.asyncio
    async def test_overview_lists_commands(self, container):
        message = make_message("!help")

        outcome = await container.dispatcher.dispatch(message)

        assert outcome == DispatchOutcome.COMPLETED
        embed = message.channel.send.await_args.kwargs["embed"]
        assert isinstance(embed, discord.Embed)
        assert "Use `!` as a prefix" in embed.description
        assert [field.name for field in embed.fields] == ["!help", "!price"]

    @pytest.mark.asyncio
    async def test_command_details(self, container):
        message = make_message("!help price")

        await container.dispatcher.dispatch(message)

        embed = message.channel.send.await_args.kwargs["embed"]
        assert embed.title == "!price"
        values = {field.name: field.value for field in embed.fields}
        assert values["Usage"] == "`!price`"
        assert values["Rate limit bucket"] == "complicated"

    @pytest.mark.asyncio
    async def test_prefixed_argument_is_accepted(self, container):
        message = make_message("!help !price")

        await container.dispatcher.dispatch(message)

        assert message.channel.send.await_args.kwargs["embed"].title == "!price"

    @pytest.mark.asyncio
    async def test_unknown_command_with_suggestion(self, container):
        message = make_message("!help prcie")

        await container.dispatcher.dispatch(message)

        message.channel.send.assert_awaited_once_with("Could not find: `prcie`. Did you mean `price`?")

    @pytest.mark.asyncio
    async def test_unknown_command_without_suggestion(self, container):
        message = make_message("!help leaderboard")

        await container.dispatcher.dispatch(message)

        message.channel.send.assert_awaited_once_with("Could not find: `leaderboard`.")

    @pytest.mark.asyncio
    async def test_help_is_not_rate_limited(self, container):
        outcomes = [await container.dispatcher.dispatch(make_message("!help")) for _ in range(5)]

        assert outcomes == [DispatchOutcome.COMPLETED] * 5

    @pytest.mark.asyncio
    async def test_send_failure_is_handler_error(self, container):
        message = make_message("!help")
        message.channel.send = AsyncMock(side_effect=discord.HTTPException(MagicMock(), "nope"))

        outcome = await container.dispatcher.dispatch(message)

        assert outcome == DispatchOutcome.FAILED
