"""
Prefix command dispatcher.

Turns an inbound message into at most one command run:

    prefix match -> count attempt -> before hook -> registry lookup
    -> bucket admission -> handler -> after hook

Each message is dispatched in its own asyncio task (discord.py runs every
event handler that way), so invocations from different messages interleave
while the hooks of one invocation always run in order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from domain.models.bucket import Bucket
from domain.models.command import Command, CommandContext, Invocation
from domain.models.dispatch import DispatchError, DispatchOutcome
from services.command_counter import CommandCounter
from services.command_registry import CommandRegistry
from services.dispatch_observer import DispatchObserver
from utils.command_parser import parse_command
from utils.rate_limiter import Admission, RateLimiter

logger = logging.getLogger("price_bot.services.dispatcher")

# asyncio may fire a timer up to one clock tick early
_RETRY_MARGIN_SECONDS = 0.05


class Dispatcher:
    def __init__(
        self,
        registry: CommandRegistry,
        limiter: RateLimiter,
        observer: DispatchObserver,
        *,
        counter: CommandCounter | None = None,
        prefix: str = "!",
        delimiters: tuple[str, ...] = (", ", " "),
        ignore_bots: bool = True,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.registry = registry
        self.limiter = limiter
        self.observer = observer
        self.counter = counter or CommandCounter()
        self.prefix = prefix
        self.delimiters = delimiters
        self.ignore_bots = ignore_bots
        self._sleep = sleep
        self._pending: set[asyncio.Task] = set()

    @property
    def pending_retries(self) -> int:
        return len(self._pending)

    async def dispatch(self, message: Any) -> DispatchOutcome:
        """
        Dispatch one inbound message.

        Never raises for hook, handler or platform failures; those are logged
        and reflected in the returned outcome.
        """
        if self.ignore_bots and getattr(message.author, "bot", False):
            return DispatchOutcome.NOT_A_COMMAND

        parsed = parse_command(message.content or "", self.prefix, self.delimiters)
        if parsed is None:
            await self._call_hook("normal_message", self.observer.normal_message, message)
            return DispatchOutcome.NOT_A_COMMAND

        self.counter.increment(parsed.name)
        proceed = await self._call_hook(
            "before", self.observer.before, message, parsed.name, default=True
        )
        if not proceed:
            logger.debug(f"Command '{parsed.name}' suppressed by before hook")
            return DispatchOutcome.SUPPRESSED

        command = self.registry.get(parsed.name)
        if command is None:
            await self._call_hook("unknown_command", self.observer.unknown_command, message, parsed.name)
            return DispatchOutcome.UNKNOWN_COMMAND

        ctx = CommandContext(message=message, invocation=Invocation.from_message(message, parsed))

        bucket = self.registry.get_bucket(command.bucket) if command.bucket else None
        if bucket is not None:
            scope_key = bucket.scope.key_for(ctx.invocation)
            admission = self.limiter.check_and_consume(bucket, scope_key)
            if not admission.allowed:
                await self._reject(ctx, command, bucket, scope_key, admission)
                return DispatchOutcome.RATE_LIMITED

        return await self._execute(ctx, command)

    async def wait_pending(self) -> None:
        """Wait for every queued retry to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _execute(self, ctx: CommandContext, command: Command) -> DispatchOutcome:
        error: DispatchError | None = None
        try:
            result = await command.handler(ctx)
        except Exception as exc:
            logger.error(f"Handler for '{command.name}' raised: {exc}", exc_info=True)
            error = DispatchError.from_exception(exc)
        else:
            if result is not None and not result.success:
                error = DispatchError.from_failure(result.error, result.error_code)

        await self._call_hook("after", self.observer.after, ctx.message, command.name, error)
        return DispatchOutcome.COMPLETED if error is None else DispatchOutcome.FAILED

    async def _reject(
        self,
        ctx: CommandContext,
        command: Command,
        bucket: Bucket,
        scope_key: int,
        admission: Admission,
    ) -> None:
        error = DispatchError.rate_limited(
            is_first_try=admission.is_first_try,
            retry_after=admission.retry_after,
            queued=admission.queued,
        )
        await self._call_hook("dispatch_error", self.observer.dispatch_error, ctx.message, error, command.name)
        if bucket.delay_action is not None:
            await self._call_hook("delay_action", bucket.delay_action, ctx.message)
        if admission.queued:
            self._schedule_retry(ctx, command, bucket, scope_key, admission.retry_after)

    def _schedule_retry(
        self,
        ctx: CommandContext,
        command: Command,
        bucket: Bucket,
        scope_key: int,
        delay: float,
    ) -> None:
        task = asyncio.create_task(self._retry_later(ctx, command, bucket, scope_key, delay))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug(f"Queued '{command.name}' for scope key {scope_key}, retry in {delay:.1f}s")

    async def _retry_later(
        self,
        ctx: CommandContext,
        command: Command,
        bucket: Bucket,
        scope_key: int,
        delay: float,
    ) -> None:
        try:
            await self._sleep(delay + _RETRY_MARGIN_SECONDS)
        except asyncio.CancelledError:
            self.limiter.release_waiter(bucket, scope_key)
            raise

        admission = self.limiter.check_and_consume(bucket, scope_key, waiting=True)
        if not admission.allowed:
            logger.info(f"Dropped queued '{command.name}' for scope key {scope_key}: still rate limited")
            return
        await self._execute(ctx, command)

    async def _call_hook(self, name: str, hook: Callable[..., Awaitable[Any]], *args: Any, default: Any = None) -> Any:
        try:
            return await hook(*args)
        except Exception as exc:
            logger.warning(f"Dispatch hook '{name}' failed: {exc}", exc_info=True)
            return default
