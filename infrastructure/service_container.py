"""
Service container for dependency injection and initialization.

Builds the rate limiter, command registry, buckets, price service and
dispatcher in one place. Command cogs register their handlers with the
registry when bot.py loads them as extensions.

Usage:
    container = ServiceContainer(ServiceConfig(etherscan_api_key=secrets.etherscan_api_key))
    container.initialize()
    container.expose_to_bot(bot)
    await bot.load_extension("commands.price")

    outcome = await container.dispatcher.dispatch(message)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from domain.models.bucket import COMPLICATED_BUCKET, EMOJI_BUCKET, Bucket, BucketScope
from services.command_counter import CommandCounter
from services.command_registry import CommandRegistry
from services.dispatch_observer import DispatchObserver, LoggingDispatchObserver
from services.dispatcher import Dispatcher
from services.price_service import PriceService
from utils.message_safety import react_stopwatch
from utils.rate_limiter import RateLimiter

logger = logging.getLogger("price_bot.infrastructure.container")

@dataclass
class ServiceConfig:
    """Configuration for service initialization."""

    etherscan_api_key: str = ""
    etherscan_api_url: str = "https://api.etherscan.io/api"
    price_api_timeout_seconds: float = 10.0

    # Dispatch
    command_prefix: str = "!"
    command_delimiters: tuple[str, ...] = (", ", " ")
    ignore_bots: bool = True

    # "emoji" bucket: pacing only
    emoji_bucket_delay_seconds: float = 5.0

    # "complicated" bucket: used by !price
    complicated_bucket_limit: int = 2
    complicated_bucket_window_seconds: float = 30.0
    complicated_bucket_await_limit: int = 1


class ServiceContainer:
    """
    Central container for the bot's services.

    Everything is built once by initialize(); tests construct a fresh
    container (or pass their own observer) to get isolated state.
    """

    def __init__(self, config: ServiceConfig | None = None, observer: DispatchObserver | None = None):
        self.config = config or ServiceConfig()
        self._observer = observer
        self._initialized = False

        self._limiter: RateLimiter | None = None
        self._counter: CommandCounter | None = None
        self._registry: CommandRegistry | None = None
        self._price_service: PriceService | None = None
        self._dispatcher: Dispatcher | None = None

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """
        Build every service in dependency order.

        This method is idempotent - calling it multiple times has no effect.
        """
        if self._initialized:
            logger.debug("ServiceContainer already initialized, skipping")
            return

        logger.info("Initializing ServiceContainer...")

        self._limiter = RateLimiter()
        self._counter = CommandCounter()
        self._registry = CommandRegistry()
        self._init_buckets()

        self._price_service = PriceService(
            api_key=self.config.etherscan_api_key,
            base_url=self.config.etherscan_api_url,
            timeout_seconds=self.config.price_api_timeout_seconds,
        )

        self._dispatcher = Dispatcher(
            self._registry,
            self._limiter,
            self._observer or LoggingDispatchObserver(),
            counter=self._counter,
            prefix=self.config.command_prefix,
            delimiters=self.config.command_delimiters,
            ignore_bots=self.config.ignore_bots,
        )

        self._initialized = True
        logger.info("ServiceContainer initialization complete")

    def _init_buckets(self) -> None:
        # Per-user pacing for commands that opt in; the built-in commands do not
        self._registry.add_bucket(
            Bucket(
                name=EMOJI_BUCKET,
                delay=self.config.emoji_bucket_delay_seconds,
                scope=BucketScope.USER,
            )
        )
        self._registry.add_bucket(
            Bucket(
                name=COMPLICATED_BUCKET,
                limit=self.config.complicated_bucket_limit,
                window=self.config.complicated_bucket_window_seconds,
                scope=BucketScope.CHANNEL,
                await_limit=self.config.complicated_bucket_await_limit,
                delay_action=react_stopwatch,
            )
        )

    def expose_to_bot(self, bot) -> None:
        """
        Expose the services command cogs need to a Discord bot object.

        Cog setup() functions read them back via bot.<service_name>.
        """
        bot.command_registry = self.registry
        bot.price_service = self.price_service
        bot.command_dispatcher = self.dispatcher

    def _require(self, service, name: str):
        if service is None:
            raise RuntimeError(f"ServiceContainer not initialized: {name} unavailable")
        return service

    @property
    def limiter(self) -> RateLimiter:
        return self._require(self._limiter, "limiter")

    @property
    def counter(self) -> CommandCounter:
        return self._require(self._counter, "counter")

    @property
    def registry(self) -> CommandRegistry:
        return self._require(self._registry, "registry")

    @property
    def price_service(self) -> PriceService:
        return self._require(self._price_service, "price_service")

    @property
    def dispatcher(self) -> Dispatcher:
        return self._require(self._dispatcher, "dispatcher")
