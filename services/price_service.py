"""
ETH price lookup against the Etherscan stats API.
"""

from __future__ import annotations

import asyncio
import logging

import requests

from services.error_codes import EXTERNAL_API_FAILURE
from services.result import Result

logger = logging.getLogger("price_bot.services.price")


class PriceService:
    """
    Fetches the current ETH/USD price.

    Expects a body shaped like {"result": {"ethusd": "2500.12"}} and returns the
    price string untouched so the reply shows exactly what the API reported.
    """

    def __init__(self, api_key: str, base_url: str, timeout_seconds: float = 10.0):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

    async def fetch_eth_price(self) -> Result[str]:
        # requests is blocking; keep it off the event loop
        return await asyncio.to_thread(self._fetch_eth_price_sync)

    def _fetch_eth_price_sync(self) -> Result[str]:
        params = {"module": "stats", "action": "ethprice", "apikey": self.api_key}
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            logger.warning(f"Price API request failed: {exc}")
            return Result.fail(f"Price API request failed: {exc}", code=EXTERNAL_API_FAILURE)

        if response.status_code != 200:
            logger.warning(f"Price API returned HTTP {response.status_code}")
            return Result.fail(f"Price API returned HTTP {response.status_code}", code=EXTERNAL_API_FAILURE)

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning(f"Price API returned invalid JSON: {exc}")
            return Result.fail("Price API returned invalid JSON", code=EXTERNAL_API_FAILURE)

        result = payload.get("result") if isinstance(payload, dict) else None
        price = result.get("ethusd") if isinstance(result, dict) else None
        if not isinstance(price, str) or not price:
            # Etherscan reports errors as {"status": "0", "result": "<message>"}
            logger.warning(f"Price API response has no result.ethusd: {payload!r}")
            return Result.fail("Price API response has no result.ethusd", code=EXTERNAL_API_FAILURE)

        return Result.ok(price)
