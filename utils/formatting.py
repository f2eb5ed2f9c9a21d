"""
User-facing message text.
"""

STOPWATCH_EMOJI = "\u23f1"  # stopwatch

GENERIC_FAILURE_MESSAGE = "Something went wrong"


def format_retry_message(retry_after_seconds: int) -> str:
    return f"Try this again in {retry_after_seconds} seconds."


def format_eth_price(price: str) -> str:
    return f"The current price of ETH is ${price}"
