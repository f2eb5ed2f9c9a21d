"""
Application services layer.

Services hold the bot's state (command registry, counters) and talk to the
outside world (price API). Command modules call into them.
"""

from services.result import Result

__all__ = ["Result"]
