"""
Domain models - pure data structures for commands, dispatch and rate limiting.
"""

from domain.models.bucket import COMPLICATED_BUCKET, EMOJI_BUCKET, Bucket, BucketScope
from domain.models.command import Command, CommandContext, Invocation, ParsedCommand
from domain.models.dispatch import DispatchError, DispatchOutcome

__all__ = [
    "COMPLICATED_BUCKET",
    "EMOJI_BUCKET",
    "Bucket",
    "BucketScope",
    "Command",
    "CommandContext",
    "DispatchError",
    "DispatchOutcome",
    "Invocation",
    "ParsedCommand",
]
