"""
Prefix command parsing.
"""

from __future__ import annotations

import re

from domain.models.command import ParsedCommand


def _delimiter_pattern(delimiters: tuple[str, ...]) -> re.Pattern[str]:
    # Longest first so ", " wins over " " when both match
    ordered = sorted(delimiters, key=len, reverse=True)
    return re.compile("|".join(re.escape(d) for d in ordered))


def parse_command(
    content: str,
    prefix: str,
    delimiters: tuple[str, ...] = (", ", " "),
) -> ParsedCommand | None:
    """
    Split a prefixed message into a command name and arguments.

    Returns None when the content does not start with the prefix. Whitespace
    between the prefix and the name is allowed, and each argument is trimmed;
    empty arguments are dropped.

    Examples:
        parse_command("!price", "!")            -> ParsedCommand("price", ())
        parse_command("! help price", "!")      -> ParsedCommand("help", ("price",))
        parse_command("!say a, b c", "!")       -> ParsedCommand("say", ("a", "b", "c"))
        parse_command("hello", "!")             -> None
    """
    if not prefix or not content.startswith(prefix):
        return None

    rest = content[len(prefix):].strip()
    if not rest:
        return ParsedCommand(name="")

    pieces = [piece.strip() for piece in _delimiter_pattern(delimiters).split(rest)]
    return ParsedCommand(name=pieces[0], args=tuple(piece for piece in pieces[1:] if piece))
