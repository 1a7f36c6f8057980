"""Number parsing, command tokenizing, and number formatting."""

from __future__ import annotations

import locale
import math
from dataclasses import dataclass

from . import config

EXIT_COMMANDS = frozenset({"exit", "quit"})
HELP_COMMANDS = frozenset({"help"})


@dataclass(frozen=True)
class CommandTokens:
    """A raw input line split into its keyword and argument text."""

    keyword: str
    argument_text: str | None = None


def _to_float(text: str) -> float | None:
    # float() also accepts digit-group underscores and non-ASCII digits
    if not text or "_" in text or not text.isascii():
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_number(text: str) -> float | None:
    """Interpret text as a real number, accepting comma or dot as decimal separator.

    Three conventions are tried in order: the active LC_NUMERIC decimal point,
    a plain dot separator, and finally the text with every comma rewritten to
    a dot. Grouping separators are never accepted, so "12,5" is always 12.5.

    Args:
        text: Candidate numeric text (surrounding whitespace is ignored)

    Returns:
        The parsed finite value, or None if the text is not a number
    """
    s = text.strip()
    if not s:
        return None

    decimal_point = locale.localeconv()["decimal_point"]
    if decimal_point and decimal_point != ".":
        value = _to_float(s.replace(decimal_point, "."))
        if value is not None:
            return value

    value = _to_float(s)
    if value is not None:
        return value

    return _to_float(s.replace(",", "."))


def tokenize_command(line: str) -> CommandTokens:
    """Split a non-empty input line into a lowercased keyword and argument text.

    Remaining tokens after the keyword are rejoined with single spaces.

    Examples:
        >>> tokenize_command("M+")
        CommandTokens(keyword='m+', argument_text=None)
        >>> tokenize_command("*   2,5")
        CommandTokens(keyword='*', argument_text='2,5')
    """
    parts = line.split()
    if not parts:
        return CommandTokens(keyword="")
    keyword = parts[0].lower()
    if len(parts) == 1:
        return CommandTokens(keyword=keyword)
    return CommandTokens(keyword=keyword, argument_text=" ".join(parts[1:]))


def format_number(val: float, precision: int | None = None) -> str:
    """Format a register value compactly, without trailing zeros.

    Args:
        val: Value to format
        precision: Number of significant digits (default: config.OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if val == 0:
        # also folds negative zero
        return "0"
    if precision is None:
        precision = config.OUTPUT_PRECISION
    fmt = "{:." + str(int(precision)) + "g}"
    return fmt.format(float(val))
