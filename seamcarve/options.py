"""Command-line option lookup in the ``-flag value`` style used by the carving tools."""

from __future__ import annotations

import re
from collections.abc import Sequence

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _lookup(args: Sequence[str], name: str) -> str | None:
    """Return the value that follows ``name``, scanning pairs from the end."""
    for i in range(len(args) - 2, -1, -2):
        if args[i] == name:
            return args[i + 1]
    return None


def _leading_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _leading_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def option_string(args: Sequence[str], name: str, default: str | None) -> str | None:
    """Return the string given after ``name``, or ``default`` when absent.

    Arguments are inspected in pairs counted back from the end, so the last
    occurrence of an option wins.
    """
    value = _lookup(args, name)
    return default if value is None else value


def option_int(args: Sequence[str], name: str, default: int) -> int:
    """Return the integer given after ``name``; unparsable text reads as 0."""
    value = _lookup(args, name)
    return default if value is None else _leading_int(value)


def option_float(args: Sequence[str], name: str, default: float) -> float:
    """Return the float given after ``name``; unparsable text reads as 0.0."""
    value = _lookup(args, name)
    return default if value is None else _leading_float(value)


def usage(program: str) -> str:
    """Return the help text for the seam carving commands."""
    return "\n".join(
        [
            f"Usage: {program} OPTIONS",
            "",
            "OPTIONS:",
            "\t-f <input_filename> (required)",
            "\t-w <width> (required)",
            "\t-h <height> (required)",
            "\t-s <num_of_seams> (required)",
            "\t-n <num_threads>",
            "",
        ]
    )