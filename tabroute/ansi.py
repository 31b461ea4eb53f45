"""ANSI styling for diagnostics written to the terminal.

Completion diagnostics only ever go to stderr, so colors are decided from
stderr's TTY status, and the ``NO_COLOR`` / ``FORCE_COLOR`` conventions.
"""

import os
import sys
from typing import TextIO

__all__ = [
    "BOLD",
    "DIM",
    "RED",
    "RESET",
    "YELLOW",
    "LogStyles",
    "colorize",
    "make_style",
    "should_colorize",
]

_ESC = "\x1b["

RESET = f"{_ESC}0m"

BOLD = "1"
DIM = "2"

RED = "31"
YELLOW = "33"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether ANSI sequences may be written to `stream`.

    Args:
        stream: The output stream to check. Defaults to sys.stderr.

    Returns:
        False when NO_COLOR is set or the stream is not a terminal,
        True when FORCE_COLOR is set or the stream is a terminal.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


def colorize(text: str, *codes: str) -> str:
    """Wrap `text` with the given SGR codes, or return it unchanged without codes."""
    if not codes:
        return text
    return f"{_ESC}{';'.join(codes)}m{text}{RESET}"


def make_style(*codes: str) -> tuple[str, str]:
    """Build a (prefix, suffix) pair usable inside a logging format string."""
    if not codes:
        return ("", RESET)
    return (f"{_ESC}{';'.join(codes)}m", RESET)


class LogStyles:
    """Styles applied per log level."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)
