"""Tests for the ansi module."""

import os
from io import StringIO
from unittest.mock import patch

from tabroute.ansi import BOLD, DIM, RED, RESET, YELLOW, LogStyles, colorize, make_style, should_colorize


def test_colorize_single_code():
    """Test colorize with a single ANSI code."""
    assert colorize("hello", RED) == "\x1b[31mhello\x1b[0m"


def test_colorize_multiple_codes():
    assert colorize("hello", RED, BOLD) == "\x1b[31;1mhello\x1b[0m"


def test_colorize_no_codes():
    assert colorize("hello") == "hello"


def test_make_style():
    """Test make_style returns correct prefix and suffix."""
    prefix, suffix = make_style(YELLOW, DIM)
    assert prefix == "\x1b[33;2m"
    assert suffix == RESET


def test_make_style_no_codes():
    assert make_style() == ("", RESET)


def test_log_styles():
    assert LogStyles.CRITICAL == (RED, BOLD)


def test_should_colorize_respects_no_color():
    """Test that NO_COLOR environment variable disables colors."""
    with patch.dict(os.environ, {"NO_COLOR": "1", "FORCE_COLOR": "1"}, clear=False):
        assert should_colorize() is False


def test_should_colorize_respects_force_color():
    """Test that FORCE_COLOR environment variable forces colors."""
    env = {k: v for k, v in os.environ.items() if k != "NO_COLOR"}
    env["FORCE_COLOR"] = "1"
    with patch.dict(os.environ, env, clear=True):
        assert should_colorize(StringIO()) is True


def test_should_colorize_non_tty():
    """A stream that is not a terminal gets no colors."""
    env = {k: v for k, v in os.environ.items() if k not in ("NO_COLOR", "FORCE_COLOR")}
    with patch.dict(os.environ, env, clear=True):
        assert should_colorize(StringIO()) is False
