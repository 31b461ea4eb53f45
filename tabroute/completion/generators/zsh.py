"""Zsh completion script generator."""

from __future__ import annotations

from ...constants import DEFAULT_RESERVED_COMMAND
from .common import function_name, load_template, render

__all__ = ["generate_zsh"]


def _quote(word: str) -> str:
    """Single-quote a `_describe` entry, escaping the ``:`` separator."""
    word = word.replace(":", "\\:").replace("'", "'\\''")
    return f"'{word}'"


def generate_zsh(
    commands: list[str],
    options: list[str],
    app_name: str,
    *,
    mode: str = "static",
    reserved_command: str = DEFAULT_RESERVED_COMMAND,
) -> str:
    """Generate zsh completion script content.

    Args:
        commands: Command words offered for the first position
        options: Option forms offered when the word starts with a dash
        app_name: Program name the completion is registered for
        mode: "static" embeds the lists, "dynamic" calls back into the program
        reserved_command: Callback sub-command used by the dynamic script

    Returns:
        The zsh completion script content
    """
    return render(
        load_template("zsh", mode),
        APP_NAME=app_name,
        FUNC_NAME=function_name(app_name),
        COMMANDS=" ".join(_quote(c) for c in commands),
        OPTIONS=" ".join(_quote(o) for o in options),
        RESERVED_COMMAND=reserved_command,
    )
