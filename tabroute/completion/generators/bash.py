"""Bash completion script generator."""

from __future__ import annotations

from ...constants import DEFAULT_RESERVED_COMMAND
from .common import function_name, load_template, render

__all__ = ["generate_bash"]


def _quote(word: str) -> str:
    """Escape a word for use inside a double-quoted bash string."""
    for char in ("\\", '"', "$", "`"):
        word = word.replace(char, "\\" + char)
    return word


def generate_bash(
    commands: list[str],
    options: list[str],
    app_name: str,
    *,
    mode: str = "static",
    reserved_command: str = DEFAULT_RESERVED_COMMAND,
) -> str:
    """Generate bash completion script content.

    Args:
        commands: Command words offered for the first position
        options: Option forms offered when the word starts with a dash
        app_name: Program name the completion is registered for
        mode: "static" embeds the lists, "dynamic" calls back into the program
        reserved_command: Callback sub-command used by the dynamic script

    Returns:
        The bash completion script content
    """
    return render(
        load_template("bash", mode),
        APP_NAME=app_name,
        FUNC_NAME=function_name(app_name),
        COMMANDS=" ".join(_quote(c) for c in commands),
        OPTIONS=" ".join(_quote(o) for o in options),
        RESERVED_COMMAND=reserved_command,
    )
