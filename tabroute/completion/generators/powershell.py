"""PowerShell completion script generator."""

from __future__ import annotations

from ...constants import DEFAULT_RESERVED_COMMAND
from .common import function_name, load_template, render

__all__ = ["generate_powershell"]


def _quote(word: str) -> str:
    return "'" + word.replace("'", "''") + "'"


def generate_powershell(
    commands: list[str],
    options: list[str],
    app_name: str,
    *,
    mode: str = "static",
    reserved_command: str = DEFAULT_RESERVED_COMMAND,
) -> str:
    """Generate PowerShell completion script content.

    Args:
        commands: Command words offered for the first position
        options: Option forms offered when the word starts with a dash
        app_name: Program name the completion is registered for
        mode: "static" embeds the lists, "dynamic" calls back into the program
        reserved_command: Callback sub-command used by the dynamic script

    Returns:
        The PowerShell completion script content
    """
    return render(
        load_template("powershell", mode),
        APP_NAME=app_name,
        FUNC_NAME=function_name(app_name),
        COMMANDS=", ".join(_quote(c) for c in commands),
        OPTIONS=", ".join(_quote(o) for o in options),
        RESERVED_COMMAND=reserved_command,
    )
