"""Fish completion script generator."""

from __future__ import annotations

from ...constants import DEFAULT_RESERVED_COMMAND
from .common import function_name, load_template, render

__all__ = ["generate_fish"]


def _quote(word: str) -> str:
    return '"' + word.replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$") + '"'


def _option_line(app_name: str, form: str) -> str:
    if form.startswith("--"):
        return f"complete -c {app_name} -l {_quote(form[2:])}"
    name = form[1:]
    # fish -s takes a single character, longer short forms are old-style options
    flag = "-s" if len(name) == 1 else "-o"
    return f"complete -c {app_name} {flag} {_quote(name)}"


def generate_fish(
    commands: list[str],
    options: list[str],
    app_name: str,
    *,
    mode: str = "static",
    reserved_command: str = DEFAULT_RESERVED_COMMAND,
) -> str:
    """Generate fish completion script content.

    Args:
        commands: Command words offered for the first position
        options: Option forms offered when the word starts with a dash
        app_name: Program name the completion is registered for
        mode: "static" embeds the lists, "dynamic" calls back into the program
        reserved_command: Callback sub-command used by the dynamic script

    Returns:
        The fish completion script content
    """
    command_lines = [f'complete -c {app_name} -n "__fish_use_subcommand" -a {_quote(c)}' for c in commands]
    option_lines = [_option_line(app_name, o) for o in options]
    return render(
        load_template("fish", mode),
        APP_NAME=app_name,
        FUNC_NAME=function_name(app_name),
        COMMANDS="\n".join(command_lines),
        OPTIONS="\n".join(option_lines),
        RESERVED_COMMAND=reserved_command,
    )
