"""Shell completion generators.

Provides generator functions for each supported shell, in static mode
(command and option lists embedded in the script) or dynamic mode (the
script calls back into the application at each Tab press).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from ...constants import COMPLETION_MODES, DEFAULT_RESERVED_COMMAND, SHELL_ALIASES, SUPPORTED_SHELLS
from ...models import UnknownShellError
from .bash import generate_bash
from .common import extract_commands, extract_options
from .fish import generate_fish
from .powershell import generate_powershell
from .zsh import generate_zsh

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ...routing.segments import Route

__all__ = [
    "GENERATORS",
    "extract_commands",
    "extract_options",
    "generate_bash",
    "generate_fish",
    "generate_powershell",
    "generate_script",
    "generate_zsh",
    "normalize_shell",
]


class ScriptGenerator(Protocol):
    def __call__(self, commands: list[str], options: list[str], app_name: str, *, mode: str = ..., reserved_command: str = ...) -> str: ...


GENERATORS: dict[str, ScriptGenerator] = {
    "bash": generate_bash,
    "zsh": generate_zsh,
    "fish": generate_fish,
    "powershell": generate_powershell,
}


def normalize_shell(shell: str) -> str:
    """Return the canonical shell name.

    Raises:
        UnknownShellError: If the shell is not supported
    """
    name = shell.strip().lower()
    name = SHELL_ALIASES.get(name, name)
    if name not in SUPPORTED_SHELLS:
        raise UnknownShellError(shell, SUPPORTED_SHELLS)
    return name


def generate_script(
    shell: str,
    routes: Iterable[Route],
    app_name: str,
    *,
    mode: str = "static",
    reserved_command: str = DEFAULT_RESERVED_COMMAND,
) -> str:
    """Render the completion script for one shell.

    Args:
        shell: bash, zsh, fish or powershell (pwsh accepted)
        routes: Routes to extract commands and options from
        app_name: Program name the completion is registered for
        mode: "static" or "dynamic"
        reserved_command: Callback sub-command used by dynamic scripts

    Returns:
        The script text

    Raises:
        UnknownShellError: If the shell is not supported
        TemplateMissingError: If the shell's template is not shipped
        ValueError: If the mode is unknown
    """
    if mode not in COMPLETION_MODES:
        raise ValueError(f"Unknown completion mode: {mode}. Supported: {', '.join(COMPLETION_MODES)}")
    name = normalize_shell(shell)
    routes = list(routes)
    return GENERATORS[name](
        extract_commands(routes),
        extract_options(routes),
        app_name,
        mode=mode,
        reserved_command=reserved_command,
    )
