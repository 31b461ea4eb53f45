"""CLI handlers for shell completion commands.

Provides the functions behind the ``--generate-completion`` and
``--install-completion`` routes registered by the application.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import questionary
from questionary import Choice

from ..constants import DEFAULT_PATHS, SUPPORTED_SHELLS
from ..models import TabrouteError, UnknownShellError
from .generators import generate_script, normalize_shell

if TYPE_CHECKING:
    from ..app import App

__all__ = [
    "choose_shell",
    "detect_shell",
    "get_default_path",
    "handle_compgen",
    "handle_install",
]


def get_default_path(shell: str, app_name: str) -> str:
    """Get the default user-level completion path for a shell.

    Args:
        shell: Shell type ("bash", "zsh", "fish" or "powershell")
        app_name: Application name, part of the file name

    Returns:
        Expanded absolute path to the default completion file
    """
    return str(Path(DEFAULT_PATHS[shell].format(app=app_name)).expanduser())


def _get_success_message(shell: str, output_path: str, used_default: bool) -> str:
    """Generate a friendly success message after installing completions.

    Args:
        shell: Shell type
        output_path: Path where completions were written
        used_default: Whether the default path was used

    Returns:
        User-friendly success message
    """
    display_path = output_path.replace(str(Path.home()), "~")

    if not used_default:
        return f"Completions written to {display_path}"

    if shell == "bash":
        return f"Completions installed to {display_path}\nReload your shell or run: source ~/.bashrc"

    if shell == "zsh":
        return (
            f"Completions installed to {display_path}\n"
            "Ensure ~/.zsh/completions is in your fpath. Add to ~/.zshrc:\n"
            "  fpath=(~/.zsh/completions $fpath)\n"
            "  autoload -Uz compinit && compinit\n"
            "Then reload your shell."
        )

    if shell == "fish":
        return f"Completions installed to {display_path}\nReload your shell or run: source ~/.config/fish/config.fish"

    if shell == "powershell":
        return f"Completions installed to {display_path}\nAdd to your $PROFILE:\n  . {display_path}"

    return f"Completions written to {display_path}"


def _parse_compgen_args(args: str) -> tuple[bool, str, str | None]:
    """Parse and validate compgen arguments.

    Args:
        args: Arguments after the option (e.g., "zsh" or "zsh default")

    Returns:
        Tuple of (success, shell_or_error, path_arg):
        - On success: (True, shell, path_arg or None)
        - On failure: (False, error_message, None)
    """
    parts = args.split(None, 1)
    if not parts:
        shells = "|".join(SUPPORTED_SHELLS)
        return (False, f"Usage: --generate-completion <{shells}> [default|path]", None)

    try:
        shell = normalize_shell(parts[0])
    except UnknownShellError as e:
        return (False, str(e), None)

    path_arg = parts[1].strip() if len(parts) > 1 else None
    if path_arg is not None and path_arg != "default" and not path_arg.startswith(("/", "~")):
        return (False, "Relative paths not supported. Use absolute path, ~/path, or 'default'.", None)

    return (True, shell, path_arg)


def _write_script(app: App, shell: str, content: str, path_arg: str) -> tuple[bool, str]:
    if path_arg == "default":
        output_path = get_default_path(shell, app.app_name)
        used_default = True
    else:
        output_path = str(Path(path_arg).expanduser())
        used_default = False

    app.log.debug("Writing completions to: %s", output_path)

    try:
        parent_dir = Path(output_path).parent
        parent_dir.mkdir(parents=True, exist_ok=True)
        Path(output_path).write_text(content, encoding="utf-8")
    except OSError as e:
        return (False, f"Failed to write completion file: {e}")

    return (True, _get_success_message(shell, output_path, used_default))


def handle_compgen(app: App, args: str) -> tuple[bool, str]:
    """Handle script generation with path semantics.

    Args:
        app: The application whose routes are completed
        args: Shell name, optionally followed by "default" or a path

    Returns:
        Tuple of (success, result):
        - No path arg: result is the script content
        - With path arg: result is success/error message
    """
    success, shell_or_error, path_arg = _parse_compgen_args(args)
    if not success:
        return (False, shell_or_error)

    shell = shell_or_error

    try:
        content = generate_script(
            shell,
            app.completion_routes(),
            app.app_name,
            mode=app.settings.mode,
            reserved_command=app.settings.reserved_command,
        )
    except (TabrouteError, ValueError) as e:
        return (False, f"Failed to generate completions: {e}")

    if path_arg is None:
        return (True, content)
    return _write_script(app, shell, content, path_arg)


def detect_shell(environ: dict[str, str] | None = None) -> str | None:
    """Guess the user's shell from ``$SHELL`` (or PowerShell's module path)."""
    env = os.environ if environ is None else environ
    name = Path(env.get("SHELL", "")).name.lower()
    if not name and env.get("PSModulePath"):
        name = "powershell"
    try:
        return normalize_shell(name)
    except UnknownShellError:
        return None


def choose_shell() -> str | None:
    """Ask the user to pick a shell, None if they cancel or stdin is not a terminal."""
    if not sys.stdin.isatty():
        return None
    return questionary.select(
        "Which shell should completions be installed for?",
        choices=[Choice(title=shell, value=shell) for shell in SUPPORTED_SHELLS],
    ).ask()


def handle_install(app: App, shell: str | None = None, dry_run: bool = False) -> tuple[bool, str]:
    """Install the completion script at the shell's default location.

    Args:
        app: The application whose routes are completed
        shell: Target shell, detected (or asked) when not given
        dry_run: Only report what would be written

    Returns:
        Tuple of (success, message)
    """
    shell = shell or detect_shell() or choose_shell()
    if not shell:
        return (False, "Could not detect your shell. Pass it explicitly: --install-completion <shell>")
    if dry_run:
        success, shell_or_error, _ = _parse_compgen_args(shell)
        if not success:
            return (False, shell_or_error)
        return (True, f"Would write {shell_or_error} completions to {get_default_path(shell_or_error, app.app_name)}")
    return handle_compgen(app, f"{shell} default")
