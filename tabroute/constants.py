"""Shared constants for tabroute."""

import os
from pathlib import Path

__all__ = [
    "COMPLETION_MODES",
    "DEFAULT_PATHS",
    "DEFAULT_RESERVED_COMMAND",
    "DIRECTORY_SENTINEL",
    "FILE_SENTINEL",
    "GENERATE_COMPLETION_OPTION",
    "INSTALL_COMPLETION_OPTION",
    "SETTINGS_FILE",
    "SHELL_ALIASES",
    "SPECIFICITY_CATCH_ALL",
    "SPECIFICITY_LITERAL",
    "SPECIFICITY_OPTIONAL_OPTION",
    "SPECIFICITY_OPTIONAL_PARAMETER",
    "SPECIFICITY_PARAMETER",
    "SPECIFICITY_REQUIRED_OPTION",
    "SUPPORTED_SHELLS",
]

# Supported shells for completion generation
SUPPORTED_SHELLS = ("bash", "zsh", "fish", "powershell")
SHELL_ALIASES = {"pwsh": "powershell"}

COMPLETION_MODES = ("static", "dynamic")

# Reserved routes registered by App.enable_*_completion()
DEFAULT_RESERVED_COMMAND = "__complete"
GENERATE_COMPLETION_OPTION = "--generate-completion"
INSTALL_COMPLETION_OPTION = "--install-completion"

# Candidates telling the shell to fall back on native path completion
FILE_SENTINEL = "<file>"
DIRECTORY_SENTINEL = "<directory>"

# Specificity contributions, summed per route
SPECIFICITY_LITERAL = 1000
SPECIFICITY_PARAMETER = 100
SPECIFICITY_OPTIONAL_PARAMETER = 50
SPECIFICITY_CATCH_ALL = 10
SPECIFICITY_REQUIRED_OPTION = 75
SPECIFICITY_OPTIONAL_OPTION = 25

# Default user-level completion paths, "{app}" is replaced by the application name
DEFAULT_PATHS = {
    "bash": "~/.local/share/bash-completion/completions/{app}",
    "zsh": "~/.zsh/completions/_{app}",
    "fish": "~/.config/fish/completions/{app}.fish",
    "powershell": "~/.config/powershell/completions/{app}.ps1",
}

_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
SETTINGS_FILE = _xdg_config_home / "tabroute" / "completion.toml"
