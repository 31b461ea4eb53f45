"""Completion settings: typed access over a TOML section plus env overrides."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .constants import COMPLETION_MODES, DEFAULT_RESERVED_COMMAND, SETTINGS_FILE
from .logging_setup import get_logger
from .models import TabrouteError

if TYPE_CHECKING:
    import logging
    from pathlib import Path

__all__ = [
    "BOOL_FALSE_STRINGS",
    "BOOL_STRINGS",
    "BOOL_TRUE_STRINGS",
    "CompletionSettings",
    "Configuration",
    "coerce_to_bool",
    "load_settings",
]

ConfigValueType = float | bool | str | list | dict

BOOL_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "enabled"})
BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})
BOOL_STRINGS = BOOL_TRUE_STRINGS | BOOL_FALSE_STRINGS

ENV_MODE = "TABROUTE_COMPLETION_MODE"
ENV_APP_NAME = "TABROUTE_APP_NAME"


def coerce_to_bool(value: ConfigValueType | None, default: bool = False) -> bool:
    """Coerce a value to boolean, handling loose typing.

    Args:
        value: The value to coerce
        default: Default value if value is None

    Returns:
        The boolean value

    Behavior:
        - None → default
        - Empty string → False
        - Explicit falsy strings ("false", "no", "off", "0", "disabled") → False
        - Any other non-empty string → True
        - Non-string values → bool(value)
    """
    if value is None:
        return default
    if isinstance(value, str):
        if not value.strip():
            return False
        return value.lower().strip() not in BOOL_FALSE_STRINGS
    return bool(value)


class Configuration(dict):
    """Dictionary wrapper providing typed access to one settings section."""

    def __init__(self, *args: Any, logger: logging.Logger, **kwargs: Any) -> None:  # noqa: ANN401
        """Initialize the configuration object.

        Args:
            *args: Arguments for dict
            logger: Logger instance to use for warnings
            **kwargs: Keyword arguments for dict
        """
        super().__init__(*args, **kwargs)
        self.log = logger

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Get a boolean value, see `coerce_to_bool`."""
        return coerce_to_bool(self.get(name), default)

    def get_str(self, name: str, default: str = "") -> str:
        """Get a string value.

        Args:
            name: The key name
            default: Default value if key is missing

        Returns:
            The string value
        """
        value = self.get(name)
        if value is None:
            return default
        return str(value)

    def get_choice(self, name: str, choices: tuple[str, ...], default: str) -> str:
        """Get a string restricted to `choices`, warning and falling back to `default` otherwise."""
        value = self.get_str(name, default).lower()
        if value not in choices:
            self.log.warning("Invalid value for %s: %s (expected one of %s)", name, value, ", ".join(choices))
            return default
        return value


@dataclass(slots=True)
class CompletionSettings:
    """Completion behaviour knobs.

    Attributes:
        mode: "static" or "dynamic"
        reserved_command: Name of the hidden sub-command the dynamic scripts call
        program_name_in_words: Whether the cursor index sent by the shell counts the program name
        app_name: Overrides the application name used in generated scripts
    """

    mode: str = "static"
    reserved_command: str = DEFAULT_RESERVED_COMMAND
    program_name_in_words: bool = True
    app_name: str | None = None


def _read_toml(path: Path, log: logging.Logger) -> dict[str, Any]:
    """Load a TOML document, an absent file gives an empty document."""
    if not path.exists():
        log.debug("No settings file at %s", path)
        return {}
    log.info("Loading %s", path)
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            log.critical("Problem reading %s: %s", path, e)
            raise TabrouteError(f"Invalid settings file {path}: {e}") from e


def load_settings(path: Path | None = None, environ: dict[str, str] | None = None) -> CompletionSettings:
    """Build the completion settings from the `[completion]` TOML section and the environment.

    Args:
        path: Settings file, defaults to `$XDG_CONFIG_HOME/tabroute/completion.toml`
        environ: Environment mapping, defaults to os.environ

    Returns:
        The settings, with defaults for anything not configured

    Raises:
        TabrouteError: If the file exists but is not valid TOML
    """
    log = get_logger("tabroute.config")
    env = os.environ if environ is None else environ
    document = _read_toml(path or SETTINGS_FILE, log)
    section = Configuration(document.get("completion", {}), logger=log)

    settings = CompletionSettings(
        mode=section.get_choice("mode", COMPLETION_MODES, "static"),
        reserved_command=section.get_str("reserved_command", DEFAULT_RESERVED_COMMAND) or DEFAULT_RESERVED_COMMAND,
        program_name_in_words=section.get_bool("program_name_in_words", default=True),
        app_name=section.get_str("app_name") or None,
    )

    env_mode = env.get(ENV_MODE, "").strip().lower()
    if env_mode:
        if env_mode in COMPLETION_MODES:
            settings.mode = env_mode
        else:
            log.warning("Ignoring %s=%s (expected one of %s)", ENV_MODE, env_mode, ", ".join(COMPLETION_MODES))
    if env.get(ENV_APP_NAME):
        settings.app_name = env[ENV_APP_NAME]
    return settings
