"""Debug flag shared by the logging setup.

``TABROUTE_DEBUG`` takes precedence over the generic ``DEBUG``. Either one set
to a false word ("0", "false", "no", "off") leaves debugging off. The flag can
be switched at runtime, e.g. by ``init_logger(force_debug=True)``.
"""

import os
from collections.abc import Mapping

__all__ = [
    "debug_from_env",
    "is_debug",
    "set_debug",
]

_ENV_VARS = ("TABROUTE_DEBUG", "DEBUG")
_OFF_WORDS = frozenset({"", "0", "false", "no", "off"})


def debug_from_env(environ: Mapping[str, str] = os.environ) -> bool:
    """Read the initial flag from the first debug variable that is set."""
    for name in _ENV_VARS:
        if name in environ:
            return environ[name].strip().lower() not in _OFF_WORDS
    return False


class _DebugState:
    value: bool = debug_from_env()


_debug_state = _DebugState()


def is_debug() -> bool:
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Enable or disable debug logging for loggers created afterwards."""
    _debug_state.value = value
