"""Shell completion for tabroute applications.

This package provides:
- A static provider computing candidates from the compiled routes
- Pluggable completion sources and the dynamic ``__complete`` protocol
- Shell-specific script generators (bash, zsh, fish, powershell)
- Handlers for the ``--generate-completion`` and ``--install-completion`` routes
"""

from __future__ import annotations

from .dynamic import DynamicCompletionHandler, build_context, detect_parameter
from .generators import GENERATORS, generate_script
from .handlers import get_default_path, handle_compgen, handle_install
from .models import CompletionCandidate, CompletionContext, DetectedParameter
from .provider import CompletionProvider
from .sources import (
    CompletionSource,
    CompletionSourceRegistry,
    DefaultCompletionSource,
    EnumCompletionSource,
    StaticCompletionSource,
)
from .tokenizer import ParsedInput, parse_input

__all__ = [
    "GENERATORS",
    "CompletionCandidate",
    "CompletionContext",
    "CompletionProvider",
    "CompletionSource",
    "CompletionSourceRegistry",
    "DefaultCompletionSource",
    "DetectedParameter",
    "DynamicCompletionHandler",
    "EnumCompletionSource",
    "ParsedInput",
    "StaticCompletionSource",
    "build_context",
    "detect_parameter",
    "generate_script",
    "get_default_path",
    "handle_compgen",
    "handle_install",
    "parse_input",
]
