"""tabroute - route patterns and shell tab-completion for command-line applications.

Compiles human-written route patterns (``deploy {env} --force``) into matchers
ranked by specificity, and drives static (pre-generated) and dynamic
(callback-based) completion for bash, zsh, fish and PowerShell.
"""

from .app import App
from .completion import CompletionCandidate, CompletionContext, CompletionProvider, CompletionSourceRegistry
from .models import CompilationError, CompletionDirective, CompletionKind, ExitCode, TabrouteError
from .routing import RouteRegistry, compile_pattern

__all__ = [
    "App",
    "CompilationError",
    "CompletionCandidate",
    "CompletionContext",
    "CompletionDirective",
    "CompletionKind",
    "CompletionProvider",
    "CompletionSourceRegistry",
    "ExitCode",
    "RouteRegistry",
    "TabrouteError",
    "compile_pattern",
]

__version__ = "0.4.0"
