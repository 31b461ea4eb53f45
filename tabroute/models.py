"""Errors, enums and exit codes shared across tabroute."""

from enum import IntEnum, IntFlag, StrEnum

__all__ = [
    "CompilationError",
    "CompletionDirective",
    "CompletionKind",
    "ExitCode",
    "TabrouteError",
    "TemplateMissingError",
    "UnknownShellError",
]


class TabrouteError(Exception):
    """Base class for every error raised by tabroute."""


class CompilationError(TabrouteError):
    """A route pattern could not be compiled.

    Attributes:
        pattern: The full pattern text
        token: The offending token (may be empty when the whole pattern is at fault)
        position: Character offset of the token in the pattern, -1 if unknown
        reason: Human-readable explanation
        suggestion: Optional corrected spelling of the token
    """

    def __init__(self, pattern: str, token: str, reason: str, position: int = -1, suggestion: str | None = None) -> None:
        self.pattern = pattern
        self.token = token
        self.reason = reason
        self.position = position
        self.suggestion = suggestion
        message = f"{reason}: {token!r} in pattern {pattern!r}" if token else f"{reason} in pattern {pattern!r}"
        if suggestion:
            message += f" (did you mean {suggestion!r}?)"
        super().__init__(message)


class TemplateMissingError(TabrouteError):
    """A shell template is absent from the package: no script can be produced."""

    def __init__(self, template_name: str) -> None:
        self.template_name = template_name
        super().__init__(f"Template not found: {template_name}")


class UnknownShellError(TabrouteError):
    """The requested shell has no completion support."""

    def __init__(self, shell: str, supported: tuple[str, ...]) -> None:
        self.shell = shell
        self.supported = supported
        super().__init__(f"Unsupported shell: {shell}. Supported: {', '.join(supported)}")


class CompletionKind(StrEnum):
    """Kind of a completion candidate.

    Declaration order is the display priority: options come last so that
    positional and enum suggestions surface first.
    """

    COMMAND = "command"
    ENUM = "enum"
    PARAMETER = "parameter"
    FILE = "file"
    DIRECTORY = "directory"
    CUSTOM = "custom"
    OPTION = "option"

    @property
    def priority(self) -> int:
        """Sort rank of the kind, lower comes first."""
        return _KIND_PRIORITY[self]


_KIND_PRIORITY = {kind: rank for rank, kind in enumerate(CompletionKind)}


class CompletionDirective(IntFlag):
    """Bit flags sent on the last line of a dynamic completion answer."""

    DEFAULT = 0
    ERROR = 1
    NO_SPACE = 2
    NO_FILE_COMP = 4
    FILTER_FILE_EXT = 8
    FILTER_DIRS = 16
    KEEP_ORDER = 32

    def describe(self) -> str:
        """Return the CamelCase names of the set flags, e.g. "NoFileComp"."""
        if not self:
            return "Default"
        names = [flag.name for flag in CompletionDirective if flag and flag in self and flag.name]
        return "|".join("".join(part.capitalize() for part in name.split("_")) for name in names)


class ExitCode(IntEnum):
    """Exit codes returned by App.run()."""

    SUCCESS = 0
    USAGE_ERROR = 1  # No arguments, bad arguments to a reserved route
    NO_ROUTE = 2  # No route matches the arguments
    COMMAND_ERROR = 4  # The handler raised
