"""Data models for shell completion.

Contains the candidate and context structures shared by the static provider,
the dynamic protocol and the line-editor tokenizer.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..models import CompletionKind
from ..routing.segments import Route

__all__ = [
    "CompletionCandidate",
    "CompletionContext",
    "DetectedParameter",
]


@dataclass(frozen=True, slots=True)
class CompletionCandidate:
    """One suggestion offered to the shell."""

    value: str
    description: str | None = None
    kind: CompletionKind = CompletionKind.PARAMETER

    def to_line(self) -> str:
        """Render as ``value`` or ``value<TAB>description`` for the dynamic protocol."""
        if self.description:
            return f"{self.value}\t{self.description}"
        return self.value


@dataclass(frozen=True, slots=True)
class CompletionContext:
    """What the user typed when completion was requested.

    Attributes:
        args: Typed words, program name excluded
        cursor_position: Index in `args` of the word being completed
        trailing_space: The line ends with whitespace, so a new word is started
        routes: Routes to complete against
    """

    args: tuple[str, ...]
    cursor_position: int
    trailing_space: bool = False
    routes: tuple[Route, ...] = field(default=(), repr=False)

    @classmethod
    def create(cls, args: Sequence[str], routes: Sequence[Route] = (), trailing_space: bool = False) -> CompletionContext:
        """Build a context where the cursor sits on the last word, or after it with a trailing space."""
        cursor = len(args) if trailing_space else max(len(args) - 1, 0)
        return cls(tuple(args), cursor, trailing_space, tuple(routes))

    @property
    def current_word(self) -> str:
        """The in-progress token, empty when a new word is started."""
        if 0 <= self.cursor_position < len(self.args):
            return self.args[self.cursor_position]
        return ""

    @property
    def previous_word(self) -> str | None:
        index = self.cursor_position - 1
        if 0 <= index < len(self.args):
            return self.args[index]
        return None


@dataclass(frozen=True, slots=True)
class DetectedParameter:
    """Parameter the cursor sits on, as found by `detect_parameter`.

    Attributes:
        name: Parameter name (or option value name)
        resolved_type: Type the parameter's constraint resolved to
        route: The route the detection came from
        option: Long or short form of the option owning the value, if any
    """

    name: str
    resolved_type: type | None
    route: Route
    option: str | None = None
