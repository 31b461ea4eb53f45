"""Route segments and the compiled Route.

A segment is one of three frozen dataclasses:

    LiteralSegment:    ``deploy``             fixed word
    ParameterSegment:  ``{env}``, ``[tag]``, ``{*rest}``, ``{n:int}``
    OptionSegment:     ``--force,-f``, ``--env {var}*``

Code dispatching on a segment uses ``match`` with ``assert_never`` on the
fall-through so a new variant cannot be silently ignored.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, assert_never

from ..constants import (
    SPECIFICITY_CATCH_ALL,
    SPECIFICITY_LITERAL,
    SPECIFICITY_OPTIONAL_OPTION,
    SPECIFICITY_OPTIONAL_PARAMETER,
    SPECIFICITY_PARAMETER,
    SPECIFICITY_REQUIRED_OPTION,
)

__all__ = [
    "LiteralSegment",
    "OptionSegment",
    "ParameterSegment",
    "Route",
    "RouteMatch",
    "Segment",
    "segment_specificity",
]


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    """A fixed word, matched case-insensitively."""

    value: str

    def matches(self, word: str) -> bool:
        return self.value.lower() == word.lower()

    def accepts_prefix(self, prefix: str) -> bool:
        return self.value.lower().startswith(prefix.lower())


@dataclass(frozen=True, slots=True)
class ParameterSegment:
    """A named argument slot.

    Attributes:
        name: Parameter name, unique within a route
        type_constraint: Type name as written after ``:``, if any
        optional: The argument may be absent
        catch_all: Consumes every remaining argument
        resolved_type: Python type the constraint resolved to, None when unknown
        description: Help text given with ``{name|text}``
    """

    name: str
    type_constraint: str | None = None
    optional: bool = False
    catch_all: bool = False
    resolved_type: type | None = str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class OptionSegment:
    """A dashed switch, positionally unanchored.

    Attributes:
        long_form: ``--name`` form, without the dashes
        short_form: ``-n`` form, without the dash
        value: Parameter receiving the option's value, None for a boolean flag
        optional: The option may be absent
        repeatable: The option may be given several times
        description: Help text given with ``--name|text``
    """

    long_form: str | None = None
    short_form: str | None = None
    value: ParameterSegment | None = None
    optional: bool = True
    repeatable: bool = False
    description: str | None = None

    @property
    def expects_value(self) -> bool:
        return self.value is not None

    @property
    def value_param_name(self) -> str | None:
        return self.value.name if self.value else None

    @property
    def key(self) -> str:
        """Name under which the option's value is reported in a match."""
        if self.value is not None:
            return self.value.name
        return self.long_form or self.short_form or ""

    @property
    def forms(self) -> tuple[str, ...]:
        """Spellings accepted on the command line, long form first."""
        result = []
        if self.long_form:
            result.append(f"--{self.long_form}")
        if self.short_form:
            result.append(f"-{self.short_form}")
        return tuple(result)

    def matches(self, word: str) -> bool:
        return word in self.forms


Segment = LiteralSegment | ParameterSegment | OptionSegment


def segment_specificity(segment: Segment) -> int:
    """Return the contribution of one segment to its route's specificity."""
    match segment:
        case LiteralSegment():
            return SPECIFICITY_LITERAL
        case ParameterSegment(catch_all=True):
            return SPECIFICITY_CATCH_ALL
        case ParameterSegment(optional=True):
            return SPECIFICITY_OPTIONAL_PARAMETER
        case ParameterSegment():
            return SPECIFICITY_PARAMETER
        case OptionSegment(optional=True):
            return SPECIFICITY_OPTIONAL_OPTION
        case OptionSegment():
            return SPECIFICITY_REQUIRED_OPTION
        case _:
            assert_never(segment)


@dataclass(frozen=True, slots=True)
class Route:
    """A compiled route pattern.

    Created by `compile_pattern`, never mutated afterwards.
    """

    pattern: str
    segments: tuple[Segment, ...]
    specificity: int
    handler: Callable[..., Any] | None = None
    description: str | None = None
    index: int = field(default=-1, compare=False)

    @property
    def positional(self) -> tuple[LiteralSegment | ParameterSegment, ...]:
        """Literal and parameter segments, in order."""
        return tuple(seg for seg in self.segments if not isinstance(seg, OptionSegment))

    @property
    def options(self) -> tuple[OptionSegment, ...]:
        return tuple(seg for seg in self.segments if isinstance(seg, OptionSegment))

    @property
    def leading_literal(self) -> str | None:
        """Value of the first segment when it is a literal."""
        if self.segments and isinstance(self.segments[0], LiteralSegment):
            return self.segments[0].value
        return None

    def find_option(self, word: str) -> OptionSegment | None:
        """Return the option spelled `word`, if the route declares one."""
        for option in self.options:
            if option.matches(word):
                return option
        return None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    values: dict[str, Any]
