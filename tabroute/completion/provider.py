"""Static completion provider.

Computes candidates purely from the compiled routes: command literals,
options, enum values and file/directory sentinels. Used directly by line
editors and as the fallback source of the dynamic protocol.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from ..constants import DIRECTORY_SENTINEL, FILE_SENTINEL
from ..logging_setup import get_logger
from ..models import CompletionKind
from ..routing.converters import DirectoryPath, FilePath, TypeConverterRegistry, default_converters
from ..routing.segments import LiteralSegment, ParameterSegment, Route
from .models import CompletionCandidate, CompletionContext
from .walker import walk_route

__all__ = ["CompletionProvider", "rank_candidates"]

log = get_logger("tabroute.completion")


def rank_candidates(candidates: Iterable[CompletionCandidate]) -> list[CompletionCandidate]:
    """Deduplicate by value (first occurrence wins), then sort by kind priority and value."""
    unique: dict[str, CompletionCandidate] = {}
    for candidate in candidates:
        unique.setdefault(candidate.value, candidate)
    return sorted(unique.values(), key=lambda c: (c.kind.priority, c.value))


def _starts_with(value: str, prefix: str) -> bool:
    return value.lower().startswith(prefix.lower())


class CompletionProvider:
    """Computes completion candidates for a context from its routes."""

    def __init__(self, converters: TypeConverterRegistry | None = None) -> None:
        self.converters = converters or default_converters()

    def candidates(self, context: CompletionContext) -> list[CompletionCandidate]:
        """Return ranked, deduplicated candidates for `context`.

        Never raises: a route that fails to walk contributes nothing.
        """
        if len(context.args) <= 1 and not self._first_word_finished(context):
            partial = context.args[0] if context.args else ""
            return rank_candidates(self._command_candidates(context.routes, partial))

        results: list[CompletionCandidate] = []
        for route in context.routes:
            try:
                results.extend(self._route_candidates(route, context))
            except Exception:  # noqa: BLE001
                log.debug("Skipping route %r during completion", route.pattern, exc_info=True)
        return rank_candidates(results)

    @staticmethod
    def _first_word_finished(context: CompletionContext) -> bool:
        """True when a single word is typed, followed by a space, and is a known command."""
        if len(context.args) != 1 or not context.trailing_space:
            return False
        word = context.args[0].lower()
        return any(route.leading_literal and route.leading_literal.lower() == word for route in context.routes)

    @staticmethod
    def _command_candidates(routes: Iterable[Route], partial: str) -> list[CompletionCandidate]:
        return [
            CompletionCandidate(route.leading_literal, None, CompletionKind.COMMAND)
            for route in routes
            if route.leading_literal and _starts_with(route.leading_literal, partial)
        ]

    def _route_candidates(self, route: Route, context: CompletionContext) -> list[CompletionCandidate]:
        walk = walk_route(route, context)
        if walk is None:
            return []
        prefix = context.current_word
        if prefix.startswith("-"):
            return self._option_candidates(route, context)
        match walk.pending:
            case None:
                return []
            case LiteralSegment(value=value):
                return [CompletionCandidate(value, None, CompletionKind.COMMAND)] if _starts_with(value, prefix) else []
            case ParameterSegment() as param:
                return self.parameter_candidates(param, prefix)

    @staticmethod
    def _option_candidates(route: Route, context: CompletionContext) -> list[CompletionCandidate]:
        prefix = context.current_word
        typed = {word for index, word in enumerate(context.args) if index != context.cursor_position}
        results = []
        for option in route.options:
            if not option.repeatable and typed.intersection(option.forms):
                continue
            results.extend(
                CompletionCandidate(form, option.description, CompletionKind.OPTION)
                for form in option.forms
                if form.startswith(prefix)
            )
        return results

    def parameter_candidates(self, param: ParameterSegment, prefix: str = "") -> list[CompletionCandidate]:
        """Type-driven candidates for a parameter: enum values or a path sentinel."""
        target = param.resolved_type
        if target is None:
            return []
        if issubclass(target, FilePath):
            return [CompletionCandidate(FILE_SENTINEL, "File path", CompletionKind.FILE)]
        if issubclass(target, DirectoryPath):
            return [CompletionCandidate(DIRECTORY_SENTINEL, "Directory path", CompletionKind.DIRECTORY)]

        converter = self.converters.converter_for(param.type_constraint) if param.type_constraint else None
        values = converter.enumerate_values() if converter else ()
        if not values and issubclass(target, Enum):
            values = tuple(target.__members__)
        type_name = target.__name__ if issubclass(target, Enum) else None
        return [
            CompletionCandidate(value, f"{type_name}.{value}" if type_name else None, CompletionKind.ENUM)
            for value in values
            if _starts_with(value, prefix)
        ]
