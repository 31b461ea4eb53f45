"""Route registry and argument matching.

Routes are added while the application is built, then the registry is frozen
and only read. Matching tries every route and keeps the most specific one;
on equal specificity the route registered first wins.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator, Sequence
from typing import Any

from .compiler import compile_pattern
from .converters import TypeConverterRegistry, default_converters
from .segments import LiteralSegment, OptionSegment, ParameterSegment, Route, RouteMatch

__all__ = ["RouteRegistry", "match_route"]


class _NoMatch(Exception):
    """Raised internally when a route does not accept the arguments."""


def _convert(param: ParameterSegment, text: str, converters: TypeConverterRegistry) -> Any:  # noqa: ANN401
    if not param.type_constraint:
        return text
    converter = converters.converter_for(param.type_constraint)
    if converter is None:
        return text
    try:
        return converter.convert(text)
    except ValueError as e:
        raise _NoMatch from e


def _initial_values(route: Route) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for segment in route.segments:
        match segment:
            case ParameterSegment(catch_all=True):
                values[segment.name] = []
            case ParameterSegment():
                values[segment.name] = None
            case OptionSegment(repeatable=True):
                values[segment.key] = []
            case OptionSegment(value=None):
                values[segment.key] = False
            case OptionSegment():
                values[segment.key] = None
    return values


def match_route(route: Route, args: Sequence[str], converters: TypeConverterRegistry | None = None) -> RouteMatch | None:
    """Match `args` against a single route.

    Args:
        route: The compiled route
        args: Command line words, program name excluded
        converters: Registry used to convert typed values

    Returns:
        The match with converted values, or None when the route rejects the arguments
    """
    converters = converters or default_converters()
    values = _initial_values(route)
    positional = list(route.positional)
    seen_options: set[OptionSegment] = set()
    cursor = 0
    i = 0
    try:
        while i < len(args):
            word = args[i]
            anchored = route.leading_literal is None or i > 0
            option = route.find_option(word) if anchored else None
            if option is not None:
                i = _consume_option(option, args, i, values, seen_options, converters)
                continue
            if cursor >= len(positional):
                return None
            segment = positional[cursor]
            match segment:
                case LiteralSegment():
                    if not segment.matches(word):
                        return None
                    cursor += 1
                case ParameterSegment(catch_all=True):
                    values[segment.name].append(_convert(segment, word, converters))
                case ParameterSegment():
                    values[segment.name] = _convert(segment, word, converters)
                    cursor += 1
            i += 1
    except _NoMatch:
        return None

    for segment in positional[cursor:]:
        if isinstance(segment, LiteralSegment) or not (segment.optional or segment.catch_all):
            return None
    for option in route.options:
        if not option.optional and option not in seen_options:
            return None
    return RouteMatch(route=route, values=values)


def _consume_option(
    option: OptionSegment,
    args: Sequence[str],
    i: int,
    values: dict[str, Any],
    seen_options: set[OptionSegment],
    converters: TypeConverterRegistry,
) -> int:
    """Record one option occurrence, return the index of the next word."""
    if option in seen_options and not option.repeatable:
        raise _NoMatch
    seen_options.add(option)
    if option.value is None:
        values[option.key] = True
        return i + 1
    has_value = i + 1 < len(args) and not args[i + 1].startswith("-")
    if not has_value:
        if option.value.optional:
            return i + 1
        raise _NoMatch
    value = _convert(option.value, args[i + 1], converters)
    if option.repeatable:
        values[option.key].append(value)
    else:
        values[option.key] = value
    return i + 2


class RouteRegistry:
    """Ordered collection of compiled routes."""

    def __init__(self, converters: TypeConverterRegistry | None = None) -> None:
        self.converters = converters or default_converters()
        self._routes: list[Route] = []
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    def add(self, route: Route) -> Route:
        """Append a compiled route, stamping its registration index.

        Raises:
            RuntimeError: If the registry is frozen
        """
        if self._frozen:
            raise RuntimeError("Cannot add routes after the registry is frozen")
        route = dataclasses.replace(route, index=len(self._routes))
        self._routes.append(route)
        return route

    def add_pattern(self, pattern: str, handler: Callable[..., Any] | None = None, description: str | None = None) -> Route:
        """Compile `pattern` with this registry's converters and add it.

        Raises:
            CompilationError: If the pattern is malformed
            RuntimeError: If the registry is frozen
        """
        return self.add(compile_pattern(pattern, handler, converters=self.converters, description=description))

    def by_specificity(self) -> list[Route]:
        """Routes sorted by descending specificity, registration order among equals."""
        return sorted(self._routes, key=lambda route: -route.specificity)

    def match(self, args: Sequence[str]) -> RouteMatch | None:
        """Return the best route match for `args`, None when nothing matches."""
        for route in self.by_specificity():
            result = match_route(route, args, self.converters)
            if result is not None:
                return result
        return None

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
