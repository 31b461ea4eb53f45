"""Walk a route's segments alongside the typed words up to the cursor.

Shared by the static provider (what can come next?) and the dynamic
protocol (which parameter is the cursor on?).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..routing.segments import LiteralSegment, OptionSegment, ParameterSegment, Route
from .models import CompletionContext

__all__ = ["WalkResult", "walk_route"]


@dataclass(frozen=True, slots=True)
class WalkResult:
    """Where a route stands once the words before the cursor are consumed.

    Attributes:
        route: The walked route
        pending: Next segment to fill, None when the positional segments are exhausted
        option: Value-taking option whose value is pending at the cursor
    """

    route: Route
    pending: LiteralSegment | ParameterSegment | None
    option: OptionSegment | None = None


def walk_route(route: Route, context: CompletionContext) -> WalkResult | None:
    """Consume the words before the cursor against `route`.

    Option words are consumed wherever they appear (with their value when
    value-taking); literals must match exactly; a parameter takes one word;
    a catch-all takes every word and stays pending.

    Returns:
        The walk result, None when the typed words rule the route out
    """
    positional = route.positional
    args = context.args
    stop = min(context.cursor_position, len(args))
    seg_index = 0
    arg_index = 0
    while arg_index < stop:
        word = args[arg_index]
        option = route.find_option(word) if arg_index > 0 or route.leading_literal is None else None
        if option is not None:
            arg_index += 1
            if option.expects_value:
                if arg_index >= stop:
                    return WalkResult(route, option.value, option)
                arg_index += 1
            continue
        if seg_index >= len(positional):
            return None
        segment = positional[seg_index]
        if isinstance(segment, LiteralSegment):
            if not segment.matches(word):
                return None
            seg_index += 1
        elif not segment.catch_all:
            seg_index += 1
        arg_index += 1

    pending = positional[seg_index] if seg_index < len(positional) else None
    if isinstance(pending, LiteralSegment) and not pending.accepts_prefix(context.current_word):
        return None
    return WalkResult(route, pending)
