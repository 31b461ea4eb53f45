"""Dynamic completion protocol.

The generated dynamic scripts call back into the application at each Tab
press::

    <program> __complete <cursorIndex> <word>...

and read back one candidate per line (``value`` or ``value<TAB>description``)
followed by a single ``:<directive>`` line. Diagnostics go to stderr and the
exit status is always 0, so a failing source never breaks the user's
command line.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

from ..constants import DIRECTORY_SENTINEL, FILE_SENTINEL
from ..logging_setup import get_logger
from ..models import CompletionDirective, CompletionKind
from ..routing.segments import ParameterSegment, Route
from .models import CompletionCandidate, CompletionContext, DetectedParameter
from .provider import CompletionProvider
from .sources import CompletionSource, CompletionSourceRegistry, DefaultCompletionSource
from .walker import walk_route

__all__ = [
    "DynamicCompletionHandler",
    "build_context",
    "compute_directive",
    "detect_parameter",
]

log = get_logger("tabroute.completion.dynamic")

_SENTINEL_KINDS = (CompletionKind.FILE, CompletionKind.DIRECTORY)


def _by_specificity(routes: Iterable[Route]) -> list[Route]:
    return sorted(routes, key=lambda route: -route.specificity)


def detect_parameter(context: CompletionContext) -> DetectedParameter | None:
    """Name the parameter or option value under the cursor.

    Routes are tried from the most specific down, registration order among
    equals. Literals, catch-alls and option names being typed give no detection.

    Returns:
        The first detection, or None
    """
    for route in _by_specificity(context.routes):
        walk = walk_route(route, context)
        if walk is None:
            continue
        typing_option = context.current_word.startswith("-")
        if walk.option is not None and walk.option.value is not None:
            value = walk.option.value
            # a dashed word after an optional value starts the next option, as in matching
            if typing_option and value.optional:
                continue
            return DetectedParameter(value.name, value.resolved_type, route, walk.option.forms[0])
        if typing_option:
            continue
        if isinstance(walk.pending, ParameterSegment) and not walk.pending.catch_all:
            return DetectedParameter(walk.pending.name, walk.pending.resolved_type, route)
    return None


def build_context(index: int, words: Sequence[str], routes: Sequence[Route], program_name_in_words: bool = True) -> CompletionContext:
    """Turn the callback arguments into a completion context.

    Args:
        index: Position of the word being completed in `words`
        words: Words typed on the command line
        routes: Routes to complete against
        program_name_in_words: `words` starts with the program name (and `index` counts it)

    Returns:
        The context, words after the cursor dropped
    """
    args = list(words[1:] if program_name_in_words else words)
    cursor = max(index - 1 if program_name_in_words else index, 0)
    args = args[: cursor + 1]
    return CompletionContext(tuple(args), cursor, cursor >= len(args), tuple(routes))


def compute_directive(candidates: list[CompletionCandidate]) -> tuple[list[CompletionCandidate], CompletionDirective]:
    """Pick the directive and strip the path sentinels it replaces."""
    values = {candidate.value for candidate in candidates}
    if FILE_SENTINEL in values:
        directive = CompletionDirective.DEFAULT
    elif DIRECTORY_SENTINEL in values:
        directive = CompletionDirective.FILTER_DIRS
    else:
        return candidates, CompletionDirective.NO_FILE_COMP
    return [c for c in candidates if c.value not in (FILE_SENTINEL, DIRECTORY_SENTINEL)], directive


class DynamicCompletionHandler:
    """Answers ``__complete`` callbacks."""

    def __init__(
        self,
        routes: Iterable[Route],
        sources: CompletionSourceRegistry | None = None,
        provider: CompletionProvider | None = None,
        *,
        program_name_in_words: bool = True,
    ) -> None:
        self.routes = tuple(routes)
        self.sources = sources or CompletionSourceRegistry()
        self.default_source = DefaultCompletionSource(provider or CompletionProvider())
        self.program_name_in_words = program_name_in_words

    def resolve_source(self, detected: DetectedParameter | None) -> CompletionSource:
        """Parameter name first, then resolved type, then the route-derived default."""
        if detected is not None:
            source = self.sources.source_for_parameter(detected.name) or self.sources.source_for_type(detected.resolved_type)
            if source is not None:
                return source
        return self.default_source

    def complete(self, index: int, words: Sequence[str], stderr: TextIO | None = None) -> tuple[list[CompletionCandidate], CompletionDirective]:
        """Compute the candidates and directive for one callback.

        A source raising is reported on `stderr` and yields no candidates.
        """
        context = build_context(index, words, self.routes, self.program_name_in_words)
        detected = detect_parameter(context)
        source = self.resolve_source(detected)
        log.debug("Completing %r at %d with %r (detected %r)", context.args, context.cursor_position, source, detected)
        try:
            candidates = list(source.candidates(context))
        except Exception as e:  # noqa: BLE001
            print(f"Completion source {source!r} failed: {e}", file=stderr or sys.stderr)
            log.debug("Completion source failure", exc_info=True)
            candidates = []

        prefix = context.current_word.lower()
        candidates = [c for c in candidates if c.kind in _SENTINEL_KINDS or c.value.lower().startswith(prefix)]
        return compute_directive(candidates)

    def handle(self, index: int, words: Sequence[str], stdout: TextIO | None = None, stderr: TextIO | None = None) -> int:
        """Write the callback answer and return the exit status (always 0)."""
        out = stdout or sys.stdout
        err = stderr or sys.stderr
        try:
            candidates, directive = self.complete(index, words, err)
        except Exception as e:  # noqa: BLE001
            print(f"Completion failed: {e}", file=err)
            candidates, directive = [], CompletionDirective.ERROR
        for candidate in candidates:
            out.write(candidate.to_line() + "\n")
        out.write(f":{int(directive)}\n")
        out.flush()
        print(f"Completion ended with directive: {directive.describe()}", file=err)
        return 0
