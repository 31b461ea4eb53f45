"""Split a raw input line into completed words and the word being typed.

Used by interactive line editors, which see the whole line rather than the
shell's pre-split words.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence
from dataclasses import dataclass

from ..routing.segments import Route
from .models import CompletionContext

__all__ = ["ParsedInput", "parse_input"]


@dataclass(frozen=True, slots=True)
class ParsedInput:
    """A tokenized input line.

    Attributes:
        completed_words: Words finished by a following space
        partial_word: Word under the cursor, None when a new word is started
        has_trailing_space: The line ends with whitespace
    """

    completed_words: tuple[str, ...]
    partial_word: str | None
    has_trailing_space: bool

    @property
    def is_empty(self) -> bool:
        return not self.completed_words and self.partial_word is None

    @property
    def is_typing_option(self) -> bool:
        return bool(self.partial_word) and self.partial_word.startswith("-")

    @property
    def is_typing_long_option(self) -> bool:
        return bool(self.partial_word) and self.partial_word.startswith("--")

    @property
    def words(self) -> tuple[str, ...]:
        """Every word, the partial one included."""
        if self.partial_word is None:
            return self.completed_words
        return (*self.completed_words, self.partial_word)

    def to_context(self, routes: Sequence[Route]) -> CompletionContext:
        """Build the completion context for this line."""
        return CompletionContext.create(self.words, routes, trailing_space=self.has_trailing_space)


def parse_input(line: str) -> ParsedInput:
    """Tokenize `line` with shell quoting rules.

    Unbalanced quotes fall back to a plain whitespace split so that a line
    being typed (``echo "hel``) still yields words.
    """
    try:
        words = shlex.split(line)
    except ValueError:
        words = line.split()
    trailing = bool(line) and line[-1].isspace()
    if trailing or not words:
        return ParsedInput(tuple(words), None, trailing)
    return ParsedInput(tuple(words[:-1]), words[-1], False)
