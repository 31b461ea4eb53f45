"""Route pattern compiler.

Turns a pattern string into a `Route`::

    deploy {env} [tag] --force,-f --replicas {count:int}
    git commit --message,-m {text|Commit message} --amend?
    docker run {image} --env {var}* {*args}
    backup {source:dir} --verbose|Print every copied file

Words are separated by whitespace; ``{...}`` and ``[...]`` groups may contain
spaces (descriptions). An option description runs until the next option or
group.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..logging_setup import get_logger
from ..models import CompilationError
from .converters import TypeConverterRegistry, default_converters
from .segments import LiteralSegment, OptionSegment, ParameterSegment, Route, Segment, segment_specificity

__all__ = ["compile_pattern"]

_NAME_RE = re.compile(r"^[A-Za-z_][\w-]*$")
_OPTION_NAME_RE = re.compile(r"^[A-Za-z0-9][\w-]*$")
_CLOSING = {"{": "}", "[": "]"}

log = get_logger("tabroute.compiler")


@dataclass(frozen=True, slots=True)
class _Token:
    text: str
    position: int

    @property
    def is_group(self) -> bool:
        return self.text[0] in _CLOSING

    @property
    def is_option(self) -> bool:
        return self.text.startswith("-")


def _tokenize(pattern: str) -> list[_Token]:
    """Split the pattern on whitespace, keeping bracket groups whole."""
    tokens: list[_Token] = []
    i, length = 0, len(pattern)
    while i < length:
        char = pattern[i]
        if char.isspace():
            i += 1
            continue
        start = i
        if char in _CLOSING:
            end = pattern.find(_CLOSING[char], i + 1)
            nested = pattern.find(char, i + 1)
            if end == -1 or -1 < nested < end:
                raise CompilationError(pattern, pattern[start:], "Unterminated bracket", start)
            i = end + 1
            if i < length and pattern[i] == "*":
                i += 1
            tokens.append(_Token(pattern[start:i], start))
            continue
        while i < length and not pattern[i].isspace() and pattern[i] not in _CLOSING:
            i += 1
        word = pattern[start:i]
        for closing in ("}", "]"):
            if closing in word:
                raise CompilationError(pattern, word, "Unexpected closing bracket", start + word.index(closing))
        if word.startswith("<") and word.endswith(">") and len(word) > 2:
            raise CompilationError(
                pattern, word, "Angle brackets are not parameter syntax", start, suggestion="{" + word[1:-1] + "}"
            )
        tokens.append(_Token(word, start))
    return tokens


class _Compiler:
    """Single-use compiler state for one pattern."""

    def __init__(self, pattern: str, converters: TypeConverterRegistry) -> None:
        self.pattern = pattern
        self.converters = converters
        self.tokens = _tokenize(pattern)
        self.pos = 0
        self.segments: list[Segment] = []
        self.option_forms: dict[str, _Token] = {}
        self.param_names: dict[str, _Token] = {}

    def error(self, token: _Token, reason: str, suggestion: str | None = None) -> CompilationError:
        return CompilationError(self.pattern, token.text, reason, token.position, suggestion)

    def compile(self) -> list[Segment]:
        while self.pos < len(self.tokens):
            token = self.tokens[self.pos]
            self.pos += 1
            if token.is_group:
                if token.text.endswith("*"):
                    raise self.error(token, "Repeat marker is only allowed on option values")
                self.segments.append(self.parameter(token))
            elif token.is_option:
                self.segments.append(self.option(token))
            else:
                self.segments.append(LiteralSegment(token.text))
        self.check_catch_all()
        return self.segments

    def parameter(self, token: _Token) -> ParameterSegment:
        """Parse ``{name}``, ``[name]``, ``{name?}``, ``{*name}``, ``{name:Type|description}``."""
        text = token.text.removesuffix("*")
        inner = text[1:-1]
        head, _, description = inner.partition("|")
        head = head.strip()
        optional = text.startswith("[")
        catch_all = head.startswith("*")
        head = head.removeprefix("*")
        name, _, type_constraint = head.partition(":")
        if name.endswith("?") or type_constraint.endswith("?"):
            optional = True
        name = name.rstrip("?").strip()
        type_constraint = type_constraint.rstrip("?").strip()

        if not name:
            raise self.error(token, "Empty parameter name")
        if not _NAME_RE.match(name):
            raise self.error(token, "Invalid parameter name")
        if name in self.param_names:
            raise self.error(token, f"Duplicate parameter name {name!r}")
        self.param_names[name] = token

        if type_constraint:
            converter = self.converters.converter_for(type_constraint)
            resolved_type = converter.target_type if converter else None
            if converter is None:
                log.debug("Unknown type %r in pattern %r, no type-driven completions", type_constraint, self.pattern)
        else:
            resolved_type = str
        return ParameterSegment(
            name=name,
            type_constraint=type_constraint or None,
            optional=optional and not catch_all,
            catch_all=catch_all,
            resolved_type=resolved_type,
            description=description.strip() or None,
        )

    def option(self, token: _Token) -> OptionSegment:
        """Parse ``--long,-s?|description`` and an optional value group following it."""
        spec, has_description, description = token.text.partition("|")
        optional_marker = spec.endswith("?")
        spec = spec.removesuffix("?")

        long_form = short_form = None
        for form in spec.split(","):
            if form.startswith("--"):
                name, is_long = form[2:], True
            elif form.startswith("-"):
                name, is_long = form[1:], False
            else:
                raise self.error(token, f"Option alias {form!r} must start with a dash")
            if not name:
                raise self.error(token, "Empty option name")
            if not _OPTION_NAME_RE.match(name):
                raise self.error(token, f"Invalid option name {form!r}")
            if form in self.option_forms:
                raise self.error(token, f"Duplicate option {form!r}")
            self.option_forms[form] = token
            if is_long:
                long_form = name
            else:
                short_form = name

        if has_description:
            words = [description] if description else []
            while self.pos < len(self.tokens) and not (self.tokens[self.pos].is_option or self.tokens[self.pos].is_group):
                words.append(self.tokens[self.pos].text)
                self.pos += 1
            description = " ".join(words)

        value = None
        repeatable = False
        if self.pos < len(self.tokens) and self.tokens[self.pos].is_group:
            value_token = self.tokens[self.pos]
            self.pos += 1
            repeatable = value_token.text.endswith("*")
            value = self.parameter(value_token)
            if value.catch_all:
                raise self.error(value_token, "A catch-all parameter cannot be an option value")

        return OptionSegment(
            long_form=long_form,
            short_form=short_form,
            value=value,
            optional=value is None or optional_marker,
            repeatable=repeatable,
            description=description.strip() or None,
        )

    def check_catch_all(self) -> None:
        for segment in self.segments[:-1]:
            if isinstance(segment, ParameterSegment) and segment.catch_all:
                token = self.param_names[segment.name]
                raise self.error(token, f"Catch-all parameter {segment.name!r} must be the last segment")


def compile_pattern(
    pattern: str,
    handler: Callable[..., Any] | None = None,
    *,
    converters: TypeConverterRegistry | None = None,
    description: str | None = None,
) -> Route:
    """Compile a route pattern.

    Args:
        pattern: The pattern text
        handler: Opaque callable attached to the route
        converters: Registry resolving ``{name:Type}`` constraints, the built-ins if not set
        description: Help text for the route

    Returns:
        The compiled route, its specificity already computed

    Raises:
        CompilationError: If the pattern is malformed
    """
    if not pattern.strip():
        raise CompilationError(pattern, "", "Empty pattern")
    segments = _Compiler(pattern, converters or default_converters()).compile()
    return Route(
        pattern=pattern,
        segments=tuple(segments),
        specificity=sum(segment_specificity(segment) for segment in segments),
        handler=handler,
        description=description,
    )
