"""Type converters for typed parameters like ``{count:int}``.

The compiler resolves a parameter's type constraint through a
`TypeConverterRegistry`; the completion provider asks the resulting converter
for enumerable values, and route matching uses it to convert arguments.
"""

from __future__ import annotations

import datetime
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import urlparse

__all__ = [
    "DirectoryPath",
    "FilePath",
    "TypeConverter",
    "TypeConverterRegistry",
    "default_converters",
]


class FilePath(str):
    """A string naming a file: completed by the shell's native file completion."""

    __slots__ = ()


class DirectoryPath(str):
    """A string naming a directory: completed by the shell's native directory completion."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class TypeConverter:
    """Converts argument text to a Python value.

    Attributes:
        name: Canonical type name
        target_type: Python type produced by `convert`
        parse: Callable turning the text into the value, raising ValueError on bad input
        values: Enumerable values offered as completions, empty when open-ended
    """

    name: str
    target_type: type
    parse: Callable[[str], Any]
    values: tuple[str, ...] = ()

    def convert(self, text: str) -> Any:  # noqa: ANN401
        """Convert `text`, raising ValueError when it is not a valid value."""
        return self.parse(text)

    def enumerate_values(self) -> tuple[str, ...]:
        return self.values


def _parse_bool(text: str) -> bool:
    lowered = text.lower()
    if lowered in {"true", "yes", "on", "1"}:
        return True
    if lowered in {"false", "no", "off", "0"}:
        return False
    raise ValueError(f"Not a boolean: {text}")


def _parse_uri(text: str) -> str:
    if not urlparse(text).scheme:
        raise ValueError(f"Not a URI: {text}")
    return text


def _enum_parser(enum_cls: type[Enum]) -> Callable[[str], Enum]:
    members = {name.lower(): member for name, member in enum_cls.__members__.items()}

    def parse(text: str) -> Enum:
        try:
            return members[text.lower()]
        except KeyError:
            raise ValueError(f"{text} is not a valid {enum_cls.__name__}") from None

    return parse


def _normalize(type_name: str) -> str:
    return type_name.rstrip("?").strip().lower()


class TypeConverterRegistry:
    """Type name to converter lookup, case-insensitive."""

    def __init__(self, converters: Iterable[tuple[Iterable[str], TypeConverter]] = ()) -> None:
        self._converters: dict[str, TypeConverter] = {}
        self._frozen = False
        for names, converter in converters:
            self.register(converter, *names)

    def register(self, converter: TypeConverter, *aliases: str) -> None:
        """Register `converter` under its name and every alias.

        Raises:
            RuntimeError: If the registry is frozen
        """
        if self._frozen:
            raise RuntimeError("Cannot register converters after the registry is frozen")
        for name in (converter.name, *aliases):
            self._converters[_normalize(name)] = converter

    def register_enum(self, enum_cls: type[Enum], name: str | None = None) -> TypeConverter:
        """Register a converter for `enum_cls` whose values are its member names.

        Args:
            enum_cls: The enumeration
            name: Type name used in patterns, defaults to the class name

        Returns:
            The registered converter
        """
        converter = TypeConverter(
            name=name or enum_cls.__name__,
            target_type=enum_cls,
            parse=_enum_parser(enum_cls),
            values=tuple(enum_cls.__members__),
        )
        self.register(converter)
        return converter

    def converter_for(self, type_constraint: str | None) -> TypeConverter | None:
        """Return the converter for a type constraint, None when unknown."""
        if not type_constraint:
            return self._converters.get("str")
        return self._converters.get(_normalize(type_constraint))

    def freeze(self) -> None:
        self._frozen = True


def default_converters() -> TypeConverterRegistry:
    """Return a new registry holding the built-in converters."""
    return TypeConverterRegistry(
        [
            (("string",), TypeConverter("str", str, str)),
            (("long",), TypeConverter("int", int, int)),
            (("double", "decimal"), TypeConverter("float", float, float)),
            ((), TypeConverter("bool", bool, _parse_bool)),
            (("guid",), TypeConverter("uuid", uuid.UUID, uuid.UUID)),
            ((), TypeConverter("datetime", datetime.datetime, datetime.datetime.fromisoformat)),
            ((), TypeConverter("date", datetime.date, datetime.date.fromisoformat)),
            (("url",), TypeConverter("uri", str, _parse_uri)),
            (("FileInfo",), TypeConverter("file", FilePath, FilePath)),
            (("DirectoryInfo", "dir"), TypeConverter("directory", DirectoryPath, DirectoryPath)),
        ]
    )
