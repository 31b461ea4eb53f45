"""Route patterns: compilation, typed parameters and matching.

This package provides:
- compiler: pattern text to `Route`
- segments: the literal / parameter / option segment model
- converters: type constraints such as ``{count:int}`` and enums
- registry: ordered route collection and specificity-ranked matching
"""

from __future__ import annotations

from .compiler import compile_pattern
from .converters import DirectoryPath, FilePath, TypeConverter, TypeConverterRegistry, default_converters
from .registry import RouteRegistry, match_route
from .segments import LiteralSegment, OptionSegment, ParameterSegment, Route, RouteMatch, Segment

__all__ = [
    "DirectoryPath",
    "FilePath",
    "LiteralSegment",
    "OptionSegment",
    "ParameterSegment",
    "Route",
    "RouteMatch",
    "RouteRegistry",
    "Segment",
    "TypeConverter",
    "TypeConverterRegistry",
    "compile_pattern",
    "default_converters",
    "match_route",
]
