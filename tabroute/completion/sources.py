"""Completion sources and the registry resolving them.

A source is anything with ``candidates(context)``. Applications register
sources per parameter name (``env``) or per resolved type (an enum class);
the dynamic protocol picks one for the parameter under the cursor.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Protocol, runtime_checkable

from ..models import CompletionKind
from .models import CompletionCandidate, CompletionContext
from .provider import CompletionProvider

__all__ = [
    "CompletionSource",
    "CompletionSourceRegistry",
    "DefaultCompletionSource",
    "EnumCompletionSource",
    "FunctionSource",
    "StaticCompletionSource",
]

SourceResult = Iterable[CompletionCandidate | str]


@runtime_checkable
class CompletionSource(Protocol):
    """Provider of candidates for a parameter."""

    def candidates(self, context: CompletionContext) -> Sequence[CompletionCandidate]: ...


class FunctionSource:
    """Adapts a plain callable to a `CompletionSource`.

    The callable receives the context and may return candidates or bare strings
    (turned into CUSTOM candidates).
    """

    def __init__(self, func: Callable[[CompletionContext], SourceResult]) -> None:
        self.func = func

    def candidates(self, context: CompletionContext) -> list[CompletionCandidate]:
        return [
            item if isinstance(item, CompletionCandidate) else CompletionCandidate(str(item), None, CompletionKind.CUSTOM)
            for item in self.func(context)
        ]

    def __repr__(self) -> str:
        return f"FunctionSource({getattr(self.func, '__name__', self.func)!r})"


class StaticCompletionSource:
    """A fixed list of values."""

    def __init__(self, values: Iterable[str], description: str | None = None, kind: CompletionKind = CompletionKind.CUSTOM) -> None:
        self.values = tuple(values)
        self.description = description
        self.kind = kind

    def candidates(self, context: CompletionContext) -> list[CompletionCandidate]:  # noqa: ARG002
        return [CompletionCandidate(value, self.description, self.kind) for value in self.values]


class EnumCompletionSource:
    """Member names of an enumeration, described as ``Type.Member``."""

    def __init__(self, enum_cls: type[Enum]) -> None:
        self.enum_cls = enum_cls

    def candidates(self, context: CompletionContext) -> list[CompletionCandidate]:  # noqa: ARG002
        type_name = self.enum_cls.__name__
        return [CompletionCandidate(name, f"{type_name}.{name}", CompletionKind.ENUM) for name in self.enum_cls.__members__]


class DefaultCompletionSource:
    """Commands and options derived from the routes, as the static provider computes them."""

    def __init__(self, provider: CompletionProvider | None = None) -> None:
        self.provider = provider or CompletionProvider()

    def candidates(self, context: CompletionContext) -> list[CompletionCandidate]:
        return self.provider.candidates(context)


SourceLike = CompletionSource | Callable[[CompletionContext], SourceResult] | Sequence[str]


def _as_source(source: SourceLike) -> CompletionSource:
    """Accept a source, a plain callable or a fixed list of values."""
    if isinstance(source, CompletionSource):
        return source
    if callable(source):
        return FunctionSource(source)
    if isinstance(source, (list, tuple)):
        return StaticCompletionSource(source)
    raise TypeError(f"Not a completion source: {source!r}")


class CompletionSourceRegistry:
    """Parameter-name and type lookups for completion sources.

    Re-registering a name or type replaces the previous source.
    """

    def __init__(self) -> None:
        self._by_parameter: dict[str, CompletionSource] = {}
        self._by_type: dict[type, CompletionSource] = {}
        self._frozen = False

    def _check_frozen(self) -> None:
        if self._frozen:
            raise RuntimeError("Cannot register completion sources after the registry is frozen")

    def register_for_parameter(self, name: str, source: SourceLike) -> None:
        """Use `source` for every parameter (or option value) called `name`."""
        self._check_frozen()
        self._by_parameter[name] = _as_source(source)

    def register_for_type(self, target_type: type, source: SourceLike) -> None:
        """Use `source` for every parameter whose constraint resolves to `target_type`."""
        self._check_frozen()
        self._by_type[target_type] = _as_source(source)

    def source_for_parameter(self, name: str) -> CompletionSource | None:
        return self._by_parameter.get(name)

    def source_for_type(self, target_type: type | None) -> CompletionSource | None:
        if target_type is None:
            return None
        return self._by_type.get(target_type)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen
