"""Helpers shared by the shell generators: template loading and route extraction."""

from __future__ import annotations

import re
from collections.abc import Iterable
from importlib import resources

from ...models import TemplateMissingError
from ...routing.segments import Route

__all__ = [
    "extract_commands",
    "extract_options",
    "function_name",
    "load_template",
    "render",
]

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z_]+)\}\}")


def load_template(shell: str, mode: str) -> str:
    """Read ``templates/<shell>.<mode>.tmpl`` from the package.

    Raises:
        TemplateMissingError: If the template is not shipped
    """
    name = f"{shell}.{mode}.tmpl"
    template = resources.files("tabroute.completion").joinpath("templates", name)
    try:
        return template.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise TemplateMissingError(name) from e


def render(template: str, **values: str) -> str:
    """Replace every ``{{KEY}}`` placeholder, unknown keys are left untouched."""
    return _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def function_name(app_name: str) -> str:
    """Shell-safe identifier derived from the application name."""
    return re.sub(r"\W", "_", app_name)


def extract_commands(routes: Iterable[Route]) -> list[str]:
    """Leading literals of every route, deduplicated, first seen first."""
    return list(dict.fromkeys(route.leading_literal for route in routes if route.leading_literal))


def extract_options(routes: Iterable[Route]) -> list[str]:
    """Every option form of every route, deduplicated, first seen first."""
    return list(dict.fromkeys(form for route in routes for option in route.options for form in option.forms))
