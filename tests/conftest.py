"""Generic fixtures."""

from enum import Enum

import pytest

from tabroute.app import App
from tabroute.completion.models import CompletionContext
from tabroute.config import CompletionSettings
from tabroute.logging_setup import get_logger, init_logger
from tabroute.routing import RouteRegistry, TypeConverterRegistry, default_converters


def pytest_configure():
    "Runs once before all"
    init_logger("/dev/null")


class Environment(Enum):
    Dev = "dev"
    Staging = "staging"
    Prod = "prod"


class Speed(Enum):
    Fast = 1
    Standard = 2
    Slow = 3


def make_context(routes, *args: str, trailing: bool = False) -> CompletionContext:
    """Context with the cursor on the last word, or after it when `trailing`."""
    return CompletionContext.create(args, list(routes), trailing_space=trailing)


@pytest.fixture
def test_logger():
    return get_logger("tabroute.tests")


@pytest.fixture
def converters() -> TypeConverterRegistry:
    registry = default_converters()
    registry.register_enum(Environment)
    registry.register_enum(Speed)
    return registry


@pytest.fixture
def make_registry(converters):
    """Build a registry from patterns, using the test converters."""

    def _make(*patterns: str) -> RouteRegistry:
        registry = RouteRegistry(converters)
        for pattern in patterns:
            registry.add_pattern(pattern)
        return registry

    return _make


@pytest.fixture
def settings() -> CompletionSettings:
    return CompletionSettings()


@pytest.fixture
def app(settings, converters) -> App:
    application = App("app", settings=settings, converters=converters)
    application.add_route("deploy {env} --force", description="Deploy the application")
    application.add_route("status --verbose")
    application.add_route("version")
    return application
