"""Application wiring: route registration, completion routes and dispatch."""

from __future__ import annotations

import inspect
import sys
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from .ansi import BOLD, DIM, RED, colorize, should_colorize
from .completion.dynamic import DynamicCompletionHandler
from .completion.handlers import handle_compgen, handle_install
from .completion.provider import CompletionProvider
from .completion.sources import CompletionSourceRegistry
from .config import CompletionSettings, load_settings
from .constants import GENERATE_COMPLETION_OPTION, INSTALL_COMPLETION_OPTION
from .logging_setup import get_logger
from .models import CompilationError, ExitCode
from .routing.converters import TypeConverterRegistry, default_converters
from .routing.registry import RouteRegistry
from .routing.segments import Route, RouteMatch

__all__ = ["App"]

Handler = Callable[..., Any]


class App:
    """A command-line application: routes in, dispatch and shell completion out.

    Example::

        app = App("deploy-tool")

        @app.route("deploy {env} --force")
        def deploy(env: str, force: bool) -> None: ...

        app.enable_dynamic_completion(lambda sources: sources.register_for_parameter("env", ["dev", "prod"]))
        sys.exit(app.run())
    """

    def __init__(
        self,
        name: str,
        *,
        settings: CompletionSettings | None = None,
        converters: TypeConverterRegistry | None = None,
    ) -> None:
        self.name = name
        self.settings = settings or load_settings()
        self.converters = converters or default_converters()
        self.registry = RouteRegistry(self.converters)
        self.sources = CompletionSourceRegistry()
        self.provider = CompletionProvider(self.converters)
        self.log = get_logger("tabroute.app")
        self._reserved: set[int] = set()
        self._generate_registered = False
        self._dynamic_handler: DynamicCompletionHandler | None = None

    @property
    def app_name(self) -> str:
        """Name used in generated scripts."""
        return self.settings.app_name or self.name

    def add_route(self, pattern: str, handler: Handler | None = None, description: str | None = None) -> Route | None:
        """Compile and register a route.

        A malformed pattern is logged and skipped, the other routes stay usable.

        Returns:
            The registered route, None if the pattern failed to compile
        """
        try:
            return self.registry.add_pattern(pattern, handler, description)
        except CompilationError as e:
            self.log.error("Skipping route: %s", e)
            return None

    def route(self, pattern: str, description: str | None = None) -> Callable[[Handler], Handler]:
        """Decorator form of `add_route`."""

        def decorator(func: Handler) -> Handler:
            self.add_route(pattern, func, description or inspect.getdoc(func))
            return func

        return decorator

    def register_enum(self, enum_cls: type[Enum], name: str | None = None) -> None:
        """Make `enum_cls` usable as a ``{name:Type}`` constraint (register before the routes using it)."""
        self.converters.register_enum(enum_cls, name)

    def _add_reserved(self, pattern: str, handler: Handler, description: str) -> None:
        route = self.registry.add_pattern(pattern, handler, description)
        self._reserved.add(route.index)

    def completion_routes(self) -> list[Route]:
        """User routes, the completion machinery's own routes excluded."""
        return [route for route in self.registry if route.index not in self._reserved]

    def enable_static_completion(self) -> None:
        """Register ``--generate-completion {shell}`` producing static scripts."""
        self._register_generate()

    def enable_dynamic_completion(self, configure: Callable[[CompletionSourceRegistry], None] | None = None) -> None:
        """Register the callback route and the dynamic script generation / installation routes.

        Args:
            configure: Called with the source registry to register custom completion sources
        """
        if configure is not None:
            configure(self.sources)
        self.settings.mode = "dynamic"
        self._add_reserved(
            f"{self.settings.reserved_command} {{index:int}} {{*words}}",
            self._complete,
            "Answer a shell completion callback",
        )
        self._register_generate()
        self._add_reserved(
            f"{INSTALL_COMPLETION_OPTION} [shell] --dry-run",
            self._install_completion,
            "Install the completion script for your shell",
        )

    def _register_generate(self) -> None:
        if self._generate_registered:
            return
        self._generate_registered = True
        self._add_reserved(f"{GENERATE_COMPLETION_OPTION} {{shell}}", self._generate_completion, "Print the completion script")

    def _complete(self, index: int, words: list[str]) -> int:
        if self._dynamic_handler is None:
            self._dynamic_handler = DynamicCompletionHandler(
                self.completion_routes(),
                self.sources,
                self.provider,
                program_name_in_words=self.settings.program_name_in_words,
            )
        return self._dynamic_handler.handle(index, words)

    def _generate_completion(self, shell: str) -> int:
        success, result = handle_compgen(self, shell)
        if not success:
            print(result, file=sys.stderr)
            return ExitCode.USAGE_ERROR
        print(result, end="" if result.endswith("\n") else "\n")
        return ExitCode.SUCCESS

    def _install_completion(self, shell: str | None = None, dry_run: bool = False) -> int:
        success, message = handle_install(self, shell, dry_run)
        print(message, file=sys.stdout if success else sys.stderr)
        return ExitCode.SUCCESS if success else ExitCode.USAGE_ERROR

    def freeze(self) -> None:
        """Make the route and source registries read-only."""
        self.registry.freeze()
        self.sources.freeze()
        self.converters.freeze()

    def match(self, args: Sequence[str]) -> RouteMatch | None:
        return self.registry.match(args)

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Dispatch `argv` (defaults to ``sys.argv[1:]``) to the best matching route.

        Returns:
            An ExitCode, or the handler's integer return value
        """
        args = list(sys.argv[1:] if argv is None else argv)
        self.freeze()
        if not args:
            self._print_usage()
            return ExitCode.USAGE_ERROR

        result = self.match(args)
        if result is None:
            print(_c(f"Unknown command: {' '.join(args)}", RED), file=sys.stderr)
            self._print_usage()
            return ExitCode.NO_ROUTE

        self.log.debug("Matched %r with %r", result.route.pattern, result.values)
        handler = result.route.handler
        if handler is None:
            return ExitCode.SUCCESS
        try:
            outcome = handler(**_handler_kwargs(handler, result.values))
        except Exception as e:  # noqa: BLE001
            self.log.error("Command %r failed: %s", result.route.pattern, e)
            self.log.debug("Traceback", exc_info=True)
            return ExitCode.COMMAND_ERROR
        if isinstance(outcome, int) and not isinstance(outcome, bool):
            return outcome
        return ExitCode.SUCCESS

    def _print_usage(self) -> None:
        print(_c(f"Usage: {self.app_name} <command> [options]", BOLD), file=sys.stderr)
        for route in self.completion_routes():
            line = f"  {route.pattern}"
            if route.description:
                line += _c(f"  - {route.description.splitlines()[0]}", DIM)
            print(line, file=sys.stderr)


def _c(text: str, *codes: str) -> str:
    """Colorize text if stderr is a TTY."""
    if should_colorize(sys.stderr):
        return colorize(text, *codes)
    return text


def _handler_kwargs(handler: Handler, values: dict[str, Any]) -> dict[str, Any]:
    """Matched values the handler accepts, dashes turned into underscores."""
    kwargs = {name.replace("-", "_"): value for name, value in values.items()}
    parameters = inspect.signature(handler).parameters
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in parameters.values()):
        return kwargs
    return {name: value for name, value in kwargs.items() if name in parameters}
