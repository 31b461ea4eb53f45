"""Tests for route registration and dispatch."""

import runpy
from pathlib import Path

import pytest

from tabroute.app import App
from tabroute.models import ExitCode

from .conftest import Environment


@pytest.fixture
def calls():
    return []


class TestDispatch:
    """Running handlers for matched routes."""

    def test_handler_kwargs(self, app, calls):
        @app.route("scale {service} {count:int} --dry-run")
        def scale(service, count, dry_run):
            calls.append((service, count, dry_run))

        assert app.run(["scale", "web", "3", "--dry-run"]) == ExitCode.SUCCESS
        assert calls == [("web", 3, True)]

    def test_handler_ignores_unknown_values(self, app, calls):
        app.add_route("ping {host} --verbose", lambda host: calls.append(host))
        assert app.run(["ping", "example.org", "--verbose"]) == ExitCode.SUCCESS
        assert calls == ["example.org"]

    def test_var_keyword(self, app, calls):
        app.add_route("tag {name} --force", lambda **kwargs: calls.append(kwargs))
        app.run(["tag", "v1"])
        assert calls == [{"name": "v1", "force": False}]

    def test_enum_conversion(self, app, calls):
        app.add_route("promote {env:Environment}", lambda env: calls.append(env))
        app.run(["promote", "prod"])
        assert calls == [Environment.Prod]

    def test_route_without_handler(self, app):
        assert app.run(["version"]) == ExitCode.SUCCESS

    def test_integer_return(self, app):
        app.add_route("check", lambda: 3)
        app.add_route("ok", lambda: True)
        assert app.run(["check"]) == 3
        assert app.run(["ok"]) == ExitCode.SUCCESS

    def test_handler_failure(self, app):
        def boom():
            raise RuntimeError("boom")

        app.add_route("fail", boom)
        assert app.run(["fail"]) == ExitCode.COMMAND_ERROR

    def test_no_arguments(self, app, capsys):
        assert app.run([]) == ExitCode.USAGE_ERROR
        err = capsys.readouterr().err
        assert "Usage: app <command> [options]" in err
        assert "deploy {env} --force  - Deploy the application" in err

    def test_no_route(self, app, capsys):
        assert app.run(["rollback"]) == ExitCode.NO_ROUTE
        assert "Unknown command: rollback" in capsys.readouterr().err


class TestRegistration:
    """Building the route table."""

    def test_decorator_description(self, app):
        @app.route("clean")
        def clean():
            """Remove build artifacts."""

        assert app.registry.routes[-1].description == "Remove build artifacts."

    def test_malformed_route_skipped(self, app):
        before = len(app.registry)
        assert app.add_route("deploy <env>") is None
        assert len(app.registry) == before
        assert app.run(["status"]) == ExitCode.SUCCESS

    def test_frozen_after_run(self, app):
        app.run(["status"])
        with pytest.raises(RuntimeError):
            app.add_route("late")

    def test_app_name_override(self, settings, converters):
        settings.app_name = "tool"
        assert App("app", settings=settings, converters=converters).app_name == "tool"


class TestStaticCompletion:
    """``--generate-completion`` in static mode."""

    def test_generate(self, app, capsys):
        app.enable_static_completion()
        assert app.run(["--generate-completion", "bash"]) == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert 'local commands="deploy status version"' in out
        assert 'local options="--force --verbose"' in out

    def test_registered_once(self, app):
        app.enable_static_completion()
        size = len(app.registry)
        app.enable_static_completion()
        assert len(app.registry) == size
        assert len(app.completion_routes()) == 3

    def test_unknown_shell(self, app, capsys):
        app.enable_static_completion()
        assert app.run(["--generate-completion", "tcsh"]) == ExitCode.USAGE_ERROR
        assert "Unsupported shell: tcsh" in capsys.readouterr().err


class TestDynamicCompletion:
    """The callback route and dynamic scripts."""

    def test_configure(self, app):
        seen = []
        app.enable_dynamic_completion(seen.append)
        assert seen == [app.sources]
        assert app.settings.mode == "dynamic"

    def test_callback(self, app, capsys):
        app.enable_dynamic_completion(lambda sources: sources.register_for_parameter("env", ["dev", "prod"]))
        assert app.run(["__complete", "2", "app", "deploy"]) == 0
        assert capsys.readouterr().out == "dev\nprod\n:4\n"

    def test_callback_with_option_words(self, app, capsys):
        app.enable_dynamic_completion()
        assert app.run(["__complete", "3", "app", "deploy", "prod", "--f"]) == 0
        assert capsys.readouterr().out == "--force\n:4\n"

    def test_reserved_routes_not_completed(self, app, capsys):
        app.enable_dynamic_completion()
        app.run(["__complete", "1", "app"])
        assert capsys.readouterr().out == "deploy\nstatus\nversion\n:4\n"

    def test_custom_reserved_command(self, settings, converters, capsys):
        settings.reserved_command = "__tab"
        application = App("app", settings=settings, converters=converters)
        application.add_route("status")
        application.enable_dynamic_completion()
        application.run(["--generate-completion", "zsh"])
        assert "app __tab" in capsys.readouterr().out

    def test_generate(self, app, capsys):
        app.enable_dynamic_completion()
        assert app.run(["--generate-completion", "bash"]) == ExitCode.SUCCESS
        assert 'app __complete "$COMP_CWORD"' in capsys.readouterr().out

    def test_install_dry_run(self, app, capsys, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        app.enable_dynamic_completion()
        assert app.run(["--install-completion", "bash", "--dry-run"]) == ExitCode.SUCCESS
        assert capsys.readouterr().out.startswith("Would write bash completions to")
        assert not (tmp_path / ".local").exists()


def test_sample_application(capsys):
    """The bundled deploy-tool sample completes environments from its source."""
    sample = runpy.run_path(str(Path(__file__).parent.parent / "examples" / "tabroute_examples" / "deploy_tool.py"))
    application = sample["app"]
    assert application.run(["__complete", "2", "deploy-tool", "deploy"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "production\tProduction environment (use with caution)"
    assert lines[-1] == ":4"
    assert application.run(["deploy", "qa", "--mode", "canary"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out == "Deploying to qa in Canary mode\n"


def test_unknown_command_colored(app, capsys, monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert app.run(["rollback"]) == ExitCode.NO_ROUTE
    err = capsys.readouterr().err
    assert "\x1b[31mUnknown command: rollback\x1b[0m" in err
    assert "\x1b[1mUsage: app <command> [options]\x1b[0m" in err
