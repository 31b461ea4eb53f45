"""Tests for shared errors, enums and candidates."""

from tabroute.completion.models import CompletionCandidate, CompletionContext
from tabroute.models import CompilationError, CompletionDirective, CompletionKind, ExitCode, TemplateMissingError, UnknownShellError


def test_compilation_error_message():
    error = CompilationError("deploy <env>", "<env>", "Angle brackets are not parameter syntax", 7, "{env}")
    assert str(error) == "Angle brackets are not parameter syntax: '<env>' in pattern 'deploy <env>' (did you mean '{env}'?)"
    assert error.position == 7


def test_compilation_error_without_token():
    assert str(CompilationError("", "", "Empty pattern")) == "Empty pattern in pattern ''"


def test_other_errors():
    assert str(TemplateMissingError("zsh.static.tmpl")) == "Template not found: zsh.static.tmpl"
    assert str(UnknownShellError("tcsh", ("bash", "zsh"))) == "Unsupported shell: tcsh. Supported: bash, zsh"


def test_kind_priority():
    kinds = sorted(CompletionKind, key=lambda kind: kind.priority)
    assert kinds[0] is CompletionKind.COMMAND
    assert kinds[-1] is CompletionKind.OPTION


def test_directive_values():
    assert [int(flag) for flag in CompletionDirective] == [1, 2, 4, 8, 16, 32]
    assert CompletionDirective.FILTER_DIRS.describe() == "FilterDirs"
    assert CompletionDirective.KEEP_ORDER.describe() == "KeepOrder"


def test_exit_codes():
    assert (ExitCode.SUCCESS, ExitCode.USAGE_ERROR, ExitCode.NO_ROUTE, ExitCode.COMMAND_ERROR) == (0, 1, 2, 4)


def test_candidate_line():
    assert CompletionCandidate("prod").to_line() == "prod"
    assert CompletionCandidate("prod", "Production").to_line() == "prod\tProduction"


def test_context():
    context = CompletionContext.create(["deploy", "pr"])
    assert (context.cursor_position, context.current_word, context.previous_word) == (1, "pr", "deploy")
    empty = CompletionContext.create([])
    assert (empty.cursor_position, empty.current_word, empty.previous_word) == (0, "", None)
    after = CompletionContext.create(["deploy"], trailing_space=True)
    assert (after.cursor_position, after.current_word, after.previous_word) == (1, "", "deploy")
