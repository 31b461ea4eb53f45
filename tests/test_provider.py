"""Tests for the static completion provider."""

import pytest

from tabroute.completion.models import CompletionCandidate
from tabroute.completion.provider import CompletionProvider, rank_candidates
from tabroute.models import CompletionKind

from .conftest import make_context


@pytest.fixture
def provider(converters):
    return CompletionProvider(converters)


def values(candidates):
    return [c.value for c in candidates]


class TestCommands:
    """First-word completion."""

    def test_prefix(self, provider, make_registry):
        registry = make_registry("create {item}", "createorder {product} {quantity:int}", "delete {id}")
        assert values(provider.candidates(make_context(registry, "cre"))) == ["create", "createorder"]

    @pytest.mark.parametrize("prefix", ["", "d", "de", "dep", "depl", "deplo", "deploy"])
    def test_every_prefix_offers_the_command(self, provider, make_registry, prefix):
        registry = make_registry("deploy {env}", "status")
        context = make_context(registry, prefix) if prefix else make_context(registry)
        assert "deploy" in values(provider.candidates(context))

    def test_case_insensitive(self, provider, make_registry):
        assert values(provider.candidates(make_context(make_registry("deploy {env}"), "DE"))) == ["deploy"]

    def test_deduplicated(self, provider, make_registry):
        registry = make_registry("git commit", "git push", "git status")
        result = provider.candidates(make_context(registry, "gi"))
        assert values(result) == ["git"]
        assert result[0].kind is CompletionKind.COMMAND

    def test_sub_commands_after_space(self, provider, make_registry):
        registry = make_registry("git commit", "git push", "git status --short")
        assert values(provider.candidates(make_context(registry, "git", trailing=True))) == ["commit", "push", "status"]
        assert values(provider.candidates(make_context(registry, "git", "c"))) == ["commit"]

    def test_literal_mismatch(self, provider, make_registry):
        assert provider.candidates(make_context(make_registry("deploy {env}"), "rollback", "x")) == []


class TestParameters:
    """Type-driven parameter candidates."""

    def test_enum_values(self, provider, make_registry):
        registry = make_registry("deploy {env:Environment}")
        result = provider.candidates(make_context(registry, "deploy", "p"))
        assert result == [CompletionCandidate("Prod", "Environment.Prod", CompletionKind.ENUM)]

    def test_option_value(self, provider, make_registry):
        registry = make_registry("scale --env {target:Environment}")
        result = provider.candidates(make_context(registry, "scale", "--env", trailing=True))
        assert values(result) == ["Dev", "Prod", "Staging"]

    def test_file_sentinel(self, provider, make_registry):
        registry = make_registry("open {path:file}")
        result = provider.candidates(make_context(registry, "open", trailing=True))
        assert result == [CompletionCandidate("<file>", "File path", CompletionKind.FILE)]

    def test_directory_sentinel(self, provider, make_registry):
        registry = make_registry("cd {target:dir}")
        assert values(provider.candidates(make_context(registry, "cd", trailing=True))) == ["<directory>"]

    def test_open_ended_type(self, provider, make_registry):
        assert provider.candidates(make_context(make_registry("scale {count:int}"), "scale", trailing=True)) == []

    def test_unknown_type(self, provider, make_registry):
        assert provider.candidates(make_context(make_registry("deploy {env:Widget}"), "deploy", trailing=True)) == []

    def test_nothing_after_last_segment(self, provider, make_registry):
        registry = make_registry("deploy {env} --force")
        assert provider.candidates(make_context(registry, "deploy", "prod", trailing=True)) == []


class TestOptions:
    """Options are offered once a dash is typed."""

    def test_long_forms(self, provider, make_registry):
        registry = make_registry("deploy {env} --force,-f --version")
        result = provider.candidates(make_context(registry, "deploy", "prod", "--"))
        assert values(result) == ["--force", "--version"]
        assert all(c.kind is CompletionKind.OPTION for c in result)

    def test_short_forms(self, provider, make_registry):
        registry = make_registry("deploy {env} --force,-f --version")
        result = provider.candidates(make_context(registry, "deploy", "prod", "-"))
        assert set(values(result)) == {"--force", "-f", "--version"}

    def test_description(self, provider, make_registry):
        registry = make_registry("deploy {env} --force|Skip the confirmation")
        result = provider.candidates(make_context(registry, "deploy", "prod", "--f"))
        assert result == [CompletionCandidate("--force", "Skip the confirmation", CompletionKind.OPTION)]

    def test_used_option_excluded(self, provider, make_registry):
        registry = make_registry("deploy {env} --force,-f --version")
        assert values(provider.candidates(make_context(registry, "deploy", "prod", "-f", "--"))) == ["--version"]

    def test_repeatable_option_offered_again(self, provider, make_registry):
        registry = make_registry("run --env {var}*")
        assert values(provider.candidates(make_context(registry, "run", "--env", "A=1", "--"))) == ["--env"]

    def test_not_offered_on_empty_word(self, provider, make_registry):
        registry = make_registry("deploy {env} --force")
        assert "--force" not in values(provider.candidates(make_context(registry, "deploy", "prod", trailing=True)))


def test_rank_candidates():
    """Duplicates keep their first occurrence, kinds sort by priority then value."""
    ranked = rank_candidates(
        [
            CompletionCandidate("--all", None, CompletionKind.OPTION),
            CompletionCandidate("zeta", None, CompletionKind.COMMAND),
            CompletionCandidate("beta", None, CompletionKind.ENUM),
            CompletionCandidate("alpha", None, CompletionKind.ENUM),
            CompletionCandidate("zeta", "duplicate", CompletionKind.CUSTOM),
        ]
    )
    assert values(ranked) == ["zeta", "alpha", "beta", "--all"]
    assert ranked[0].description is None


def test_idempotent(provider, make_registry):
    registry = make_registry("deploy {env:Environment} --force", "status")
    context = make_context(registry, "deploy", trailing=True)
    assert provider.candidates(context) == provider.candidates(context)


def test_failing_route_is_skipped(provider, make_registry, mocker):
    mocker.patch("tabroute.completion.provider.walk_route", side_effect=RuntimeError("boom"))
    registry = make_registry("deploy {env:Environment}")
    assert provider.candidates(make_context(registry, "deploy", trailing=True)) == []


def test_options_with_value_route(provider, make_registry):
    registry = make_registry("deploy {env} --version {tag} --force")
    result = provider.candidates(make_context(registry, "deploy", "prod", "--"))
    assert values(result) == ["--force", "--version"]


def test_unique_values_and_options_last(provider, make_registry):
    """Mixed kinds from several routes come back unique and ordered by kind."""
    registry = make_registry("run Slow --verbose", "run {speed:Speed} --fast", "run {env:Environment}")
    result = provider.candidates(make_context(registry, "run", trailing=True))
    assert len(values(result)) == len(set(values(result)))
    kinds = [c.kind for c in result]
    assert kinds == sorted(kinds, key=lambda kind: kind.priority)
    assert values(result)[0] == "Slow"
    assert result[0].kind is CompletionKind.COMMAND
