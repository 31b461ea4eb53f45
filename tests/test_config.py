from unittest.mock import MagicMock

import pytest

from tabroute.config import Configuration, coerce_to_bool, load_settings
from tabroute.constants import DEFAULT_RESERVED_COMMAND
from tabroute.models import TabrouteError


def test_config_access(test_logger):
    conf = Configuration({"a": 1, "b": "test"}, logger=test_logger)
    assert conf["a"] == 1
    assert conf.get("b") == "test"
    assert conf.get("c", 3) == 3


def test_get_bool(test_logger):
    conf = Configuration(
        {
            "t1": True,
            "t2": "true",
            "t3": "yes",
            "f1": False,
            "f2": "false",
            "f3": "off",
            "f4": "disabled",
            "invalid": "foo",
            "empty": "",
        },
        logger=test_logger,
    )

    assert conf.get_bool("t1") is True
    assert conf.get_bool("t2") is True
    assert conf.get_bool("t3") is True

    assert conf.get_bool("f1") is False
    assert conf.get_bool("f2") is False
    assert conf.get_bool("f3") is False
    assert conf.get_bool("f4") is False

    # Non-empty unrecognized strings are truthy
    assert conf.get_bool("invalid") is True
    assert conf.get_bool("empty") is False

    assert conf.get_bool("missing", default=True) is True
    assert conf.get_bool("missing", default=False) is False


def test_coerce_to_bool():
    assert coerce_to_bool(None, default=True) is True
    assert coerce_to_bool(" No ") is False
    assert coerce_to_bool(0) is False
    assert coerce_to_bool([1]) is True


def test_get_str(test_logger):
    conf = Configuration({"a": "text", "b": 123}, logger=test_logger)
    assert conf.get_str("a") == "text"
    assert conf.get_str("b") == "123"
    assert conf.get_str("missing", "default") == "default"


def test_get_choice():
    logger = MagicMock()
    conf = Configuration({"mode": "Dynamic", "bad": "hybrid"}, logger=logger)
    assert conf.get_choice("mode", ("static", "dynamic"), "static") == "dynamic"
    logger.warning.assert_not_called()
    assert conf.get_choice("bad", ("static", "dynamic"), "static") == "static"
    logger.warning.assert_called_once()


class TestLoadSettings:
    """Settings file and environment overrides."""

    def test_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.toml", environ={})
        assert settings.mode == "static"
        assert settings.reserved_command == DEFAULT_RESERVED_COMMAND
        assert settings.program_name_in_words is True
        assert settings.app_name is None

    def test_file(self, tmp_path):
        path = tmp_path / "completion.toml"
        path.write_text(
            '[completion]\nmode = "dynamic"\nreserved_command = "__tab"\nprogram_name_in_words = "no"\napp_name = "tool"\n',
            encoding="utf-8",
        )
        settings = load_settings(path, environ={})
        assert settings.mode == "dynamic"
        assert settings.reserved_command == "__tab"
        assert settings.program_name_in_words is False
        assert settings.app_name == "tool"

    def test_invalid_mode_in_file(self, tmp_path):
        path = tmp_path / "completion.toml"
        path.write_text('[completion]\nmode = "hybrid"\n', encoding="utf-8")
        assert load_settings(path, environ={}).mode == "static"

    def test_environment(self, tmp_path):
        settings = load_settings(
            tmp_path / "missing.toml",
            environ={"TABROUTE_COMPLETION_MODE": "Dynamic", "TABROUTE_APP_NAME": "tool"},
        )
        assert settings.mode == "dynamic"
        assert settings.app_name == "tool"

    def test_invalid_environment_mode(self, tmp_path):
        settings = load_settings(tmp_path / "missing.toml", environ={"TABROUTE_COMPLETION_MODE": "hybrid"})
        assert settings.mode == "static"

    def test_broken_file(self, tmp_path):
        path = tmp_path / "completion.toml"
        path.write_text("[completion\nmode =", encoding="utf-8")
        with pytest.raises(TabrouteError, match="Invalid settings file"):
            load_settings(path, environ={})
