# =============================================================================
# test_config.py - Front-End Configuration Tests
# =============================================================================
# Tests for FrontendConfig defaults and environment overrides.
# =============================================================================

import logging

import pytest
from fnlang.config import FrontendConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without FNLANG_* variables."""
    for name in ("FNLANG_FORMAT", "FNLANG_LOG_LEVEL", "FNLANG_SHOW_TOKENS"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:

    def test_defaults(self):
        config = FrontendConfig()
        assert config.output_format == "sexpr"
        assert config.log_level == "WARNING"
        assert config.show_tokens is False

    def test_from_env_without_variables(self):
        assert FrontendConfig.from_env() == FrontendConfig()

    def test_log_level_value(self):
        assert FrontendConfig(log_level="DEBUG").log_level_value == logging.DEBUG


class TestEnvironment:

    def test_format(self, monkeypatch):
        monkeypatch.setenv("FNLANG_FORMAT", "Tree")
        assert FrontendConfig.from_env().output_format == "tree"

    def test_invalid_format_ignored(self, monkeypatch):
        monkeypatch.setenv("FNLANG_FORMAT", "xml")
        assert FrontendConfig.from_env().output_format == "sexpr"

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("FNLANG_LOG_LEVEL", "debug")
        assert FrontendConfig.from_env().log_level == "DEBUG"

    def test_invalid_log_level_ignored(self, monkeypatch):
        monkeypatch.setenv("FNLANG_LOG_LEVEL", "loud")
        assert FrontendConfig.from_env().log_level == "WARNING"

    @pytest.mark.parametrize("value,expected", [
        ("1", True),
        ("true", True),
        ("YES", True),
        ("0", False),
        ("no", False),
    ])
    def test_show_tokens(self, monkeypatch, value, expected):
        monkeypatch.setenv("FNLANG_SHOW_TOKENS", value)
        assert FrontendConfig.from_env().show_tokens is expected
