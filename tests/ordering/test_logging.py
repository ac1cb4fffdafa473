"""Tests for the structlog configuration helpers."""

import pytest
import structlog
from ordering.utils.logging import add_context, clear_context, get_log_level


class TestLogLevel:
    @pytest.mark.parametrize(
        "env,level",
        [("production", "INFO"), ("staging", "INFO"), ("development", "DEBUG"), ("test", "WARNING")],
    )
    def test_level_follows_environment(self, monkeypatch, env, level):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", env)
        assert get_log_level() == level

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("PROTEAN_ENV", "production")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"

    def test_unknown_environment_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "qa")
        assert get_log_level() == "INFO"


class TestContext:
    def test_bind_and_clear(self):
        clear_context()
        add_context(request_id="req-1", path="/cart")
        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1", "path": "/cart"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
