"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from mdcompose.settings import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("MDCOMPOSE_LOG_LEVEL", "MDCOMPOSE_MAX_CONCURRENCY", "MDCOMPOSE_PORT", "PORT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.max_concurrency is None
        assert settings.effective_port == 8000

    def test_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MDCOMPOSE_MAX_CONCURRENCY", "3")
        monkeypatch.setenv("MDCOMPOSE_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.max_concurrency == 3
        assert settings.log_level == "DEBUG"

    def test_injected_port_takes_precedence(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MDCOMPOSE_PORT", raising=False)
        monkeypatch.setenv("PORT", "9090")
        assert Settings(_env_file=None).effective_port == 9090

    def test_log_level_normalised(self) -> None:
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError, match="unknown log level"):
            Settings(_env_file=None, log_level="verbose")

    def test_request_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, api_max_request_mb=0)
