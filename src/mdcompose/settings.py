"""Shared settings loaded from environment / .env file."""

from __future__ import annotations

import logging

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_log_level(value: str) -> str:
    """Upper-case *value*, raising ``ValueError`` unless it names a logging level."""
    level = value.strip().upper()
    if level not in logging.getLevelNamesMapping():
        choices = ", ".join(sorted(logging.getLevelNamesMapping()))
        raise ValueError(f"unknown log level '{value}' (choose from {choices})")
    return level


class Settings(BaseSettings):
    """Configuration for the mdcompose CLI and REST API server.

    Values are read from ``MDCOMPOSE_*`` environment variables and from a
    ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="MDCOMPOSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Shared
    log_level: str = "INFO"

    # Collector
    max_concurrency: int | None = None  # None -> os.cpu_count()

    # REST API
    api_server_host: str = "localhost"
    api_server_port: int = 8000
    api_max_request_mb: int = Field(default=20, ge=1)
    # container platforms inject a bare PORT; takes precedence
    port: int | None = Field(default=None, validation_alias=AliasChoices("MDCOMPOSE_PORT", "PORT"))

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        return parse_log_level(value)

    @property
    def effective_port(self) -> int:
        """Return the port to listen on (injected PORT takes precedence)."""
        return self.port if self.port is not None else self.api_server_port
