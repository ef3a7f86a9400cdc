"""Centralized settings for the NRS core.

Every field can be set through an ``NRS_*`` environment variable (e.g.
``NRS_STRICT_NAMES=true``) or a ``.env`` file in the working directory.

Fields
──────
url_scheme    : Scheme expected on content locators ("safe")
strict_names  : Reject names with empty labels instead of splitting literally
data_dir      : Directory holding the file-backed register store
register_file : Register store document (defaults to ``data_dir/registers.json``)
log_level     : structlog level
log_format    : "console" or "json"

Examples:
    >>> from nrs.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.url_scheme
    'safe'

Tags:
    nrs-core, configuration, settings, pydantic, caching
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NrsSettings(BaseSettings):
    """NRS configuration, validated at load time."""

    model_config = SettingsConfigDict(
        env_prefix="NRS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Naming ───────────────────────────────────────────────────
    url_scheme: str = Field(default="safe", description="Scheme expected on content locators")
    strict_names: bool = Field(default=False)

    # ── Storage ──────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path.home() / ".nrs",
        description="Persistent data directory",
    )
    register_file: Path | None = Field(default=None)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="WARNING")
    log_format: str = Field(default="console")

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"console", "json"}:
            raise ValueError(f"log_format must be 'console' or 'json', got {value!r}")
        return value

    @model_validator(mode="after")
    def _default_register_file(self) -> NrsSettings:
        if self.register_file is None:
            self.register_file = self.data_dir / "registers.json"
        return self


_settings_cache: dict[str, NrsSettings] = {}


def get_settings(*, _force_reload: bool = False) -> NrsSettings:
    """Load, validate, and cache a :class:`NrsSettings` instance.

    Raises pydantic's ``ValidationError`` for invalid environment values;
    the CLI turns that into a :class:`~nrs.core.errors.ConfigError`.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    settings = NrsSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings (tests, config reloads)."""
    _settings_cache.clear()


__all__ = ["NrsSettings", "get_settings", "clear_settings_cache"]
