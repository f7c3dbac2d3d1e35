"""CueLine configuration settings."""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cueline.exceptions import ConfigurationError, check_config_keys

DEFAULT_PLACEHOLDER_FILES = ["ali1.mp3", "ali2.mp3", "ayse1.mp3", "ayse2.mp3"]


class CueLineSettings(BaseSettings):
    """CueLine configuration settings.

    Settings are loaded with the following precedence (highest to lowest):
    1. CLI arguments (when provided via command flags)
       Example: cueline init --db-path /custom/path.db

    2. Config file values (YAML, TOML, or JSON)
       Example: ~/.config/cueline/config.yaml

    3. Environment variables (prefixed with CUELINE_)
       Example: export CUELINE_DATABASE_PATH=/data/rehearsal.db

    4. .env file in the current directory

    5. Default values (defined in field declarations below)
    """

    model_config = SettingsConfigDict(
        env_prefix="CUELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database settings
    database_path: Path = Field(
        default_factory=lambda: Path.cwd() / "cueline.db",
        description="Path to the SQLite database file",
    )
    database_timeout: float = Field(
        default=30.0,
        description="SQLite connection timeout in seconds",
        ge=0.1,
    )
    database_foreign_keys: bool = Field(
        default=True,
        description="Enable foreign key constraints",
    )
    database_journal_mode: str = Field(
        default="WAL",
        description="SQLite journal mode (DELETE, TRUNCATE, PERSIST, MEMORY, WAL, OFF)",
        pattern="^(DELETE|TRUNCATE|PERSIST|MEMORY|WAL|OFF)$",
    )
    database_synchronous: str = Field(
        default="NORMAL",
        description="SQLite synchronous mode (OFF, NORMAL, FULL, EXTRA)",
        pattern="^(OFF|NORMAL|FULL|EXTRA)$",
    )

    # Audio asset settings
    audio_dir: Path = Field(
        default_factory=lambda: Path.cwd() / "audio",
        description="Directory holding dialogue audio files",
    )
    audio_url_prefix: str = Field(
        default="/audio",
        description="URL prefix under which audio files are served",
        pattern="^/[A-Za-z0-9_\\-/]*$",
    )
    audio_placeholder_files: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PLACEHOLDER_FILES),
        description="Audio files created by the ensure-audio-files operation",
    )

    # API settings
    api_host: str = Field(
        default="127.0.0.1",
        description="Host address for the REST API",
    )
    api_port: int = Field(
        default=8000,
        description="Port for the REST API",
        ge=1,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed to call the REST API",
    )

    # Debug settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Logging settings
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        pattern="^(?i)(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )
    log_format: str = Field(
        default="console",
        description="Log output format (console, json, structured)",
        pattern="^(?i)(console|json|structured)$",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file path",
    )

    @field_validator("database_path", "audio_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        """Expand environment variables and ~ and resolve the path."""
        if v is None:
            return None
        if isinstance(v, str):
            expanded = os.path.expandvars(v)
            return Path(expanded).expanduser().resolve()
        if isinstance(v, Path):
            return v.expanduser().resolve()
        raise ValueError(
            f"Path fields must be str or Path, got {type(v).__name__}: {v!r}"
        )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Normalize log level to uppercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.upper()
        raise ValueError(f"log_level must be a string, got {type(v).__name__}")

    @field_validator("log_format", mode="before")
    @classmethod
    def normalize_log_format(cls, v: Any) -> str:
        """Normalize log format to lowercase for case-insensitive handling."""
        if isinstance(v, str):
            return v.lower()
        raise ValueError(f"log_format must be a string, got {type(v).__name__}")

    @field_validator("audio_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Keep the prefix without a trailing slash ("/" stays as is)."""
        return v.rstrip("/") or "/"

    @classmethod
    def from_env(cls) -> CueLineSettings:
        """Create settings from environment variables."""
        return cls()

    @classmethod
    def from_file(cls, config_path: Path | str) -> CueLineSettings:
        """Load settings from a configuration file.

        Args:
            config_path: Path to configuration file (YAML, TOML, or JSON).

        Returns:
            Settings loaded from the file.

        Raises:
            ConfigurationError: If file format is not supported.
            FileNotFoundError: If config file doesn't exist.
        """
        return cls(**cls._read_config_file(config_path))

    @staticmethod
    def _read_config_file(config_path: Path | str) -> dict[str, Any]:
        """Read raw key/value pairs from a YAML, TOML or JSON file."""
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()

        if suffix in {".yml", ".yaml"}:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        elif suffix == ".toml":
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        elif suffix == ".json":
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        else:
            raise ConfigurationError(
                message=f"Unsupported configuration file format: {suffix}",
                hint="Use one of the supported formats: .yml, .yaml, .toml, or .json",
                details={
                    "file": str(config_path),
                    "supported_formats": [".yml", ".yaml", ".toml", ".json"],
                },
            )

        check_config_keys(data)
        return dict(data)

    @classmethod
    def from_multiple_sources(
        cls,
        config_files: list[Path | str] | None = None,
        cli_args: dict[str, Any] | None = None,
    ) -> CueLineSettings:
        """Load settings with proper precedence from multiple sources.

        Config file values override environment variables (later files win)
        and CLI arguments override both. ``None`` CLI values are ignored.
        """
        data: dict[str, Any] = {}
        for config_file in config_files or []:
            data.update(cls._read_config_file(config_file))

        settings = cls(**data)

        if cli_args:
            cli_data = {k: v for k, v in cli_args.items() if v is not None}
            if cli_data:
                updated = settings.model_dump()
                updated.update(cli_data)
                settings = cls(**updated)

        return settings


# Global settings instance
_settings: CueLineSettings | None = None


def _get_config_paths() -> list[Path | str]:
    """Existing config files in priority order (later files override earlier)."""
    potential_paths = [
        Path.home() / ".config" / "cueline" / "config.yaml",
        Path.home() / ".config" / "cueline" / "config.json",
        Path.home() / ".config" / "cueline" / "config.toml",
        Path.cwd() / "cueline.yaml",
        Path.cwd() / "cueline.json",
        Path.cwd() / "cueline.toml",
    ]

    existing: list[Path | str] = []
    for path in potential_paths:
        try:
            if path.is_file():
                existing.append(path)
        except OSError:
            continue
    return existing


def get_settings() -> CueLineSettings:
    """Get the global settings instance.

    Returns:
        Global CueLineSettings instance.
    """
    global _settings
    if _settings is None:
        config_paths = _get_config_paths()
        if config_paths:
            _settings = CueLineSettings.from_multiple_sources(config_files=config_paths)
        else:
            _settings = CueLineSettings.from_env()
    return _settings


def set_settings(settings: CueLineSettings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset the global settings instance.

    Forces recreation of settings on next call to get_settings(),
    useful for tests that modify environment variables.
    """
    global _settings
    _settings = None


def get_settings_for_cli(
    config_file: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> CueLineSettings:
    """Get settings for CLI commands with consistent precedence.

    Args:
        config_file: Optional specific config file to load instead of the
            standard locations.
        cli_overrides: CLI argument overrides; only non-None values apply.

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist.
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        return CueLineSettings.from_multiple_sources(
            config_files=[config_file],
            cli_args=cli_overrides,
        )

    settings = get_settings()
    filtered = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    if filtered:
        data = settings.model_dump()
        data.update(filtered)
        settings = CueLineSettings(**data)
    return settings
