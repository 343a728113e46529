"""Server configuration: pydantic settings loaded from an optional YAML file.

Example ``localmcp.yaml``::

    name: polymarket-mcp-server
    framing: chunk
    log_level: INFO
    store:
      backend: sqlite
      path: ${HOME}/.local/share/localmcp/polymarket.db
    telemetry:
      enabled: false
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from localmcp import __version__
from localmcp.protocol.models import PROTOCOL_VERSION

DEFAULT_SERVER_NAME = "polymarket-mcp-server"
DEFAULT_DB_PATH = "data/polymarket.db"


class ConfigError(Exception):
    """Raised when a settings file fails parsing or validation."""


class StoreSettings(BaseModel):
    backend: Literal["sqlite", "memory"] = "sqlite"
    path: str = DEFAULT_DB_PATH


class FileSettings(BaseModel):
    encoding: str = "utf-8"


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Top-level server settings."""

    name: str = DEFAULT_SERVER_NAME
    version: str = __version__
    protocol_version: str = PROTOCOL_VERSION
    framing: Literal["chunk", "line"] = "chunk"
    log_level: str = "INFO"
    store: StoreSettings = Field(default_factory=StoreSettings)
    files: FileSettings = Field(default_factory=FileSettings)
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            msg = f"unknown log level '{value}'"
            raise ValueError(msg)
        return level


class SettingsLoader:
    """Load and validate a YAML settings file into :class:`ServerSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing. An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            return ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


def load_settings(
    path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> ServerSettings:
    """Load settings from *path* (if given) and apply non-``None`` overrides.

    Override keys use dotted paths for nested sections, e.g.
    ``{"store.path": "x.db"}``.
    """
    settings = SettingsLoader(path).load() if path is not None else ServerSettings()
    data = settings.model_dump()
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        section, _, field = key.rpartition(".")
        target = data[section] if section else data
        target[field] = value
    try:
        return ServerSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
