"""Client configuration (pydantic models) and the YAML loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError, ConfigErrorCodes

DEFAULT_BASE_URL = "https://ismp.crpt.ru"

# Key of the client's block inside a shared application YAML file.
CONFIG_SECTION = "crpt_api"

# Settings merged key by key when an environment file overrides them.
_MAPPING_SETTINGS = ("default_headers", "log")


class LogSection(BaseModel):
    """Logging settings. Applied by the client only when present."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "json"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class CrptApiConfig(BaseModel):
    """Construction-time settings of a CrptApi client.

    Immutable once built, so it can be shared between threads.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    request_limit: int = Field(default=10, gt=0)
    window_seconds: float = Field(default=1.0, gt=0)
    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = Field(default=10.0, gt=0)
    read_timeout: float = Field(default=30.0, gt=0)
    default_headers: dict[str, str] = Field(default_factory=dict)
    log: LogSection | None = None


def _read_settings(path: Path) -> dict[str, Any]:
    """Return the client's settings block of a YAML file.

    The block is the `crpt_api:` mapping when the file has one, otherwise
    the whole document.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"{path}: top level must be a mapping",
        )
    settings = document.get(CONFIG_SECTION, document)
    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"{path}: '{CONFIG_SECTION}' must be a mapping",
        )
    return settings


def _overlay(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = {**base, **override}
    for key in _MAPPING_SETTINGS:
        if isinstance(base.get(key), dict) and isinstance(override.get(key), dict):
            merged[key] = {**base[key], **override[key]}
    return merged


def _apply_auth_token(settings: dict[str, Any]) -> dict[str, Any]:
    token = settings.pop("auth_token", None)
    if token is None:
        return settings
    headers = dict(settings.get("default_headers") or {})
    headers["Authorization"] = f"Bearer {token}"
    settings["default_headers"] = headers
    return settings


def _describe(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
        for err in e.errors()
    )


def load_config(path: Path, env_path: Path | None = None) -> CrptApiConfig:
    """Load a CrptApiConfig from YAML.

    path: settings file (required). It may be a shared application file with
        the client's settings under a `crpt_api:` key.
    env_path: per-environment overrides, applied when the file exists.
        `default_headers` and `log` merge key by key, other settings are replaced.

    An `auth_token` setting becomes an `Authorization: Bearer <token>` default
    header, replacing any Authorization header given explicitly.
    """
    settings = _read_settings(path)
    if env_path is not None and env_path.exists():
        settings = _overlay(settings, _read_settings(env_path))
    settings = _apply_auth_token(settings)
    try:
        return CrptApiConfig.model_validate(settings)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Invalid crpt_api settings: {_describe(e)}",
            cause=e,
        ) from e
