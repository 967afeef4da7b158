"""Configuration loader with YAML, env var resolution, and Pydantic validation.

Loads config from (lowest to highest priority):
1. Model defaults
2. YAML file: ``--config <path>``, else ./shiprate.yaml, ./shiprate.yml,
   ~/.shiprate/config.yaml
3. Environment: UPS_CLIENT_ID, UPS_CLIENT_SECRET, UPS_BASE_URL,
   HTTP_TIMEOUT_MS, TRANSACTION_SRC

${VAR} references in YAML values resolve from the environment at load
time. Config is validated eagerly; a bad value raises ConfigError.
"""

import logging
import math
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

DEFAULT_HTTP_TIMEOUT_MS = 30_000
DEFAULT_TRANSACTION_SRC = "cybership"

# Env var name → (section, field)
_ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "UPS_CLIENT_ID": ("ups", "client_id"),
    "UPS_CLIENT_SECRET": ("ups", "client_secret"),
    "UPS_BASE_URL": ("ups", "base_url"),
    "HTTP_TIMEOUT_MS": (None, "http_timeout_ms"),
    "TRANSACTION_SRC": (None, "transaction_src"),
}


class ConfigError(Exception):
    """Configuration is missing or invalid."""


class UPSConfig(BaseModel):
    """UPS API credentials configuration."""

    client_id: str = ""
    client_secret: str = ""
    base_url: str = ""

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")

    @property
    def is_configured(self) -> bool:
        """Both credential fields are present."""
        return bool(self.client_id and self.client_secret)


class AppConfig(BaseModel):
    """Top-level configuration for shiprate."""

    ups: UPSConfig = UPSConfig()
    http_timeout_ms: float = Field(DEFAULT_HTTP_TIMEOUT_MS, ge=0, allow_inf_nan=False)
    transaction_src: str = DEFAULT_TRANSACTION_SRC


def resolve_env_vars(value: str) -> str:
    """Resolve ${VAR} references in a string from environment variables.

    Missing env vars resolve to empty string.
    """
    def _replace(match: re.Match) -> str:
        return os.environ.get(match.group(1), "")

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, str):
        return resolve_env_vars(data)
    elif isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    return data


def _find_config_file() -> Path | None:
    """Search for a config file in standard locations."""
    candidates = [
        Path.cwd() / "shiprate.yaml",
        Path.cwd() / "shiprate.yml",
        Path.home() / ".shiprate" / "config.yaml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if not math.isfinite(value) or value < 0:
        raise ConfigError("Invalid config HTTP_TIMEOUT_MS: must be a non-negative number.")
    return value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Apply environment overrides on top of file data.

    Empty env values are ignored so an unset-but-exported variable does
    not wipe a value from the file.
    """
    for env_key, (section, field) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_key)
        if raw is None or raw == "":
            continue
        value: Any = _parse_timeout(raw) if env_key == "HTTP_TIMEOUT_MS" else raw
        if section is None:
            data[field] = value
        else:
            target = data.setdefault(section, {})
            if not isinstance(target, dict):
                raise ConfigError(f"Config section '{section}' must be a mapping")
            target[field] = value
    return data


def _read_yaml(path: Path) -> dict[str, Any]:
    logger.info("Loading config from %s", path)
    with open(path) as f:
        raw_data = yaml.safe_load(f) or {}
    if not isinstance(raw_data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return _resolve_env_vars_recursive(raw_data)


def load_config(config_path: str | None = None, require_ups: bool = True) -> AppConfig:
    """Load shiprate configuration.

    Args:
        config_path: Explicit YAML path. If None, standard locations are
            searched; a missing file there is not an error.
        require_ups: Raise when UPS credentials are missing.

    Returns:
        Validated AppConfig.

    Raises:
        ConfigError: On a missing required credential, an explicit path
            that does not exist, or an invalid value.
    """
    if config_path:
        path: Path | None = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        path = _find_config_file()

    data = _read_yaml(path) if path is not None else {}
    data = _apply_env_overrides(data)

    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if require_ups:
        if not config.ups.client_id:
            raise ConfigError(
                "Missing required config: UPS_CLIENT_ID. Set it in shiprate.yaml or environment."
            )
        if not config.ups.client_secret:
            raise ConfigError(
                "Missing required config: UPS_CLIENT_SECRET. Set it in shiprate.yaml or environment."
            )
    return config
