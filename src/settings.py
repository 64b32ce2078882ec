"""Runtime settings: YAML file, environment and CLI overrides.

Precedence, highest first: CLI arguments, environment variables, the YAML
config file, built-in defaults from ``Constants``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

import yaml
from jsonschema import Draft7Validator

from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "classpath": {"type": "array", "items": {"type": "string"}},
        "url_prefix": {"type": "string", "minLength": 1},
        "cdn_prefix": {"type": ["string", "null"]},
        "include_version": {"type": "boolean"},
        "max_workers": {"type": "integer", "minimum": 1},
        "server": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "host": {"type": "string", "minLength": 1},
                "port": {"type": "integer", "minimum": 0, "maximum": 65535},
            },
        },
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
    },
}


@dataclass
class Settings:
    """Resolved runtime settings."""

    classpath: List[str] = field(default_factory=list)
    url_prefix: str = Constants.DEFAULT_URL_PREFIX
    cdn_prefix: Optional[str] = None
    include_version: bool = True
    max_workers: int = 1
    host: str = Constants.SERVER_HOST
    port: int = Constants.SERVER_PORT
    log_level: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """Build from an already validated config mapping."""
        server = data.get("server") or {}
        return cls(
            classpath=list(data.get("classpath") or []),
            url_prefix=data.get("url_prefix", Constants.DEFAULT_URL_PREFIX),
            cdn_prefix=data.get("cdn_prefix"),
            include_version=bool(data.get("include_version", True)),
            max_workers=int(data.get("max_workers", 1)),
            host=server.get("host", Constants.SERVER_HOST),
            port=int(server.get("port", Constants.SERVER_PORT)),
            log_level=data.get("log_level"),
        )


def validate_config(data: Any, source: str = "<config>") -> None:
    """Validate a config mapping against ``SETTINGS_SCHEMA``.

    Raises:
        ConfigError: on the first schema violation.
    """
    validator = Draft7Validator(SETTINGS_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join(str(p) for p in first.path)
        raise ConfigError(f"Invalid config in {source} at '{path}': {first.message}")


def find_config_file(explicit: Optional[str] = None) -> Optional[str]:
    """Return the config file to load, or None.

    An explicit path must exist; otherwise the working directory and then the
    user config path are searched.
    """
    if explicit:
        if not os.path.isfile(explicit):
            raise ConfigError(f"Config file not found: {explicit}")
        return explicit
    for name in Constants.CONFIG_FILE_NAMES:
        if os.path.isfile(name):
            return name
    user_path = os.path.expanduser(Constants.USER_CONFIG_PATH)
    if os.path.isfile(user_path):
        return user_path
    return None


def load_config_file(path: str) -> Dict[str, Any]:
    """Parse and validate a YAML config file.

    Raises:
        ConfigError: when the file cannot be read, is not YAML or fails validation.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Could not parse config file {path}: {exc}") from exc
    if data is None:
        return {}
    validate_config(data, path)
    return data


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    classpath = env.get(Constants.ENV_CLASSPATH)
    if classpath:
        overrides["classpath"] = [entry for entry in classpath.split(os.pathsep) if entry]
    url_prefix = env.get(Constants.ENV_URL_PREFIX)
    if url_prefix:
        overrides["url_prefix"] = url_prefix
    cdn_prefix = env.get(Constants.ENV_CDN_PREFIX)
    if cdn_prefix:
        overrides["cdn_prefix"] = cdn_prefix
    max_workers = env.get(Constants.ENV_MAX_WORKERS)
    if max_workers:
        try:
            overrides["max_workers"] = max(1, int(max_workers))
        except ValueError as exc:
            raise ConfigError(
                f"{Constants.ENV_MAX_WORKERS} must be an integer, got {max_workers!r}"
            ) from exc
    return overrides


def load_settings(
    config_path: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """Load settings with CLI > environment > file > defaults precedence.

    Args:
        config_path: Explicit YAML config path (``--config``).
        env: Environment mapping; defaults to ``os.environ``.
        overrides: CLI values; ``None`` entries are ignored.

    Returns:
        Settings: the merged settings.

    Raises:
        ConfigError: for unreadable or invalid configuration.
    """
    env = os.environ if env is None else env
    path = find_config_file(config_path)
    settings = Settings.from_mapping(load_config_file(path)) if path else Settings()
    if path:
        logger.info("Loaded config from: %s", path)

    merged = dict(_env_overrides(env))
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    if merged:
        settings = replace(settings, **merged)
    return settings
