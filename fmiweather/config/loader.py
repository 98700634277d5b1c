"""YAML config loader and lookup helpers."""

from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from fmiweather.config.schema import ServiceConfig
from fmiweather.errors import ConfigurationError


def load_config(path: str | Path | None = None) -> ServiceConfig:
    """Load and validate config from a YAML file.

    With no path, or an empty file, every section takes its defaults.
    """
    if path is None:
        return ServiceConfig()

    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return ServiceConfig(**raw)


def get_config_value(config: ServiceConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'server.port'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def resolve_timezone(config: ServiceConfig) -> tzinfo | None:
    """Zone used for local observation dates. None means the system zone."""
    name = config.server.local_timezone
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone: {name}") from e
