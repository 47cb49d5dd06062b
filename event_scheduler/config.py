"""Service configuration loaded from ``EVENTS_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

ENV_PREFIX = "EVENTS_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})
_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
_LOG_FORMATS = frozenset({"text", "json"})


class ConfigError(Exception):
    """Raised when an environment setting is malformed or invalid."""


class OverlapScope(StrEnum):
    """Which events a new interval is checked against on a given day."""

    GLOBAL = "global"
    OWNER = "owner"


@dataclass(frozen=True)
class Settings:
    app_title: str = "Event Scheduling Service"
    log_level: str = "INFO"
    log_format: str = "text"
    overlap_scope: OverlapScope = OverlapScope.GLOBAL
    seed_demo_data: bool = False


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build ``Settings`` from *env* (defaults to ``os.environ``)."""
    source = os.environ if env is None else env
    defaults = Settings()

    def get(key: str) -> str | None:
        return source.get(ENV_PREFIX + key)

    log_level = (get("LOG_LEVEL") or defaults.log_level).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"{ENV_PREFIX}LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")

    log_format = (get("LOG_FORMAT") or defaults.log_format).strip().lower()
    if log_format not in _LOG_FORMATS:
        raise ConfigError(f"{ENV_PREFIX}LOG_FORMAT must be 'text' or 'json'")

    raw_scope = (get("OVERLAP_SCOPE") or defaults.overlap_scope).strip().lower()
    try:
        overlap_scope = OverlapScope(raw_scope)
    except ValueError:
        raise ConfigError(
            f"{ENV_PREFIX}OVERLAP_SCOPE must be 'global' or 'owner', got {raw_scope!r}"
        ) from None

    raw_seed = get("SEED_DEMO_DATA")
    seed = (
        _parse_bool(ENV_PREFIX + "SEED_DEMO_DATA", raw_seed)
        if raw_seed is not None
        else defaults.seed_demo_data
    )

    return Settings(
        app_title=(get("APP_TITLE") or defaults.app_title).strip(),
        log_level=log_level,
        log_format=log_format,
        overlap_scope=overlap_scope,
        seed_demo_data=seed,
    )
