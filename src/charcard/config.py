from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .transforms import OBSOLESCENCE_NOTICE

LOGGER = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CHARCARD_CONFIG"


@dataclass(frozen=True)
class Settings:
    """Rendering and runtime options; defaults match the library defaults."""

    indent: int = 2
    ensure_ascii: bool = False
    log_level: str = "WARNING"
    obsolescence_notice: str = OBSOLESCENCE_NOTICE


_FIELD_TYPES = {"indent": int, "ensure_ascii": bool, "log_level": str, "obsolescence_notice": str}


class SettingsLoader:
    """Utility for loading and caching settings files."""

    _cache: Dict[Path, Dict[str, Any]] = {}

    @classmethod
    def load(cls, path: Path) -> Dict[str, Any]:
        resolved = path.resolve()
        if resolved in cls._cache:
            return cls._cache[resolved]
        try:
            with open(resolved, "r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
        except OSError as exc:
            raise ConfigError(f"Cannot read settings file {resolved}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Malformed settings file {resolved}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {resolved} must contain a mapping")
        cls._cache[resolved] = data
        return data

    @classmethod
    def clear(cls) -> None:
        cls._cache.clear()


def _coerce(raw: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(Settings)}
    values: Dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            LOGGER.warning("Ignoring unknown settings key: %s", key)
            continue
        expected = _FIELD_TYPES[key]
        # bool is an int subclass; an indent of ``true`` is still a mistake.
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(
                f"Setting '{key}' must be {expected.__name__}, got {type(value).__name__}"
            )
        values[key] = value
    if values.get("indent", 0) < 0:
        raise ConfigError("Setting 'indent' must not be negative")
    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()
        if not isinstance(logging.getLevelName(values["log_level"]), int):
            raise ConfigError(f"Unknown log level: {values['log_level']}")
    return values


def load_settings(path: Optional[str | Path] = None) -> Settings:
    """Load settings from ``path``, ``$CHARCARD_CONFIG`` or the built-in defaults."""

    source = path or os.environ.get(CONFIG_ENV_VAR)
    if not source:
        return Settings()
    raw = SettingsLoader.load(Path(source))
    return replace(Settings(), **_coerce(raw))


__all__ = ["CONFIG_ENV_VAR", "Settings", "SettingsLoader", "load_settings"]
