"""Runtime settings resolved from the environment and command-line overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping

LOGGER = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}

_ENV_FIELDS: dict[str, str] = {
    "SEGMARK_LOG_LEVEL": "log_level",
    "SEGMARK_LOG_DIR": "log_dir",
    "SEGMARK_LOG_TO_FILE": "log_to_file",
    "SEGMARK_STRICT": "strict",
}


@dataclass(slots=True)
class RuntimeSettings:
    """Settings consumed by the command-line tools."""

    log_level: str = "WARNING"
    log_dir: Path | None = None
    log_to_file: bool = False
    strict: bool = False

    def resolved_level(self) -> int:
        """Return the numeric ``logging`` level for :attr:`log_level`."""

        level = logging.getLevelName(str(self.log_level).strip().upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")
        return level


def load_settings(overrides: Mapping[str, Any] | None = None) -> RuntimeSettings:
    """Build settings from defaults, then environment variables, then ``overrides``."""

    settings = RuntimeSettings()
    env_values: dict[str, Any] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        value = os.environ.get(env_name)
        if value is None:
            continue
        env_values[field_name] = value
    if env_values:
        settings = _apply_overrides(settings, env_values, source="environment")
    if overrides:
        settings = _apply_overrides(settings, overrides, source="overrides")
    return settings


def _apply_overrides(settings: RuntimeSettings, values: Mapping[str, Any], *, source: str) -> RuntimeSettings:
    known = {field.name for field in fields(RuntimeSettings)}
    updates: dict[str, Any] = {}
    for key, value in values.items():
        if key not in known:
            LOGGER.debug("Ignoring unknown %s setting %r", source, key)
            continue
        if value is None:
            continue
        updates[key] = _coerce(key, value)
    if not updates:
        return settings
    return replace(settings, **updates)


def _coerce(key: str, value: Any) -> Any:
    if key in {"log_to_file", "strict"}:
        return _coerce_bool(key, value)
    if key == "log_dir":
        text = str(value).strip()
        return Path(text).expanduser() if text else None
    return str(value)


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUTHY:
        return True
    if text in _FALSY:
        return False
    raise ValueError(f"Setting {key} expects a boolean, got {value!r}")


__all__ = ["RuntimeSettings", "load_settings"]
