"""
Settings resolution (``pizzeria_config.settings``).

Resolution order, lowest to highest precedence:
    1. PizzeriaSettings defaults
    2. YAML file (``path`` argument, else ``$PIZZERIA_CONFIG`` when set)
    3. Environment variables

Environment variables:
    DATABASE_URL                     database_url
    PIZZERIA_ECHO_SQL                echo_sql ("1", "true", "yes", "on")
    PIZZERIA_MAX_ATTEMPTS            max_attempts
    PIZZERIA_RETRY_BACKOFF_SECONDS   retry_backoff_seconds
    PIZZERIA_REPORT_WINDOW_DAYS      report_window_days
    PIZZERIA_TOP_INGREDIENTS_LIMIT   top_ingredients_limit
    PIZZERIA_LOG_LEVEL               log_level
"""

from __future__ import annotations

import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Callable, Mapping

from pizzeria_config.loader import load_yaml_file
from pizzeria_config.schema import PizzeriaSettings

CONFIG_PATH_ENV = "PIZZERIA_CONFIG"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot parse boolean from {value!r}")


def _parse_optional_int(value: Any) -> int | None:
    if value is None or (isinstance(value, str) and value.strip().lower() in ("", "none")):
        return None
    return int(value)


_ENV_VARS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "DATABASE_URL": ("database_url", str),
    "PIZZERIA_ECHO_SQL": ("echo_sql", _parse_bool),
    "PIZZERIA_MAX_ATTEMPTS": ("max_attempts", int),
    "PIZZERIA_RETRY_BACKOFF_SECONDS": ("retry_backoff_seconds", float),
    "PIZZERIA_REPORT_WINDOW_DAYS": ("report_window_days", _parse_optional_int),
    "PIZZERIA_TOP_INGREDIENTS_LIMIT": ("top_ingredients_limit", int),
    "PIZZERIA_LOG_LEVEL": ("log_level", lambda v: str(v).upper()),
}

_FIELD_PARSERS: dict[str, Callable[[Any], Any]] = {
    field: parser for field, parser in _ENV_VARS.values()
}


def load_settings(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> PizzeriaSettings:
    """
    Resolve settings from defaults, an optional YAML file and the environment.

    Raises:
        FileNotFoundError: if an explicit config file does not exist.
        KeyError: if the YAML file names an unknown setting.
        ValueError: if a value cannot be parsed or is out of range.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = {}

    config_path = path if path is not None else env.get(CONFIG_PATH_ENV)
    if config_path:
        known = {f.name for f in fields(PizzeriaSettings)}
        for key, raw in load_yaml_file(Path(config_path)).items():
            if key not in known:
                raise KeyError(f"Unknown setting {key!r} in {config_path}")
            values[key] = _FIELD_PARSERS[key](raw) if raw is not None else None

    for var, (field, parser) in _ENV_VARS.items():
        if var in env:
            try:
                values[field] = parser(env[var])
            except ValueError as exc:
                raise ValueError(f"{var}: {exc}") from exc

    return PizzeriaSettings(**values)
