"""Configuration loading utilities."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from lexifeed import logging_manager

from .constants import DEFAULT_CONFIG_PATH, DEFAULT_LOCAL_CONFIG_PATH, SCRIPT_DIR
from .settings import LexifeedSettings, apply_settings_updates, load_environment_overrides

logger = logging_manager.get_logger().getChild("config")

_ACTIVE_SETTINGS: Optional[LexifeedSettings] = None


def _read_config_json(path: Optional[Path], label: str = "configuration") -> Dict[str, Any]:
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        logger.debug("No %s found at %s.", label, path)
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(
            "Error loading %s from %s: %s. Proceeding without it.",
            label,
            path,
            exc,
            extra={"event": "config.file.invalid"},
        )
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring %s at %s: expected a JSON object", label, path)
        return {}
    return data


def _deep_merge_dict(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def load_configuration(config_file: Optional[str] = None) -> LexifeedSettings:
    """Load the layered configuration (defaults, local file, environment)."""

    global _ACTIVE_SETTINGS

    payload = _read_config_json(DEFAULT_CONFIG_PATH, label="default configuration")

    if config_file:
        override_path = Path(config_file).expanduser()
        if not override_path.is_absolute():
            override_path = (Path.cwd() / override_path).resolve()
    else:
        override_path = DEFAULT_LOCAL_CONFIG_PATH
    payload = _deep_merge_dict(
        payload, _read_config_json(override_path, label="local configuration")
    )

    try:
        settings = LexifeedSettings.model_validate(payload)
    except ValidationError as exc:
        raise RuntimeError("Invalid configuration detected") from exc

    settings = apply_settings_updates(settings, load_environment_overrides())
    _ACTIVE_SETTINGS = settings
    return settings


def get_settings() -> LexifeedSettings:
    """Return the currently loaded :class:`LexifeedSettings` instance."""

    if _ACTIVE_SETTINGS is None:
        return load_configuration()
    return _ACTIVE_SETTINGS


def reset_settings() -> None:
    """Forget the cached settings so the next access reloads them."""

    global _ACTIVE_SETTINGS
    _ACTIVE_SETTINGS = None


def resolve_data_dir(settings: Optional[LexifeedSettings] = None) -> Path:
    """Return the writable data directory, anchored at the project root if relative."""

    active = settings or get_settings()
    path = Path(active.data_dir).expanduser()
    if not path.is_absolute():
        path = SCRIPT_DIR / path
    return path


__all__ = [
    "get_settings",
    "load_configuration",
    "reset_settings",
    "resolve_data_dir",
]
