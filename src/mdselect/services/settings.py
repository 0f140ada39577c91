"""Smart selection settings and their JSON persistence."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping

__all__ = [
    "SmartSelectSettings",
    "SettingsStore",
    "DEFAULT_LIST_DEPTH_CAP",
    "coerce_field_value",
]

LOGGER = logging.getLogger(__name__)
_DEFAULT_SETTINGS_PATH = Path.home() / ".mdselect" / "settings.json"
_SETTINGS_VERSION = 1
DEFAULT_LIST_DEPTH_CAP = 4
_ENV_FIELDS: Mapping[str, str] = {
    "MDSELECT_LIST_DEPTH_CAP": "list_depth_cap",
    "MDSELECT_MARKDOWN_PRESET": "markdown_preset",
    "MDSELECT_ENABLE_TABLES": "enable_tables",
    "MDSELECT_ENABLE_STRIKETHROUGH": "enable_strikethrough",
    "MDSELECT_TOKEN_CACHE_SIZE": "token_cache_size",
    "MDSELECT_DEBUG_LOGGING": "debug_logging",
}
_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_MARKDOWN_PRESETS = {"commonmark", "default", "zero", "js-default"}


@dataclass(slots=True)
class SmartSelectSettings:
    """Tunable parameters for smart selection and its Markdown engine."""

    list_depth_cap: int = DEFAULT_LIST_DEPTH_CAP
    markdown_preset: str = "commonmark"
    enable_tables: bool = True
    enable_strikethrough: bool = True
    token_cache_size: int = 16
    debug_logging: bool = False

    def __post_init__(self) -> None:
        if self.list_depth_cap < 1:
            raise ValueError("list_depth_cap must be at least 1")
        if self.token_cache_size < 0:
            raise ValueError("token_cache_size cannot be negative")
        if self.markdown_preset not in _MARKDOWN_PRESETS:
            raise ValueError(f"Unknown markdown preset: {self.markdown_preset}")

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(item.name for item in fields(cls))


class SettingsStore:
    """Reads and writes :class:`SmartSelectSettings` as JSON.

    Precedence, lowest first: defaults, the settings file, explicit overrides
    (``--set`` on the command line), then ``MDSELECT_*`` environment variables.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or _DEFAULT_SETTINGS_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self, *, overrides: Mapping[str, Any] | None = None) -> SmartSelectSettings:
        stored = {key: value for key, value in self._read_payload().items() if key in SmartSelectSettings.field_names()}
        try:
            settings = SmartSelectSettings(**stored)
        except (TypeError, ValueError) as exc:
            LOGGER.warning("Ignoring settings in %s with unexpected data: %s", self._path, exc)
            settings = SmartSelectSettings()

        if overrides:
            settings = _merge(settings, overrides, source="CLI")

        env_overrides = _read_environment()
        if env_overrides:
            settings = _merge(settings, env_overrides, source="environment")
        return settings

    def save(self, settings: SmartSelectSettings) -> Path:
        """Write ``settings`` atomically and return the file path."""

        payload = {**asdict(settings), "version": _SETTINGS_VERSION}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        staging = self._path.with_suffix(".tmp")
        staging.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        staging.replace(self._path)
        LOGGER.debug("Settings saved to %s", self._path)
        return self._path

    def _read_payload(self) -> Dict[str, Any]:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as exc:
            LOGGER.warning("Settings file %s is not valid JSON: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            LOGGER.warning("Settings file %s does not hold a JSON object", self._path)
            return {}
        return payload


def _merge(settings: SmartSelectSettings, overrides: Mapping[str, Any], *, source: str) -> SmartSelectSettings:
    known = SmartSelectSettings.field_names()
    changes = {key: coerce_field_value(key, value) for key, value in overrides.items() if key in known and value is not None}
    if not changes:
        return settings
    LOGGER.debug("Applying %s settings overrides: %s", source, sorted(changes))
    return replace(settings, **changes)


def _read_environment() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for env_name, field_name in _ENV_FIELDS.items():
        raw = os.environ.get(env_name)
        if raw is None:
            continue
        try:
            overrides[field_name] = coerce_field_value(field_name, raw)
        except ValueError:
            LOGGER.warning("Ignoring environment override %s=%r", env_name, raw)
    return overrides


def coerce_field_value(name: str, value: Any) -> Any:
    """Convert a textual override such as ``--set list_depth_cap=6`` to the field's type."""

    if not isinstance(value, str):
        return value
    default = getattr(SmartSelectSettings(), name)
    if isinstance(default, bool):
        return value.strip().lower() in _TRUE_VALUES
    if isinstance(default, int):
        return int(value.strip(), 10)
    return value.strip()
