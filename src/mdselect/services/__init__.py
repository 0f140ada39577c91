"""Service layer helpers (settings persistence)."""

from .settings import DEFAULT_LIST_DEPTH_CAP, SettingsStore, SmartSelectSettings

__all__ = ["DEFAULT_LIST_DEPTH_CAP", "SettingsStore", "SmartSelectSettings"]
