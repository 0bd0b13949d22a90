"""Persisted user preferences (explicit content mode).

Preferences live in a small JSON file of string values, e.g.
{"explicitMode": "false"}. A missing or unreadable file reads as defaults.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from .config import get_image_config

logger = logging.getLogger(__name__)

EXPLICIT_MODE_KEY = "explicitMode"


class SettingsStore:
    """String key-value preferences backed by a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read settings {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed settings file {self.path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        """Persist one value. The file is replaced atomically."""
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.debug(f"Saved {key}={value} to {self.path}")

    def get_explicit_mode(self) -> bool:
        return self.get(EXPLICIT_MODE_KEY) == "true"

    def set_explicit_mode(self, enabled: bool) -> None:
        self.set(EXPLICIT_MODE_KEY, "true" if enabled else "false")
        logger.info(f"Explicit mode {'enabled' if enabled else 'disabled'}")


_store: SettingsStore | None = None


def get_settings_store() -> SettingsStore:
    """Get global SettingsStore at the configured path."""
    global _store
    if _store is None:
        _store = SettingsStore(get_image_config().settings_path)
    return _store


def get_explicit_mode() -> bool:
    """Read the persisted explicit mode flag (False when never set)."""
    return get_settings_store().get_explicit_mode()


def set_explicit_mode(enabled: bool) -> None:
    """Persist the explicit mode flag."""
    get_settings_store().set_explicit_mode(enabled)
