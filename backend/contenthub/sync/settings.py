"""Repository sync configuration and its persistence boundary."""

from __future__ import annotations

import json
import os
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from .exceptions import SyncConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_KEY = "githubSettings"

# dataclass field -> persisted key
_WIRE_KEYS = {
    "token": "token",
    "owner": "owner",
    "repo": "repo",
    "branch": "branch",
    "path": "path",
    "commit_message": "commitMessage",
}


@dataclass(frozen=True)
class SyncSettings:
    token: str = ""
    owner: str = ""
    repo: str = ""
    branch: str = "main"
    path: str = ""
    commit_message: str = ""

    @classmethod
    def from_wire(cls, data: Optional[Dict[str, Any]]) -> "SyncSettings":
        data = data or {}
        values = {
            field: str(data.get(key) or "").strip()
            for field, key in _WIRE_KEYS.items()
        }
        values["branch"] = values["branch"] or "main"
        return cls(**values)

    def to_wire(self) -> Dict[str, str]:
        values = asdict(self)
        return {key: values[field] for field, key in _WIRE_KEYS.items()}

    def merge(self, data: Dict[str, Any]) -> "SyncSettings":
        """Apply a partial wire-format update; a masked token keeps the old one."""
        current = self.to_wire()
        for key in _WIRE_KEYS.values():
            if key in data and data[key] is not None:
                current[key] = data[key]
        if current["token"] == mask_token(self.token) and self.token:
            current["token"] = self.token
        return SyncSettings.from_wire(current)

    def missing_fields(self) -> List[str]:
        return [name for name in ("token", "owner", "repo") if not getattr(self, name)]

    def require_complete(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise SyncConfigurationError(
                "Repository sync settings are incomplete "
                f"(missing: {', '.join(missing)}). Complete the sync settings and try again."
            )

    def public(self) -> Dict[str, Any]:
        data = self.to_wire()
        data["token"] = mask_token(self.token)
        data["configured"] = not self.missing_fields()
        return data


def mask_token(token: str) -> str:
    if not token:
        return ""
    return "*" * 8 + token[-4:] if len(token) > 4 else "*" * 8


class SettingsStore(ABC):
    """Key-value persistence for JSON text, injectable for tests."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        ...


class InMemorySettingsStore(SettingsStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileSettingsStore(SettingsStore):
    """
    Keys stored as members of one JSON document on disk.

    Writes replace the file atomically; concurrent savers still race and the
    last one wins.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as fh:
            try:
                data = json.load(fh)
            except json.JSONDecodeError:
                logger.error("Settings file %s is not valid JSON; ignoring it", self.path)
                return {}
        return data if isinstance(data, dict) else {}

    def read(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp_path, self.path)


def load_settings(store: SettingsStore) -> SyncSettings:
    raw = store.read(SETTINGS_KEY)
    if not raw:
        return SyncSettings()
    try:
        return SyncSettings.from_wire(json.loads(raw))
    except (json.JSONDecodeError, TypeError, AttributeError):
        logger.error("Failed to parse stored sync settings; using defaults")
        return SyncSettings()


def save_settings(store: SettingsStore, settings: SyncSettings) -> None:
    store.write(SETTINGS_KEY, json.dumps(settings.to_wire()))
