"""
Client-side session persistence.

The browser kept two localStorage keys, ``token`` and ``user``; here the same
two keys live in a small key/value storage that is either a JSON file on disk
or a plain dict. Reads and writes are unlocked: one active process is assumed.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class MemoryStorage:
    """String key/value storage kept in memory."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """String key/value storage persisted as one JSON object in a file."""

    def __init__(self, path):
        self.path = Path(os.path.expanduser(str(path)))

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)


class SessionStore:
    """Current credential and user profile, shared by every page."""

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else MemoryStorage()

    @property
    def token(self) -> Optional[str]:
        return self.storage.get(TOKEN_KEY)

    @property
    def user(self) -> Optional[dict[str, Any]]:
        raw = self.storage.get(USER_KEY)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def save(self, token: str, user: Optional[dict[str, Any]]) -> None:
        """Write both keys after a successful login or signup."""
        self.storage.set(TOKEN_KEY, token)
        self.storage.set(USER_KEY, json.dumps(user))

    def clear(self) -> None:
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(USER_KEY)
