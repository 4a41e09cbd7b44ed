"""Token Storage — persisted session token and user summary for the API client.

Invariants:
    - Token lives under "rs_token", user summary (JSON) under "rs_user"
    - clear() removes both keys together
    - A corrupt user entry reads as None, never raises

Design Decisions:
    - Key/value backend mirrors browser localStorage: a JSON file on disk for
      real use, an in-memory dict for tests
"""

import json
import logging
import os
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

TOKEN_KEY = "rs_token"
USER_KEY = "rs_user"


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class MemoryBackend:
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileBackend:
    """Whole-file JSON object, rewritten on every change."""

    def __init__(self, path: str | Path):
        self.path = Path(os.path.expanduser(str(path)))

    def _read(self) -> dict[str, str]:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class TokenStorage:
    """Session token + user summary on top of a key/value backend."""

    def __init__(self, backend: KeyValueBackend | None = None):
        self.backend = backend or MemoryBackend()

    def get_token(self) -> str | None:
        return self.backend.get(TOKEN_KEY)

    def set_token(self, token: str) -> None:
        self.backend.set(TOKEN_KEY, token)

    def get_user(self) -> dict | None:
        raw = self.backend.get(USER_KEY)
        if raw is None:
            return None
        try:
            user = json.loads(raw)
        except ValueError:
            return None
        return user if isinstance(user, dict) else None

    def set_user(self, user: dict) -> None:
        self.backend.set(USER_KEY, json.dumps(user, ensure_ascii=False))

    def clear(self) -> None:
        self.backend.remove(TOKEN_KEY)
        self.backend.remove(USER_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.get_token())
