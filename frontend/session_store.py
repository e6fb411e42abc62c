"""
frontend/session_store.py
Persisted key-value session state (bearer token + role).

The store holds exactly two entries, "token" and "userRole". They are always
written and removed in a single storage write, so a reader observes both or
neither. A record that somehow holds only one of them is reported as absent.

Storage backends are injectable:
- FileStorage: JSON document on disk, survives reloads and restarts
- MemoryStorage: plain dict, for tests and throwaway sessions
- MappingStorage: any mutable mapping (e.g. st.session_state), survives reruns
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional

try:
    from frontend.config import log
except ModuleNotFoundError:
    from config import log


TOKEN_KEY = "token"
ROLE_KEY = "userRole"


@dataclass(frozen=True)
class Session:
    token: str
    role: str


class MemoryStorage:
    """Dict-backed storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self) -> Dict[str, str]:
        return dict(self._data)

    def write(self, data: Dict[str, str]) -> None:
        self._data = dict(data)


class MappingStorage:
    """Storage living under one key of an existing mapping."""

    def __init__(self, mapping: MutableMapping[str, Any], key: str = "_session_store"):
        self._mapping = mapping
        self._key = key

    def read(self) -> Dict[str, str]:
        return dict(self._mapping.get(self._key) or {})

    def write(self, data: Dict[str, str]) -> None:
        self._mapping[self._key] = dict(data)


class FileStorage:
    """JSON file storage with atomic replace on write."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> Dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            # Unreadable or corrupt document: behave as if nothing was saved
            log("SESSION", "Session file unreadable, treating as empty")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".session-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class SessionStore:
    """save/load/clear for the (token, role) pair on top of a storage backend."""

    def __init__(self, storage):
        self.storage = storage

    def save(self, token: str, role: str) -> None:
        if not token or not role:
            raise ValueError("token and role must both be non-empty")
        data = self.storage.read()
        data[TOKEN_KEY] = token
        data[ROLE_KEY] = role
        self.storage.write(data)

    def load(self) -> Optional[Session]:
        """Return the saved Session, or None if absent (or only half present)."""
        data = self.storage.read()
        token = data.get(TOKEN_KEY)
        role = data.get(ROLE_KEY)
        if token and role:
            return Session(token=token, role=role)
        return None

    def clear(self) -> None:
        data = self.storage.read()
        data.pop(TOKEN_KEY, None)
        data.pop(ROLE_KEY, None)
        self.storage.write(data)
