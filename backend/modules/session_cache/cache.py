"""
Session cache implementations.

Provides an in-memory cache (reference, tests) and a JSON file cache that
survives restarts. Both replace the whole record on every write, so a
reader sees either the old entry or the new one.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .interfaces import ISessionCache
from .models import SessionCacheEntry

logger = logging.getLogger(__name__)


class BaseSessionCache(ISessionCache):
    """
    Shared read/modify/write logic.

    Subclasses only decide where the current entry lives by implementing
    ``_load`` and ``_store``.
    """

    def __init__(self):
        self._lock = threading.Lock()

    def _load(self) -> Optional[SessionCacheEntry]:
        raise NotImplementedError

    def _store(self, entry: Optional[SessionCacheEntry]) -> None:
        raise NotImplementedError

    def _modify(self, **changes: Any) -> None:
        with self._lock:
            current = self._load() or SessionCacheEntry()
            self._store(current.model_copy(update=changes))

    def save(
        self,
        user_id: str,
        name: str,
        email: str,
        profile_complete: Optional[bool] = None,
    ) -> None:
        with self._lock:
            current = self._load()
            if profile_complete is None:
                profile_complete = (
                    current is not None
                    and current.user_id == user_id
                    and current.is_profile_complete
                )
            self._store(
                SessionCacheEntry(
                    user_id=user_id,
                    name=name,
                    email=email,
                    is_logged_in=True,
                    is_profile_complete=profile_complete,
                )
            )

    def clear(self) -> None:
        with self._lock:
            self._store(None)

    def is_logged_in(self) -> bool:
        entry = self._load()
        return entry is not None and entry.is_logged_in

    def get_user_id(self) -> Optional[str]:
        entry = self._load()
        return entry.user_id if entry else None

    def get_name(self) -> Optional[str]:
        entry = self._load()
        return entry.name if entry else None

    def get_email(self) -> Optional[str]:
        entry = self._load()
        return entry.email if entry else None

    def set_profile_complete(self, complete: bool) -> None:
        self._modify(is_profile_complete=complete)

    def is_profile_complete(self) -> bool:
        entry = self._load()
        return entry is not None and entry.is_profile_complete

    def update_name(self, name: str, profile_complete: Optional[bool] = None) -> None:
        if profile_complete is None:
            self._modify(name=name)
        else:
            self._modify(name=name, is_profile_complete=profile_complete)

    def snapshot(self) -> Optional[SessionCacheEntry]:
        return self._load()


class InMemorySessionCache(BaseSessionCache):
    """Session cache held in process memory. Lost on restart."""

    def __init__(self):
        super().__init__()
        self._entry: Optional[SessionCacheEntry] = None

    def _load(self) -> Optional[SessionCacheEntry]:
        return self._entry

    def _store(self, entry: Optional[SessionCacheEntry]) -> None:
        self._entry = entry


class FileSessionCache(BaseSessionCache):
    """
    Session cache persisted as a JSON document.

    Writes go to a temporary file in the same directory which is then
    renamed over the target, so a crash never leaves a half-written file.
    An unreadable file is treated as an empty cache.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Location of the JSON file; ``~`` is expanded and missing
                  parent directories are created on first write.
        """
        super().__init__()
        self._path = Path(path).expanduser()
        self._entry = self._read_file()

    @property
    def path(self) -> Path:
        return self._path

    def _read_file(self) -> Optional[SessionCacheEntry]:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return SessionCacheEntry.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning(f"Ignoring unreadable session cache at {self._path}: {e}")
            return None

    def _load(self) -> Optional[SessionCacheEntry]:
        return self._entry

    def _store(self, entry: Optional[SessionCacheEntry]) -> None:
        if entry is None:
            self._path.unlink(missing_ok=True)
        else:
            self._write_file(entry)
        self._entry = entry

    def _write_file(self, entry: SessionCacheEntry) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(entry.model_dump_json())
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
