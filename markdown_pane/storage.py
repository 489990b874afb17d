"""Persistence of the document and theme preference."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from .config import THEMES
from .constants import CONTENT_KEY, DEFAULT_CONTENT, THEME_KEY
from .exceptions import StorageError
from .filesystem import atomic_write

logger = logging.getLogger(__name__)


class JsonFileStore:
    """String key-value store kept in a single JSON object on disk.

    Args:
        path: JSON file; created on first write.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="UTF-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            raise StorageError(self.path, str(error)) from error
        if not isinstance(data, dict):
            raise StorageError(self.path, "expected a JSON object")
        return data

    @property
    def backup_path(self) -> Path:
        return self.path.with_name(self.path.name + ".corrupt")

    def _set_aside(self) -> None:
        # only regular files; anything else makes the write below fail
        if not self.path.is_file():
            return
        try:
            os.replace(self.path, self.backup_path)
        except OSError as error:
            raise StorageError(self.path, f"could not back up unreadable store: {error}") from error
        logger.warning("Moved unreadable store %s to %s", self.path, self.backup_path)

    def get(self, key: str) -> str | None:
        """Return the stored string for `key`, or None when absent.

        Raises:
            StorageError: If the file is unreadable or holds a non-string value.
        """
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(self.path, f"value for {key!r} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, rewriting the file atomically.

        An unreadable file is moved to `backup_path` before it is replaced.

        Raises:
            StorageError: If the file cannot be backed up or written.
        """
        try:
            data = self._read_all()
        except StorageError:
            self._set_aside()
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write(self.path, json.dumps(data, ensure_ascii=False, indent=2))
        except OSError as error:
            raise StorageError(self.path, str(error)) from error


class Persistence:
    """Load and save the editor's document and theme.

    Reads never fail: problems are logged and the defaults are returned.
    Writes never fail either: problems are logged and the session goes on.
    """

    def __init__(self, store: JsonFileStore):
        self.store = store

    def _load(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except StorageError as error:
            logger.warning("Could not read %s: %s", key, error)
            return None

    def _save(self, key: str, value: str) -> bool:
        try:
            self.store.set(key, value)
        except StorageError as error:
            logger.warning("Could not save %s: %s", key, error)
            return False
        return True

    def load_content(self, default: str = DEFAULT_CONTENT) -> str:
        content = self._load(CONTENT_KEY)
        return default if content is None else content

    def save_content(self, content: str) -> bool:
        return self._save(CONTENT_KEY, content)

    def load_theme(self, default: str = "light") -> str:
        theme = self._load(THEME_KEY)
        if theme not in THEMES:
            return default
        return theme

    def save_theme(self, theme: str) -> bool:
        return self._save(THEME_KEY, theme)
