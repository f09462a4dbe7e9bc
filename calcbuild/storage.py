"""
Local key-value storage — the app's equivalent of a browser's localStorage.

Values are opaque strings, read and written whole. The SQL backing keeps one
row per key in the embedded database; the memory backing is a plain dict for
tests and throwaway sessions.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from . import models
from .database import SessionLocal

logger = logging.getLogger(__name__)


class KeyValueStorage:
    """Interface shared by every backing."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: dict = None):
        self._items = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class SqlStorage(KeyValueStorage):
    """
    Key-value slots stored in the storage_items table.

    Pass an open Session to share it with the caller (request scope), or
    nothing to open a short-lived session per call.
    """

    def __init__(self, db: Session = None, session_factory=SessionLocal):
        self.db = db
        self.session_factory = session_factory

    def get_item(self, key: str) -> Optional[str]:
        db, owned = self._session()
        try:
            item = db.query(models.StorageItem).filter(models.StorageItem.key == key).first()
            return item.value if item else None
        finally:
            if owned:
                db.close()

    def set_item(self, key: str, value: str) -> None:
        db, owned = self._session()
        try:
            item = db.query(models.StorageItem).filter(models.StorageItem.key == key).first()
            if item:
                item.value = value
            else:
                db.add(models.StorageItem(key=key, value=value))
            db.commit()
            logger.debug("Wrote storage key %s (%d chars)", key, len(value))
        finally:
            if owned:
                db.close()

    def _session(self):
        if self.db is not None:
            return self.db, False
        return self.session_factory(), True
