"""Implementation of KeyValueStore using SQLAlchemy"""

import threading

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import StorageError
from src.db.schema import DBStorageItem


class SQLKeyValueStore:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session
        # the session is shared with the debounced save thread
        self._lock = threading.Lock()

    def get_item(self, key: str) -> str | None:
        """Value stored under key, if any."""
        with self._lock:
            try:
                item = self._fetch_item(key)
            except SQLAlchemyError as e:
                raise StorageError(f"Could not read {key!r}: {e}") from e
            return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        """Create or overwrite the value stored under key."""
        with self._lock:
            try:
                item = self._fetch_item(key)
                if item:
                    item.value = value
                else:
                    self.db.add(DBStorageItem(key=key, value=value))
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                raise StorageError(f"Could not write {key!r}: {e}") from e

    def remove_item(self, key: str) -> None:
        """Forget key. Removing an unknown key is fine."""
        with self._lock:
            try:
                item = self._fetch_item(key)
                if not item:
                    return
                self.db.delete(item)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                raise StorageError(f"Could not remove {key!r}: {e}") from e

    def _fetch_item(self, key: str) -> DBStorageItem | None:
        query = select(DBStorageItem).where(DBStorageItem.key == key)
        return self.db.scalar(query)
