"""Key/value storage backends used to persist client state."""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from .database import Database
from .db_models import StorageItem
from .errors import StorageFailure

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """String-keyed storage holding string values.

    Implementations raise :class:`~app.errors.StorageFailure` when the
    underlying medium cannot be read or written.
    """

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage, used for tests and when persistence is disabled."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class DatabaseStorage:
    """Storage backed by the ``storage_items`` table."""

    def __init__(self, database: Database) -> None:
        self._database = database

    def get_item(self, key: str) -> str | None:
        try:
            with self._database.session() as session:
                item = session.get(StorageItem, key)
                return item.value if item is not None else None
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not read {key!r} from storage") from exc

    def set_item(self, key: str, value: str) -> None:
        try:
            with self._database.session() as session:
                item = session.get(StorageItem, key)
                if item is None:
                    session.add(StorageItem(key=key, value=value))
                else:
                    item.value = value
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not write {key!r} to storage") from exc
        logger.debug("Stored %s (%d bytes)", key, len(value))

    def remove_item(self, key: str) -> None:
        try:
            with self._database.session() as session:
                item = session.get(StorageItem, key)
                if item is not None:
                    session.delete(item)
        except SQLAlchemyError as exc:
            raise StorageFailure(f"Could not remove {key!r} from storage") from exc
