"""Session-scoped store of the user's favorite movies."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from ..config import Settings
from ..models import MovieRecord, RawMovie
from ..normalizer import normalize
from ..storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "movieFavorites"

MovieInput = RawMovie | MovieRecord | Mapping[str, Any]


class FavoritesStore:
    """Ordered set of favorite movie ids plus the records captured when added.

    Only the id list is written to storage. Records are kept for the current
    session and are not restored by :meth:`hydrate`. Storage errors are logged
    and never raised; the in-memory state is authoritative.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        settings: Settings | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._settings = settings
        # dict keys double as the insertion-ordered id set
        self._ids: dict[Any, None] = {}
        self._records: dict[Any, MovieRecord] = {}

    @property
    def favorite_ids(self) -> tuple[Any, ...]:
        """Favorite ids in the order they were added."""

        return tuple(self._ids)

    @property
    def favorite_records(self) -> list[MovieRecord]:
        """Cached records, in favorite order, for ids added this session."""

        return [self._records[movie_id] for movie_id in self._ids if movie_id in self._records]

    def is_favorite(self, movie_id: Any) -> bool:
        """Return whether ``movie_id`` is in the favorite set."""

        return movie_id in self._ids

    def count(self) -> int:
        """Return the number of favorite ids."""

        return len(self._ids)

    def add(self, movie: MovieInput) -> bool:
        """Add ``movie`` unless its id is already a favorite.

        Returns ``True`` when the store changed.
        """

        record = normalize(movie, settings=self._settings)
        if record.id in self._ids:
            return False
        self._ids[record.id] = None
        self._records[record.id] = record
        self._persist()
        return True

    def remove(self, movie_id: Any) -> bool:
        """Remove ``movie_id``; returns ``True`` when the store changed."""

        if movie_id not in self._ids:
            return False
        del self._ids[movie_id]
        self._records.pop(movie_id, None)
        self._persist()
        return True

    def toggle(self, movie: MovieInput) -> bool:
        """Flip membership of ``movie`` and return the new membership."""

        record = normalize(movie, settings=self._settings)
        if record.id in self._ids:
            self.remove(record.id)
            return False
        self.add(record)
        return True

    def clear(self) -> None:
        """Drop every favorite and persist the empty list."""

        self._ids.clear()
        self._records.clear()
        self._persist()

    def hydrate(self) -> None:
        """Load the persisted id list, falling back to an empty store."""

        self._records.clear()
        try:
            raw = self._storage.get_item(self._key)
            ids = json.loads(raw) if raw else []
            if not isinstance(ids, list):
                raise ValueError(f"expected a JSON array, got {type(ids).__name__}")
            self._ids = dict.fromkeys(ids)
        except Exception:
            logger.exception("Error loading favorites from storage; starting empty")
            self._ids = {}
        logger.info("Hydrated %d favorites", len(self._ids))

    def _persist(self) -> None:
        try:
            self._storage.set_item(self._key, json.dumps(list(self._ids)))
        except Exception:
            logger.exception("Error saving favorites to storage")
