"""Behaviour of the favorites store and its persistence."""

from __future__ import annotations

import json

import pytest

from app.errors import StorageFailure
from app.normalizer import normalize
from app.services.favorites import DEFAULT_STORAGE_KEY, FavoritesStore
from app.storage import MemoryStorage


class BrokenStorage(MemoryStorage):
    """Storage whose writes always fail, like a full or disabled medium."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        super().__init__(initial)
        self.write_attempts = 0

    def set_item(self, key: str, value: str) -> None:
        self.write_attempts += 1
        raise StorageFailure("quota exceeded")


class UnreadableStorage(MemoryStorage):
    def get_item(self, key: str) -> str | None:
        raise StorageFailure("storage disabled")


def _movie(movie_id: int, title: str = "Movie") -> dict[str, object]:
    return {"id": movie_id, "title": f"{title} {movie_id}", "release_date": "2001-01-01"}


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage, live_settings) -> FavoritesStore:
    return FavoritesStore(storage, settings=live_settings)


def _persisted(storage: MemoryStorage) -> object:
    return json.loads(storage.get_item(DEFAULT_STORAGE_KEY) or "null")


def test_add_preserves_order_and_persists_ids(store, storage) -> None:
    assert store.add(_movie(3)) is True
    assert store.add(_movie(1)) is True

    assert store.favorite_ids == (3, 1)
    assert [record.id for record in store.favorite_records] == [3, 1]
    assert _persisted(storage) == [3, 1]


def test_add_twice_is_a_no_op(store, storage) -> None:
    store.add(_movie(1, "First"))
    assert store.add(_movie(1, "Second")) is False

    assert store.count() == 1
    assert store.favorite_ids == (1,)
    assert store.favorite_records[0].title == "First 1"
    assert _persisted(storage) == [1]


def test_add_stores_normalized_record(store, live_settings) -> None:
    store.add(_movie(5))

    assert store.favorite_records == [normalize(_movie(5), settings=live_settings)]
    assert store.favorite_records[0].year == 2001


def test_remove_deletes_id_and_record(store, storage) -> None:
    store.add(_movie(1))
    store.add(_movie(2))

    assert store.remove(1) is True
    assert store.favorite_ids == (2,)
    assert [record.id for record in store.favorite_records] == [2]
    assert _persisted(storage) == [2]


def test_remove_non_member_is_a_no_op(store, storage) -> None:
    store.add(_movie(1))
    storage.set_item(DEFAULT_STORAGE_KEY, "sentinel")

    assert store.remove(99) is False
    assert store.favorite_ids == (1,)
    assert store.count() == 1
    assert storage.get_item(DEFAULT_STORAGE_KEY) == "sentinel"


def test_toggle_is_an_involution(store) -> None:
    store.add(_movie(1))
    movie = _movie(2)

    assert store.toggle(movie) is True
    assert store.is_favorite(2)
    assert store.toggle(movie) is False
    assert not store.is_favorite(2)
    assert store.favorite_ids == (1,)


def test_toggle_accepts_canonical_records(store, live_settings) -> None:
    record = normalize(_movie(4), settings=live_settings)

    store.toggle(record)
    assert store.favorite_records == [record]
    store.toggle(record.to_payload())
    assert store.count() == 0


def test_clear_empties_everything(store, storage) -> None:
    store.add(_movie(1))
    store.add(_movie(2))

    store.clear()

    assert store.count() == 0
    assert store.favorite_records == []
    assert _persisted(storage) == []


def test_hydrate_restores_ids_only(live_settings) -> None:
    storage = MemoryStorage({DEFAULT_STORAGE_KEY: "[1, 2, 3]"})
    store = FavoritesStore(storage, settings=live_settings)

    store.hydrate()

    assert store.is_favorite(2) is True
    assert store.count() == 3
    assert store.favorite_ids == (1, 2, 3)
    # Records are not persisted, so none survive a reload.
    assert store.favorite_records == []


@pytest.mark.parametrize("content", ["not json", "{\"ids\": [1]}", "42"])
def test_hydrate_resets_on_corrupt_content(content, live_settings) -> None:
    storage = MemoryStorage({DEFAULT_STORAGE_KEY: content})
    store = FavoritesStore(storage, settings=live_settings)
    store.add(_movie(8))

    store.hydrate()

    assert store.count() == 0
    assert store.favorite_records == []


def test_hydrate_with_absent_key_is_empty(store) -> None:
    store.hydrate()

    assert store.count() == 0


def test_hydrate_accepts_arrays_without_validation(live_settings) -> None:
    storage = MemoryStorage({DEFAULT_STORAGE_KEY: '[1, "two", null]'})
    store = FavoritesStore(storage, settings=live_settings)

    store.hydrate()

    assert store.favorite_ids == (1, "two", None)
    assert store.count() == 3


def test_hydrate_survives_unreadable_storage(live_settings) -> None:
    store = FavoritesStore(UnreadableStorage(), settings=live_settings)

    store.hydrate()

    assert store.count() == 0


def test_write_failures_do_not_block_mutations(live_settings) -> None:
    storage = BrokenStorage()
    store = FavoritesStore(storage, settings=live_settings)

    assert store.add(_movie(1)) is True
    assert store.toggle(_movie(2)) is True
    assert store.remove(1) is True
    assert store.favorite_ids == (2,)
    store.clear()

    assert store.count() == 0
    assert storage.write_attempts == 4


def test_custom_storage_key(live_settings) -> None:
    storage = MemoryStorage()
    store = FavoritesStore(storage, key="otherFavorites", settings=live_settings)

    store.add(_movie(1))

    assert storage.get_item("otherFavorites") == "[1]"
    assert storage.get_item(DEFAULT_STORAGE_KEY) is None


def test_add_keeps_camel_case_fields_of_client_records(store) -> None:
    store.add(
        {
            "id": 21,
            "title": "Client Record",
            "releaseDate": "2010-07-15",
            "posterPath": "/client.jpg",
            "rating": 8.8,
            "voteCount": 35000,
        }
    )

    (record,) = store.favorite_records
    assert record.release_date == "2010-07-15"
    assert record.year == 2010
    assert record.rating == 8.8
    assert record.vote_count == 35000
    assert record.poster_url == "https://images.example.com/t/p/w342/client.jpg"
