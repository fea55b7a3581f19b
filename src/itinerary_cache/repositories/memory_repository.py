"""In-process implementation of ResultStore.

Keeps rows in dictionaries for the lifetime of the process. Used for local
runs without Redis (``STORE_BACKEND=memory``) and as a test double.
"""

import time

from itinerary_cache.entities import StoredItineraryEntity


class InMemoryItineraryRepository:
    """Dictionary-backed itinerary store.

    Mirrors the Redis repository: every insert keeps its row by id, and the
    first row stored for a cache key stays that key's answer.
    """

    def __init__(self) -> None:
        self._rows: dict[str, StoredItineraryEntity] = {}
        self._pointers: dict[str, str] = {}

    async def lookup(self, key: str) -> StoredItineraryEntity | None:
        itinerary_id = self._pointers.get(key)
        if itinerary_id is None:
            return None
        return self._rows.get(itinerary_id)

    async def find_by_id(self, itinerary_id: str) -> StoredItineraryEntity | None:
        return self._rows.get(itinerary_id)

    async def insert(self, itinerary_id: str, key: str, text: str) -> None:
        self._rows[itinerary_id] = StoredItineraryEntity(
            id=itinerary_id,
            key=key,
            text=text,
            created_at=time.time(),
        )
        self._pointers.setdefault(key, itinerary_id)

    async def health_check(self) -> bool:
        return True

    def rows_for_key(self, key: str) -> list[StoredItineraryEntity]:
        """Return every stored row for a key, oldest first."""
        return [row for row in self._rows.values() if row.key == key]

    def __len__(self) -> int:
        return len(self._rows)
