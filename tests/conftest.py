"""Shared fixtures: in-process stand-ins for the store and the generation backend."""

import asyncio

import pytest

from itinerary_cache.entities import ItineraryRequestEntity
from itinerary_cache.errors import BackendError, StoreUnavailable
from itinerary_cache.repositories import InMemoryItineraryRepository
from itinerary_cache.services import ItineraryService


class SpyStore(InMemoryItineraryRepository):
    """In-memory store that records calls and can be told to fail."""

    def __init__(self, fail_lookup: bool = False, fail_insert: bool = False) -> None:
        super().__init__()
        self.fail_lookup = fail_lookup
        self.fail_insert = fail_insert
        self.lookups: list[str] = []
        self.inserts: list[tuple[str, str, str]] = []
        self.id_lookups: list[str] = []

    async def lookup(self, key):
        self.lookups.append(key)
        if self.fail_lookup:
            raise StoreUnavailable("connection refused")
        return await super().lookup(key)

    async def find_by_id(self, itinerary_id):
        self.id_lookups.append(itinerary_id)
        if self.fail_lookup:
            raise StoreUnavailable("connection refused")
        return await super().find_by_id(itinerary_id)

    async def insert(self, itinerary_id, key, text):
        self.inserts.append((itinerary_id, key, text))
        if self.fail_insert:
            raise StoreUnavailable("connection refused")
        await super().insert(itinerary_id, key, text)

    async def health_check(self):
        return not self.fail_lookup


class StubBackend:
    """Generation backend returning canned text and recording prompts."""

    model_name = "stub-model"

    def __init__(self, text: str = "X", error: BackendError | None = None, yield_first: bool = False) -> None:
        self.text = text
        self.error = error
        self.yield_first = yield_first
        self.calls: list[str] = []

    async def generate(self, prompt):
        self.calls.append(prompt)
        if self.yield_first:
            # let other tasks run between lookup and insert
            await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.text

    async def is_available(self):
        return self.error is None

    async def close(self):
        pass


@pytest.fixture
def make_store():
    """Factory for SpyStore instances."""
    return SpyStore


@pytest.fixture
def make_backend():
    """Factory for StubBackend instances."""
    return StubBackend


@pytest.fixture
def store():
    return SpyStore()


@pytest.fixture
def backend():
    return StubBackend(text="X")


@pytest.fixture
def service(store, backend):
    return ItineraryService.create(repository=store, backend=backend)


@pytest.fixture
def kyoto_request():
    return ItineraryRequestEntity(destination="Kyoto", trip_length=3, preferences="", budget="", pace="")
