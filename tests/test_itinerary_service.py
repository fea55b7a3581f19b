"""
Tests for the itinerary service orchestration.
"""

import asyncio

import pytest

from itinerary_cache.entities import ItineraryRequestEntity
from itinerary_cache.errors import BackendError, GenerationFailed, InvalidRequest
from itinerary_cache.keys import derive_key
from itinerary_cache.prompts import render_prompt
from itinerary_cache.services import ItineraryService


def test_cache_hit_skips_generation(service, store, backend, kyoto_request):
    """A stored itinerary is returned without calling the backend."""
    key = derive_key(render_prompt(kyoto_request))
    asyncio.run(store.insert("stored-id", key, "T"))
    store.inserts.clear()

    result = asyncio.run(service.fulfill(kyoto_request))

    assert result.text == "T"
    assert result.id == "stored-id"
    assert result.cached is True
    assert backend.calls == []
    assert store.inserts == []
    assert store.lookups == [key]


def test_miss_generates_and_persists(service, store, backend, kyoto_request):
    """A miss calls the backend once and stores the result under the key."""
    result = asyncio.run(service.fulfill(kyoto_request))

    key = derive_key(render_prompt(kyoto_request))
    assert result.text == "X"
    assert result.cached is False
    assert backend.calls == [render_prompt(kyoto_request)]

    stored = asyncio.run(store.lookup(key))
    assert stored is not None
    assert stored.id == result.id
    assert stored.text == "X"
    assert store.inserts == [(result.id, key, "X")]


def test_second_call_is_served_from_cache(service, backend, kyoto_request):
    """Sequential identical requests generate once."""
    first = asyncio.run(service.fulfill(kyoto_request))
    second = asyncio.run(service.fulfill(kyoto_request))

    assert len(backend.calls) == 1
    assert second.cached is True
    assert second.id == first.id
    assert second.text == first.text


def test_store_failures_do_not_fail_the_request(make_store, make_backend, kyoto_request):
    """Lookup and insert failures are recovered; the fresh itinerary is returned."""
    store = make_store(fail_lookup=True, fail_insert=True)
    backend = make_backend(text="Y")
    service = ItineraryService.create(repository=store, backend=backend)

    result = asyncio.run(service.fulfill(kyoto_request))

    assert result.text == "Y"
    assert result.cached is False
    assert len(backend.calls) == 1
    assert len(store.inserts) == 1
    assert len(store) == 0

    stats = service.get_stats()
    assert stats["store_lookup_failures"] == 1
    assert stats["store_insert_failures"] == 1
    assert stats["cache_misses"] == 1


def test_backend_failure_raises_and_skips_insert(make_store, make_backend, kyoto_request):
    """A backend error surfaces as GenerationFailed and nothing is stored."""
    store = make_store()
    backend = make_backend(error=BackendError("rate limited", status=429))
    service = ItineraryService.create(repository=store, backend=backend)

    with pytest.raises(GenerationFailed) as exc_info:
        asyncio.run(service.fulfill(kyoto_request))

    assert exc_info.value.status == 429
    assert exc_info.value.detail == "rate limited"
    assert isinstance(exc_info.value.__cause__, BackendError)
    assert store.inserts == []
    assert service.get_stats()["generation_failures"] == 1


@pytest.mark.parametrize(
    "request_entity",
    [
        ItineraryRequestEntity(destination="", trip_length=5),
        ItineraryRequestEntity(destination="Rome", trip_length=0),
    ],
)
def test_invalid_request_touches_no_collaborator(service, store, backend, request_entity):
    """Validation failures happen before any store or backend call."""
    with pytest.raises(InvalidRequest):
        asyncio.run(service.fulfill(request_entity))

    assert store.lookups == []
    assert store.inserts == []
    assert backend.calls == []


def test_empty_generation_is_a_valid_result(make_store, make_backend, kyoto_request):
    """An empty string from the backend is returned and cached, not treated as an error."""
    store = make_store()
    service = ItineraryService.create(repository=store, backend=make_backend(text=""))

    result = asyncio.run(service.fulfill(kyoto_request))

    assert result.text == ""
    assert asyncio.run(store.find_by_id(result.id)).text == ""


def test_concurrent_cold_misses_both_generate(make_store, make_backend, kyoto_request):
    """Concurrent identical misses each call the backend and each store a row."""
    store = make_store()
    backend = make_backend(text="X", yield_first=True)
    service = ItineraryService.create(repository=store, backend=backend)

    async def run_both():
        return await asyncio.gather(service.fulfill(kyoto_request), service.fulfill(kyoto_request))

    first, second = asyncio.run(run_both())

    key = derive_key(render_prompt(kyoto_request))
    assert len(backend.calls) == 2
    assert first.id != second.id
    assert {row.id for row in store.rows_for_key(key)} == {first.id, second.id}

    # the first stored row stays the answer for the key
    assert asyncio.run(store.lookup(key)).id == first.id


def test_returned_id_is_fresh_each_miss(make_store, make_backend):
    """Different requests get different ids."""
    service = ItineraryService.create(repository=make_store(), backend=make_backend())

    a = asyncio.run(service.fulfill(ItineraryRequestEntity(destination="Rome", trip_length=2)))
    b = asyncio.run(service.fulfill(ItineraryRequestEntity(destination="Rome", trip_length=3)))

    assert a.id != b.id


def test_get_itinerary_by_id(service):
    """Share ids resolve to the stored row."""
    result = asyncio.run(service.fulfill(ItineraryRequestEntity(destination="Lima", trip_length=4)))

    stored = asyncio.run(service.get_itinerary(result.id))
    assert stored is not None
    assert stored.text == result.text
    assert asyncio.run(service.get_itinerary("missing")) is None


def test_stats_and_health(service, kyoto_request):
    """Stats count hits and misses; health reports both collaborators."""
    asyncio.run(service.fulfill(kyoto_request))
    asyncio.run(service.fulfill(kyoto_request))

    stats = service.get_stats()
    assert stats["total_requests"] == 2
    assert stats["cache_hits"] == 1
    assert stats["cache_misses"] == 1
    assert stats["hit_rate"] == 0.5
    assert stats["generation_calls"] == 1
    assert stats["inserts"] == 1
    assert stats["generation_model"] == "stub-model"

    assert asyncio.run(service.is_healthy()) == {"store": True, "backend": True}
