"""Itinerary service for core business logic.

This service orchestrates one itinerary request end-to-end by coordinating
the result store (cache) and the generation backend (model).
"""

import time
import uuid

from itinerary_cache.entities import (
    ItineraryRequestEntity,
    ItineraryResultEntity,
    StoredItineraryEntity,
)
from itinerary_cache.errors import BackendError, GenerationFailed, StoreUnavailable
from itinerary_cache.keys import derive_key
from itinerary_cache.metrics import ServiceMetrics
from itinerary_cache.prompts import render_prompt
from itinerary_cache.protocols import GenerationBackend, ResultStore


class ItineraryService:
    """Core itinerary orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ResultStore: can be Redis, in-memory, a SQL table, etc.
    - GenerationBackend: can be OpenAI or any compatible endpoint

    The store is an optimization: its failures are recorded and the request
    carries on. The backend is the one hard dependency: its failures abort
    the request with GenerationFailed.

    Example:
        ```python
        from itinerary_cache.repositories import OpenAIGenerationBackend, RedisItineraryRepository
        from itinerary_cache.services import ItineraryService

        service = ItineraryService.create(
            repository=RedisItineraryRepository.create(),
            backend=OpenAIGenerationBackend.create(),
        )
        result = await service.fulfill(ItineraryRequestEntity(destination="Kyoto", trip_length=3))
        ```
    """

    def __init__(
        self,
        repository: ResultStore,
        backend: GenerationBackend,
        metrics: ServiceMetrics | None = None,
    ) -> None:
        """Initialize the itinerary service.

        Args:
            repository: Result store used as the cache (required).
            backend: Text-generation backend (required).
            metrics: Event sink for hits, misses and recovered failures.
        """
        self._repository = repository
        self._backend = backend
        self._metrics = metrics or ServiceMetrics()

    @classmethod
    def create(
        cls,
        repository: ResultStore,
        backend: GenerationBackend,
        metrics: ServiceMetrics | None = None,
    ) -> "ItineraryService":
        """Factory method to create ItineraryService.

        Args:
            repository: Result store used as the cache (required).
            backend: Text-generation backend (required).
            metrics: Event sink. If None, a fresh ServiceMetrics is used.

        Returns:
            Configured ItineraryService instance
        """
        return cls(repository=repository, backend=backend, metrics=metrics)

    async def fulfill(self, request: ItineraryRequestEntity) -> ItineraryResultEntity:
        """Return an itinerary for the request, generating it only on a cache miss.

        Business logic:
        1. Validate the request (no I/O on failure)
        2. Render the prompt and derive its cache key
        3. Look the key up; a hit returns immediately
        4. On a miss (or a failed lookup), generate the itinerary
        5. Insert the new row best-effort and return it

        Args:
            request: The itinerary request

        Returns:
            ItineraryResultEntity with text and id

        Raises:
            InvalidRequest: If destination is blank or trip_length < 1
            GenerationFailed: If the backend fails
        """
        request.validate()

        prompt = render_prompt(request)
        key = derive_key(prompt)

        cached = await self._lookup(key)
        if cached is not None:
            return ItineraryResultEntity(text=cached.text, id=cached.id, cached=True)

        text = await self._generate(prompt)

        itinerary_id = str(uuid.uuid4())
        await self._insert(itinerary_id, key, text)

        return ItineraryResultEntity(text=text, id=itinerary_id, cached=False)

    async def _lookup(self, key: str) -> StoredItineraryEntity | None:
        start_time = time.time()
        try:
            found = await self._repository.lookup(key)
        except StoreUnavailable as e:
            self._metrics.record_store_failure("lookup", e)
            found = None

        lookup_time_ms = (time.time() - start_time) * 1000
        if found is None:
            self._metrics.record_miss(lookup_time_ms)
        else:
            self._metrics.record_hit(lookup_time_ms)
        return found

    async def _generate(self, prompt: str) -> str:
        start_time = time.time()
        try:
            text = await self._backend.generate(prompt)
        except BackendError as e:
            self._metrics.record_generation_failure(e)
            raise GenerationFailed(e.detail, status=e.status) from e

        self._metrics.record_generation((time.time() - start_time) * 1000)
        return text

    async def _insert(self, itinerary_id: str, key: str, text: str) -> None:
        try:
            await self._repository.insert(itinerary_id, key, text)
        except StoreUnavailable as e:
            self._metrics.record_store_failure("insert", e)
            return
        self._metrics.record_insert()

    async def get_itinerary(self, itinerary_id: str) -> StoredItineraryEntity | None:
        """Fetch a previously generated itinerary by id (share links).

        Args:
            itinerary_id: The id returned by fulfill

        Returns:
            The stored row, or None if it was never persisted

        Raises:
            StoreUnavailable: If the store cannot be read
        """
        return await self._repository.find_by_id(itinerary_id)

    def get_stats(self) -> dict:
        """Get service statistics.

        Returns:
            Dictionary with cache and generation statistics
        """
        stats = self._metrics.to_dict()
        stats["generation_model"] = self._backend.model_name
        return stats

    async def is_healthy(self) -> dict[str, bool]:
        """Check collaborator reachability.

        Returns:
            Dictionary with "store" and "backend" health flags
        """
        return {
            "store": await self._repository.health_check(),
            "backend": await self._backend.is_available(),
        }

    @property
    def metrics(self) -> ServiceMetrics:
        """Get the metrics sink."""
        return self._metrics

    @property
    def repository(self) -> ResultStore:
        """Get the underlying repository (for testing)."""
        return self._repository

    @property
    def backend(self) -> GenerationBackend:
        """Get the underlying generation backend (for testing)."""
        return self._backend
