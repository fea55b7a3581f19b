"""Itinerary Cache - travel itinerary generation with prompt-keyed caching.

This package provides a layered architecture around a single operation,
``ItineraryService.fulfill``: render the request into a prompt, derive a
cache key from it, serve a stored itinerary on a hit, and generate plus
store one on a miss.

Layers:
    - protocols: Interface contracts (ResultStore, GenerationBackend)
    - repositories: Redis / in-memory stores, OpenAI backend
    - services: Business logic
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from itinerary_cache.entities import ItineraryRequestEntity
    from itinerary_cache.repositories import InMemoryItineraryRepository, OpenAIGenerationBackend
    from itinerary_cache.services import ItineraryService

    service = ItineraryService.create(
        repository=InMemoryItineraryRepository(),
        backend=OpenAIGenerationBackend.create(),
    )
    result = await service.fulfill(ItineraryRequestEntity(destination="Kyoto", trip_length=3))
    ```

For HTTP API:
    ```python
    from itinerary_cache.api.app import app
    ```
"""

from itinerary_cache.config import get_redis_client, settings
from itinerary_cache.dto import GenerateItineraryRequest, ItineraryResponse
from itinerary_cache.entities import (
    ItineraryRequestEntity,
    ItineraryResultEntity,
    StoredItineraryEntity,
)
from itinerary_cache.errors import (
    BackendError,
    GenerationFailed,
    InvalidRequest,
    ItineraryError,
    StoreUnavailable,
)
from itinerary_cache.handlers import ItineraryHandler
from itinerary_cache.keys import derive_key
from itinerary_cache.metrics import ServiceMetrics
from itinerary_cache.prompts import render_prompt
from itinerary_cache.protocols import GenerationBackend, ResultStore
from itinerary_cache.repositories import (
    InMemoryItineraryRepository,
    OpenAIGenerationBackend,
    RedisItineraryRepository,
)
from itinerary_cache.services import ItineraryService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "ResultStore",
    "GenerationBackend",
    # Core operations
    "render_prompt",
    "derive_key",
    # Services (business logic)
    "ItineraryService",
    "ServiceMetrics",
    # Handlers (HTTP)
    "ItineraryHandler",
    # Repositories (external collaborators)
    "RedisItineraryRepository",
    "InMemoryItineraryRepository",
    "OpenAIGenerationBackend",
    # Entities (domain models)
    "ItineraryRequestEntity",
    "ItineraryResultEntity",
    "StoredItineraryEntity",
    # Errors
    "ItineraryError",
    "InvalidRequest",
    "StoreUnavailable",
    "BackendError",
    "GenerationFailed",
    # DTOs (API contracts)
    "GenerateItineraryRequest",
    "ItineraryResponse",
]
