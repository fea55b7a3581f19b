"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from itinerary_cache.services import ItineraryService

    service = ItineraryService.create(repository=repo, backend=backend)
    ```
"""

from .itinerary_service import ItineraryService

__all__ = [
    "ItineraryService",
]
