"""HTTP handlers for itinerary operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error mapping.
"""

from fastapi import HTTPException, status

from itinerary_cache.dto import (
    GenerateItineraryRequest,
    HealthCheckResponse,
    ItineraryResponse,
    StatsResponse,
    StoredItineraryResponse,
)
from itinerary_cache.errors import GenerationFailed, InvalidRequest, StoreUnavailable
from itinerary_cache.services import ItineraryService


class ItineraryHandler:
    """HTTP handlers for itinerary operations.

    This handler delegates business logic to ItineraryService
    and maps domain errors to status codes:
    - InvalidRequest -> 400
    - GenerationFailed -> 502
    - StoreUnavailable (id lookups only) -> 503
    """

    def __init__(self, itinerary_service: ItineraryService) -> None:
        """Initialize the itinerary handler.

        Args:
            itinerary_service: The service for business logic (required).
        """
        self._service = itinerary_service

    async def generate(self, request: GenerateItineraryRequest) -> ItineraryResponse:
        """Handle POST /api/generate requests.

        Args:
            request: The generate itinerary request DTO

        Returns:
            ItineraryResponse with the itinerary text and its id

        Raises:
            HTTPException: 400 on invalid input, 502 if generation failed
        """
        try:
            result = await self._service.fulfill(request.to_entity())
        except InvalidRequest as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
        except GenerationFailed as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to generate itinerary: {e.detail}",
            ) from e

        return ItineraryResponse(itinerary=result.text, id=result.id, cached=result.cached)

    async def get_itinerary(self, itinerary_id: str) -> StoredItineraryResponse:
        """Handle GET /api/itineraries/{id} requests.

        Args:
            itinerary_id: The id returned by a previous generate call

        Returns:
            StoredItineraryResponse with the stored text

        Raises:
            HTTPException: 404 if unknown, 503 if the store is unreachable
        """
        try:
            stored = await self._service.get_itinerary(itinerary_id)
        except StoreUnavailable as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Failed to fetch itinerary: {e}",
            ) from e

        if stored is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Itinerary not found")

        return StoredItineraryResponse(id=stored.id, itinerary=stored.text, created_at=stored.created_at)

    async def get_stats(self) -> StatsResponse:
        """Handle GET /stats requests."""
        return StatsResponse(**self._service.get_stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        The service stays usable without the store, so a store outage
        reports "degraded" rather than failing the check.
        """
        health = await self._service.is_healthy()

        return HealthCheckResponse(
            status="healthy" if all(health.values()) else "degraded",
            store_healthy=health["store"],
            backend_healthy=health["backend"],
        )
