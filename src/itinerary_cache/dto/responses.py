"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ItineraryResponse(BaseModel):
    """Response DTO for a fulfilled itinerary request."""

    itinerary: str = Field(..., description="The generated itinerary content")
    id: str = Field(..., description="Identifier for share links (may not be persisted)")
    cached: bool = Field(..., description="Whether the itinerary was served from the cache")


class StoredItineraryResponse(BaseModel):
    """Response DTO for an itinerary fetched by id."""

    id: str = Field(..., description="The itinerary id")
    itinerary: str = Field(..., description="The stored itinerary content")
    created_at: float = Field(..., description="When the itinerary was stored (Unix timestamp)")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    store_healthy: bool = Field(..., description="Whether the result store is reachable")
    backend_healthy: bool = Field(..., description="Whether the generation backend is reachable")


class StatsResponse(BaseModel):
    """Response DTO for service statistics."""

    total_requests: int = Field(..., ge=0)
    cache_hits: int = Field(..., ge=0)
    cache_misses: int = Field(..., ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)
    avg_lookup_time_ms: float = Field(..., ge=0.0)
    generation_calls: int = Field(..., ge=0)
    generation_failures: int = Field(..., ge=0)
    total_generation_time_ms: float = Field(..., ge=0.0)
    inserts: int = Field(..., ge=0)
    store_lookup_failures: int = Field(..., ge=0)
    store_insert_failures: int = Field(..., ge=0)
    generation_model: str = Field(..., description="Model used for generation")
