from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from itinerary_cache.api.dependencies import HandlerDep, lifespan
from itinerary_cache.config import settings
from itinerary_cache.dto import (
    GenerateItineraryRequest,
    HealthCheckResponse,
    ItineraryResponse,
    StatsResponse,
    StoredItineraryResponse,
)

app = FastAPI(
    title="Itinerary Cache API",
    description="Travel itinerary generation with prompt-keyed result caching",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Itinerary Cache API",
        "version": "0.1.0",
        "description": "Travel itinerary generation with prompt-keyed result caching",
        "endpoints": {
            "generate": "/api/generate",
            "itinerary": "/api/itineraries/{id}",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/api/generate", response_model=ItineraryResponse)
async def generate_itinerary(request: GenerateItineraryRequest, handler: HandlerDep) -> ItineraryResponse:
    """
    Return an itinerary for the request, served from cache when possible.

    Args:
        request: Destination, trip length and optional preferences/budget/pace.

    Returns:
        The itinerary text, its share id, and whether it came from the cache.
    """
    return await handler.generate(request)


@app.get("/api/itineraries/{itinerary_id}", response_model=StoredItineraryResponse)
async def get_itinerary(itinerary_id: str, handler: HandlerDep) -> StoredItineraryResponse:
    """Fetch a previously generated itinerary by its share id."""
    return await handler.get_itinerary(itinerary_id)


@app.get("/stats", response_model=StatsResponse)
async def get_stats(handler: HandlerDep) -> StatsResponse:
    """Get cache and generation statistics."""
    return await handler.get_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "itinerary_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
