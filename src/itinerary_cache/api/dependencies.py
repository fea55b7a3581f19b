"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from itinerary_cache.config import settings
from itinerary_cache.handlers import ItineraryHandler
from itinerary_cache.protocols import ResultStore
from itinerary_cache.repositories import (
    InMemoryItineraryRepository,
    OpenAIGenerationBackend,
    RedisItineraryRepository,
)
from itinerary_cache.services import ItineraryService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> ItineraryHandler:
    """Dependency injection for ItineraryHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ItineraryHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "itinerary_handler", None)
    if handler is None:
        raise RuntimeError("ItineraryHandler not initialized. Check lifespan setup.")
    return handler


def build_repository() -> ResultStore:
    """Create the result store selected by STORE_BACKEND."""
    if settings.uses_memory_store:
        return InMemoryItineraryRepository()
    return RedisItineraryRepository.create()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers:
    1. Repository and generation backend - created explicitly
    2. Service (business logic) - wraps both
    3. Handler (HTTP endpoints) - stored in app.state.itinerary_handler

    Cleanup:
        Closes network clients and removes the handler from app.state on shutdown
    """
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    repository = build_repository()
    backend = OpenAIGenerationBackend.create()

    itinerary_service = ItineraryService.create(repository=repository, backend=backend)
    itinerary_handler = ItineraryHandler(itinerary_service=itinerary_service)

    app.state.itinerary_handler = itinerary_handler

    logger.info("Itinerary service initialized (store=%s, model=%s)", settings.store_backend, backend.model_name)
    if not await repository.health_check():
        logger.warning("Result store unreachable at startup; requests will bypass the cache")

    yield

    await backend.close()
    if isinstance(repository, RedisItineraryRepository):
        await repository.close()

    del app.state.itinerary_handler
    logger.info("Itinerary service shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[ItineraryHandler, Depends(get_handler)]
