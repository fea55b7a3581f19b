"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import GenerateItineraryRequest
from .responses import (
    HealthCheckResponse,
    ItineraryResponse,
    StatsResponse,
    StoredItineraryResponse,
)

__all__ = [
    "GenerateItineraryRequest",
    "ItineraryResponse",
    "StoredItineraryResponse",
    "HealthCheckResponse",
    "StatsResponse",
]
