"""Stored itinerary domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredItineraryEntity:
    """Domain entity for a persisted itinerary row.

    Rows are written once and never updated.

    Attributes:
        id: Globally unique identifier assigned at insert time
        key: Cache key derived from the rendered prompt
        text: Raw generated itinerary content
        created_at: When the row was written (Unix timestamp)
    """

    id: str
    key: str
    text: str
    created_at: float = 0.0
