"""Itinerary result domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ItineraryResultEntity:
    """Outcome of a fulfilled itinerary request.

    Attributes:
        text: The itinerary content (possibly empty)
        id: Identifier for sharing; not guaranteed to be persisted
        cached: True when served from the store without generation
    """

    text: str
    id: str
    cached: bool = False
