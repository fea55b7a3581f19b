"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .itinerary_request import ItineraryRequestEntity
from .itinerary_result import ItineraryResultEntity
from .stored_itinerary import StoredItineraryEntity

__all__ = ["ItineraryRequestEntity", "ItineraryResultEntity", "StoredItineraryEntity"]
