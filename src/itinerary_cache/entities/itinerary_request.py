"""Itinerary request domain entity."""

from dataclasses import dataclass

from itinerary_cache.errors import InvalidRequest

# Suggested values offered to users. Free text is accepted as well.
BUDGET_CHOICES = ("economy", "mid-range", "luxury")
PACE_CHOICES = ("relaxed", "medium", "fast")


@dataclass(frozen=True)
class ItineraryRequestEntity:
    """Domain entity for a travel-planning request.

    Attributes:
        destination: Where the trip goes (required, non-empty)
        trip_length: Number of days (at least 1)
        preferences: Free-form interests, may be empty
        budget: One of BUDGET_CHOICES or free text, may be empty
        pace: One of PACE_CHOICES or free text, may be empty
    """

    destination: str
    trip_length: int
    preferences: str = ""
    budget: str = ""
    pace: str = ""

    def validate(self) -> None:
        """Reject requests that cannot be turned into a prompt.

        Raises:
            InvalidRequest: If destination is blank or trip_length is below 1
        """
        if not self.destination or not self.destination.strip():
            raise InvalidRequest("Destination is required")

        # bool is an int subclass; True must not pass as a one-day trip
        if isinstance(self.trip_length, bool) or not isinstance(self.trip_length, int):
            raise InvalidRequest("tripLength must be a whole number of days")

        if self.trip_length < 1:
            raise InvalidRequest("tripLength must be at least 1 day")
