"""Request DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from itinerary_cache.entities import ItineraryRequestEntity


class GenerateItineraryRequest(BaseModel):
    """Request DTO for generating an itinerary.

    Field presence is not enforced here: the service rejects a blank
    destination or a trip length below one day with a 400.
    """

    model_config = ConfigDict(populate_by_name=True)

    destination: str = Field("", description="Where the trip goes")
    trip_length: int = Field(0, alias="tripLength", description="Number of days")
    preferences: str = Field("", description="Interests, e.g. 'temples, street food'")
    budget: str = Field("", description="economy, mid-range, luxury, or free text")
    pace: str = Field("", description="relaxed, medium, fast, or free text")

    def to_entity(self) -> ItineraryRequestEntity:
        """Convert to the domain entity."""
        return ItineraryRequestEntity(
            destination=self.destination,
            trip_length=self.trip_length,
            preferences=self.preferences,
            budget=self.budget,
            pace=self.pace,
        )
