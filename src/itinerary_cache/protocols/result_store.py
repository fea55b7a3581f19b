"""Result storage protocol.

Defines the interface for any key/value store that can persist generated
itineraries and find them again by cache key or by id.

Implementations can include:
- Redis (default)
- In-process dictionary (local runs and tests)
- Any table store with equality queries (PostgreSQL, Supabase, DynamoDB)
"""

from typing import Protocol, runtime_checkable

from itinerary_cache.entities import StoredItineraryEntity


@runtime_checkable
class ResultStore(Protocol):
    """Protocol for itinerary storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed. Every method raises
    ``StoreUnavailable`` on transport, query or format errors.
    """

    async def lookup(self, key: str) -> StoredItineraryEntity | None:
        """Find the stored itinerary for a cache key.

        Args:
            key: The cache key derived from the rendered prompt

        Returns:
            The stored row, or None on a miss
        """
        ...

    async def find_by_id(self, itinerary_id: str) -> StoredItineraryEntity | None:
        """Find a stored itinerary by its id.

        Args:
            itinerary_id: The id returned when the itinerary was generated

        Returns:
            The stored row, or None if no such id exists
        """
        ...

    async def insert(self, itinerary_id: str, key: str, text: str) -> None:
        """Insert a new itinerary row.

        Must not fail solely because a row with the same key already exists.

        Args:
            itinerary_id: Fresh unique id for the row
            key: The cache key the row answers
            text: The generated itinerary content
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
