import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class ServiceMetrics:
    """Track cache and generation events for itinerary requests.

    Also the reporting channel for non-fatal store failures: the service
    records them here instead of logging inline.
    """

    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    total_lookup_time_ms: float = 0.0
    generation_calls: int = 0
    generation_failures: int = 0
    total_generation_time_ms: float = 0.0
    inserts: int = 0
    store_failures: dict[str, int] = field(default_factory=dict)

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    @property
    def avg_lookup_time_ms(self) -> float:
        """Calculate average lookup time."""
        if self.total_requests == 0:
            return 0.0
        return self.total_lookup_time_ms / self.total_requests

    def record_hit(self, lookup_time_ms: float) -> None:
        """Record a cache hit."""
        self.total_requests += 1
        self.cache_hits += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_miss(self, lookup_time_ms: float) -> None:
        """Record a cache miss (including a lookup that failed)."""
        self.total_requests += 1
        self.cache_misses += 1
        self.total_lookup_time_ms += lookup_time_ms

    def record_generation(self, duration_ms: float) -> None:
        """Record a successful generation call."""
        self.generation_calls += 1
        self.total_generation_time_ms += duration_ms

    def record_generation_failure(self, error: Exception) -> None:
        """Record a failed generation call."""
        self.generation_calls += 1
        self.generation_failures += 1
        logger.error("Itinerary generation failed: %s", error)

    def record_insert(self) -> None:
        """Record a successful store insert."""
        self.inserts += 1

    def record_store_failure(self, operation: str, error: Exception) -> None:
        """Record a store failure that was recovered locally.

        Args:
            operation: "lookup" or "insert"
            error: The StoreUnavailable raised by the store
        """
        self.store_failures[operation] = self.store_failures.get(operation, 0) + 1
        logger.warning("Result store %s failed, continuing without cache: %s", operation, error)

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "hit_rate": self.hit_rate,
            "avg_lookup_time_ms": self.avg_lookup_time_ms,
            "generation_calls": self.generation_calls,
            "generation_failures": self.generation_failures,
            "total_generation_time_ms": self.total_generation_time_ms,
            "inserts": self.inserts,
            "store_lookup_failures": self.store_failures.get("lookup", 0),
            "store_insert_failures": self.store_failures.get("insert", 0),
        }
