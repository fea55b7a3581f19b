"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → in-memory, OpenAI → any compatible API)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from itinerary_cache.protocols import GenerationBackend, ResultStore

    # Type hints work with any implementation
    store: ResultStore = RedisItineraryRepository.create()      # works
    store: ResultStore = InMemoryItineraryRepository()          # also works
    ```
"""

from .generation_backend import GenerationBackend
from .result_store import ResultStore

__all__ = [
    "GenerationBackend",
    "ResultStore",
]
