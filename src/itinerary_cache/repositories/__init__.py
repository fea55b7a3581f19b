"""Repository layer for external collaborators.

Concrete implementations of the protocols:
    - RedisItineraryRepository / InMemoryItineraryRepository -> ResultStore
    - OpenAIGenerationBackend -> GenerationBackend
"""

from .memory_repository import InMemoryItineraryRepository
from .openai_generation_backend import OpenAIGenerationBackend
from .redis_repository import RedisItineraryRepository

__all__ = [
    "InMemoryItineraryRepository",
    "OpenAIGenerationBackend",
    "RedisItineraryRepository",
]
