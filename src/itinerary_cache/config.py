import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_timeout: float = float(os.getenv("REDIS_TIMEOUT", "2.0"))

    # Store
    store_backend: str = os.getenv("STORE_BACKEND", "redis")  # "redis" or "memory"
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "itineraries")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "0"))  # 0 = keep forever

    # Generation (OpenAI-compatible chat completions)
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    generation_model: str = os.getenv("GENERATION_MODEL", "gpt-4o")
    generation_temperature: float = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
    generation_max_tokens: int = int(os.getenv("GENERATION_MAX_TOKENS", "800"))
    generation_timeout: float = float(os.getenv("GENERATION_TIMEOUT", "60.0"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def uses_memory_store(self) -> bool:
        """Check if the in-process store is configured instead of Redis.

        Returns:
            True if STORE_BACKEND is "memory", False otherwise
        """
        return self.store_backend.lower() == "memory"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.store_backend.lower() not in ("redis", "memory"):
            raise ValueError(f"STORE_BACKEND must be 'redis' or 'memory', got {self.store_backend!r}")

        if self.cache_ttl < 0:
            raise ValueError("CACHE_TTL must be zero (no expiry) or a positive number of seconds")

        if not 0 <= self.generation_temperature <= 2:
            raise ValueError("GENERATION_TEMPERATURE must be between 0 and 2")

        if self.generation_max_tokens < 1:
            raise ValueError("GENERATION_MAX_TOKENS must be at least 1")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an async Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        socket_timeout=settings.redis_timeout,
        socket_connect_timeout=settings.redis_timeout,
        decode_responses=True,
    )
