"""Redis implementation of ResultStore.

Each itinerary is a hash under ``{prefix}:id:{id}``. A separate string key
``{prefix}:key:{cache_key}`` points at the id that answers a cache key. The
pointer is written with SET NX, so the first stored row for a key stays the
canonical answer; later rows for the same key are kept and stay reachable by id.
A pointer whose row has gone (eviction, TTL) is removed on lookup so the next
insert can claim the key again.
"""

import logging
import time

import redis.asyncio as redis
from redis.exceptions import RedisError, WatchError

from itinerary_cache.config import get_redis_client, settings
from itinerary_cache.entities import StoredItineraryEntity
from itinerary_cache.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class RedisItineraryRepository:
    """Redis implementation using a hash per row and a pointer per cache key.

    This class satisfies the ResultStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Initialize the Redis itinerary repository.

        Args:
            redis_client: Async Redis client. If None, creates default.
            key_prefix: Namespace for all keys written by this repository.
            ttl: Time-to-live for rows in seconds (0 = no expiry).
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix
        self._ttl = settings.cache_ttl if ttl is None else ttl

    @classmethod
    def create(
        cls,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> "RedisItineraryRepository":
        """Factory method to create RedisItineraryRepository with defaults.

        Args:
            key_prefix: Key namespace. If None, uses settings.
            ttl: Row TTL in seconds. If None, uses settings.

        Returns:
            Configured RedisItineraryRepository
        """
        return cls(key_prefix=key_prefix, ttl=ttl)

    def _row_key(self, itinerary_id: str) -> str:
        return f"{self._prefix}:id:{itinerary_id}"

    def _pointer_key(self, key: str) -> str:
        return f"{self._prefix}:key:{key}"

    @staticmethod
    def _to_entity(row: dict) -> StoredItineraryEntity:
        try:
            return StoredItineraryEntity(
                id=row["id"],
                key=row["key"],
                text=row["text"],
                created_at=float(row.get("created_at", 0)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StoreUnavailable(f"Malformed itinerary row: {e}") from e

    async def _read_row(self, itinerary_id: str) -> StoredItineraryEntity | None:
        row = await self._client.hgetall(self._row_key(itinerary_id))
        if not row:
            return None
        return self._to_entity(row)

    async def lookup(self, key: str) -> StoredItineraryEntity | None:
        """Find the canonical itinerary for a cache key.

        Args:
            key: The cache key

        Returns:
            The stored row, or None on a miss (including a pointer whose row expired)

        Raises:
            StoreUnavailable: If Redis fails or the row is malformed
        """
        pointer_key = self._pointer_key(key)
        try:
            itinerary_id = await self._client.get(pointer_key)
            if itinerary_id is None:
                return None
            found = await self._read_row(itinerary_id)
            if found is None:
                await self._drop_stale_pointer(pointer_key, itinerary_id)
            return found
        except RedisError as e:
            raise StoreUnavailable(f"Redis lookup failed: {e}") from e

    async def _drop_stale_pointer(self, pointer_key: str, itinerary_id: str) -> None:
        # Row evicted or expired; free the key for the next insert, unless another writer moved it
        async with self._client.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(pointer_key)
                if await pipe.get(pointer_key) != itinerary_id:
                    return
                pipe.multi()
                pipe.delete(pointer_key)
                await pipe.execute()
            except WatchError:
                return
        logger.info("Dropped pointer %s to missing row %s", pointer_key, itinerary_id)

    async def find_by_id(self, itinerary_id: str) -> StoredItineraryEntity | None:
        """Find an itinerary by id.

        Args:
            itinerary_id: The row id

        Returns:
            The stored row, or None if absent

        Raises:
            StoreUnavailable: If Redis fails or the row is malformed
        """
        try:
            return await self._read_row(itinerary_id)
        except RedisError as e:
            raise StoreUnavailable(f"Redis read failed: {e}") from e

    async def insert(self, itinerary_id: str, key: str, text: str) -> None:
        """Store a new itinerary row and claim the key pointer if it is free.

        Args:
            itinerary_id: Fresh unique id
            key: The cache key
            text: The generated itinerary content

        Raises:
            StoreUnavailable: If Redis fails
        """
        row_key = self._row_key(itinerary_id)
        ttl = self._ttl or None

        try:
            # Row first, pointer second: a pointer never names a row that was not written
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.hset(
                    row_key,
                    mapping={
                        "id": itinerary_id,
                        "key": key,
                        "text": text,
                        "created_at": str(time.time()),
                    },
                )
                if ttl:
                    pipe.expire(row_key, ttl)
                pipe.set(self._pointer_key(key), itinerary_id, nx=True, ex=ttl)
                results = await pipe.execute()
        except RedisError as e:
            raise StoreUnavailable(f"Redis insert failed: {e}") from e

        if not results[-1]:
            logger.debug("Key %s already answered by an earlier row; kept %s by id only", key, itinerary_id)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
