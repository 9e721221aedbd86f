"""
Store strategies using Strategy Pattern.
Allows switching between key-value backends (Redis, In-Memory).

The tracker only needs three hash/key primitives from a store:
atomic hash-field increment, whole-hash read and key expiry.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional
import time


class StoreStrategy(ABC):
    """
    Abstract base class for store strategies.

    This is the Strategy Pattern interface - the tracker talks to this,
    never to a concrete client.

    All methods are async because store operations involve I/O (network for Redis).
    Unlike a cache, errors are NOT swallowed here: they propagate to the caller.
    """

    @abstractmethod
    async def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        """
        Atomically increment a hash field, creating key and field as needed.

        Args:
            key: Hash key
            field: Field inside the hash
            amount: Increment delta

        Returns:
            Field value after the increment
        """
        pass

    @abstractmethod
    async def hgetall(self, key: str) -> Dict[str, str]:
        """
        Read every field of a hash.

        Returns:
            Mapping of field -> raw value, empty if the key does not exist
        """
        pass

    @abstractmethod
    async def expire(self, key: str, seconds: int) -> bool:
        """
        Set or refresh the time to live of a key.

        Returns:
            True if the timeout was set, False if the key does not exist
        """
        pass

    @abstractmethod
    async def ttl(self, key: str) -> int:
        """
        Remaining time to live in seconds.

        Returns:
            -2 if the key does not exist, -1 if it has no expiry
        """
        pass

    async def close(self) -> None:
        """Release connections held by the store"""
        return None


class RedisStore(StoreStrategy):
    """
    Redis store implementation on top of redis.asyncio.

    - HINCRBY is atomic on the server, concurrent trackers need no locking
    - EXPIRE gives daily keys their retention window
    - Non-blocking I/O, so many reads can be in flight at once

    Used in production environments.
    """

    def __init__(self, redis_client):
        """
        Initialize Redis store.

        Args:
            redis_client: redis.asyncio.Redis instance created with decode_responses=True
        """
        self.redis = redis_client

    async def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        return await self.redis.hincrby(key, field, amount)

    async def hgetall(self, key: str) -> Dict[str, str]:
        return await self.redis.hgetall(key) or {}

    async def expire(self, key: str, seconds: int) -> bool:
        return bool(await self.redis.expire(key, seconds))

    async def ttl(self, key: str) -> int:
        return await self.redis.ttl(key)

    async def close(self) -> None:
        await self.redis.aclose()


class InMemoryStore(StoreStrategy):
    """
    In-memory store implementation using Python dicts.

    Pros:
    - No external services, good for development and testing
    - Mirrors Redis semantics: EXPIRE on a missing key is a no-op,
      expired keys disappear on next access

    Cons:
    - Not distributed (each process has its own data)
    - Lost on restart

    Note: Async for interface consistency, but operations are instant.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize in-memory store.

        Args:
            clock: Monotonic time source in seconds (overridable in tests)
        """
        self._hashes: Dict[str, Dict[str, int]] = {}
        self._deadlines: Dict[str, float] = {}
        self._clock = clock

    def _purge(self, key: str) -> None:
        """Drop the key if its deadline has passed"""
        deadline = self._deadlines.get(key)
        if deadline is not None and deadline <= self._clock():
            self._hashes.pop(key, None)
            del self._deadlines[key]

    async def hincrby(self, key: str, field: str, amount: int = 1) -> int:
        self._purge(key)
        fields = self._hashes.setdefault(key, {})
        fields[field] = fields.get(field, 0) + amount
        return fields[field]

    async def hgetall(self, key: str) -> Dict[str, str]:
        self._purge(key)
        # Redis returns values as strings
        return {field: str(value) for field, value in self._hashes.get(key, {}).items()}

    async def expire(self, key: str, seconds: int) -> bool:
        self._purge(key)
        if key not in self._hashes:
            return False
        self._deadlines[key] = self._clock() + seconds
        return True

    async def ttl(self, key: str) -> int:
        self._purge(key)
        if key not in self._hashes:
            return -2
        deadline: Optional[float] = self._deadlines.get(key)
        if deadline is None:
            return -1
        return int(round(deadline - self._clock()))
