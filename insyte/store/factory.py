"""
Factory for creating store instances.
Simple, clean factory with singleton caching.
"""

from enum import Enum
from .strategies import StoreStrategy, RedisStore, InMemoryStore
from insyte.config import settings


class StoreBackend(Enum):
    """Available store backends"""
    REDIS = "redis"
    MEMORY = "memory"


class StoreFactory:
    """
    Simple factory for creating store instances.

    Uses Singleton Pattern - creates instance once, reuses it, so the
    whole process shares one connection pool.
    Gets configuration from settings (not passed as parameters).
    """

    _instance: StoreStrategy = None  # Single cached instance

    @classmethod
    def create(cls, backend: StoreBackend) -> StoreStrategy:
        """
        Create or return cached store instance.

        Args:
            backend: Type of store backend (from enum)

        Returns:
            Singleton store instance

        Raises:
            ValueError: If backend is unknown
        """
        # Return cached instance if exists
        if cls._instance is not None:
            return cls._instance

        if backend == StoreBackend.REDIS:
            import redis.asyncio as redis

            # Never falls back to memory, connection errors surface on first use
            redis_client = redis.from_url(
                str(settings.redis_url),
                password=settings.redis_token,
                decode_responses=True,
                socket_connect_timeout=settings.redis_socket_timeout,
                socket_timeout=settings.redis_socket_timeout,
            )
            cls._instance = RedisStore(redis_client)
            print("✅ Redis store initialized")

        elif backend == StoreBackend.MEMORY:
            cls._instance = InMemoryStore()
            print("✅ In-memory store initialized")

        else:
            raise ValueError(f"Unknown store backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None

    @classmethod
    async def close_instance(cls) -> bool:
        """
        Close and forget the cached instance.

        Returns:
            True if an instance existed, False if none was ever created
        """
        if cls._instance is None:
            return False

        await cls._instance.close()
        cls._instance = None
        return True
