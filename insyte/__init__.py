"""
Insyte - minimal event tracking on top of a key-value store.

Usage:
    store = RedisStore(redis.asyncio.from_url(url, password=token, decode_responses=True))
    tracker = EventTracker(store)
    await tracker.track("page-view", {"page": "/", "country": "US"})
    days = await tracker.retrieve_days("page-view", 7)
"""

from .tracker import EventTracker, key_for, serialize_event
from .schemas.event import EventPayload, RetrieveResult
from .store.strategies import StoreStrategy, RedisStore, InMemoryStore

__all__ = [
    "EventTracker",
    "key_for",
    "serialize_event",
    "EventPayload",
    "RetrieveResult",
    "StoreStrategy",
    "RedisStore",
    "InMemoryStore",
]
