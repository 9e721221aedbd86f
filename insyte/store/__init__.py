"""
Store module for Insyte.
Implements Strategy Pattern for flexible key-value backends.
"""

from .strategies import StoreStrategy, RedisStore, InMemoryStore

__all__ = [
    "StoreStrategy",
    "RedisStore",
    "InMemoryStore",
]
