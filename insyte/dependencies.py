from functools import lru_cache
from fastapi import Depends
from insyte.store.factory import StoreFactory, StoreBackend
from insyte.store.strategies import StoreStrategy
from insyte.config import settings


@lru_cache()
def get_store() -> StoreStrategy:
    """
    Get store instance (singleton).

    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.

    Returns:
        StoreStrategy instance based on settings
    """
    backend = StoreBackend(settings.store_backend)
    return StoreFactory.create(backend)


def get_tracker(store: StoreStrategy = Depends(get_store)):
    """
    Get EventTracker with the store injected.

    Controllers depend on the tracker, the tracker depends on the store,
    so tests can override get_store alone.
    """
    from insyte.tracker import EventTracker
    return EventTracker(store, retention=settings.retention)
