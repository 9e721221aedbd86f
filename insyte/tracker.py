"""
Event tracker: counts named events in a key-value store.

Key scheme:
    insyte::<name>                  persisted counters, never expire
    insyte::<name>::<dd/MM/yyyy>    daily counters, expire after `retention`

Each key is a hash. The field is the event serialized as JSON
({"event": {...}}) and the value is how many times it was tracked,
so identical events accumulate into the same field.
"""

import asyncio
import json
import sys
from datetime import datetime
from typing import Callable, List, Optional

from insyte.dates import get_date, parse_date
from insyte.schemas.event import EventPayload, RetrieveResult
from insyte.store.strategies import StoreStrategy

KEY_PREFIX = "insyte"
DEFAULT_RETENTION = 60 * 60 * 24 * 7  # 7 days


def key_for(name: str, date: Optional[str] = None) -> str:
    """Build the storage key for an event name, optionally scoped to a day"""
    key = f"{KEY_PREFIX}::{name}"
    if date is not None:
        key += f"::{date}"
    return key


def serialize_event(event: EventPayload) -> str:
    """Compact JSON of {"event": event}, keys in insertion order"""
    return json.dumps({"event": event}, separators=(",", ":"), ensure_ascii=False)


class EventTracker:
    """
    Tracks events and reads aggregated daily counts back.

    The store is injected (not created internally), the caller owns its
    lifecycle. Concurrent increments rely on the store's atomic HINCRBY,
    this class adds no locking or retries: any store error is printed
    to stderr and re-raised as-is.
    """

    def __init__(
        self,
        store: StoreStrategy,
        retention: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize tracker.

        Args:
            store: Store strategy holding the counters
            retention: TTL in seconds for daily keys (default: 7 days)
                       None or 0 means the default, negative raises ValueError
            clock: Returns the current time, used to pick "today"
        """
        if retention is not None and retention < 0:
            raise ValueError(f"retention must be positive, got {retention}")

        self.store = store
        self.retention = retention or DEFAULT_RETENTION
        self._clock = clock

    async def track(self, name: str, event: EventPayload, persist: bool = False) -> None:
        """
        Count one occurrence of an event.

        Args:
            name: Event name, e.g. "page-view"
            event: Event data, e.g. {"page": "/", "country": "US"}
            persist: Keep the counter forever under insyte::<name>
                     instead of a daily key that expires
        """
        try:
            key = key_for(name, None if persist else get_date(now=self._clock()))
            field = serialize_event(event)

            await self.store.hincrby(key, field, 1)

            # After HINCRBY: EXPIRE on a missing key is a no-op
            if not persist:
                await self.store.expire(key, self.retention)
        except Exception as e:
            print(f"❌ Failed to track event {name!r}: {e}", file=sys.stderr)
            raise

    async def retrieve(self, name: str, date: str) -> RetrieveResult:
        """
        Read the counts of an event for one day.

        Args:
            name: Event name
            date: Day in dd/MM/yyyy form

        Returns:
            RetrieveResult with one {field: count} entry per distinct event,
            in store enumeration order (unsorted)
        """
        try:
            data = await self.store.hgetall(key_for(name, date))
            return RetrieveResult(
                date=date,
                event=[{field: int(value)} for field, value in data.items()]
            )
        except Exception as e:
            print(f"❌ Failed to retrieve {name!r} for {date}: {e}", file=sys.stderr)
            raise

    async def retrieve_days(self, name: str, n_days: int = 1) -> List[RetrieveResult]:
        """
        Read the counts of an event for the last n_days days, today included.

        All days are fetched concurrently; the first failure fails the
        whole call. Results come back oldest first; n_days <= 0 gives [].
        """
        now = self._clock()
        dates = [get_date(i, now=now) for i in range(n_days)]

        try:
            results = await asyncio.gather(*(self.retrieve(name, date) for date in dates))
        except Exception as e:
            print(f"❌ Failed to retrieve {n_days} days of {name!r}: {e}", file=sys.stderr)
            raise

        return sorted(results, key=lambda result: parse_date(result.date))
