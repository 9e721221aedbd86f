from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from redis.exceptions import RedisError
from insyte.dates import get_date
from insyte.schemas.event import TrackRequest, RetrieveResult
from insyte.tracker import EventTracker
from insyte.dependencies import get_tracker

router = APIRouter(prefix="/events", tags=["events"])


def _store_unavailable(e: RedisError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Event store unavailable: {e.__class__.__name__}"
    )


@router.post("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def track_event(
    name: str,
    payload: TrackRequest,
    tracker: EventTracker = Depends(get_tracker)
):
    """Count one occurrence of an event"""
    try:
        await tracker.track(name, payload.event, persist=payload.persist)
    except RedisError as e:
        raise _store_unavailable(e)


@router.get("/{name}", response_model=RetrieveResult)
async def retrieve_event(
    name: str,
    date: Optional[str] = Query(
        None,
        pattern=r"^\d{2}/\d{2}/\d{4}$",
        description="Day in dd/MM/yyyy form, defaults to today"
    ),
    tracker: EventTracker = Depends(get_tracker)
):
    """Get the counts of an event for one day"""
    try:
        return await tracker.retrieve(name, date or get_date())
    except RedisError as e:
        raise _store_unavailable(e)


@router.get("/{name}/days", response_model=List[RetrieveResult])
async def retrieve_event_days(
    name: str,
    n_days: int = Query(1, ge=1, description="Number of days back, today included"),
    tracker: EventTracker = Depends(get_tracker)
):
    """Get the counts of an event for the last n_days days, oldest first"""
    try:
        return await tracker.retrieve_days(name, n_days)
    except RedisError as e:
        raise _store_unavailable(e)
