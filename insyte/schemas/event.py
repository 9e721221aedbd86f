from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List

# Open bag of fields: page, country, device, os, or anything JSON-serializable
EventPayload = Dict[str, Any]


class TrackRequest(BaseModel):
    event: EventPayload = Field(..., description="Event data, conventionally with a 'page' field")
    persist: bool = Field(False, description="Keep the counter forever instead of per day")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "event": {"page": "/", "country": "US", "device": "desktop", "os": "Linux"},
                "persist": False,
            }
        }
    )


class RetrieveResult(BaseModel):
    """Counts of one event name for one day

    Each entry of `event` maps the raw serialized field, e.g.
    '{"event":{"page":"/"}}', to how many times it was tracked.
    Entry order is whatever the store enumerates and is not sorted.
    """
    date: str = Field(..., description="Day in dd/MM/yyyy form")
    event: List[Dict[str, int]] = Field(default_factory=list)
