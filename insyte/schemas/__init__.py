from .event import EventPayload, TrackRequest, RetrieveResult

__all__ = ["EventPayload", "TrackRequest", "RetrieveResult"]
