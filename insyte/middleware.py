"""
Page view tracking middleware.

Every page request is counted as a daily "page-view" event:
    {"page": "/pricing", "country": "US", "device": "desktop", "os": "Windows"}

Tracking runs as a background task once the response has been sent,
so it never delays or breaks a request: failures are only printed.
"""

import sys
from typing import Callable, Optional, Tuple
from starlette.background import BackgroundTasks
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from insyte.tracker import EventTracker

# Requests under these paths are assets or API calls, not page views
IGNORED_PREFIXES: Tuple[str, ...] = ("/_next", "/static", "/api", "/docs", "/redoc")
IGNORED_PATHS: Tuple[str, ...] = ("/favicon.ico", "/openapi.json", "/health")

# Checked in order: iOS user agents also mention Mac OS X, Android ones Linux
_OS_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("iPhone", "iOS"),
    ("iPad", "iOS"),
    ("Android", "Android"),
    ("Windows", "Windows"),
    ("Mac OS X", "Mac OS"),
    ("CrOS", "Chrome OS"),
    ("Linux", "Linux"),
)
_MOBILE_MARKERS: Tuple[str, ...] = ("Mobi", "iPhone", "Android")


def parse_user_agent(user_agent: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Coarse device and OS detection.

    Returns:
        (device, os) where device is "mobile", "desktop" or "unknown"
    """
    if not user_agent:
        return "unknown", None

    device = "mobile" if any(m in user_agent for m in _MOBILE_MARKERS) else "desktop"
    os_name = next((name for marker, name in _OS_MARKERS if marker in user_agent), None)
    return device, os_name


def is_page_request(path: str) -> bool:
    """True if the path should be counted as a page view"""
    return path not in IGNORED_PATHS and not path.startswith(IGNORED_PREFIXES)


class PageViewMiddleware(BaseHTTPMiddleware):
    """
    Tracks a page view for every page request.

    Args:
        app: ASGI app
        tracker_provider: Returns the EventTracker to use (called per request,
                          so dependency overrides apply)
        event_name: Name the page views are tracked under
        geo_header: Request header carrying the visitor's country code
    """

    def __init__(
        self,
        app,
        tracker_provider: Callable[[], EventTracker],
        event_name: str = "page-view",
        geo_header: str = "cf-ipcountry"
    ):
        super().__init__(app)
        self.tracker_provider = tracker_provider
        self.event_name = event_name
        self.geo_header = geo_header

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        response = await call_next(request)

        if request.method == "GET" and is_page_request(path):
            tasks = BackgroundTasks()
            if response.background is not None:
                tasks.add_task(response.background)
            tasks.add_task(self._track, self._page_view(request, path), path)
            response.background = tasks

        return response

    def _page_view(self, request: Request, path: str) -> dict:
        device, os_name = parse_user_agent(request.headers.get("user-agent"))
        event = {
            "page": path,
            "country": request.headers.get(self.geo_header),
            "device": device,
            "os": os_name,
        }
        # Missing values are left out of the event
        return {key: value for key, value in event.items() if value is not None}

    async def _track(self, event: dict, path: str) -> None:
        try:
            await self.tracker_provider().track(self.event_name, event)
        except Exception as e:
            print(f"❌ Page view tracking failed for {path}: {e}", file=sys.stderr)
