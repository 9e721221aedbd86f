from contextlib import asynccontextmanager
from fastapi import FastAPI
from insyte.config import settings
from insyte.api.v1 import events
from insyte.dependencies import get_store, get_tracker
from insyte.middleware import PageViewMiddleware
from insyte.store.factory import StoreFactory


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the shared store connection on shutdown, if one was opened"""
    yield
    if await StoreFactory.close_instance():
        get_store.cache_clear()
        print("🛑 Store connection closed")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Event tracking on top of a key-value store",
    debug=settings.debug,
    lifespan=lifespan
)


def _resolve_tracker():
    """Build a tracker the way request handlers get one (honours test overrides)"""
    store = app.dependency_overrides.get(get_store, get_store)()
    return get_tracker(store)


if settings.track_page_views:
    app.add_middleware(
        PageViewMiddleware,
        tracker_provider=_resolve_tracker,
        event_name=settings.page_view_event,
        geo_header=settings.geo_header
    )


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}




######## Include routers
app.include_router(events.router, prefix="/api/v1")
