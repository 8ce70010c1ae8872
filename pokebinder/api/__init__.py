from pokebinder.api.browse import router as browse_router
from pokebinder.api.collection import router as collection_router
from pokebinder.api.health import router as health_router

__all__ = [
    "browse_router",
    "collection_router",
    "health_router",
]
