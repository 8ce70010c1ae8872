import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pokebinder.api import browse_router, collection_router, health_router
from pokebinder.config import settings
from pokebinder.db.storage import BackgroundJsonFileStorage
from pokebinder.models.failure import KnownError
from pokebinder.services.catalog import CatalogClient
from pokebinder.services.collection_store import CollectionStore


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the session-scoped collection store and catalog client."""
    configure_logging()
    storage = BackgroundJsonFileStorage(settings.storage_path)
    app.state.store = CollectionStore(storage)
    app.state.catalog = CatalogClient()
    yield
    await app.state.catalog.aclose()
    await storage.drain()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("pokebinder"),
    lifespan=lifespan,
)

app.include_router(browse_router)
app.include_router(collection_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_detail().model_dump(mode="json"),
    )
