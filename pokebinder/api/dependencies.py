"""
Session-scoped collaborators for request handlers.

The store and the catalog client are created once in the app lifespan and
kept on `app.state`. Handlers receive them through these dependencies, which
tests override.
"""

from fastapi import Request

from pokebinder.services.catalog import CatalogClient
from pokebinder.services.collection_store import CollectionStore


def get_store(request: Request) -> CollectionStore:
    return request.app.state.store


def get_catalog(request: Request) -> CatalogClient:
    return request.app.state.catalog
