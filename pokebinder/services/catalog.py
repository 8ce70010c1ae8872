"""
Catalog gateway.

Async client for the remote card catalog (Pokemon TCG API v2). The catalog
does search, set filtering, sorting and paging server-side; this module only
builds the query strings and parses the structural response fields.

Query syntax belongs to the catalog: clauses like `name:"pika*"` and
`set.id:sv1` joined by spaces. Sort keys (`-releaseDate`, `name`, ...) are
passed through as `orderBy`.
"""

import logging
from typing import Any

import httpx

from pokebinder.config import API_PAGE_SIZE, settings
from pokebinder.models.card import Card, CardSet
from pokebinder.models.query import ALL_SETS, CardPage

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Raised when the catalog cannot be reached or returns something unusable."""

    pass


def build_query_expression(search_term: str, set_filter: str) -> str | None:
    """
    Build the catalog `q` expression for a search term and set filter.

    Returns:
        Space-joined clauses, or None when neither filter is active

    Examples:
        >>> build_query_expression("pika", "all")
        'name:"pika*"'
        >>> build_query_expression(" pika ", "sv1")
        'name:"pika*" set.id:sv1'
    """
    clauses: list[str] = []

    term = search_term.strip().replace('"', "")
    if term:
        clauses.append(f'name:"{term}*"')

    if set_filter and set_filter != ALL_SETS:
        clauses.append(f"set.id:{set_filter}")

    return " ".join(clauses) or None


def _as_int(value: Any, fallback: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return fallback
    return value


class CatalogClient:
    """
    Client for the card catalog.

    Usage:
        async with CatalogClient() as catalog:
            page = await catalog.fetch_page(1, 'name:"pika*"', "-releaseDate")
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        page_size: int = API_PAGE_SIZE,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.catalog_api_url).rstrip("/")
        self.page_size = page_size

        key = settings.catalog_api_key if api_key is None else api_key
        headers = {"User-Agent": "PokeBinder/1.0"}
        if key:
            headers["X-Api-Key"] = key
        else:
            logger.warning("No catalog API key configured; requests may be rate-limited")

        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=settings.catalog_timeout if timeout is None else timeout,
            headers=headers,
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(
        self, path: str, params: dict[str, Any] | None, failure_message: str
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("%s HTTP %s from %s", failure_message, e.response.status_code, url)
            raise CatalogError(failure_message) from e
        except httpx.RequestError as e:
            logger.error("%s %s", failure_message, e)
            raise CatalogError(failure_message) from e
        except ValueError as e:
            logger.error("%s Response from %s is not JSON", failure_message, url)
            raise CatalogError(failure_message) from e

        if not isinstance(data, dict):
            logger.error("%s Response from %s is not a JSON object", failure_message, url)
            raise CatalogError(failure_message)

        return data

    async def fetch_page(
        self,
        page: int = 1,
        query: str | None = None,
        order_by: str | None = None,
    ) -> CardPage:
        """
        Fetch one page of cards.

        Args:
            page: 1-indexed page number
            query: Catalog query expression (see build_query_expression)
            order_by: Catalog sort key

        Returns:
            CardPage with the page's cards, the total match count and the
            page size the catalog used

        Raises:
            CatalogError: On transport, HTTP or parsing failure
        """
        failure_message = "Failed to fetch cards from API."
        params: dict[str, Any] = {"page": page, "pageSize": self.page_size}
        if query:
            params["q"] = query
        if order_by:
            params["orderBy"] = order_by

        logger.info("Fetching cards - page: %s, query: %s, sort: %s", page, query, order_by)
        data = await self._get_json("/cards", params, failure_message)

        records = data.get("data")
        if not isinstance(records, list):
            logger.error("%s Missing data array", failure_message)
            raise CatalogError(failure_message)

        try:
            items = [Card.from_api(record) for record in records]
        except ValueError as e:
            logger.error("%s %s", failure_message, e)
            raise CatalogError(failure_message) from e

        result = CardPage(
            items=items,
            total_count=_as_int(data.get("totalCount"), 0),
            page=_as_int(data.get("page"), page),
            page_size=_as_int(data.get("pageSize"), 0) or self.page_size,
        )
        logger.info("Fetched %d cards. Total count: %d", len(items), result.total_count)
        return result

    async def fetch_card(self, card_id: str) -> Card:
        """
        Fetch a single card by ID.

        Raises:
            CatalogError: On transport, HTTP or parsing failure
        """
        failure_message = f"Failed to fetch card {card_id}."
        data = await self._get_json(f"/cards/{card_id}", None, failure_message)
        try:
            return Card.from_api(data.get("data"))
        except ValueError as e:
            raise CatalogError(failure_message) from e

    async def fetch_sets(self) -> list[CardSet]:
        """
        Fetch the full set directory, newest first.

        Raises:
            CatalogError: On transport, HTTP or parsing failure
        """
        failure_message = "Failed to fetch sets from API."
        data = await self._get_json("/sets", {"orderBy": "-releaseDate"}, failure_message)

        records = data.get("data")
        if not isinstance(records, list):
            raise CatalogError(failure_message)

        try:
            return [CardSet.from_api(record) for record in records if isinstance(record, dict)]
        except ValueError as e:
            raise CatalogError(failure_message) from e
