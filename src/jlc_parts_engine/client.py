"""jlcsearch catalog client.

The catalog exposes one list endpoint per component category::

    GET {base}/{category}/list?{params}&json=true  ->  {"<category>": [...]}

Every decoded response is cached by its exact request signature, so repeated
lookups during a batch never hit the network twice.
"""

import logging
from typing import Any
from urllib.parse import urlencode

import httpx

from .cache import ResultCache
from .config import (
    JLCSEARCH_BASE_URL,
    REQUEST_TIMEOUT,
    RESULT_CACHE_MAX_SIZE,
    RESULT_CACHE_TTL,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """The catalog could not answer a lookup."""

    def __init__(self, category: str, message: str):
        self.category = category
        super().__init__(f"jlcsearch {category} lookup failed: {message}")


class CatalogUnavailableError(CatalogError):
    """Network failure or non-success HTTP status."""


class CatalogResponseError(CatalogError):
    """Response body could not be decoded into the expected shape."""


def _encode_value(value: Any) -> str:
    """Encode a parameter value for the query string: 10000.0 -> '10000', 4.700000000000001e-09 -> '4.7e-09'."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else f"{value:.12g}"
    return str(value)


def encode_params(params: dict[str, Any]) -> str:
    """Build the sorted query string for a lookup.

    ``None`` values are dropped and the ``json=true`` flag is always added.
    Keys are sorted so equal parameter sets always produce equal strings.
    """
    query = {k: _encode_value(v) for k, v in params.items() if v is not None}
    query["json"] = "true"
    return urlencode(sorted(query.items()))


def get_candidates(response: dict[str, Any], category: str) -> list[dict[str, Any]]:
    """Get the candidate list for ``category`` from a decoded response.

    A missing or null list is an empty result, not an error.
    """
    candidates = response.get(category)
    if candidates is None:
        return []
    if not isinstance(candidates, list):
        raise CatalogResponseError(category, f"expected a list of {category}, got {type(candidates).__name__}")
    return candidates


class JLCSearchClient:
    """Async client for the jlcsearch parts catalog."""

    def __init__(
        self,
        base_url: str = JLCSEARCH_BASE_URL,
        cache: ResultCache | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None
        if cache is None:
            cache = ResultCache(max_size=RESULT_CACHE_MAX_SIZE, ttl=RESULT_CACHE_TTL)
        self._cache = cache

    @property
    def cache(self) -> ResultCache:
        return self._cache

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _get(self, category: str, query_string: str) -> dict[str, Any]:
        """Fetch and decode one list page from the catalog."""
        url = f"{self._base_url}/{category}/list?{query_string}"
        try:
            response = await self._get_client().get(url)
        except httpx.HTTPError as e:
            raise CatalogUnavailableError(category, f"{type(e).__name__}: {e}") from e
        if response.status_code >= 400:
            raise CatalogUnavailableError(category, f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as e:
            raise CatalogResponseError(category, "response is not valid JSON") from e
        if not isinstance(data, dict):
            raise CatalogResponseError(category, f"expected a JSON object, got {type(data).__name__}")
        return data

    async def query(self, category: str, params: dict[str, Any]) -> dict[str, Any]:
        """Look up parts in a category, e.g. query("resistors", {"resistance": 1000, "package": "0603"}).

        Args:
            category: Plural category name used in the endpoint path
            params: Search parameters; None values are omitted

        Returns:
            Decoded response, e.g. {"resistors": [{"lcsc": 25804, ...}, ...]}

        Raises:
            CatalogUnavailableError: Network failure or HTTP error status
            CatalogResponseError: Body is not a JSON object
        """
        query_string = encode_params(params)
        cache_key = f"{category}?{query_string}"

        cached = self._cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit: {cache_key}")
            return cached

        logger.debug(f"Cache miss: {cache_key}")
        data = await self._get(category, query_string)
        self._cache.set(cache_key, data)
        return data

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
