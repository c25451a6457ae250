"""OpenStreetMap Nominatim geocoding adapter.

Issues ``GET {base_url}/search?format=json&q=<query>&limit=1`` and maps
the first hit's ``lat``/``lon``/``display_name`` onto a ``SearchResult``.

Nominatim's usage policy requires an identifying ``User-Agent``; it is
taken from ``ExplorerConfig.user_agent``.

References:
    https://nominatim.org/release-docs/latest/api/Search/
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from aoi_explorer.core.exceptions import (
    CoordinateValidationError,
    NetworkError,
    NotFoundError,
)
from aoi_explorer.models.geo import GeoPoint
from aoi_explorer.models.state import SearchResult
from aoi_explorer.providers.base import SearchProvider

if TYPE_CHECKING:
    from aoi_explorer.core.config import ExplorerConfig

logger = logging.getLogger(__name__)

_SEARCH_PATH = "/search"
_RESULT_LIMIT = 1


class NominatimSearchProvider(SearchProvider):
    """Nominatim adapter over ``httpx.AsyncClient``.

    Args:
        config: Explorer configuration (base URL, user agent, timeout).
        client: Optional pre-built client, e.g. one using
            ``httpx.MockTransport``. The adapter closes only clients it
            created itself.
    """

    name = "nominatim"

    def __init__(self, config: ExplorerConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client
        self._owns_client = client is None

    @property
    def config(self) -> ExplorerConfig:
        return self._config

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.nominatim_url,
                timeout=self._config.search_timeout_s,
                headers={
                    "Accept": "application/json",
                    "User-Agent": self._config.user_agent,
                },
                follow_redirects=True,
            )
        return self._client

    async def search(self, query: str) -> SearchResult:
        client = self._get_client()
        params = {"format": "json", "q": query, "limit": str(_RESULT_LIMIT)}

        try:
            response = await client.get(
                _SEARCH_PATH,
                params=params,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            msg = f"Nominatim request failed for {query!r}: {exc}"
            raise NetworkError(msg) from exc
        except ValueError as exc:
            msg = f"Nominatim returned a non-JSON body for {query!r}"
            raise NetworkError(msg) from exc

        if not isinstance(data, list):
            msg = f"Nominatim returned {type(data).__name__}, expected a list"
            raise NetworkError(msg)
        if not data:
            msg = f"No results for {query!r}"
            raise NotFoundError(msg)

        result = _to_search_result(data[0], query)
        logger.debug(
            "Nominatim hit | query=%s | label=%s | lat=%.5f | lng=%.5f",
            query,
            result.label,
            result.location.lat,
            result.location.lng,
        )
        return result

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def _to_search_result(hit: Any, query: str) -> SearchResult:
    """Convert one Nominatim hit to a ``SearchResult``.

    Raises:
        NetworkError: If the hit lacks usable coordinates.
    """
    if not isinstance(hit, dict):
        msg = f"Nominatim hit for {query!r} is {type(hit).__name__}, expected an object"
        raise NetworkError(msg)

    try:
        location = GeoPoint(lat=float(hit["lat"]), lng=float(hit["lon"]))
    except (KeyError, TypeError, ValueError, CoordinateValidationError) as exc:
        msg = f"Nominatim hit for {query!r} has unusable coordinates: {exc}"
        raise NetworkError(msg) from exc

    label = str(hit.get("display_name") or query)
    return SearchResult(label=label, location=location)
