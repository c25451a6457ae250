"""Capability interfaces for the engine's external collaborators.

The engine never talks to a UI toolkit, the network or the platform
directly. It talks to these abstract classes:

- ``SearchProvider``     : geocoding lookup (text → point).
- ``GeolocationProvider``: the user's own position.
- ``MapWidget``          : the tile-rendering widget.
- ``ExportSink``         : delivery of an exported file (download, save).

A host application supplies concrete implementations; the built-in
``NominatimSearchProvider`` covers geocoding over HTTP.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from aoi_explorer.core.exceptions import AOIExplorerError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aoi_explorer.core.constants import TileSource
    from aoi_explorer.engine.shape_io import ExportPayload
    from aoi_explorer.models.geo import GeoPoint
    from aoi_explorer.models.overlays import Overlay
    from aoi_explorer.models.state import SearchResult


class SearchProvider(abc.ABC):
    """Geocoding lookup.

    Example usage::

        provider = get_provider("nominatim", config)
        result = await provider.search("Pune")
    """

    name: str = ""

    @abc.abstractmethod
    async def search(self, query: str) -> SearchResult:
        """Resolve *query* to the best matching location.

        Args:
            query: Non-empty, already trimmed search text.

        Returns:
            The best match.

        Raises:
            NotFoundError: The service returned no match.
            NetworkError: The request failed or the response was unusable.
        """

    async def aclose(self) -> None:
        """Release network resources. Default: nothing to release."""


class GeolocationProvider(abc.ABC):
    """Source of the user's current position."""

    @abc.abstractmethod
    async def locate(self) -> GeoPoint:
        """Return the user's position.

        Raises:
            UnsupportedGeolocationError: No location capability exists.
            GeolocationDeniedError: The user declined or lookup failed.
        """


class MapWidget(abc.ABC):
    """The rendering widget driven by the viewport synchronizer.

    The widget reports user interaction back through the session:
    clicks via ``AOISession.handle_map_click`` and pan/zoom via
    ``ViewportSynchronizer.on_external_move`` / ``on_external_zoom``.
    """

    @abc.abstractmethod
    def set_view(self, center: GeoPoint, zoom: int, min_zoom: int, max_zoom: int) -> None:
        """Move the map to *center* at *zoom* within the zoom bounds."""

    @abc.abstractmethod
    def set_tile_source(self, tile_source: TileSource) -> None:
        """Swap the basemap tiles and attribution."""

    @abc.abstractmethod
    def set_overlays(self, overlays: Sequence[Overlay]) -> None:
        """Replace all drawn overlays."""

    def set_grid_visible(self, visible: bool) -> None:  # noqa: FBT001
        """Show or hide the reference grid. Optional capability."""


class ExportSink(abc.ABC):
    """Delivery mechanism for exported files."""

    @abc.abstractmethod
    def deliver(self, payload: ExportPayload) -> None:
        """Hand *payload* to the user (download, save dialog, disk...)."""


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class ProviderError(AOIExplorerError):
    """Provider registry or configuration failure.

    Attributes:
        provider: Name of the provider involved.
    """

    default_stage = "provider"
    default_code = "PROVIDER_ERROR"
    default_user_message = "Search is not available"

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"
