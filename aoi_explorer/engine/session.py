"""AOI session: the single-user controller behind the map UI.

Wires the state machine, the viewport synchronizer, shape I/O and the
external collaborators together, and turns every user-facing error into
an ``Alert`` or an inline status message at the point where it happens.
Nothing raised by a user action escapes the session.

All methods run on one ``asyncio`` event loop. ``search`` and
``locate_me`` are the only suspension points; a search that completes
after a newer one was started is discarded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from aoi_explorer.core.config import ExplorerConfig
from aoi_explorer.core.constants import (
    GEOLOCATE_ZOOM,
    IMPORT_ZOOM,
    SEARCH_ZOOM,
    SHAPE_ZOOM,
    Basemap,
)
from aoi_explorer.core.exceptions import (
    AOIExplorerError,
    GeolocationDeniedError,
    InputError,
    MalformedShapeError,
    NetworkError,
    NoActiveShapeError,
    NotFoundError,
    UnsupportedGeolocationError,
)
from aoi_explorer.engine.aoi_state import AOIStateMachine
from aoi_explorer.engine.shape_io import ExportPayload, export_bytes, parse_geojson, read_shape_file
from aoi_explorer.engine.viewport import ViewportSynchronizer
from aoi_explorer.models.geo import GeoPoint
from aoi_explorer.models.state import Alert
from aoi_explorer.providers.base import ProviderError
from aoi_explorer.providers.factory import get_provider
from aoi_explorer.providers.geolocation import UnavailableGeolocationProvider

if TYPE_CHECKING:
    from pathlib import Path

    from aoi_explorer.models.geo import AOIStats, Polygon
    from aoi_explorer.models.state import InteractionMode, SearchResult
    from aoi_explorer.providers.base import (
        ExportSink,
        GeolocationProvider,
        MapWidget,
        SearchProvider,
    )

logger = logging.getLogger(__name__)

SEARCHING_TEXT = "Searching…"
MY_LOCATION_LABEL = "My Location"
STATS_PLACEHOLDER = "Draw or upload a polygon to see stats."
APPLY_OUTLINE_MESSAGE = "Draw or upload a shape first."

AlertListener = Callable[[Alert], None]


class AOISession:
    """One in-memory AOI session.

    Args:
        config: Explorer configuration; defaults to ``ExplorerConfig()``.
        search_provider: Geocoder; built from ``config.search_provider``
            on first use when omitted.
        geolocation: Position source; defaults to one that reports the
            capability as unsupported.
        export_sink: Receives exported files; without one, ``export_geojson``
            only returns the payload.
    """

    def __init__(
        self,
        config: ExplorerConfig | None = None,
        *,
        search_provider: SearchProvider | None = None,
        geolocation: GeolocationProvider | None = None,
        export_sink: ExportSink | None = None,
    ) -> None:
        self.config = config or ExplorerConfig()
        self.aoi = AOIStateMachine()
        self.viewport = ViewportSynchronizer(recenter_strategy=self.config.recenter_strategy)

        self._search_provider = search_provider
        self._geolocation = geolocation or UnavailableGeolocationProvider()
        self._export_sink = export_sink
        self._widget: MapWidget | None = None

        self.basemap: Basemap = self.config.basemap
        self.grid_visible = False
        self.search_query = ""
        self.selected_area = ""
        self.is_searching = False
        self.search_error: str | None = None
        self.base_area: Polygon | None = None
        self.alerts: list[Alert] = []

        self._search_seq = 0
        self._alert_listeners: list[AlertListener] = []
        self.aoi.subscribe(self._on_aoi_changed)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def attach_widget(self, widget: MapWidget) -> None:
        """Attach the rendering widget and bring it fully up to date."""
        self._widget = widget
        self.viewport.attach(widget)
        widget.set_tile_source(self.basemap.tile_source)
        widget.set_overlays(self.aoi.overlays())
        widget.set_grid_visible(self.grid_visible)

    def on_alert(self, listener: AlertListener) -> None:
        """Register a listener for user-visible alerts."""
        self._alert_listeners.append(listener)

    async def aclose(self) -> None:
        """Release the search provider's network resources."""
        if self._search_provider is not None:
            await self._search_provider.aclose()

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def mode(self) -> InteractionMode:
        return self.aoi.mode

    def active_shape(self) -> Polygon | None:
        return self.aoi.active_shape()

    def stats(self) -> AOIStats | None:
        return self.aoi.stats()

    def status_line(self) -> str:
        """Inline text under the search box."""
        if self.is_searching:
            return SEARCHING_TEXT
        if self.search_error:
            return self.search_error
        if self.selected_area:
            return f"Selected: {self.selected_area}"
        return ""

    def stats_rows(self) -> list[tuple[str, str]]:
        """Rows of the stats panel: centre, zoom, then shape stats.

        Without an active shape the last row carries the placeholder text
        and an empty value.
        """
        center = self.viewport.center
        rows = [
            ("Center", f"{center.lat:.4f}, {center.lng:.4f}"),
            ("Zoom level", str(self.viewport.zoom)),
        ]
        stats = self.stats()
        if stats is None:
            rows.append((STATS_PLACEHOLDER, ""))
        else:
            rows.extend(stats.format_rows())
        return rows

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(self, query: str | None = None) -> SearchResult | None:
        """Geocode the search box text and centre the map on the match.

        Returns the applied result, or ``None`` if the query was empty,
        failed, or was superseded by a newer search.
        """
        if query is not None:
            self.search_query = query
        try:
            text = _validate_query(self.search_query)
        except InputError as exc:
            logger.debug("Search ignored | reason=%s", exc.message)
            return None

        self._search_seq += 1
        ticket = self._search_seq
        self.is_searching = True
        self.search_error = None
        logger.info("Search started | query=%s | request=%d", text, ticket)

        try:
            result = await self._get_search_provider().search(text)
        except (NotFoundError, NetworkError, ProviderError) as exc:
            if ticket != self._search_seq:
                logger.debug("Stale search failure dropped | request=%d", ticket)
                return None
            self.search_error = exc.user_message
            logger.warning("Search failed | query=%s | code=%s | %s", text, exc.code, exc.message)
            return None
        finally:
            if ticket == self._search_seq:
                self.is_searching = False

        if ticket != self._search_seq:
            logger.debug("Stale search result dropped | request=%d | latest=%d", ticket, self._search_seq)
            return None

        self.viewport.recenter_to(result.location, SEARCH_ZOOM)
        self.selected_area = result.label
        self.search_error = None
        logger.info("Search resolved | query=%s | label=%s", text, result.label)
        return result

    def _get_search_provider(self) -> SearchProvider:
        if self._search_provider is None:
            self._search_provider = get_provider(self.config.search_provider, self.config)
        return self._search_provider

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def toggle_drawing(self) -> None:
        self.aoi.toggle_drawing()

    def enter_pointer_mode(self) -> None:
        self.aoi.enter_pointer_mode()

    def clear_aoi(self) -> None:
        self.aoi.clear()

    def handle_map_click(self, lat: float, lng: float) -> bool:
        """Widget ``onClick``: adds a vertex while drawing."""
        return self.aoi.handle_click(GeoPoint.wrapped(lat, lng))

    def handle_move_end(self, lat: float, lng: float) -> None:
        """Widget ``onMoveEnd``: the user panned the map."""
        self.viewport.on_external_move(GeoPoint.wrapped(lat, lng))

    def handle_zoom_end(self, zoom: int) -> None:
        """Widget ``onZoomEnd``: the user zoomed the map."""
        self.viewport.on_external_zoom(zoom)

    # ------------------------------------------------------------------
    # Shape import / export
    # ------------------------------------------------------------------

    def import_shape(self, text: str, filename: str = "") -> bool:
        """Load a GeoJSON document as the confirmed polygon.

        Returns ``True`` on success. A malformed document raises an alert
        and leaves all state untouched.
        """
        try:
            points = parse_geojson(text)
        except MalformedShapeError as exc:
            self._alert(exc)
            return False
        self._apply_import(points, filename)
        return True

    def import_shape_file(self, path: Path) -> bool:
        """Read and load a local GeoJSON file (see ``import_shape``)."""
        try:
            points = read_shape_file(path)
        except MalformedShapeError as exc:
            self._alert(exc)
            return False
        self._apply_import(points, path.name)
        return True

    def _apply_import(self, points: Polygon, label: str) -> None:
        self.aoi.load_shape(points)
        self.viewport.recenter_to_shape(points, IMPORT_ZOOM)
        if label:
            self.selected_area = label

    def export_geojson(self) -> ExportPayload | None:
        """Export the active shape and hand it to the export sink."""
        try:
            shape = self.aoi.require_active_shape()
            payload = export_bytes(shape, self.selected_area or None)
        except NoActiveShapeError as exc:
            self._alert(exc)
            return None
        if self._export_sink is not None:
            self._export_sink.deliver(payload)
        return payload

    def apply_outline(self) -> Polygon | None:
        """Promote the active shape to the base area of the selected place.

        Does nothing until a place is selected.
        """
        if not self.selected_area:
            return None
        try:
            shape = self.aoi.require_active_shape()
        except NoActiveShapeError as exc:
            exc.user_message = APPLY_OUTLINE_MESSAGE
            self._alert(exc)
            return None
        self.base_area = shape
        logger.info("Outline applied | area=%s | vertices=%d", self.selected_area, len(shape))
        return shape

    # ------------------------------------------------------------------
    # Viewport actions
    # ------------------------------------------------------------------

    def zoom_to_shape(self) -> bool:
        """Centre on the active shape at the shape zoom level."""
        shape = self.aoi.active_shape()
        if shape is None:
            return False
        return self.viewport.recenter_to_shape(shape, SHAPE_ZOOM)

    async def locate_me(self) -> GeoPoint | None:
        """Centre on the user's own position."""
        try:
            position = await self._geolocation.locate()
        except (UnsupportedGeolocationError, GeolocationDeniedError) as exc:
            self._alert(exc)
            return None
        self.viewport.recenter_to(position, GEOLOCATE_ZOOM)
        self.selected_area = MY_LOCATION_LABEL
        return position

    def zoom_in(self) -> int:
        return self.viewport.zoom_by(1).zoom

    def zoom_out(self) -> int:
        return self.viewport.zoom_by(-1).zoom

    def set_basemap(self, basemap: Basemap | str) -> None:
        self.basemap = Basemap(basemap)
        if self._widget is not None:
            self._widget.set_tile_source(self.basemap.tile_source)

    def toggle_grid(self) -> bool:
        self.grid_visible = not self.grid_visible
        if self._widget is not None:
            self._widget.set_grid_visible(self.grid_visible)
        return self.grid_visible

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def back(self) -> None:
        """Drop the selected place, the search text and both polygons."""
        self.selected_area = ""
        self.search_query = ""
        self.search_error = None
        self.base_area = None
        self.aoi.clear()

    def home(self) -> None:
        """``back`` plus a return to the default view."""
        self.back()
        self.viewport.reset()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_aoi_changed(self, machine: AOIStateMachine) -> None:
        if self._widget is not None:
            self._widget.set_overlays(machine.overlays())

    def _alert(self, error: AOIExplorerError) -> None:
        alert = Alert.from_error(error)
        logger.warning("%s | code=%s | %s", error.stage, error.code, error.message)
        self.alerts.append(alert)
        for listener in list(self._alert_listeners):
            listener(alert)


def _validate_query(query: str) -> str:
    """Return the trimmed query.

    Raises:
        InputError: If nothing is left after trimming.
    """
    text = query.strip()
    if not text:
        raise InputError("Search query is empty")
    return text
