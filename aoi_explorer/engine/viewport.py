"""Viewport synchronizer: sole authority over map centre and zoom.

Programmatic changes (search, import, zoom buttons...) go through
``recenter_to`` / ``zoom_by`` and are pushed to the attached widget.
User pan/zoom on the widget comes back through ``on_external_move`` /
``on_external_zoom`` and is recorded without being pushed back, so the
two directions never feed each other.

Listeners receive ``(state, source)`` where *source* is
``"programmatic"`` or ``"external"``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from aoi_explorer.core.config import RECENTER_BBOX, RECENTER_CENTROID
from aoi_explorer.core.constants import (
    DEFAULT_CENTER_LAT,
    DEFAULT_CENTER_LNG,
    DEFAULT_ZOOM,
    MAX_ZOOM,
    MIN_ZOOM,
    SHAPE_ZOOM,
)
from aoi_explorer.engine.geometry import bbox_center, centroid
from aoi_explorer.models.geo import GeoPoint
from aoi_explorer.models.state import ViewportState, clamp_zoom

if TYPE_CHECKING:
    from aoi_explorer.providers.base import MapWidget

logger = logging.getLogger(__name__)

SOURCE_PROGRAMMATIC = "programmatic"
SOURCE_EXTERNAL = "external"

ViewportListener = Callable[[ViewportState, str], None]


def default_viewport() -> ViewportState:
    """The view a fresh session starts with (and ``home`` returns to)."""
    return ViewportState(
        center=GeoPoint(lat=DEFAULT_CENTER_LAT, lng=DEFAULT_CENTER_LNG),
        zoom=DEFAULT_ZOOM,
    )


class ViewportSynchronizer:
    """Holds the shared ``ViewportState`` and keeps the widget in step with it.

    Args:
        initial: Starting view; defaults to ``default_viewport()``.
        recenter_strategy: ``"bbox"`` centres shapes on their bounding-box
            midpoint, ``"centroid"`` on their area centroid.
    """

    def __init__(
        self,
        initial: ViewportState | None = None,
        *,
        recenter_strategy: str = RECENTER_BBOX,
    ) -> None:
        self._state = initial or default_viewport()
        self._recenter_strategy = recenter_strategy
        self._widget: MapWidget | None = None
        self._listeners: list[ViewportListener] = []
        self._applying = False

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def center(self) -> GeoPoint:
        return self._state.center

    @property
    def zoom(self) -> int:
        return self._state.zoom

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def attach(self, widget: MapWidget) -> None:
        """Attach the rendering widget and bring it to the current view."""
        self._widget = widget
        self._push()

    def detach(self) -> None:
        self._widget = None

    def subscribe(self, listener: ViewportListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Programmatic commands
    # ------------------------------------------------------------------

    def recenter_to(self, point: GeoPoint, zoom: int) -> ViewportState:
        """Set centre and zoom unconditionally (zoom is clamped)."""
        self._state = ViewportState(center=point, zoom=clamp_zoom(zoom))
        logger.debug(
            "Viewport recentered | lat=%.4f | lng=%.4f | zoom=%d",
            point.lat,
            point.lng,
            self._state.zoom,
        )
        self._push()
        self._notify(SOURCE_PROGRAMMATIC)
        return self._state

    def recenter_to_shape(self, points: Sequence[GeoPoint], zoom: int = SHAPE_ZOOM) -> bool:
        """Centre on a shape. Returns ``False`` (no-op) for an empty shape."""
        if self._recenter_strategy == RECENTER_CENTROID:
            center = centroid(points)
        else:
            center = bbox_center(points)
        if center is None:
            return False
        self.recenter_to(center, zoom)
        return True

    def zoom_by(self, delta: int) -> ViewportState:
        """Change zoom by *delta*, clamped to ``[MIN_ZOOM, MAX_ZOOM]``."""
        zoom = clamp_zoom(self._state.zoom + delta)
        if zoom == self._state.zoom:
            logger.debug("Zoom unchanged at bound | zoom=%d | delta=%d", zoom, delta)
            return self._state
        self._state = ViewportState(center=self._state.center, zoom=zoom)
        self._push()
        self._notify(SOURCE_PROGRAMMATIC)
        return self._state

    def reset(self) -> ViewportState:
        """Return to the default view."""
        default = default_viewport()
        return self.recenter_to(default.center, default.zoom)

    # ------------------------------------------------------------------
    # Widget feedback
    # ------------------------------------------------------------------

    def on_external_move(self, center: GeoPoint) -> None:
        """Record a pan performed directly on the widget."""
        self._record_external(ViewportState(center=center, zoom=self._state.zoom))

    def on_external_zoom(self, zoom: int) -> None:
        """Record a zoom performed directly on the widget."""
        self._record_external(ViewportState(center=self._state.center, zoom=clamp_zoom(zoom)))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _record_external(self, new_state: ViewportState) -> None:
        if self._applying:
            logger.debug("Widget echo absorbed | zoom=%d", new_state.zoom)
            return
        if new_state == self._state:
            return
        self._state = new_state
        self._notify(SOURCE_EXTERNAL)

    def _push(self) -> None:
        if self._widget is None:
            return
        self._applying = True
        try:
            self._widget.set_view(self._state.center, self._state.zoom, MIN_ZOOM, MAX_ZOOM)
        finally:
            self._applying = False

    def _notify(self, source: str) -> None:
        for listener in list(self._listeners):
            listener(self._state, source)
