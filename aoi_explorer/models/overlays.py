"""Drawable overlays handed to the rendering widget.

The widget receives a flat list: the confirmed polygon (if visible),
then the in-progress polyline, then one marker per in-progress vertex.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from aoi_explorer.core.constants import OVERLAY_COLOR, VERTEX_MARKER_RADIUS

if TYPE_CHECKING:
    from aoi_explorer.models.geo import GeoPoint, Polygon


@dataclass(frozen=True, slots=True)
class PolygonOverlay:
    """Closed, filled ring for the confirmed polygon."""

    points: Polygon
    color: str = OVERLAY_COLOR


@dataclass(frozen=True, slots=True)
class PolylineOverlay:
    """Open path through the in-progress vertices."""

    points: Polygon
    color: str = OVERLAY_COLOR


@dataclass(frozen=True, slots=True)
class VertexMarker:
    """Filled circle marking one in-progress vertex."""

    center: GeoPoint
    radius: int = VERTEX_MARKER_RADIUS
    color: str = OVERLAY_COLOR


Overlay = Union[PolygonOverlay, PolylineOverlay, VertexMarker]
