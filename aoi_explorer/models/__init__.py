"""Data models and schemas.

Defines the value types shared by the engine and its collaborators:
- GeoPoint / Polygon / AOIStats: geometry and derived statistics
- InteractionMode / ViewportState / SearchResult / Alert: session state
- Overlays: drawables sent to the rendering widget
- PolygonFeature: pydantic model of the exported GeoJSON
"""

from aoi_explorer.models.geo import AOIStats, GeoPoint, Polygon
from aoi_explorer.models.geojson import FeatureProperties, PolygonFeature, PolygonGeometry
from aoi_explorer.models.overlays import Overlay, PolygonOverlay, PolylineOverlay, VertexMarker
from aoi_explorer.models.state import (
    Alert,
    InteractionMode,
    SearchResult,
    ViewportState,
    clamp_zoom,
)

__all__ = [
    "AOIStats",
    "Alert",
    "FeatureProperties",
    "GeoPoint",
    "InteractionMode",
    "Overlay",
    "Polygon",
    "PolygonFeature",
    "PolygonGeometry",
    "PolygonOverlay",
    "PolylineOverlay",
    "SearchResult",
    "VertexMarker",
    "ViewportState",
    "clamp_zoom",
]
