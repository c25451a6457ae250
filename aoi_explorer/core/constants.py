"""Shared constants, single source of truth.

Zoom bounds and the per-action zoom levels, the default view, the export
filename and the tile sources behind each basemap identifier.

Attribution strings are kept verbatim: downstream consumers match on the
``OpenStreetMap`` and ``Esri`` substrings.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Zoom levels
# ---------------------------------------------------------------------------

MIN_ZOOM: int = 2
MAX_ZOOM: int = 18

SEARCH_ZOOM: int = 11
"""Zoom applied when a search result arrives."""

SHAPE_ZOOM: int = 13
"""Zoom applied by the explicit "zoom to shape" action."""

GEOLOCATE_ZOOM: int = 13
"""Zoom applied when the user's own location is found."""

IMPORT_ZOOM: int = 12
"""Zoom applied after a shape file is imported."""

# ---------------------------------------------------------------------------
# Default view
# ---------------------------------------------------------------------------

DEFAULT_CENTER_LAT: float = 20.0
DEFAULT_CENTER_LNG: float = 0.0
DEFAULT_ZOOM: int = MIN_ZOOM

# ---------------------------------------------------------------------------
# Shapes and export
# ---------------------------------------------------------------------------

MIN_POLYGON_VERTICES: int = 3
"""A ring needs this many vertices before it counts as an active shape."""

EXPORT_FILENAME: str = "area-of-interest.geojson"
EXPORT_MEDIA_TYPE: str = "application/geo+json"
DEFAULT_FEATURE_NAME: str = "Area of Interest"

OVERLAY_COLOR: str = "orange"
VERTEX_MARKER_RADIUS: int = 5

# ---------------------------------------------------------------------------
# Basemaps
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TileSource:
    """Tile-source descriptor handed to the rendering widget.

    Attributes:
        attribution: Attribution text displayed by the widget.
        url_template: XYZ tile URL template.
    """

    attribution: str
    url_template: str


class Basemap(enum.Enum):
    """Basemap identifiers understood by the rendering widget."""

    STREET = "street"
    SATELLITE = "satellite"

    @property
    def tile_source(self) -> TileSource:
        """Return the tile source for this basemap."""
        return _TILE_SOURCES[self]


_TILE_SOURCES: dict[Basemap, TileSource] = {
    Basemap.STREET: TileSource(
        attribution="&copy; OpenStreetMap contributors",
        url_template="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
    ),
    Basemap.SATELLITE: TileSource(
        attribution=(
            "Tiles © Esri — Source: Esri, Maxar, Earthstar Geographics, "
            "and the GIS User Community"
        ),
        url_template=(
            "https://server.arcgisonline.com/ArcGIS/rest/services/"
            "World_Imagery/MapServer/tile/{z}/{y}/{x}"
        ),
    ),
}

DEFAULT_BASEMAP: Basemap = Basemap.SATELLITE
