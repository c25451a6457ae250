"""Geographic value types: points, polygons and derived statistics.

A polygon is an ordered tuple of ``GeoPoint`` in drawing order with no
stored closing vertex; the edge from the last vertex back to the first
is implied. All coordinates are WGS 84 degrees.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from aoi_explorer.core.exceptions import CoordinateValidationError

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """An immutable latitude/longitude pair in decimal degrees.

    Raises:
        CoordinateValidationError: If either value is not finite or is
            outside WGS 84 bounds.
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lng)):
            msg = f"Coordinate must be finite, got lat={self.lat!r}, lng={self.lng!r}"
            raise CoordinateValidationError(msg)
        if not MIN_LATITUDE <= self.lat <= MAX_LATITUDE:
            msg = f"Latitude {self.lat} out of WGS 84 range [{MIN_LATITUDE}, {MAX_LATITUDE}]"
            raise CoordinateValidationError(msg)
        if not MIN_LONGITUDE <= self.lng <= MAX_LONGITUDE:
            msg = f"Longitude {self.lng} out of WGS 84 range [{MIN_LONGITUDE}, {MAX_LONGITUDE}]"
            raise CoordinateValidationError(msg)

    @classmethod
    def wrapped(cls, lat: float, lng: float) -> GeoPoint:
        """Build a point from widget coordinates.

        Map widgets report unwrapped longitudes once the user pans across
        the antimeridian (e.g. ``190`` instead of ``-170``). Longitude is
        wrapped into ``[-180, 180]`` (in-range values pass through
        untouched) and latitude clamped to ``[-90, 90]``.
        """
        wrapped_lng = lng
        if not MIN_LONGITUDE <= lng <= MAX_LONGITUDE:
            wrapped_lng = ((lng + 180.0) % 360.0) - 180.0
            if wrapped_lng == MIN_LONGITUDE and lng > 0:
                wrapped_lng = MAX_LONGITUDE
        clamped_lat = max(MIN_LATITUDE, min(MAX_LATITUDE, lat))
        return cls(lat=clamped_lat, lng=wrapped_lng)

    @classmethod
    def from_lnglat(cls, pair: object) -> GeoPoint:
        """Build a point from a GeoJSON ``[lng, lat]`` position.

        Extra ordinates (altitude) are ignored.

        Raises:
            CoordinateValidationError: If the position is not a sequence
                of at least two numbers or is out of range.
        """
        if not isinstance(pair, (list, tuple)) or len(pair) < 2:
            msg = f"Position must be a [lng, lat] pair, got {pair!r}"
            raise CoordinateValidationError(msg)
        lng, lat = pair[0], pair[1]
        if isinstance(lng, bool) or isinstance(lat, bool):
            msg = f"Position must hold numbers, got {pair!r}"
            raise CoordinateValidationError(msg)
        if not isinstance(lng, (int, float)) or not isinstance(lat, (int, float)):
            msg = f"Position must hold numbers, got {pair!r}"
            raise CoordinateValidationError(msg)
        try:
            return cls(lat=float(lat), lng=float(lng))
        except OverflowError as exc:
            msg = "Position holds a number too large for a coordinate"
            raise CoordinateValidationError(msg) from exc

    def to_lnglat(self) -> list[float]:
        """Return the GeoJSON ``[lng, lat]`` position for this point."""
        return [self.lng, self.lat]


Polygon = tuple[GeoPoint, ...]
"""Ordered, implicitly closed ring of vertices."""


@dataclass(frozen=True, slots=True)
class AOIStats:
    """Statistics derived from the active polygon.

    Attributes:
        vertices: Number of vertices in the ring.
        perimeter_km: Closed-ring great-circle perimeter in kilometres.
        area_km2: Spherical-Mercator planar area in square kilometres.
    """

    vertices: int
    perimeter_km: float
    area_km2: float

    def format_rows(self) -> list[tuple[str, str]]:
        """Return ``(label, value)`` rows for the stats panel."""
        return [
            ("Vertices", str(self.vertices)),
            ("Perimeter", f"{self.perimeter_km:.2f} km"),
            ("Area", f"{self.area_km2:.2f} km²"),
        ]
