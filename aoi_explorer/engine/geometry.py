"""Closed-form geometry over WGS 84 rings.

Perimeter uses the haversine great-circle distance on a 6371 km sphere.
Area projects every vertex with spherical Mercator (R = 6378137 m) and
applies the planar shoelace formula, so it is exact only for regions
that are small relative to the Earth: Mercator inflates area by roughly
``1 / cos²(lat)``, which a small ring sees as a near-constant factor.

Every function is total: degenerate input (too few vertices, duplicate
consecutive vertices, polar latitudes) yields ``0`` or ``None``, never an
exception. Self-intersecting rings are accepted and the shoelace value
is returned as is.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from aoi_explorer.core.constants import MIN_POLYGON_VERTICES
from aoi_explorer.models.geo import AOIStats, GeoPoint

EARTH_RADIUS_KM = 6371.0
"""Mean Earth radius for haversine distances."""

MERCATOR_RADIUS_M = 6378137.0
"""WGS 84 semi-major axis used by spherical (web) Mercator."""

MERCATOR_MAX_LAT = 85.05112878
"""Latitude where spherical Mercator becomes square; beyond it y diverges."""

SQ_METRES_PER_SQ_KM = 1_000_000.0


# ---------------------------------------------------------------------------
# Distance and perimeter
# ---------------------------------------------------------------------------


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometres.

    Symmetric, and zero exactly when ``a == b``.
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)

    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # Rounding can push h a hair outside [0, 1] for antipodal points.
    h = min(1.0, max(0.0, h))

    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def perimeter_km(points: Sequence[GeoPoint]) -> float:
    """Perimeter of the closed ring in kilometres (0 below 2 vertices)."""
    if len(points) < 2:
        return 0.0
    count = len(points)
    return math.fsum(distance_km(points[i], points[(i + 1) % count]) for i in range(count))


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------


def project_mercator(point: GeoPoint) -> tuple[float, float]:
    """Project a point to spherical-Mercator metres ``(x, y)``.

    Latitude is clamped to ``±MERCATOR_MAX_LAT`` so poles stay finite.
    """
    lat = max(-MERCATOR_MAX_LAT, min(MERCATOR_MAX_LAT, point.lat))
    x = MERCATOR_RADIUS_M * math.radians(point.lng)
    y = MERCATOR_RADIUS_M * math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
    return (x, y)


def area_km2(points: Sequence[GeoPoint]) -> float:
    """Planar area of the projected ring in square kilometres.

    Orientation-independent (absolute shoelace value) and 0 below
    3 vertices.
    """
    if len(points) < MIN_POLYGON_VERTICES:
        return 0.0

    projected = [project_mercator(p) for p in points]
    count = len(projected)
    twice_area = math.fsum(
        projected[i][0] * projected[(i + 1) % count][1]
        - projected[(i + 1) % count][0] * projected[i][1]
        for i in range(count)
    )
    return abs(twice_area) / 2 / SQ_METRES_PER_SQ_KM


# ---------------------------------------------------------------------------
# Extent and centring
# ---------------------------------------------------------------------------


def bounding_box(points: Sequence[GeoPoint]) -> tuple[float, float, float, float] | None:
    """Return ``(min_lng, min_lat, max_lng, max_lat)``, or ``None`` if empty."""
    if not points:
        return None
    lats = [p.lat for p in points]
    lngs = [p.lng for p in points]
    return (min(lngs), min(lats), max(lngs), max(lats))


def bbox_center(points: Sequence[GeoPoint]) -> GeoPoint | None:
    """Midpoint of the axis-aligned bounding box.

    This is not the area centroid: a ring with many vertices on one side
    is centred on its extent, not its mass.
    """
    bbox = bounding_box(points)
    if bbox is None:
        return None
    min_lng, min_lat, max_lng, max_lat = bbox
    return GeoPoint(lat=(min_lat + max_lat) / 2, lng=(min_lng + max_lng) / 2)


def centroid(points: Sequence[GeoPoint]) -> GeoPoint | None:
    """Area centroid of the ring in degree space, computed with Shapely.

    Falls back to ``bbox_center`` for rings with fewer than 3 vertices or
    zero area, where a centroid is undefined.
    """
    if len(points) < MIN_POLYGON_VERTICES:
        return bbox_center(points)

    from shapely.geometry import Polygon

    ring = Polygon([(p.lng, p.lat) for p in points])
    if ring.is_empty or ring.area == 0:
        return bbox_center(points)

    center = ring.centroid
    return GeoPoint(lat=center.y, lng=center.x)


def compute_stats(points: Sequence[GeoPoint]) -> AOIStats:
    """Vertex count, perimeter and area for a ring."""
    return AOIStats(
        vertices=len(points),
        perimeter_km=perimeter_km(points),
        area_km2=area_km2(points),
    )
