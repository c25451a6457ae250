"""GeoJSON import and export for AOI polygons.

Export writes one ``Feature`` with a ``Polygon`` geometry. Import accepts
a bare ``Polygon``, a ``Feature`` wrapping a ``Polygon`` or
``MultiPolygon``, or a ``FeatureCollection`` (first feature carrying a
``Polygon``/``MultiPolygon`` geometry, in document order).

Only the outer ring of the first polygon is kept: later ``MultiPolygon``
members and all holes are dropped. GeoJSON positions are ``[lng, lat]``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aoi_explorer.core.constants import (
    DEFAULT_FEATURE_NAME,
    EXPORT_FILENAME,
    EXPORT_MEDIA_TYPE,
    MIN_POLYGON_VERTICES,
)
from aoi_explorer.core.exceptions import (
    CoordinateValidationError,
    MalformedShapeError,
    NoActiveShapeError,
)
from aoi_explorer.models.geo import GeoPoint, Polygon
from aoi_explorer.models.geojson import FeatureProperties, PolygonFeature, PolygonGeometry

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_POLYGON_TYPES = ("Polygon", "MultiPolygon")
_NO_POLYGON_MESSAGE = "No polygon geometry found in GeoJSON."


@dataclass(frozen=True, slots=True)
class ExportPayload:
    """Bytes plus delivery hints for an exported file.

    Attributes:
        content: UTF-8 encoded JSON text.
        filename: Suggested filename.
        media_type: MIME type of ``content``.
    """

    content: bytes
    filename: str = EXPORT_FILENAME
    media_type: str = EXPORT_MEDIA_TYPE


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def export_feature(points: Sequence[GeoPoint], name: str | None = None) -> PolygonFeature:
    """Build the GeoJSON feature for a ring.

    The ring is closed by repeating the first position at the end.

    Raises:
        NoActiveShapeError: If the ring has fewer than 3 vertices.
    """
    if len(points) < MIN_POLYGON_VERTICES:
        msg = f"Cannot export a ring with {len(points)} vertices, need {MIN_POLYGON_VERTICES}"
        raise NoActiveShapeError(msg)

    ring = [p.to_lnglat() for p in points]
    ring.append(list(ring[0]))

    return PolygonFeature(
        properties=FeatureProperties(name=name or DEFAULT_FEATURE_NAME),
        geometry=PolygonGeometry(coordinates=[ring]),
    )


def export_bytes(points: Sequence[GeoPoint], name: str | None = None) -> ExportPayload:
    """Serialise a ring to an ``ExportPayload`` ready for an ``ExportSink``."""
    feature = export_feature(points, name)
    payload = ExportPayload(content=feature.to_json().encode("utf-8"))
    logger.info(
        "AOI exported | vertices=%d | bytes=%d | filename=%s",
        len(points),
        len(payload.content),
        payload.filename,
    )
    return payload


# ---------------------------------------------------------------------------
# Import
# ---------------------------------------------------------------------------


def parse_geojson(text: str) -> Polygon:
    """Extract the outer ring of the first polygon in a GeoJSON document.

    A trailing position equal to the first is the GeoJSON closing
    position and is dropped, so ``parse_geojson(export_bytes(ring))``
    returns ``ring``.

    Raises:
        MalformedShapeError: If *text* is not JSON, holds no polygon
            geometry, or the ring is empty, too short or out of range.
    """
    try:
        document = json.loads(text)
    except (ValueError, RecursionError) as exc:
        msg = f"Not valid JSON: {exc}"
        raise MalformedShapeError(msg) from exc

    if not isinstance(document, dict):
        msg = f"GeoJSON root must be an object, got {type(document).__name__}"
        raise MalformedShapeError(msg)

    rings = _find_polygon_rings(document)
    if not rings:
        raise MalformedShapeError(_NO_POLYGON_MESSAGE, user_message=_NO_POLYGON_MESSAGE)

    outer = rings[0]
    if not isinstance(outer, list):
        msg = f"Outer ring must be a list of positions, got {type(outer).__name__}"
        raise MalformedShapeError(msg)

    try:
        points = [GeoPoint.from_lnglat(position) for position in outer]
    except CoordinateValidationError as exc:
        msg = f"Invalid position in outer ring: {exc}"
        raise MalformedShapeError(msg) from exc

    if len(points) > 1 and points[0] == points[-1]:
        points.pop()

    if len(points) < MIN_POLYGON_VERTICES:
        msg = (
            f"Outer ring has {len(points)} distinct vertices, "
            f"need at least {MIN_POLYGON_VERTICES}"
        )
        raise MalformedShapeError(msg, user_message=_NO_POLYGON_MESSAGE)

    discarded_holes = len(rings) - 1
    logger.info(
        "GeoJSON parsed | type=%s | vertices=%d | holes_discarded=%d",
        document.get("type"),
        len(points),
        discarded_holes,
    )
    return tuple(points)


def read_shape_file(path: Path) -> Polygon:
    """Read a local GeoJSON file and parse its first polygon.

    Raises:
        MalformedShapeError: If the file cannot be read as UTF-8 text or
            does not parse.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read shape file {path.name}: {exc}"
        raise MalformedShapeError(msg) from exc
    return parse_geojson(text)


def _find_polygon_rings(document: dict[str, Any]) -> list[Any] | None:
    """Return the ring list of the first polygon geometry, or ``None``."""
    kind = document.get("type")

    if kind == "FeatureCollection":
        features = document.get("features")
        if not isinstance(features, list):
            return None
        for feature in features:
            geometry = feature.get("geometry") if isinstance(feature, dict) else None
            if isinstance(geometry, dict) and geometry.get("type") in _POLYGON_TYPES:
                return _rings_of(geometry)
        return None

    if kind == "Feature":
        geometry = document.get("geometry")
        if isinstance(geometry, dict):
            return _rings_of(geometry)
        return None

    if kind == "Polygon":
        return _rings_of(document)

    return None


def _rings_of(geometry: dict[str, Any]) -> list[Any] | None:
    """Rings of a ``Polygon``, or of the first member of a ``MultiPolygon``."""
    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, list) or not coordinates:
        return None

    if geometry.get("type") == "Polygon":
        return coordinates

    if geometry.get("type") == "MultiPolygon":
        if len(coordinates) > 1:
            logger.info(
                "MultiPolygon has %d members, keeping the first", len(coordinates)
            )
        first = coordinates[0]
        return first if isinstance(first, list) and first else None

    return None
