"""Pydantic models for the exported GeoJSON document.

The export is a single ``Feature`` with a ``Polygon`` geometry whose one
ring lists ``[lng, lat]`` positions, first position repeated at the end
(RFC 7946 section 3.1.6).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from aoi_explorer.core.constants import DEFAULT_FEATURE_NAME


class FeatureProperties(BaseModel):
    """Properties block of the exported feature.

    Attributes:
        name: Selected area label, or ``"Area of Interest"``.
    """

    name: str = DEFAULT_FEATURE_NAME


class PolygonGeometry(BaseModel):
    """GeoJSON ``Polygon`` geometry.

    Attributes:
        type: Always ``"Polygon"``.
        coordinates: ``[exterior_ring]``; each ring is a closed list of
            ``[lng, lat]`` positions.
    """

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[list[float]]] = Field(default_factory=list)


class PolygonFeature(BaseModel):
    """GeoJSON ``Feature`` wrapping a single polygon."""

    type: Literal["Feature"] = "Feature"
    properties: FeatureProperties = Field(default_factory=FeatureProperties)
    geometry: PolygonGeometry = Field(default_factory=PolygonGeometry)

    def to_json(self) -> str:
        """Serialise with two-space indentation."""
        return self.model_dump_json(indent=2)
