"""Session state value types.

- ``InteractionMode``: how map clicks are interpreted
- ``ViewportState``: map centre and zoom
- ``SearchResult``: a resolved geocoding lookup
- ``Alert``: a recovered, user-visible error
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from aoi_explorer.core.constants import MAX_ZOOM, MIN_ZOOM

if TYPE_CHECKING:
    from aoi_explorer.core.exceptions import AOIExplorerError
    from aoi_explorer.models.geo import GeoPoint


class InteractionMode(enum.Enum):
    """Active interaction mode. Exactly one is active at a time.

    Values:
        IDLE:    Clicks are ignored; a confirmed shape may be shown.
        POINTER: Explicit select/pan tool; clicks are ignored.
        DRAWING: Each click appends a vertex to the in-progress ring.
    """

    IDLE = "idle"
    POINTER = "pointer"
    DRAWING = "drawing"


def clamp_zoom(zoom: int) -> int:
    """Clamp *zoom* into ``[MIN_ZOOM, MAX_ZOOM]``."""
    return max(MIN_ZOOM, min(MAX_ZOOM, int(zoom)))


@dataclass(frozen=True, slots=True)
class ViewportState:
    """Map centre and integer zoom level.

    Attributes:
        center: Map centre.
        zoom: Zoom level in ``[MIN_ZOOM, MAX_ZOOM]``.
    """

    center: GeoPoint
    zoom: int

    def __post_init__(self) -> None:
        if not MIN_ZOOM <= self.zoom <= MAX_ZOOM:
            msg = f"ViewportState.zoom={self.zoom!r}: must be in [{MIN_ZOOM}, {MAX_ZOOM}]"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A single geocoding match.

    Attributes:
        label: Display name of the match (e.g. ``"Pune, Maharashtra, India"``).
        location: Point the viewport should centre on.
    """

    label: str
    location: GeoPoint


@dataclass(frozen=True, slots=True)
class Alert:
    """A user-visible, non-fatal message produced from a recovered error."""

    code: str
    message: str

    @classmethod
    def from_error(cls, error: AOIExplorerError) -> Alert:
        return cls(code=error.code, message=error.user_message)
