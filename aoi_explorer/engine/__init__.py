"""AOI interaction and geometry engine.

- geometry: haversine distance, ring perimeter, Mercator shoelace area
- aoi_state: interaction mode, confirmed polygon, in-progress buffer
- viewport: centre/zoom authority kept in step with the map widget
- shape_io: GeoJSON import and export
- session: the controller wiring the above to external collaborators
"""

from aoi_explorer.engine.aoi_state import AOIStateMachine
from aoi_explorer.engine.session import AOISession
from aoi_explorer.engine.viewport import ViewportSynchronizer

__all__ = [
    "AOISession",
    "AOIStateMachine",
    "ViewportSynchronizer",
]
