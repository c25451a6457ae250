"""AOI interaction state machine.

Owns the interaction mode, the confirmed polygon and the in-progress
vertex buffer::

    IDLE ──toggle_drawing──▶ DRAWING ──toggle_drawing──▶ IDLE (commit if ≥3)
      │                        │
      └──enter_pointer_mode──▶ POINTER ◀──enter_pointer_mode (discard)

Entering DRAWING hides the confirmed polygon without discarding it; it
comes back when drawing ends without a commit. ``clear`` and
``load_shape`` apply from any mode.

Listeners registered with ``subscribe`` are called with the machine after
every transition that changed state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from aoi_explorer.core.constants import MIN_POLYGON_VERTICES
from aoi_explorer.core.exceptions import NoActiveShapeError
from aoi_explorer.engine.geometry import compute_stats
from aoi_explorer.models.geo import AOIStats, GeoPoint, Polygon
from aoi_explorer.models.overlays import Overlay, PolygonOverlay, PolylineOverlay, VertexMarker
from aoi_explorer.models.state import InteractionMode

logger = logging.getLogger(__name__)

StateListener = Callable[["AOIStateMachine"], None]


class AOIStateMachine:
    """Interaction mode plus confirmed and in-progress polygons."""

    def __init__(self) -> None:
        self._mode = InteractionMode.IDLE
        self._confirmed: Polygon = ()
        self._hidden: Polygon = ()
        self._buffer: list[GeoPoint] = []
        self._listeners: list[StateListener] = []

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def is_drawing(self) -> bool:
        return self._mode is InteractionMode.DRAWING

    @property
    def confirmed(self) -> Polygon:
        """The visible confirmed polygon (empty while hidden by drawing)."""
        return self._confirmed

    @property
    def buffer(self) -> Polygon:
        """Vertices placed so far in the current drawing."""
        return tuple(self._buffer)

    def active_shape(self) -> Polygon | None:
        """Resolve the shape that stats, export and recentering act on.

        The confirmed polygon if present, else the in-progress buffer once
        it holds at least 3 vertices, else ``None``.
        """
        if len(self._confirmed) >= MIN_POLYGON_VERTICES:
            return self._confirmed
        if len(self._buffer) >= MIN_POLYGON_VERTICES:
            return tuple(self._buffer)
        return None

    def require_active_shape(self) -> Polygon:
        """Return the active shape.

        Raises:
            NoActiveShapeError: If there is no qualifying shape.
        """
        shape = self.active_shape()
        if shape is None:
            msg = (
                f"No active shape: confirmed={len(self._confirmed)} vertices, "
                f"buffer={len(self._buffer)} vertices"
            )
            raise NoActiveShapeError(msg)
        return shape

    def stats(self) -> AOIStats | None:
        """Statistics for the active shape, or ``None`` without one."""
        shape = self.active_shape()
        if shape is None:
            return None
        return compute_stats(shape)

    def overlays(self) -> list[Overlay]:
        """Drawables for the rendering widget."""
        drawables: list[Overlay] = []
        if self._confirmed:
            drawables.append(PolygonOverlay(points=self._confirmed))
        if self._buffer:
            drawables.append(PolylineOverlay(points=tuple(self._buffer)))
            drawables.extend(VertexMarker(center=p) for p in self._buffer)
        return drawables

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def toggle_drawing(self) -> None:
        """Start drawing, or finish it (committing a ring of ≥3 vertices)."""
        if self._mode is InteractionMode.DRAWING:
            self._finish_drawing()
        else:
            self._start_drawing()
        self._notify()

    def enter_pointer_mode(self) -> None:
        """Switch to the pointer tool, discarding any in-progress drawing."""
        if self._mode is InteractionMode.DRAWING:
            logger.info("Drawing cancelled | discarded=%d vertices", len(self._buffer))
            self._restore_hidden()
        self._buffer.clear()
        self._mode = InteractionMode.POINTER
        self._notify()

    def handle_click(self, point: GeoPoint) -> bool:
        """Interpret a map click. Returns ``True`` if a vertex was added."""
        if self._mode is not InteractionMode.DRAWING:
            logger.debug("Click ignored | mode=%s", self._mode.value)
            return False
        self._buffer.append(point)
        logger.debug("Vertex added | count=%d", len(self._buffer))
        self._notify()
        return True

    def clear(self) -> None:
        """Reset to IDLE with no confirmed polygon and no buffer."""
        self._mode = InteractionMode.IDLE
        self._confirmed = ()
        self._hidden = ()
        self._buffer.clear()
        logger.info("AOI cleared")
        self._notify()

    def load_shape(self, points: Sequence[GeoPoint]) -> None:
        """Replace the confirmed polygon with an imported ring.

        Import always wins: the buffer and any hidden polygon are dropped
        and the mode is forced to IDLE.
        """
        self._confirmed = tuple(points)
        self._hidden = ()
        self._buffer.clear()
        self._mode = InteractionMode.IDLE
        logger.info("Shape loaded | vertices=%d", len(self._confirmed))
        self._notify()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _start_drawing(self) -> None:
        if self._confirmed:
            self._hidden = self._confirmed
            self._confirmed = ()
        self._buffer.clear()
        self._mode = InteractionMode.DRAWING
        logger.debug("Drawing started | hidden=%d vertices", len(self._hidden))

    def _finish_drawing(self) -> None:
        if len(self._buffer) >= MIN_POLYGON_VERTICES:
            self._confirmed = tuple(self._buffer)
            self._hidden = ()
            logger.info("Polygon committed | vertices=%d", len(self._confirmed))
        else:
            logger.info(
                "Drawing discarded | vertices=%d | need=%d",
                len(self._buffer),
                MIN_POLYGON_VERTICES,
            )
            self._restore_hidden()
        self._buffer.clear()
        self._mode = InteractionMode.IDLE

    def _restore_hidden(self) -> None:
        if self._hidden:
            self._confirmed = self._hidden
            self._hidden = ()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
