"""Shared pytest fixtures and collaborator fakes for the AOI explorer suite."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from aoi_explorer.core.exceptions import NotFoundError
from aoi_explorer.models.geo import GeoPoint
from aoi_explorer.models.state import SearchResult
from aoi_explorer.providers.base import ExportSink, MapWidget, SearchProvider

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def polygon_geojson(data_dir: Path) -> Path:
    """Bare Polygon around central Pune (closed ring, 4 distinct vertices)."""
    return data_dir / "01_polygon_pune.geojson"


@pytest.fixture()
def polygon_with_hole_geojson(data_dir: Path) -> Path:
    """Feature wrapping a Polygon with one interior ring."""
    return data_dir / "02_feature_polygon_with_hole.geojson"


@pytest.fixture()
def multipolygon_collection_geojson(data_dir: Path) -> Path:
    """FeatureCollection: Point, two-member MultiPolygon, then a Polygon."""
    return data_dir / "03_collection_multipolygon.geojson"


@pytest.fixture()
def points_only_geojson(data_dir: Path) -> Path:
    """FeatureCollection with no polygon geometry."""
    return data_dir / "04_points_only.geojson"


@pytest.fixture()
def not_json_geojson(data_dir: Path) -> Path:
    """A file that is not JSON at all."""
    return data_dir / "05_not_json.geojson"


# ---------------------------------------------------------------------------
# Sample rings
# ---------------------------------------------------------------------------


@pytest.fixture()
def square() -> tuple[GeoPoint, ...]:
    """Roughly 1.1 km x 1.1 km square on the equator."""
    return (
        GeoPoint(lat=0.0, lng=0.0),
        GeoPoint(lat=0.0, lng=0.01),
        GeoPoint(lat=0.01, lng=0.01),
        GeoPoint(lat=0.01, lng=0.0),
    )


@pytest.fixture()
def triangle() -> tuple[GeoPoint, ...]:
    return (
        GeoPoint(lat=18.50, lng=73.80),
        GeoPoint(lat=18.55, lng=73.90),
        GeoPoint(lat=18.45, lng=73.88),
    )


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


class FakeMapWidget(MapWidget):
    """Records every call; optionally echoes views back like Leaflet does."""

    def __init__(self, echo_to: object | None = None) -> None:
        self.views: list[tuple[GeoPoint, int, int, int]] = []
        self.tile_sources: list[object] = []
        self.overlays: list[list[object]] = []
        self.grid: list[bool] = []
        self.echo_to = echo_to

    def set_view(self, center: GeoPoint, zoom: int, min_zoom: int, max_zoom: int) -> None:
        self.views.append((center, zoom, min_zoom, max_zoom))
        if self.echo_to is not None:
            self.echo_to.on_external_move(center)  # type: ignore[attr-defined]
            self.echo_to.on_external_zoom(zoom)  # type: ignore[attr-defined]

    def set_tile_source(self, tile_source: object) -> None:
        self.tile_sources.append(tile_source)

    def set_overlays(self, overlays: object) -> None:
        self.overlays.append(list(overlays))  # type: ignore[call-overload]

    def set_grid_visible(self, visible: bool) -> None:  # noqa: FBT001
        self.grid.append(visible)


class FakeSearchProvider(SearchProvider):
    """In-memory geocoder keyed by lower-cased query."""

    name = "fake"

    def __init__(self, places: dict[str, SearchResult] | None = None) -> None:
        self.places = places or {}
        self.queries: list[str] = []
        self.closed = False

    async def search(self, query: str) -> SearchResult:
        self.queries.append(query)
        await asyncio.sleep(0)
        try:
            return self.places[query.lower()]
        except KeyError:
            raise NotFoundError(f"No results for {query!r}") from None

    async def aclose(self) -> None:
        self.closed = True


class RecordingExportSink(ExportSink):
    def __init__(self) -> None:
        self.payloads: list[object] = []

    def deliver(self, payload: object) -> None:
        self.payloads.append(payload)


PUNE = SearchResult(
    label="Pune, Pune District, Maharashtra, India",
    location=GeoPoint(lat=18.5213738, lng=73.8545071),
)


@pytest.fixture()
def fake_widget() -> FakeMapWidget:
    return FakeMapWidget()


@pytest.fixture()
def fake_search() -> FakeSearchProvider:
    return FakeSearchProvider({"pune": PUNE})


@pytest.fixture()
def export_sink() -> RecordingExportSink:
    return RecordingExportSink()
