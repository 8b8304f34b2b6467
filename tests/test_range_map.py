"""Tests for the equirectangular range map."""

from __future__ import annotations

from typing import Any

import pytest

from garden_havens.geo.models import GeoCoordinate, OccurrenceFeature
from garden_havens.geo.range_map import (
    OFFSCREEN_POSITION,
    RangeMapHandle,
    create_range_map,
)
from garden_havens.geo.scene import CircleShape, LayerKind
from garden_havens.geo.surface import Container
from garden_havens.geo.topology import WorldBoundaries


def points(handle: RangeMapHandle) -> tuple[CircleShape, ...]:
    return handle.scene.layer(LayerKind.OCCURRENCES).shapes  # type: ignore[return-value]


@pytest.fixture
def make_map(boundaries: WorldBoundaries) -> Any:
    def _make(occurrences: list[Any] | None = None, title: str = "X") -> RangeMapHandle:
        return create_range_map(
            Container("#card"), 400, title, occurrences or [], boundaries=boundaries
        )

    return _make


class TestCreateRangeMap:
    """Test mounting a range map."""

    def test_size_and_id(self, make_map: Any) -> None:
        scene = make_map(title="Felis catus").scene
        assert scene.svg_id == "Felis_catus-range-map"
        assert scene.width == 400
        assert scene.height == 200
        assert scene.view_box is True

    def test_layer_order(self, make_map: Any) -> None:
        kinds = [layer.kind for layer in make_map().scene.ordered_layers()]
        assert kinds == [
            LayerKind.WATER,
            LayerKind.LAND,
            LayerKind.BOUNDARIES,
            LayerKind.COASTLINES,
            LayerKind.GRATICULE,
            LayerKind.OCCURRENCES,
        ]

    def test_water_fills_map(self, make_map: Any) -> None:
        (water,) = make_map().scene.layer(LayerKind.WATER).shapes
        assert (water.width, water.height) == (400, 200)

    def test_point_at_origin(self, make_map: Any, make_occurrence: Any) -> None:
        (point,) = points(make_map([make_occurrence(0, 0)]))
        assert (point.cx, point.cy) == pytest.approx((200, 100))
        assert point.r == 2.0
        assert point.title == "X, 2020"

    def test_full_longitude_span(self, make_map: Any, make_occurrence: Any) -> None:
        west, east = points(make_map([make_occurrence(-179.999, 0), make_occurrence(180, 0)]))
        assert west.cx == pytest.approx(0, abs=0.01)
        assert east.cx == pytest.approx(400)

    def test_accepts_parsed_features(self, make_map: Any) -> None:
        feature = OccurrenceFeature(GeoCoordinate(lon=90, lat=0), country="Y", year=1999)
        (point,) = points(make_map([feature]))
        assert point.cx == pytest.approx(300)
        assert point.title == "Y, 1999"


class TestOccurrenceOverlay:
    """Test the point layer's one-mark-per-record behavior."""

    @pytest.mark.parametrize(
        ("lon", "lat"),
        [(None, None), (float("nan"), 0), (0, 120)],
        ids=["missing", "nan", "out-of-range"],
    )
    def test_unprojectable_goes_offscreen(
        self, make_map: Any, make_occurrence: Any, lon: Any, lat: Any
    ) -> None:
        (point,) = points(make_map([make_occurrence(lon, lat)]))
        assert (point.cx, point.cy) == OFFSCREEN_POSITION

    def test_count_matches_input(self, make_map: Any, make_occurrence: Any) -> None:
        records = [make_occurrence(0, 0), make_occurrence(None, None), make_occurrence(10, 10)]
        assert len(points(make_map(records))) == 3

    def test_update_replaces_points(self, make_map: Any, make_occurrence: Any) -> None:
        handle = make_map([make_occurrence(0, 0), make_occurrence(10, 10)])
        handle.update_occurrences([make_occurrence(20, 20)])
        assert len(points(handle)) == 1

    def test_update_with_empty_list(self, make_map: Any, make_occurrence: Any) -> None:
        handle = make_map([make_occurrence(0, 0)])
        handle.update_occurrences([])
        assert points(handle) == ()

    def test_update_is_idempotent(self, make_map: Any, make_occurrence: Any) -> None:
        handle = make_map()
        records = [make_occurrence(0, 0), make_occurrence(5, 5)]
        handle.update_occurrences(records)
        first = handle.scene
        handle.update_occurrences(records)
        assert handle.scene == first

    def test_update_keeps_base_layers(self, make_map: Any, make_occurrence: Any) -> None:
        handle = make_map()
        land = handle.scene.layer(LayerKind.LAND)
        handle.update_occurrences([make_occurrence(0, 0)])
        assert handle.scene.layer(LayerKind.LAND) == land

    def test_redraw_keeps_stored_occurrences(self, make_map: Any, make_occurrence: Any) -> None:
        handle = make_map()
        handle.update_occurrences([make_occurrence(0, 0)])
        handle.redraw()
        assert len(points(handle)) == 1

    def test_tooltip_fallbacks(self, make_map: Any) -> None:
        record = {"type": "Feature", "geometry": {"type": "Point", "coordinates": [0, 0]}}
        (point,) = points(make_map([record]))
        assert point.title == "Unknown, Unknown year"
