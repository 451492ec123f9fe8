"""Tests for per-station geometry assembly."""

import json
import math

import pytest

from substructure_geometry.alignment import stations_for
from substructure_geometry.assembler import (
    BoxShape,
    CylinderShape,
    assemble_bridge,
    assemble_station,
)
from substructure_geometry.geometry import pile_grid_for
from substructure_geometry.parameters import Parameters


@pytest.fixture(scope="module")
def straight_bridge():
    return assemble_bridge(Parameters())


@pytest.fixture(scope="module")
def curved_params():
    return Parameters(use_curve=True, curve_radius=12000.0, span_count=3)


class TestLocalComposition:
    """Vertical stacking in the pier frame."""

    def test_station_count(self, straight_bridge):
        assert len(straight_bridge.stations) == 3

    def test_pile_cap_box(self, straight_bridge):
        cap = straight_bridge.stations[0].pile_cap
        assert isinstance(cap, BoxShape)
        assert (cap.width, cap.height, cap.depth) == pytest.approx((1104.0, 72.0, 528.0))
        assert cap.local_center == (0.0, -36.0, 0.0)

    def test_piles_hang_below_cap(self, straight_bridge):
        st = straight_bridge.stations[0]
        assert len(st.piles) == 18
        for pile in st.piles:
            assert isinstance(pile, CylinderShape)
            assert pile.radius == 24.0
            assert pile.height == 720.0
            assert pile.local_center[1] == pytest.approx(-72.0 + 12.0 - 360.0)

    def test_pile_order_matches_grid(self, straight_bridge):
        grid = pile_grid_for(Parameters())
        st = straight_bridge.stations[1]
        for pile, (x, z) in zip(st.piles, grid.positions):
            assert (pile.local_center[0], pile.local_center[2]) == (x, z)

    def test_columns_rise_to_pier_cap(self, straight_bridge):
        for st, height in zip(straight_bridge.stations, (240.0, 267.0, 294.0)):
            assert st.column_height == pytest.approx(height)
            assert len(st.columns) == 2
            for col in st.columns:
                assert col.height == pytest.approx(height)
                assert col.local_center[1] == pytest.approx(height / 2)
            pier = st.pier_cap
            assert pier.local_center[1] == pytest.approx(height + 30.0)
            assert pier.depth == 72.0
            assert len(pier.profile) == 6

    def test_rectangular_columns_are_boxes(self):
        params = Parameters(column_shape="rectangular", column_width=48.0,
                            column_depth=72.0, column_count=3)
        st = assemble_station(params, stations_for(params)[0])
        assert all(isinstance(c, BoxShape) for c in st.columns)
        assert st.columns[0].width == 48.0
        assert st.columns[0].depth == 72.0

    def test_circular_columns_are_cylinders(self, straight_bridge):
        col = straight_bridge.stations[0].columns[0]
        assert isinstance(col, CylinderShape)
        assert col.radius == 30.0


class TestWorldPlacement:
    """World = ground position + rotated local offset."""

    def test_straight_translation_only(self, straight_bridge):
        st = straight_bridge.stations[0]
        assert st.pile_cap.center == pytest.approx((0.0, -36.0, -1800.0))
        col = st.columns[1]
        assert col.center == pytest.approx((216.0, 120.0, -1800.0))

    def test_foundation_stays_at_datum(self, straight_bridge):
        """Elevation lengthens the columns; the pile cap does not move up."""
        caps = [st.pile_cap.center[1] for st in straight_bridge.stations]
        assert caps == pytest.approx([-36.0, -36.0, -36.0])

    def test_curved_rotation(self, curved_params):
        bridge = assemble_bridge(curved_params)
        st = bridge.stations[1]
        theta = 1800.0 / 12000.0
        gx, _, gz = st.station.ground_position
        col = st.columns[1]   # local x = +216
        dx, dz = col.center[0] - gx, col.center[2] - gz
        assert math.hypot(dx, dz) == pytest.approx(216.0)
        assert dx == pytest.approx(216.0 * math.cos(theta))
        assert dz == pytest.approx(216.0 * math.sin(theta))
        assert col.rotation == pytest.approx(st.station.orientation)

    def test_vertical_offsets_unrotated(self, curved_params):
        bridge = assemble_bridge(curved_params)
        for st in bridge.stations:
            assert st.pier_cap.center[1] == pytest.approx(st.pier_cap.local_center[1])


class TestExtents:

    def test_straight_bounds(self, straight_bridge):
        lo, hi = straight_bridge.extents()
        assert lo == pytest.approx((-552.0, -780.0, -2064.0))
        assert hi == pytest.approx((552.0, 294.0 + 60.0, 2064.0))

    def test_station_bounds_inside_bridge(self, curved_params):
        bridge = assemble_bridge(curved_params)
        lo, hi = bridge.extents()
        for st in bridge.stations:
            slo, shi = st.extents()
            assert all(a >= b - 1e-9 for a, b in zip(slo, lo))
            assert all(a <= b + 1e-9 for a, b in zip(shi, hi))


class TestExport:

    def test_to_dict_is_json_serialisable(self, curved_params):
        data = assemble_bridge(curved_params).to_dict()
        text = json.dumps(data)
        loaded = json.loads(text)
        assert len(loaded["stations"]) == 4
        first = loaded["stations"][0]
        assert first["pile_cap"]["kind"] == "box"
        assert first["pier_cap"]["kind"] == "extrusion"
        assert len(first["piles"]) == 18
        assert set(loaded["extents"]) == {"min", "max"}

    def test_recompute_identical(self, curved_params):
        a = assemble_bridge(curved_params)
        assemble_bridge.cache_clear()
        b = assemble_bridge(curved_params)
        assert a == b
