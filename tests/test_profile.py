"""Tests for the pier-cap cross-section profile.

Covers vertex placement, closure, clamping of degenerate overhang and tip
thickness, and absence of crossing edges across the valid input range.
"""

import itertools

import pytest

from substructure_geometry.parameters import Parameters
from substructure_geometry.profile import build_pier_cap_profile, profile_for


def _orient(a, b, c):
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def _properly_cross(p1, p2, q1, q2):
    """True when segments p1-p2 and q1-q2 cross at an interior point."""
    d1 = _orient(q1, q2, p1)
    d2 = _orient(q1, q2, p2)
    d3 = _orient(p1, p2, q1)
    d4 = _orient(p1, p2, q2)
    return d1 * d2 < 0 and d3 * d4 < 0


def _has_crossing(vertices):
    pts = list(vertices) + [vertices[0]]
    edges = list(zip(pts[:-1], pts[1:]))
    n = len(edges)
    for i, j in itertools.combinations(range(n), 2):
        if j == i + 1 or (i == 0 and j == n - 1):
            continue
        if _properly_cross(*edges[i], *edges[j]):
            return True
    return False


class TestVertices:
    """Vertex placement for a regular profile."""

    def test_six_vertices_in_order(self):
        prof = build_pier_cap_profile(720.0, 144.0, 60.0, 30.0)
        assert prof.vertices == (
            (-360.0, 30.0),
            (360.0, 30.0),
            (360.0, 0.0),
            (216.0, -30.0),
            (-216.0, -30.0),
            (-360.0, 0.0),
        )

    def test_closed(self):
        prof = build_pier_cap_profile(720.0, 144.0, 60.0, 30.0)
        closed = prof.closed_vertices()
        assert len(closed) == 7
        assert closed[0] == closed[-1]

    def test_symmetric_about_vertical_axis(self):
        prof = build_pier_cap_profile(500.0, 80.0, 48.0, 20.0)
        xs = sorted(round(x, 9) for x, _ in prof.vertices)
        assert xs == sorted(round(-x, 9) for x in xs)

    def test_area(self):
        """Rectangle less the two tapered corners."""
        prof = build_pier_cap_profile(720.0, 144.0, 60.0, 30.0)
        assert prof.area == pytest.approx(720 * 60 - 144 * 30)

    def test_bounds(self):
        prof = build_pier_cap_profile(720.0, 144.0, 60.0, 30.0)
        assert prof.bounds == (-360.0, -30.0, 360.0, 30.0)

    def test_profile_for_parameters(self):
        params = Parameters(pier_cap_width=600.0, pier_cap_overhang=100.0,
                            pier_cap_thickness=50.0, pier_cap_tip_thickness=25.0)
        prof = profile_for(params)
        assert prof.width == 600.0
        assert prof.vertices[3] == (200.0, -25.0)


class TestDegenerateCases:
    """Clamped overhang and tip thickness."""

    def test_overhang_clamped_to_half_width(self):
        prof = build_pier_cap_profile(400.0, 500.0, 60.0, 30.0)
        assert prof.effective_overhang == 200.0
        assert prof.vertices[3] == (0.0, -30.0)
        assert prof.vertices[4] == (0.0, -30.0)

    def test_tip_thickness_clamped_to_thickness(self):
        prof = build_pier_cap_profile(400.0, 50.0, 60.0, 90.0)
        assert prof.effective_tip_thickness == 60.0
        assert prof.vertices[2] == (200.0, -30.0)
        assert prof.vertices[5] == (-200.0, -30.0)

    def test_negative_overhang_and_tip_clamped_to_zero(self):
        prof = build_pier_cap_profile(400.0, -10.0, 60.0, -5.0)
        assert prof.effective_overhang == 0.0
        assert prof.effective_tip_thickness == 0.0
        assert prof.area == pytest.approx(400.0 * 60.0 - 0.0)

    def test_zero_tip_gives_triangular_ends(self):
        prof = build_pier_cap_profile(400.0, 100.0, 60.0, 0.0)
        assert prof.vertices[2] == (200.0, 30.0)
        assert prof.area == pytest.approx(400 * 60 - 100 * 60)

    @pytest.mark.parametrize("overhang", [0.0, 50.0, 150.0, 200.0, 350.0])
    @pytest.mark.parametrize("tip", [0.0, 10.0, 30.0, 60.0, 80.0])
    def test_never_crossing(self, overhang, tip):
        prof = build_pier_cap_profile(400.0, overhang, 60.0, tip)
        assert not _has_crossing(prof.vertices)
        assert prof.area >= 0.0


class TestPurity:

    def test_identical_inputs_identical_results(self):
        a = build_pier_cap_profile(720.0, 144.0, 60.0, 30.0)
        build_pier_cap_profile.cache_clear()
        b = build_pier_cap_profile(720.0, 144.0, 60.0, 30.0)
        assert a == b
