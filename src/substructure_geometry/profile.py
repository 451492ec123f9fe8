"""Pier-cap cross-section profile.

The pier cap is modelled as a tapered-tip hexagon in its local ``(x, y)``
plane, centred on the origin, and extruded along the alignment by the
assembler.  The bottom edge is shortened by the overhang at both ends and
the tips keep ``tip_thickness`` of full-depth face below the top surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .parameters import Parameters

Point2D = tuple[float, float]


@dataclass(frozen=True)
class PierCapProfile:
    """Closed hexagonal cross-section of the pier cap."""
    vertices: tuple[Point2D, ...]   # 6 points, clockwise from top-left
    width: float                    # in
    thickness: float                # in
    effective_overhang: float       # in  -- overhang after clamping to W/2
    effective_tip_thickness: float  # in  -- tip thickness after clamping to T

    def closed_vertices(self) -> tuple[Point2D, ...]:
        """Vertices with the first point repeated at the end."""
        return self.vertices + (self.vertices[0],)

    @property
    def area(self) -> float:
        """Enclosed area in in2 (shoelace formula)."""
        pts = self.closed_vertices()
        twice = sum(
            x0 * y1 - x1 * y0
            for (x0, y0), (x1, y1) in zip(pts[:-1], pts[1:])
        )
        return abs(twice) / 2.0

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """``(min_x, min_y, max_x, max_y)`` of the profile."""
        xs = [p[0] for p in self.vertices]
        ys = [p[1] for p in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))


@lru_cache(maxsize=64)
def build_pier_cap_profile(
    width: float,
    overhang: float,
    thickness: float,
    tip_thickness: float,
) -> PierCapProfile:
    """Build the pier-cap profile polygon.

    Parameters
    ----------
    width:
        Profile width ``W`` (in).
    overhang:
        Horizontal taper length ``O`` (in); clamped to ``[0, W/2]``.
    thickness:
        Profile thickness ``T`` (in).
    tip_thickness:
        Tip thickness ``Tt`` (in); clamped to ``[0, T]``.

    Returns
    -------
    PierCapProfile
        Six vertices: top-left, top-right, right tip, bottom-right,
        bottom-left, left tip.  With the clamps applied the polygon may
        touch itself (``O == W/2``) but its edges never cross.
    """
    half_w = width / 2.0
    half_t = thickness / 2.0
    eff_overhang = min(max(overhang, 0.0), half_w)
    eff_tip = min(max(tip_thickness, 0.0), thickness)
    tip_y = half_t - eff_tip

    vertices = (
        (-half_w, half_t),
        (half_w, half_t),
        (half_w, tip_y),
        (half_w - eff_overhang, -half_t),
        (-half_w + eff_overhang, -half_t),
        (-half_w, tip_y),
    )
    return PierCapProfile(
        vertices=vertices,
        width=width,
        thickness=thickness,
        effective_overhang=eff_overhang,
        effective_tip_thickness=eff_tip,
    )


def profile_for(params: Parameters) -> PierCapProfile:
    """Pier-cap profile for *params*."""
    return build_pier_cap_profile(
        params.pier_cap_width,
        params.pier_cap_overhang,
        params.pier_cap_thickness,
        params.pier_cap_tip_thickness,
    )
