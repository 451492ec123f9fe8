"""Pier stations along the bridge alignment.

Stations are placed either on a straight line along the ``z`` axis or on a
circular arc of radius ``R``, one per pier including the closing pier
(``span_count + 1`` in total).  The elevation of each station follows the
longitudinal road slope from station 0.

Conventions
-----------
* ``x`` runs across the bridge, ``z`` along a straight alignment and ``y``
  is vertical.
* ``orientation`` is the rotation (radians) about ``+y`` that turns a
  pier's local width axis (``+x``) perpendicular to the alignment at that
  station.
* Curved alignments use a constant angular step ``span_length / R``: the
  span length is taken as the arc length between piers.  Station 0 is
  pinned to the local origin whatever the start angle.

Precondition: ``curve_radius > 0`` in curved mode.  The sampler does not
re-check it; :class:`~substructure_geometry.parameters.Parameters` rejects
such records at construction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

from .parameters import Parameters
from .utils import degrees_to_radians


@dataclass(frozen=True)
class PierStation:
    """Placement of one pier on the alignment."""
    index: int
    position: tuple[float, float, float]   # in  -- (x, elevation, z)
    orientation: float                     # rad -- rotation about +y

    @property
    def elevation(self) -> float:
        """Rise of the station above station 0 (in)."""
        return self.position[1]

    @property
    def ground_position(self) -> tuple[float, float, float]:
        """Foundation origin: the plan position at datum level."""
        return (self.position[0], 0.0, self.position[2])


def _straight_stations(
    span_count: int, span_length: float, road_slope: float,
) -> tuple[PierStation, ...]:
    start = -span_count * span_length / 2.0
    return tuple(
        PierStation(
            index=i,
            position=(0.0, i * span_length * road_slope, start + i * span_length),
            orientation=0.0,
        )
        for i in range(span_count + 1)
    )


def _curved_stations(
    span_count: int,
    span_length: float,
    road_slope: float,
    radius: float,
    start_angle_deg: float,
    direction: str,
) -> tuple[PierStation, ...]:
    sign = 1.0 if direction == "left" else -1.0
    start = degrees_to_radians(start_angle_deg)
    step = span_length / radius * sign
    x_ref = radius * math.cos(start)
    z_ref = radius * math.sin(start)

    stations = []
    for i in range(span_count + 1):
        theta = start + i * step
        tangent = theta + sign * math.pi / 2.0
        stations.append(PierStation(
            index=i,
            position=(
                radius * math.cos(theta) - x_ref,
                i * span_length * road_slope,
                radius * math.sin(theta) - z_ref,
            ),
            orientation=-tangent + math.pi / 2.0,
        ))
    return tuple(stations)


@lru_cache(maxsize=64)
def sample_alignment(
    span_count: int,
    span_length: float,
    road_slope: float,
    use_curve: bool = False,
    curve_radius: float = 0.0,
    curve_start_angle: float = 0.0,
    curve_direction: str = "left",
) -> tuple[PierStation, ...]:
    """Compute the ordered pier stations ``0 .. span_count``.

    Parameters
    ----------
    span_count:
        Number of spans; values below 1 are treated as 1.
    span_length:
        Span length (in); the arc length between piers when curved.
    road_slope:
        Signed longitudinal grade (rise / run).
    use_curve:
        Place piers on a circular arc instead of a straight line.
    curve_radius:
        Arc radius (in), must be positive when *use_curve* is set.
    curve_start_angle:
        Polar angle of station 0 on the circle, in degrees.
    curve_direction:
        ``"left"`` sweeps counter-clockwise in plan, anything else clockwise.

    Returns
    -------
    tuple[PierStation, ...]
        ``span_count + 1`` stations.  Straight alignments straddle
        ``z = 0``; curved alignments start at the origin.
    """
    n = max(1, int(span_count))
    if use_curve:
        return _curved_stations(
            n, span_length, road_slope,
            curve_radius, curve_start_angle, str(curve_direction).lower(),
        )
    return _straight_stations(n, span_length, road_slope)


def stations_for(params: Parameters) -> tuple[PierStation, ...]:
    """Pier stations for *params*."""
    return sample_alignment(
        params.span_count,
        params.span_length,
        params.road_slope,
        params.use_curve,
        params.curve_radius,
        params.curve_start_angle,
        params.curve_direction,
    )
