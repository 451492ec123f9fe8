"""Assembly of per-station substructure geometry.

Composes the pier-local layouts (pile grid, columns, pier-cap profile) with
the station placements from the alignment into one renderer-agnostic
description: boxes, cylinders and an extruded profile, each with a local
centre, a world centre and a rotation about the vertical axis.

Local frame of a pier:

* origin at the centre of the pile-cap top surface,
* ``x`` along the pier-cap width, ``z`` along the alignment, ``y`` up.

World placement is ``station.ground_position + rotate_y(local,
station.orientation)``; nothing else is computed here.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Union

import numpy as np

from .alignment import PierStation, stations_for
from .geometry import column_set_for, pile_grid_for
from .parameters import Parameters
from .profile import profile_for
from .quantities import column_height_at
from .utils import rotate_y, rotation_about_y

logger = logging.getLogger(__name__)

Point3D = tuple[float, float, float]


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BoxShape:
    """Axis-aligned box in the pier frame (rotated with the pier)."""
    width: float          # in  -- along local x
    height: float         # in  -- along y
    depth: float          # in  -- along local z
    local_center: Point3D
    center: Point3D       # world
    rotation: float       # rad about +y
    kind: str = "box"

    def _local_corners(self) -> np.ndarray:
        hx, hy, hz = self.width / 2.0, self.height / 2.0, self.depth / 2.0
        return _corner_grid(self.local_center, hx, hy, hz)


@dataclass(frozen=True)
class CylinderShape:
    """Vertical cylinder (piles, circular columns)."""
    radius: float         # in
    height: float         # in
    local_center: Point3D
    center: Point3D       # world
    rotation: float       # rad about +y
    kind: str = "cylinder"

    def _local_corners(self) -> np.ndarray:
        r = self.radius
        return _corner_grid(self.local_center, r, self.height / 2.0, r)


@dataclass(frozen=True)
class ExtrusionShape:
    """Planar profile in the local ``x-y`` plane extruded along local ``z``.

    ``profile`` is relative to ``local_center``; the extrusion runs from
    ``-depth/2`` to ``+depth/2``.
    """
    profile: tuple[tuple[float, float], ...]
    depth: float          # in
    local_center: Point3D
    center: Point3D       # world
    rotation: float       # rad about +y
    kind: str = "extrusion"

    def _local_corners(self) -> np.ndarray:
        cx, cy, cz = self.local_center
        hz = self.depth / 2.0
        pts = [
            (cx + px, cy + py, cz + dz)
            for px, py in self.profile
            for dz in (-hz, hz)
        ]
        return np.array(pts, dtype=float)


Shape = Union[BoxShape, CylinderShape, ExtrusionShape]


def _corner_grid(center: Point3D, hx: float, hy: float, hz: float) -> np.ndarray:
    cx, cy, cz = center
    return np.array([
        (cx + sx * hx, cy + sy * hy, cz + sz * hz)
        for sx in (-1.0, 1.0)
        for sy in (-1.0, 1.0)
        for sz in (-1.0, 1.0)
    ])


@dataclass(frozen=True)
class StationGeometry:
    """Everything the renderer needs for one pier."""
    station: PierStation
    pile_cap: BoxShape
    pier_cap: ExtrusionShape
    piles: tuple[CylinderShape, ...]
    columns: tuple[Shape, ...]
    column_height: float  # in

    def shapes(self) -> tuple[Shape, ...]:
        return (self.pile_cap, self.pier_cap) + self.piles + self.columns

    def extents(self) -> tuple[Point3D, Point3D]:
        """World axis-aligned bounds ``(min, max)`` of this pier."""
        origin = np.asarray(self.station.ground_position, dtype=float)
        rot = rotation_about_y(self.station.orientation)
        pts = np.vstack([s._local_corners() for s in self.shapes()])
        world = pts @ rot.T + origin
        lo, hi = world.min(axis=0), world.max(axis=0)
        return (tuple(float(v) for v in lo), tuple(float(v) for v in hi))


@dataclass(frozen=True)
class BridgeGeometry:
    """Assembled geometry for every pier station."""
    stations: tuple[StationGeometry, ...]

    def extents(self) -> tuple[Point3D, Point3D]:
        """World axis-aligned bounds ``(min, max)`` of the whole bridge."""
        bounds = np.array([
            corner for st in self.stations for corner in st.extents()
        ])
        lo, hi = bounds.min(axis=0), bounds.max(axis=0)
        return (tuple(float(v) for v in lo), tuple(float(v) for v in hi))

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dictionaries / lists for JSON export."""
        lo, hi = self.extents()
        return {
            "stations": [asdict(st) for st in self.stations],
            "extents": {"min": list(lo), "max": list(hi)},
        }


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def _placer(station: PierStation):
    """Return a function mapping a local point to world coordinates."""
    gx, gy, gz = station.ground_position

    def place(local: Point3D) -> Point3D:
        x, y, z = rotate_y(local, station.orientation)
        return (gx + x, gy + y, gz + z)

    return place


def assemble_station(params: Parameters, station: PierStation) -> StationGeometry:
    """Compose the pier-local layouts at *station*."""
    grid = pile_grid_for(params)
    columns = column_set_for(params)
    profile = profile_for(params)
    place = _placer(station)
    angle = station.orientation

    cap_thk = params.pile_cap_thickness
    cap_center = (0.0, -cap_thk / 2.0, 0.0)
    pile_cap = BoxShape(
        width=grid.cap_width,
        height=cap_thk,
        depth=grid.cap_length,
        local_center=cap_center,
        center=place(cap_center),
        rotation=angle,
    )

    # Piles hang below the cap, their heads embedded into its underside.
    pile_y = -cap_thk + params.pile_embedment - params.pile_length / 2.0
    piles = []
    for x, z in grid.positions:
        local = (x, pile_y, z)
        piles.append(CylinderShape(
            radius=params.pile_diameter / 2.0,
            height=params.pile_length,
            local_center=local,
            center=place(local),
            rotation=angle,
        ))

    height = column_height_at(params, station)
    cols: list[Shape] = []
    for x, z in columns.positions:
        local = (x, height / 2.0, z)
        if params.column_shape == "rectangular":
            cols.append(BoxShape(
                width=params.column_width,
                height=height,
                depth=params.column_depth,
                local_center=local,
                center=place(local),
                rotation=angle,
            ))
        else:
            cols.append(CylinderShape(
                radius=params.column_width / 2.0,
                height=height,
                local_center=local,
                center=place(local),
                rotation=angle,
            ))

    pier_center = (0.0, height + params.pier_cap_thickness / 2.0, 0.0)
    pier_cap = ExtrusionShape(
        profile=profile.vertices,
        depth=params.pier_cap_length,
        local_center=pier_center,
        center=place(pier_center),
        rotation=angle,
    )

    return StationGeometry(
        station=station,
        pile_cap=pile_cap,
        pier_cap=pier_cap,
        piles=tuple(piles),
        columns=tuple(cols),
        column_height=height,
    )


@lru_cache(maxsize=32)
def assemble_bridge(params: Parameters) -> BridgeGeometry:
    """Assemble the geometry of every pier along the alignment."""
    stations = tuple(assemble_station(params, st) for st in stations_for(params))
    logger.debug("Assembled %d pier stations", len(stations))
    return BridgeGeometry(stations=stations)
