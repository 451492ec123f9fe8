"""
Material quantity calculation module.

Calculates pile counts and lengths, and concrete volumes for the pile cap,
columns and pier cap at every pier station, then sums them for the whole
bridge.  Volumes are in ft3, lengths in inches.  Quantities are computed
from the layouts directly, independently of the assembled 3-D geometry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from .alignment import PierStation, stations_for
from .geometry import column_set_for, pile_grid_for
from .parameters import Parameters
from .utils import box_volume_ft3, circular_area_ft2, in_to_ft, rectangular_area_ft2


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StationQuantities:
    """Quantities for a single pier station."""
    index: int
    pile_count: int
    pile_length: float        # in  -- total for all piles at this station
    pile_cap_volume: float    # ft3
    column_count: int
    column_height: float      # in  -- clear height of each column
    column_volume: float      # ft3 -- all columns at this station
    pier_cap_volume: float    # ft3

    @property
    def concrete_volume(self) -> float:
        """Pile cap + columns + pier cap, in ft3."""
        return self.pile_cap_volume + self.column_volume + self.pier_cap_volume


@dataclass(frozen=True)
class QuantityResult:
    """Per-station quantities and bridge totals."""
    stations: tuple[StationQuantities, ...]
    column_area: float            # ft2 -- cross-section of one column
    total_pile_count: int
    total_pile_length: float      # in
    total_pile_cap_volume: float  # ft3
    total_column_count: int
    total_column_volume: float    # ft3
    total_pier_cap_volume: float  # ft3

    @property
    def total_concrete_volume(self) -> float:
        return (self.total_pile_cap_volume
                + self.total_column_volume
                + self.total_pier_cap_volume)


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------

def column_area_ft2(params: Parameters) -> float:
    """Cross-section area of one column in ft2.

    Circular columns use ``column_width`` as the diameter and ignore
    ``column_depth``.
    """
    if params.column_shape == "rectangular":
        return rectangular_area_ft2(params.column_width, params.column_depth)
    return circular_area_ft2(params.column_width)


def column_height_at(params: Parameters, station: PierStation) -> float:
    """Clear column height at *station* in inches, clamped at zero."""
    height = params.base_column_height + station.elevation
    if height < 0:
        logger.warning(
            "Column height at station %d is negative (%.2f in); using 0",
            station.index, height,
        )
        return 0.0
    return height


def _station_quantities(
    params: Parameters,
    station: PierStation,
    column_area: float,
) -> StationQuantities:
    grid = pile_grid_for(params)
    columns = column_set_for(params)
    height = column_height_at(params, station)
    return StationQuantities(
        index=station.index,
        pile_count=grid.pile_count,
        pile_length=grid.pile_count * params.pile_length,
        pile_cap_volume=box_volume_ft3(
            grid.cap_width, grid.cap_length, params.pile_cap_thickness),
        column_count=columns.count,
        column_height=height,
        column_volume=column_area * in_to_ft(height) * columns.count,
        pier_cap_volume=box_volume_ft3(
            params.pier_cap_width, params.pier_cap_length, params.pier_cap_thickness),
    )


# ---------------------------------------------------------------------------
# public API
# ---------------------------------------------------------------------------

@lru_cache(maxsize=32)
def calculate_quantities(params: Parameters) -> QuantityResult:
    """
    Calculate quantities for every pier station and the bridge totals.

    Args:
        params: Geometry parameters

    Returns:
        QuantityResult with per-station items and totals
    """
    area = column_area_ft2(params)
    items = tuple(
        _station_quantities(params, st, area) for st in stations_for(params)
    )
    logger.debug("Computed quantities for %d stations", len(items))
    return QuantityResult(
        stations=items,
        column_area=area,
        total_pile_count=sum(i.pile_count for i in items),
        total_pile_length=sum(i.pile_length for i in items),
        total_pile_cap_volume=sum(i.pile_cap_volume for i in items),
        total_column_count=sum(i.column_count for i in items),
        total_column_volume=sum(i.column_volume for i in items),
        total_pier_cap_volume=sum(i.pier_cap_volume for i in items),
    )


# ---------------------------------------------------------------------------
# summary
# ---------------------------------------------------------------------------

def summarise_quantities(result: QuantityResult) -> str:
    """Return a formatted text summary of the quantities."""
    w = 96
    lines = [
        "=" * w,
        "MATERIAL QUANTITIES",
        "=" * w,
        f"{'Station':<9} {'Piles':>6} {'Pile Len (in)':>14} {'Pile Cap (ft3)':>15} "
        f"{'Col. H (in)':>12} {'Columns (ft3)':>14} {'Pier Cap (ft3)':>15}",
        "-" * w,
    ]
    for item in result.stations:
        lines.append(
            f"{'P' + str(item.index):<9} "
            f"{item.pile_count:>6d} "
            f"{item.pile_length:>14.2f} "
            f"{item.pile_cap_volume:>15.2f} "
            f"{item.column_height:>12.2f} "
            f"{item.column_volume:>14.2f} "
            f"{item.pier_cap_volume:>15.2f}"
        )
    lines.append("-" * w)
    lines.append(
        f"{'TOTAL':<9} "
        f"{result.total_pile_count:>6d} "
        f"{result.total_pile_length:>14.2f} "
        f"{result.total_pile_cap_volume:>15.2f} "
        f"{'':>12} "
        f"{result.total_column_volume:>14.2f} "
        f"{result.total_pier_cap_volume:>15.2f}"
    )
    lines.append("=" * w)
    lines.append("")
    lines.append(f"Total Piles           : {result.total_pile_count}")
    lines.append(f"Total Pile Length     : {result.total_pile_length:.2f} in "
                 f"({in_to_ft(result.total_pile_length):.2f} ft)")
    lines.append(f"Total Columns         : {result.total_column_count}")
    lines.append(f"Total Concrete Volume : {result.total_concrete_volume:.2f} ft3 "
                 f"({result.total_concrete_volume / 27.0:.2f} yd3)")
    lines.append("=" * w)
    return "\n".join(lines)
