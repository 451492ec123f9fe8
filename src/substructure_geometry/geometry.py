"""Pier-local layout of piles and columns.

Computes the pile-cap plan dimensions and pile arrangement from the row
counts, clear spacing, edge distance and pile diameter, and the column
centres along the pier-cap width.  All positions are ``(x, z)`` offsets from
the pier centre: ``x`` runs along the pier-cap width, ``z`` along the
alignment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from .parameters import MAX_COLUMNS, Parameters


logger = logging.getLogger(__name__)

PlanPoint = tuple[float, float]


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PileGrid:
    """Pile-cap plan size and pile centres.

    ``positions`` is row-major: rows along the cap length outermost, piles
    across the width innermost, so pile ``k`` keeps its index for as long as
    the row counts are unchanged.
    """
    cap_width: float                    # in  -- along x
    cap_length: float                   # in  -- along z
    rows_length: int                    # rows along z (after clamping)
    rows_width: int                     # piles per row along x (after clamping)
    pitch: float                        # in  -- centre-to-centre = spacing + diameter
    positions: tuple[PlanPoint, ...]

    @property
    def pile_count(self) -> int:
        return len(self.positions)


@dataclass(frozen=True)
class ColumnSet:
    """Column centres along the pier-cap width."""
    spacing: float                      # in  -- centre-to-centre
    positions: tuple[PlanPoint, ...]

    @property
    def count(self) -> int:
        return len(self.positions)


# ---------------------------------------------------------------------------
# Layout helpers
# ---------------------------------------------------------------------------

def _clamp_rows(rows: int, label: str) -> int:
    n = int(rows)
    if n < 1:
        logger.warning("%s=%r is below 1; using a single row", label, rows)
        return 1
    return n


def _cap_extent(rows: int, spacing: float, edge_distance: float,
                pile_diameter: float) -> float:
    """Cap dimension that holds *rows* piles plus the edge distance each side."""
    return 2.0 * edge_distance + (rows - 1) * spacing + rows * pile_diameter


@lru_cache(maxsize=64)
def layout_pile_grid(
    rows_length: int,
    rows_width: int,
    spacing: float,
    edge_distance: float,
    pile_diameter: float,
) -> PileGrid:
    """Generate pile centres on a regular grid centred at the cap centroid.

    Parameters
    ----------
    rows_length, rows_width:
        Pile rows along the cap length and across its width; values below 1
        are clamped to 1.
    spacing:
        Clear gap between adjacent piles (in).
    edge_distance:
        Clear distance from the outer pile faces to the cap edge (in).
    pile_diameter:
        Pile diameter (in).

    Returns
    -------
    PileGrid
        Cap size exactly enclosing the piles plus edge distance, and
        ``rows_length * rows_width`` centres in row-major order.
    """
    n_len = _clamp_rows(rows_length, "pile_rows_length")
    n_wid = _clamp_rows(rows_width, "pile_rows_width")

    cap_width = _cap_extent(n_wid, spacing, edge_distance, pile_diameter)
    cap_length = _cap_extent(n_len, spacing, edge_distance, pile_diameter)
    pitch = spacing + pile_diameter

    x0 = -cap_width / 2.0 + edge_distance + pile_diameter / 2.0
    z0 = -cap_length / 2.0 + edge_distance + pile_diameter / 2.0
    positions = tuple(
        (x0 + j * pitch, z0 + i * pitch)
        for i in range(n_len)
        for j in range(n_wid)
    )
    return PileGrid(
        cap_width=cap_width,
        cap_length=cap_length,
        rows_length=n_len,
        rows_width=n_wid,
        pitch=pitch,
        positions=positions,
    )


@lru_cache(maxsize=64)
def layout_columns(count: int, spacing: float) -> ColumnSet:
    """Column centres, evenly spaced and centred on the pier.

    *count* is clamped to ``[1, 4]``; a single column sits at the origin.
    """
    n = min(max(int(count), 1), MAX_COLUMNS)
    if n != count:
        logger.warning("column_count=%r clamped to %d", count, n)
    first = -spacing * (n - 1) / 2.0
    positions = tuple((first + i * spacing, 0.0) for i in range(n))
    return ColumnSet(spacing=spacing, positions=positions)


# ---------------------------------------------------------------------------
# Parameter-level entry points
# ---------------------------------------------------------------------------

def pile_grid_for(params: Parameters) -> PileGrid:
    """Pile grid for *params*."""
    return layout_pile_grid(
        params.pile_rows_length,
        params.pile_rows_width,
        params.pile_spacing,
        params.pile_edge_distance,
        params.pile_diameter,
    )


def column_set_for(params: Parameters) -> ColumnSet:
    """Column set for *params*."""
    return layout_columns(params.column_count, params.column_spacing)
