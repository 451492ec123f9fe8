"""Parameter record for substructure geometry generation.

A single immutable :class:`Parameters` value carries every scalar input the
geometry core needs.  Lengths are in inches, angles in degrees, the road
slope is a signed grade (rise / run).  Every derived entity is a pure
function of this record.

Construction validates dimensions (the input-provider boundary); counts are
accepted as given and clamped by the layout functions that consume them.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Any


logger = logging.getLogger(__name__)


CURVE_DIRECTIONS = ("left", "right")
COLUMN_SHAPES = ("circular", "rectangular")
MAX_COLUMNS = 4


class InvalidParameter(ValueError):
    """Raised when a parameter violates the geometry preconditions."""


# Dimensions that must be strictly positive.
_POSITIVE_FIELDS = (
    "span_length",
    "pile_spacing",
    "pile_diameter",
    "pile_length",
    "pile_cap_thickness",
    "column_width",
    "pier_cap_width",
    "pier_cap_length",
    "pier_cap_thickness",
)

# Clearances that may be zero but never negative.
_NON_NEGATIVE_FIELDS = (
    "pile_edge_distance",
    "pile_embedment",
    "column_spacing",
    "pier_cap_overhang",
    "pier_cap_tip_thickness",
)


@dataclass(frozen=True)
class Parameters:
    """Immutable record of every geometry input.

    Attributes
    ----------
    span_count, span_length, road_slope:
        Number of spans, span length (in) and longitudinal grade.
    use_curve, curve_radius, curve_start_angle, curve_direction:
        Circular-curve alignment settings.  ``curve_start_angle`` is in
        degrees; ``curve_direction`` is ``"left"`` or ``"right"``.
    pile_rows_length, pile_rows_width:
        Pile rows along the pile-cap length (alignment) and width.
    pile_spacing, pile_edge_distance:
        Clear gap between adjacent piles and clear distance from the outer
        piles to the cap edge (in).
    pile_diameter, pile_length, pile_embedment:
        Pile dimensions (in); embedment is the depth piles extend into the
        cap from its underside.
    pile_cap_thickness:
        Pile-cap slab thickness (in).
    column_count, column_spacing, column_shape, column_width, column_depth:
        Column arrangement and section.  ``column_depth`` is ignored for
        circular columns, where ``column_width`` is the diameter.
    column_height:
        Total column height including the pier-cap thickness (in).
    pier_cap_width, pier_cap_length, pier_cap_thickness:
        Pier-cap profile width, extrusion length along the alignment and
        profile thickness (in).
    pier_cap_overhang, pier_cap_tip_thickness:
        Horizontal taper length and thickness at the cantilever tip (in).
    """

    # -- Alignment --------------------------------------------------------
    span_count: int = 2
    span_length: float = 1800.0
    road_slope: float = 0.015
    use_curve: bool = False
    curve_radius: float = 12000.0
    curve_start_angle: float = 0.0
    curve_direction: str = "left"

    # -- Piles / pile cap -------------------------------------------------
    pile_rows_length: int = 3
    pile_rows_width: int = 6
    pile_spacing: float = 144.0
    pile_edge_distance: float = 48.0
    pile_diameter: float = 48.0
    pile_length: float = 720.0
    pile_embedment: float = 12.0
    pile_cap_thickness: float = 72.0

    # -- Columns ----------------------------------------------------------
    column_count: int = 2
    column_spacing: float = 432.0
    column_shape: str = "circular"
    column_width: float = 60.0
    column_depth: float = 60.0
    column_height: float = 300.0

    # -- Pier cap ---------------------------------------------------------
    pier_cap_width: float = 720.0
    pier_cap_length: float = 72.0
    pier_cap_thickness: float = 60.0
    pier_cap_overhang: float = 144.0
    pier_cap_tip_thickness: float = 30.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "curve_direction", str(self.curve_direction).lower())
        object.__setattr__(self, "column_shape", str(self.column_shape).lower())

        errors: list[str] = []
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (int, float)) and not math.isfinite(value):
                errors.append(f"{f.name}: value {value!r} is not finite")
        for name in _POSITIVE_FIELDS:
            if getattr(self, name) <= 0:
                errors.append(f"{name}: must be > 0, got {getattr(self, name)!r}")
        for name in _NON_NEGATIVE_FIELDS:
            if getattr(self, name) < 0:
                errors.append(f"{name}: must be >= 0, got {getattr(self, name)!r}")

        if self.curve_direction not in CURVE_DIRECTIONS:
            errors.append(
                f"curve_direction: expected one of {CURVE_DIRECTIONS}, "
                f"got {self.curve_direction!r}"
            )
        if self.column_shape not in COLUMN_SHAPES:
            errors.append(
                f"column_shape: expected one of {COLUMN_SHAPES}, "
                f"got {self.column_shape!r}"
            )
        elif self.column_shape == "rectangular" and self.column_depth <= 0:
            errors.append(
                f"column_depth: must be > 0 for rectangular columns, "
                f"got {self.column_depth!r}"
            )
        if self.use_curve and self.curve_radius <= 0:
            errors.append(
                f"curve_radius: must be > 0 when use_curve is set, "
                f"got {self.curve_radius!r}"
            )

        if errors:
            raise InvalidParameter("; ".join(errors))

    # ------------------------------------------------------------------
    # Derived scalars
    # ------------------------------------------------------------------

    @property
    def station_count(self) -> int:
        """Number of pier stations (one more than the span count)."""
        return max(1, int(self.span_count)) + 1

    @property
    def base_column_height(self) -> float:
        """Column height below the pier cap at zero elevation (may be negative)."""
        return self.column_height - self.pier_cap_thickness

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def replace(self, **changes: Any) -> "Parameters":
        """Return a copy with *changes* applied (re-validated)."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Parameters":
        """Build a record from a dictionary returned by ``parse_input``.

        Sections ``alignment``, ``foundation``, ``columns`` and ``pier_cap``
        are read; missing fields fall back to the class defaults.
        """
        aln = config.get("alignment", {})
        fnd = config.get("foundation", {})
        col = config.get("columns", {})
        pcap = config.get("pier_cap", {})

        fields: dict[str, Any] = {
            "span_count":         aln.get("span_count"),
            "span_length":        aln.get("span_length"),
            "road_slope":         aln.get("road_slope"),
            "use_curve":          aln.get("use_curve"),
            "curve_radius":       aln.get("curve_radius"),
            "curve_start_angle":  aln.get("curve_start_angle"),
            "curve_direction":    aln.get("curve_direction"),
            "pile_rows_length":   fnd.get("pile_rows_length"),
            "pile_rows_width":    fnd.get("pile_rows_width"),
            "pile_spacing":       fnd.get("pile_spacing"),
            "pile_edge_distance": fnd.get("pile_edge_distance"),
            "pile_diameter":      fnd.get("pile_diameter"),
            "pile_length":        fnd.get("pile_length"),
            "pile_embedment":     fnd.get("pile_embedment"),
            "pile_cap_thickness": fnd.get("pile_cap_thickness"),
            "column_count":       col.get("count"),
            "column_spacing":     col.get("spacing"),
            "column_shape":       col.get("shape"),
            "column_width":       col.get("width"),
            "column_depth":       col.get("depth"),
            "column_height":      col.get("height"),
            "pier_cap_width":         pcap.get("width"),
            "pier_cap_length":        pcap.get("length"),
            "pier_cap_thickness":     pcap.get("thickness"),
            "pier_cap_overhang":      pcap.get("overhang"),
            "pier_cap_tip_thickness": pcap.get("tip_thickness"),
        }
        params = cls(**{k: v for k, v in fields.items() if v is not None})
        logger.debug("Built parameters from config: %s", params)
        return params
