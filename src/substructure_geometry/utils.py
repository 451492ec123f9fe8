"""Shared utilities for substructure geometry.

Provides:
- Section area helpers (circular and rectangular)
- Unit conversion helpers (inches to feet, degrees to radians)
- Plan rotation about the vertical axis
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


# ---------------------------------------------------------------------------
# Unit conversions
# ---------------------------------------------------------------------------

IN_PER_FT: float = 12.0


def in_to_ft(inches: float) -> float:
    """Convert inches to feet."""
    return inches / IN_PER_FT


def degrees_to_radians(deg: float) -> float:
    """Convert degrees to radians."""
    return math.radians(deg)


# ---------------------------------------------------------------------------
# Section areas (square feet from inch dimensions)
# ---------------------------------------------------------------------------

def circular_area_ft2(diameter_in: float) -> float:
    """Area of a circle in ft2 given its diameter in inches.

    ``A = pi * (d / 2 / 12)^2``
    """
    return math.pi * in_to_ft(diameter_in / 2.0) ** 2


def rectangular_area_ft2(width_in: float, depth_in: float) -> float:
    """Area of a rectangle in ft2 given its sides in inches."""
    return in_to_ft(width_in) * in_to_ft(depth_in)


def box_volume_ft3(width_in: float, length_in: float, thickness_in: float) -> float:
    """Volume of a rectangular block in ft3 given its sides in inches."""
    return in_to_ft(width_in) * in_to_ft(length_in) * in_to_ft(thickness_in)


# ---------------------------------------------------------------------------
# Plan rotation
# ---------------------------------------------------------------------------

def rotation_about_y(angle: float) -> np.ndarray:
    """3x3 rotation matrix about the vertical (+y) axis.

    Right-handed: a positive *angle* (radians) carries +x towards -z.
    """
    c = math.cos(angle)
    s = math.sin(angle)
    return np.array([
        [c,   0.0, s],
        [0.0, 1.0, 0.0],
        [-s,  0.0, c],
    ])


def rotate_y(point: Sequence[float], angle: float) -> tuple[float, float, float]:
    """Rotate an ``(x, y, z)`` point about the vertical axis."""
    rotated = rotation_about_y(angle) @ np.asarray(point, dtype=float)
    return (float(rotated[0]), float(rotated[1]), float(rotated[2]))
