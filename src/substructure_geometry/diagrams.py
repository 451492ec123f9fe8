"""Preview drawings of the assembled substructure.

Generates matplotlib figures for the bridge plan and a single-pier
elevation.  Each public function returns a ``matplotlib.figure.Figure``
that the caller can show or save.  Only the assembled geometry is read,
never the parameters.

Colour conventions:
    - Concrete (caps): light gray fill (#d9d9d9), black outline
    - Piles: white fill, black outline
    - Columns: mid gray (#b0b0b0)
    - Alignment: blue dashed (#2980b9)
    - Dimension lines: black, thin
"""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")          # non-interactive backend for file output
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import numpy as np

from .assembler import BoxShape, BridgeGeometry, CylinderShape, StationGeometry
from .utils import rotation_about_y


# ── Colours ──────────────────────────────────────────────────────────────────

_CONCRETE = "#d9d9d9"
_COLUMN   = "#b0b0b0"
_ALIGN    = "#2980b9"
_DIM      = "#333333"


# ── Helpers ──────────────────────────────────────────────────────────────────

def _plan_corners(st: StationGeometry, cx: float, cz: float,
                  hx: float, hz: float) -> np.ndarray:
    """World plan corners (x, z) of a local rectangle centred at (cx, cz)."""
    rot = rotation_about_y(st.station.orientation)
    origin = np.asarray(st.station.ground_position, dtype=float)
    local = np.array([
        (cx - hx, 0.0, cz - hz),
        (cx + hx, 0.0, cz - hz),
        (cx + hx, 0.0, cz + hz),
        (cx - hx, 0.0, cz + hz),
    ])
    world = local @ rot.T + origin
    return world[:, [0, 2]]


def _profile_x_range(st: StationGeometry) -> tuple[float, float, float, float]:
    """Local ``(min_x, min_y, max_x, max_y)`` of the pier-cap outline."""
    xs = [p[0] for p in st.pier_cap.profile]
    ys = [p[1] for p in st.pier_cap.profile]
    cx, cy, _ = st.pier_cap.local_center
    return (cx + min(xs), cy + min(ys), cx + max(xs), cy + max(ys))


def _add_dim_h(ax, y, x0, x1, text, offset=6.0, fontsize=8):
    """Draw a horizontal dimension line with arrows and a label."""
    ax.annotate(
        "", xy=(x1, y), xytext=(x0, y),
        arrowprops=dict(arrowstyle="<->", color=_DIM, lw=0.8),
    )
    ax.text((x0 + x1) / 2, y + offset, text, ha="center", va="bottom",
            fontsize=fontsize, color=_DIM)


def _add_dim_v(ax, x, y0, y1, text, offset=6.0, fontsize=8):
    """Draw a vertical dimension line with arrows and a label."""
    ax.annotate(
        "", xy=(x, y1), xytext=(x, y0),
        arrowprops=dict(arrowstyle="<->", color=_DIM, lw=0.8),
    )
    ax.text(x + offset, (y0 + y1) / 2, text, ha="left", va="center",
            fontsize=fontsize, color=_DIM, rotation=90)


# ═══════════════════════════════════════════════════════════════════════════════
# 1. Bridge Plan
# ═══════════════════════════════════════════════════════════════════════════════

def draw_plan(bridge: BridgeGeometry) -> plt.Figure:
    """Top-down plan of every pier along the alignment.

    Plots world ``x`` horizontally and world ``z`` vertically.
    """
    fig, ax = plt.subplots(figsize=(8, 10))

    if not bridge.stations:
        ax.text(0.5, 0.5, "No geometry data", transform=ax.transAxes,
                ha="center", va="center", fontsize=12)
        return fig

    for st in bridge.stations:
        cap = st.pile_cap
        ax.add_patch(mpatches.Polygon(
            _plan_corners(st, 0.0, 0.0, cap.width / 2, cap.depth / 2),
            closed=True, facecolor=_CONCRETE, edgecolor="black",
            linewidth=1.2, zorder=1,
        ))

        px0, _, px1, _ = _profile_x_range(st)
        hz = st.pier_cap.depth / 2
        ax.add_patch(mpatches.Polygon(
            _plan_corners(st, (px0 + px1) / 2, 0.0, (px1 - px0) / 2, hz),
            closed=True, fill=False, edgecolor="black",
            linewidth=1.0, linestyle="--", zorder=4,
        ))

        for pile in st.piles:
            ax.add_patch(mpatches.Circle(
                (pile.center[0], pile.center[2]), pile.radius,
                facecolor="white", edgecolor="black", linewidth=0.8, zorder=2,
            ))

        for col in st.columns:
            if isinstance(col, CylinderShape):
                patch = mpatches.Circle(
                    (col.center[0], col.center[2]), col.radius,
                    facecolor=_COLUMN, edgecolor="black", zorder=3,
                )
            else:
                cx, _, cz = col.local_center
                patch = mpatches.Polygon(
                    _plan_corners(st, cx, cz, col.width / 2, col.depth / 2),
                    closed=True, facecolor=_COLUMN, edgecolor="black", zorder=3,
                )
            ax.add_patch(patch)

        gx, _, gz = st.station.ground_position
        ax.text(gx, gz, f"P{st.station.index}", ha="center", va="center",
                fontsize=8, fontweight="bold", zorder=5)

    xs = [st.station.ground_position[0] for st in bridge.stations]
    zs = [st.station.ground_position[2] for st in bridge.stations]
    ax.plot(xs, zs, color=_ALIGN, linestyle="--", linewidth=1.0, zorder=0)

    lo, hi = bridge.extents()
    margin = max(hi[0] - lo[0], hi[2] - lo[2]) * 0.05
    ax.set_xlim(lo[0] - margin, hi[0] + margin)
    ax.set_ylim(lo[2] - margin, hi[2] + margin)
    ax.set_aspect("equal")
    ax.set_xlabel("x (in)")
    ax.set_ylabel("z (in)")
    ax.set_title("Substructure — Plan View", fontsize=11, fontweight="bold")

    fig.tight_layout()
    return fig


# ═══════════════════════════════════════════════════════════════════════════════
# 2. Pier Elevation
# ═══════════════════════════════════════════════════════════════════════════════

def draw_pier_elevation(st: StationGeometry) -> plt.Figure:
    """Elevation of one pier in its local ``x-y`` plane."""
    fig, ax = plt.subplots(figsize=(9, 7))

    cap = st.pile_cap
    ccx, ccy, _ = cap.local_center
    ax.add_patch(mpatches.Rectangle(
        (ccx - cap.width / 2, ccy - cap.height / 2), cap.width, cap.height,
        facecolor=_CONCRETE, edgecolor="black", linewidth=1.5, zorder=2,
    ))

    # Only the row nearest the viewer is drawn.
    front_z = min((p.local_center[2] for p in st.piles), default=0.0)
    for pile in st.piles:
        x, y, z = pile.local_center
        if not np.isclose(z, front_z):
            continue
        ax.add_patch(mpatches.Rectangle(
            (x - pile.radius, y - pile.height / 2), 2 * pile.radius, pile.height,
            facecolor="white", edgecolor="black", linewidth=0.8, zorder=1,
        ))

    for col in st.columns:
        x, y, _ = col.local_center
        half = col.width / 2 if isinstance(col, BoxShape) else col.radius
        ax.add_patch(mpatches.Rectangle(
            (x - half, y - col.height / 2), 2 * half, col.height,
            facecolor=_COLUMN, edgecolor="black", linewidth=1.0, zorder=2,
        ))

    pcx, pcy, _ = st.pier_cap.local_center
    outline = [(pcx + px, pcy + py) for px, py in st.pier_cap.profile]
    ax.add_patch(mpatches.Polygon(
        outline, closed=True, facecolor=_CONCRETE, edgecolor="black",
        linewidth=1.5, zorder=3,
    ))

    pad = cap.width * 0.06
    bottom = ccy - cap.height / 2
    _add_dim_h(ax, bottom - pad, ccx - cap.width / 2, ccx + cap.width / 2,
               f"{cap.width:.0f} in", offset=-pad * 0.6, fontsize=7)
    if st.column_height > 0:
        right = max(p[0] for p in outline) + pad
        _add_dim_v(ax, right, 0.0, st.column_height,
                   f"{st.column_height:.0f} in", offset=pad * 0.3, fontsize=7)

    pile_bottom = min(
        (p.local_center[1] - p.height / 2 for p in st.piles), default=bottom,
    )
    top = pcy + st.pier_cap.profile[0][1]
    margin = cap.width * 0.15
    ax.set_xlim(ccx - cap.width / 2 - margin, ccx + cap.width / 2 + margin)
    ax.set_ylim(pile_bottom - margin, top + margin)
    ax.set_aspect("equal")
    ax.set_title(f"Pier P{st.station.index} — Elevation",
                 fontsize=11, fontweight="bold")
    ax.axis("off")

    fig.tight_layout()
    return fig
