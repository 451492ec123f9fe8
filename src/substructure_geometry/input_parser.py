"""Parse and validate YAML input for substructure geometry generation.

Reads a project YAML file, checks every section and field against the
schema, applies defaults for optional fields, clamps counts into their
supported range and validates dimensions.  All lengths are in inches, the
curve start angle in degrees.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Schema definitions
# ---------------------------------------------------------------------------
# Each leaf entry is a tuple:
#   (type, required, default, validator_or_None)
# A validator is a callable (value) -> bool; True means OK.

_VALID_DIRECTIONS = {"left", "right"}
_VALID_COLUMN_SHAPES = {"circular", "rectangular"}

_positive = lambda v: v > 0  # noqa: E731
_non_negative = lambda v: v >= 0  # noqa: E731
_slope_range = lambda v: -1 <= v <= 1  # noqa: E731
_angle_range = lambda v: -360 <= v <= 360  # noqa: E731


def _in_set(valid: set[str]):
    """Return a validator that checks case-insensitive membership in *valid*."""
    return lambda v: v.lower() in valid


# Sections and their fields.  ``None`` as default together with
# ``required=True`` means the field is mandatory.
SCHEMA: dict[str, dict[str, tuple]] = {
    "project": {
        "name":     (str,   True,  None, None),
        "bridge_id": (str,  False, "",   None),
        "designer": (str,   False, "",   None),
        "date":     (str,   False, "",   None),
    },
    "alignment": {
        "span_count":        (int,   True,  None,    None),
        "span_length":       (float, True,  None,    _positive),
        "road_slope":        (float, False, 0.0,     _slope_range),
        "use_curve":         (bool,  False, False,   None),
        "curve_radius":      (float, False, 12000.0, _positive),
        "curve_start_angle": (float, False, 0.0,     _angle_range),
        "curve_direction":   (str,   False, "left",  _in_set(_VALID_DIRECTIONS)),
    },
    "foundation": {
        "pile_rows_length":   (int,   True,  None, None),
        "pile_rows_width":    (int,   True,  None, None),
        "pile_spacing":       (float, True,  None, _positive),
        "pile_edge_distance": (float, True,  None, _non_negative),
        "pile_diameter":      (float, True,  None, _positive),
        "pile_length":        (float, True,  None, _positive),
        "pile_embedment":     (float, False, 12.0, _non_negative),
        "pile_cap_thickness": (float, True,  None, _positive),
    },
    "columns": {
        "count":   (int,   True,  None,       None),
        "spacing": (float, True,  None,       _non_negative),
        "shape":   (str,   False, "circular", _in_set(_VALID_COLUMN_SHAPES)),
        "width":   (float, True,  None,       _positive),
        "depth":   (float, False, 0.0,        _non_negative),
        "height":  (float, True,  None,       None),
    },
    "pier_cap": {
        "width":         (float, True, None, _positive),
        "length":        (float, True, None, _positive),
        "thickness":     (float, True, None, _positive),
        "overhang":      (float, False, 0.0, _non_negative),
        "tip_thickness": (float, False, 0.0, _non_negative),
    },
}

# Count fields clamped into [low, high] (``None`` means unbounded).
_CLAMPED_COUNTS: dict[tuple[str, str], tuple[int, int | None]] = {
    ("alignment", "span_count"):        (1, None),
    ("foundation", "pile_rows_length"): (1, None),
    ("foundation", "pile_rows_width"):  (1, None),
    ("columns", "count"):               (1, 4),
}


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

class InputError(Exception):
    """Raised when the YAML input is invalid or incomplete."""


def _coerce(value: Any, expected_type: type) -> Any:
    """Attempt to coerce *value* to *expected_type*.

    YAML often reads ``2`` as ``int`` where a ``float`` is expected.  This
    silently promotes ints to floats when the schema says ``float``.
    Booleans are never accepted as numbers.
    """
    if isinstance(value, bool) and expected_type is not bool:
        raise InputError(f"Expected type {expected_type.__name__}, got bool")
    if expected_type is float and isinstance(value, (int, float)):
        return float(value)
    if expected_type is int and isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, expected_type):
        return value
    raise InputError(
        f"Expected type {expected_type.__name__}, got "
        f"{type(value).__name__} for value {value!r}"
    )


def _validate_section(
    data: dict[str, Any],
    schema: dict[str, tuple],
    section_path: str,
    errors: list[str],
) -> dict[str, Any]:
    """Validate *data* against a flat field *schema*.

    Returns a new dict with defaults filled and types coerced.  Appends
    human-readable messages to *errors* for every problem found.
    """
    validated: dict[str, Any] = {}
    for field, (ftype, required, default, validator) in schema.items():
        path_str = f"{section_path}.{field}"
        if field not in data:
            if required and default is None:
                errors.append(f"Missing required field: {path_str}")
                continue
            validated[field] = default
            continue

        raw = data[field]
        try:
            coerced = _coerce(raw, ftype)
        except InputError:
            errors.append(
                f"{path_str}: expected {ftype.__name__}, "
                f"got {type(raw).__name__} ({raw!r})"
            )
            continue

        if validator is not None and not validator(coerced):
            errors.append(f"{path_str}: value {coerced!r} is out of range")
            continue

        if ftype is str and validator is not None:
            coerced = coerced.lower()
        validated[field] = coerced

    unknown = set(data) - set(schema)
    for field in sorted(unknown):
        logger.warning("Ignoring unknown field: %s.%s", section_path, field)

    return validated


def _clamp_counts(config: dict[str, Any]) -> None:
    """Clamp count fields into their supported range, in place."""
    for (section, field), (low, high) in _CLAMPED_COUNTS.items():
        value = config.get(section, {}).get(field)
        if value is None:
            continue
        clamped = max(value, low)
        if high is not None:
            clamped = min(clamped, high)
        if clamped != value:
            logger.warning("%s.%s=%r clamped to %d", section, field, value, clamped)
            config[section][field] = clamped


def validate_config(raw: Any) -> dict[str, Any]:
    """Validate an already-loaded configuration mapping.

    Raises
    ------
    InputError
        If validation fails (the message lists every problem found).
    """
    if not isinstance(raw, dict):
        raise InputError("YAML root must be a mapping (dict)")

    errors: list[str] = []
    config: dict[str, Any] = {}

    # ------------------------------------------------------------------
    # 1. Validate sections (flat fields)
    # ------------------------------------------------------------------
    for section_name, field_schema in SCHEMA.items():
        if section_name not in raw:
            has_required = any(
                req and default is None
                for (_, req, default, _) in field_schema.values()
            )
            if has_required:
                errors.append(f"Missing required section: {section_name}")
            config[section_name] = {
                field: default
                for field, (_, _, default, _) in field_schema.items()
            }
            continue

        section_data = raw[section_name]
        if not isinstance(section_data, dict):
            errors.append(f"Section '{section_name}' must be a mapping")
            continue

        config[section_name] = _validate_section(
            section_data, field_schema, section_name, errors
        )

    # ------------------------------------------------------------------
    # 2. Cross-field sanity checks
    # ------------------------------------------------------------------
    if not errors:
        _clamp_counts(config)

        col = config["columns"]
        if col["shape"] == "rectangular" and col["depth"] <= 0:
            errors.append(
                "columns: depth must be > 0 for rectangular columns "
                f"(depth={col['depth']})"
            )

        pcap = config["pier_cap"]
        if pcap["overhang"] > pcap["width"] / 2.0:
            logger.warning(
                "pier_cap.overhang=%s exceeds half the width; the profile "
                "will be clamped", pcap["overhang"],
            )
        if pcap["tip_thickness"] > pcap["thickness"]:
            logger.warning(
                "pier_cap.tip_thickness=%s exceeds the thickness; the profile "
                "will be clamped", pcap["tip_thickness"],
            )
        if col["height"] - pcap["thickness"] < 0:
            logger.warning(
                "columns.height=%s is less than pier_cap.thickness=%s; "
                "column heights will be clamped at zero",
                col["height"], pcap["thickness"],
            )

        fnd = config["foundation"]
        if fnd["pile_embedment"] > fnd["pile_cap_thickness"]:
            errors.append(
                "foundation: pile_embedment cannot exceed pile_cap_thickness "
                f"(embedment={fnd['pile_embedment']}, "
                f"thickness={fnd['pile_cap_thickness']})"
            )

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------
    if errors:
        bullet_list = "\n  - ".join(errors)
        raise InputError(
            f"Input validation failed with {len(errors)} error(s):\n"
            f"  - {bullet_list}"
        )

    return config


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_input(yaml_path: str | Path) -> dict[str, Any]:
    """Read and validate a project YAML file.

    Parameters
    ----------
    yaml_path:
        Filesystem path to the YAML input file.

    Returns
    -------
    dict
        A fully validated configuration dictionary with defaults applied.

    Raises
    ------
    FileNotFoundError
        If *yaml_path* does not exist.
    InputError
        If validation fails (the message lists every problem found).
    """
    path = Path(yaml_path)
    if not path.is_file():
        raise FileNotFoundError(f"Input file not found: {yaml_path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise InputError(f"YAML syntax error: {exc}") from exc

    return validate_config(raw)


# ---------------------------------------------------------------------------
# Template generator
# ---------------------------------------------------------------------------

_TEMPLATE_YAML = """\
# Substructure Geometry Input File
# ================================
# All lengths in inches. Comments show units and valid options.

project:
  name: "PROJECT_NAME"
  bridge_id: "BR-1"
  designer: "Designer Name"
  date: "2026-01-01"

alignment:
  span_count: 2                 # Number of spans (piers = spans + 1)
  span_length: 1800             # in - Span length (arc length when curved)
  road_slope: 0.015             # Longitudinal grade, rise/run (signed)
  use_curve: false              # true for a circular-curve alignment
  curve_radius: 12000           # in - Used only when use_curve is true
  curve_start_angle: 0          # degrees
  curve_direction: "left"       # Options: left | right

foundation:
  pile_rows_length: 3           # Pile rows along the alignment
  pile_rows_width: 6            # Piles per row across the pile cap
  pile_spacing: 144             # in - Clear gap between piles
  pile_edge_distance: 48        # in - Clear distance pile face to cap edge
  pile_diameter: 48             # in
  pile_length: 720              # in
  pile_embedment: 12            # in - Pile head embedment into the cap
  pile_cap_thickness: 72        # in

columns:
  count: 2                      # 1 to 4
  spacing: 432                  # in - Centre-to-centre
  shape: "circular"             # Options: circular | rectangular
  width: 60                     # in - Diameter for circular columns
  depth: 60                     # in - Rectangular columns only
  height: 300                   # in - Including pier cap thickness

pier_cap:
  width: 720                    # in - Across the bridge
  length: 72                    # in - Along the alignment
  thickness: 60                 # in
  overhang: 144                 # in - Horizontal taper at each end
  tip_thickness: 30             # in - Depth at the cantilever tip
"""


def generate_template() -> str:
    """Return a complete sample YAML input template as a string.

    The returned text is ready to be written to a file and edited by the
    user.
    """
    return _TEMPLATE_YAML
