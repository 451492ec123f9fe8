"""Command-line interface for the Substructure Geometry tool.

Usage::

    substructure-geometry run <input_yaml> [-o output_dir]
    substructure-geometry plot <input_yaml> [-o output_dir] [--pier N]
    substructure-geometry template
    substructure-geometry validate <input_yaml>
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path

import click

from substructure_geometry.assembler import assemble_bridge
from substructure_geometry.geometry import column_set_for, pile_grid_for
from substructure_geometry.input_parser import InputError, generate_template, parse_input
from substructure_geometry.parameters import InvalidParameter, Parameters
from substructure_geometry.quantities import calculate_quantities, summarise_quantities


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="substructure-geometry")
@click.option("-v", "--verbose", is_flag=True, help="Show debug log output.")
def main(verbose: bool) -> None:
    """Bridge Substructure Geometry - piles, pile caps, columns, pier caps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(input_file: str) -> tuple[dict, Parameters]:
    """Parse *input_file* into the config dict and parameter record."""
    try:
        config = parse_input(input_file)
        params = Parameters.from_config(config)
    except (InputError, InvalidParameter) as exc:
        click.secho(f"Error parsing input: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc
    return config, params


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "-o", "--output",
    default="./output",
    show_default=True,
    help="Output directory for results.",
)
def run(input_file: str, output: str) -> None:
    """Generate geometry and quantities for INPUT_FILE."""
    output_dir = Path(output)
    output_dir.mkdir(parents=True, exist_ok=True)

    click.echo(f"Reading input file: {input_file}")
    config, params = _load(input_file)
    project = config.get("project", {})

    # ------------------------------------------------------------------
    # 1. Pier-local layout
    # ------------------------------------------------------------------
    click.echo("\nLaying out piles and columns ...")
    grid = pile_grid_for(params)
    columns = column_set_for(params)
    click.echo(f"  Pile cap: {grid.cap_width:.2f} x {grid.cap_length:.2f} in, "
               f"{grid.pile_count} piles")
    click.echo(f"  Columns: {columns.count} at {columns.spacing:.2f} in")

    # ------------------------------------------------------------------
    # 2. Assembly
    # ------------------------------------------------------------------
    click.echo("Assembling stations ...")
    bridge = assemble_bridge(params)
    lo, hi = bridge.extents()
    click.echo(f"  {len(bridge.stations)} piers assembled.")
    click.echo("  Extents: "
               f"({lo[0]:.1f}, {lo[1]:.1f}, {lo[2]:.1f}) -> "
               f"({hi[0]:.1f}, {hi[1]:.1f}, {hi[2]:.1f}) in")

    # ------------------------------------------------------------------
    # 3. Quantities
    # ------------------------------------------------------------------
    click.echo("Calculating quantities ...")
    quantities = calculate_quantities(params)

    click.echo("")
    click.secho("=" * 60, bold=True)
    click.secho(f"  {project.get('name', 'N/A')}", bold=True)
    click.secho("=" * 60, bold=True)
    click.echo(summarise_quantities(quantities))

    # ------------------------------------------------------------------
    # Save results
    # ------------------------------------------------------------------
    geometry_file = output_dir / "geometry.json"
    with open(geometry_file, "w", encoding="utf-8") as fh:
        json.dump(bridge.to_dict(), fh, indent=2)

    quantities_file = output_dir / "quantities.json"
    payload = asdict(quantities)
    payload["total_concrete_volume"] = quantities.total_concrete_volume
    with open(quantities_file, "w", encoding="utf-8") as fh:
        json.dump({"project": project, "quantities": payload}, fh, indent=2)

    click.echo(f"\nGeometry saved to {geometry_file.resolve()}")
    click.echo(f"Quantities saved to {quantities_file.resolve()}")


# ---------------------------------------------------------------------------
# plot
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
@click.option(
    "-o", "--output",
    default="./output",
    show_default=True,
    help="Output directory for drawings.",
)
@click.option("--pier", default=0, show_default=True,
              help="Index of the pier drawn in elevation.")
def plot(input_file: str, output: str, pier: int) -> None:
    """Draw plan and pier elevation previews for INPUT_FILE."""
    from substructure_geometry.diagrams import draw_pier_elevation, draw_plan

    _, params = _load(input_file)
    bridge = assemble_bridge(params)
    if not 0 <= pier < len(bridge.stations):
        click.secho(
            f"Pier index {pier} out of range (0-{len(bridge.stations) - 1})",
            fg="red", err=True,
        )
        raise SystemExit(1)

    output_dir = Path(output)
    output_dir.mkdir(parents=True, exist_ok=True)

    plan_path = output_dir / "plan.png"
    fig = draw_plan(bridge)
    fig.savefig(plan_path, dpi=150)
    click.secho(f"Plan saved to {plan_path.resolve()}", fg="green")

    elev_path = output_dir / f"pier_{pier}_elevation.png"
    fig = draw_pier_elevation(bridge.stations[pier])
    fig.savefig(elev_path, dpi=150)
    click.secho(f"Elevation saved to {elev_path.resolve()}", fg="green")


# ---------------------------------------------------------------------------
# template
# ---------------------------------------------------------------------------

@main.command()
def template() -> None:
    """Print a sample input YAML to stdout."""
    click.echo(generate_template())


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True))
def validate(input_file: str) -> None:
    """Validate an input YAML file without generating geometry."""
    click.echo(f"Validating: {input_file}")
    _, params = _load(input_file)
    click.echo(f"  {params.station_count} piers, "
               f"{'curved' if params.use_curve else 'straight'} alignment.")
    click.secho("\nInput file is valid.", fg="green")


# ---------------------------------------------------------------------------
# Allow ``python -m substructure_geometry.cli``
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    main()
