"""Smoke tests for the command-line interface."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from substructure_geometry.cli import main
from substructure_geometry.input_parser import generate_template

SAMPLE = Path(__file__).parent.parent / "config" / "sample_input.yaml"


@pytest.fixture
def runner():
    return CliRunner()


def test_template(runner):
    result = runner.invoke(main, ["template"])
    assert result.exit_code == 0
    assert yaml.safe_load(result.output) == yaml.safe_load(generate_template())


def test_validate_sample(runner):
    result = runner.invoke(main, ["validate", str(SAMPLE)])
    assert result.exit_code == 0
    assert "5 piers, curved alignment" in result.output
    assert "Input file is valid." in result.output


def test_validate_rejects_bad_input(runner, tmp_path):
    data = yaml.safe_load(generate_template())
    data["pier_cap"]["width"] = -1
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    result = runner.invoke(main, ["validate", str(path)])
    assert result.exit_code == 1
    assert "pier_cap.width" in result.output


def test_run_writes_results(runner, tmp_path):
    out = tmp_path / "out"
    result = runner.invoke(main, ["run", str(SAMPLE), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert "MATERIAL QUANTITIES" in result.output
    assert "5 piers assembled." in result.output

    geometry = json.loads((out / "geometry.json").read_text(encoding="utf-8"))
    assert len(geometry["stations"]) == 5
    quantities = json.loads((out / "quantities.json").read_text(encoding="utf-8"))
    assert quantities["quantities"]["total_pile_count"] == 5 * 18
    assert quantities["project"]["name"] == "SAMPLE-CURVED-VIADUCT"


def test_plot_writes_images(runner, tmp_path):
    out = tmp_path / "plots"
    result = runner.invoke(main, ["plot", str(SAMPLE), "-o", str(out), "--pier", "2"])
    assert result.exit_code == 0, result.output
    assert (out / "plan.png").is_file()
    assert (out / "pier_2_elevation.png").is_file()


def test_plot_rejects_bad_pier_index(runner, tmp_path):
    result = runner.invoke(main, ["plot", str(SAMPLE), "-o", str(tmp_path),
                                  "--pier", "12"])
    assert result.exit_code == 1
