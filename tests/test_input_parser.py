"""Tests for YAML input parsing, defaults, clamping and error collection."""

import copy
from pathlib import Path

import pytest
import yaml

from substructure_geometry.input_parser import (
    InputError,
    generate_template,
    parse_input,
    validate_config,
)
from substructure_geometry.parameters import Parameters

SAMPLE = Path(__file__).parent.parent / "config" / "sample_input.yaml"


@pytest.fixture
def raw_config():
    """Template contents as a plain dict."""
    return yaml.safe_load(generate_template())


def _write(tmp_path, data) -> Path:
    path = tmp_path / "input.yaml"
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestParseInput:

    def test_sample_file(self):
        config = parse_input(SAMPLE)
        assert config["alignment"]["use_curve"] is True
        assert config["alignment"]["span_count"] == 4
        assert config["foundation"]["pile_spacing"] == 144.0

    def test_template_round_trip(self, tmp_path, raw_config):
        config = parse_input(_write(tmp_path, raw_config))
        params = Parameters.from_config(config)
        assert params == Parameters()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_input(tmp_path / "nope.yaml")

    def test_yaml_syntax_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("alignment: [unclosed", encoding="utf-8")
        with pytest.raises(InputError, match="YAML syntax error"):
            parse_input(path)

    def test_root_must_be_mapping(self):
        with pytest.raises(InputError, match="mapping"):
            validate_config(["not", "a", "dict"])


class TestDefaults:

    def test_optional_fields_filled(self, raw_config):
        del raw_config["alignment"]["road_slope"]
        del raw_config["pier_cap"]["overhang"]
        del raw_config["columns"]["shape"]
        config = validate_config(raw_config)
        assert config["alignment"]["road_slope"] == 0.0
        assert config["pier_cap"]["overhang"] == 0.0
        assert config["columns"]["shape"] == "circular"

    def test_ints_promoted_to_float(self, raw_config):
        config = validate_config(raw_config)
        assert isinstance(config["alignment"]["span_length"], float)

    def test_options_lowercased(self, raw_config):
        raw_config["alignment"]["curve_direction"] = "Right"
        raw_config["columns"]["shape"] = "RECTANGULAR"
        config = validate_config(raw_config)
        assert config["alignment"]["curve_direction"] == "right"
        assert config["columns"]["shape"] == "rectangular"


class TestClamping:

    @pytest.mark.parametrize("count,expected", [(0, 1), (6, 4), (3, 3)])
    def test_column_count(self, raw_config, count, expected):
        raw_config["columns"]["count"] = count
        assert validate_config(raw_config)["columns"]["count"] == expected

    def test_rows_and_spans(self, raw_config):
        raw_config["foundation"]["pile_rows_length"] = 0
        raw_config["foundation"]["pile_rows_width"] = -2
        raw_config["alignment"]["span_count"] = 0
        config = validate_config(raw_config)
        assert config["foundation"]["pile_rows_length"] == 1
        assert config["foundation"]["pile_rows_width"] == 1
        assert config["alignment"]["span_count"] == 1

    def test_input_not_mutated(self, raw_config):
        original = copy.deepcopy(raw_config)
        raw_config["columns"]["count"] = 9
        validate_config(raw_config)
        assert raw_config["columns"]["count"] == 9
        assert raw_config["pier_cap"] == original["pier_cap"]


class TestErrors:

    def test_missing_section(self, raw_config):
        del raw_config["foundation"]
        with pytest.raises(InputError, match="Missing required section: foundation"):
            validate_config(raw_config)

    def test_missing_field(self, raw_config):
        del raw_config["pier_cap"]["thickness"]
        with pytest.raises(InputError, match="pier_cap.thickness"):
            validate_config(raw_config)

    def test_bad_direction(self, raw_config):
        raw_config["alignment"]["curve_direction"] = "up"
        with pytest.raises(InputError, match="curve_direction"):
            validate_config(raw_config)

    def test_non_positive_radius(self, raw_config):
        raw_config["alignment"]["curve_radius"] = 0
        with pytest.raises(InputError, match="curve_radius"):
            validate_config(raw_config)

    def test_bool_is_not_a_number(self, raw_config):
        raw_config["foundation"]["pile_diameter"] = True
        with pytest.raises(InputError, match="pile_diameter"):
            validate_config(raw_config)

    def test_rectangular_requires_depth(self, raw_config):
        raw_config["columns"]["shape"] = "rectangular"
        raw_config["columns"]["depth"] = 0
        with pytest.raises(InputError, match="rectangular"):
            validate_config(raw_config)

    def test_embedment_deeper_than_cap(self, raw_config):
        raw_config["foundation"]["pile_embedment"] = 100
        with pytest.raises(InputError, match="pile_embedment"):
            validate_config(raw_config)

    def test_all_errors_reported(self, raw_config):
        raw_config["alignment"]["span_length"] = -5
        raw_config["foundation"]["pile_diameter"] = "big"
        raw_config["pier_cap"]["width"] = 0
        with pytest.raises(InputError) as excinfo:
            validate_config(raw_config)
        message = str(excinfo.value)
        assert "3 error(s)" in message
        assert "alignment.span_length" in message
        assert "foundation.pile_diameter" in message
        assert "pier_cap.width" in message
