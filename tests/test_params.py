"""Tests for params loading and validation."""

import pytest

from annovep.utils.params import DEFAULT_PARAMS, load_params


def test_defaults():
    assert load_params() == DEFAULT_PARAMS


def test_params_file_and_overrides(tmp_path):
    params_file = tmp_path / "params.yaml"
    params_file.write_text("field: ANN\nkey_position: 3\noutput_type: z\n")

    params = load_params(params_file, key_position=None, output_type="b")
    assert params["field"] == "ANN"
    assert params["key_position"] == 3
    assert params["output_type"] == "b"
    assert params["inner_delimiter"] == "|"


def test_empty_params_file(tmp_path):
    params_file = tmp_path / "params.yaml"
    params_file.write_text("")
    assert load_params(params_file) == DEFAULT_PARAMS


def test_missing_params_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_params(tmp_path / "missing.yaml")


def test_unknown_key(tmp_path):
    params_file = tmp_path / "params.yaml"
    params_file.write_text("gene_column: 4\n")
    with pytest.raises(ValueError, match="gene_column"):
        load_params(params_file)


@pytest.mark.parametrize(
    "overrides",
    [
        {"key_position": -1},
        {"key_position": True},
        {"outer_delimiter": "||"},
        {"outer_delimiter": "|"},
        {"output_type": "x"},
        {"field": ""},
    ],
)
def test_invalid_values(overrides):
    with pytest.raises(ValueError):
        load_params(**overrides)
