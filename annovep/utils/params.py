"""Run parameters for annovep.

Defaults can be overridden by an optional YAML params file, which in turn is
overridden by explicit command line options.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from annovep import DEFAULT_FIELD, INNER_DELIMITER, KEY_POSITION, OUTER_DELIMITER

OUTPUT_TYPES = ("v", "z", "b", "u")

DEFAULT_PARAMS: Dict[str, Any] = {
    "field": DEFAULT_FIELD,
    "key_position": KEY_POSITION,
    "outer_delimiter": OUTER_DELIMITER,
    "inner_delimiter": INNER_DELIMITER,
    "output_type": "v",
}


def load_params(params_file: Optional[Path | str] = None, **overrides) -> Dict[str, Any]:
    """Merge defaults, an optional params YAML and command line overrides.

    Overrides with a value of None are ignored, so unset argparse options do
    not shadow the params file.

    Raises:
        FileNotFoundError: If params_file does not exist
        ValueError: On unknown keys or invalid values
    """
    params = dict(DEFAULT_PARAMS)

    if params_file:
        params_path = Path(params_file).expanduser()
        if not params_path.exists():
            raise FileNotFoundError(f"Params file not found: {params_path}")
        loaded = yaml.safe_load(params_path.read_text()) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Params file must contain a mapping: {params_path}")
        unknown = sorted(set(loaded) - set(DEFAULT_PARAMS))
        if unknown:
            raise ValueError(f"Unknown keys in params file {params_path}: {', '.join(unknown)}")
        params.update(loaded)

    params.update({k: v for k, v in overrides.items() if v is not None})
    validate_params(params)
    return params


def validate_params(params: Dict[str, Any]) -> None:
    key_position = params["key_position"]
    if isinstance(key_position, bool) or not isinstance(key_position, int) or key_position < 0:
        raise ValueError(f"key_position must be a non-negative integer, got {key_position!r}")

    outer, inner = params["outer_delimiter"], params["inner_delimiter"]
    for name, value in (("outer_delimiter", outer), ("inner_delimiter", inner)):
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError(f"{name} must be a single character, got {value!r}")
    if outer == inner:
        raise ValueError("outer_delimiter and inner_delimiter must differ")

    if not params["field"] or not isinstance(params["field"], str):
        raise ValueError(f"field must be a non-empty string, got {params['field']!r}")

    if params["output_type"] not in OUTPUT_TYPES:
        raise ValueError(
            f"output_type must be one of {', '.join(OUTPUT_TYPES)}, got {params['output_type']!r}"
        )
