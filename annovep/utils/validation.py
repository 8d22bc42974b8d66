"""Validation utilities for the annovep package.

This module provides functions for validating command line inputs and
computing MD5 checksums of lookup tables.
"""

import hashlib
from pathlib import Path

from annovep import INNER_DELIMITER, OUTER_DELIMITER
from annovep.errors import UsageError


def compute_md5(file_path: Path, chunk_size: int = 1 << 20) -> str:
    """Compute MD5 checksum for a file.

    Args:
        file_path: Path to the file to compute MD5 for
        chunk_size: Number of bytes read per iteration

    Returns:
        MD5 checksum as a hex string
    """
    md5 = hashlib.md5()
    with open(file_path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            md5.update(chunk)
    return md5.hexdigest()


def validate_tag_name(
    tag_name: str, outer: str = OUTER_DELIMITER, inner: str = INNER_DELIMITER
) -> None:
    """
    Validates that the new sub-field name can be embedded in a CSQ Format list.
    """
    if not tag_name:
        raise UsageError("Tag name must not be empty")
    if any(c.isspace() for c in tag_name):
        raise UsageError(f"Tag name must not contain white spaces: {tag_name!r}")
    for delimiter in (outer, inner, '"'):
        if delimiter in tag_name:
            raise UsageError(
                f"Tag name must not contain {delimiter!r}: {tag_name!r}"
            )


def check_input_exists(path: str) -> None:
    """Raise FileNotFoundError for a missing input file, '-' means stdin."""
    if path == "-":
        return
    if not Path(path).expanduser().exists():
        raise FileNotFoundError(f"Input file not found: {path}")


def is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")
