"""Tests for the structured Format description edit."""

import pytest

from annovep.errors import SchemaNotFound
from annovep.schema import SchemaDescription, patch_description


def test_patch_quoted_description():
    description = '"Consequence annotations from Ensembl VEP. Format: A|B|C"'
    assert patch_description(description, "D") == (
        '"Consequence annotations from Ensembl VEP. Format: A|B|C|D"'
    )


def test_patch_unquoted_description():
    description = "Consequence annotations from Ensembl VEP. Format: A|B|C"
    assert patch_description(description, "D") == (
        "Consequence annotations from Ensembl VEP. Format: A|B|C|D"
    )


def test_parse_shape():
    schema = SchemaDescription.parse('"VEP. Format: Allele|Gene"')
    assert schema.prefix == '"VEP. Format: '
    assert schema.fields == ["Allele", "Gene"]
    assert schema.suffix == '"'
    assert str(schema) == '"VEP. Format: Allele|Gene"'


def test_patch_twice_appends_twice():
    once = patch_description("Format: A|B", "C")
    assert patch_description(once, "D") == "Format: A|B|C|D"


def test_missing_format_raises():
    with pytest.raises(SchemaNotFound):
        patch_description('"Consequence annotations from Ensembl VEP"', "D")


def test_empty_format_list():
    assert patch_description("Format: ", "D") == "Format: D"
