import hashlib

import pytest

from annovep.errors import UsageError
from annovep.utils.validation import check_input_exists, compute_md5, is_url, validate_tag_name


def test_compute_md5(tmp_path):
    """Test that compute_md5 correctly calculates MD5 hash of a file."""
    content = b"test content for MD5 calculation"
    path = tmp_path / "file.txt"
    path.write_bytes(content)

    assert compute_md5(path) == hashlib.md5(content).hexdigest()
    assert compute_md5(path, chunk_size=4) == hashlib.md5(content).hexdigest()


def test_validate_tag_name():
    validate_tag_name("pLI_score")
    for bad in ["", "a b", "a|b", "a,b", 'a"b']:
        with pytest.raises(UsageError):
            validate_tag_name(bad)

    validate_tag_name("a|b", outer=";", inner=":")
    with pytest.raises(UsageError):
        validate_tag_name("a;b", outer=";", inner=":")


def test_check_input_exists(tmp_path):
    check_input_exists("-")
    existing = tmp_path / "in.vcf"
    existing.write_text("")
    check_input_exists(str(existing))
    with pytest.raises(FileNotFoundError):
        check_input_exists(str(tmp_path / "missing.vcf"))


def test_is_url():
    assert is_url("https://example.org/t.tsv")
    assert is_url("http://example.org/t.tsv")
    assert not is_url("/data/t.tsv")
