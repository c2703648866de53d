"""Tests for namespace id syntax and Authorization header parsing."""
import pytest

from core.identifiers import canonical_namespace_id, extract_bearer, is_valid_namespace_id


class TestNamespaceId:
    @pytest.mark.parametrize(
        "value",
        [
            "a1b2c3d4-0000-4000-8000-000000000000",
            "A1B2C3D4-0000-4000-8000-00000000ABCD",
            "00000000-0000-0000-0000-000000000000",
        ],
    )
    def test_valid(self, value):
        assert is_valid_namespace_id(value)

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "hello",
            "a1b2c3d4000040008000000000000000",
            "{a1b2c3d4-0000-4000-8000-000000000000}",
            "urn:uuid:a1b2c3d4-0000-4000-8000-000000000000",
            "a1b2c3d4-0000-4000-8000-00000000000",
            "a1b2c3d4-0000-4000-8000-0000000000000",
            "g1b2c3d4-0000-4000-8000-000000000000",
            " a1b2c3d4-0000-4000-8000-000000000000",
            "a1b2c3d4-0000-4000-8000-000000000000\n",
            "../../etc/passwd",
        ],
    )
    def test_invalid(self, value):
        assert not is_valid_namespace_id(value)

    def test_canonical_is_lowercase(self):
        assert (
            canonical_namespace_id("A1B2C3D4-0000-4000-8000-00000000ABCD")
            == "a1b2c3d4-0000-4000-8000-00000000abcd"
        )

    def test_canonical_rejects_malformed(self):
        with pytest.raises(ValueError):
            canonical_namespace_id("nope")


class TestExtractBearer:
    def test_with_prefix(self):
        assert extract_bearer("Bearer abc.def") == "abc.def"

    def test_without_prefix(self):
        assert extract_bearer("abc.def") == "abc.def"

    def test_prefix_case_insensitive(self):
        assert extract_bearer("bearer abc") == "abc"

    def test_missing(self):
        assert extract_bearer(None) is None

    def test_blank(self):
        assert extract_bearer("   ") is None
        assert extract_bearer("Bearer ") is None
