"""Tests for capability token issue/validate."""
import pytest

from core.capability_token import CapabilityTokenService, derive_key
from conftest import NAMESPACE_ID, OTHER_NAMESPACE_ID


class TestIssue:
    def test_token_validates_for_its_namespace(self, tokens):
        token = tokens.issue(NAMESPACE_ID)
        assert tokens.validate(token, NAMESPACE_ID) is True

    def test_issuance_is_not_deterministic(self, tokens):
        t1 = tokens.issue(NAMESPACE_ID)
        t2 = tokens.issue(NAMESPACE_ID)
        assert t1 != t2
        assert tokens.validate(t1, NAMESPACE_ID)
        assert tokens.validate(t2, NAMESPACE_ID)

    def test_token_is_opaque_string(self, tokens):
        token = tokens.issue(NAMESPACE_ID)
        assert isinstance(token, str)
        assert NAMESPACE_ID not in token

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            CapabilityTokenService("")


class TestValidate:
    def test_other_namespace_rejected(self, tokens):
        token = tokens.issue(NAMESPACE_ID)
        assert tokens.validate(token, OTHER_NAMESPACE_ID) is False

    def test_exact_match_required(self, tokens):
        token = tokens.issue(NAMESPACE_ID)
        assert tokens.validate(token, NAMESPACE_ID.upper()) is False

    def test_wrong_secret_rejected(self, tokens):
        foreign = CapabilityTokenService("some-other-secret")
        token = foreign.issue(NAMESPACE_ID)
        assert tokens.validate(token, NAMESPACE_ID) is False

    def test_same_secret_new_instance_accepts(self, tokens):
        # Any holder of the secret can mint: validity is (token, secret, id) only
        other = CapabilityTokenService("test-secret-key")
        assert tokens.validate(other.issue(NAMESPACE_ID), NAMESPACE_ID) is True

    @pytest.mark.parametrize(
        "garbage",
        [None, "", "not-a-token", "Bearer", "gAAAAA", "ünïcødé", "%%%%", "a" * 500],
    )
    def test_malformed_tokens_never_raise(self, tokens, garbage):
        assert tokens.validate(garbage, NAMESPACE_ID) is False

    def test_tampered_token_rejected(self, tokens):
        token = tokens.issue(NAMESPACE_ID)
        flipped = token[:-5] + ("A" if token[-5] != "A" else "B") + token[-4:]
        assert tokens.validate(flipped, NAMESPACE_ID) is False


def test_derive_key_is_stable_and_fernet_sized():
    key = derive_key("abc")
    assert key == derive_key("abc")
    assert key != derive_key("abd")
    assert len(key) == 44
