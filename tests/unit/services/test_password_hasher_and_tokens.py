import hashlib

import pytest

from src.app.services.tokens import (
    generate_token,
    hash_token,
    tokens_match,
    verification_identifier,
)


def test_hash_never_contains_plaintext(hasher):
    digest = hasher.hash("longenough1")

    assert "longenough1" not in digest
    assert digest.startswith("$2b$")
    assert hasher.verify("longenough1", digest)


def test_hash_is_salted_per_call(hasher):
    first = hasher.hash("longenough1")
    second = hasher.hash("longenough1")

    assert first != second
    assert hasher.verify("longenough1", first)
    assert hasher.verify("longenough1", second)


def test_verify_rejects_wrong_password(hasher):
    digest = hasher.hash("longenough1")

    assert hasher.verify("longenough2", digest) is False


def test_verify_with_malformed_digest_raises(hasher):
    with pytest.raises(ValueError):
        hasher.verify("longenough1", "not-a-bcrypt-hash")


def test_verify_dummy_does_not_raise(hasher):
    assert hasher.verify_dummy("whatever") is None


def test_generate_token_is_url_safe_and_unique():
    tokens = {generate_token() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        # 32 random bytes -> 43 base64url characters
        assert len(token) >= 43
        assert all(c.isalnum() or c in "-_" for c in token)


def test_verification_identifier_is_sha1_hex_of_email():
    assert verification_identifier("a@x.com") == hashlib.sha1(b"a@x.com").hexdigest()
    assert verification_identifier("A@x.com") != verification_identifier("a@x.com")


def test_hash_token_is_sha256_hex():
    assert hash_token("abc") == hashlib.sha256(b"abc").hexdigest()


def test_tokens_match():
    assert tokens_match("abc", "abc")
    assert not tokens_match("abc", "abd")
