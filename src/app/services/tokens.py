"""
Token helpers for reset tokens, session tokens and email verification.
"""

import hashlib
import secrets


def generate_token() -> str:
    """Opaque URL-safe token with 256 bits of entropy"""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """SHA-256 hex digest used to store tokens at rest"""
    return hashlib.sha256(token.encode()).hexdigest()


def verification_identifier(email: str) -> str:
    """
    Deterministic identifier embedded in email verification links.

    Derived only from the raw email string, so it never expires and does
    not change unless the email itself changes.
    """
    return hashlib.sha1(email.encode()).hexdigest()


def tokens_match(presented: str, expected: str) -> bool:
    return secrets.compare_digest(presented.encode(), expected.encode())
