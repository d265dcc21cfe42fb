"""
PasswordResetToken Entity

One active password reset token per email.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - pending password reset for an email.

    Business Rules:
    - Keyed by email: a new request replaces the previous token
    - Token is stored as SHA-256 hash of a secure random string
    - Single-use: the row is deleted after a successful reset
    - Treated as expired once older than PASSWORD_RESET_TOKEN_TTL_MINUTES
    """

    __tablename__ = "password_reset_tokens"

    email: str = Field(primary_key=True, max_length=255)
    token_hash: str = Field(max_length=64)  # SHA-256 output

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
