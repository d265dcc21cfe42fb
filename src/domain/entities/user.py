"""
User Entity

Represents a registered account.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - represents a registered account.

    Business Rules:
    - Email must be unique across all users (exact, case-sensitive match)
    - Password stored as bcrypt hash, never in plaintext
    - email_verified_at is set at most once, by a successful verification
    - password_hash only changes through a successful password reset
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    @property
    def is_verified(self) -> bool:
        return self.email_verified_at is not None
