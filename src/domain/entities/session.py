"""
Session Entity

Server-side record of an authenticated identity.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - established after login or registration.

    Business Rules:
    - Session token is hashed (SHA-256); the plain token only lives in the cookie
    - Revoked on logout and on password reset
    - Expires after SESSION_TTL_MINUTES
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, max_length=64)
    revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_revoked", "revoked"),
    )

    def is_active(self, now: datetime) -> bool:
        return not self.revoked and self.expires_at > now
