"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Responses never carry the password hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    """

    name: str
    email: str
    password: str


class ResetPasswordCommand(BaseModel):
    """Reset password command"""

    email: str
    token: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public view of a user"""

    id: int
    name: str
    email: str
    email_verified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


def to_user_info(user: User) -> UserInfo:
    return UserInfo(
        id=user.id,
        name=user.name,
        email=user.email,
        email_verified_at=user.email_verified_at,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class AuthenticatedResponse(BaseModel):
    """Response for register and login: the identity plus its session token"""

    user: UserInfo
    session_token: str


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    user_id: int
    already_verified: bool


class MessageResponse(BaseModel):
    """Plain acknowledgement"""

    status: str
    message: str
