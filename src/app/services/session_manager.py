from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import User


class ISessionManager(ABC):
    """
    Establishes and destroys server-side sessions.

    Works inside the caller's unit of work; the caller commits.
    """

    @abstractmethod
    async def establish(self, user: User) -> str:
        """Create a session for the user and return its plain token"""
        pass

    @abstractmethod
    async def resolve(self, token: str) -> Optional[User]:
        """Return the user of a live session, or None"""
        pass

    @abstractmethod
    async def destroy(self, token: str) -> bool:
        """Revoke the session. Returns True if a live session was revoked."""
        pass

    @abstractmethod
    async def destroy_all(self, user_id: int) -> int:
        """Revoke every session of a user"""
        pass
