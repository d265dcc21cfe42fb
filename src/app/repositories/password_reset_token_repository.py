from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def upsert(self, email: str, token_hash: str, created_at: datetime) -> None:
        """Insert the token for an email, replacing any previous one atomically"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[PasswordResetToken]:
        """Get the current reset token for an email"""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> bool:
        """Delete the reset token for an email. Returns True if a row was removed."""
        pass
