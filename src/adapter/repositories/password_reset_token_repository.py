from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.errors import RepositoryError
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def upsert(self, email: str, token_hash: str, created_at: datetime) -> None:
        """
        Store the token for an email with a single INSERT ... ON CONFLICT.

        Two concurrent requests for the same email leave exactly one row;
        the last write wins.
        """
        insert = pg_insert if self.session.bind.dialect.name == "postgresql" else sqlite_insert
        stmt = insert(PasswordResetToken).values(
            email=email, token_hash=token_hash, created_at=created_at
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["email"],
            set_={
                "token_hash": stmt.excluded.token_hash,
                "created_at": stmt.excluded.created_at,
            },
        )
        try:
            await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc

    async def get_by_email(self, email: str) -> Optional[PasswordResetToken]:
        """Get the current reset token for an email"""
        # The upsert bypasses the identity map, so always reload the row
        stmt = (
            select(PasswordResetToken)
            .where(PasswordResetToken.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete_by_email(self, email: str) -> bool:
        """Delete the reset token for an email"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.email == email)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise RepositoryError(str(exc)) from exc
        return result.rowcount > 0
