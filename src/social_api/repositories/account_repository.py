"""
Account repository for handling account-specific database operations.

Extends BaseRepository with the lookups the account service needs: existence by username,
exact username+password matching, and delete-by-id.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.mapper import db_error_handler
from ..models.account import Account
from .base_repository import BaseRepository

module_logger = logging.getLogger(__name__)


class AccountRepository(BaseRepository[Account]):
    """
    Repository for Account entity operations.

    Lookups compare values exactly as given (no trimming, no case folding): usernames are
    case-sensitive and credentials must match byte for byte.
    """

    def __init__(self, db: AsyncSession, logger: logging.Logger | None = None):
        super().__init__(Account, db, logger or module_logger)

    async def find_by_id(self, account_id: int) -> Account | None:
        return await self.get_by_id(account_id)

    async def exists_by_id(self, account_id: int) -> bool:
        return await self.exists(account_id)

    async def find_all(self) -> list[Account]:
        """Every account, in id order."""
        return await self.get_all()

    async def exists_by_username(self, username: str) -> bool:
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                select(Account.id).where(Account.username == username).limit(1)
            )
            exists = result.scalar() is not None

        self.logger.debug("repo.account.exists_by_username", extra={"exists": exists})
        return exists

    async def find_by_username_and_password(self, username: str, password: str) -> Account | None:
        """
        Return the account whose username AND password both match exactly, or None.
        """
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                select(Account)
                .where(Account.username == username, Account.password == password)
                .limit(1)
            )
            account = result.scalars().first()

        # never log the password, not even masked: the username is enough to trace a login
        self.logger.debug(
            "repo.account.find_by_credentials",
            extra={"username": username, "found": account is not None},
        )
        return account

    async def exists_by_username_and_password(self, username: str, password: str) -> bool:
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                select(Account.id)
                .where(Account.username == username, Account.password == password)
                .limit(1)
            )
            return result.scalar() is not None

    async def delete_by_id(self, account_id: int) -> bool:
        """
        Delete the account row. Its messages go with it (ON DELETE CASCADE).

        Returns:
            True if a row was deleted, False if no account had this id
        """
        return await self.delete(account_id)
