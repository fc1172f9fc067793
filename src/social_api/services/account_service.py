"""
Account business rules: registration, login, credential lookups, listing and deletion.

Methods return either a value or a `Failure`; they never raise for a caller mistake. Storage
faults still raise (`StorageError` subclasses) and are rendered by the global exception handlers.

Registration and deletion run under `isolation_level` (SERIALIZABLE by default, see
`Settings.ACCOUNT_WRITE_ISOLATION_LEVEL`). The username UNIQUE constraint remains the authority:
a duplicate slipping past the pre-check is reported exactly like one caught by it.
"""
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.integrity_classifier import UniqueConstraintError
from ..exceptions.kinds import ErrorKind, Failure
from ..exceptions.mapper import db_error_handler
from ..models.account import Account
from ..repositories.account_repository import AccountRepository
from ..validators.field_validators import (
    check_text,
    validate_account_fields,
    validate_identifier,
)

module_logger = logging.getLogger(__name__)


class AccountService:
    def __init__(
        self,
        db: AsyncSession,
        *,
        isolation_level: str | None = None,
        logger: logging.Logger | None = None,
        repository: AccountRepository | None = None,
    ):
        self.db = db
        self.isolation_level = isolation_level
        self.logger = logger or module_logger
        self.accounts = repository or AccountRepository(db, logger=self.logger)

    async def _use_isolation_level(self, operation: str) -> None:
        """
        Pin the isolation level of the connection this unit of work will use.

        Only possible before the session has begun a transaction; otherwise the current
        transaction keeps its level and the skip is logged.
        """
        if not self.isolation_level:
            return
        if self.db.in_transaction():
            self.logger.warning(
                "service.account.isolation_skipped",
                extra={"operation": operation, "isolation_level": self.isolation_level},
            )
            return
        async with db_error_handler(self.db, "Account"):
            await self.db.connection(execution_options={"isolation_level": self.isolation_level})

    async def _commit(self) -> None:
        async with db_error_handler(self.db, "Account"):
            await self.db.commit()

    # ----------------------------------------------------------------------------------------
    # Registration / authentication
    # ----------------------------------------------------------------------------------------

    async def register(self, candidate: Any) -> Account | Failure:
        """
        Create an account.

        Failures:
            INVALID_INPUT: candidate, username or password missing/blank; password shorter than 4
            DUPLICATE_RESOURCE: username taken (pre-check or UNIQUE violation at insert)
        """
        action = "Account creation failed"
        failure = validate_account_fields(candidate, action=action, enforce_password_length=True)
        if failure:
            self.logger.info("service.account.register.invalid", extra={"reason": failure.message})
            return failure

        username = candidate.username
        duplicate = Failure(
            ErrorKind.DUPLICATE_RESOURCE,
            f"An account with the same username: {username} already exists - {action}.",
            ("username",),
        )

        await self._use_isolation_level("register")

        if await self.accounts.exists_by_username(username):
            self.logger.info("service.account.register.duplicate", extra={"username": username})
            return duplicate

        try:
            account = await self.accounts.save(Account(username=username, password=candidate.password))
            await self._commit()
        except UniqueConstraintError:
            # lost the race against a concurrent registration; session already rolled back
            self.logger.info(
                "service.account.register.duplicate",
                extra={"username": username, "source": "constraint"},
            )
            return duplicate

        self.logger.info("service.account.register.success", extra={"account_id": account.id})
        return account

    async def login(self, candidate: Any) -> Account | Failure:
        """
        Return the account matching the exact username+password pair.

        Failures:
            INVALID_INPUT: candidate, username or password missing/blank (no length rule)
            AUTHENTICATION_FAILED: no account matches the pair
        """
        failure = validate_account_fields(candidate, action="Authentication failed")
        if failure:
            self.logger.info("service.account.login.invalid", extra={"reason": failure.message})
            return failure

        account = await self.accounts.find_by_username_and_password(candidate.username, candidate.password)
        if account is None:
            self.logger.info("service.account.login.failed", extra={"username": candidate.username})
            return Failure(
                ErrorKind.AUTHENTICATION_FAILED,
                f"Authentication failed for account with username: {candidate.username}.",
            )

        self.logger.info("service.account.login.success", extra={"account_id": account.id})
        return account

    # ----------------------------------------------------------------------------------------
    # Lookups
    # ----------------------------------------------------------------------------------------

    async def username_exists(self, username: str | None) -> bool | Failure:
        failure = check_text(
            username, field="username", label="Username", action="Checking if account exists failed"
        )
        if failure:
            return failure
        return await self.accounts.exists_by_username(username)

    async def credentials_exist(self, candidate: Any) -> bool | Failure:
        failure = validate_account_fields(candidate, action="Checking if account exists failed")
        if failure:
            return failure
        return await self.accounts.exists_by_username_and_password(candidate.username, candidate.password)

    async def find_by_credentials(self, candidate: Any) -> Account | Failure:
        """
        Like `login`, but a miss is a rejected request (REFERENCE_NOT_FOUND, 400) rather than
        an authentication failure.
        """
        action = "Search for user failed"
        failure = validate_account_fields(candidate, action=action)
        if failure:
            return failure

        account = await self.accounts.find_by_username_and_password(candidate.username, candidate.password)
        if account is None:
            return Failure(
                ErrorKind.REFERENCE_NOT_FOUND,
                f"Search for user: {candidate.username} failed.",
                ("username",),
            )
        return account

    async def list_accounts(self) -> list[Account]:
        accounts = await self.accounts.find_all()
        self.logger.debug("service.account.list", extra={"count": len(accounts)})
        return accounts

    async def find_account(self, account_id: int | None) -> Account | None | Failure:
        """Lenient lookup: None when no account has this id."""
        failure = validate_identifier(
            account_id, field="account_id", label="Account ID", action="Account retrieval failed"
        )
        if failure:
            return failure
        return await self.accounts.find_by_id(account_id)

    async def get_account(self, account_id: int | None) -> Account | Failure:
        """Strict lookup: RECORD_MISSING (404) when no account has this id."""
        account = await self.find_account(account_id)
        if isinstance(account, Failure):
            return account
        if account is None:
            return Failure(ErrorKind.RECORD_MISSING, f"User with ID: {account_id} not found.", ("account_id",))
        return account

    # ----------------------------------------------------------------------------------------
    # Deletion
    # ----------------------------------------------------------------------------------------

    async def delete_account(self, account_id: int | None) -> bool | Failure:
        """
        Delete an account and (by cascade) its messages.

        Returns False when no account has this id; that is a no-op, not an error.
        """
        failure = validate_identifier(
            account_id, field="account_id", label="Account ID", action="Account deletion failed"
        )
        if failure:
            return failure

        await self._use_isolation_level("delete")

        if not await self.accounts.exists_by_id(account_id):
            self.logger.info("service.account.delete.not_found", extra={"account_id": account_id})
            # end the read-only transaction so the isolated connection goes back to the pool
            await self.db.rollback()
            return False

        deleted = await self.accounts.delete_by_id(account_id)
        await self._commit()

        self.logger.info("service.account.delete.success", extra={"account_id": account_id, "deleted": deleted})
        return deleted
