"""
Message business rules: posting, listing, reading, updating and deleting messages.

Like the account service, every method returns a value or a `Failure`. Update and delete
answer with `ROWS_AFFECTED` (the integer 1) instead of the touched record.
"""
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.integrity_classifier import ForeignKeyConstraintError
from ..exceptions.kinds import ErrorKind, Failure
from ..exceptions.mapper import db_error_handler
from ..models.message import Message
from ..repositories.account_repository import AccountRepository
from ..repositories.message_repository import MessageRepository
from ..validators.field_validators import (
    validate_identifier,
    validate_message_fields,
    validate_message_text,
)

module_logger = logging.getLogger(__name__)

# Success signal for update/delete: "one row affected"
ROWS_AFFECTED = 1


class MessageService:
    def __init__(
        self,
        db: AsyncSession,
        *,
        logger: logging.Logger | None = None,
        messages: MessageRepository | None = None,
        accounts: AccountRepository | None = None,
    ):
        self.db = db
        self.logger = logger or module_logger
        self.messages = messages or MessageRepository(db, logger=self.logger)
        self.accounts = accounts or AccountRepository(db, logger=self.logger)

    async def _commit(self) -> None:
        async with db_error_handler(self.db, "Message"):
            await self.db.commit()

    async def post_message(self, candidate: Any) -> Message | Failure:
        """
        Persist a new message.

        Failures:
            INVALID_INPUT: candidate missing, text missing/blank/over 255 chars, posted_by missing
            REFERENCE_NOT_FOUND: no account with id posted_by (also when the account disappears
                between the check and the insert)
        """
        action = "Message creation failed"
        failure = validate_message_fields(candidate, action=action)
        if failure:
            self.logger.info("service.message.post.invalid", extra={"reason": failure.message})
            return failure

        posted_by = candidate.posted_by
        unknown_account = Failure(
            ErrorKind.REFERENCE_NOT_FOUND,
            f"User with ID {posted_by} does not exist. {action}.",
            ("posted_by",),
        )

        if not await self.accounts.exists_by_id(posted_by):
            self.logger.info("service.message.post.unknown_account", extra={"posted_by": posted_by})
            return unknown_account

        message = Message(
            text=candidate.text,
            posted_by=posted_by,
            time_posted=getattr(candidate, "time_posted", None),
        )
        try:
            message = await self.messages.save(message)
            await self._commit()
        except ForeignKeyConstraintError:
            self.logger.info(
                "service.message.post.unknown_account",
                extra={"posted_by": posted_by, "source": "constraint"},
            )
            return unknown_account

        self.logger.info("service.message.post.success", extra={"message_id": message.id, "posted_by": posted_by})
        return message

    async def list_messages(self) -> list[Message]:
        messages = await self.messages.find_all()
        self.logger.debug("service.message.list", extra={"count": len(messages)})
        return messages

    async def get_message(self, message_id: int | None) -> Message | None | Failure:
        """Return the message, or None if it does not exist."""
        failure = validate_identifier(
            message_id, field="message_id", label="Message ID", action="Message retrieval failed"
        )
        if failure:
            return failure

        message = await self.messages.find_by_id(message_id)
        self.logger.debug("service.message.get", extra={"message_id": message_id, "found": message is not None})
        return message

    async def delete_message(self, message_id: int | None) -> int | Failure:
        """
        Delete one message.

        Unlike account deletion, an unknown id is a rejected request (REQUEST_REJECTED, 400).
        """
        action = "Message deletion failed"
        failure = validate_identifier(message_id, field="message_id", label="Message ID", action=action)
        if failure:
            return failure

        if not await self.messages.exists_by_id(message_id):
            self.logger.info("service.message.delete.not_found", extra={"message_id": message_id})
            return Failure(
                ErrorKind.REQUEST_REJECTED,
                f"Message with ID {message_id} not found. {action}.",
                ("message_id",),
            )

        await self.messages.delete_by_id(message_id)
        await self._commit()

        self.logger.info("service.message.delete.success", extra={"message_id": message_id})
        return ROWS_AFFECTED

    async def update_message(self, message_id: int | None, text: str | None) -> int | Failure:
        """
        Replace the text of an existing message and return ROWS_AFFECTED.

        Failures:
            INVALID_INPUT: id missing, text missing/blank/over 255 chars
            REQUEST_REJECTED: no message with this id
        """
        action = "Message update failed"
        failure = validate_identifier(
            message_id, field="message_id", label="Message ID", action=action
        ) or validate_message_text(text, action=action)
        if failure:
            self.logger.info("service.message.update.invalid", extra={"reason": failure.message})
            return failure

        updated = await self.messages.update_text(message_id, text)
        if updated is None:
            self.logger.info("service.message.update.not_found", extra={"message_id": message_id})
            return Failure(
                ErrorKind.REQUEST_REJECTED,
                f"Message with ID {message_id} not found. {action}.",
                ("message_id",),
            )

        await self._commit()
        self.logger.info("service.message.update.success", extra={"message_id": message_id})
        return ROWS_AFFECTED

    async def list_by_account(self, account_id: int | None) -> list[Message] | Failure:
        """
        Messages posted by one account. The account must exist (RECORD_MISSING, 404).
        """
        action = "Message retrieval failed"
        failure = validate_identifier(account_id, field="account_id", label="Account ID", action=action)
        if failure:
            return failure

        if not await self.accounts.exists_by_id(account_id):
            self.logger.info("service.message.list_by_account.unknown_account", extra={"account_id": account_id})
            return Failure(
                ErrorKind.RECORD_MISSING,
                f"User with ID {account_id} does not exist. {action}.",
                ("account_id",),
            )

        return await self.messages.find_by_posted_by(account_id)
