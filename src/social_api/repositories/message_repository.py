"""
Message repository for handling message-specific database operations.

Adds account-scoped listing and the text-only update used by the message service.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions.mapper import db_error_handler
from ..models.message import Message
from .base_repository import BaseRepository

module_logger = logging.getLogger(__name__)


class MessageRepository(BaseRepository[Message]):
    """
    Repository for Message entity operations.
    """

    def __init__(self, db: AsyncSession, logger: logging.Logger | None = None):
        super().__init__(Message, db, logger or module_logger)

    async def find_by_id(self, message_id: int) -> Message | None:
        return await self.get_by_id(message_id)

    async def exists_by_id(self, message_id: int) -> bool:
        return await self.exists(message_id)

    async def find_all(self) -> list[Message]:
        """Every message, in id order."""
        return await self.get_all()

    async def find_by_posted_by(self, account_id: int) -> list[Message]:
        """
        All messages posted by one account, oldest id first. An unknown account simply has
        no messages; callers that care about existence check the account first.
        """
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                select(Message).where(Message.posted_by == account_id).order_by(Message.id)
            )
            messages = list(result.scalars().all())

        self.logger.debug(
            "repo.message.find_by_posted_by",
            extra={"posted_by": account_id, "count": len(messages)},
        )
        return messages

    async def update_text(self, message_id: int, text: str) -> Message | None:
        """Replace the text of one message. Returns None if the message does not exist."""
        return await self.update(message_id, text=text)

    async def delete_by_id(self, message_id: int) -> bool:
        return await self.delete(message_id)
