from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from ..database.base import Base

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .account import Account

# Message text is bounded at the column as well as in the validators
MESSAGE_TEXT_MAX_LENGTH = 255


class Message(Base):
    """
    SQLAlchemy model representing a message posted by an account.
    """
    __tablename__ = "messages"

    # Storage-assigned integer id (exposed as `messageId` on the wire)
    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )

    # Foreign key reference to the posting account
    posted_by: Mapped[int] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,  # messages are listed per account
    )

    text: Mapped[str] = mapped_column(
        String(MESSAGE_TEXT_MAX_LENGTH),
        nullable=False,
    )

    # Epoch timestamp supplied by the client; stored as-is, never validated
    time_posted: Mapped[int | None] = mapped_column(
        BigInteger,
        nullable=True,
    )

    # --- Relationships ---

    # Back-reference to the posting account
    account: Mapped["Account"] = relationship(
        "Account",
        back_populates="messages",
    )

    def __repr__(self) -> str:
        return f"<Message(id={self.id!r}, posted_by={self.posted_by!r}, time_posted={self.time_posted!r})>"
