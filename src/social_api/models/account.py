from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from ..database.base import Base

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .message import Message


class Account(Base):
    """
    SQLAlchemy model for an Account.

    An account owns the messages it posted. Deleting an account deletes its messages, both at
    the ORM level (cascade) and in the database (ON DELETE CASCADE on `messages.posted_by`).
    """
    __tablename__ = "accounts"

    # Storage-assigned integer id (exposed as `accountId` on the wire)
    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )

    # Username (must be unique and non-null); the UNIQUE constraint is the authority on races
    username: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )

    # Stored as given; credential checks compare the exact pair
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # --- Relationships ---

    # One-to-Many: an account posts many messages
    messages: Mapped[list["Message"]] = relationship(
        "Message",
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="select",
        order_by="Message.id",
    )

    def __repr__(self) -> str:
        # never include the password
        return f"<Account(id={self.id!r}, username={self.username!r})>"
