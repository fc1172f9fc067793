"""
Repository layer initialization module.

Exports all repository classes. Repositories sit between the services and the database: they
flush, they never commit.

Usage:
    from social_api.repositories import AccountRepository, MessageRepository
"""

from .base_repository import BaseRepository
from .account_repository import AccountRepository
from .message_repository import MessageRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "MessageRepository",
]
