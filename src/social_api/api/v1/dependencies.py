"""
FastAPI dependencies: one AsyncSession per request, and services built on top of it.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ...config.settings import Settings
from ...database.session import get_async_session
from ...services.account_service import AccountService
from ...services.message_service import MessageService


def get_app_settings(request: Request) -> Settings:
    # the settings the app was created with (tests pass their own)
    return request.app.state.settings


async def get_account_service(
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(db, isolation_level=settings.ACCOUNT_WRITE_ISOLATION_LEVEL)


async def get_message_service(db: AsyncSession = Depends(get_async_session)) -> MessageService:
    return MessageService(db)
