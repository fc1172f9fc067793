"""
HTTP routes for accounts and messages.

Routes stay thin: parse the body, call one service method, and either serialize the result or
render the returned `Failure` with `failure_response()`.
"""

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ...exceptions.kinds import Failure
from ...schemas.account import AccountDeleted, AccountPayload, AccountRead
from ...schemas.common import ErrorBody, WelcomeResponse
from ...schemas.message import MessagePayload, MessageRead
from ...services.account_service import AccountService
from ...services.message_service import MessageService
from .dependencies import get_account_service, get_message_service
from .error_handlers import failure_response

WELCOME_MESSAGE = "Welcome to the Social Media API!"

router = APIRouter()

_errors = {
    400: {"model": ErrorBody},
    401: {"model": ErrorBody},
    404: {"model": ErrorBody},
    409: {"model": ErrorBody},
}


@router.get("/", response_model=WelcomeResponse)
async def welcome() -> WelcomeResponse:
    return WelcomeResponse(data=None, message=WELCOME_MESSAGE, success=True)


# ------------------------------------------------------------------------------------------------
# Accounts
# ------------------------------------------------------------------------------------------------

@router.post("/register", response_model=AccountRead, responses=_errors)
async def register(
    payload: AccountPayload | None = Body(None),
    service: AccountService = Depends(get_account_service),
):
    account = await service.register(payload)
    if isinstance(account, Failure):
        return failure_response(account)
    return AccountRead.model_validate(account)


@router.post("/login", response_model=AccountRead, responses=_errors)
async def login(
    payload: AccountPayload | None = Body(None),
    service: AccountService = Depends(get_account_service),
):
    account = await service.login(payload)
    if isinstance(account, Failure):
        return failure_response(account)
    return AccountRead.model_validate(account)


@router.get("/accounts", response_model=list[AccountRead])
async def list_accounts(service: AccountService = Depends(get_account_service)):
    return [AccountRead.model_validate(a) for a in await service.list_accounts()]


@router.get("/accounts/{account_id}/messages", response_model=list[MessageRead], responses=_errors)
async def list_account_messages(account_id: int, service: MessageService = Depends(get_message_service)):
    messages = await service.list_by_account(account_id)
    if isinstance(messages, Failure):
        return failure_response(messages)
    return [MessageRead.model_validate(m) for m in messages]


@router.delete(
    "/accounts/{account_id}",
    response_model=AccountDeleted,
    responses={404: {"model": AccountDeleted}},
)
async def delete_account(account_id: int, service: AccountService = Depends(get_account_service)):
    deleted = await service.delete_account(account_id)
    if isinstance(deleted, Failure):
        return failure_response(deleted)
    if not deleted:
        return JSONResponse(status_code=404, content={"message": "User not found."})
    return AccountDeleted(message="User deleted successfully.")


# ------------------------------------------------------------------------------------------------
# Messages
# ------------------------------------------------------------------------------------------------

@router.post("/messages", response_model=MessageRead, responses=_errors)
async def post_message(
    payload: MessagePayload | None = Body(None),
    service: MessageService = Depends(get_message_service),
):
    message = await service.post_message(payload)
    if isinstance(message, Failure):
        return failure_response(message)
    return MessageRead.model_validate(message)


@router.get("/messages", response_model=list[MessageRead])
async def list_messages(service: MessageService = Depends(get_message_service)):
    return [MessageRead.model_validate(m) for m in await service.list_messages()]


@router.get("/messages/{message_id}", response_model=MessageRead | None, responses=_errors)
async def get_message(message_id: int, service: MessageService = Depends(get_message_service)):
    message = await service.get_message(message_id)
    if isinstance(message, Failure):
        return failure_response(message)
    return MessageRead.model_validate(message) if message is not None else None


@router.delete("/messages/{message_id}", response_model=int | None, responses=_errors)
async def delete_message(message_id: int, service: MessageService = Depends(get_message_service)):
    # an unknown id answers 200 with an empty (null) body
    existing = await service.get_message(message_id)
    if isinstance(existing, Failure):
        return failure_response(existing)
    if existing is None:
        return None

    # the service re-checks existence; its rejection only fires if the message vanished in between
    rows = await service.delete_message(message_id)
    if isinstance(rows, Failure):
        return failure_response(rows)
    return rows


@router.patch("/messages/{message_id}", response_model=int, responses=_errors)
async def update_message(
    message_id: int,
    payload: MessagePayload | None = Body(None),
    service: MessageService = Depends(get_message_service),
):
    rows = await service.update_message(message_id, payload.text if payload is not None else None)
    if isinstance(rows, Failure):
        return failure_response(rows)
    return rows
