from .account import AccountDeleted, AccountPayload, AccountRead
from .common import ErrorBody, WelcomeResponse
from .message import MessagePayload, MessageRead

__all__ = [
    "AccountDeleted",
    "AccountPayload",
    "AccountRead",
    "ErrorBody",
    "MessagePayload",
    "MessageRead",
    "WelcomeResponse",
]
