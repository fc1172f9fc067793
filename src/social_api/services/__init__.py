from .account_service import AccountService
from .message_service import MessageService, ROWS_AFFECTED

__all__ = ["AccountService", "MessageService", "ROWS_AFFECTED"]
