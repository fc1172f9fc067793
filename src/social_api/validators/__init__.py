from .field_validators import (
    MAX_MESSAGE_LENGTH,
    MIN_PASSWORD_LENGTH,
    check_present,
    check_text,
    validate_account_fields,
    validate_identifier,
    validate_message_fields,
    validate_message_text,
)

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "MIN_PASSWORD_LENGTH",
    "check_present",
    "check_text",
    "validate_account_fields",
    "validate_identifier",
    "validate_message_fields",
    "validate_message_text",
]
