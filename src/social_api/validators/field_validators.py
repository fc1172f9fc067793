"""
Field-level validation for account and message candidates.

Every function here is pure: it inspects the candidate and returns either `None` (accepted)
or a `Failure` with kind INVALID_INPUT. No I/O, no logging. Cross-record rules (uniqueness,
existence) live in the services because they need the repositories.

Candidates are duck-typed: anything exposing `username`/`password` (accounts) or
`text`/`posted_by` (messages) attributes works, including the API schemas and ORM models.
"""

from typing import Any

from ..exceptions.kinds import ErrorKind, Failure

MIN_PASSWORD_LENGTH = 4
MAX_MESSAGE_LENGTH = 255


def _invalid(message: str, field: str) -> Failure:
    return Failure(ErrorKind.INVALID_INPUT, message, (field,))


def check_present(value: Any, *, field: str, label: str, action: str) -> Failure | None:
    """Reject a missing (None) value."""
    if value is None:
        return _invalid(f"{label} is null. {action}.", field)
    return None


def check_text(
    value: str | None,
    *,
    field: str,
    label: str,
    action: str,
    min_length: int | None = None,
    max_length: int | None = None,
) -> Failure | None:
    """
    Reject a missing, blank (after trimming) or out-of-bounds string.

    Length bounds apply to the raw value, whitespace included.
    """
    failure = check_present(value, field=field, label=label, action=action)
    if failure:
        return failure

    if not value.strip():
        return _invalid(f"{label} is blank. {action}.", field)

    if min_length is not None and len(value) < min_length:
        return _invalid(
            f"{label} is too short. It must be at least {min_length} characters. {action}.", field
        )

    if max_length is not None and len(value) > max_length:
        return _invalid(
            f"{label} exceeds maximum length of {max_length} characters. {action}.", field
        )

    return None


def validate_account_fields(
    candidate: Any, *, action: str, enforce_password_length: bool = False
) -> Failure | None:
    """
    Check an account candidate: present, username and password non-blank, and (for
    registration) password length >= MIN_PASSWORD_LENGTH.
    """
    if candidate is None:
        return _invalid(f"Account is null. {action}.", "account")

    failure = check_text(
        getattr(candidate, "username", None), field="username", label="Username", action=action
    )
    if failure:
        return failure

    return check_text(
        getattr(candidate, "password", None),
        field="password",
        label="Password",
        action=action,
        min_length=MIN_PASSWORD_LENGTH if enforce_password_length else None,
    )


def validate_message_text(text: str | None, *, action: str) -> Failure | None:
    return check_text(
        text, field="text", label="Message text", action=action, max_length=MAX_MESSAGE_LENGTH
    )


def validate_message_fields(candidate: Any, *, action: str) -> Failure | None:
    """
    Check a message candidate: present, text non-blank and <= MAX_MESSAGE_LENGTH,
    posted_by present. Whether posted_by names a real account is checked by the service.
    """
    if candidate is None:
        return _invalid(f"Message object is null. {action}.", "message")

    failure = validate_message_text(getattr(candidate, "text", None), action=action)
    if failure:
        return failure

    return check_present(
        getattr(candidate, "posted_by", None), field="posted_by", label="User ID", action=action
    )


def validate_identifier(value: Any, *, field: str, label: str, action: str) -> Failure | None:
    """Ids only need to be present; type coercion happens at the HTTP layer."""
    return check_present(value, field=field, label=label, action=action)
