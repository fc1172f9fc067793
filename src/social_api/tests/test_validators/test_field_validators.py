from types import SimpleNamespace

import pytest

from social_api.exceptions import ErrorKind
from social_api.validators import (
    MAX_MESSAGE_LENGTH,
    MIN_PASSWORD_LENGTH,
    check_text,
    validate_account_fields,
    validate_identifier,
    validate_message_fields,
    validate_message_text,
)

CREATE = "Account creation failed"


def account(username="alice", password="secret"):
    return SimpleNamespace(username=username, password=password)


def message(text="hi", posted_by=1):
    return SimpleNamespace(text=text, posted_by=posted_by)


class TestCheckText:
    def test_accepts_text(self):
        assert check_text("alice", field="username", label="Username", action=CREATE) is None

    def test_null_and_blank_have_distinct_messages(self):
        null = check_text(None, field="username", label="Username", action=CREATE)
        blank = check_text("  \t ", field="username", label="Username", action=CREATE)

        assert null.kind == blank.kind == ErrorKind.INVALID_INPUT
        assert null.message == "Username is null. Account creation failed."
        assert blank.message == "Username is blank. Account creation failed."
        assert null.fields == blank.fields == ("username",)


class TestAccountFields:
    """
    Behavior:
      - registration: null/blank checks + password length >= 4
      - login and lookups: null/blank checks only
    """

    def test_valid_account(self):
        assert validate_account_fields(account(), action=CREATE, enforce_password_length=True) is None

    def test_missing_candidate(self):
        failure = validate_account_fields(None, action=CREATE)
        assert failure.kind == ErrorKind.INVALID_INPUT
        assert failure.message == "Account is null. Account creation failed."

    @pytest.mark.parametrize(
        "candidate, message",
        [
            (account(username=None), "Username is null. Account creation failed."),
            (account(username="   "), "Username is blank. Account creation failed."),
            (account(password=None), "Password is null. Account creation failed."),
            (account(password=" \n "), "Password is blank. Account creation failed."),
            (
                account(password="abc"),
                "Password is too short. It must be at least 4 characters. Account creation failed.",
            ),
        ],
    )
    def test_registration_rejections(self, candidate, message):
        failure = validate_account_fields(candidate, action=CREATE, enforce_password_length=True)
        assert failure is not None
        assert failure.kind == ErrorKind.INVALID_INPUT
        assert failure.message == message

    def test_username_checked_before_password(self):
        failure = validate_account_fields(account(username="", password=None), action=CREATE)
        assert failure.fields == ("username",)

    def test_password_of_exactly_min_length_is_accepted(self):
        candidate = account(password="x" * MIN_PASSWORD_LENGTH)
        assert validate_account_fields(candidate, action=CREATE, enforce_password_length=True) is None

    def test_short_password_is_fine_without_length_rule(self):
        assert validate_account_fields(account(password="abc"), action="Authentication failed") is None


class TestMessageFields:
    def test_valid_message(self):
        assert validate_message_fields(message(), action="Message creation failed") is None

    def test_missing_candidate(self):
        failure = validate_message_fields(None, action="Message creation failed")
        assert failure.message == "Message object is null. Message creation failed."

    @pytest.mark.parametrize(
        "candidate, field",
        [
            (message(text=None), "text"),
            (message(text=""), "text"),
            (message(text="   "), "text"),
            (message(text="x" * (MAX_MESSAGE_LENGTH + 1)), "text"),
            (message(posted_by=None), "posted_by"),
        ],
    )
    def test_rejections(self, candidate, field):
        failure = validate_message_fields(candidate, action="Message creation failed")
        assert failure.kind == ErrorKind.INVALID_INPUT
        assert failure.fields == (field,)

    def test_text_of_exactly_max_length_is_accepted(self):
        assert validate_message_text("x" * MAX_MESSAGE_LENGTH, action="Message update failed") is None

    def test_too_long_message_names_the_limit(self):
        failure = validate_message_text("x" * 256, action="Message update failed")
        assert failure.message == "Message text exceeds maximum length of 255 characters. Message update failed."

    def test_posted_by_zero_is_present(self):
        # existence is the service's business; 0 is not "absent"
        assert validate_message_fields(message(posted_by=0), action="Message creation failed") is None


class TestIdentifier:
    def test_none_is_rejected(self):
        failure = validate_identifier(None, field="message_id", label="Message ID", action="Message retrieval failed")
        assert failure.message == "Message ID is null. Message retrieval failed."

    def test_any_value_is_accepted(self):
        assert validate_identifier(42, field="message_id", label="Message ID", action="x") is None
