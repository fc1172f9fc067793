from http import HTTPStatus

import pytest

from social_api.exceptions import ErrorKind, Failure, classify, classify_kind
from social_api.exceptions.classification import CLASSIFICATIONS, GENERIC_UNEXPECTED_MESSAGE


class TestClassifyTable:
    """
    `classify()` is the single mapping from ErrorKind to (status, message).

    Importance:
      - Every error body the API returns is built from it, so status codes and fixed storage
        messages must not drift.
    """

    @pytest.mark.parametrize(
        "kind, status",
        [
            (ErrorKind.RECORD_MISSING, 404),
            (ErrorKind.REQUEST_REJECTED, 400),
            (ErrorKind.INVALID_INPUT, 400),
            (ErrorKind.AUTHENTICATION_FAILED, 401),
            (ErrorKind.DUPLICATE_RESOURCE, 409),
            (ErrorKind.REFERENCE_NOT_FOUND, 400),
            (ErrorKind.DATA_INTEGRITY, 422),
        ],
    )
    def test_caller_kinds_return_the_failure_message(self, kind, status):
        failure = Failure(kind, "Username is blank. Account creation failed.")
        assert classify(failure) == (status, "Username is blank. Account creation failed.")

    @pytest.mark.parametrize(
        "kind, status, message",
        [
            (ErrorKind.STORAGE_CONSTRAINT, 409, "Database constraint violation occurred"),
            (ErrorKind.STORAGE_DUPLICATE_KEY, 409, "A record with this identifier already exists"),
            (ErrorKind.STORAGE_LOCK, 409, "Database resource is currently locked"),
            (ErrorKind.STORAGE_DEADLOCK, 409, "A database deadlock was detected"),
            (ErrorKind.STORAGE_TIMEOUT, 408, "The database query timed out"),
            (ErrorKind.STORAGE_PERMISSION, 403, "Insufficient database permissions for this operation"),
            (ErrorKind.STORAGE_GENERIC, 500, "A database error occurred"),
            (ErrorKind.UNEXPECTED, 500, GENERIC_UNEXPECTED_MESSAGE),
        ],
    )
    def test_storage_kinds_use_fixed_messages(self, kind, status, message):
        # the driver text carried by the failure must never be returned
        failure = Failure(kind, 'duplicate key value violates unique constraint "uq_accounts_username"')
        assert classify(failure) == (status, message)

    def test_table_is_total(self):
        for kind in ErrorKind:
            assert kind in CLASSIFICATIONS

    def test_bare_kind_falls_back_to_reason_phrase(self):
        assert classify(ErrorKind.RECORD_MISSING) == (404, HTTPStatus.NOT_FOUND.phrase)
        assert classify(ErrorKind.STORAGE_TIMEOUT) == (408, "The database query timed out")

    def test_classify_kind_unknown_value_is_unexpected(self):
        assert classify_kind("not-a-kind") is CLASSIFICATIONS[ErrorKind.UNEXPECTED]

    def test_storage_flag(self):
        assert ErrorKind.STORAGE_LOCK.is_storage
        assert not ErrorKind.INVALID_INPUT.is_storage
        assert not ErrorKind.UNEXPECTED.is_storage


class TestFailure:
    def test_failure_is_a_value(self):
        a = Failure(ErrorKind.INVALID_INPUT, "Password is null. Account creation failed.", ("password",))
        b = Failure(ErrorKind.INVALID_INPUT, "Password is null. Account creation failed.", ("password",))
        assert a == b
        assert "password" in str(a)
        assert "invalid_input" in str(a)
