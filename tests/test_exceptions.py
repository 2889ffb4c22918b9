"""Tests for the session error hierarchy."""

import pytest

from oidc_session import exceptions


@pytest.mark.parametrize(
    "error_cls",
    [
        exceptions.InvalidSubjectError,
        exceptions.InvalidTokenBundleError,
        exceptions.MissingIdentifierError,
        exceptions.InvalidSessionIdError,
        exceptions.SessionNotFoundError,
        exceptions.CorruptSessionError,
        exceptions.StoreUnavailableError,
    ],
)
def test_every_kind_is_a_session_error_with_distinct_code(error_cls):
    error = error_cls("op()", "detail")
    assert isinstance(error, exceptions.SessionError)
    assert error.code != exceptions.SessionError.code


def test_codes_are_unique():
    codes = {cls.code for cls in exceptions.SessionError.__subclasses__()}
    assert len(codes) == len(exceptions.SessionError.__subclasses__())


def test_error_carries_structured_fields():
    error = exceptions.SessionNotFoundError("get_user_session()", "No session for id 'x'.")

    assert error.to_dict() == {
        "code": "SESSION-GUS1-NF01",
        "operation": "get_user_session()",
        "title": "Session not found",
        "detail": "No session for id 'x'.",
    }
    assert str(error) == "SESSION-GUS1-NF01 get_user_session(): Session not found - No session for id 'x'."


def test_code_and_title_can_be_overridden():
    error = exceptions.SessionError("op()", "detail", code="CUSTOM-01", title="Custom")
    assert error.code == "CUSTOM-01"
    assert error.title == "Custom"
    assert exceptions.SessionError.code == "SESSION-GEN1-ER01"
