import pytest

from fearledger.aln_errors import (
    AlnError,
    CommandFailedError,
    InvalidInputError,
    PostgresError,
    RedisError,
    SessionNotFoundError,
)


def test_session_not_found_message():
    assert str(SessionNotFoundError()) == "Session not found"


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (RedisError, "Redis error"),
        (PostgresError, "Postgres error"),
        (InvalidInputError, "Invalid input"),
        (CommandFailedError, "Command failed"),
    ],
)
def test_detailed_messages(cls, prefix):
    err = cls("empty rule")
    assert str(err) == f"{prefix}: empty rule"
    assert err.detail == "empty rule"


@pytest.mark.parametrize(
    "err, message",
    [
        (SessionNotFoundError(), "Session not found"),
        (RedisError("x"), "Redis error: x"),
        (PostgresError("x"), "Postgres error: x"),
        (InvalidInputError("x"), "Invalid input: x"),
        (CommandFailedError("x"), "Command failed: x"),
    ],
)
def test_all_errors_are_aln_errors(err, message):
    assert isinstance(err, AlnError)
    assert str(err) == message