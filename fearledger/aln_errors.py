"""Errors raised by the ALN runtime, its session store and command runner."""

from __future__ import annotations


class AlnError(Exception):
    """Base class of every ALN runtime error."""


class SessionNotFoundError(AlnError):
    """The requested session does not exist."""

    def __init__(self) -> None:
        super().__init__("Session not found")


class _DetailedAlnError(AlnError):
    """An ALN error that carries a detail message after a fixed prefix."""

    _prefix = ""

    def __init__(self, detail: str) -> None:
        super().__init__(f"{self._prefix}: {detail}")
        self.detail = detail


class RedisError(_DetailedAlnError):
    """The session store failed or returned unreadable data."""

    _prefix = "Redis error"


class PostgresError(_DetailedAlnError):
    """The relational store failed."""

    _prefix = "Postgres error"


class InvalidInputError(_DetailedAlnError):
    """An argument was rejected."""

    _prefix = "Invalid input"


class CommandFailedError(_DetailedAlnError):
    """An external command could not be run or exited unsuccessfully."""

    _prefix = "Command failed"