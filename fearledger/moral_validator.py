"""Validation rules applied before a deed enters the moral ledger."""

from __future__ import annotations

import json

from fearledger.moral_deed import DeedEvent


class ValidationError(Exception):
    """A deed was refused by the ledger."""


class HashMismatchError(ValidationError):
    """The deed does not link to the ledger's current head."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"hash chain broken: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class LifeHarmError(ValidationError):
    """The deed is flagged as harming life."""

    def __init__(self) -> None:
        super().__init__("life harm prohibited")


class EthicsViolationError(ValidationError):
    """The deed carries ethics flags."""

    def __init__(self, flags: list[str]) -> None:
        super().__init__(f"ethics violation: {json.dumps(list(flags), ensure_ascii=False)}")
        self.flags = list(flags)


def validate_new_event(event: DeedEvent, expected_prev_hash: str) -> None:
    """Raise a ValidationError unless the event may be appended.

    Life harm is checked first, then ethics flags, then the hash link; an
    expected hash of ``"genesis"`` skips the link check.
    """
    if event.life_harm_flag:
        raise LifeHarmError()
    if event.ethics_flags:
        raise EthicsViolationError(event.ethics_flags)
    if expected_prev_hash != "genesis" and event.prev_hash != expected_prev_hash:
        raise HashMismatchError(expected_prev_hash, event.prev_hash)