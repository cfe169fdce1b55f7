"""Identity lineage: named command patterns and records of their matches."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from typing import Any


class LineageError(Exception):
    """Base error of lineage tracking."""


class InvalidPatternError(LineageError):
    """A command pattern does not compile."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid pattern: {detail}")
        self.detail = detail


class NoMatchError(LineageError):
    """The pattern did not match the target."""

    def __init__(self) -> None:
        super().__init__("No match for target")


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class LineageRecord:
    """Evidence that a named pattern was applied to a text."""

    pattern_name: str
    source_text: str
    matched: bool
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class CommandPattern:
    """A named regular expression for recognising commands."""

    name: str
    raw: str

    def compile(self) -> re.Pattern[str]:
        """Compile the pattern; raises InvalidPatternError when it is invalid."""
        try:
            return re.compile(self.raw)
        except re.error as exc:
            raise InvalidPatternError(str(exc)) from exc


def apply_pattern(pattern: CommandPattern, target: str) -> tuple[LineageRecord, dict[str, Any]]:
    """Match ``target`` anywhere against the pattern and record the lineage.

    Raises InvalidPatternError or NoMatchError.
    """
    if pattern.compile().search(target) is None:
        raise NoMatchError()
    record = LineageRecord(pattern_name=pattern.name, source_text=target, matched=True)
    payload = {"status": "success", "matched": True, "pattern": pattern.name}
    return record, payload