"""Hash-chained deed events, bioload metrics and reward helpers."""

from __future__ import annotations

import dataclasses
import json
import uuid
from dataclasses import dataclass, field
from itertools import pairwise
from typing import Any, Sequence

from fearledger.utils import now_timestamp, sha256

ROH_CEILING = 0.3
DECAY_CEILING = 1.0

_GENESIS_EVENT_ID = str(uuid.UUID(int=0))
_GENESIS_PREV_HASH = "0" * 64


def _sorted_json(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted_json(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted_json(item) for item in value]
    return value


class DeedError(Exception):
    """A deed failed validation."""


class HashMismatchError(DeedError):
    """A deed's hash does not match what was expected."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Hash mismatch: {detail}")
        self.detail = detail


class InvariantViolationError(DeedError):
    """A deed breaks a biophysical or ethical invariant."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invariant violation: {detail}")
        self.detail = detail


@dataclass
class DeedEvent:
    """A deed that commits to the hash of its predecessor."""

    event_id: str
    timestamp: int
    prev_hash: str
    self_hash: str
    actor_id: str
    target_ids: list[str] = field(default_factory=list)
    deed_type: str = ""
    tags: list[str] = field(default_factory=list)
    context_json: Any = field(default_factory=dict)
    ethics_flags: list[str] = field(default_factory=list)
    life_harm_flag: bool = False

    @classmethod
    def create(
        cls,
        prev_hash: str,
        actor_id: str,
        target_ids: list[str],
        deed_type: str,
        tags: list[str],
        context_json: Any,
        ethics_flags: list[str],
        life_harm_flag: bool,
    ) -> "DeedEvent":
        """New event with a random id, the current time and its own hash."""
        event = cls(
            event_id=str(uuid.uuid4()),
            timestamp=now_timestamp(),
            prev_hash=prev_hash,
            self_hash="",
            actor_id=actor_id,
            target_ids=list(target_ids),
            deed_type=deed_type,
            tags=list(tags),
            context_json=context_json,
            ethics_flags=list(ethics_flags),
            life_harm_flag=life_harm_flag,
        )
        event.self_hash = hash_deed(event)
        return event

    @classmethod
    def genesis(cls) -> "DeedEvent":
        """The fixed first event of every chain."""
        event = cls(
            event_id=_GENESIS_EVENT_ID,
            timestamp=0,
            prev_hash=_GENESIS_PREV_HASH,
            self_hash="",
            actor_id="genesis",
            deed_type="genesis",
        )
        event.self_hash = hash_deed(event)
        return event

    def validate_biophysical(self, roh: float, decay: float) -> None:
        """Raise InvariantViolationError if RoH exceeds 0.3 or decay exceeds 1.0."""
        if roh > ROH_CEILING or decay > DECAY_CEILING:
            raise InvariantViolationError("Biophysical ceiling breached")

    def compute_church_reward(self, bioload_delta: float) -> int:
        """CHURCH earned for a clean ecological deed that reduced bioload."""
        if self.life_harm_flag or self.ethics_flags:
            return 0
        if bioload_delta < 0.0 and self.deed_type == "ecological_sustainability":
            return int(abs(bioload_delta) * 100.0)
        return 0

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping in schema field order."""
        return {
            "event_id": self.event_id,
            "timestamp": self.timestamp,
            "prev_hash": self.prev_hash,
            "self_hash": self.self_hash,
            "actor_id": self.actor_id,
            "target_ids": list(self.target_ids),
            "deed_type": self.deed_type,
            "tags": list(self.tags),
            "context_json": _sorted_json(self.context_json),
            "ethics_flags": list(self.ethics_flags),
            "life_harm_flag": self.life_harm_flag,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeedEvent":
        """Build an event from its mapping; raises ValueError on malformed data."""
        try:
            return cls(
                event_id=str(data["event_id"]),
                timestamp=int(data["timestamp"]),
                prev_hash=str(data["prev_hash"]),
                self_hash=str(data["self_hash"]),
                actor_id=str(data["actor_id"]),
                target_ids=list(data["target_ids"]),
                deed_type=str(data["deed_type"]),
                tags=list(data["tags"]),
                context_json=data["context_json"],
                ethics_flags=list(data["ethics_flags"]),
                life_harm_flag=bool(data["life_harm_flag"]),
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"invalid deed event: {exc!r}") from exc


def hash_deed(event: DeedEvent) -> str:
    """Hex SHA-256 of the event's compact JSON form with ``self_hash`` blanked."""
    blank = dataclasses.replace(event, self_hash="")
    serialized = json.dumps(blank.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return sha256(serialized)


def validate_chain(events: Sequence[DeedEvent]) -> bool:
    """True when each event links to the hash of the one before it."""
    return all(current.prev_hash == prev.self_hash for prev, current in pairwise(events))


@dataclass(frozen=True)
class BioloadMetrics:
    """Bioload change and the RoH / decay levels it happened at."""

    bioload_delta: float
    roh: float
    decay: float

    def is_positive(self) -> bool:
        """Bioload went down while staying inside the biophysical ceilings."""
        return self.bioload_delta < 0.0 and self.roh <= ROH_CEILING and self.decay <= DECAY_CEILING

    def to_dict(self) -> dict[str, float]:
        return {"bioload_delta": self.bioload_delta, "roh": self.roh, "decay": self.decay}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BioloadMetrics":
        try:
            return cls(
                bioload_delta=float(data["bioload_delta"]),
                roh=float(data["roh"]),
                decay=float(data["decay"]),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid bioload metrics: {exc!r}") from exc


@dataclass(frozen=True)
class BioloadReducer:
    """Earns CHURCH for reducing bioload."""

    delta: float

    def earn_church(self) -> int:
        if self.delta < 0.0:
            return int(abs(self.delta) * 50.0)
        return 0


@dataclass(frozen=True)
class RepairHero:
    """Grants PWR for high-impact repair work."""

    impact_score: float

    def grant_pwr(self) -> int:
        return 100 if self.impact_score > 0.8 else 0