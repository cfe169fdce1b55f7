"""In-memory deed ledger with per-actor CHURCH account summaries."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable

from fearledger.utils import compute_sha256_hash, now_timestamp, time_discount_factor

_GOOD_DEED_TAGS = frozenset(
    {"ecological_sustainability", "homelessness_relief", "math_science_education"}
)
_FORGIVENESS_ROLES = frozenset({"Host", "OrganicCPUOwner", "Regulator", "SovereignKernel"})


def _sorted_json(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted_json(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted_json(item) for item in value]
    return value


class InvalidPrevHashError(ValueError):
    """An event does not link to the ledger's last hash."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Invalid prev_hash: expected {expected!r}, got {actual!r}")
        self.expected = expected
        self.actual = actual


@dataclass
class ActorDeedEvent:
    """A deed attributed to an actor."""

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

    def compute_self_hash(self) -> str:
        """Hex SHA-256 of the compact JSON form, leaving out ``self_hash``."""
        payload = {
            "event_id": self.event_id,
            "timestamp": self.timestamp,
            "prev_hash": self.prev_hash,
            "actor_id": self.actor_id,
            "target_ids": list(self.target_ids),
            "deed_type": self.deed_type,
            "tags": list(self.tags),
            "context_json": _sorted_json(self.context_json),
            "ethics_flags": list(self.ethics_flags),
            "life_harm_flag": self.life_harm_flag,
        }
        serialized = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        return compute_sha256_hash(serialized.encode("utf-8"))

    def is_good_deed(self) -> bool:
        """Harmless, unflagged and tagged with a recognised good-deed tag."""
        return (
            not self.life_harm_flag
            and not self.ethics_flags
            and any(tag in _GOOD_DEED_TAGS for tag in self.tags)
        )


class Ledger:
    """Ordered deeds chained through their hashes."""

    def __init__(self) -> None:
        self._events: list[ActorDeedEvent] = []
        self._last_hash = ""

    def append(self, event: ActorDeedEvent) -> None:
        """Add an event; raises InvalidPrevHashError if it breaks the chain."""
        if event.prev_hash != self._last_hash:
            raise InvalidPrevHashError(self._last_hash, event.prev_hash)
        self._events.append(event)
        self._last_hash = event.self_hash

    def last_hash(self) -> str:
        """Hash of the latest event, empty before the first."""
        return self._last_hash

    def events_for_actor(self, actor_id: str) -> list[ActorDeedEvent]:
        """Events of one actor, in ledger order."""
        return [event for event in self._events if event.actor_id == actor_id]


@dataclass(frozen=True)
class ChurchAccountState:
    """Time-discounted standing of an actor derived from the ledger."""

    cumulative_good_deeds: float
    cumulative_harm_flags: int
    eco_score: float
    debt_ceiling: float
    church_balance: float

    @classmethod
    def compute_from_ledger(cls, ledger: Ledger, actor_id: str) -> "ChurchAccountState | None":
        """Summarise an actor's deeds, or None if the actor has none.

        Raises ValueError if an event lies in the future.
        """
        events = ledger.events_for_actor(actor_id)
        if not events:
            return None

        now = now_timestamp()
        good_deeds = 0.0
        harm_flags = 0
        for event in events:
            discount = time_discount_factor(now - event.timestamp)
            if event.is_good_deed():
                good_deeds += discount
            if event.life_harm_flag:
                harm_flags += 1

        good_deeds_norm = min(good_deeds, 1.0)
        harm_norm = min(harm_flags / 10.0, 1.0)
        return cls(
            cumulative_good_deeds=good_deeds,
            cumulative_harm_flags=harm_flags,
            eco_score=0.7 * good_deeds_norm + 0.3 * (1.0 - harm_norm),
            debt_ceiling=1.0 - harm_norm,
            church_balance=good_deeds * 0.1,
        )

    def can_mint_church(self) -> bool:
        """No harm on record and an eco score above one half."""
        return self.cumulative_harm_flags == 0 and self.eco_score > 0.5

    def compute_mint_amount(self) -> float:
        """Symbolic CHURCH amount proportional to the eco score."""
        return self.eco_score * 10.0

    @staticmethod
    def forgiveness_quorum(roles: Iterable[str], required_quorum: int) -> bool:
        """True when enough of the given roles are recognised forgiveness roles."""
        return sum(1 for role in roles if role in _FORGIVENESS_ROLES) >= required_quorum