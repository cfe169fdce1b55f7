"""Deed events for the append-only, hash-chained moral ledger."""

from __future__ import annotations

import dataclasses
import json
import uuid
from dataclasses import dataclass, field
from typing import Any

from fearledger.utils import compute_sha256_hash, now_timestamp

CHURCH_RECOMMEND_PER_GOOD_DEED = 1
"""Advisory CHURCH recommendation per verified good deed."""

_RECOMMENDED_DEED_TYPES = frozenset(
    {"ecological_sustainability", "homelessness_relief", "math_science_education"}
)


def _sorted_json(value: Any) -> Any:
    """Copy of a JSON value with every object's keys in sorted order."""
    if isinstance(value, dict):
        return {key: _sorted_json(value[key]) for key in sorted(value)}
    if isinstance(value, list):
        return [_sorted_json(item) for item in value]
    return value


def _new_event_id() -> str:
    return str(uuid.uuid4())


@dataclass
class DeedEvent:
    """A single deed recorded in the moral ledger."""

    actor_id: str
    target_ids: list[str]
    deed_type: str
    tags: list[str]
    context_json: Any
    event_id: str = field(default_factory=_new_event_id)
    timestamp: int = field(default_factory=now_timestamp)
    prev_hash: str = ""
    self_hash: str = ""
    ethics_flags: list[str] = field(default_factory=list)
    life_harm_flag: bool = False

    @classmethod
    def ecological_sustainability(cls, actor_id: str, evidence_url: str) -> "DeedEvent":
        """A reforestation / carbon-negative deed backed by an evidence URL."""
        return cls(
            actor_id=actor_id,
            target_ids=[],
            deed_type="ecological_sustainability",
            tags=["reforestation", "carbon_negative"],
            context_json={"evidence_url": evidence_url},
        )

    @classmethod
    def math_science_education(cls, actor_id: str, crate_name: str) -> "DeedEvent":
        """An open-source science library contribution."""
        return cls(
            actor_id=actor_id,
            target_ids=[],
            deed_type="math_science_education",
            tags=["open_source", "rust"],
            context_json={"crate": crate_name, "license": "MIT/Apache-2.0"},
        )

    def finalize_hash_chain(self, prev_hash: str) -> "DeedEvent":
        """Return a copy linked to ``prev_hash`` and carrying its own commitment hash."""
        linked = dataclasses.replace(self, prev_hash=prev_hash)
        return dataclasses.replace(linked, self_hash=linked.compute_self_hash())

    def compute_self_hash(self) -> str:
        """Hex SHA-256 of the compact JSON form of the whole event."""
        serialized = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        return compute_sha256_hash(serialized.encode("utf-8"))

    def church_recommendation(self) -> int:
        """Advisory CHURCH amount; zero for harmful, flagged or other deeds."""
        if self.life_harm_flag or self.ethics_flags:
            return 0
        if self.deed_type in _RECOMMENDED_DEED_TYPES:
            return CHURCH_RECOMMEND_PER_GOOD_DEED
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
                event_id=str(uuid.UUID(data["event_id"])),
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