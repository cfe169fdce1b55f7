"""Discipline contribution records serialized as JSON lines."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class ScalarContext:
    """HPCC/ERG/TECR scalar context over a discipline window."""

    roh_before: float
    roh_peak: float
    roh_after: float
    decay_min: float
    decay_max: float
    lifeforce_min: float
    lifeforce_max: float
    calm_stable_epochs: int
    overloaded_epochs: int
    recovery_epochs: int
    nano_events: int


@dataclass
class QualitativeContext:
    """Free-form BIOTREE/NATURE/GOAL summaries for the window."""

    biotree: Any
    nature: Any
    goal: Any


@dataclass
class DisciplineContribution:
    """A single discipline contribution record."""

    timestamp_ms_start: int
    timestamp_ms_end: int
    subject_id: str
    discipline_window_id: str
    scalar: ScalarContext
    fear_avg: float
    fear_max: float
    pain_avg: float
    pain_max: float
    qualitative: QualitativeContext | None = None
    subject_purpose: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-ready mapping, keys in field order."""
        return asdict(self)


def discipline_contribution_to_jsonl_line(contrib: DisciplineContribution) -> str:
    """Serialize a contribution as one compact JSON line ending in a newline.

    Raises TypeError or ValueError if the qualitative data is not JSON-serializable.
    """
    return json.dumps(contrib.to_dict(), separators=(",", ":"), ensure_ascii=False) + "\n"