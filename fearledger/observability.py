"""Observability records: events, health status and metrics."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


def _new_id() -> str:
    return str(uuid.uuid4())


class EventKind(Enum):
    JOB_STARTED = "JobStarted"
    JOB_FINISHED = "JobFinished"
    POLICY_VIOLATION = "PolicyViolation"


@dataclass
class Event:
    """An observed event with a random identifier."""

    kind: EventKind
    description: str
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class HealthStatus:
    """Health of a component and an explanatory message."""

    ok: bool
    message: str

    @classmethod
    def healthy(cls, message: str) -> "HealthStatus":
        return cls(ok=True, message=message)

    @classmethod
    def degraded(cls, message: str) -> "HealthStatus":
        return cls(ok=False, message=message)


class MetricKind(Enum):
    THROUGHPUT = "Throughput"
    LATENCY = "Latency"
    ERROR_RATE = "ErrorRate"
    ECO_COST = "EcoCost"


@dataclass
class Metric:
    """A named measurement with its unit and a random identifier."""

    name: str
    kind: MetricKind
    value: float
    unit: str
    id: str = field(default_factory=_new_id)