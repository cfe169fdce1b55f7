"""Topology model: branches, clusters, nodes and the safety policy."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum


def _new_id() -> str:
    return str(uuid.uuid4())


class BranchKind(Enum):
    REGEX = "Regex"
    CODEX = "Codex"
    SYSTEM = "System"
    LANGUAGE = "Language"
    DEVOPS = "Devops"


@dataclass
class Branch:
    """A named integration branch."""

    name: str
    kind: BranchKind
    description: str


class ClusterRole(Enum):
    MASTER = "Master"
    WORKER = "Worker"
    VALIDATOR = "Validator"
    STORAGE = "Storage"


@dataclass
class Cluster:
    """A cluster with a random identifier and default eco/ethical profiles."""

    name: str
    role: ClusterRole
    id: str = field(default_factory=_new_id)
    eco_profile: str = "eco_friendly"
    ethical_profile: str = "harm_aware_safe"


class NodeKind(Enum):
    CPU = "Cpu"
    GPU = "Gpu"
    AR_VR = "ArVr"
    STORAGE = "Storage"


@dataclass
class Node:
    """A compute node belonging to a cluster."""

    cluster_id: str
    kind: NodeKind
    id: str = field(default_factory=_new_id)
    capacity_score: int = 100
    eco_cost_score: int = 10


@dataclass(frozen=True)
class SafetyPolicy:
    """Safety requirements; all enabled by default."""

    no_harm_to_life: bool = True
    eco_priority: bool = True
    transparency_required: bool = True