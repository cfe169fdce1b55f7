"""Tree-of-Life state envelope checks for corridor, justice, rights and power."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TreeOfLifeState:
    """Scalar snapshot of a Tree-of-Life site."""

    church: float
    fear: float
    power: float
    tech: float
    bioload: float
    lifeforce: float
    decay: float
    roh: float
    oxygen: float
    blood: float
    hpcc: float
    erg: float
    tecl: float
    biosignature1d: float


@dataclass(frozen=True)
class Envelope:
    """Bounds a state must respect to count as safe."""

    roh_max: float = 0.3
    decay_max: float = 1.0
    lifeforce_min: float = 0.0
    bioload_max: float = 1.0
    fear_min: float = 0.0
    fear_max: float = 1.0
    power_church_k: float = 1.0
    hpcc_max: float = 1.0
    erg_max: float = 1.0
    tecl_max: float = 1.0
    biosig_min: float = 0.0
    biosig_max: float = 1.0


@dataclass(frozen=True)
class GodLikeStatus:
    """Outcome of each individual envelope check."""

    corridor_safe: bool
    neurorights_safe: bool
    justice_safe: bool
    power_steward_safe: bool


def is_corridor_safe(state: TreeOfLifeState, env: Envelope) -> bool:
    """RoH, decay, lifeforce, bioload and fear lie inside the envelope."""
    return (
        state.roh <= env.roh_max
        and state.decay <= env.decay_max
        and state.lifeforce >= env.lifeforce_min
        and state.bioload <= env.bioload_max
        and env.fear_min <= state.fear <= env.fear_max
    )


def is_power_steward_safe(state: TreeOfLifeState, env: Envelope) -> bool:
    """POWER stays within k times CHURCH; without CHURCH there is no POWER."""
    if state.church <= 0.0:
        return state.power <= 0.0
    return state.power <= env.power_church_k * state.church


def is_justice_safe(state: TreeOfLifeState, env: Envelope) -> bool:
    """HPCC, ERG and TECL stay under their ceilings."""
    return state.hpcc <= env.hpcc_max and state.erg <= env.erg_max and state.tecl <= env.tecl_max


def is_neurorights_safe(state: TreeOfLifeState, env: Envelope) -> bool:
    """The 1-D biosignature lies inside its band."""
    return env.biosig_min <= state.biosignature1d <= env.biosig_max


def evaluate_god_like(state: TreeOfLifeState, env: Envelope) -> GodLikeStatus:
    """Run every check and report each result."""
    return GodLikeStatus(
        corridor_safe=is_corridor_safe(state, env),
        neurorights_safe=is_neurorights_safe(state, env),
        justice_safe=is_justice_safe(state, env),
        power_steward_safe=is_power_steward_safe(state, env),
    )


def is_god_like(state: TreeOfLifeState, env: Envelope) -> bool:
    """True only when every check passes."""
    status = evaluate_god_like(state, env)
    return (
        status.corridor_safe
        and status.neurorights_safe
        and status.justice_safe
        and status.power_steward_safe
    )