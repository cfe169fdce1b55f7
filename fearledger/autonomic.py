"""Map HRV-derived autonomic features into bounded FEAR and bioload deltas.

All outputs are bounded and monotone in risk. They are diagnostic evidence
only and never drive actuation directly.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class AutonomicProfile(Enum):
    """Coarse workload / vigilance profile labels (diagnostic only)."""

    REST = "Rest"
    LIGHT_TASK = "LightTask"
    COGNITIVE_LOAD = "CognitiveLoad"
    PHYSICAL_LOAD = "PhysicalLoad"
    OVERLOAD = "Overload"


# Fraction of the configured overload bonus applied for each profile.
_PROFILE_BONUS_SCALE = {
    AutonomicProfile.OVERLOAD: 1.0,
    AutonomicProfile.PHYSICAL_LOAD: 0.5,
    AutonomicProfile.COGNITIVE_LOAD: 0.5,
    AutonomicProfile.LIGHT_TASK: 0.0,
    AutonomicProfile.REST: 0.0,
}


@dataclass(frozen=True)
class HrvWindow:
    """Normalized HRV window over a short epoch, each band in [0, 1]."""

    lf_hf_norm: float
    entropy_norm: float
    hrv_power_norm: float
    profile_tag: AutonomicProfile


@dataclass(frozen=True)
class AutonomicFearConfig:
    """Weights and bounds for mapping autonomic features to deltas."""

    max_fear_delta: float
    max_bioload_delta: float
    w_lf_hf_fear: float
    w_entropy_fear: float
    w_hrv_power_fear: float
    overload_fear_bonus: float
    w_lf_hf_bioload: float
    w_entropy_bioload: float
    w_hrv_power_bioload: float

    @classmethod
    def default_bounded(cls) -> "AutonomicFearConfig":
        """Conservative defaults suitable for most deployments."""
        return cls(
            max_fear_delta=0.5,
            max_bioload_delta=0.05,
            w_lf_hf_fear=0.5,
            w_entropy_fear=0.25,
            w_hrv_power_fear=0.25,
            overload_fear_bonus=0.1,
            w_lf_hf_bioload=0.5,
            w_entropy_bioload=0.25,
            w_hrv_power_bioload=0.25,
        )


@dataclass(frozen=True)
class AutonomicDeltas:
    """FEAR and bioload deltas produced from one HRV window."""

    delta_fear: float
    delta_bioload: float


def _clamp01(x: float) -> float:
    if math.isnan(x):
        return 0.0
    return min(max(x, 0.0), 1.0)


def _non_negative(x: float) -> float:
    if math.isnan(x):
        return 0.0
    return max(x, 0.0)


def hrv_to_autonomic_deltas(cfg: AutonomicFearConfig, window: HrvWindow) -> AutonomicDeltas:
    """Compute FEAR and bioload deltas from a single HRV window.

    Higher LF/HF, lower entropy and lower HRV power can only raise the deltas.
    """
    r_lf_hf = _clamp01(window.lf_hf_norm)
    r_entropy = 1.0 - _clamp01(window.entropy_norm)
    r_hrv_low = 1.0 - _clamp01(window.hrv_power_norm)

    fear_risk = (
        cfg.w_lf_hf_fear * r_lf_hf
        + cfg.w_entropy_fear * r_entropy
        + cfg.w_hrv_power_fear * r_hrv_low
    )
    profile_bonus = _PROFILE_BONUS_SCALE[window.profile_tag] * cfg.overload_fear_bonus
    delta_fear = cfg.max_fear_delta * _clamp01(fear_risk + profile_bonus)

    bioload_risk = (
        cfg.w_lf_hf_bioload * r_lf_hf
        + cfg.w_entropy_bioload * r_entropy
        + cfg.w_hrv_power_bioload * r_hrv_low
    )
    delta_bioload = cfg.max_bioload_delta * _clamp01(bioload_risk)

    return AutonomicDeltas(delta_fear=delta_fear, delta_bioload=delta_bioload)


def apply_autonomic_to_state(
    current_fear: float,
    current_bioload: float,
    cfg: AutonomicFearConfig,
    window: HrvWindow,
) -> tuple[float, float]:
    """Return the new (fear, bioload) pair after applying the window's deltas.

    Both values are floored at zero; the function has no side effects.
    """
    deltas = hrv_to_autonomic_deltas(cfg, window)
    new_fear = _non_negative(current_fear + deltas.delta_fear)
    new_bioload = _non_negative(current_bioload + deltas.delta_bioload)
    return new_fear, new_bioload