"""CHURCH minting, harm burning and TECH rewards."""

from __future__ import annotations

from fearledger.chain_deed import ROH_CEILING, BioloadMetrics, DeedEvent

_TECH_REWARD = 10


def burn_for_harm(current_balance: int, event: DeedEvent) -> int:
    """Balance left after a deed: halved when the deed harmed life."""
    if event.life_harm_flag:
        return current_balance // 2
    return current_balance


def mint_church(event: DeedEvent, metrics: BioloadMetrics) -> int:
    """CHURCH minted for a deed given its bioload metrics."""
    return event.compute_church_reward(metrics.bioload_delta)


def compute_tech_reward(event: DeedEvent, metrics: BioloadMetrics) -> int:
    """Fixed TECH reward for a clean deed within the RoH ceiling."""
    if not event.life_harm_flag and not event.ethics_flags and metrics.roh <= ROH_CEILING:
        return _TECH_REWARD
    return 0