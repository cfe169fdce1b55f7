"""Compliance checks: eco-regulatory envelope and ethics cleanliness."""

from __future__ import annotations

from dataclasses import dataclass, field

from fearledger.chain_deed import DeedEvent, InvariantViolationError


@dataclass(frozen=True)
class EcoRegEnvelope:
    """RoH and decay ceilings imposed by eco regulation."""

    roh_max: float = 0.3
    decay_max: float = 1.0

    def within_bounds(self, roh: float, decay: float) -> bool:
        return roh <= self.roh_max and decay <= self.decay_max


@dataclass(frozen=True)
class EthicsContext:
    """Ethics flags and the life-harm marker of a deed."""

    flags: list[str] = field(default_factory=list)
    life_harm_flag: bool = False

    def is_clean(self) -> bool:
        return not self.life_harm_flag and not self.flags


def validate_deed(event: DeedEvent, roh: float, decay: float) -> None:
    """Raise a DeedError unless the deed is biophysically and ethically compliant."""
    event.validate_biophysical(roh, decay)
    if not EcoRegEnvelope().within_bounds(roh, decay):
        raise InvariantViolationError("EcoReg envelope breach")
    ctx = EthicsContext(flags=list(event.ethics_flags), life_harm_flag=event.life_harm_flag)
    if not ctx.is_clean():
        raise InvariantViolationError("Ethics flags present")