"""Eco-grant proposals for sponsoring non-profit projects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EcoGrantProposal:
    """A grant proposal that can be attached to a deed's context."""

    recipient: str
    amount_usd_equiv: float
    proof_hash: str
    purpose: str


@dataclass
class SponsorDistributor:
    """Holds the PWR pool from which grants are proposed."""

    available_pwr: int = 1_000_000

    def propose_grant(
        self, recipient: str, amount_usd_equiv: float, proof_hash: str
    ) -> EcoGrantProposal:
        """Draft an ecological-sustainability grant; the pool is left untouched."""
        return EcoGrantProposal(
            recipient=recipient,
            amount_usd_equiv=amount_usd_equiv,
            proof_hash=proof_hash,
            purpose="ecological_sustainability",
        )