"""Append-only, hash-chained moral ledger stored as JSON lines."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from fearledger.moral_deed import DeedEvent
from fearledger.moral_sponsor import EcoGrantProposal, SponsorDistributor
from fearledger.moral_validator import ValidationError, validate_new_event
from fearledger.utils import init_logging

_GENESIS_HASH = "0" * 64

_log = logging.getLogger(__name__)


class MoralLedger:
    """A ledger file whose deeds each commit to the previous one's hash."""

    def __init__(self, path: Path, last_hash: str = _GENESIS_HASH) -> None:
        self.path = Path(path)
        self._last_hash = last_hash

    @classmethod
    def open_or_create(cls, path: str | Path) -> "MoralLedger":
        """Open the ledger, creating an empty file if needed, and find its head.

        Raises OSError on I/O failure and ValueError on a malformed line.
        """
        path = Path(path)
        path.touch(exist_ok=True)
        last_hash = _GENESIS_HASH
        with path.open(encoding="utf-8") as fh:
            for lineno, line in enumerate(fh, start=1):
                if not line.strip():
                    continue
                try:
                    event = DeedEvent.from_dict(json.loads(line))
                except ValueError as exc:
                    raise ValueError(f"{path}:{lineno}: {exc}") from exc
                last_hash = event.self_hash
        return cls(path, last_hash)

    def last_hash(self) -> str:
        """Hash of the most recent deed, or the genesis hash."""
        return self._last_hash

    def append(self, event: DeedEvent) -> str:
        """Validate, chain and persist a deed; return its event id.

        The event must already carry the current head as ``prev_hash``.
        Raises ValidationError when refused and OSError on write failure.
        """
        validate_new_event(event, self._last_hash)
        finalized = event.finalize_hash_chain(self._last_hash)
        line = json.dumps(finalized.to_dict(), separators=(",", ":"), ensure_ascii=False)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        self._last_hash = finalized.self_hash

        recommendation = finalized.church_recommendation()
        if recommendation > 0:
            _log.info(
                "CHURCH recommendation +%d for deed %s by %s",
                recommendation,
                finalized.event_id,
                finalized.actor_id,
            )
        return finalized.event_id


def log_ecological_cleanup(ledger: MoralLedger, actor_id: str, evidence_url: str) -> str:
    """Record a verified ecological cleanup deed."""
    return ledger.append(DeedEvent.ecological_sustainability(actor_id, evidence_url))


def log_open_source_contribution(ledger: MoralLedger, actor_id: str, crate_name: str) -> str:
    """Record an open-source science library contribution."""
    return ledger.append(DeedEvent.math_science_education(actor_id, crate_name))


def propose_homelessness_grant(
    distributor: SponsorDistributor,
    recipient: str,
    amount_usd_equiv: float,
    proof_hash: str,
) -> EcoGrantProposal:
    """Draft a grant for a homelessness-relief organisation."""
    return distributor.propose_grant(recipient, amount_usd_equiv, proof_hash)


def main(argv: list[str] | None = None) -> int:
    """Record two example deeds in a ledger file; return the exit status."""
    parser = argparse.ArgumentParser(description="Record example deeds in a moral ledger.")
    parser.add_argument("ledger", nargs="?", default="moral_ledger.jsonl", help="ledger file path")
    args = parser.parse_args(argv)
    init_logging()

    try:
        ledger = MoralLedger.open_or_create(args.ledger)
        log_ecological_cleanup(
            ledger, "user:example", "ipfs://example/reforestation_receipt.pdf"
        )
        log_open_source_contribution(ledger, "user:example", "fearledger")
    except (ValidationError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0