import dataclasses
import json
import logging

import pytest

from fearledger.moral_deed import CHURCH_RECOMMEND_PER_GOOD_DEED, DeedEvent
from fearledger.moral_ledger import (
    MoralLedger,
    log_ecological_cleanup,
    log_open_source_contribution,
    main,
    propose_homelessness_grant,
)
from fearledger.moral_sponsor import SponsorDistributor
from fearledger.moral_validator import HashMismatchError, LifeHarmError

GENESIS = "0" * 64


def _linked(ledger, **kwargs):
    deed = DeedEvent.ecological_sustainability("user:alice", "ipfs://example/receipt.pdf")
    deed = dataclasses.replace(deed, prev_hash=ledger.last_hash(), **kwargs)
    return deed


def _lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_open_creates_empty_ledger(tmp_path):
    path = tmp_path / "ledger.jsonl"
    ledger = MoralLedger.open_or_create(path)
    assert path.exists()
    assert path.read_text() == ""
    assert ledger.last_hash() == GENESIS


def test_fresh_event_is_refused(tmp_path):
    path = tmp_path / "ledger.jsonl"
    ledger = MoralLedger.open_or_create(path)
    with pytest.raises(HashMismatchError) as info:
        ledger.append(DeedEvent.ecological_sustainability("user:alice", "ipfs://example/r"))
    assert info.value.expected == GENESIS
    assert info.value.actual == ""
    assert path.read_text() == ""
    assert ledger.last_hash() == GENESIS


def test_append_linked_event(tmp_path):
    path = tmp_path / "ledger.jsonl"
    ledger = MoralLedger.open_or_create(path)
    deed = _linked(ledger)
    event_id = ledger.append(deed)
    assert event_id == deed.event_id
    [record] = _lines(path)
    assert record["event_id"] == event_id
    assert record["prev_hash"] == GENESIS
    assert record["self_hash"] == ledger.last_hash()
    stored = DeedEvent.from_dict(record)
    assert stored.self_hash == dataclasses.replace(stored, self_hash="").compute_self_hash()


def test_chain_of_two(tmp_path):
    path = tmp_path / "ledger.jsonl"
    ledger = MoralLedger.open_or_create(path)
    ledger.append(_linked(ledger))
    first_head = ledger.last_hash()
    ledger.append(_linked(ledger))
    first, second = _lines(path)
    assert second["prev_hash"] == first["self_hash"] == first_head
    assert ledger.last_hash() == second["self_hash"]


def test_reopen_restores_head(tmp_path):
    path = tmp_path / "ledger.jsonl"
    ledger = MoralLedger.open_or_create(path)
    ledger.append(_linked(ledger))
    ledger.append(_linked(ledger))
    reopened = MoralLedger.open_or_create(path)
    assert reopened.last_hash() == ledger.last_hash()


def test_blank_lines_are_skipped(tmp_path):
    path = tmp_path / "ledger.jsonl"
    ledger = MoralLedger.open_or_create(path)
    ledger.append(_linked(ledger))
    with path.open("a") as fh:
        fh.write("\n   \n")
    assert MoralLedger.open_or_create(path).last_hash() == ledger.last_hash()


def test_malformed_line_raises(tmp_path):
    path = tmp_path / "ledger.jsonl"
    path.write_text("{not json}\n")
    with pytest.raises(ValueError):
        MoralLedger.open_or_create(path)


def test_life_harm_refused_and_not_written(tmp_path):
    path = tmp_path / "ledger.jsonl"
    ledger = MoralLedger.open_or_create(path)
    with pytest.raises(LifeHarmError):
        ledger.append(_linked(ledger, life_harm_flag=True))
    assert path.read_text() == ""


def test_recommendation_is_logged(tmp_path, caplog):
    ledger = MoralLedger.open_or_create(tmp_path / "ledger.jsonl")
    with caplog.at_level(logging.INFO, logger="fearledger.moral_ledger"):
        event_id = ledger.append(_linked(ledger))
    assert f"CHURCH recommendation +{CHURCH_RECOMMEND_PER_GOOD_DEED} for deed {event_id}" in caplog.text


def test_helpers_refuse_unlinked_deeds(tmp_path):
    ledger = MoralLedger.open_or_create(tmp_path / "ledger.jsonl")
    with pytest.raises(HashMismatchError):
        log_ecological_cleanup(ledger, "user:alice", "ipfs://example/r")
    with pytest.raises(HashMismatchError):
        log_open_source_contribution(ledger, "user:alice", "science_crate")


def test_propose_homelessness_grant():
    proposal = propose_homelessness_grant(SponsorDistributor(), "Shelter NPO", 99.0, "cid")
    assert proposal.recipient == "Shelter NPO"
    assert proposal.amount_usd_equiv == 99.0
    assert proposal.purpose == "ecological_sustainability"


def test_main_reports_refusal(tmp_path, capsys):
    path = tmp_path / "ledger.jsonl"
    assert main([str(path)]) == 1
    assert "hash chain broken" in capsys.readouterr().err
    assert path.read_text() == ""