import dataclasses
import uuid

import pytest

from fearledger.actor_ledger import (
    ActorDeedEvent,
    ChurchAccountState,
    InvalidPrevHashError,
    Ledger,
)
from fearledger.utils import now_timestamp


def _deed(actor="test", deed_type="test", tags=(), timestamp=0, prev_hash="",
          ethics_flags=(), life_harm_flag=False):
    deed = ActorDeedEvent(
        event_id=str(uuid.uuid4()),
        timestamp=timestamp,
        prev_hash=prev_hash,
        self_hash="",
        actor_id=actor,
        target_ids=[],
        deed_type=deed_type,
        tags=list(tags),
        context_json={},
        ethics_flags=list(ethics_flags),
        life_harm_flag=life_harm_flag,
    )
    deed.self_hash = deed.compute_self_hash()
    return deed


def _append(ledger, **kwargs):
    deed = _deed(prev_hash=ledger.last_hash(), **kwargs)
    ledger.append(deed)
    return deed


def test_ledger_append_and_hash():
    ledger = Ledger()
    deed = _deed()
    ledger.append(deed)
    assert ledger.last_hash() == deed.self_hash


def test_account_compute_case_inputs():
    ledger = Ledger()
    deed = _deed(deed_type="ecological_sustainability", tags=["tree_planting"])
    ledger.append(deed)
    assert deed.is_good_deed() is False
    state = ChurchAccountState.compute_from_ledger(ledger, "test")
    assert state.cumulative_good_deeds == 0.0
    assert state.cumulative_harm_flags == 0
    assert state.eco_score == pytest.approx(0.3)
    assert state.can_mint_church() is False
    assert state.compute_mint_amount() == pytest.approx(3.0)


def test_recent_good_deed_allows_minting():
    ledger = Ledger()
    _append(ledger, tags=["ecological_sustainability"], timestamp=now_timestamp())
    state = ChurchAccountState.compute_from_ledger(ledger, "test")
    assert state.cumulative_good_deeds == pytest.approx(1.0, rel=1e-3)
    assert state.eco_score == pytest.approx(1.0, rel=1e-3)
    assert state.debt_ceiling == 1.0
    assert state.church_balance == pytest.approx(0.1, rel=1e-3)
    assert state.can_mint_church() is True
    assert state.compute_mint_amount() == pytest.approx(10.0, rel=1e-3)


def test_good_deeds_norm_is_capped():
    ledger = Ledger()
    for _ in range(2):
        _append(ledger, tags=["homelessness_relief"], timestamp=now_timestamp())
    state = ChurchAccountState.compute_from_ledger(ledger, "test")
    assert state.cumulative_good_deeds == pytest.approx(2.0, rel=1e-3)
    assert state.eco_score == pytest.approx(1.0, rel=1e-3)
    assert state.church_balance == pytest.approx(0.2, rel=1e-3)


def test_harm_blocks_minting():
    ledger = Ledger()
    deed = _append(ledger, tags=["ecological_sustainability"], timestamp=now_timestamp(),
                   life_harm_flag=True)
    assert deed.is_good_deed() is False
    state = ChurchAccountState.compute_from_ledger(ledger, "test")
    assert state.cumulative_harm_flags == 1
    assert state.debt_ceiling == pytest.approx(0.9)
    assert state.eco_score == pytest.approx(0.27)
    assert state.can_mint_church() is False


def test_harm_norm_caps_at_ten():
    ledger = Ledger()
    for _ in range(12):
        _append(ledger, life_harm_flag=True)
    state = ChurchAccountState.compute_from_ledger(ledger, "test")
    assert state.cumulative_harm_flags == 12
    assert state.debt_ceiling == 0.0
    assert state.eco_score == 0.0


def test_ethics_flag_is_not_good_deed():
    assert _deed(tags=["math_science_education"], ethics_flags=["x"]).is_good_deed() is False
    assert _deed(tags=["math_science_education"]).is_good_deed() is True


def test_unknown_actor_has_no_state():
    ledger = Ledger()
    _append(ledger)
    assert ChurchAccountState.compute_from_ledger(ledger, "nobody") is None


def test_future_event_raises():
    ledger = Ledger()
    _append(ledger, timestamp=now_timestamp() + 10_000)
    with pytest.raises(ValueError):
        ChurchAccountState.compute_from_ledger(ledger, "test")


def test_append_rejects_broken_chain():
    ledger = Ledger()
    first = _append(ledger)
    with pytest.raises(InvalidPrevHashError) as info:
        ledger.append(_deed(prev_hash="wrong"))
    assert info.value.expected == first.self_hash
    assert info.value.actual == "wrong"
    assert ledger.last_hash() == first.self_hash
    assert ledger.events_for_actor("test") == [first]


def test_events_for_actor_filters_in_order():
    ledger = Ledger()
    a1 = _append(ledger, actor="a")
    _append(ledger, actor="b")
    a2 = _append(ledger, actor="a")
    assert ledger.events_for_actor("a") == [a1, a2]
    assert ledger.events_for_actor("c") == []


def test_self_hash_excluded_from_hash():
    deed = _deed()
    assert dataclasses.replace(deed, self_hash="other").compute_self_hash() == deed.self_hash
    assert dataclasses.replace(deed, actor_id="other").compute_self_hash() != deed.self_hash


def test_forgiveness_quorum():
    roles = ["Host", "Regulator", "Visitor"]
    assert ChurchAccountState.forgiveness_quorum(roles, 2) is True
    assert ChurchAccountState.forgiveness_quorum(roles, 3) is False
    assert ChurchAccountState.forgiveness_quorum([], 0) is True