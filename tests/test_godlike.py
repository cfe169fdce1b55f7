from dataclasses import replace

from fearledger.godlike import (
    Envelope,
    GodLikeStatus,
    TreeOfLifeState,
    evaluate_god_like,
    is_corridor_safe,
    is_god_like,
    is_justice_safe,
    is_neurorights_safe,
    is_power_steward_safe,
)


def _state(**overrides):
    base = TreeOfLifeState(
        church=10.0,
        fear=0.4,
        power=5.0,
        tech=1.0,
        bioload=0.5,
        lifeforce=0.8,
        decay=0.2,
        roh=0.1,
        oxygen=0.9,
        blood=0.9,
        hpcc=0.2,
        erg=0.2,
        tecl=0.2,
        biosignature1d=0.5,
    )
    return replace(base, **overrides)


def test_baseline_state_is_god_like():
    env = Envelope()
    assert is_god_like(_state(), env) is True
    assert evaluate_god_like(_state(), env) == GodLikeStatus(True, True, True, True)


def test_roh_above_ceiling_breaks_corridor():
    env = Envelope()
    state = _state(roh=env.roh_max + 0.01)
    assert is_corridor_safe(state, env) is False
    assert is_god_like(state, env) is False


def test_roh_at_ceiling_is_allowed():
    env = Envelope()
    assert is_corridor_safe(_state(roh=env.roh_max), env) is True


def test_fear_outside_band_breaks_corridor():
    env = Envelope(fear_min=0.2, fear_max=0.6)
    assert is_corridor_safe(_state(fear=0.1), env) is False
    assert is_corridor_safe(_state(fear=0.7), env) is False
    assert is_corridor_safe(_state(fear=0.4), env) is True


def test_lifeforce_below_floor_breaks_corridor():
    env = Envelope(lifeforce_min=0.5)
    assert is_corridor_safe(_state(lifeforce=0.4), env) is False


def test_power_without_church():
    env = Envelope()
    assert is_power_steward_safe(_state(church=0.0, power=0.0), env) is True
    assert is_power_steward_safe(_state(church=0.0, power=0.1), env) is False


def test_power_capped_by_k_times_church():
    env = Envelope(power_church_k=2.0)
    assert is_power_steward_safe(_state(church=10.0, power=20.0), env) is True
    assert is_power_steward_safe(_state(church=10.0, power=20.5), env) is False


def test_justice_ceilings():
    env = Envelope()
    assert is_justice_safe(_state(hpcc=env.hpcc_max + 1), env) is False
    assert is_justice_safe(_state(erg=env.erg_max + 1), env) is False
    assert is_justice_safe(_state(tecl=env.tecl_max + 1), env) is False
    assert is_justice_safe(_state(), env) is True


def test_neurorights_band():
    env = Envelope(biosig_min=0.3, biosig_max=0.7)
    assert is_neurorights_safe(_state(biosignature1d=0.2), env) is False
    assert is_neurorights_safe(_state(biosignature1d=0.8), env) is False
    assert is_neurorights_safe(_state(biosignature1d=0.5), env) is True


def test_evaluate_matches_individual_checks():
    env = Envelope()
    state = _state(roh=0.5, biosignature1d=2.0)
    status = evaluate_god_like(state, env)
    assert status.corridor_safe == is_corridor_safe(state, env)
    assert status.neurorights_safe == is_neurorights_safe(state, env)
    assert status.justice_safe == is_justice_safe(state, env)
    assert status.power_steward_safe == is_power_steward_safe(state, env)
    assert status.corridor_safe is False
    assert status.neurorights_safe is False