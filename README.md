# fearledger

`fearledger` keeps an append-only, hash-chained record of good deeds and checks
proposed actions against safety and fairness envelopes. It has no third-party
dependencies.

## What is inside

- **Moral ledger** (`fearledger.moral_ledger`, `fearledger.moral_deed`,
  `fearledger.moral_validator`, `fearledger.moral_sponsor`): a JSON Lines file
  in which every `DeedEvent` carries the SHA-256 hash of the deed before it.
  Deeds flagged for life harm or carrying ethics flags are refused. Ecological,
  homelessness-relief and science-education deeds get an advisory CHURCH
  recommendation, which is only logged.
- **Actor ledger** (`fearledger.actor_ledger`): an in-memory chain of
  `ActorDeedEvent`s and `ChurchAccountState`, which scores an actor from
  time-discounted good deeds and harm flags.
- **Chain deeds, compliance and tokens** (`fearledger.chain_deed`,
  `fearledger.chain_compliance`, `fearledger.chain_tokens`,
  `fearledger.chain_accounts`, `fearledger.chain_sponsor`,
  `fearledger.chain_rpc`): deed creation with `DeedEvent.create` and
  `DeedEvent.genesis`, `validate_chain`, RoH ≤ 0.3 and DECAY ≤ 1.0 ceilings,
  CHURCH/TECH reward and harm-burn rules, saturating accounts, grants and
  JSON-RPC 2.0 payload types.
- **Safety envelopes** (`fearledger.godlike`, `fearledger.autonomic`):
  Tree-of-Life corridor, justice, neurorights and POWER ≤ k·CHURCH checks, and a
  mapping from HRV windows to bounded FEAR and bioload deltas.
- **Discipline records** (`fearledger.discipline`): contribution records
  serialized as single JSON lines.
- **Eco-fairness** (`fearledger.equity_kernel`, `fearledger.eco_guard`): a
  validated `GraceEquityKernel` of per-class share bounds and route envelopes,
  and an `EcoFairnessGuard` that checks route power/energy/compute envelopes,
  equity shares, the RoH ceiling and RoH monotonicity.
- **Orchestration models** (`fearledger.aln_branches`, `fearledger.aln_errors`,
  `fearledger.lineage`, `fearledger.scheduler`, `fearledger.topology`,
  `fearledger.observability`): regex, code-snippet, platform and syntax
  branches with `integrate_all`, named command patterns with lineage records,
  a FIFO job queue with an async worker, and plain data models for clusters,
  nodes, events, health and metrics.
- **Helpers** (`fearledger.utils`): SHA-256 hex digests, a one-day exponential
  time discount, Unix time conversion and `init_logging`, which prints
  `[LEVEL] message` lines to standard output.

## Installation

```
pip install fearledger
```

For running the tests:

```
pip install "fearledger[test]"
pytest
```

## Keeping a moral ledger

A deed must name the ledger's current head as its `prev_hash` before it is
appended; the ledger then computes and stores the deed's own hash.

```python
from pathlib import Path

from fearledger.moral_deed import DeedEvent
from fearledger.moral_ledger import MoralLedger

ledger = MoralLedger.open_or_create(Path("moral_ledger.jsonl"))

deed = DeedEvent.ecological_sustainability(
    "user:alice", "https://example.com/reforestation_receipt.pdf"
)
deed.prev_hash = ledger.last_hash()
event_id = ledger.append(deed)
print(event_id, ledger.last_hash())
```

A new file starts from a head of 64 zeros. Reopening the file reads every line
and picks up the chain where it left off. `append` raises a subclass of
`fearledger.moral_validator.ValidationError`: `LifeHarmError`,
`EthicsViolationError` or `HashMismatchError` when the deed does not link to the
head.

## Checking chained deeds

```python
from fearledger.chain_compliance import validate_deed
from fearledger.chain_deed import DeedEvent, validate_chain

genesis = DeedEvent.genesis()
deed = DeedEvent.create(
    genesis.self_hash, "actor", [], "ecological_sustainability", [], {}, [], False
)
assert validate_chain([genesis, deed])
validate_deed(deed, roh=0.1, decay=0.2)   # raises InvariantViolationError if breached
print(deed.compute_church_reward(-0.25))  # 25
```

## Checking safety envelopes

```python
from fearledger.autonomic import (
    AutonomicFearConfig,
    AutonomicProfile,
    HrvWindow,
    hrv_to_autonomic_deltas,
)

cfg = AutonomicFearConfig.default_bounded()
window = HrvWindow(
    lf_hf_norm=0.8,
    entropy_norm=0.3,
    hrv_power_norm=0.4,
    profile_tag=AutonomicProfile.COGNITIVE_LOAD,
)
deltas = hrv_to_autonomic_deltas(cfg, window)
print(deltas.delta_fear, deltas.delta_bioload)
```

`fearledger.godlike.is_god_like(state, env)` reports whether a
`TreeOfLifeState` stays inside an `Envelope` on every axis;
`evaluate_god_like` gives each check separately.

## Eco-fairness guard

`GraceEquityKernel.from_path` loads and validates a JSON `.eco-fairness.aln`
file (classes with `min_share`/`max_share` in [0, 1] summing to at most 1, and
route envelopes), raising `EquityKernelError` otherwise.
`EcoFairnessGuard.from_paths(roh_path, tsafe_eco_path, eco_fairness_path)`
builds a guard from three JSON files, and `check(action, snapshot)` raises a
`GuardError` whose `code` names the rule broken, such as `ECO_POWER_EXCEEDED`,
`ECO_EQUITY_MAX_EXCEEDED` or `ROH_MONOTONE`.

## What this package does not do

- It runs no Git or other external commands and has no HTTP server or
  command-line program.
- It has no persistent session storage; the only file it writes is the moral
  ledger.
- The scheduler's `Worker.execute` only prints and returns a line announcing
  the job; it performs no work.
- `generate_code` returns an annotated snippet string; nothing is generated or
  run.
- Nothing mints tokens automatically: rewards and recommendations are values
  returned or logged for a caller to act on.