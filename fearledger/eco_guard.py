"""Eco and fairness guard: route envelopes, equity bounds and RoH safety."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from fearledger.equity_kernel import EquityBounds, GraceEquityKernel, RouteEnvelope


class GuardError(Exception):
    """An action was denied; ``code`` names the violated rule."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


@dataclass(frozen=True)
class RohModel:
    """RoH ceiling and per-axis weights."""

    ceiling: float
    weights: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TsafeEcoEnvelope:
    """Per-route limits on power, cumulative energy and compute fraction."""

    route: str
    max_power: float
    max_cumulative_energy: float
    max_compute_fraction: float


@dataclass(frozen=True)
class EquityClass:
    """A group of subjects that must be treated fairly."""

    name: str


@dataclass(frozen=True)
class ResourceUsageSnapshot:
    """Current resource usage of a node or cell."""

    total_power_budget: float
    total_compute_capacity: float
    current_power_draw: float
    current_cumulative_energy: float
    current_compute_fraction: float
    class_shares: dict[str, float] = field(default_factory=dict)


class XRActionKind(Enum):
    READ_NEURAL_SHARD = "ReadNeuralShard"
    WRITE_NEURAL_SHARD = "WriteNeuralShard"
    PROPOSE_EVOLVE = "ProposeEvolve"
    APPLY_OTA = "ApplyOta"
    XR_ROUTE_STEP = "XRRouteStep"
    SCHEDULE_JOB = "ScheduleJob"
    READ_KEYS = "ReadKeys"
    SIGN_TRANSACTION = "SignTransaction"


@dataclass(frozen=True)
class XRAction:
    """A candidate action submitted to the gate."""

    kind: XRActionKind
    subjectid: str
    route: str
    lifeforcecost: float
    rohbefore: float
    rohafterestimate: float
    equity_class: str | None = None


@dataclass
class EcoFairnessConfig:
    """RoH model, route envelopes and equity kernel used by the guard."""

    roh_model: RohModel
    tsafe_envelopes: dict[str, TsafeEcoEnvelope]
    grace_equity: GraceEquityKernel


def _fmt(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"expected an object holding {key!r}")
    if key not in data:
        raise ValueError(f"missing field {key!r}")
    return data[key]


def _number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} must be a number")
    return float(value)


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _mapping(value: Any, key: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"field {key!r} must be an object")
    return value


def _parse_roh_model(data: Any) -> RohModel:
    weights = _mapping(_field(data, "weights"), "weights")
    return RohModel(
        ceiling=_number(_field(data, "ceiling"), "ceiling"),
        weights={name: _number(w, name) for name, w in weights.items()},
    )


def _parse_tsafe_envelopes(data: Any) -> dict[str, TsafeEcoEnvelope]:
    return {
        key: TsafeEcoEnvelope(
            route=_string(_field(item, "route"), "route"),
            max_power=_number(_field(item, "max_power"), "max_power"),
            max_cumulative_energy=_number(
                _field(item, "max_cumulative_energy"), "max_cumulative_energy"
            ),
            max_compute_fraction=_number(
                _field(item, "max_compute_fraction"), "max_compute_fraction"
            ),
        )
        for key, item in _mapping(data, "envelopes").items()
    }


def _parse_kernel(data: Any) -> GraceEquityKernel:
    """Read a kernel in its own serialized form, without re-validating it."""
    classes = {}
    for name, item in _mapping(_field(data, "classes"), "classes").items():
        description = item.get("description") if isinstance(item, dict) else None
        if description is not None:
            description = _string(description, "description")
        classes[name] = EquityBounds(
            min_share=_number(_field(item, "min_share"), "min_share"),
            max_share=_number(_field(item, "max_share"), "max_share"),
            description=description,
        )
    routes = {
        key: RouteEnvelope(
            route=_string(_field(item, "route"), "route"),
            max_power_fraction=_number(_field(item, "max_power_fraction"), "max_power_fraction"),
            max_compute_fraction=_number(
                _field(item, "max_compute_fraction"), "max_compute_fraction"
            ),
        )
        for key, item in _mapping(_field(data, "node_routes"), "node_routes").items()
    }
    return GraceEquityKernel(
        classes=classes,
        resource_kind=_string(_field(data, "resource_kind"), "resource_kind"),
        normalization=_string(_field(data, "normalization"), "normalization"),
        node_routes=routes,
    )


def _read_json(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


class EcoFairnessGuard:
    """Enforces route eco envelopes, equity bounds and the RoH ceiling."""

    def __init__(self, config: EcoFairnessConfig) -> None:
        self.config = config

    @classmethod
    def from_paths(
        cls,
        roh_path: str | Path,
        tsafe_eco_path: str | Path,
        eco_fairness_path: str | Path,
    ) -> "EcoFairnessGuard":
        """Load the RoH model, route envelopes and equity kernel from JSON files.

        Raises OSError when a file cannot be read and ValueError when it is malformed.
        """
        return cls(
            EcoFairnessConfig(
                roh_model=_parse_roh_model(_read_json(roh_path)),
                tsafe_envelopes=_parse_tsafe_envelopes(_read_json(tsafe_eco_path)),
                grace_equity=_parse_kernel(_read_json(eco_fairness_path)),
            )
        )

    def check(self, action: XRAction, snapshot: ResourceUsageSnapshot) -> None:
        """Raise GuardError unless the action fits every envelope and bound."""
        self._check_route_envelope(action, snapshot)
        self._check_equity_bounds(action, snapshot)
        self._check_roh_ecofairness(action)

    def check_for_gate(self, action: XRAction, snapshot: ResourceUsageSnapshot) -> None:
        """Same as :meth:`check`, for use inside the gate's authorisation flow."""
        self.check(action, snapshot)

    def _check_route_envelope(self, action: XRAction, snapshot: ResourceUsageSnapshot) -> None:
        env = self.config.tsafe_envelopes.get(action.route)
        if env is None:
            raise GuardError(
                "ECO_NO_ROUTE_ENV",
                f"No TsafeEcoEnvelope configured for route '{action.route}' – deny by default",
            )

        projected_power = snapshot.current_power_draw + action.lifeforcecost
        if projected_power > env.max_power:
            raise GuardError(
                "ECO_POWER_EXCEEDED",
                f"Projected power {_fmt(projected_power)}W exceeds max "
                f"{_fmt(env.max_power)}W for route '{action.route}'",
            )

        projected_energy = snapshot.current_cumulative_energy + action.lifeforcecost
        if projected_energy > env.max_cumulative_energy:
            raise GuardError(
                "ECO_ENERGY_EXCEEDED",
                f"Projected cumulative energy {_fmt(projected_energy)}J exceeds max "
                f"{_fmt(env.max_cumulative_energy)}J for route '{action.route}'",
            )

        denom = max(1.0, snapshot.total_compute_capacity)
        projected_compute = snapshot.current_compute_fraction + action.lifeforcecost / denom
        if projected_compute > env.max_compute_fraction:
            raise GuardError(
                "ECO_COMPUTE_EXCEEDED",
                f"Projected compute fraction {projected_compute:.3f} exceeds max "
                f"{env.max_compute_fraction:.3f} for route '{action.route}'",
            )

    def _check_equity_bounds(self, action: XRAction, snapshot: ResourceUsageSnapshot) -> None:
        class_name = action.equity_class
        if class_name is None:
            raise GuardError(
                "ECO_NO_EQUITY_CLASS",
                "XRAction missing equity_class; Auto_Church fairness requires it",
            )

        bounds = self.config.grace_equity.bounds_for_class(class_name)
        if bounds is None:
            raise GuardError(
                "ECO_UNKNOWN_EQUITY_CLASS",
                f"Equity class '{class_name}' not present in GraceEquityKernel",
            )

        current_share = snapshot.class_shares.get(class_name, 0.0)
        denom = max(1.0, snapshot.total_power_budget)
        projected_share = current_share + action.lifeforcecost / denom
        if projected_share > bounds.max_share:
            raise GuardError(
                "ECO_EQUITY_MAX_EXCEEDED",
                f"Equity class '{class_name}' would exceed max_share "
                f"{bounds.max_share:.3f} (projected {projected_share:.3f})",
            )

    def _check_roh_ecofairness(self, action: XRAction) -> None:
        ceiling = self.config.roh_model.ceiling
        if action.rohafterestimate > ceiling:
            raise GuardError(
                "ROH_CEILING",
                f"RoH estimate {action.rohafterestimate:.3f} exceeds ceiling {ceiling:.3f}",
            )
        if action.rohafterestimate > action.rohbefore:
            raise GuardError(
                "ROH_MONOTONE",
                f"RoH monotone safety violated: before {action.rohbefore:.3f}, "
                f"after {action.rohafterestimate:.3f}",
            )