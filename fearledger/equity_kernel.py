"""Grace equity kernel: per-class share bounds and per-route envelopes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_SUM_TOLERANCE = 1e-6


class EquityKernelError(Exception):
    """Loading or validating an equity kernel failed.

    ``kind`` is one of ``"io"``, ``"parse"`` or ``"invariant"``.
    """

    _PREFIXES = {
        "io": "I/O error loading .eco-fairness.aln",
        "parse": "Parse error in .eco-fairness.aln",
        "invariant": "Invalid equity kernel invariant",
    }

    def __init__(self, kind: str, detail: str) -> None:
        super().__init__(f"{self._PREFIXES[kind]}: {detail}")
        self.kind = kind
        self.detail = detail


def _parse_error(detail: str) -> EquityKernelError:
    return EquityKernelError("parse", detail)


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise _parse_error(f"expected an object holding {key!r}")
    if key not in data:
        raise _parse_error(f"missing field {key!r}")
    return data[key]


def _number(data: Any, key: str) -> float:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _parse_error(f"field {key!r} must be a number")
    return float(value)


def _string(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise _parse_error(f"field {key!r} must be a string")
    return value


def _optional_string(data: Any, key: str) -> str | None:
    value = data.get(key) if isinstance(data, dict) else None
    if value is not None and not isinstance(value, str):
        raise _parse_error(f"field {key!r} must be a string or null")
    return value


def _list(data: Any, key: str) -> list[Any]:
    value = _field(data, key)
    if not isinstance(value, list):
        raise _parse_error(f"field {key!r} must be a list")
    return value


def _fmt(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


@dataclass(frozen=True)
class EquityBounds:
    """Minimum and maximum share granted to one equity class."""

    min_share: float
    max_share: float
    description: str | None = None


@dataclass(frozen=True)
class EquityClassSpec:
    """An equity class as written in the configuration file."""

    name: str
    min_share: float
    max_share: float
    description: str | None = None


@dataclass(frozen=True)
class RouteEnvelope:
    """Power and compute fractions a route may occupy."""

    route: str
    max_power_fraction: float
    max_compute_fraction: float


@dataclass(frozen=True)
class GraceEquityKernelSpec:
    """The raw configuration before validation."""

    resource_kind: str
    normalization: str
    classes: list[EquityClassSpec]
    node_routes: list[RouteEnvelope]


def _parse_spec(data: Any) -> GraceEquityKernelSpec:
    classes = [
        EquityClassSpec(
            name=_string(item, "name"),
            min_share=_number(item, "min_share"),
            max_share=_number(item, "max_share"),
            description=_optional_string(item, "description"),
        )
        for item in _list(data, "classes")
    ]
    routes = [
        RouteEnvelope(
            route=_string(item, "route"),
            max_power_fraction=_number(item, "max_power_fraction"),
            max_compute_fraction=_number(item, "max_compute_fraction"),
        )
        for item in _list(data, "node_routes")
    ]
    return GraceEquityKernelSpec(
        resource_kind=_string(data, "resource_kind"),
        normalization=_string(data, "normalization"),
        classes=classes,
        node_routes=routes,
    )


def _invariant(detail: str) -> EquityKernelError:
    return EquityKernelError("invariant", detail)


@dataclass
class GraceEquityKernel:
    """Validated equity bounds keyed by class and envelopes keyed by route."""

    classes: dict[str, EquityBounds]
    resource_kind: str
    normalization: str
    node_routes: dict[str, RouteEnvelope]

    @classmethod
    def from_path(cls, path: str | Path) -> "GraceEquityKernel":
        """Load and validate a JSON-compatible ``.eco-fairness.aln`` file."""
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise EquityKernelError("io", str(exc)) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise _parse_error(str(exc)) from exc
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GraceEquityKernel":
        """Validate a parsed configuration and build the kernel."""
        spec = _parse_spec(data)
        if not spec.classes:
            raise _invariant("grace_equity_kernel.classes must not be empty")

        sum_min = 0.0
        classes: dict[str, EquityBounds] = {}
        for c in spec.classes:
            if not 0.0 <= c.min_share <= 1.0:
                raise _invariant(
                    f"min_share for class '{c.name}' must be in [0.0, 1.0], got {_fmt(c.min_share)}"
                )
            if not 0.0 <= c.max_share <= 1.0:
                raise _invariant(
                    f"max_share for class '{c.name}' must be in [0.0, 1.0], got {_fmt(c.max_share)}"
                )
            if c.min_share > c.max_share:
                raise _invariant(f"min_share > max_share for class '{c.name}'")
            sum_min += c.min_share
            if c.name in classes:
                raise _invariant(f"Duplicate EquityClass name '{c.name}'")
            classes[c.name] = EquityBounds(c.min_share, c.max_share, c.description)

        if sum_min > 1.0 + _SUM_TOLERANCE:
            raise _invariant(f"sum(min_share) must be ≤ 1.0, got {_fmt(sum_min)}")

        node_routes: dict[str, RouteEnvelope] = {}
        for env in spec.node_routes:
            if (
                env.max_power_fraction < 0.0
                or env.max_power_fraction > 1.0
                or env.max_compute_fraction < 0.0
                or env.max_compute_fraction > 1.0
            ):
                raise _invariant(f"Route '{env.route}' envelopes must be in [0.0, 1.0]")
            node_routes[env.route] = env

        return cls(
            classes=classes,
            resource_kind=spec.resource_kind,
            normalization=spec.normalization,
            node_routes=node_routes,
        )

    def bounds_for_class(self, name: str) -> EquityBounds | None:
        """Bounds of a class, or None if it is not configured."""
        return self.classes.get(name)

    def route_envelope(self, route: str) -> RouteEnvelope | None:
        """Envelope of a route, or None if it is not configured."""
        return self.node_routes.get(route)