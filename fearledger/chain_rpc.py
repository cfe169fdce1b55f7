"""JSON-RPC 2.0 envelopes and ledger-specific request / result payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fearledger.chain_deed import BioloadMetrics, DeedEvent


def _require(data: dict[str, Any], key: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"missing field {key!r}") from exc


def _str_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list):
        raise ValueError(f"field {key!r} must be a list")
    return [str(item) for item in value]


@dataclass
class JsonRpcRequest:
    """A JSON-RPC request; ``params`` and ``id`` default to null."""

    jsonrpc: str
    method: str
    params: Any = None
    id: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "JsonRpcRequest":
        return cls(
            jsonrpc=str(_require(data, "jsonrpc")),
            method=str(_require(data, "method")),
            params=data.get("params"),
            id=data.get("id"),
        )


@dataclass
class JsonRpcError:
    """Error object carried in a response."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


@dataclass
class JsonRpcResponse:
    """A JSON-RPC response; absent result or error is left out."""

    jsonrpc: str
    id: Any = None
    result: Any = None
    error: JsonRpcError | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.result is not None:
            out["result"] = self.result
        if self.error is not None:
            out["error"] = self.error.to_dict()
        out["id"] = self.id
        return out


@dataclass
class AutoChurchMintParams:
    """Parameters for recording a deed and minting CHURCH for it."""

    prev_hash: str
    actor_id: str
    target_ids: list[str]
    deed_type: str
    tags: list[str]
    context_json: Any
    ethics_flags: list[str]
    life_harm_flag: bool
    bioload_delta: float
    roh: float
    decay: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutoChurchMintParams":
        try:
            return cls(
                prev_hash=str(_require(data, "prev_hash")),
                actor_id=str(_require(data, "actor_id")),
                target_ids=_str_list(_require(data, "target_ids"), "target_ids"),
                deed_type=str(_require(data, "deed_type")),
                tags=_str_list(_require(data, "tags"), "tags"),
                context_json=_require(data, "context_json"),
                ethics_flags=_str_list(_require(data, "ethics_flags"), "ethics_flags"),
                life_harm_flag=bool(_require(data, "life_harm_flag")),
                bioload_delta=float(_require(data, "bioload_delta")),
                roh=float(_require(data, "roh")),
                decay=float(_require(data, "decay")),
            )
        except TypeError as exc:
            raise ValueError(f"invalid mint params: {exc}") from exc


@dataclass
class AutoChurchMintResult:
    """The recorded deed, its metrics and the CHURCH minted."""

    deed: DeedEvent
    metrics: BioloadMetrics
    church_minted: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "deed": self.deed.to_dict(),
            "metrics": self.metrics.to_dict(),
            "church_minted": self.church_minted,
        }


@dataclass
class AutoChurchValidateParams:
    """A deed to validate against given RoH and decay levels."""

    deed: DeedEvent
    roh: float
    decay: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutoChurchValidateParams":
        try:
            return cls(
                deed=DeedEvent.from_dict(_require(data, "deed")),
                roh=float(_require(data, "roh")),
                decay=float(_require(data, "decay")),
            )
        except TypeError as exc:
            raise ValueError(f"invalid validate params: {exc}") from exc


@dataclass
class AutoChurchValidateResult:
    """Outcome of a validation request."""

    valid: bool
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error_message": self.error_message}


@dataclass
class AutoChurchVisualizeParams:
    """Events to visualise."""

    events: list[DeedEvent]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AutoChurchVisualizeParams":
        events = _require(data, "events")
        if not isinstance(events, list):
            raise ValueError("field 'events' must be a list")
        return cls(events=[DeedEvent.from_dict(item) for item in events])


@dataclass
class AutoChurchVisualizeResult:
    """Acknowledges that a visualisation was launched."""

    launched: bool

    def to_dict(self) -> dict[str, Any]:
        return {"launched": self.launched}