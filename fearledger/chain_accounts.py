"""Token accounts, balance snapshots and ledger configuration."""

from __future__ import annotations

from dataclasses import dataclass

_U64_MAX = 2**64 - 1


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError("amount must not be negative")


@dataclass
class Account:
    """CHURCH and PWR balances held by an owner; arithmetic saturates."""

    id: str
    owner: str
    balance_church: int = 0
    balance_pwr: int = 0

    def credit_church(self, amount: int) -> None:
        _check_amount(amount)
        self.balance_church = min(self.balance_church + amount, _U64_MAX)

    def debit_church(self, amount: int) -> None:
        _check_amount(amount)
        self.balance_church = max(self.balance_church - amount, 0)

    def credit_pwr(self, amount: int) -> None:
        _check_amount(amount)
        self.balance_pwr = min(self.balance_pwr + amount, _U64_MAX)


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balances of one account at a point in time."""

    account_id: str
    church: int
    pwr: int
    timestamp: int


@dataclass(frozen=True)
class LedgerConfig:
    """Ceilings and reward factors for the ledger."""

    roh_max: float = 0.3
    decay_max: float = 1.0
    token_reward_factor: int = 100
    repair_pwr_threshold: float = 0.8