"""Sponsorship grants and their recipients."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Grant:
    """A PWR grant to a recipient."""

    id: str
    recipient_id: str
    amount_pwr: int
    description: str


@dataclass(frozen=True)
class Recipient:
    """An organisation receiving grants for a project."""

    id: str
    name: str
    project: str