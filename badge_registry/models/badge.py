from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BadgeRecord:
    """A single issued badge.

    name and description are fixed at issuance. owner is replaced (never
    mutated in place) by a transfer, so a reader holding a record always
    sees a complete value.
    """

    name: str
    description: str
    owner: str


@dataclass(frozen=True, slots=True)
class BadgeIssued:
    badge_id: int
    recipient: str


@dataclass(frozen=True, slots=True)
class BadgeTransferred:
    badge_id: int
    new_owner: str


BadgeEvent = BadgeIssued | BadgeTransferred
