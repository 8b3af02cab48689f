from __future__ import annotations

from typing import Protocol

from badge_registry.models.badge import BadgeRecord


class BadgeRepo(Protocol):
    def get(self, badge_id: int) -> BadgeRecord | None: ...
    def append(self, record: BadgeRecord) -> int: ...
    def replace(self, badge_id: int, record: BadgeRecord) -> None: ...
    def count(self) -> int: ...


class InMemoryBadgeRepo:
    """Append-only store keyed by sequential ids starting at 1.

    Ids are never reused and records are never removed. Callers are
    responsible for serializing writes (BadgeRegistry holds a lock).
    """

    def __init__(self) -> None:
        self._records: list[BadgeRecord] = []

    def get(self, badge_id: int) -> BadgeRecord | None:
        if badge_id < 1 or badge_id > len(self._records):
            return None
        return self._records[badge_id - 1]

    def append(self, record: BadgeRecord) -> int:
        self._records.append(record)
        return len(self._records)

    def replace(self, badge_id: int, record: BadgeRecord) -> None:
        if self.get(badge_id) is None:
            raise KeyError("badge not found")
        self._records[badge_id - 1] = record

    def count(self) -> int:
        return len(self._records)
