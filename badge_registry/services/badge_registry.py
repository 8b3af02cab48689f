"""Badge issuance and ownership registry.

A single issuer, fixed when the registry is created, mints sequentially
numbered badges and assigns them to recipients.  The current owner of a
badge (and nobody else) may hand it to a new owner.

Caller identity is an explicit argument of every mutating call.  The
HTTP layer derives it from the bearer token; tests pass plain strings.

Both mutations run under one lock: the counter bump, the record write
and the event append happen together or not at all.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from badge_registry.core.metrics import (
    BADGE_COUNT,
    BADGE_REJECTIONS,
    BADGES_ISSUED,
    BADGES_TRANSFERRED,
)
from badge_registry.models.badge import BadgeIssued, BadgeRecord, BadgeTransferred
from badge_registry.repos.badge_repo import BadgeRepo, InMemoryBadgeRepo
from badge_registry.services.event_log import EventLog

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base class for rejected registry calls. State is never modified."""


class Unauthorized(RegistryError):
    pass


class NotFound(RegistryError):
    pass


class BadgeRegistry:
    def __init__(
        self,
        issuer: str,
        *,
        repo: BadgeRepo | None = None,
        events: EventLog | None = None,
    ) -> None:
        self._issuer = issuer
        self._repo: BadgeRepo = repo if repo is not None else InMemoryBadgeRepo()
        self._events = events if events is not None else EventLog()
        # Reentrant: event listeners run inside the lock and may read back.
        self._lock = threading.RLock()

    @property
    def issuer(self) -> str:
        return self._issuer

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def badge_count(self) -> int:
        with self._lock:
            return self._repo.count()

    def get_badge(self, badge_id: int) -> BadgeRecord | None:
        with self._lock:
            return self._repo.get(badge_id)

    def issue_badge(
        self,
        caller: str,
        name: str,
        description: str,
        recipient: str,
    ) -> int:
        """Mint a new badge owned by ``recipient`` and return its id.

        Raises Unauthorized unless ``caller`` is the registry's issuer.
        """
        if caller != self._issuer:
            logger.warning(
                "Issue rejected: caller=%s is not the issuer",
                caller,
                extra={"user_id": caller},
            )
            BADGE_REJECTIONS.labels(operation="issue", reason="unauthorized").inc()
            raise Unauthorized("only the issuer can issue badges")

        with self._lock:
            badge_id = self._repo.append(
                BadgeRecord(name=name, description=description, owner=recipient)
            )
            self._events.append(BadgeIssued(badge_id=badge_id, recipient=recipient))
            BADGE_COUNT.set(badge_id)
            BADGES_ISSUED.inc()

        logger.info(
            "Badge issued id=%d recipient=%s",
            badge_id,
            recipient,
            extra={"badge_id": badge_id},
        )
        return badge_id

    def transfer_badge(
        self, caller: str, badge_id: int, new_owner: str
    ) -> BadgeRecord:
        """Hand badge ``badge_id`` to ``new_owner`` and return the updated record.

        Raises NotFound for an unknown id and Unauthorized unless
        ``caller`` currently owns the badge.
        """
        reason = ""
        updated: BadgeRecord | None = None
        with self._lock:
            record = self._repo.get(badge_id)
            if record is None:
                reason = "not_found"
            elif record.owner != caller:
                reason = "unauthorized"
            else:
                updated = replace(record, owner=new_owner)
                self._repo.replace(badge_id, updated)
                self._events.append(
                    BadgeTransferred(badge_id=badge_id, new_owner=new_owner)
                )
                BADGES_TRANSFERRED.inc()

        if updated is None:
            logger.warning(
                "Transfer rejected: badge=%d caller=%s reason=%s",
                badge_id,
                caller,
                reason,
                extra={"badge_id": badge_id, "user_id": caller},
            )
            BADGE_REJECTIONS.labels(operation="transfer", reason=reason).inc()
            if reason == "not_found":
                raise NotFound(f"badge {badge_id} does not exist")
            raise Unauthorized("only the current owner can transfer a badge")

        logger.info(
            "Badge transferred id=%d new_owner=%s",
            badge_id,
            new_owner,
            extra={"badge_id": badge_id},
        )
        return updated
