"""Badge registry endpoints.

- POST /v1/badges                      — issue a badge (issuer only)
- POST /v1/badges/{badge_id}/transfer  — transfer a badge (current owner only)
- GET  /v1/badges/{badge_id}           — public lookup
- GET  /v1/badges/count                — public badge counter
- GET  /v1/badges/issuer               — the registry's fixed issuer
- GET  /v1/badges/events               — notification log, oldest first

The caller identity for the registry's checks is the ``sub`` of the
bearer token.  Registry errors map to HTTP as:
  Unauthorized → 403 (authenticated, but not the issuer/owner)
  NotFound     → 404
"""

from __future__ import annotations

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from badge_registry.api.dependencies import require_user
from badge_registry.core.config import SETTINGS
from badge_registry.models.badge import BadgeIssued, BadgeRecord
from badge_registry.models.principal import Principal
from badge_registry.services.badge_registry import (
    BadgeRegistry,
    NotFound,
    Unauthorized,
)

router = APIRouter(prefix="/v1/badges", tags=["badges"])

# --- Module-level registry singleton (created once per process) ---
registry = BadgeRegistry(issuer=SETTINGS.badge_issuer)


# --- Pydantic schemas ---


class BadgeIssueIn(BaseModel):
    name: str
    description: str
    recipient: str


class BadgeTransferIn(BaseModel):
    new_owner: str


class BadgeOut(BaseModel):
    id: int
    name: str
    description: str
    owner: str


class BadgeCountOut(BaseModel):
    badge_count: int


class IssuerOut(BaseModel):
    issuer: str


class BadgeEventOut(BaseModel):
    seq: int
    type: Literal["BadgeIssued", "BadgeTransferred"]
    badge_id: int
    owner: str


def _badge_out(badge_id: int, record: BadgeRecord) -> BadgeOut:
    return BadgeOut(
        id=badge_id,
        name=record.name,
        description=record.description,
        owner=record.owner,
    )


def _required(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise HTTPException(status_code=422, detail=f"{field} must not be empty")
    return value


# --- Endpoints ---
# Static paths are registered before /{badge_id} so they are matched first.


@router.get("/count", response_model=BadgeCountOut)
def get_badge_count() -> BadgeCountOut:
    return BadgeCountOut(badge_count=registry.badge_count)


@router.get("/issuer", response_model=IssuerOut)
def get_issuer() -> IssuerOut:
    return IssuerOut(issuer=registry.issuer)


@router.get("/events", response_model=list[BadgeEventOut])
def list_events(
    after: Annotated[int, Query(ge=0)] = 0,
) -> list[BadgeEventOut]:
    """Return events with sequence number greater than ``after``.

    Consumers poll with the last ``seq`` they processed.
    """
    out = []
    for seq, event in registry.events.since(after):
        if isinstance(event, BadgeIssued):
            out.append(
                BadgeEventOut(
                    seq=seq,
                    type="BadgeIssued",
                    badge_id=event.badge_id,
                    owner=event.recipient,
                )
            )
        else:
            out.append(
                BadgeEventOut(
                    seq=seq,
                    type="BadgeTransferred",
                    badge_id=event.badge_id,
                    owner=event.new_owner,
                )
            )
    return out


@router.post("", response_model=BadgeOut, status_code=status.HTTP_201_CREATED)
def issue_badge(
    body: BadgeIssueIn,
    principal: Annotated[Principal, Depends(require_user)],
) -> BadgeOut:
    """Issue a new badge to ``recipient``. Only the registry issuer may call."""
    name = _required(body.name, "name")
    description = _required(body.description, "description")
    recipient = _required(body.recipient, "recipient")

    try:
        badge_id = registry.issue_badge(
            principal.user_id, name, description, recipient
        )
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e)) from None

    return BadgeOut(id=badge_id, name=name, description=description, owner=recipient)


@router.post("/{badge_id}/transfer", response_model=BadgeOut)
def transfer_badge(
    badge_id: int,
    body: BadgeTransferIn,
    principal: Annotated[Principal, Depends(require_user)],
) -> BadgeOut:
    """Hand a badge to ``new_owner``. Only the current owner may call."""
    new_owner = _required(body.new_owner, "new_owner")

    try:
        record = registry.transfer_badge(principal.user_id, badge_id, new_owner)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except Unauthorized as e:
        raise HTTPException(status_code=403, detail=str(e)) from None

    return _badge_out(badge_id, record)


@router.get("/{badge_id}", response_model=BadgeOut)
def get_badge(badge_id: int) -> BadgeOut:
    record = registry.get_badge(badge_id)
    if record is None:
        raise HTTPException(status_code=404, detail="badge not found")
    return _badge_out(badge_id, record)
