"""Health and readiness endpoints.

  /health (liveness):  "Is this process alive and not deadlocked?"
  /ready (readiness):  "Can this instance handle traffic right now?"

The registry is in-process, so liveness doubles as a registry probe:
reading the badge counter takes the registry lock, and a response
proves the lock is not wedged.
"""

from __future__ import annotations

from fastapi import APIRouter, Response

from badge_registry.api import badges

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    """Liveness probe + registry status.

    Plain def: the registry lock blocks, so this runs in the threadpool
    rather than on the event loop.
    """
    return {
        "status": "ok",
        "checks": {"registry": "ok"},
        "badge_count": badges.registry.badge_count,
    }


@router.get("/ready")
async def ready() -> Response:
    """Readiness probe. No external dependencies, so always ready."""
    return Response(status_code=200)
