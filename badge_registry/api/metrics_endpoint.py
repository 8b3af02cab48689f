"""Prometheus metrics endpoint.

Prometheus scrapes this every N seconds.  The response is plain text in
the Prometheus exposition format, not JSON:

  # HELP badges_issued_total Badges successfully issued
  # TYPE badges_issued_total counter
  badges_issued_total 12.0
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose all Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
