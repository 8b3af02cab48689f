from __future__ import annotations

import logging

from fastapi import FastAPI

from badge_registry.api.badges import registry
from badge_registry.api.badges import router as badges_router
from badge_registry.api.health import router as health_router
from badge_registry.api.metrics_endpoint import router as metrics_router
from badge_registry.core.config import SETTINGS
from badge_registry.core.logging import setup_logging
from badge_registry.middleware.metrics import MetricsMiddleware
from badge_registry.middleware.request_context import RequestContextMiddleware

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="badge-registry",
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Middleware execution order: last-added runs first (outermost layer).
# RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(badges_router)
app.include_router(health_router)

logger.info(
    "badge-registry started  env=%s log_level=%s port=%d issuer=%s docs=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    registry.issuer,
    "on" if SETTINGS.is_dev else "off",
)
