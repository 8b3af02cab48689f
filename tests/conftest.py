from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from badge_registry.api import badges as badges_api
from badge_registry.main import app
from badge_registry.services import token_service
from badge_registry.services.badge_registry import BadgeRegistry

# Ensure repo root is on sys.path so `import badge_registry` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

ISSUER = "test-issuer"


@pytest.fixture(autouse=True)
def reset_registry(monkeypatch: pytest.MonkeyPatch) -> BadgeRegistry:
    """Give every test a fresh registry owned by ISSUER."""
    fresh = BadgeRegistry(issuer=ISSUER)
    monkeypatch.setattr(badges_api, "registry", fresh)
    return fresh


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def mint_token(username: str = "test-user") -> str:
    """Create a valid ES256 JWT for testing."""
    return token_service.create_access_token(sub=username)


def auth(username: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {mint_token(username)}"}


@pytest.fixture
def issuer_headers() -> dict[str, str]:
    return auth(ISSUER)
