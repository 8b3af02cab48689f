"""Demo: issue and transfer a badge through the HTTP API using TestClient.

Run with:
    python scripts/demo_badge_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from badge_registry.api.badges import registry
from badge_registry.main import app
from badge_registry.services import token_service


def _auth(user: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.create_access_token(sub=user)}"}


def main() -> None:
    client = TestClient(app)
    issuer = registry.issuer

    # ── Step 1: issuer issues a badge to alice ──────────────────────
    r = client.post(
        "/v1/badges",
        json={
            "name": "Rust-101",
            "description": "Completed module",
            "recipient": "alice",
        },
        headers=_auth(issuer),
    )
    badge_id = r.json()["id"]
    print(
        f"1. POST /v1/badges (issuer)        → {r.status_code}  "
        f"id={badge_id}"
    )

    # ── Step 2: someone else tries to issue ─────────────────────────
    r = client.post(
        "/v1/badges",
        json={"name": "Fake", "description": "Nope", "recipient": "carol"},
        headers=_auth("carol"),
    )
    print(
        f"2. POST /v1/badges (carol)         → {r.status_code}  "
        f"{r.json()['detail']}"
    )

    # ── Step 3: alice transfers to bob ──────────────────────────────
    r = client.post(
        f"/v1/badges/{badge_id}/transfer",
        json={"new_owner": "bob"},
        headers=_auth("alice"),
    )
    print(
        f"3. POST transfer (alice → bob)     → {r.status_code}  "
        f"owner={r.json()['owner']}"
    )

    # ── Step 4: alice tries again ───────────────────────────────────
    r = client.post(
        f"/v1/badges/{badge_id}/transfer",
        json={"new_owner": "carol"},
        headers=_auth("alice"),
    )
    print(
        f"4. POST transfer (alice, stale)    → {r.status_code}  "
        f"{r.json()['detail']}"
    )

    # ── Step 5: read back ───────────────────────────────────────────
    r = client.get(f"/v1/badges/{badge_id}")
    print(f"5. GET  /v1/badges/{badge_id}              → {r.status_code}  {r.json()}")

    r = client.get("/v1/badges/events")
    for event in r.json():
        print(f"   event #{event['seq']}: {event['type']} {event}")

    print("\nAll steps completed.")


if __name__ == "__main__":
    main()
