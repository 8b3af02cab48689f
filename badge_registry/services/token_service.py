"""JWT access token creation and validation (ES256).

The registry trusts whatever identity the caller presents, so this is
the one place that decides who the caller is.  The ``sub`` claim becomes
the caller identity for issuer and owner checks.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from badge_registry.core.config import SETTINGS

# ---------------------------------------------------------------------------
# Key management
# ---------------------------------------------------------------------------
# Ephemeral EC key pair generated on import: tokens do not survive a
# restart.
_private_key = ec.generate_private_key(ec.SECP256R1())
_public_key = _private_key.public_key()

ALGORITHM = "ES256"
ISSUER = "badge-registry"
AUDIENCE = "badge-registry"


def create_access_token(
    *,
    sub: str,
    ttl_min: int | None = None,
) -> str:
    """Build and sign a JWT access token (sub, iss, aud, exp, iat, jti)."""
    now = datetime.now(UTC)
    ttl = ttl_min if ttl_min is not None else SETTINGS.token_ttl_min
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "exp": now + timedelta(minutes=ttl),
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and claims, return the payload.

    Pins algorithm to ES256 to prevent alg:none and alg-switching attacks.

    Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )
