from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated identity extracted from a validated JWT.

    Carried through the request via FastAPI's dependency system.
    user_id is the caller identity handed to the registry for its
    issuer/owner checks.
    """

    user_id: str
