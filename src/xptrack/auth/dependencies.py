"""FastAPI authentication dependencies."""

from __future__ import annotations

from dataclasses import dataclass

import jwt
import structlog
from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from xptrack.auth.jwt import verify_token

logger = structlog.get_logger()

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller."""

    user_id: str
    email: str | None = None


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
) -> Identity:
    """Verify the bearer token and return the caller's identity. Raises 401 on failure."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    try:
        payload = verify_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        logger.info("token_rejected", reason=str(e))
        raise HTTPException(status_code=401, detail=str(e)) from e

    return Identity(user_id=str(payload["sub"]), email=payload.get("email"))
