"""FastAPI authentication dependencies."""

from __future__ import annotations

from dataclasses import dataclass

import jwt
import structlog
from fastapi import HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from officing.auth.jwt import verify_token
from officing.db.models import USER_ID_LENGTH

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Pre-authenticated principal."""

    id: str
    email: str | None = None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),  # noqa: B008
) -> CurrentUser:
    """
    Verify the bearer token and return the caller.

    Raises 401 before any data access when the token is missing or invalid.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="No Authorization header")
    try:
        payload = verify_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=f"Unauthorized: {e}") from e

    user_id = str(payload["sub"])
    if len(user_id) > USER_ID_LENGTH:
        raise HTTPException(status_code=401, detail="Unauthorized: subject too long")

    structlog.contextvars.bind_contextvars(user_id=user_id)
    return CurrentUser(id=user_id, email=payload.get("email"))
