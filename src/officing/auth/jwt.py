"""
Verification of access tokens issued by the external identity provider.

The provider signs tokens with a shared secret; the ``sub`` claim is the
user's identifier and is used as-is as ``user_id`` throughout the schema.
"""

from __future__ import annotations

from typing import Any

import jwt

from officing.config import get_settings


def verify_token(token: str) -> dict[str, Any]:
    """
    Decode and validate an access token.

    Raises:
        jwt.InvalidTokenError: bad signature, expired, wrong audience/issuer,
            or missing ``sub``.
    """
    settings = get_settings()
    options = {"require": ["exp", "sub"]}
    kwargs: dict[str, Any] = {
        "algorithms": [settings.jwt_algorithm],
        "audience": settings.jwt_audience,
        "options": options,
    }
    if settings.jwt_issuer:
        kwargs["issuer"] = settings.jwt_issuer
    payload: dict[str, Any] = jwt.decode(token, settings.jwt_secret, **kwargs)
    if not payload["sub"]:
        msg = "Token subject is empty"
        raise jwt.InvalidTokenError(msg)
    return payload
