"""Bearer token verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from officing.auth.jwt import verify_token
from officing.config import get_settings
from tests.factories import TEST_USER_ID, make_token


class TestVerifyToken:

    def test_valid_token(self):
        payload = verify_token(make_token())
        assert payload["sub"] == TEST_USER_ID

    def test_expired(self):
        with pytest.raises(jwt.ExpiredSignatureError):
            verify_token(make_token(expires_in=-10))

    def test_wrong_audience(self):
        with pytest.raises(jwt.InvalidAudienceError):
            verify_token(make_token(aud="someone-else"))

    def test_wrong_secret(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": TEST_USER_ID, "aud": settings.jwt_audience,
             "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "not-the-secret-but-long-enough-for-hs256",
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidSignatureError):
            verify_token(token)

    def test_missing_subject(self):
        settings = get_settings()
        token = jwt.encode(
            {"aud": settings.jwt_audience, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(jwt.MissingRequiredClaimError):
            verify_token(token)

    def test_empty_subject(self):
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(make_token(user_id=""))
