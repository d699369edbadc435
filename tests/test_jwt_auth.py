import datetime as dt

import jwt
import pytest

from app.utils.jwt import TokenError, create_access_token, decode_token, token_expiry
from models import utcnow


def test_access_token_claims(app):
    with app.app_context():
        token = create_access_token(42)
        payload = decode_token(token)
    assert payload["sub"] == "42"
    assert payload["type"] == "access"
    assert payload["jti"]
    lifetime = payload["exp"] - payload["iat"]
    assert lifetime == app.config["ACCESS_TOKEN_LIFETIME_DAYS"] * 86400


def test_tokens_are_unique(app):
    with app.app_context():
        assert create_access_token(1) != create_access_token(1)


def test_wrong_type_rejected(app):
    with app.app_context():
        token = jwt.encode(
            {"sub": "1", "type": "refresh", "exp": dt.datetime.now(dt.timezone.utc) + dt.timedelta(hours=1)},
            app.config["JWT_SECRET"],
            algorithm="HS256",
        )
        with pytest.raises(TokenError):
            decode_token(token, expected_type="access")


def test_foreign_signature_rejected(app):
    token = jwt.encode({"sub": "1", "type": "access"}, "some-other-secret", algorithm="HS256")
    with app.app_context():
        with pytest.raises(TokenError):
            decode_token(token)


def test_token_expiry_matches_claim(app):
    with app.app_context():
        token = create_access_token(7)
        expires = token_expiry(token)
    remaining = expires - utcnow()
    assert dt.timedelta(days=6) < remaining <= dt.timedelta(days=7)


def test_timestamps_are_naive_utc():
    now = utcnow()
    assert now.tzinfo is None
    aware = dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    assert abs(aware - now) < dt.timedelta(seconds=5)
