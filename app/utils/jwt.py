import datetime as dt
import uuid
from typing import Dict
import jwt
from flask import current_app


def _secret() -> str:
    return current_app.config["JWT_SECRET"]


def _utcnow():
    return dt.datetime.now(dt.timezone.utc)


def create_access_token(user_id: int) -> str:
    now = _utcnow()
    lifetime = dt.timedelta(days=current_app.config["ACCESS_TOKEN_LIFETIME_DAYS"])
    payload: Dict = {
        "sub": str(user_id),
        "type": "access",
        "iat": now,
        "exp": now + lifetime,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, _secret(), algorithm="HS256")


def token_expiry(token: str) -> dt.datetime:
    """Expiry of an already verified token as a naive UTC datetime."""
    data = jwt.decode(token, _secret(), algorithms=["HS256"], options={"verify_exp": False})
    return dt.datetime.fromtimestamp(data["exp"], dt.timezone.utc).replace(tzinfo=None)


class TokenError(Exception):
    pass


def decode_token(token: str, expected_type: str = "access") -> Dict:
    try:
        data = jwt.decode(token, _secret(), algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise TokenError("token expired")
    except jwt.InvalidTokenError:
        raise TokenError("invalid token")

    if data.get("type") != expected_type:
        raise TokenError(f"expected {expected_type} token")
    return data
