from functools import wraps
from flask import request, g
from .responses import error
from app.auth.permissions import role_has_scope
from .jwt import decode_token, TokenError
from models import db
from models.user import User, UserSession


def _bearer_token():
    auth = request.headers.get("Authorization", "")
    if not auth.startswith("Bearer "):
        return None
    return auth.split(" ", 1)[1].strip() or None


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return error("Access token required", status=401)
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError:
            return error("Invalid token", status=403)

        session = UserSession.query.filter_by(token=token).first()
        if session is None or session.is_expired():
            return error("Invalid token", status=401)
        user = db.session.get(User, int(payload["sub"]))
        if user is None or session.user_id != user.id:
            return error("Invalid token", status=401)

        g.user = user
        g.token = token
        request.user = user
        return func(*args, **kwargs)

    return wrapper


def _to_set(obj):
    return set(obj) if isinstance(obj, (list, tuple, set)) else {obj}


def role_required(required):
    """Authorize based on user role or scoped action ("role:action")."""
    required_set = _to_set(required)

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            role = getattr(getattr(g, "user", None), "role", None)
            if not role:
                return error("Role missing", status=403)
            for entry in required_set:
                if ":" in entry:
                    r, action = entry.split(":", 1)
                    if role == r and role_has_scope(role, action):
                        break
                elif role == entry:
                    break
            else:
                if required_set == {"admin"}:
                    return error("Admin access required", status=403)
                return error("Forbidden", status=403)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
