import logging
from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from app.exceptions import ConflictError, ValidationError
from app.utils.jwt import create_access_token, token_expiry
from models import db
from models.user import User, UserSession

log = logging.getLogger(__name__)


def _admin_emails():
    raw = current_app.config.get("ADMIN_EMAILS") or ""
    return {e.strip().lower() for e in raw.split(",") if e.strip()}


def issue_session(user: User) -> str:
    """Create an access token and persist it as a session row."""
    token = create_access_token(user.id)
    db.session.add(UserSession(user_id=user.id, token=token, expires_at=token_expiry(token)))
    return token


def register_user(email, password, first_name, last_name):
    email = email.strip().lower()
    if User.query.filter_by(email=email).first():
        raise ConflictError("User already exists")
    role = "admin" if email in _admin_emails() else "user"
    user = User(
        email=email,
        password_hash=generate_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    db.session.add(user)
    try:
        db.session.flush()
    except IntegrityError:
        # lost a race against a concurrent signup for the same email
        db.session.rollback()
        raise ConflictError("User already exists")
    token = issue_session(user)
    log.info("user registered id=%s role=%s", user.id, role)
    return user, token


def authenticate(email, password):
    user = User.query.filter_by(email=(email or "").strip().lower()).first()
    if user is None or not check_password_hash(user.password_hash, password or ""):
        raise ValidationError("Invalid credentials")
    return user, issue_session(user)


def revoke_session(token: str) -> int:
    return UserSession.query.filter_by(token=token).delete()


def ensure_admin_user(email, password, first_name="Admin", last_name="User"):
    """Create the admin account, or promote an existing one. Returns the user."""
    if not email or not password:
        raise ValidationError("Admin email and password are required")
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user is None:
        user = User(
            email=email,
            password_hash=generate_password_hash(password),
            first_name=first_name,
            last_name=last_name,
            role="admin",
        )
        db.session.add(user)
        log.info("admin user created")
    elif user.role != "admin":
        user.role = "admin"
        log.info("existing user promoted to admin id=%s", user.id)
    db.session.flush()
    return user
