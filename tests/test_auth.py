import datetime as dt

import jwt

from app.version import API_PREFIX
from models.user import User, UserSession

SIGNUP = f"{API_PREFIX}/auth/signup"
SIGNIN = f"{API_PREFIX}/auth/signin"
SESSION = f"{API_PREFIX}/auth/session"
SIGNOUT = f"{API_PREFIX}/auth/signout"


def _signup(client, email="new@example.com", password="pw12345"):
    return client.post(SIGNUP, json={
        "email": email,
        "password": password,
        "firstName": "Nia",
        "lastName": "New",
    })


def test_signup_returns_user_and_token(client, app):
    resp = _signup(client)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["error"] is None
    user = body["data"]["user"]
    assert user["email"] == "new@example.com"
    assert user["firstName"] == "Nia"
    assert user["role"] == "user"
    assert body["data"]["token"]
    with app.app_context():
        assert UserSession.query.count() == 1
        stored = User.query.filter_by(email="new@example.com").one()
        assert stored.password_hash != "pw12345"


def test_signup_duplicate_email(client):
    assert _signup(client).status_code == 200
    resp = _signup(client, email="NEW@example.com")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "User already exists"


def test_signup_missing_fields(client):
    resp = client.post(SIGNUP, json={"email": "a@example.com"})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["data"] is None
    assert body["details"]


def test_signup_with_listed_admin_email_gets_admin_role(client):
    resp = _signup(client, email="owner@example.com")
    assert resp.get_json()["data"]["user"]["role"] == "admin"


def test_signin_and_session(client):
    _signup(client)
    resp = client.post(SIGNIN, json={"email": "new@example.com", "password": "pw12345"})
    assert resp.status_code == 200
    token = resp.get_json()["data"]["token"]
    me = client.get(SESSION, headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["data"]["user"]["email"] == "new@example.com"


def test_signin_rejects_bad_password_and_unknown_email(client):
    _signup(client)
    bad = client.post(SIGNIN, json={"email": "new@example.com", "password": "nope"})
    unknown = client.post(SIGNIN, json={"email": "ghost@example.com", "password": "pw12345"})
    for resp in (bad, unknown):
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid credentials"


def test_signout_revokes_session(client, user_headers):
    _, headers = user_headers
    assert client.post(SIGNOUT, headers=headers).status_code == 200
    resp = client.get(SESSION, headers=headers)
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid token"


def test_missing_token(client):
    resp = client.get(SESSION)
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Access token required"


def test_garbage_token(client):
    resp = client.get(SESSION, headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Invalid token"


def test_expired_token(client, app, user_headers):
    user_id, _ = user_headers
    past = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=1)
    token = jwt.encode(
        {"sub": str(user_id), "type": "access", "iat": past - dt.timedelta(days=1), "exp": past},
        app.config["JWT_SECRET"],
        algorithm="HS256",
    )
    resp = client.get(SESSION, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403


def test_valid_token_without_session_row(client, app, user_headers):
    from app.utils.jwt import create_access_token
    user_id, _ = user_headers
    with app.app_context():
        token = create_access_token(user_id)
    resp = client.get(SESSION, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
