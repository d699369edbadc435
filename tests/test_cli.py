from models import db
from models.user import User


def test_create_admin_command(app, make_user):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-admin", "--email", "Chief@Example.com", "--password", "pw"])
    assert result.exit_code == 0, result.output
    assert "Admin ready: chief@example.com" in result.output
    with app.app_context():
        assert User.query.filter_by(email="chief@example.com").one().role == "admin"


def test_create_admin_promotes_existing_user(app, make_user):
    user_id, _ = make_user(email="member@example.com")
    result = app.test_cli_runner().invoke(args=["create-admin", "--email", "member@example.com", "--password", "pw"])
    assert result.exit_code == 0, result.output
    with app.app_context():
        assert db.session.get(User, user_id).role == "admin"
        assert User.query.count() == 1


def test_create_admin_needs_credentials(app, monkeypatch):
    monkeypatch.setitem(app.config, "ADMIN_EMAIL", None)
    monkeypatch.setitem(app.config, "ADMIN_PASSWORD", None)
    result = app.test_cli_runner().invoke(args=["create-admin"])
    assert result.exit_code != 0
    assert "Admin email and password are required" in result.output


def test_admin_bootstrapped_on_startup(build_app):
    fresh = build_app(ADMIN_EMAIL="root@example.com", ADMIN_PASSWORD="pw")
    with fresh.app_context():
        assert User.query.filter_by(email="root@example.com").one().role == "admin"
