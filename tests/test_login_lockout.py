from datetime import timedelta

from comicshare import db
from comicshare.models._ids import utcnow
from comicshare.models.login_attempt import LoginAttempt


def _login(client, login, password):
    return client.post("/api/user/auth", json={"login": login, "password": password})


def test_five_failures_lock_out_the_sixth_attempt(client, make_user):
    make_user("alice", password="secret-pass")
    for _ in range(5):
        assert _login(client, "alice", "wrong").status_code == 401

    resp = _login(client, "alice", "secret-pass")
    assert resp.status_code == 429
    body = resp.get_json()
    assert 0 < body["retry_after"] <= 60
    assert resp.headers["Retry-After"] == str(body["retry_after"])


def test_lockout_clears_after_the_window(app, client, make_user):
    make_user("alice", password="secret-pass")
    for _ in range(5):
        _login(client, "alice", "wrong")
    assert _login(client, "alice", "secret-pass").status_code == 429

    with app.app_context():
        attempt = db.session.get(LoginAttempt, "alice")
        assert attempt.attempts == 5
        attempt.blocked_until = utcnow() - timedelta(seconds=1)
        db.session.commit()

    assert _login(client, "alice", "secret-pass").status_code == 200
    with app.app_context():
        assert db.session.get(LoginAttempt, "alice") is None


def test_lockout_lasts_sixty_seconds(app, client, make_user):
    make_user("alice", password="secret-pass")
    for _ in range(5):
        _login(client, "alice", "wrong")
    with app.app_context():
        attempt = db.session.get(LoginAttempt, "alice")
        window = attempt.blocked_until - attempt.last_attempt
        assert window == timedelta(seconds=60)


def test_successful_login_resets_the_counter(client, make_user):
    make_user("alice", password="secret-pass")
    for _ in range(3):
        _login(client, "alice", "wrong")
    assert _login(client, "alice", "secret-pass").status_code == 200
    for _ in range(4):
        assert _login(client, "alice", "wrong").status_code == 401
    assert _login(client, "alice", "secret-pass").status_code == 200


def test_unknown_login_is_also_rate_limited(client):
    for _ in range(5):
        assert _login(client, "ghost", "whatever").status_code == 404
    assert _login(client, "ghost", "whatever").status_code == 429


def test_lockout_is_per_login(client, make_user):
    make_user("alice", password="secret-pass")
    make_user("bob", password="bob-pass")
    for _ in range(5):
        _login(client, "alice", "wrong")
    assert _login(client, "bob", "bob-pass").status_code == 200


def test_failure_counts_when_row_appears_concurrently(app):
    from comicshare.services.login_attempt_service import LoginAttemptService

    with app.app_context():
        service = LoginAttemptService()
        # look first, so the session has seen no row for this login
        assert service.repository.get("carol") is None
        with db.engine.begin() as conn:
            conn.execute(
                LoginAttempt.__table__.insert().values(
                    login="carol", attempts=1, last_attempt=utcnow()
                )
            )
        service.record_failure("carol")
        db.session.remove()

    with app.app_context():
        assert db.session.get(LoginAttempt, "carol").attempts == 2


def test_increment_sets_lockout_at_the_threshold(app):
    from comicshare.repositories.login_attempt_repository import LoginAttemptRepository

    repository = LoginAttemptRepository()
    now = utcnow()
    blocked_until = now + timedelta(seconds=60)
    with app.app_context():
        for expected in (1, 2):
            attempt = repository.increment("dave", now, 3, blocked_until)
            assert attempt.attempts == expected
            assert attempt.blocked_until is None
        attempt = repository.increment("dave", now, 3, blocked_until)
        assert attempt.attempts == 3
        assert attempt.blocked_until == blocked_until
        db.session.commit()
