from sqlalchemy import case, literal
from sqlalchemy.dialects import postgresql, sqlite

from comicshare import db
from comicshare.models.login_attempt import LoginAttempt

_UPSERT_DIALECTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


class LoginAttemptRepository:
    def get(self, login):
        return db.session.get(LoginAttempt, login)

    def get_fresh(self, login):
        return db.session.get(LoginAttempt, login, populate_existing=True)

    def increment(self, login, now, max_attempts, blocked_until):
        """Count one failed attempt in a single statement.

        Concurrent failures for the same login serialize on the row, so each
        one is counted even when the row does not exist yet.
        """
        insert = _UPSERT_DIALECTS.get(db.session.get_bind().dialect.name)
        if insert is None:
            return self._increment_locked(login, now, max_attempts, blocked_until)

        table = LoginAttempt.__table__
        stmt = insert(table).values(
            login=login,
            attempts=1,
            last_attempt=now,
            blocked_until=blocked_until if max_attempts <= 1 else None,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.login],
            set_={
                "attempts": table.c.attempts + 1,
                "last_attempt": now,
                "blocked_until": case(
                    (
                        table.c.attempts + 1 >= max_attempts,
                        literal(blocked_until, table.c.blocked_until.type),
                    ),
                    else_=table.c.blocked_until,
                ),
            },
        )
        db.session.execute(stmt)
        return self.get_fresh(login)

    def _increment_locked(self, login, now, max_attempts, blocked_until):
        attempt = (
            LoginAttempt.query.filter_by(login=login)
            .with_for_update()
            .first()
        )
        if attempt is None:
            attempt = LoginAttempt(login=login, attempts=0)
            db.session.add(attempt)
        attempt.attempts += 1
        attempt.last_attempt = now
        if attempt.attempts >= max_attempts:
            attempt.blocked_until = blocked_until
        db.session.flush()
        return attempt

    def clear(self, login):
        LoginAttempt.query.filter_by(login=login).delete(synchronize_session=False)
        db.session.flush()
