import logging
import math
from datetime import timedelta

from flask import current_app

from comicshare.errors import RateLimited
from comicshare.models._ids import utcnow
from comicshare.repositories.login_attempt_repository import LoginAttemptRepository
from comicshare.store import transaction

logger = logging.getLogger(__name__)


class LoginAttemptService:
    """Counts failed logins per login and locks the login out for a while."""

    def __init__(self, repository=None, clock=None):
        self.repository = repository or LoginAttemptRepository()
        self.clock = clock or utcnow

    def ensure_not_locked(self, login):
        attempt = self.repository.get(login)
        if attempt is None or attempt.blocked_until is None:
            return
        now = self.clock()
        if attempt.blocked_until <= now:
            return
        remaining = (attempt.blocked_until - now).total_seconds()
        raise RateLimited(max(1, math.ceil(remaining)))

    def record_failure(self, login):
        max_attempts = current_app.config["LOGIN_MAX_ATTEMPTS"]
        lockout = timedelta(seconds=current_app.config["LOGIN_LOCKOUT_SECONDS"])
        try:
            with transaction():
                now = self.clock()
                attempt = self.repository.increment(
                    login, now, max_attempts, now + lockout
                )
                if attempt.attempts >= max_attempts:
                    logger.warning(
                        "Login %r locked out after %d failed attempts",
                        login,
                        attempt.attempts,
                    )
        except Exception:
            logger.exception("Error tracking failed attempt for %r", login)

    def clear(self, login):
        with transaction():
            self.repository.clear(login)
