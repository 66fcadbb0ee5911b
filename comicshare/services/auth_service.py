import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from comicshare.errors import Conflict, NotFound, Unauthenticated, ValidationError
from comicshare.models.user import User
from comicshare.repositories.user_repository import UserRepository
from comicshare.services.login_attempt_service import LoginAttemptService
from comicshare.services.token_service import issue_access_token, issue_registration_token
from comicshare.store import transaction

logger = logging.getLogger(__name__)


def _required(value):
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


class AuthService:
    def __init__(self, user_repository=None, login_attempts=None):
        self.user_repository = user_repository or UserRepository()
        self.login_attempts = login_attempts or LoginAttemptService()

    def register(self, login, password, name):
        login, password, name = _required(login), _required(password), _required(name)
        if not login or not password or not name:
            raise ValidationError(
                "missing_fields", "Login, password and name are required"
            )
        login, name = login.strip(), name.strip()
        limit = current_app.config["NAME_MAX_LENGTH"]
        if len(name) > limit:
            raise ValidationError(
                "name_too_long", f"Name is too long (max {limit} characters)"
            )
        try:
            with transaction():
                if self.user_repository.get_by_login(login) is not None:
                    raise Conflict("user_exists", "User already exists")
                user = User(login=login, name=name)
                user.set_password(password)
                self.user_repository.add(user)
        except IntegrityError:
            # a concurrent registration won the unique index on users.login
            raise Conflict("user_exists", "User already exists")
        logger.info("Registered user %s", user.id)
        return user, issue_registration_token(user.id)

    def login(self, login, password):
        login, password = _required(login), _required(password)
        if not login or not password:
            raise ValidationError(
                "missing_fields", "Login and password are required"
            )
        login = login.strip()
        self.login_attempts.ensure_not_locked(login)

        user = self.user_repository.get_by_login(login)
        if user is None:
            self.login_attempts.record_failure(login)
            raise NotFound("user_not_found", "User not found")
        if not user.check_password(password):
            self.login_attempts.record_failure(login)
            raise Unauthenticated("invalid_password", "Invalid password")

        self.login_attempts.clear(login)
        return user, issue_access_token(user.id)
