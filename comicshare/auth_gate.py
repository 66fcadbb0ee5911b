import logging

from flask import g, request

from comicshare.errors import ApiError, Unauthenticated
from comicshare.repositories.user_repository import UserRepository
from comicshare.services.token_service import decode_subject

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({"/api/user/auth", "/api/user/register", "/health"})

user_repository = UserRepository()


class AuthenticationFailed(ApiError):
    status_code = 500
    error = "authentication_failed"
    message = "Authentication failed"


def bearer_token(header):
    if not header:
        raise Unauthenticated("authorization_missing", "Authorization header missing")
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise Unauthenticated(
            "authorization_malformed",
            "Authorization format should be: Bearer [token]",
        )
    return parts[1]


def authenticate_request():
    g.current_user = None
    if request.method == "OPTIONS" or request.path in PUBLIC_PATHS:
        return None

    token = bearer_token(request.headers.get("Authorization"))
    try:
        subject = decode_subject(token)
    except ApiError:
        raise
    except Exception as exc:
        logger.exception("Token verification failed unexpectedly")
        raise AuthenticationFailed(details=str(exc))

    user = user_repository.get_by_id(subject)
    if user is None:
        raise Unauthenticated("user_not_found", "User not found")
    g.current_user = user
    return None


def current_user():
    user = getattr(g, "current_user", None)
    if user is None:
        raise Unauthenticated()
    return user
