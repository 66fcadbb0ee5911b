import time

from flask import current_app
from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from comicshare.errors import Unauthenticated


def issue_token(user_id, expires_in=None):
    claims = {"sub": str(user_id), "iat": int(time.time())}
    if expires_in is not None:
        claims["exp"] = int(time.time()) + int(expires_in)
    return jwt.encode(
        claims,
        current_app.config["JWT_SECRET"],
        algorithm=current_app.config["JWT_ALGORITHM"],
    )


def issue_access_token(user_id):
    return issue_token(user_id, current_app.config["ACCESS_TOKEN_EXPIRES_SECONDS"])


def issue_registration_token(user_id):
    return issue_token(user_id, current_app.config.get("REGISTRATION_TOKEN_EXPIRES_SECONDS"))


def decode_subject(token):
    """Verify ``token`` and return its subject.

    Raises ``Unauthenticated`` with a distinct error code for an expired token,
    an invalid signature or encoding, invalid claims, and a missing subject.
    Anything else propagates so the caller can treat it as an infrastructure
    failure.
    """
    try:
        payload = jwt.decode(
            token,
            current_app.config["JWT_SECRET"],
            algorithms=[current_app.config["JWT_ALGORITHM"]],
        )
    except ExpiredSignatureError:
        raise Unauthenticated("token_expired", "Token expired")
    except JWTClaimsError:
        raise Unauthenticated("invalid_token_claims", "Invalid token claims")
    except JWTError:
        raise Unauthenticated("invalid_token", "Invalid token")
    subject = payload.get("sub") if isinstance(payload, dict) else None
    if not subject:
        raise Unauthenticated("invalid_token_payload", "Invalid token payload")
    return subject
