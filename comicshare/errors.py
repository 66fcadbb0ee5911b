import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 500
    error = "internal_error"
    message = "Internal server error"

    def __init__(self, error=None, message=None, **extra):
        super().__init__(message or self.message)
        if error:
            self.error = error
        if message:
            self.message = message
        self.extra = extra

    def to_dict(self):
        payload = {"error": self.error, "message": self.message}
        payload.update(self.extra)
        return payload


class ValidationError(ApiError):
    status_code = 400
    error = "validation_error"
    message = "Missing or malformed input"


class Unauthenticated(ApiError):
    status_code = 401
    error = "unauthenticated"
    message = "Not authorized"


class Forbidden(ApiError):
    status_code = 403
    error = "forbidden"
    message = "Insufficient permissions"


class NotFound(ApiError):
    status_code = 404
    error = "not_found"
    message = "Resource not found"


class Conflict(ApiError):
    status_code = 409
    error = "conflict"
    message = "Resource already exists"


class RateLimited(ApiError):
    status_code = 429
    error = "too_many_attempts"
    message = "Too many attempts"

    def __init__(self, retry_after, error=None, message=None):
        super().__init__(
            error,
            message or f"Too many attempts. Try again in {retry_after} seconds.",
            retry_after=retry_after,
        )
        self.retry_after = retry_after


def json_body():
    """The request body as a dict; anything else is a malformed request."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("invalid_body", "JSON object expected")
    return data


def _render(exc):
    response = jsonify(exc.to_dict())
    response.status_code = exc.status_code
    if isinstance(exc, RateLimited):
        response.headers["Retry-After"] = str(exc.retry_after)
    return response


def register_error_handlers(app):
    from comicshare import db

    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        db.session.rollback()
        return _render(exc)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc):
        payload = {
            "error": (exc.name or "error").lower().replace(" ", "_"),
            "message": exc.description,
        }
        return jsonify(payload), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        db.session.rollback()
        logger.exception("Unhandled error: %s", exc)
        payload = {
            "error": "internal_error",
            "message": "Internal server error",
            "details": str(exc),
        }
        return jsonify(payload), 500
