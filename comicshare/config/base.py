import os


def _optional_int(name):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


class BaseConfig:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    JWT_SECRET = os.environ.get("JWT_SECRET", SECRET_KEY)
    JWT_ALGORITHM = "HS256"
    ACCESS_TOKEN_EXPIRES_SECONDS = int(os.environ.get("ACCESS_TOKEN_EXPIRES_SECONDS", "3600"))
    # None keeps registration tokens non-expiring.
    REGISTRATION_TOKEN_EXPIRES_SECONDS = _optional_int("REGISTRATION_TOKEN_EXPIRES_SECONDS")

    LOGIN_MAX_ATTEMPTS = int(os.environ.get("LOGIN_MAX_ATTEMPTS", "5"))
    LOGIN_LOCKOUT_SECONDS = int(os.environ.get("LOGIN_LOCKOUT_SECONDS", "60"))
    NAME_MAX_LENGTH = 50

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///comicshare.db"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024

    FCM_PROJECT_ID = os.environ.get("FCM_PROJECT_ID")
    FCM_ACCESS_TOKEN = os.environ.get("FCM_ACCESS_TOKEN")
    FCM_REQUEST_TIMEOUT = float(os.environ.get("FCM_REQUEST_TIMEOUT", "10"))
    NOTIFICATION_WORKERS = int(os.environ.get("NOTIFICATION_WORKERS", "4"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "testing-secret"
    JWT_SECRET = "testing-jwt-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    FCM_PROJECT_ID = None
    FCM_ACCESS_TOKEN = None
    LOG_LEVEL = "DEBUG"


class ProductionConfig(BaseConfig):
    DEBUG = False
