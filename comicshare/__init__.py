from flask import Flask
from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()

from comicshare.services.notification_service import NotificationDispatcher  # noqa: E402

notifications = NotificationDispatcher()


def create_app(config_object=None):
    app = Flask(__name__)

    from comicshare.config import DevelopmentConfig

    if isinstance(config_object, dict):
        app.config.from_object(DevelopmentConfig)
        app.config.update(config_object)
    else:
        app.config.from_object(config_object or DevelopmentConfig)

    from comicshare.logging_setup import configure_logging

    configure_logging(app)

    db.init_app(app)
    notifications.init_app(app)

    from comicshare.store import ensure_schema, register_sqlite_pragmas

    with app.app_context():
        register_sqlite_pragmas(db.engine)
        ensure_schema()

    from comicshare.auth_gate import authenticate_request
    from comicshare.errors import register_error_handlers

    app.before_request(authenticate_request)
    register_error_handlers(app)

    from comicshare.blueprints.auth import auth_bp
    from comicshare.blueprints.user import user_bp
    from comicshare.blueprints.comics import comics_bp
    from comicshare.blueprints.social import social_bp
    from comicshare.blueprints.users import users_bp
    from comicshare.blueprints.health import health_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(comics_bp)
    app.register_blueprint(social_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(health_bp)

    return app
