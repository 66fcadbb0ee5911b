from flask import Blueprint

user_bp = Blueprint("user", __name__)

from comicshare.blueprints.user import routes  # noqa: E402,F401
