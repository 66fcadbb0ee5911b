from flask import Blueprint

comics_bp = Blueprint("comics", __name__)

from comicshare.blueprints.comics import routes  # noqa: E402,F401
