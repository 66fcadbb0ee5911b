from flask import jsonify

from comicshare.blueprints.auth import auth_bp
from comicshare.errors import json_body
from comicshare.services.auth_service import AuthService


auth_service = AuthService()


@auth_bp.route("/api/user/register", methods=["POST"])
def register():
    data = json_body()
    user, token = auth_service.register(
        data.get("login"), data.get("password"), data.get("name")
    )
    return jsonify({"name": user.name, "token": token}), 200


@auth_bp.route("/api/user/auth", methods=["POST"])
def login():
    data = json_body()
    user, token = auth_service.login(data.get("login"), data.get("password"))
    return jsonify({"name": user.name, "token": token}), 200
