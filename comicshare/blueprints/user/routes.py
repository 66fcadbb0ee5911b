from flask import jsonify

from comicshare.auth_gate import current_user
from comicshare.blueprints.user import user_bp
from comicshare.errors import json_body
from comicshare.services.social_service import SocialService
from comicshare.services.user_service import UserService


user_service = UserService()
social_service = SocialService()


@user_bp.route("/api/user", methods=["GET"])
def get_account():
    return jsonify(user_service.account(current_user())), 200


@user_bp.route("/api/user", methods=["PUT"])
def update_account():
    data = json_body()
    return jsonify(user_service.update(current_user(), data)), 200


@user_bp.route("/api/user/name", methods=["PUT"])
def change_name():
    data = json_body()
    name = user_service.rename(current_user(), data.get("name"))
    return jsonify({"message": "Name changed successfully", "newName": name}), 200


@user_bp.route("/api/user/password", methods=["PUT"])
def change_password():
    data = json_body()
    user_service.change_password(
        current_user(), data.get("currentPassword"), data.get("newPassword")
    )
    return jsonify({"message": "Password changed successfully"}), 200


@user_bp.route("/api/user/avatar", methods=["POST"])
def upload_avatar():
    data = json_body()
    user = user_service.set_avatar(current_user(), data.get("avatar"))
    return jsonify({"message": "Avatar uploaded successfully", "user": user}), 200


@user_bp.route("/api/user/avatar", methods=["DELETE"])
def remove_avatar():
    user = user_service.clear_avatar(current_user())
    return jsonify({"message": "Avatar removed successfully", "user": user}), 200


@user_bp.route("/api/user/fcm_token", methods=["POST"])
def save_fcm_token():
    data = json_body()
    user_service.save_push_token(current_user(), data.get("token"))
    return jsonify({"success": True}), 200


@user_bp.route("/api/user/notification_settings", methods=["PUT"])
def notification_settings():
    data = json_body()
    enabled = user_service.set_notifications_enabled(current_user(), data.get("enabled"))
    return jsonify({"success": True, "notifications_enabled": enabled}), 200


@user_bp.route("/api/user/favorites", methods=["GET"])
def favorites():
    return jsonify(social_service.favorites(current_user())), 200
