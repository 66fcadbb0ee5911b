from flask import jsonify

from comicshare.auth_gate import current_user
from comicshare.blueprints.social import social_bp
from comicshare.errors import json_body
from comicshare.services.social_service import SocialService


social_service = SocialService()


@social_bp.route("/api/comics/<comic_id>/like", methods=["POST"])
def toggle_like(comic_id):
    liked = social_service.toggle_like(current_user(), comic_id)
    return jsonify({"liked": liked}), 200


@social_bp.route("/api/comics/<comic_id>/like", methods=["DELETE"])
def unlike(comic_id):
    liked = social_service.unlike(current_user(), comic_id)
    return jsonify({"liked": liked}), 200


@social_bp.route("/api/comics/<comic_id>/like", methods=["GET"])
def like_state(comic_id):
    return jsonify({"liked": social_service.is_liked(current_user(), comic_id)}), 200


@social_bp.route("/api/comics/<comic_id>/likes/count", methods=["GET"])
def like_count(comic_id):
    return jsonify({"count": social_service.like_count(comic_id)}), 200


@social_bp.route("/api/comics/<comic_id>/favorite", methods=["POST"])
def toggle_favorite(comic_id):
    favorited = social_service.toggle_favorite(current_user(), comic_id)
    return jsonify({"favorited": favorited}), 200


@social_bp.route("/api/comics/<comic_id>/favorite", methods=["GET"])
def favorite_state(comic_id):
    return jsonify({"favorited": social_service.is_favorited(current_user(), comic_id)}), 200


@social_bp.route("/api/comics/<comic_id>/comments", methods=["POST"])
def add_comment(comic_id):
    data = json_body()
    comment = social_service.add_comment(current_user(), comic_id, data.get("text"))
    return jsonify(comment), 201


@social_bp.route("/api/comments/<comment_id>", methods=["DELETE"])
def delete_comment(comment_id):
    social_service.delete_comment(current_user(), comment_id)
    return jsonify({"success": True}), 200
