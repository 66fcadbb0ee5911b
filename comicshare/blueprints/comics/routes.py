from flask import jsonify

from comicshare.auth_gate import current_user
from comicshare.blueprints.comics import comics_bp
from comicshare.errors import json_body
from comicshare.services.comic_service import ComicService
from comicshare.services.page_service import PageService


comic_service = ComicService()
page_service = PageService()


@comics_bp.route("/api/comics", methods=["GET"])
def comic_list():
    return jsonify(comic_service.list_comics()), 200


@comics_bp.route("/api/mycomics", methods=["GET"])
def my_comics():
    return jsonify(comic_service.list_for_creator(current_user().id)), 200


@comics_bp.route("/api/comics", methods=["POST"])
def create_comic():
    data = json_body()
    comic_id = comic_service.create(current_user(), data)
    return jsonify({"message": "Comic saved", "comicId": comic_id}), 200


@comics_bp.route("/api/comics/<comic_id>", methods=["GET"])
def comic_detail(comic_id):
    return jsonify(comic_service.get_comic(comic_id)), 200


@comics_bp.route("/api/comics/<comic_id>/info", methods=["GET"])
def comic_info(comic_id):
    return jsonify(comic_service.get_info(comic_id, current_user().id)), 200


@comics_bp.route("/api/comics/<comic_id>", methods=["PUT"])
def update_comic(comic_id):
    data = json_body()
    comic_service.update(comic_id, current_user(), data)
    return jsonify({"success": True, "message": "Comic updated"}), 200


@comics_bp.route("/api/comics/<comic_id>", methods=["DELETE"])
def delete_comic(comic_id):
    comic_service.delete(comic_id, current_user())
    return jsonify({"status": "success"}), 200


@comics_bp.route("/api/comics/pages/<comics_id>", methods=["POST"])
def add_page(comics_id):
    data = json_body()
    page_id, number = page_service.add_page(
        comics_id, current_user(), data.get("rows"), data.get("columns")
    )
    return jsonify({"message": "Page added", "pageId": page_id, "number": number}), 200


@comics_bp.route("/api/comics/pages/<page_id>", methods=["GET"])
def page_detail(page_id):
    return jsonify(page_service.get_page(page_id)), 200


@comics_bp.route("/api/comics/pages/<page_id>", methods=["DELETE"])
def delete_page(page_id):
    page_service.delete_page(page_id, current_user())
    return jsonify({"success": True, "message": "Page deleted"}), 200


@comics_bp.route("/api/comics/pages/images/<page_id>", methods=["POST"])
def add_image(page_id):
    data = json_body()
    image_id = page_service.add_image(
        page_id, current_user(), data.get("cellIndex"), data.get("image")
    )
    return jsonify({"message": "Image added", "imageId": image_id}), 200


@comics_bp.route("/api/comics/pages/images/<image_id>", methods=["PUT"])
def replace_image(image_id):
    data = json_body()
    page_service.replace_image(
        image_id, current_user(), data.get("image"), data.get("cellIndex")
    )
    return jsonify({"success": True, "message": "Image updated"}), 200


@comics_bp.route("/api/comics/pages/images/<image_id>", methods=["DELETE"])
def delete_image(image_id):
    page_service.delete_image(image_id, current_user())
    return jsonify({"success": True, "message": "Image deleted"}), 200
