"""JSON shapes shared by the services.

Binary columns (avatars, page images) cross the HTTP boundary as base64
strings; everything here converts between the two.
"""
import base64
import binascii

from comicshare.errors import ValidationError


def encode_blob(data):
    if data is None:
        return None
    return base64.b64encode(data).decode("ascii")


def decode_blob(value, field="image"):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field}_required", f"{field} is required")
    raw = value.strip()
    # data URLs are accepted as sent by some clients
    if raw.startswith("data:") and "," in raw:
        raw = raw.split(",", 1)[1]
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError(f"invalid_{field}", f"{field} must be base64 encoded")


def isoformat(value):
    if value is None:
        return None
    return value.isoformat() + "Z"


def image_payload(image):
    return {
        "id": image.id,
        "cellIndex": image.cell_index,
        "image": encode_blob(image.image),
    }


def page_payload(page, images):
    return {
        "pageId": page.page_id,
        "number": page.number,
        "rows": page.rows,
        "columns": page.columns,
        "images": [image_payload(img) for img in images],
    }


def comic_card(comic, cover):
    return {
        "id": comic.id,
        "text": comic.text,
        "description": comic.description,
        "image": encode_blob(cover),
    }


def account_payload(user):
    return {
        "id": user.id,
        "login": user.login,
        "name": user.name,
        "avatar": encode_blob(user.avatar),
    }


def comment_payload(comment, viewer_id=None):
    payload = {
        "id": comment.id,
        "text": comment.text,
        "created_at": isoformat(comment.created_at),
        "user_id": comment.user_id,
        "user_name": comment.user.name if comment.user else None,
    }
    if viewer_id is not None:
        payload["isCommentMy"] = comment.user_id == viewer_id
    return payload
