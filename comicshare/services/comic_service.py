import logging

from sqlalchemy.exc import IntegrityError

from comicshare import notifications
from comicshare.errors import Conflict, NotFound, ValidationError
from comicshare.models._ids import new_id
from comicshare.models.comic import Comic
from comicshare.models.image import Image
from comicshare.models.page import Page
from comicshare.repositories.comic_repository import ComicRepository
from comicshare.repositories.comment_repository import CommentRepository
from comicshare.repositories.favorite_repository import FavoriteRepository
from comicshare.repositories.image_repository import ImageRepository
from comicshare.repositories.like_repository import LikeRepository
from comicshare.repositories.page_repository import PageRepository
from comicshare.services.ownership import OwnershipGuard
from comicshare.services.payloads import (
    comic_card,
    comment_payload,
    decode_blob,
    encode_blob,
    page_payload,
)
from comicshare.store import transaction

logger = logging.getLogger(__name__)


def grid_dimension(value, field):
    if isinstance(value, bool):
        raise ValidationError(f"invalid_{field}", f"{field} must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"invalid_{field}", f"{field} must be a positive integer")
    if number < 1:
        raise ValidationError(f"invalid_{field}", f"{field} must be a positive integer")
    return number


def cell_index(value, default):
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError("invalid_cell_index", "cellIndex must be a non-negative integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError("invalid_cell_index", "cellIndex must be a non-negative integer")
    if number < 0:
        raise ValidationError("invalid_cell_index", "cellIndex must be a non-negative integer")
    return number


def _page_number(value):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError("invalid_number", "number must be a non-negative integer")
    if number < 0:
        raise ValidationError("invalid_number", "number must be a non-negative integer")
    return number


def _text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class ComicService:
    def __init__(
        self,
        comic_repository=None,
        page_repository=None,
        image_repository=None,
        like_repository=None,
        favorite_repository=None,
        comment_repository=None,
        guard=None,
    ):
        self.comic_repository = comic_repository or ComicRepository()
        self.page_repository = page_repository or PageRepository()
        self.image_repository = image_repository or ImageRepository()
        self.like_repository = like_repository or LikeRepository()
        self.favorite_repository = favorite_repository or FavoriteRepository()
        self.comment_repository = comment_repository or CommentRepository()
        self.guard = guard or OwnershipGuard(self.comic_repository)

    # reads

    def list_comics(self):
        return [self._card(c) for c in self.comic_repository.get_all()]

    def list_for_creator(self, creator_id):
        return [self._card(c) for c in self.comic_repository.get_for_creator(creator_id)]

    def get_comic(self, comic_id):
        comic = self.comic_repository.get_by_id(comic_id)
        if comic is None:
            raise NotFound("comic_not_found", "Comic not found")
        pages = self.page_repository.get_for_comic(comic.id)
        return {
            "id": comic.id,
            "text": comic.text,
            "description": comic.description,
            "creator": comic.creator,
            "pages": [
                page_payload(p, self.image_repository.get_for_page(p.page_id))
                for p in pages
            ],
        }

    def get_info(self, comic_id, viewer_id=None):
        comic = self.comic_repository.get_by_id(comic_id)
        if comic is None:
            raise NotFound("comic_not_found", "Comic not found")
        first_page = self.page_repository.get_first_for_comic(comic.id)
        first_page_payload = None
        if first_page is not None:
            first_page_payload = page_payload(
                first_page, self.image_repository.get_for_page(first_page.page_id)
            )
        comments = self.comment_repository.get_for_comic(comic.id)
        return {
            "id": comic.id,
            "text": comic.text,
            "description": comic.description,
            "creator": comic.creator,
            "creator_name": comic.creator_user.name if comic.creator_user else None,
            "firstPage": first_page_payload,
            "likesCount": self.like_repository.count_for_target(comic.id),
            "userLiked": bool(viewer_id) and self.like_repository.exists(viewer_id, comic.id),
            "userFavorited": bool(viewer_id)
            and self.favorite_repository.exists(viewer_id, comic.id),
            "comments": [comment_payload(c, viewer_id or "") for c in comments],
        }

    def _card(self, comic):
        return comic_card(comic, self.comic_repository.cover_image(comic.id))

    # writes

    def create(self, user, data):
        text = _text(data.get("text"))
        description = _text(data.get("description"))
        pages = data.get("pages")
        if not text or not description or not pages:
            raise ValidationError("missing_fields", "text, description and pages are required")
        if not isinstance(pages, list):
            raise ValidationError("invalid_pages", "pages must be a list")

        normalized = [self._normalize_page(raw) for raw in pages]
        content_hash = Comic.content_hash(
            text, description, [page for page, _ in normalized]
        )

        try:
            with transaction():
                existing = self.comic_repository.get_by_creator_and_hash(user.id, content_hash)
                if existing is not None:
                    raise Conflict(
                        "duplicate_comic",
                        "A comic with the same content already exists",
                        existingId=existing.id,
                    )
                comic = self.comic_repository.add(
                    Comic(text=text, description=description, creator=user.id, hash=content_hash)
                )
                for number, (page, blobs) in enumerate(normalized):
                    row = self.page_repository.add(
                        Page(
                            comics_id=comic.id,
                            number=number,
                            rows=page["rows"],
                            columns=page["columns"],
                        )
                    )
                    for image, blob in zip(page["images"], blobs):
                        self.image_repository.add(
                            Image(page_id=row.page_id, cell_index=image["cellIndex"], image=blob)
                        )
                comic_id = comic.id
        except IntegrityError:
            existing = self.comic_repository.get_by_creator_and_hash(user.id, content_hash)
            if existing is None:
                raise
            raise Conflict(
                "duplicate_comic",
                "A comic with the same content already exists",
                existingId=existing.id,
            )

        logger.info("User %s created comic %s with %d pages", user.id, comic_id, len(normalized))
        notifications.notify_new_comic(user.id, user.name, comic_id, text)
        return comic_id

    def update(self, comic_id, user, data):
        comic_fields = data.get("comic")
        pages = data.get("pages")
        if not isinstance(comic_fields, dict) or not isinstance(pages, list):
            raise ValidationError("missing_fields", "comic and pages are required")

        with transaction():
            comic = self.guard.comic(comic_id, user)
            text = _text(comic_fields.get("text"))
            description = _text(comic_fields.get("description"))
            if text:
                comic.text = text
            if description:
                comic.description = description

            new_page_ids = []
            for raw in pages:
                page, created = self._upsert_page(comic, raw)
                if created:
                    new_page_ids.append(page.page_id)

            self.page_repository.renumber(comic.id, new_page_ids)
            content_hash = self._fingerprint(comic)
            clash = self.comic_repository.get_by_creator_and_hash(user.id, content_hash)
            if clash is not None and clash.id != comic.id:
                raise Conflict(
                    "duplicate_comic",
                    "A comic with the same content already exists",
                    existingId=clash.id,
                )
            comic.hash = content_hash
        return comic_id

    def delete(self, comic_id, user):
        with transaction():
            comic = self.guard.comic(comic_id, user)
            self.comic_repository.delete(comic)
        logger.info("User %s deleted comic %s", user.id, comic_id)

    # helpers

    def _normalize_page(self, raw):
        if not isinstance(raw, dict):
            raise ValidationError("invalid_pages", "each page must be an object")
        rows = grid_dimension(raw.get("rows"), "rows")
        columns = grid_dimension(raw.get("columns"), "columns")
        images = raw.get("images") or []
        if not isinstance(images, list):
            raise ValidationError("invalid_images", "images must be a list")
        normalized, blobs = [], []
        for position, img in enumerate(images):
            if not isinstance(img, dict):
                raise ValidationError("invalid_images", "each image must be an object")
            blob = decode_blob(img.get("image"))
            normalized.append(
                {
                    "cellIndex": cell_index(img.get("cellIndex"), position),
                    "image": encode_blob(blob),
                }
            )
            blobs.append(blob)
        ordered = sorted(zip(normalized, blobs), key=lambda pair: pair[0]["cellIndex"])
        normalized = [image for image, _ in ordered]
        blobs = [blob for _, blob in ordered]
        return {"rows": rows, "columns": columns, "images": normalized}, blobs

    def _upsert_page(self, comic, raw):
        if not isinstance(raw, dict):
            raise ValidationError("invalid_pages", "each page must be an object")
        page_id = raw.get("pageId")
        page = self.page_repository.get_by_id(page_id) if page_id else None
        if page is not None and page.comics_id != comic.id:
            raise Conflict("page_conflict", "Page belongs to another comic")

        created = page is None
        number = _page_number(raw.get("number"))
        if page is None:
            if number is None:
                number = self.comic_repository.count_pages(comic.id)
            page = self.page_repository.add(
                Page(
                    page_id=page_id or new_id(),
                    comics_id=comic.id,
                    number=number,
                    rows=grid_dimension(raw.get("rows"), "rows"),
                    columns=grid_dimension(raw.get("columns"), "columns"),
                )
            )
        else:
            if number is not None:
                page.number = number
            if raw.get("rows") is not None:
                page.rows = grid_dimension(raw.get("rows"), "rows")
            if raw.get("columns") is not None:
                page.columns = grid_dimension(raw.get("columns"), "columns")

        images = raw.get("images") or []
        if not isinstance(images, list):
            raise ValidationError("invalid_images", "images must be a list")
        for position, img in enumerate(images):
            self._upsert_image(page, img, position)
        return page, created

    def _upsert_image(self, page, raw, position):
        if not isinstance(raw, dict):
            raise ValidationError("invalid_images", "each image must be an object")
        image_id = raw.get("id")
        image = self.image_repository.get_by_id(image_id) if image_id else None
        if image is not None and image.page_id != page.page_id:
            raise Conflict("image_conflict", "Image belongs to another page")
        if image is None:
            return self.image_repository.add(
                Image(
                    id=image_id or new_id(),
                    page_id=page.page_id,
                    cell_index=cell_index(raw.get("cellIndex"), position),
                    image=decode_blob(raw.get("image")),
                )
            )
        if raw.get("image") is not None:
            image.image = decode_blob(raw.get("image"))
        if raw.get("cellIndex") is not None:
            image.cell_index = cell_index(raw.get("cellIndex"), image.cell_index)
        return image

    def _fingerprint(self, comic):
        pages = []
        for page in self.page_repository.get_for_comic(comic.id):
            pages.append(
                {
                    "rows": page.rows,
                    "columns": page.columns,
                    "images": [
                        {"cellIndex": img.cell_index, "image": encode_blob(img.image)}
                        for img in self.image_repository.get_for_page(page.page_id)
                    ],
                }
            )
        return Comic.content_hash(comic.text, comic.description, pages)
