import logging

from comicshare.errors import NotFound, ValidationError
from comicshare.models.image import Image
from comicshare.models.page import Page
from comicshare.repositories.comic_repository import ComicRepository
from comicshare.repositories.image_repository import ImageRepository
from comicshare.repositories.page_repository import PageRepository
from comicshare.services.comic_service import cell_index, grid_dimension
from comicshare.services.ownership import OwnershipGuard
from comicshare.services.payloads import decode_blob, page_payload
from comicshare.store import transaction

logger = logging.getLogger(__name__)


class PageService:
    def __init__(self, comic_repository=None, page_repository=None, image_repository=None, guard=None):
        self.comic_repository = comic_repository or ComicRepository()
        self.page_repository = page_repository or PageRepository()
        self.image_repository = image_repository or ImageRepository()
        self.guard = guard or OwnershipGuard(self.comic_repository)

    def get_page(self, page_id):
        page = self.page_repository.get_by_id(page_id)
        if page is None:
            raise NotFound("page_not_found", "Page not found")
        return page_payload(page, self.image_repository.get_for_page(page.page_id))

    def add_page(self, comic_id, user, rows, columns):
        if rows is None or columns is None:
            raise ValidationError("missing_fields", "rows and columns are required")
        rows = grid_dimension(rows, "rows")
        columns = grid_dimension(columns, "columns")
        with transaction():
            comic = self.guard.comic(comic_id, user)
            page = self.page_repository.add(
                Page(
                    comics_id=comic.id,
                    number=self.comic_repository.count_pages(comic.id),
                    rows=rows,
                    columns=columns,
                )
            )
            page_id, number = page.page_id, page.number
        return page_id, number

    def delete_page(self, page_id, user):
        """Delete a page and close the gap in the comic's page numbering."""
        with transaction():
            comic = self.guard.page(page_id, user)
            page = self.page_repository.get_by_id(page_id)
            self.page_repository.delete(page)
            self.page_repository.renumber(comic.id)
        logger.info("User %s deleted page %s of comic %s", user.id, page_id, comic.id)

    def add_image(self, page_id, user, cell, data):
        if cell is None or data is None:
            raise ValidationError("missing_fields", "cellIndex and image are required")
        blob = decode_blob(data)
        cell = cell_index(cell, 0)
        with transaction():
            self.guard.page(page_id, user)
            image = self.image_repository.add(
                Image(page_id=page_id, cell_index=cell, image=blob)
            )
            image_id = image.id
        return image_id

    def replace_image(self, image_id, user, data, cell=None):
        if data is None:
            raise ValidationError("missing_fields", "image is required")
        blob = decode_blob(data)
        with transaction():
            self.guard.image(image_id, user)
            image = self.image_repository.get_by_id(image_id)
            image.image = blob
            if cell is not None:
                image.cell_index = cell_index(cell, image.cell_index)

    def delete_image(self, image_id, user):
        with transaction():
            self.guard.image(image_id, user)
            self.image_repository.delete(self.image_repository.get_by_id(image_id))
