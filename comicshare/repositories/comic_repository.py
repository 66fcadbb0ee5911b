from sqlalchemy import func

from comicshare import db
from comicshare.models.comic import Comic
from comicshare.models.image import Image
from comicshare.models.page import Page


class ComicRepository:
    def get_all(self):
        return Comic.query.order_by(Comic.text).all()

    def get_for_creator(self, creator_id):
        return Comic.query.filter_by(creator=creator_id).order_by(Comic.text).all()

    def get_by_id(self, comic_id):
        return db.session.get(Comic, comic_id)

    def get_by_creator_and_hash(self, creator_id, content_hash):
        return Comic.query.filter_by(creator=creator_id, hash=content_hash).first()

    def get_owning_page(self, page_id):
        return (
            Comic.query.join(Page, Page.comics_id == Comic.id)
            .filter(Page.page_id == page_id)
            .first()
        )

    def get_owning_image(self, image_id):
        return (
            Comic.query.join(Page, Page.comics_id == Comic.id)
            .join(Image, Image.page_id == Page.page_id)
            .filter(Image.id == image_id)
            .first()
        )

    def add(self, comic):
        db.session.add(comic)
        db.session.flush()
        return comic

    def delete(self, comic):
        db.session.delete(comic)
        db.session.flush()

    def cover_image(self, comic_id):
        return (
            db.session.query(Image.image)
            .join(Page, Page.page_id == Image.page_id)
            .filter(Page.comics_id == comic_id)
            .order_by(Page.number.asc(), Image.cell_index.asc())
            .limit(1)
            .scalar()
        )

    def cell_zero_cover_image(self, comic_id):
        return (
            db.session.query(Image.image)
            .join(Page, Page.page_id == Image.page_id)
            .filter(Page.comics_id == comic_id, Image.cell_index == 0)
            .order_by(Page.number.asc())
            .limit(1)
            .scalar()
        )

    def count_pages(self, comic_id):
        return (
            db.session.query(func.count(Page.page_id))
            .filter(Page.comics_id == comic_id)
            .scalar()
            or 0
        )
