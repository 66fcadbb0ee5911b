from comicshare import db
from comicshare.models.page import Page


class PageRepository:
    def get_for_comic(self, comic_id):
        return (
            Page.query.filter_by(comics_id=comic_id)
            .order_by(Page.number.asc(), Page.page_id.asc())
            .all()
        )

    def get_first_for_comic(self, comic_id):
        return (
            Page.query.filter_by(comics_id=comic_id)
            .order_by(Page.number.asc())
            .first()
        )

    def get_by_id(self, page_id):
        return db.session.get(Page, page_id)

    def add(self, page):
        db.session.add(page)
        db.session.flush()
        return page

    def delete(self, page):
        db.session.delete(page)
        db.session.flush()

    def renumber(self, comic_id, new_page_ids=()):
        """Number the comic's pages 0..n-1, keeping their current order.

        On a number collision pages already in the comic stay ahead of
        ``new_page_ids``, which keep the order they are given in.
        """
        arrival = {page_id: position for position, page_id in enumerate(new_page_ids)}
        pages = sorted(
            self.get_for_comic(comic_id),
            key=lambda p: (
                p.number,
                p.page_id in arrival,
                arrival.get(p.page_id, 0),
                p.page_id,
            ),
        )
        for position, page in enumerate(pages):
            if page.number != position:
                page.number = position
        db.session.flush()
        return pages
