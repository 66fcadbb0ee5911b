from comicshare import db
from comicshare.models.image import Image


class ImageRepository:
    def get_for_page(self, page_id):
        return (
            Image.query.filter_by(page_id=page_id)
            .order_by(Image.cell_index.asc())
            .all()
        )

    def get_by_id(self, image_id):
        return db.session.get(Image, image_id)

    def add(self, image):
        db.session.add(image)
        db.session.flush()
        return image

    def delete(self, image):
        db.session.delete(image)
        db.session.flush()
