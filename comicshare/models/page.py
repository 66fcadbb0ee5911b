from comicshare import db
from comicshare.models._ids import new_id


class Page(db.Model):
    __tablename__ = "pages"

    page_id = db.Column("pageid", db.String(36), primary_key=True, default=new_id)
    comics_id = db.Column(
        "comicsid",
        db.String(36),
        db.ForeignKey("comics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number = db.Column(db.Integer, nullable=False)
    rows = db.Column(db.Integer, nullable=False)
    columns = db.Column(db.Integer, nullable=False)

    comic = db.relationship("Comic", back_populates="pages")
    images = db.relationship(
        "Image",
        back_populates="page",
        order_by="Image.cell_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
