from comicshare import db
from comicshare.models._ids import new_id


class Image(db.Model):
    __tablename__ = "image"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    page_id = db.Column(
        "pageid",
        db.String(36),
        db.ForeignKey("pages.pageid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    cell_index = db.Column("cellindex", db.Integer, nullable=True)
    image = db.Column(db.LargeBinary, nullable=False)

    page = db.relationship("Page", back_populates="images")
