import hashlib
import json

from comicshare import db
from comicshare.models._ids import new_id


class Comic(db.Model):
    __tablename__ = "comics"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    text = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=False)
    creator = db.Column(
        db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    hash = db.Column(db.String(64), nullable=True)

    creator_user = db.relationship("User", back_populates="comics", lazy="joined")
    pages = db.relationship(
        "Page",
        back_populates="comic",
        order_by="Page.number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    likes = db.relationship("Like", cascade="all, delete-orphan", passive_deletes=True)
    favorites = db.relationship(
        "Favorite", cascade="all, delete-orphan", passive_deletes=True
    )
    comments = db.relationship(
        "Comment",
        back_populates="comic",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        db.UniqueConstraint("creator", "hash", name="uq_comics_creator_hash"),
    )

    @staticmethod
    def content_hash(text, description, pages):
        canonical = json.dumps(
            {"text": text, "description": description, "pages": pages},
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
