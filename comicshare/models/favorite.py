from comicshare import db


class Favorite(db.Model):
    __tablename__ = "favorites"

    user_id = db.Column(
        db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    comic_id = db.Column(
        db.String(36), db.ForeignKey("comics.id", ondelete="CASCADE"), primary_key=True
    )
