from werkzeug.security import check_password_hash, generate_password_hash

from comicshare import db
from comicshare.models._ids import new_id


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    login = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255), nullable=False)
    avatar = db.Column(db.LargeBinary, nullable=True)

    comics = db.relationship(
        "Comic",
        back_populates="creator_user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    settings = db.relationship(
        "UserSettings",
        uselist=False,
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def set_password(self, raw_password):
        self.password = generate_password_hash(raw_password)

    def check_password(self, raw_password):
        if not self.password:
            return False
        return check_password_hash(self.password, raw_password)
