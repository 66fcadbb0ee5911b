from sqlalchemy import func

from comicshare import db
from comicshare.models.comic import Comic
from comicshare.models.like import Like
from comicshare.models.user import User


class UserRepository:
    def get_by_id(self, user_id):
        if not user_id:
            return None
        return db.session.get(User, str(user_id))

    def get_by_login(self, login):
        return User.query.filter_by(login=login).first()

    def add(self, user):
        db.session.add(user)
        db.session.flush()
        return user

    def total_likes_received(self, user_id):
        return (
            db.session.query(func.count(Like.user_id))
            .join(Comic, Comic.id == Like.comic_id)
            .filter(Comic.creator == user_id)
            .scalar()
            or 0
        )
