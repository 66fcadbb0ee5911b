from comicshare import db
from comicshare.models.comment import Comment


class CommentRepository:
    def get_by_id(self, comment_id):
        return db.session.get(Comment, comment_id)

    def get_for_comic(self, comic_id):
        return (
            Comment.query.filter_by(comic_id=comic_id)
            .order_by(Comment.created_at.desc())
            .all()
        )

    def add(self, comment):
        db.session.add(comment)
        db.session.flush()
        return comment

    def delete(self, comment):
        db.session.delete(comment)
        db.session.flush()
