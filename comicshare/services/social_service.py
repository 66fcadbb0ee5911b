from comicshare.errors import NotFound, ValidationError
from comicshare.models.comment import Comment
from comicshare.repositories.comic_repository import ComicRepository
from comicshare.repositories.comment_repository import CommentRepository
from comicshare.repositories.favorite_repository import FavoriteRepository
from comicshare.repositories.like_repository import LikeRepository
from comicshare.services.payloads import comic_card, comment_payload
from comicshare.store import transaction


def toggle(repository, owner_id, target_id):
    """Flip a join-table relationship and return the new state."""
    if repository.exists(owner_id, target_id):
        repository.remove(owner_id, target_id)
        return False
    repository.add(owner_id, target_id)
    return True


class SocialService:
    def __init__(
        self,
        comic_repository=None,
        like_repository=None,
        favorite_repository=None,
        comment_repository=None,
    ):
        self.comic_repository = comic_repository or ComicRepository()
        self.like_repository = like_repository or LikeRepository()
        self.favorite_repository = favorite_repository or FavoriteRepository()
        self.comment_repository = comment_repository or CommentRepository()

    def _require_comic(self, comic_id):
        comic = self.comic_repository.get_by_id(comic_id)
        if comic is None:
            raise NotFound("comic_not_found", "Comic not found")
        return comic

    # likes

    def toggle_like(self, user, comic_id):
        with transaction():
            self._require_comic(comic_id)
            return toggle(self.like_repository, user.id, comic_id)

    def unlike(self, user, comic_id):
        with transaction():
            self._require_comic(comic_id)
            self.like_repository.remove(user.id, comic_id)
        return False

    def is_liked(self, user, comic_id):
        return self.like_repository.exists(user.id, comic_id)

    def like_count(self, comic_id):
        return self.like_repository.count_for_target(comic_id)

    # favorites

    def toggle_favorite(self, user, comic_id):
        with transaction():
            self._require_comic(comic_id)
            return toggle(self.favorite_repository, user.id, comic_id)

    def is_favorited(self, user, comic_id):
        return self.favorite_repository.exists(user.id, comic_id)

    def favorites(self, user):
        return [
            comic_card(c, self.comic_repository.cell_zero_cover_image(c.id))
            for c in self.favorite_repository.comics_for_user(user.id)
        ]

    # comments

    def add_comment(self, user, comic_id, text):
        text = (text or "").strip() if isinstance(text, str) else ""
        if not text:
            raise ValidationError("text_required", "Comment text is required")
        with transaction():
            self._require_comic(comic_id)
            comment = self.comment_repository.add(
                Comment(comic_id=comic_id, user_id=user.id, text=text)
            )
        return comment_payload(self.comment_repository.get_by_id(comment.id))

    def delete_comment(self, user, comment_id):
        # A stranger gets the same answer as a missing comment.
        with transaction():
            comment = self.comment_repository.get_by_id(comment_id)
            allowed = comment is not None and (
                comment.user_id == user.id
                or (comment.comic is not None and comment.comic.creator == user.id)
            )
            if not allowed:
                raise NotFound(
                    "comment_not_found",
                    "Comment not found or you are not allowed to delete it",
                )
            self.comment_repository.delete(comment)
