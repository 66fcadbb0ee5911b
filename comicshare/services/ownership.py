from comicshare.errors import Forbidden, NotFound
from comicshare.repositories.comic_repository import ComicRepository


class OwnershipGuard:
    """Resolves the comic that owns a comic, page or image and checks its creator.

    Every mutating route calls one of these before issuing any write.
    """

    def __init__(self, comic_repository=None):
        self.comic_repository = comic_repository or ComicRepository()

    def comic(self, comic_id, user):
        comic = self.comic_repository.get_by_id(comic_id)
        return self._assert_creator(comic, user, "comic_not_found", "Comic not found")

    def page(self, page_id, user):
        comic = self.comic_repository.get_owning_page(page_id)
        return self._assert_creator(comic, user, "page_not_found", "Page not found")

    def image(self, image_id, user):
        comic = self.comic_repository.get_owning_image(image_id)
        return self._assert_creator(comic, user, "image_not_found", "Image not found")

    @staticmethod
    def _assert_creator(comic, user, error, message):
        if comic is None:
            raise NotFound(error, message)
        if user is None or comic.creator != user.id:
            raise Forbidden("forbidden", "Insufficient permissions")
        return comic
