from comicshare.models.comic import Comic
from comicshare.models.favorite import Favorite
from comicshare.repositories.toggle_repository import ToggleRepository


class FavoriteRepository(ToggleRepository):
    def __init__(self):
        super().__init__(Favorite, "user_id", "comic_id")

    def comics_for_user(self, user_id):
        return (
            Comic.query.join(Favorite, Favorite.comic_id == Comic.id)
            .filter(Favorite.user_id == user_id)
            .order_by(Comic.text)
            .all()
        )
