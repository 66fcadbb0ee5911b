from comicshare.models.like import Like
from comicshare.repositories.toggle_repository import ToggleRepository


class LikeRepository(ToggleRepository):
    def __init__(self):
        super().__init__(Like, "user_id", "comic_id")
