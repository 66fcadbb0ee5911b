from comicshare.models.user import User
from comicshare.models.comic import Comic
from comicshare.models.page import Page
from comicshare.models.image import Image
from comicshare.models.like import Like
from comicshare.models.favorite import Favorite
from comicshare.models.comment import Comment
from comicshare.models.subscription import Subscription
from comicshare.models.login_attempt import LoginAttempt
from comicshare.models.user_settings import UserSettings

__all__ = [
    "User",
    "Comic",
    "Page",
    "Image",
    "Like",
    "Favorite",
    "Comment",
    "Subscription",
    "LoginAttempt",
    "UserSettings",
]
