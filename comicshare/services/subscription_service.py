from comicshare.errors import NotFound, ValidationError
from comicshare.repositories.comic_repository import ComicRepository
from comicshare.repositories.like_repository import LikeRepository
from comicshare.repositories.subscription_repository import SubscriptionRepository
from comicshare.repositories.user_repository import UserRepository
from comicshare.services.payloads import encode_blob
from comicshare.services.social_service import toggle
from comicshare.store import transaction


class SubscriptionService:
    def __init__(
        self,
        user_repository=None,
        subscription_repository=None,
        comic_repository=None,
        like_repository=None,
    ):
        self.user_repository = user_repository or UserRepository()
        self.subscription_repository = subscription_repository or SubscriptionRepository()
        self.comic_repository = comic_repository or ComicRepository()
        self.like_repository = like_repository or LikeRepository()

    def _require_user(self, user_id):
        user = self.user_repository.get_by_id(user_id)
        if user is None:
            raise NotFound("user_not_found", "User not found")
        return user

    def toggle(self, subscriber, target_id):
        with transaction():
            self._require_user(target_id)
            if subscriber.id == target_id:
                raise ValidationError("self_subscription", "You cannot subscribe to yourself")
            return toggle(self.subscription_repository, subscriber.id, target_id)

    def is_subscribed(self, subscriber, target_id):
        return self.subscription_repository.exists(subscriber.id, target_id)

    def _relation_payload(self, user, viewer_id):
        is_subscribed = None
        if user.id != viewer_id:
            is_subscribed = self.subscription_repository.exists(viewer_id, user.id)
        return {
            "id": user.id,
            "name": user.name,
            "avatar": encode_blob(user.avatar),
            "is_subscribed_by_me": is_subscribed,
        }

    def subscribers(self, user_id, viewer_id):
        return [
            self._relation_payload(u, viewer_id)
            for u in self.subscription_repository.subscribers_of(user_id)
        ]

    def subscriptions(self, user_id, viewer_id):
        return [
            self._relation_payload(u, viewer_id)
            for u in self.subscription_repository.subscriptions_of(user_id)
        ]

    def profile(self, user_id, viewer_id):
        user = self._require_user(user_id)
        is_subscribed = None
        if viewer_id and viewer_id != user.id:
            is_subscribed = self.subscription_repository.exists(viewer_id, user.id)
        return {
            "id": user.id,
            "name": user.name,
            "avatar": encode_blob(user.avatar),
            "total_likes": self.user_repository.total_likes_received(user.id),
            "subscribers_count": self.subscription_repository.count_for_target(user.id),
            "subscriptions_count": self.subscription_repository.count_for_owner(user.id),
            "is_subscribed": is_subscribed,
            "comics": [
                {
                    "id": c.id,
                    "text": c.text,
                    "description": c.description,
                    "likes_count": self.like_repository.count_for_target(c.id),
                    "image": encode_blob(self.comic_repository.cell_zero_cover_image(c.id)),
                }
                for c in self.comic_repository.get_for_creator(user.id)
            ],
        }
