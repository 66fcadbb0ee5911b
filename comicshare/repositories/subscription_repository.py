from comicshare import db
from comicshare.models.subscription import Subscription
from comicshare.models.user import User
from comicshare.models.user_settings import UserSettings
from comicshare.repositories.toggle_repository import ToggleRepository


class SubscriptionRepository(ToggleRepository):
    def __init__(self):
        super().__init__(Subscription, "subscriber_id", "target_user_id")

    def subscribers_of(self, user_id):
        return (
            User.query.join(Subscription, Subscription.subscriber_id == User.id)
            .filter(Subscription.target_user_id == user_id)
            .order_by(User.name)
            .all()
        )

    def subscriptions_of(self, user_id):
        return (
            User.query.join(Subscription, Subscription.target_user_id == User.id)
            .filter(Subscription.subscriber_id == user_id)
            .order_by(User.name)
            .all()
        )

    def push_targets_for(self, user_id):
        """(subscriber id, push token) pairs that should receive notifications."""
        rows = (
            db.session.query(User.id, UserSettings.fcm_token)
            .select_from(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .join(UserSettings, UserSettings.user_id == User.id)
            .filter(Subscription.target_user_id == user_id)
            .filter(UserSettings.fcm_token.isnot(None))
            .filter(
                (UserSettings.notifications_enabled.is_(None))
                | (UserSettings.notifications_enabled.is_(True))
            )
            .all()
        )
        return [(row[0], row[1]) for row in rows]
