from comicshare import db
from comicshare.models.user_settings import UserSettings


class UserSettingsRepository:
    def get(self, user_id):
        return db.session.get(UserSettings, user_id)

    def get_or_create(self, user_id):
        settings = self.get(user_id)
        if settings is None:
            settings = UserSettings(user_id=user_id, notifications_enabled=True)
            db.session.add(settings)
        return settings

    def save_token(self, user_id, token):
        settings = self.get_or_create(user_id)
        settings.fcm_token = token
        db.session.flush()
        return settings

    def set_notifications_enabled(self, user_id, enabled):
        settings = self.get_or_create(user_id)
        settings.notifications_enabled = bool(enabled)
        db.session.flush()
        return settings
