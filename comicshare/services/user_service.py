from flask import current_app

from comicshare.errors import Unauthenticated, ValidationError
from comicshare.repositories.user_repository import UserRepository
from comicshare.repositories.user_settings_repository import UserSettingsRepository
from comicshare.services.payloads import account_payload, decode_blob
from comicshare.store import transaction


class UserService:
    def __init__(self, user_repository=None, settings_repository=None):
        self.user_repository = user_repository or UserRepository()
        self.settings_repository = settings_repository or UserSettingsRepository()

    def account(self, user):
        return account_payload(user)

    def _validated_name(self, name):
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("name_required", "Name is required")
        name = name.strip()
        limit = current_app.config["NAME_MAX_LENGTH"]
        if len(name) > limit:
            raise ValidationError(
                "name_too_long", f"Name is too long (max {limit} characters)"
            )
        return name

    def rename(self, user, name):
        name = self._validated_name(name)
        with transaction():
            user.name = name
        return name

    def update(self, user, data):
        name = data.get("name")
        avatar = data.get("avatar")
        if name is None and avatar is None:
            raise ValidationError("missing_fields", "name or avatar is required")
        new_name = self._validated_name(name) if name is not None else None
        new_avatar = decode_blob(avatar, "avatar") if avatar is not None else None
        with transaction():
            if new_name is not None:
                user.name = new_name
            if new_avatar is not None:
                user.avatar = new_avatar
        return account_payload(user)

    def change_password(self, user, current_password, new_password):
        if not current_password or not new_password:
            raise ValidationError(
                "missing_fields", "Current and new password are required"
            )
        if current_password == new_password:
            raise ValidationError(
                "password_unchanged",
                "New password must be different from current password",
            )
        with transaction():
            if not user.check_password(current_password):
                raise Unauthenticated(
                    "invalid_password", "Current password is incorrect"
                )
            user.set_password(new_password)

    def set_avatar(self, user, avatar):
        blob = decode_blob(avatar, "avatar")
        with transaction():
            user.avatar = blob
        return account_payload(user)

    def clear_avatar(self, user):
        with transaction():
            user.avatar = None
        return account_payload(user)

    def save_push_token(self, user, token):
        if not isinstance(token, str) or not token.strip():
            raise ValidationError("token_required", "Token is required")
        with transaction():
            self.settings_repository.save_token(user.id, token.strip())

    def set_notifications_enabled(self, user, enabled):
        if not isinstance(enabled, bool):
            raise ValidationError("enabled_required", "Enabled flag is required")
        with transaction():
            self.settings_repository.set_notifications_enabled(user.id, enabled)
        return enabled
