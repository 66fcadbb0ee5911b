from comicshare import db


class UserSettings(db.Model):
    __tablename__ = "user_settings"

    user_id = db.Column(
        db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    fcm_token = db.Column(db.Text, nullable=True)
    notifications_enabled = db.Column(db.Boolean, nullable=True, default=True)

    user = db.relationship("User", back_populates="settings")
