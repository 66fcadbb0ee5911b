from comicshare import db


class Subscription(db.Model):
    __tablename__ = "subscriptions"

    subscriber_id = db.Column(
        db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    target_user_id = db.Column(
        db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (
        db.CheckConstraint("subscriber_id <> target_user_id", name="ck_no_self_subscription"),
    )
