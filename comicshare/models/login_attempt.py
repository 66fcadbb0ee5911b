from comicshare import db


class LoginAttempt(db.Model):
    __tablename__ = "login_attempts"

    login = db.Column(db.String(255), primary_key=True)
    attempts = db.Column(db.Integer, nullable=False, default=0)
    last_attempt = db.Column(db.DateTime, nullable=True)
    blocked_until = db.Column(db.DateTime, nullable=True)
