from datetime import datetime, timezone

from cryptic_hunt import db, bcrypt
from flask_login import UserMixin


def utcnow():
    return datetime.now(timezone.utc)


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class Progress(db.Model):
    __tablename__ = 'progress'
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), primary_key=True)
    level = db.Column(db.Integer, primary_key=True)
    is_solved = db.Column(db.Boolean, default=False, nullable=False)
    solved_at = db.Column(db.DateTime(timezone=True), nullable=True)

    def to_dict(self):
        return {
            'level': self.level,
            'is_solved': bool(self.is_solved),
            'solved_at': self.solved_at.isoformat() if self.solved_at else None,
        }
