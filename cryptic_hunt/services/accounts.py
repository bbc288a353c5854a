"""Registration and credential checks."""
from flask import current_app

from cryptic_hunt import bcrypt
from cryptic_hunt.levels import current_levels
from cryptic_hunt.models import User
from cryptic_hunt.services.progression import store
from cryptic_hunt.services.progression.errors import InvalidCredentials, ValidationError


def _require_fields(username, password):
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        raise ValidationError('missing')


def validate_registration(username, password) -> None:
    _require_fields(username, password)
    cfg = current_app.config
    min_user = int(cfg.get('USERNAME_MIN_LENGTH', 3))
    max_user = int(cfg.get('USERNAME_MAX_LENGTH', 24))
    if not min_user <= len(username) <= max_user:
        raise ValidationError('username_length')
    if len(password) < int(cfg.get('PASSWORD_MIN_LENGTH', 6)):
        raise ValidationError('password_length')


def register(username, password) -> User:
    """Create a user with every level seeded as unsolved.

    Raises UsernameTaken when the name is already in use; nothing is
    persisted in that case.
    """
    validate_registration(username, password)
    password_hash = bcrypt.generate_password_hash(password).decode('utf-8')
    user = store.create_user_with_seed_progress(username, password_hash, len(current_levels()))
    current_app.logger.info(f"[register] user={user.id} username={user.username}")
    return user


def authenticate(username, password) -> User:
    _require_fields(username, password)
    user = User.query.filter_by(username=username).first()
    if user is None or not user.check_password(password):
        raise InvalidCredentials()
    current_app.logger.info(f"[login] user={user.id}")
    return user
