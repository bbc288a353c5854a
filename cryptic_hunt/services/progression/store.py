"""Progress store: the persistence operations the progression core relies on.

Callers own the transaction boundary except for user creation, which
commits (or rolls back) the user row and its seeded progress together.
"""
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Tuple

from sqlalchemy.exc import IntegrityError

from cryptic_hunt import db
from cryptic_hunt.models import User, Progress
from .errors import UsernameTaken


def create_user_with_seed_progress(username: str, password_hash: str, total_levels: int) -> User:
    """Insert a user plus one unsolved progress row per level, atomically."""
    user = User(username=username, password_hash=password_hash)
    db.session.add(user)
    try:
        # Flush to obtain the user id without ending the transaction; the
        # only constraint a fresh user row can break is the username one
        db.session.flush()
    except IntegrityError:
        db.session.rollback()
        raise UsernameTaken()
    try:
        db.session.add_all([
            Progress(user_id=user.id, level=n, is_solved=False, solved_at=None)
            for n in range(1, total_levels + 1)
        ])
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise
    return user


def get_progress(user_id: int) -> List[Progress]:
    return (
        Progress.query
        .filter_by(user_id=user_id)
        .order_by(Progress.level.asc())
        .all()
    )


def set_solved(user_id: int, level: int, timestamp: datetime) -> bool:
    """Mark a level solved unless it already is.

    The update is conditional on ``is_solved`` still being false, so a
    repeated or concurrent call never rewrites ``solved_at``. Returns True
    only when this call performed the transition.
    """
    updated = (
        Progress.query
        .filter_by(user_id=user_id, level=level, is_solved=False)
        .update({'is_solved': True, 'solved_at': timestamp}, synchronize_session=False)
    )
    return updated > 0


def all_users_with_progress() -> List[Tuple[str, List[Tuple[int, datetime]]]]:
    """Every user with their solved ``(level, solved_at)`` pairs."""
    solved: Dict[int, List[Tuple[int, datetime]]] = defaultdict(list)
    rows = (
        db.session.query(Progress.user_id, Progress.level, Progress.solved_at)
        .filter(Progress.is_solved.is_(True))
        .all()
    )
    for user_id, level, solved_at in rows:
        solved[user_id].append((level, solved_at))
    users = db.session.query(User.id, User.username).all()
    return [(username, solved.get(user_id, [])) for user_id, username in users]
