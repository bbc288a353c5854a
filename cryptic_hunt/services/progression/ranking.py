"""Leaderboard ranking.

Ordering is ``(solved_levels DESC, tiebreak ASC nulls last, username ASC)``.
The tie-break is the moment ``highest_solved`` last increased, i.e. the
``solved_at`` of the highest solved level. A later solve of a lower level
does not move it. The comparator runs in Python so the order does not
depend on how a given database sorts NULLs.
"""
from dataclasses import dataclass
from datetime import datetime
from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple

from flask import current_app

from . import store
from .errors import ValidationError


@dataclass(frozen=True)
class Standing:
    username: str
    solved_levels: int
    tiebreak: Optional[datetime] = None

    def to_dict(self):
        return {
            'username': self.username,
            'solved_levels': self.solved_levels,
        }


def standing_for(username: str, solved: Iterable[Tuple[int, Optional[datetime]]]) -> Standing:
    top = 0
    tiebreak = None
    for level, solved_at in solved:
        if level > top:
            top, tiebreak = level, solved_at
    return Standing(username=username, solved_levels=top, tiebreak=tiebreak)


def compare_standings(a: Standing, b: Standing) -> int:
    if a.solved_levels != b.solved_levels:
        return -1 if a.solved_levels > b.solved_levels else 1
    if a.tiebreak != b.tiebreak:
        if a.tiebreak is None:
            return 1
        if b.tiebreak is None:
            return -1
        return -1 if a.tiebreak < b.tiebreak else 1
    if a.username != b.username:
        return -1 if a.username < b.username else 1
    return 0


def rank_standings(standings: Iterable[Standing]) -> List[Standing]:
    return sorted(standings, key=cmp_to_key(compare_standings))


def parse_limit(value, cap: int) -> int:
    if value is None or value == '':
        return cap
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError('bad_limit')
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ValidationError('bad_limit')
    if limit < 1:
        raise ValidationError('bad_limit')
    return min(limit, cap)


def leaderboard(limit=None) -> List[Standing]:
    cap = int(current_app.config.get('LEADERBOARD_LIMIT', 100))
    size = parse_limit(limit, cap)
    standings = [standing_for(username, solved) for username, solved in store.all_users_with_progress()]
    return rank_standings(standings)[:size]
