"""Sequential unlock gate and answer submission.

A user's progress is summarised by ``highest_solved``, the largest solved
level (0 when nothing is solved). Level ``n`` is reachable iff
``n <= highest_solved + 1``; there is no way to skip or re-lock a level.
"""
import re
from typing import Iterable, NamedTuple

from flask import current_app

from cryptic_hunt import db
from cryptic_hunt.levels import current_levels
from cryptic_hunt.models import Progress, utcnow
from . import store
from .answers import answers_match
from .errors import InvalidLevel, LevelLocked

_LEVEL_RE = re.compile(r'[+-]?[0-9]+')


class AnswerResult(NamedTuple):
    level: int
    correct: bool
    newly_solved: bool


def parse_level(value, total_levels: int) -> int:
    """Coerce a client-supplied level to an ordinal in ``[1, total_levels]``."""
    if isinstance(value, bool):
        raise InvalidLevel()
    if isinstance(value, int):
        n = value
    elif isinstance(value, float) and value.is_integer():
        n = int(value)
    elif isinstance(value, str) and _LEVEL_RE.fullmatch(value.strip()):
        n = int(value.strip())
    else:
        raise InvalidLevel()
    if not 1 <= n <= total_levels:
        raise InvalidLevel()
    return n


def highest_solved(records: Iterable[Progress]) -> int:
    return max((r.level for r in records if r.is_solved), default=0)


def is_unlocked(level: int, top: int) -> bool:
    return level <= top + 1


def get_level(user, raw_level):
    """Prompt and solve state for an unlocked level."""
    levels = current_levels()
    n = parse_level(raw_level, len(levels))
    records = store.get_progress(user.id)
    if not is_unlocked(n, highest_solved(records)):
        raise LevelLocked()
    record = next((r for r in records if r.level == n), None)
    payload = levels[n - 1].to_dict()
    payload['is_solved'] = bool(record is not None and record.is_solved)
    return payload


def submit_answer(user, raw_level, raw_answer) -> AnswerResult:
    """Check an answer and record the solve if it is correct.

    The gate is evaluated on every submission. The gate read and the
    conditional write share one transaction; only the first correct
    submission stamps ``solved_at``.
    """
    levels = current_levels()
    n = parse_level(raw_level, len(levels))
    records = store.get_progress(user.id)
    if not is_unlocked(n, highest_solved(records)):
        raise LevelLocked()

    correct = answers_match(raw_answer, levels[n - 1].answer)
    newly_solved = False
    if correct:
        newly_solved = store.set_solved(user.id, n, utcnow())
        if newly_solved:
            db.session.commit()
            current_app.logger.info(f"[solve] user={user.id} level={n}")
    return AnswerResult(level=n, correct=correct, newly_solved=newly_solved)


def progress_summary(user):
    levels = current_levels()
    records = store.get_progress(user.id)
    return {
        'user': user.to_dict(),
        'highest_solved': highest_solved(records),
        'total_levels': len(levels),
        'progress': [r.to_dict() for r in records],
    }
