"""Static level table.

Levels are loaded once when the app is created and never change for the
lifetime of the process. Ordinals are 1-based and contiguous.
"""
import json
from dataclasses import dataclass
from typing import Optional, Tuple

from flask import current_app


@dataclass(frozen=True)
class Level:
    number: int
    prompt: str
    answer: str

    def to_dict(self):
        # The expected answer is intentionally absent
        return {
            'level': self.number,
            'prompt': self.prompt,
        }


DEFAULT_LEVELS: Tuple[Level, ...] = (
    Level(1, 'I speak without a mouth and hear without ears. What am I?', 'echo'),
    Level(2, 'Find the hidden word in: C R Y P T I C. Remove the edges, read the center.', 'rypti'),
    Level(3, 'An anagram of "LISTEN" that is a verb.', 'silent'),
    Level(4, 'Binary 01101000 01110101 01101110 01110100', 'hunt'),
    Level(5, 'Clock puzzle: at 3:15, what is the smaller angle between the hands?', '7.5'),
    Level(6, 'Vigenere key=RING. Cipher: VYYMZ QN. Plain?', 'solve me'),
    Level(7, 'Acrostic of: Hidden Under Nightfall Trail', 'hunt'),
    Level(8, 'MD5 of answer is 5d41402abc4b2a76b9719d911017c592', 'hello'),
    Level(9, 'Roman: XIV + VI = ?', '20'),
    Level(10, 'Final: keyword from levels 1, 4 and 7 combined.', 'echohunthunt'),
)


def load_levels(path: Optional[str] = None) -> Tuple[Level, ...]:
    """Return the level table, read from ``path`` when given.

    The file holds a JSON list of ``{"prompt": ..., "answer": ...}`` objects
    in play order; ordinals are assigned by position.
    """
    if not path:
        return DEFAULT_LEVELS
    with open(path, encoding='utf-8') as f:
        raw = json.load(f)
    if not isinstance(raw, list) or not raw:
        raise ValueError(f'{path}: expected a non-empty list of levels')
    levels = []
    for idx, item in enumerate(raw, start=1):
        if not isinstance(item, dict):
            raise ValueError(f'{path}: level {idx} must be an object')
        prompt = item.get('prompt')
        answer = item.get('answer')
        if not isinstance(prompt, str) or not isinstance(answer, str) or not prompt or not answer:
            raise ValueError(f'{path}: level {idx} needs a prompt and an answer')
        levels.append(Level(idx, prompt, answer))
    return tuple(levels)


EXTENSION_KEY = 'cryptic_hunt.levels'


def current_levels() -> Tuple[Level, ...]:
    """Level table of the running app, set up by ``create_app``."""
    return current_app.extensions[EXTENSION_KEY]
