from __future__ import annotations

import math
from typing import Any, List

from colormerge.constants import SCOREBOARD_SIZE


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a score.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def register_score(leaderboard: List[int], value: Any, size: int = SCOREBOARD_SIZE) -> List[int]:
    """Return a new leaderboard with ``value`` inserted.

    Non-positive or non-numeric values leave the board unchanged. Entries are
    kept sorted descending and truncated to ``size``.
    """
    if not _is_number(value) or value <= 0:
        return list(leaderboard)
    updated = sorted([*leaderboard, math.floor(value)], reverse=True)
    return updated[:size]


def sanitize_leaderboard(raw: Any, size: int = SCOREBOARD_SIZE) -> List[int]:
    """Coerce stored leaderboard data; anything that is not a list loads as empty."""
    if not isinstance(raw, list):
        return []
    values = [math.floor(item) for item in raw if _is_number(item) and item > 0]
    return sorted(values, reverse=True)[:size]


def sanitize_best(raw: Any) -> int:
    if isinstance(raw, str):
        try:
            raw = float(raw)
        except ValueError:
            return 0
    if not _is_number(raw) or raw < 0:
        return 0
    return math.floor(raw)
