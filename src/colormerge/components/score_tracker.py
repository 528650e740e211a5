from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class ScoreTracker:
    """Current score plus the values that outlive a session."""

    score: int = 0
    best: int = 0
    leaderboard: List[int] = field(default_factory=list)
