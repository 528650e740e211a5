from colormerge.systems.scoring.base import BonusContext, BonusResult, ScoringStrategy
from colormerge.systems.scoring.registry import create_scoring_strategy
from colormerge.systems.scoring.rhythm import RhythmScoring
from colormerge.systems.scoring.timer import TimerScoring

__all__ = [
    "BonusContext",
    "BonusResult",
    "ScoringStrategy",
    "RhythmScoring",
    "TimerScoring",
    "create_scoring_strategy",
]
