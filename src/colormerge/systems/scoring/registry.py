from __future__ import annotations

from typing import Any, Callable, Dict

from colormerge.components.game_state import ScoringVariant
from colormerge.systems.scoring.base import ScoringStrategy
from colormerge.systems.scoring.rhythm import RhythmScoring
from colormerge.systems.scoring.timer import TimerScoring

_FACTORIES: Dict[ScoringVariant, Callable[..., ScoringStrategy]] = {
    ScoringVariant.RHYTHM: RhythmScoring,
    ScoringVariant.TIMER: TimerScoring,
}


def create_scoring_strategy(variant: ScoringVariant | str, **options: Any) -> ScoringStrategy:
    """Build the strategy for a variant; options go to its constructor."""
    resolved = ScoringVariant.parse(variant)
    return _FACTORIES[resolved](**options)
