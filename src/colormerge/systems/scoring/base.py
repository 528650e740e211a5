from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Protocol, Sequence

from esper import World

from colormerge.components.game_state import ScoringVariant
from colormerge.systems.move_engine import MergeEvent


@dataclass(slots=True)
class BonusContext:
    """Inputs a strategy sees for one accepted turn."""

    now: float
    gained_score: int
    merge_events: Sequence[MergeEvent] = ()


@dataclass(slots=True)
class BonusResult:
    """Outcome of applying a strategy to one accepted turn.

    ``turn_score`` is what gets added to the session score. ``merge_events``
    carry the per-cell points as they should appear in popups.
    """

    turn_score: int
    multiplier: float = 1.0
    flat_bonus: int = 0
    merge_events: List[MergeEvent] = field(default_factory=list)
    grade: str | None = None
    health_delta: int = 0
    depleted: bool = False
    side_effects: dict[str, Any] = field(default_factory=dict)


class ScoringStrategy(Protocol):
    """Interface implemented by the rhythm and timer bonus rules."""

    variant: ScoringVariant

    def reset(self, world: World, now: float) -> None:
        """Install fresh meters on the game state entity."""
        ...

    def compute_bonus(self, world: World, ctx: BonusContext) -> BonusResult:
        ...

    def check_expired(self, world: World, now: float) -> bool:
        """True once the session ran out of time without a legal move."""
        ...


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)
