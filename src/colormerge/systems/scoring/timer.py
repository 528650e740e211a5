"""Speed bonus rules: every turn races a fixed countdown."""
from __future__ import annotations

import math

from esper import World

from colormerge.components.game_state import ScoringVariant
from colormerge.components.turn_timer import TurnTimer
from colormerge.constants import BONUS_POINTS, BONUS_RANGE, TURN_LIMIT_MS
from colormerge.systems.scoring.base import BonusContext, BonusResult, clamp
from colormerge.utils.game_state import get_state_entity


def speed_multiplier(remaining: float, limit: float, bonus_range: float = BONUS_RANGE) -> float:
    ratio = clamp(remaining / limit, 0.0, 1.0) if limit > 0 else 0.0
    return 1 + ratio * bonus_range


def flat_bonus(multiplier: float, bonus_points: int = BONUS_POINTS) -> int:
    return math.floor((multiplier - 1) * bonus_points)


class TimerScoring:
    variant = ScoringVariant.TIMER

    def __init__(
        self,
        limit: float = TURN_LIMIT_MS,
        bonus_range: float = BONUS_RANGE,
        bonus_points: int = BONUS_POINTS,
    ):
        if limit <= 0:
            raise ValueError("Turn limit must be positive")
        self.limit = limit
        self.bonus_range = bonus_range
        self.bonus_points = bonus_points

    def _timer(self, world: World) -> TurnTimer:
        return world.component_for_entity(get_state_entity(world), TurnTimer)

    def reset(self, world: World, now: float) -> None:
        world.add_component(get_state_entity(world), TurnTimer(limit=self.limit, deadline=now + self.limit))

    def compute_bonus(self, world: World, ctx: BonusContext) -> BonusResult:
        timer = self._timer(world)
        remaining = timer.remaining(ctx.now)
        multiplier = speed_multiplier(remaining, timer.limit, self.bonus_range)
        bonus = flat_bonus(multiplier, self.bonus_points)
        timer.last_multiplier = multiplier
        timer.last_bonus = bonus
        timer.deadline = ctx.now + timer.limit
        return BonusResult(
            turn_score=ctx.gained_score + bonus,
            multiplier=multiplier,
            flat_bonus=bonus,
            merge_events=list(ctx.merge_events),
            side_effects={"remaining": remaining, "deadline": timer.deadline},
        )

    def check_expired(self, world: World, now: float) -> bool:
        try:
            timer = self._timer(world)
        except KeyError:
            return False
        return now >= timer.deadline
