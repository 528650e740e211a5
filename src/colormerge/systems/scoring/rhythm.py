"""Rhythm bonus rules.

Turns are judged against a fixed 120 BPM schedule that starts when the
session is reset. The expected time of the next judged input is
``base_time + beat_index * BEAT_MS`` and the beat index advances by one per
accepted turn no matter how well it was timed, so the player drifts against
the schedule if they rush or stall.

The turn is scored with the multiplier built up by earlier turns; the
judgment of the current input then updates health, combo and the multiplier
for the next one.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from esper import World

from colormerge.components.game_state import ScoringVariant
from colormerge.components.health import Health
from colormerge.components.rhythm_meter import RhythmLane, RhythmMeter
from colormerge.constants import (
    BEAT_MS,
    COMBO_CAP,
    COMBO_RATE,
    GRADE_BONUS,
    HEALTH_BANDS,
    JUDGE_LABEL_MS,
    JUDGE_MISS_HEALTH_DELTA,
    JUDGE_WINDOWS,
    MAX_HEALTH,
    MULTIPLIER_CAP,
    MULTIPLIER_TIERS,
)
from colormerge.systems.move_engine import MergeEvent
from colormerge.systems.scoring.base import BonusContext, BonusResult, clamp
from colormerge.utils.game_state import get_state_entity


@dataclass(slots=True, frozen=True)
class Judgment:
    grade: str
    delta: float
    health_delta: int


def expected_beat_time(base_time: float, beat_index: int, beat_ms: float = BEAT_MS) -> float:
    return base_time + beat_index * beat_ms


def classify_timing(delta: float) -> tuple[str, int]:
    """Return (grade, health delta) for a signed deviation in milliseconds."""
    deviation = abs(delta)
    for window, grade, health_delta in JUDGE_WINDOWS:
        if deviation <= window:
            return grade, health_delta
    return "BAD", JUDGE_MISS_HEALTH_DELTA


def next_combo(combo: int, grade: str) -> int:
    if grade == "GREAT":
        return combo + 1
    if grade == "GOOD":
        return max(combo - 1, 0)
    return 0


def compute_multiplier(combo: int, grade: str) -> float:
    combo_boost = min(combo * COMBO_RATE, COMBO_CAP)
    return clamp(1 + combo_boost + GRADE_BONUS.get(grade, 0.0), 1, MULTIPLIER_CAP)


def multiplier_tier(multiplier: float) -> str:
    for lower_bound, tier in MULTIPLIER_TIERS:
        if multiplier >= lower_bound:
            return tier
    return "base"


def health_band(current: float) -> str:
    for lower_bound, band in HEALTH_BANDS:
        if current > lower_bound:
            return band
    return "danger"


class RhythmScoring:
    variant = ScoringVariant.RHYTHM

    def __init__(self, beat_ms: float = BEAT_MS, max_health: int = MAX_HEALTH):
        self.beat_ms = beat_ms
        self.max_health = max_health

    def reset(self, world: World, now: float) -> None:
        entity = get_state_entity(world)
        world.add_component(entity, Health(current=self.max_health, max_hp=self.max_health))
        world.add_component(entity, RhythmMeter(base_time=now))
        world.add_component(entity, RhythmLane())

    def judge(self, meter: RhythmMeter, now: float) -> Judgment:
        """Grade an input against the expected beat and advance the schedule."""
        delta = now - expected_beat_time(meter.base_time, meter.beat_index, self.beat_ms)
        grade, health_delta = classify_timing(delta)
        meter.beat_index += 1
        return Judgment(grade=grade, delta=delta, health_delta=health_delta)

    def compute_bonus(self, world: World, ctx: BonusContext) -> BonusResult:
        entity = get_state_entity(world)
        meter = world.component_for_entity(entity, RhythmMeter)
        health = world.component_for_entity(entity, Health)

        judgment = self.judge(meter, ctx.now)
        multiplier = meter.multiplier
        turn_score = math.floor(ctx.gained_score * multiplier)
        scaled = [
            MergeEvent(row=event.row, col=event.col, points=math.floor(event.points * multiplier))
            for event in ctx.merge_events
        ]

        health.current += judgment.health_delta
        health.clamp()
        meter.combo = next_combo(meter.combo, judgment.grade)
        meter.multiplier = compute_multiplier(meter.combo, judgment.grade)
        meter.last_grade = judgment.grade
        meter.label_expires_at = ctx.now + JUDGE_LABEL_MS

        return BonusResult(
            turn_score=turn_score,
            multiplier=multiplier,
            merge_events=scaled,
            grade=judgment.grade,
            health_delta=judgment.health_delta,
            depleted=not health.is_alive(),
            side_effects={
                "delta": judgment.delta,
                "health": health.current,
                "combo": meter.combo,
                "next_multiplier": meter.multiplier,
            },
        )

    def check_expired(self, world: World, now: float) -> bool:
        return False
