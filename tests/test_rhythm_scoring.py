import pytest

from colormerge.components.health import Health
from colormerge.components.rhythm_meter import RhythmLane, RhythmMeter
from colormerge.events.bus import EventBus
from colormerge.systems.move_engine import MergeEvent
from colormerge.systems.scoring import BonusContext, RhythmScoring
from colormerge.systems.scoring.rhythm import (
    classify_timing,
    compute_multiplier,
    health_band,
    multiplier_tier,
    next_combo,
)
from colormerge.utils.game_state import state_component
from colormerge.world import create_world


@pytest.mark.parametrize(
    "delta, grade, health_delta",
    [
        (0, "GREAT", 10),
        (70, "GREAT", 10),
        (-71, "GOOD", 4),
        (140, "GOOD", 4),
        (-220, "BAD", -8),
        (221, "BAD", -14),
    ],
)
def test_classify_timing_windows(delta, grade, health_delta):
    assert classify_timing(delta) == (grade, health_delta)


def test_combo_rules():
    assert next_combo(3, "GREAT") == 4
    assert next_combo(3, "GOOD") == 2
    assert next_combo(0, "GOOD") == 0
    assert next_combo(9, "BAD") == 0


def test_multiplier_rules():
    assert compute_multiplier(0, "GREAT") == pytest.approx(1.25)
    assert compute_multiplier(1, "GREAT") == pytest.approx(1.31)
    # A bad grade never drops below 1.
    assert compute_multiplier(0, "BAD") == 1
    # Combo contribution is capped.
    assert compute_multiplier(100, "GREAT") == pytest.approx(1 + 2.2 + 0.25)


def test_display_tiers_and_bands():
    assert multiplier_tier(2.8) == "max"
    assert multiplier_tier(2.1) == "high"
    assert multiplier_tier(1.5) == "mid"
    assert multiplier_tier(1.49) == "base"
    assert health_band(61) == "good"
    assert health_band(60) == "warn"
    assert health_band(31) == "warn"
    assert health_band(30) == "danger"


def _rhythm_world():
    world = create_world(EventBus(), variant="rhythm", clock=lambda: 0.0)
    strategy = RhythmScoring()
    strategy.reset(world, 0.0)
    return world, strategy


def test_reset_installs_fresh_meters():
    world, _ = _rhythm_world()

    health = state_component(world, Health)
    meter = state_component(world, RhythmMeter)
    assert health.current == 100
    assert meter.combo == 0
    assert meter.multiplier == 1.0
    assert meter.last_grade == "READY"
    assert state_component(world, RhythmLane) is not None


def test_on_beat_turn_scores_with_previous_multiplier():
    world, strategy = _rhythm_world()

    first = strategy.compute_bonus(world, BonusContext(now=0.0, gained_score=4))
    second = strategy.compute_bonus(
        world,
        BonusContext(now=500.0, gained_score=8, merge_events=[MergeEvent(0, 0, 8)]),
    )

    assert first.grade == "GREAT"
    assert first.turn_score == 4
    assert first.side_effects["next_multiplier"] == pytest.approx(1.31)
    assert second.grade == "GREAT"
    assert second.turn_score == 10  # floor(8 * 1.31)
    assert second.merge_events == [MergeEvent(0, 0, 10)]
    meter = state_component(world, RhythmMeter)
    assert meter.combo == 2
    assert meter.beat_index == 2
    assert meter.last_grade == "GREAT"
    assert meter.label_expires_at == pytest.approx(760.0)


def test_health_is_clamped_to_maximum():
    world, strategy = _rhythm_world()

    strategy.compute_bonus(world, BonusContext(now=0.0, gained_score=0))

    assert state_component(world, Health).current == 100


def test_far_miss_can_deplete_health():
    world, strategy = _rhythm_world()
    state_component(world, Health).current = 10

    result = strategy.compute_bonus(world, BonusContext(now=5000.0, gained_score=4))

    assert result.grade == "BAD"
    assert result.health_delta == -14
    assert result.depleted is True
    assert state_component(world, Health).current == 0
    meter = state_component(world, RhythmMeter)
    assert meter.combo == 0
    assert meter.beat_index == 1


def test_rhythm_never_expires():
    world, strategy = _rhythm_world()
    assert strategy.check_expired(world, 10_000_000.0) is False
