import pytest

from colormerge.components.direction import Direction
from colormerge.components.game_state import GamePhase
from colormerge.components.rhythm_meter import RhythmLane, RhythmMeter
from colormerge.constants import RHYTHM_CYCLE_MS
from colormerge.events.bus import EVENT_TICK
from colormerge.systems.rhythm_lane_system import RhythmLaneSystem, lane_cursor, lane_segment
from colormerge.utils.game_state import finish_game, state_component
from tests.helpers import make_session, set_levels


def test_lane_cursor_sweeps_the_lane():
    assert lane_cursor(0) == pytest.approx(0.5)
    assert lane_cursor(RHYTHM_CYCLE_MS / 4) == pytest.approx(0.96)
    assert lane_cursor(RHYTHM_CYCLE_MS * 3 / 4) == pytest.approx(0.04)
    assert lane_cursor(RHYTHM_CYCLE_MS) == pytest.approx(0.5)


@pytest.mark.parametrize(
    "elapsed, segment",
    [(0, "a"), (1499, "a"), (1500, "b"), (2999, "b"), (3000, "c"), (6499, "c"), (6500, "a")],
)
def test_lane_segments_follow_pattern(elapsed, segment):
    assert lane_segment(elapsed) == segment


def test_tick_moves_cursor():
    session = make_session()
    RhythmLaneSystem(session.world, session.bus)

    session.bus.emit(EVENT_TICK, dt=1/60, now=RHYTHM_CYCLE_MS / 4)

    lane = state_component(session.world, RhythmLane)
    assert lane.cursor == pytest.approx(0.96)
    assert lane.segment == "b"  # 3.25 beats in


def test_grade_label_reverts_after_a_moment():
    session = make_session()
    RhythmLaneSystem(session.world, session.bus)
    set_levels(session.world, [[1, 1, 0, 0], [0] * 4, [0] * 4, [0] * 4])
    session.turns.take_turn(Direction.LEFT, now=0.0)
    meter = state_component(session.world, RhythmMeter)

    session.bus.emit(EVENT_TICK, dt=1/60, now=200.0)
    assert meter.last_grade == "GREAT"

    session.bus.emit(EVENT_TICK, dt=1/60, now=260.0)
    assert meter.last_grade == "KEEP"
    assert meter.label_expires_at is None


def test_lane_freezes_after_game_over():
    session = make_session()
    RhythmLaneSystem(session.world, session.bus)
    finish_game(session.world, session.bus, GamePhase.HEALTH_DEPLETED, "Lost the rhythm")

    session.bus.emit(EVENT_TICK, dt=1/60, now=RHYTHM_CYCLE_MS / 4)

    assert state_component(session.world, RhythmLane).cursor == pytest.approx(0.5)


def test_timer_sessions_have_no_lane():
    session = make_session("timer")
    RhythmLaneSystem(session.world, session.bus)

    session.bus.emit(EVENT_TICK, dt=1/60, now=100.0)

    assert state_component(session.world, RhythmLane) is None
