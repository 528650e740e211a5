import math

from esper import World

from colormerge.components.rhythm_meter import RhythmLane, RhythmMeter
from colormerge.constants import BEAT_MS, RHYTHM_CYCLE_MS, RHYTHM_PATTERN
from colormerge.events.bus import EVENT_TICK, EventBus
from colormerge.utils.game_state import is_game_over, state_component
from colormerge.world import world_now

SEGMENT_NAMES = ("a", "b", "c")


def lane_cursor(elapsed_ms: float, cycle_ms: float = RHYTHM_CYCLE_MS) -> float:
    """Cursor position as a fraction of the lane width (0.04..0.96)."""
    position = elapsed_ms % cycle_ms
    wave = math.sin(position / cycle_ms * math.pi * 2)
    return (50 + wave * 46) / 100


def lane_segment(elapsed_ms: float, beat_ms: float = BEAT_MS, pattern=RHYTHM_PATTERN) -> str:
    cycle_ms = sum(pattern) * beat_ms
    beats = (elapsed_ms % cycle_ms) / beat_ms
    boundary = 0.0
    for name, length in zip(SEGMENT_NAMES, pattern):
        boundary += length
        if beats < boundary:
            return name
    return SEGMENT_NAMES[len(pattern) - 1]


class RhythmLaneSystem:
    """Animates the decorative beat lane and expires the grade label.

    Does nothing for worlds without a RhythmMeter (timer variant) or once the
    session has ended.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        if is_game_over(self.world):
            return
        meter = state_component(self.world, RhythmMeter)
        lane = state_component(self.world, RhythmLane)
        if meter is None or lane is None:
            return
        now = kwargs.get('now')
        now = world_now(self.world) if now is None else float(now)
        elapsed = now - meter.base_time
        lane.cursor = lane_cursor(elapsed)
        lane.segment = lane_segment(elapsed)
        if meter.label_expires_at is not None and now >= meter.label_expires_at:
            meter.last_grade = "KEEP"
            meter.label_expires_at = None
