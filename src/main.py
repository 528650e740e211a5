"""Entry point for the Color Merge sliding-tile game.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import argparse
import logging
import os
from pathlib import Path

from arcade import Window, color, key, run, set_background_color

from colormerge.components.game_state import ScoringVariant
from colormerge.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from colormerge.events.bus import (
    EventBus,
    EVENT_KEY_PRESS,
    EVENT_NEW_GAME_REQUEST,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_UP,
    EVENT_TICK,
)
from colormerge.systems.animation import AnimationSystem
from colormerge.systems.audio_cue_system import AudioCueSystem
from colormerge.systems.game_flow_system import GameFlowSystem
from colormerge.systems.input import InputSystem
from colormerge.systems.render import RenderSystem
from colormerge.systems.rhythm_lane_system import RhythmLaneSystem
from colormerge.systems.score_storage_system import ScoreStorageSystem
from colormerge.systems.turn_system import TurnSystem
from colormerge.systems.turn_timer_system import TurnTimerSystem
from colormerge.utils.swipe import SwipeTracker
from colormerge.world import create_world, world_now

logger = logging.getLogger(__name__)

VARIANT_ENV = "COLOR_MERGE_VARIANT"

KEY_NAMES = {
    key.UP: "ArrowUp",
    key.DOWN: "ArrowDown",
    key.LEFT: "ArrowLeft",
    key.RIGHT: "ArrowRight",
    key.W: "w",
    key.A: "a",
    key.S: "s",
    key.D: "d",
}


class ColorMergeWindow(Window):
    def __init__(self, variant: ScoringVariant = ScoringVariant.RHYTHM, save_path: Path | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Color Merge", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, variant=variant)

        # Persistence first so the best score is known before the first deal
        self.score_storage_system = ScoreStorageSystem(self.world, self.event_bus, save_path=save_path)

        # Turn systems
        self.turn_system = TurnSystem(self.world, self.event_bus)
        self.turn_timer_system = TurnTimerSystem(self.world, self.event_bus)
        self.input_system = InputSystem(self.world, self.event_bus, swipe=SwipeTracker(y_axis_up=True))

        # Presentation systems
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.rhythm_lane_system = RhythmLaneSystem(self.world, self.event_bus)
        self.audio_cue_system = AudioCueSystem(self.event_bus, sink=self._play_cue)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        # Deals the opening board; subscribers above see the first game start.
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus)

        set_background_color(color.BLACK)

    @staticmethod
    def _play_cue(cue) -> None:
        logger.debug("cue %.0fHz gain=%.3f delay=%.3f", cue.frequency, cue.gain, cue.delay)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time, now=world_now(self.world))

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.R:
            self.event_bus.emit(EVENT_NEW_GAME_REQUEST, source="keyboard")
            return
        name = KEY_NAMES.get(symbol)
        if name is not None:
            self.event_bus.emit(EVENT_KEY_PRESS, key=name)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_POINTER_DOWN, x=x, y=y)

    def on_mouse_release(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_POINTER_UP, x=x, y=y)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Slide and merge coloured tiles.")
    parser.add_argument(
        "--variant",
        choices=[variant.value for variant in ScoringVariant],
        default=os.environ.get(VARIANT_ENV, ScoringVariant.RHYTHM.value),
        help="scoring rules: rhythm (beat judged) or timer (speed bonus)",
    )
    parser.add_argument("--save-path", type=Path, default=None, help="where to keep best score and leaderboard")
    return parser.parse_args(argv)


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    args = parse_args(argv)
    ColorMergeWindow(ScoringVariant.parse(args.variant), args.save_path)
    run()


if __name__ == "__main__":
    main()
