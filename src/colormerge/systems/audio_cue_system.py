"""Short synthesized clicks describing what happened on the board.

The system only decides *which* cues to play; a sink callable receives the
``SoundCue`` records and is free to synthesize, queue or discard them.
"""
from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Iterable, List

from colormerge.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_NEW_GAME_REQUEST,
    EVENT_TURN_RESOLVED,
)

DEFAULT_CLICK_DURATION = 0.03


@dataclass(slots=True, frozen=True)
class SoundCue:
    frequency: float
    gain: float
    delay: float = 0.0  # seconds after the triggering event
    duration: float = DEFAULT_CLICK_DURATION


CueSink = Callable[[SoundCue], None]


def move_cue() -> SoundCue:
    return SoundCue(1700, 0.06)


def spawn_cue(level: int) -> SoundCue:
    return SoundCue(1750 + level * 30, 0.06)


def merge_cues(value: int, chain: int) -> List[SoundCue]:
    """Two stacked clicks; higher values and later chain links sound brighter."""
    step = max(1, round(math.log2(max(2, value))))
    base = 1500 + step * 60 + chain * 40
    return [
        SoundCue(base, min(0.08 + step * 0.003, 0.15), 0.0, 0.034),
        SoundCue(base * 1.2, 0.055, 0.014, 0.028),
    ]


def ui_tap_cue() -> SoundCue:
    return SoundCue(1850, 0.05, 0.0, 0.025)


def game_over_cue() -> SoundCue:
    return SoundCue(900, 0.08, 0.0, 0.06)


def turn_cues(merged_levels: Iterable[int], spawned_level: int | None) -> List[SoundCue]:
    cues = [move_cue()]
    if spawned_level is not None:
        cues.append(spawn_cue(spawned_level))
    for chain, level in enumerate(sorted(merged_levels), start=1):
        cues.extend(merge_cues(2 ** level, chain))
    return cues


class AudioCueSystem:
    def __init__(self, event_bus: EventBus, *, sink: CueSink | None = None, history_size: int = 64):
        self.event_bus = event_bus
        self._sink = sink
        self.history: Deque[SoundCue] = deque(maxlen=history_size)
        self.event_bus.subscribe(EVENT_TURN_RESOLVED, self.on_turn_resolved)
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self.on_new_game_request)

    def on_turn_resolved(self, sender, **kwargs):
        self._play(turn_cues(kwargs.get('merged_levels') or (), kwargs.get('spawned_level')))

    def on_game_over(self, sender, **kwargs):
        self._play([game_over_cue()])

    def on_new_game_request(self, sender, **kwargs):
        self._play([ui_tap_cue()])

    def _play(self, cues: Iterable[SoundCue]) -> None:
        for cue in cues:
            self.history.append(cue)
            if self._sink is not None:
                self._sink(cue)
