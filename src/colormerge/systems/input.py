from __future__ import annotations

from typing import Any

from esper import World

from colormerge.events.bus import (
    EventBus,
    EVENT_DIRECTION_INPUT,
    EVENT_KEY_PRESS,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_UP,
)
from colormerge.utils.game_state import is_game_over
from colormerge.utils.input_mapping import direction_for_key
from colormerge.utils.swipe import SwipeTracker
from colormerge.world import world_now


class InputSystem:
    """Translates key presses and swipes into direction input events."""

    def __init__(self, world: World, event_bus: EventBus, *, swipe: SwipeTracker | None = None):
        self.world = world
        self.event_bus = event_bus
        self._swipe = swipe or SwipeTracker()
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)
        self.event_bus.subscribe(EVENT_POINTER_DOWN, self.on_pointer_down)
        self.event_bus.subscribe(EVENT_POINTER_UP, self.on_pointer_up)

    @property
    def swipe(self) -> SwipeTracker:
        return self._swipe

    def on_key_press(self, sender, **kwargs):
        direction = direction_for_key(kwargs.get('key'))
        if direction is None:
            return
        self._emit_direction(direction)

    def on_pointer_down(self, sender, **kwargs):
        point = self._point(kwargs)
        if point is None:
            return
        self._swipe.press(*point)

    def on_pointer_up(self, sender, **kwargs):
        point = self._point(kwargs)
        if point is None:
            self._swipe.reset()
            return
        direction = self._swipe.release(*point)
        if direction is None:
            return
        self._emit_direction(direction)

    def _emit_direction(self, direction) -> None:
        if is_game_over(self.world):
            return
        self.event_bus.emit(EVENT_DIRECTION_INPUT, direction=direction, now=world_now(self.world))

    @staticmethod
    def _point(payload: dict[str, Any]) -> tuple[float, float] | None:
        x = payload.get('x')
        y = payload.get('y')
        if x is None or y is None:
            return None
        try:
            return float(x), float(y)
        except (TypeError, ValueError):
            return None
