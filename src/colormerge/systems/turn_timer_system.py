from __future__ import annotations

from esper import World

from colormerge.components.game_state import GamePhase
from colormerge.events.bus import EVENT_GAME_OVER, EVENT_GAME_STARTED, EVENT_TICK, EventBus
from colormerge.systems.turn_system import REASON_TIMED_OUT
from colormerge.utils.game_state import finish_game, is_game_over
from colormerge.world import get_scoring, world_now


class TurnTimerSystem:
    """Ends the session when the turn deadline passes between inputs.

    The check is armed while a session is live and cancelled on game over so a
    frame that arrives after the end (or during a restart) never acts on stale
    state.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self._armed = not is_game_over(world)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self._on_game_started)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        self._armed = True

    def cancel(self) -> None:
        self._armed = False

    def _on_game_started(self, sender, **kwargs):
        self.arm()

    def _on_game_over(self, sender, **kwargs):
        self.cancel()

    def on_tick(self, sender, **kwargs):
        if not self._armed or is_game_over(self.world):
            return
        now = kwargs.get('now')
        now = world_now(self.world) if now is None else float(now)
        if get_scoring(self.world).check_expired(self.world, now):
            finish_game(self.world, self.event_bus, GamePhase.TIMED_OUT, REASON_TIMED_OUT)
