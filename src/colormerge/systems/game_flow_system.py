from __future__ import annotations

import logging

from esper import World

from colormerge.components.game_state import GamePhase
from colormerge.components.score_tracker import ScoreTracker
from colormerge.constants import INITIAL_TILES, SCOREBOARD_SIZE
from colormerge.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_LEADERBOARD_CHANGED,
    EVENT_NEW_GAME_REQUEST,
    EVENT_SCORE_CHANGED,
)
from colormerge.systems.board_ops import get_board, reset_board
from colormerge.utils.game_state import get_game_state, set_phase, state_component
from colormerge.utils.scoreboard import register_score
from colormerge.world import get_rng, get_scoring, world_now

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Owns the session lifecycle: new game, restart and game-over bookkeeping.

    A new game keeps the best score and leaderboard and discards everything
    else. Game over records the final score into the leaderboard.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        start_immediately: bool = True,
        scoreboard_size: int = SCOREBOARD_SIZE,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.scoreboard_size = scoreboard_size
        self.event_bus.subscribe(EVENT_NEW_GAME_REQUEST, self._on_new_game_request)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        if start_immediately:
            self.start_new_game()

    def _on_new_game_request(self, sender, **payload) -> None:
        self.start_new_game()

    def start_new_game(self) -> None:
        state = get_game_state(self.world)
        tracker = self._tracker()
        tracker.score = 0
        state.reason = None

        board = get_board(self.world)
        reset_board(board, get_rng(self.world), tiles=INITIAL_TILES)
        get_scoring(self.world).reset(self.world, world_now(self.world))
        set_phase(self.world, self.event_bus, GamePhase.READY)

        logger.info("New %s game started", state.variant.value)
        self.event_bus.emit(EVENT_GAME_STARTED, variant=state.variant)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, best=tracker.best, delta=0, new_best=False)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="new_game", board=board.cells)

    def _on_game_over(self, sender, **payload) -> None:
        tracker = self._tracker()
        score = payload.get("score", tracker.score)
        logger.info("Game over (%s) with score %s", payload.get("reason"), score)
        updated = register_score(tracker.leaderboard, score, self.scoreboard_size)
        if updated == tracker.leaderboard:
            return
        tracker.leaderboard = updated
        self.event_bus.emit(EVENT_LEADERBOARD_CHANGED, leaderboard=list(updated))

    def _tracker(self) -> ScoreTracker:
        tracker = state_component(self.world, ScoreTracker)
        if tracker is None:
            raise RuntimeError("ScoreTracker component not found")
        return tracker
