from __future__ import annotations

from esper import World

from colormerge.components.direction import Direction
from colormerge.components.game_state import GamePhase
from colormerge.components.score_tracker import ScoreTracker
from colormerge.events.bus import (
    EventBus,
    EVENT_DIRECTION_INPUT,
    EVENT_RHYTHM_JUDGED,
    EVENT_SCORE_CHANGED,
    EVENT_TURN_RESOLVED,
)
from colormerge.systems.board_ops import get_board, is_locked, spawn_random_tile
from colormerge.systems.move_engine import MoveResult, move
from colormerge.systems.scoring import BonusContext, BonusResult
from colormerge.utils.game_state import finish_game, get_game_state, set_phase, state_component
from colormerge.world import get_rng, get_scoring, world_now

REASON_BOARD_LOCKED = "Game over"
REASON_HEALTH_DEPLETED = "Lost the rhythm"
REASON_TIMED_OUT = "Time's up"


class TurnSystem:
    """Resolves one directional input into a turn.

    Illegal moves (nothing slides or merges) are dropped silently. Accepted
    turns apply the scoring strategy, spawn one tile and then check terminal
    conditions: a locked board first, then depleted health.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_DIRECTION_INPUT, self.on_direction_input)

    def on_direction_input(self, sender, **kwargs):
        direction = kwargs.get('direction')
        if direction is None:
            return
        try:
            direction = Direction(direction)
        except ValueError:
            return
        now = kwargs.get('now')
        self.take_turn(direction, now=world_now(self.world) if now is None else float(now))

    def take_turn(self, direction: Direction, *, now: float) -> bool:
        """Apply a move; returns True when the turn was accepted."""
        state = get_game_state(self.world)
        if state.phase.is_terminal:
            return False
        scoring = get_scoring(self.world)
        if scoring.check_expired(self.world, now):
            finish_game(self.world, self.event_bus, GamePhase.TIMED_OUT, REASON_TIMED_OUT)
            return False

        board = get_board(self.world)
        result = move(board, direction)
        if not result.moved:
            return False

        bonus = scoring.compute_bonus(
            self.world,
            BonusContext(now=now, gained_score=result.gained_score, merge_events=result.merge_events),
        )
        board.cells = result.next_board
        board.next_tile_id = result.next_tile_id
        self._add_score(bonus.turn_score)
        if bonus.grade is not None:
            self.event_bus.emit(
                EVENT_RHYTHM_JUDGED,
                grade=bonus.grade,
                delta=bonus.side_effects.get('delta', 0.0),
                health=bonus.side_effects.get('health'),
                combo=bonus.side_effects.get('combo', 0),
                multiplier=bonus.side_effects.get('next_multiplier', bonus.multiplier),
            )

        spawned = spawn_random_tile(board, get_rng(self.world))
        if state.phase == GamePhase.READY:
            set_phase(self.world, self.event_bus, GamePhase.PLAYING)
        self._emit_turn(result, bonus, spawned)

        if is_locked(board.cells):
            finish_game(self.world, self.event_bus, GamePhase.BOARD_LOCKED, REASON_BOARD_LOCKED)
        elif bonus.depleted:
            finish_game(self.world, self.event_bus, GamePhase.HEALTH_DEPLETED, REASON_HEALTH_DEPLETED)
        return True

    def _add_score(self, delta: int) -> None:
        tracker = state_component(self.world, ScoreTracker)
        if tracker is None:
            return
        tracker.score += delta
        new_best = tracker.score > tracker.best
        if new_best:
            tracker.best = tracker.score
        self.event_bus.emit(
            EVENT_SCORE_CHANGED,
            score=tracker.score,
            best=tracker.best,
            delta=delta,
            new_best=new_best,
        )

    def _emit_turn(self, result: MoveResult, bonus: BonusResult, spawned) -> None:
        self.event_bus.emit(
            EVENT_TURN_RESOLVED,
            board=get_board(self.world).cells,
            motion_map=result.motion_map,
            merged_ids=result.merged_ids,
            merged_levels=list(result.merged_levels),
            merge_events=bonus.merge_events,
            spawned_id=spawned.id if spawned is not None else None,
            spawned_level=spawned.level if spawned is not None else None,
            turn_score=bonus.turn_score,
            bonus=bonus,
        )
