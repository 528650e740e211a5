from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float (seconds), now=float (ms)


# ============================================================================
# INPUT
# ============================================================================
EVENT_KEY_PRESS = "key_press"                      # payload: key=str
EVENT_POINTER_DOWN = "pointer_down"                # payload: x, y
EVENT_POINTER_UP = "pointer_up"                    # payload: x, y
EVENT_DIRECTION_INPUT = "direction_input"          # payload: direction=Direction, now=float|None


# ============================================================================
# BOARD & TURNS
# ============================================================================
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, board=Cells
EVENT_TURN_RESOLVED = "turn_resolved"              # payload: board, motion_map, merged_ids, spawned_id, spawned_level, merge_events, merged_levels, turn_score, bonus
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, best=int, delta=int, new_best=bool
EVENT_RHYTHM_JUDGED = "rhythm_judged"              # payload: grade=str, delta=float, health=int, combo=int, multiplier=float


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_NEW_GAME_REQUEST = "new_game_request"        # payload: source=str|None
EVENT_GAME_STARTED = "game_started"                # payload: variant=ScoringVariant
EVENT_PHASE_CHANGED = "phase_changed"              # payload: previous_phase=GamePhase, new_phase=GamePhase
EVENT_GAME_OVER = "game_over"                      # payload: phase=GamePhase, reason=str, score=int
EVENT_LEADERBOARD_CHANGED = "leaderboard_changed"  # payload: leaderboard=list[int]
