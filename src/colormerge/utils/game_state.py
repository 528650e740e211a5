from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from colormerge.components.game_state import GamePhase, GameState
from colormerge.components.score_tracker import ScoreTracker
from colormerge.events.bus import EVENT_GAME_OVER, EVENT_PHASE_CHANGED, EventBus

C = TypeVar("C")


def get_state_entity(world: World) -> int:
    for entity, _ in world.get_component(GameState):
        return entity
    raise RuntimeError("GameState component not found")


def get_game_state(world: World) -> GameState:
    return world.component_for_entity(get_state_entity(world), GameState)


def state_component(world: World, component_type: Type[C]) -> C | None:
    """Fetch a component stored on the game state entity, or None."""
    try:
        return world.component_for_entity(get_state_entity(world), component_type)
    except (KeyError, RuntimeError):
        return None


def set_phase(world: World, event_bus: EventBus, phase: GamePhase) -> None:
    """Update the session phase and emit a change event when it differs."""
    state = get_game_state(world)
    previous_phase = state.phase
    if previous_phase == phase:
        return
    state.phase = phase
    event_bus.emit(EVENT_PHASE_CHANGED, previous_phase=previous_phase, new_phase=phase)


def finish_game(world: World, event_bus: EventBus, phase: GamePhase, reason: str) -> bool:
    """Move the session into a terminal phase once.

    Returns False when the session already ended, so repeated triggers within
    one turn (or a late tick) cannot end the game twice.
    """
    if not phase.is_terminal:
        raise ValueError(f"{phase} is not a terminal phase")
    state = get_game_state(world)
    if state.phase.is_terminal:
        return False
    state.reason = reason
    set_phase(world, event_bus, phase)
    tracker = state_component(world, ScoreTracker)
    score = tracker.score if tracker is not None else 0
    event_bus.emit(EVENT_GAME_OVER, phase=phase, reason=reason, score=score)
    return True


def is_game_over(world: World) -> bool:
    try:
        return get_game_state(world).phase.is_terminal
    except RuntimeError:
        return False
