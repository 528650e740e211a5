import random
import time
from typing import Callable

from esper import World
from colormerge.events.bus import EventBus
from colormerge.components.board import Board
from colormerge.components.game_state import GameState, GamePhase, ScoringVariant
from colormerge.components.score_tracker import ScoreTracker
from colormerge.constants import BOARD_SIZE
from colormerge.systems.scoring import ScoringStrategy, create_scoring_strategy

Clock = Callable[[], float]


def default_clock() -> float:
    """Milliseconds from a monotonic high resolution counter."""
    return time.perf_counter() * 1000.0


def create_world(
    event_bus: EventBus,
    *,
    variant: ScoringVariant | str = ScoringVariant.RHYTHM,
    rng: random.Random | None = None,
    clock: Clock | None = None,
    board_size: int = BOARD_SIZE,
    strategy: ScoringStrategy | None = None,
) -> World:
    """Create the session world.

    The world holds one board entity and one state entity. The scoring
    strategy, random source and clock are attached to the world itself so
    every system shares them. Call ``GameFlowSystem`` (or
    ``start_new_game``) to deal the opening tiles.
    """
    resolved = ScoringVariant.parse(variant)
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "clock", clock or default_clock)
    if strategy is None:
        strategy = create_scoring_strategy(resolved)
    elif strategy.variant != resolved:
        raise ValueError(f"Strategy variant {strategy.variant} does not match {resolved}")
    setattr(world, "scoring", strategy)

    world.create_entity(GameState(phase=GamePhase.READY, variant=resolved), ScoreTracker())
    world.create_entity(Board(size=board_size))
    return world


def get_scoring(world: World) -> ScoringStrategy:
    return getattr(world, "scoring")


def get_rng(world: World) -> random.Random:
    return getattr(world, "random")


def world_now(world: World) -> float:
    return getattr(world, "clock")()
