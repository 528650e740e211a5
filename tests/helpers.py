from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from esper import World

from colormerge.components.board import Board
from colormerge.components.direction import Direction
from colormerge.events.bus import EventBus
from colormerge.systems.board_ops import board_from_levels, get_board
from colormerge.systems.game_flow_system import GameFlowSystem
from colormerge.systems.move_engine import move
from colormerge.systems.turn_system import TurnSystem
from colormerge.world import create_world


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


class EventRecorder:
    def __init__(self, bus: EventBus, *names: str) -> None:
        self.events: List[tuple[str, Dict[str, Any]]] = []
        for name in names:
            bus.subscribe(name, self._handler(name))

    def _handler(self, name: str):
        def handler(sender, **payload):
            self.events.append((name, payload))
        return handler

    def of(self, name: str) -> List[Dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]


@dataclass
class Session:
    bus: EventBus
    world: World
    clock: FakeClock
    flow: GameFlowSystem
    turns: TurnSystem

    @property
    def board(self) -> Board:
        return get_board(self.world)


def make_session(variant: str = "rhythm", *, seed: int = 1, clock: FakeClock | None = None) -> Session:
    bus = EventBus()
    clock = clock or FakeClock()
    world = create_world(bus, variant=variant, rng=random.Random(seed), clock=clock)
    flow = GameFlowSystem(world, bus)
    turns = TurnSystem(world, bus)
    return Session(bus=bus, world=world, clock=clock, flow=flow, turns=turns)


def has_legal_move(board: Board) -> bool:
    return any(move(board, direction).moved for direction in Direction)


def set_levels(world: World, levels: Sequence[Sequence[int]]) -> Board:
    """Replace the live board with a fixed layout (0 = empty)."""
    board = get_board(world)
    fixed = board_from_levels(levels)
    board.cells = fixed.cells
    board.next_tile_id = fixed.next_tile_id
    return board


# Full board with no equal neighbours except the 1-1 pair on the last row.
# Moving left merges that pair and leaves exactly one free cell; whatever
# spawns there the board is locked afterwards.
NEARLY_LOCKED = [
    [3, 4, 3, 4],
    [4, 3, 4, 3],
    [3, 4, 3, 4],
    [1, 1, 5, 6],
]
