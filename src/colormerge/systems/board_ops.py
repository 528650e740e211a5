from __future__ import annotations

import random
from typing import Iterable, List, Sequence, Tuple

from esper import World

from colormerge.components.board import Board, Cells
from colormerge.components.tile import Tile
from colormerge.constants import SPAWN_LEVEL_ONE_CHANCE

Position = Tuple[int, int]


def empty_board(size: int) -> Cells:
    return [[None] * size for _ in range(size)]


def empty_cells(cells: Cells) -> List[Position]:
    """Row-major list of coordinates holding no tile."""
    positions: List[Position] = []
    for row, line in enumerate(cells):
        for col, tile in enumerate(line):
            if tile is None:
                positions.append((row, col))
    return positions


def is_locked(cells: Cells) -> bool:
    """True when the grid is full and no two side-adjacent tiles share a level."""
    size = len(cells)
    for row in range(size):
        for col in range(size):
            tile = cells[row][col]
            if tile is None:
                return False
            # Checking right and down covers every adjacent pair once.
            if col + 1 < size:
                right = cells[row][col + 1]
                if right is not None and right.level == tile.level:
                    return False
            if row + 1 < size:
                below = cells[row + 1][col]
                if below is not None and below.level == tile.level:
                    return False
    return True


def count_tiles(cells: Cells) -> int:
    return sum(1 for line in cells for tile in line if tile is not None)


def tile_positions(cells: Cells) -> dict[int, Position]:
    return {
        tile.id: (row, col)
        for row, line in enumerate(cells)
        for col, tile in enumerate(line)
        if tile is not None
    }


def levels_of(cells: Cells) -> List[List[int]]:
    """Grid of tile levels with 0 marking empty cells."""
    return [[tile.level if tile is not None else 0 for tile in line] for line in cells]


def board_from_levels(levels: Sequence[Sequence[int]]) -> Board:
    """Build a Board from a square grid of levels (0 = empty); ids run row-major from 1."""
    size = len(levels)
    if any(len(line) != size for line in levels):
        raise ValueError("Levels grid must be square")
    board = Board(size=size)
    for row, line in enumerate(levels):
        for col, level in enumerate(line):
            if level:
                board.cells[row][col] = Tile(id=board.next_tile_id, level=int(level))
                board.next_tile_id += 1
    return board


def roll_spawn_level(rng: random.Random) -> int:
    return 1 if rng.random() < SPAWN_LEVEL_ONE_CHANCE else 2


def spawn_random_tile(board: Board, rng: random.Random | None = None) -> Tile | None:
    """Place a fresh tile on a uniformly random empty cell.

    Returns None without touching the board when no cell is free.
    """
    rng = rng or random
    free = empty_cells(board.cells)
    if not free:
        return None
    row, col = free[rng.randrange(len(free))]
    tile = Tile(id=board.next_tile_id, level=roll_spawn_level(rng))
    board.next_tile_id += 1
    board.cells[row][col] = tile
    return tile


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board component not found")


def reset_board(board: Board, rng: random.Random | None = None, *, tiles: int = 2) -> List[Tile]:
    """Clear the grid in place and spawn the opening tiles."""
    board.cells = empty_board(board.size)
    spawned: List[Tile] = []
    for _ in range(tiles):
        tile = spawn_random_tile(board, rng)
        if tile is not None:
            spawned.append(tile)
    return spawned


def iter_tiles(cells: Cells) -> Iterable[Tuple[int, int, Tile]]:
    for row, line in enumerate(cells):
        for col, tile in enumerate(line):
            if tile is not None:
                yield row, col, tile
