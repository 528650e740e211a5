"""Move/merge resolution for one turn.

``move`` is pure: it reads a Board, never mutates it, and returns a
``MoveResult`` describing the next grid plus everything the presentation
layer needs to animate the turn.

Each line is resolved in a single left-to-right pass in travel order. A tile
takes part in at most one merge per turn, so ``[1, 1, 1]`` becomes
``[2, 1]`` and ``[1, 1, 1, 1]`` becomes ``[2, 2]``. Larger boards would make a
second pass meaningful; it is intentionally not done.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from colormerge.components.board import Board, Cells
from colormerge.components.direction import Direction
from colormerge.components.tile import Tile
from colormerge.systems.board_ops import empty_board

Position = Tuple[int, int]


@dataclass(slots=True, frozen=True)
class Motion:
    id: int
    from_pos: Position
    to_pos: Position

    @property
    def displaced(self) -> bool:
        return self.from_pos != self.to_pos


@dataclass(slots=True, frozen=True)
class MergeEvent:
    row: int
    col: int
    points: int


@dataclass(slots=True)
class MoveResult:
    next_board: Cells
    moved: bool = False
    gained_score: int = 0
    motion_map: Dict[int, Motion] = field(default_factory=dict)
    merged_ids: Set[int] = field(default_factory=set)
    merged_levels: List[int] = field(default_factory=list)
    merge_events: List[MergeEvent] = field(default_factory=list)
    next_tile_id: int = 1

    @property
    def merge_count(self) -> int:
        return len(self.merged_ids)


@dataclass(slots=True)
class _LineEntry:
    tile: Tile
    origin: Position


def score_for_level(level: int) -> int:
    return 2 ** level


def position_for(direction: Direction, index: int, pos: int, size: int) -> Position:
    """Map (line index, position along travel order) to a grid coordinate."""
    match direction:
        case Direction.LEFT:
            return index, pos
        case Direction.RIGHT:
            return index, size - 1 - pos
        case Direction.UP:
            return pos, index
        case Direction.DOWN:
            return size - 1 - pos, index
    raise ValueError(f"Unknown direction {direction!r}")


def read_line(cells: Cells, direction: Direction, index: int) -> List[_LineEntry]:
    size = len(cells)
    entries: List[_LineEntry] = []
    for pos in range(size):
        row, col = position_for(direction, index, pos, size)
        tile = cells[row][col]
        if tile is not None:
            entries.append(_LineEntry(tile=tile, origin=(row, col)))
    return entries


def move(board: Board, direction: Direction) -> MoveResult:
    size = board.size
    source = board.cells
    result = MoveResult(next_board=empty_board(size), next_tile_id=board.next_tile_id)
    pending_merges: List[Tuple[int, int]] = []  # (merged tile id, points)

    for index in range(size):
        line = read_line(source, direction, index)
        merged_line: List[_LineEntry] = []
        i = 0
        while i < len(line):
            current = line[i]
            following: Optional[_LineEntry] = line[i + 1] if i + 1 < len(line) else None
            if following is not None and current.tile.level == following.tile.level:
                merged = Tile(id=result.next_tile_id, level=current.tile.level + 1)
                result.next_tile_id += 1
                merged_line.append(_LineEntry(tile=merged, origin=current.origin))
                result.merged_ids.add(merged.id)
                result.merged_levels.append(merged.level)
                points = score_for_level(merged.level)
                result.gained_score += points
                pending_merges.append((merged.id, points))
                i += 2
            else:
                merged_line.append(current)
                i += 1

        for pos, entry in enumerate(merged_line):
            row, col = position_for(direction, index, pos, size)
            result.next_board[row][col] = entry.tile
            result.motion_map[entry.tile.id] = Motion(id=entry.tile.id, from_pos=entry.origin, to_pos=(row, col))

    result.moved = any(
        motion.displaced or motion.id in result.merged_ids
        for motion in result.motion_map.values()
    )
    for tile_id, points in pending_merges:
        motion = result.motion_map.get(tile_id)
        if motion is None:
            continue
        row, col = motion.to_pos
        result.merge_events.append(MergeEvent(row=row, col=col, points=points))
    return result
