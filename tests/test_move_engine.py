import random

import pytest

from colormerge.components.direction import Direction
from colormerge.systems.board_ops import board_from_levels, count_tiles, levels_of
from colormerge.systems.move_engine import MergeEvent, move
from tests.helpers import has_legal_move


def _row(levels):
    return board_from_levels([levels] + [[0] * len(levels) for _ in range(len(levels) - 1)])


def test_pair_merges_to_the_left():
    board = _row([1, 1, 0, 0])

    result = move(board, Direction.LEFT)

    assert result.moved is True
    assert levels_of(result.next_board)[0] == [2, 0, 0, 0]
    assert result.gained_score == 4
    assert result.merge_events == [MergeEvent(row=0, col=0, points=4)]
    assert result.merged_levels == [2]


def test_triple_merges_leading_pair_only():
    result = move(_row([1, 1, 1, 0]), Direction.LEFT)

    assert levels_of(result.next_board)[0] == [2, 1, 0, 0]
    assert result.gained_score == 4


def test_four_equal_tiles_merge_into_two_pairs():
    result = move(_row([1, 1, 1, 1]), Direction.LEFT)

    assert levels_of(result.next_board)[0] == [2, 2, 0, 0]
    assert result.gained_score == 8
    assert result.merge_count == 2


def test_merged_tile_does_not_merge_again_in_same_turn():
    result = move(_row([2, 1, 1, 0]), Direction.LEFT)

    assert levels_of(result.next_board)[0] == [2, 2, 0, 0]


def test_right_move_resolves_from_the_right_edge():
    result = move(_row([1, 1, 1, 0]), Direction.RIGHT)

    assert levels_of(result.next_board)[0] == [0, 0, 1, 2]
    assert result.merge_events == [MergeEvent(row=0, col=3, points=4)]


def test_vertical_moves():
    board = board_from_levels([
        [3, 0, 0, 0],
        [3, 0, 0, 0],
        [0, 0, 0, 0],
        [1, 0, 0, 0],
    ])

    down = move(board, Direction.DOWN)
    up = move(board, Direction.UP)

    assert [row[0] for row in levels_of(down.next_board)] == [0, 0, 4, 1]
    assert down.merge_events == [MergeEvent(row=2, col=0, points=16)]
    assert [row[0] for row in levels_of(up.next_board)] == [4, 1, 0, 0]


def test_move_does_not_mutate_input_board():
    board = _row([1, 1, 0, 2])
    before = levels_of(board.cells)
    next_id = board.next_tile_id

    move(board, Direction.LEFT)

    assert levels_of(board.cells) == before
    assert board.next_tile_id == next_id


def test_no_op_move_reports_not_moved():
    board = _row([1, 2, 0, 0])

    result = move(board, Direction.LEFT)

    assert result.moved is False
    assert result.gained_score == 0
    assert move(board, Direction.LEFT).moved is False


def test_tile_count_drops_by_merge_count():
    board = board_from_levels([
        [1, 1, 2, 2],
        [3, 0, 3, 0],
        [1, 2, 3, 4],
        [0, 0, 0, 5],
    ])

    result = move(board, Direction.LEFT)

    assert count_tiles(result.next_board) == count_tiles(board.cells) - result.merge_count
    assert result.gained_score == 4 + 8 + 16


def test_merged_tiles_get_fresh_ids_and_motion_entries():
    board = _row([0, 1, 0, 1])  # ids 1 and 2

    result = move(board, Direction.LEFT)

    merged = result.next_board[0][0]
    assert merged.id == board.next_tile_id
    assert result.next_tile_id == board.next_tile_id + 1
    assert result.merged_ids == {merged.id}
    assert result.motion_map[merged.id].from_pos == (0, 1)
    assert result.motion_map[merged.id].to_pos == (0, 0)


def test_slide_without_merge_is_recorded_in_motion_map():
    board = _row([0, 0, 0, 3])

    result = move(board, Direction.LEFT)

    motion = result.motion_map[1]
    assert motion.from_pos == (0, 3)
    assert motion.to_pos == (0, 0)
    assert motion.displaced is True
    assert result.merged_ids == set()


@pytest.mark.parametrize("direction", list(Direction))
def test_locked_board_has_no_legal_move(direction):
    board = board_from_levels([
        [1, 2, 1, 2],
        [2, 1, 2, 1],
        [1, 2, 1, 2],
        [2, 1, 2, 1],
    ])

    assert move(board, direction).moved is False
    assert has_legal_move(board) is False


def _random_levels(rng, size=4):
    return [[rng.choice((0, 0, 1, 1, 2, 3)) for _ in range(size)] for _ in range(size)]


@pytest.mark.parametrize("direction", list(Direction))
def test_move_invariants_on_random_boards(direction):
    rng = random.Random(2048)
    for _ in range(300):
        board = board_from_levels(_random_levels(rng))
        before = levels_of(board.cells)

        result = move(board, direction)

        assert levels_of(board.cells) == before
        assert count_tiles(result.next_board) == count_tiles(board.cells) - result.merge_count
        assert result.gained_score == sum(2 ** level for level in result.merged_levels)
        ids = [tile.id for line in result.next_board for tile in line if tile is not None]
        assert len(ids) == len(set(ids))
        assert set(ids) == set(result.motion_map)
        if not result.moved:
            assert levels_of(result.next_board) == before
            assert move(board, direction).moved is False
