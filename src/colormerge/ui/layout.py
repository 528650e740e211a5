from colormerge.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOARD_SIZE,
    BOTTOM_MARGIN,
)


def compute_board_geometry(window_width: int, window_height: int, size: int = BOARD_SIZE):
    """Return (tile_size, start_x, start_y) for a square board of ``size`` cells.

    ``start_y`` is the bottom edge of the board; row 0 is drawn at the top.
    Shared by the renderer and anything that needs to map points to cells.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w, max_board_h) / size)
    if tile_size < 20:
        tile_size = 20
    total_width = size * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(row: int, col: int, tile_size: int, start_x: float, start_y: float, size: int = BOARD_SIZE):
    cx = start_x + col * tile_size + tile_size / 2
    cy = start_y + (size - 1 - row) * tile_size + tile_size / 2
    return cx, cy


def cell_at_point(x: float, y: float, tile_size: int, start_x: float, start_y: float, size: int = BOARD_SIZE):
    """Inverse of ``cell_center``; returns None outside the board."""
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    if not (0 <= col < size and 0 <= row_from_bottom < size):
        return None
    return size - 1 - row_from_bottom, col
