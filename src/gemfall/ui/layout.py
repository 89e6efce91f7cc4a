from typing import Optional, Tuple

from gemfall.constants import (
    BOTTOM_MARGIN, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT, HUD_HEIGHT, TILE_SIZE,
)

def compute_board_geometry(window_width: int, window_height: int, rows: int, cols: int):
    """Return (tile_size, start_x, start_y) of the board's bottom-left corner.

    The board is centred horizontally and sits above the bottom margin, below the HUD.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HUD_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h, TILE_SIZE * 2))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(row: int, col: int, window_width: int, window_height: int, rows: int, cols: int) -> Tuple[float, float]:
    # Row 0 is the top of the board; arcade's y axis points up.
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (rows - 1 - row) * tile_size + tile_size / 2
    return x, y


def cell_at_point(x: float, y: float, window_width: int, window_height: int, rows: int, cols: int) -> Optional[Tuple[int, int]]:
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    if x < start_x or x >= start_x + cols * tile_size:
        return None
    if y < start_y or y >= start_y + rows * tile_size:
        return None
    col = int((x - start_x) // tile_size)
    row = rows - 1 - int((y - start_y) // tile_size)
    if 0 <= row < rows and 0 <= col < cols:
        return row, col
    return None
