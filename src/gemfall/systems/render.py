from typing import Any, Dict, Tuple

from gemfall.constants import FALLBACK_COLOR, KIND_COLORS, TOKEN_PADDING
from gemfall.engine import Engine
from gemfall.snapshot import SessionSnapshot
from gemfall.ui.layout import compute_board_geometry, cell_center

SELECTION_COLOR = (255, 255, 255)
TEXT_COLOR = (255, 215, 0)
CELL_COLORS = ((40, 40, 52), (32, 32, 42))


class RenderSystem:
    """Draws the snapshot currently shown by the playback queue."""
    def __init__(self, window, engine: Engine, playback=None):
        self.window = window
        self.engine = engine
        self.playback = playback
        self._last_token_layout: Dict[int, Dict[str, Any]] = {}

    def current_snapshot(self) -> SessionSnapshot | None:
        if self.playback is not None and self.playback.current is not None:
            return self.playback.current
        if not self.engine.initialized:
            return None
        return self.engine.snapshot()

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        snapshot = self.current_snapshot()
        self._last_token_layout = {}
        if snapshot is None:
            return
        board = snapshot.board
        width, height = self.window.width, self.window.height
        tile_size, _, _ = compute_board_geometry(width, height, board.height, board.width)
        radius = max(tile_size - TOKEN_PADDING, 4) / 2

        for token in board.tokens:
            x, y = cell_center(token.row, token.col, width, height, board.height, board.width)
            self._last_token_layout[token.id] = {"center": (x, y), "radius": radius, "kind": token.kind}
        if headless:
            return

        for row in range(board.height):
            for col in range(board.width):
                x, y = cell_center(row, col, width, height, board.height, board.width)
                arcade.draw_circle_filled(x, y, tile_size / 2 - 1, CELL_COLORS[(row + col) % 2])
        for token in board.tokens:
            entry = self._last_token_layout[token.id]
            x, y = entry["center"]
            arcade.draw_circle_filled(x, y, radius, self.color_for(token.kind))
            if token.id == snapshot.selected_id:
                arcade.draw_circle_outline(x, y, radius + 2, SELECTION_COLOR, 3)

        arcade.draw_text(f"Score: {snapshot.score}", 20, height - 40, TEXT_COLOR, 24)
        if snapshot.paused:
            arcade.draw_text("PAUSED", width / 2, height / 2, SELECTION_COLOR, 32, anchor_x="center")

    @staticmethod
    def color_for(kind: str) -> Tuple[int, int, int]:
        return KIND_COLORS.get(kind, FALLBACK_COLOR)
