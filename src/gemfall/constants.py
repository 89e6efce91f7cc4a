GRID_ROWS = 8
GRID_COLS = 8

# Reference alphabet; every kind is equally likely on each draw.
DEFAULT_KINDS = ('apple', 'orange', 'grape', 'coconut', 'kiwi', 'lemon')

MATCH_MIN = 3
POINTS_PER_TOKEN = 10

# Upper bound on redraws for a single cell during the initial fill.
MAX_FILL_DRAWS = 1000

# ============================================================================
# PRESENTATION
# ============================================================================
TILE_SIZE = 66
TOKEN_PADDING = 6
BOTTOM_MARGIN = 20
HUD_HEIGHT = 70

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.85

KIND_COLORS = {
    'apple':   (231, 76, 60),    # #e74c3c
    'orange':  (230, 126, 34),   # #e67e22
    'grape':   (155, 89, 182),   # #9b59b6
    'coconut': (236, 240, 241),  # #ecf0f1
    'kiwi':    (46, 204, 113),   # #2ecc71
    'lemon':   (241, 196, 15),   # #f1c40f
}
FALLBACK_COLOR = (255, 255, 255)

# Seconds each phase frame stays on screen before the next one is shown.
PHASE_DURATIONS = {
    'selected': 0.0,
    'deselected': 0.0,
    'swap': 0.3,
    'revert': 0.3,
    'match': 0.3,
    'clear': 0.05,
    'gravity': 0.3,
    'refill': 0.3,
    'settled': 0.0,
    'pause': 0.0,
}

# Input codes (match arcade.MOUSE_BUTTON_LEFT, arcade.key.P and arcade.key.R).
MOUSE_BUTTON_LEFT = 1
KEY_PAUSE = ord('p')
KEY_RESET = ord('r')
