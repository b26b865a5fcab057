GRID_ROWS = 8
GRID_COLS = 8
# Number of distinct gem colours; types are integers in [0, COLOR_COUNT).
COLOR_COUNT = 7
# Smallest grid edge / palette that can always be filled without a 3-run.
MIN_GRID_EDGE = 3
MIN_COLOR_COUNT = 3
MIN_RUN_LENGTH = 3

# Scoring and level progression
BASE_POINTS_PER_GEM = 10
INITIAL_LEVEL_THRESHOLD = 2000
LEVEL_THRESHOLD_FACTOR = 1.5

# Full regenerations attempted before initialisation gives up.
MAX_INIT_ATTEMPTS = 1000
# Cascade passes allowed per resolve = rows * cols * CASCADE_PASS_FACTOR.
CASCADE_PASS_FACTOR = 10

# Presentation pacing (seconds each cascade snapshot stays on screen).
STEP_SECONDS = 0.15

HIGH_SCORE_KEY = "gemboard_highscore"

# Demo window geometry
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
BOTTOM_MARGIN = 20
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.90
MIN_TILE_SIZE = 20

# Gem colours for the demo renderer, indexed by gem type.
PALETTE = [
    (231, 76, 60),
    (230, 126, 34),
    (241, 196, 15),
    (46, 204, 113),
    (52, 152, 219),
    (155, 89, 182),
    (255, 255, 255),
]
