BOARD_SIZE = 4
INITIAL_TILES = 2

# Spawned tiles are level 1 (value 2) with this probability, otherwise level 2.
SPAWN_LEVEL_ONE_CHANCE = 0.9

# ---------------------------------------------------------------------------
# Rhythm variant
# ---------------------------------------------------------------------------
BPM = 120
BEAT_MS = 60_000 / BPM
# Segment lengths (in beats) of the decorative lane; not used for judging.
RHYTHM_PATTERN = (3, 3, 7)
RHYTHM_CYCLE_BEATS = sum(RHYTHM_PATTERN)
RHYTHM_CYCLE_MS = RHYTHM_CYCLE_BEATS * BEAT_MS

# (max abs deviation ms, grade, health delta); anything beyond the last row is a far BAD.
JUDGE_WINDOWS = (
    (70, "GREAT", 10),
    (140, "GOOD", 4),
    (220, "BAD", -8),
)
JUDGE_MISS_HEALTH_DELTA = -14

GRADE_BONUS = {"GREAT": 0.25, "GOOD": 0.10, "BAD": -0.18}
COMBO_RATE = 0.06
COMBO_CAP = 2.2
MULTIPLIER_CAP = 3.5

MAX_HEALTH = 100
JUDGE_LABEL_MS = 260

# Display tiers for the multiplier readout (lower bound, tier name).
MULTIPLIER_TIERS = ((2.8, "max"), (2.1, "high"), (1.5, "mid"))
# Health gauge bands (exclusive lower bound, band name).
HEALTH_BANDS = ((60, "good"), (30, "warn"))

# ---------------------------------------------------------------------------
# Timer variant
# ---------------------------------------------------------------------------
TURN_LIMIT_MS = 2000
BONUS_RANGE = 2.0
BONUS_POINTS = 40

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
STORAGE_KEY = "color-merge-high-score"
SCOREBOARD_KEY = "color-merge-scoreboard"
SCOREBOARD_SIZE = 10

# ---------------------------------------------------------------------------
# Input
# ---------------------------------------------------------------------------
SWIPE_THRESHOLD = 30

# ---------------------------------------------------------------------------
# Window layout
# ---------------------------------------------------------------------------
WINDOW_WIDTH = 720
WINDOW_HEIGHT = 820
BOTTOM_MARGIN = 40
TILE_GAP = 10
# Board may not exceed these fractions of the window.
BOARD_MAX_WIDTH_PCT = 0.80
BOARD_MAX_HEIGHT_PCT = 0.62

# Popup tiers by scaled points (lower bound, tier name).
POPUP_TIERS = ((512, "epic"), (128, "high"))
POPUP_STAGGER_MS = 45
POPUP_LIFETIME_MS = 700
SLIDE_DURATION_MS = 110
PULSE_DURATION_MS = 160
