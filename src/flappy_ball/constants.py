"""
constants.py: Centralized configuration for the game world, difficulty and progression.
"""

# -------- Game World Config --------
SCREEN_WIDTH = 375
SCREEN_HEIGHT = 667
PLAYER_X = SCREEN_WIDTH / 2         # Fixed ball X position
RESPAWN_Y = SCREEN_HEIGHT / 2
RENDER_FPS = 60

# -------- Physics Config (Pixels / Second / Second) --------
GRAVITY_ACCEL = 700.0               # Vertical acceleration (pixels/s^2)
JUMP_IMPULSE = -350.0               # Instantaneous velocity change (pixels/s)
MAX_FALL_VELOCITY = 900.0           # Clamping for stability (pixels/s)
BALL_RADIUS = 16                    # For collision detection

# -------- Pipe Config --------
PIPE_WIDTH = 50
PIPE_SPAWN_X = SCREEN_WIDTH + 50    # Pipes are created off-screen to the right
PIPE_SPAWN_INTERVAL_SECONDS = 1.7
MIN_PIPE_HEIGHT = 50                # Both pipe sections stay at least this tall

# Ease-in: the first few pipes of every run are wide and slow
EASE_IN_COUNT = 5
EASE_IN_GAP = 200
EASE_IN_SPEED = 110.0               # Horizontal speed (pixels/second)
EASE_IN_CENTER_JITTER = 40          # Gap center stays within +/- this of mid-field

# Level-scaled difficulty
BASE_PIPE_GAP = 150
BASE_PIPE_SPEED = 150.0
GAP_SHRINK_RATIO = 0.7              # Share of the base gap removed at the influence cap
SPEED_GROWTH_RATIO = 0.5            # Share of the base speed added at the influence cap
DIFFICULTY_LEVEL_CAP = 100          # Levels above this no longer make pipes harder
MIN_PIPE_GAP = 80
MAX_PIPE_SPEED = 225.0

# -------- XP & Leveling Config --------
BASE_XP_REQUIRED = 10               # XP from level 1 to level 2
XP_GROWTH_FACTOR = 1.206
LEVEL_CAP = 100

# Run-end XP rates
XP_PER_MINUTE_PLAYED = 1            # Applied to whole minutes only
XP_PER_PIPE_CROSSED = 0.5           # Floored to a whole number per run

# Pipes passed in one run -> one-time XP bonus, highest first
MILESTONE_REWARDS = (
    (500, 1500),
    (350, 1000),
    (200, 500),
    (100, 200),
    (50, 75),
    (20, 25),
    (10, 10),
)
MILESTONE_THRESHOLDS = frozenset(threshold for threshold, _ in MILESTONE_REWARDS)

# Minimum level -> rank name, strictly increasing
RANK_THRESHOLDS = (
    (1, "Bronze"),
    (5, "Silver"),
    (10, "Gold"),
    (20, "Platinum"),
    (30, "Diamond Pilot"),
    (50, "Master Fighter"),
    (75, "Grand Glider"),
    (100, "Legend"),
)
DEFAULT_RANK = "Unknown"

# -------- Persistence Config --------
DB_FILE = "flappy_ball.db"
PROFILE_KEY = "flappyBallPlayerData"
DEFAULT_PLAYER_NAME = "Player 1"
