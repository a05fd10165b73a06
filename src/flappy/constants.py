"""
constants.py: Centralized configuration for game and scoreboard settings.
"""

# -------- Timing --------
TICK_RATE = 60                  # Simulation steps per second
TICK_TIME = 1.0 / TICK_RATE     # Fixed time step (seconds)
RENDER_FPS = 60

# -------- Game World Config --------
SCREEN_WIDTH = 400
SCREEN_HEIGHT = 600
GROUND_HEIGHT = 80
PLAY_HEIGHT = SCREEN_HEIGHT - GROUND_HEIGHT   # Ground line

# -------- Bird Config --------
BIRD_X = 80                     # Fixed bird X position
BIRD_START_Y = SCREEN_HEIGHT / 2
BIRD_SIZE = 64                  # Diameter
BIRD_HITBOX_RATIO = 0.5         # Hitbox radius = visual radius * ratio

# -------- Pipe Config --------
PIPE_WIDTH = 90
PIPE_GAP = 160
PIPE_SPEED = 2.5                # Pixels per tick
PIPE_INTERVAL = 90              # Spawn every 90 ticks (1.5 seconds)
MIN_GAP_Y = 0
MAX_GAP_Y = SCREEN_HEIGHT - PIPE_GAP - GROUND_HEIGHT

# -------- Physics Config (pixels / tick) --------
GRAVITY = 0.5
FLAP_STRENGTH = -8.0

# -------- Scenery (renderer only) --------
CLOUD_SPEED = 0.3
GROUND_SPEED = PIPE_SPEED
GROUND_TILE_WIDTH = 40

# -------- Scoreboard Config --------
DB_FILE = "flappy_scores.db"
SCOREBOARD_TIMEOUT = 5.0        # seconds
LEADERBOARD_SIZE = 5
INITIALS_LENGTH = 3
