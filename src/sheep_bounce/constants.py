"""
constants.py: Centralized configuration for the simulation, frame loop and client.
"""

# -------- Frame Loop Config --------
MAX_FPS = 60                        # Target simulation/render rate
MAX_FRAME_SKIPS = 5                 # Max catch-up updates without a redraw

# -------- Population Config --------
MAX_SHEEP_EASY = 5
MAX_SHEEP_NORMAL = 10
MAX_SHEEP_UNFAIR = 40
SHEEP_POOL_SURPLUS = 1              # Replenishment fills to target + surplus

# -------- Sheep Config --------
SHEEP_STARTING_HORIZONTAL_ENERGY = 20
SHEEP_STARTING_VERTICAL_ENERGY = 15
MIN_SHEEP_HORIZONTAL_SPEED = -4
MAX_SHEEP_HORIZONTAL_SPEED = 3
MIN_SHEEP_VERTICAL_SPEED = -8
MAX_SHEEP_VERTICAL_SPEED = 7
SHEEP_JUMP_ENERGY_MULTIPLIER = 1.4  # Growth per jump once jumping exponentially
SHEEP_BOUNCE_ENERGY_MULTIPLIER = 6  # Applied to starting energy on a catch
SHEEP_JUMP_CHANCE = 600             # One success per (chance + 1) draws

# -------- Physics Config (energy units / tick) --------
GRAVITY = 5                         # Flat vertical energy decrement per tick
ENERGY_PER_SPEED_UNIT = 10          # Energy units that make one pixel per tick
DAMAGE_HEIGHT_FRACTION = 0.5        # Fraction of screen height before a fall hurts

# -------- Debris Config --------
MIN_DEBRIS_ITEMS = 5
MAX_DEBRIS_ITEMS = 10
MIN_DEBRIS_STARTING_HORIZONTAL_ENERGY = 10
MAX_DEBRIS_STARTING_HORIZONTAL_ENERGY = 60
MIN_DEBRIS_STARTING_VERTICAL_ENERGY = 30
MAX_DEBRIS_STARTING_VERTICAL_ENERGY = 100
MIN_DEBRIS_HORIZONTAL_SPEED = -10
MAX_DEBRIS_HORIZONTAL_SPEED = 10
MIN_DEBRIS_VERTICAL_SPEED = -10
MAX_DEBRIS_VERTICAL_SPEED = 10
MAX_DISPLAYED_DEBRIS = 70           # Soft cap; only inactive debris is trimmed

# -------- Bounce Pad / Input Config --------
ACCEL_MULTIPLIER = 1.5
ACCEL_SENSOR_BUFFER = 0.3           # Dead zone around zero acceleration
MAX_PAD_MOVEMENT_DISTANCE = 6       # Clamp applied to acceleration magnitude

# -------- Scoring Config --------
POINTS_PER_SHEEP = 1

# -------- Animation Config --------
DEFAULT_ANIMATION_FRAME_MS = 200

# -------- Image Names --------
SHEEP_FRAMES = ("sheep_frame_01", "sheep_frame_02")
BOUNCE_PAD_FRAMES = ("bounce_pad_frame_01", "bounce_pad_frame_02", "bounce_pad_frame_01")
DEBRIS_IMAGE = "debris"
DANGER_ICON = "icon_danger"
BACKGROUND_IMAGE = "background"

# -------- Client Config --------
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 480
KEYBOARD_TILT = 4.0                 # Acceleration emulated by a held arrow key
DB_FILE = "sheep_bounce.db"
