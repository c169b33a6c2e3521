"""Game constants."""

import os

GRID_SIZE = 20

INITIAL_SPEED = 150  # ms per tick
SPEED_INCREMENT = 5
MIN_SPEED = 60
MAX_SPEED = INITIAL_SPEED + 50
LEVEL_SPEED_STEP = 10

FOOD_POINTS = 10
SPECIAL_FOOD_POINTS = 30
SPECIAL_FOOD_CHANCE = 0.2
SPECIAL_FOOD_TTL = 5.0  # seconds

TOTAL_LEVELS = 4
SHRINK_INTERVAL = 15  # seconds
MAX_SHRINK_RING = 5
SHRINK_RING_CELLS = 36
SHRINK_MULTIPLIER_STEP = 0.5
MOVING_OBSTACLE_INTERVAL = 200  # ms
MOVING_OBSTACLE_SPACING = 5

SPAWN_ATTEMPT_FACTOR = 10
TOP_SCORES = 5

START_SEGMENTS = [(10, 10), (9, 10), (8, 10)]
START_DIRECTION = "right"

DIFFICULTY_OFFSETS = {
    "easy": 50,
    "medium": 0,
    "hard": -30,
}

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

HOST = os.environ.get("SLITHERSPHERE_HOST", "0.0.0.0")
PORT = int(os.environ.get("SLITHERSPHERE_PORT", "8765"))
FRAME_RATE = int(os.environ.get("SLITHERSPHERE_FRAME_RATE", "60"))
LOG_LEVEL = os.environ.get("SLITHERSPHERE_LOG_LEVEL", "INFO")
