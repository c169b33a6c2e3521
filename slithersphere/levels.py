"""Level layouts and speed modifiers."""

from .constants import (
    GRID_SIZE, INITIAL_SPEED, MIN_SPEED, MAX_SPEED, LEVEL_SPEED_STEP,
    DIFFICULTY_OFFSETS, MOVING_OBSTACLE_SPACING, TOTAL_LEVELS,
)
from .errors import InvalidConfiguration
from .models import Axis, Cell, LevelLayout, MovingObstacle, TeleportZone

LEVEL_NAMES = {
    1: "Classic",
    2: "Bottleneck",
    3: "Moving Blocks",
    4: "Shrinking Maze",
}


def build_border_walls(size: int = GRID_SIZE) -> set[Cell]:
    walls = set()
    for x in range(size):
        walls.add((x, 0))
        walls.add((x, size - 1))
    for y in range(size):
        walls.add((0, y))
        walls.add((size - 1, y))
    return walls


def ring_cells(ring: int, size: int = GRID_SIZE) -> set[Cell]:
    """Cells whose distance to the nearest edge is exactly ``ring``."""
    lo, hi = ring, size - 1 - ring
    if lo > hi:
        return set()
    cells = set()
    for i in range(lo, hi + 1):
        cells.add((i, lo))
        cells.add((i, hi))
        cells.add((lo, i))
        cells.add((hi, i))
    return cells


def layout_for(level: int, size: int = GRID_SIZE) -> LevelLayout:
    if level not in LEVEL_NAMES:
        raise InvalidConfiguration(f"unknown level {level!r}, expected 1..{TOTAL_LEVELS}")

    layout = LevelLayout(level=level)
    walls = layout.obstacles
    mid = size // 2

    if level == 1:
        pass

    elif level == 2:
        # Two nested rectangles, open at the midline on both side walls.
        for inset in (2, 3):
            lo, hi = inset, size - 1 - inset
            for x in range(lo, hi + 1):
                walls.add((x, lo))
                walls.add((x, hi))
            for y in range(lo, hi + 1):
                if y != mid:
                    walls.add((lo, y))
                    walls.add((hi, y))

    elif level == 3:
        for cx, cy in ((0, 0), (size - 4, 0), (0, size - 4), (size - 4, size - 4)):
            for dx in range(4):
                for dy in range(4):
                    walls.add((cx + dx, cy + dy))
        step = MOVING_OBSTACLE_SPACING
        for idx, offset in enumerate(range(step, size, step)):
            if idx % 2 == 0:
                seed = MovingObstacle(cell=(offset, offset), axis=Axis.HORIZONTAL)
            else:
                seed = MovingObstacle(cell=(offset, step), axis=Axis.VERTICAL)
            layout.moving_obstacle_seeds.append(seed)

    elif level == 4:
        walls.update(build_border_walls(size))
        for x in range(5, size - 1, 5):
            if x == mid:
                continue
            for y in range(1, size - 1):
                if y % 3 != 0:
                    walls.add((x, y))
        for y in range(4, size - 1, 4):
            for x in range(1, size - 1):
                if x % 3 != 0 and x != mid:
                    walls.add((x, y))
        near, far = (3, 3), (size - 4, size - 4)
        layout.teleport_zones.append(TeleportZone(source=near, target=far))
        layout.teleport_zones.append(TeleportZone(source=far, target=near))
        for zone in layout.teleport_zones:
            walls.discard(zone.source)
            walls.discard(zone.target)

    return layout


def initial_speed(level: int, difficulty: str) -> int:
    if difficulty not in DIFFICULTY_OFFSETS:
        raise InvalidConfiguration(f"unknown difficulty {difficulty!r}")
    speed = INITIAL_SPEED + DIFFICULTY_OFFSETS[difficulty]
    if level > 1:
        speed -= LEVEL_SPEED_STEP * level
    return max(MIN_SPEED, min(MAX_SPEED, speed))
