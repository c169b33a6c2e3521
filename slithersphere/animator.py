"""Time-driven obstacle behaviour: moving obstacles (level 3) and maze shrink (level 4)."""

import logging

from .constants import (
    GRID_SIZE, MOVING_OBSTACLE_INTERVAL, SHRINK_INTERVAL, MAX_SHRINK_RING,
    SHRINK_RING_CELLS, SHRINK_MULTIPLIER_STEP,
)
from .levels import ring_cells
from .models import Axis, MovingObstacle

logger = logging.getLogger(__name__)

MOVING_OBSTACLE_LEVEL = 3
SHRINKING_LEVEL = 4


def step_moving_obstacles(obstacles: list[MovingObstacle], sign: int, size: int = GRID_SIZE) -> int:
    """Move every obstacle one cell by ``sign`` and return the sign for the next step.

    All obstacles share one sign: if any of them lands on ``<= 1`` or
    ``>= size - 2`` along its axis, the whole group reverses.
    """
    bounce = False
    for obstacle in obstacles:
        x, y = obstacle.cell
        if obstacle.axis is Axis.HORIZONTAL:
            x += sign
            pos = x
        else:
            y += sign
            pos = y
        obstacle.cell = (x, y)
        if pos <= 1 or pos >= size - 2:
            bounce = True
    return -sign if bounce else sign


def level_multiplier(level: int, obstacle_count: int, base_count: int) -> float:
    if level != SHRINKING_LEVEL:
        return 1.0
    extra = obstacle_count - base_count
    if extra <= 0:
        return 1.0
    return 1 + (extra // SHRINK_RING_CELLS) * SHRINK_MULTIPLIER_STEP


class ObstacleAnimator:
    """Applies time-keyed obstacle changes to a run.

    The animator keeps no state of its own; the shared motion sign, the step
    clock and the shrink latch are fields of the run it is handed.
    """

    def __init__(self, size: int = GRID_SIZE, step_interval: int = MOVING_OBSTACLE_INTERVAL):
        self.size = size
        self.step_interval = step_interval

    def advance(self, run, now: float) -> bool:
        """Returns True when obstacle state changed."""
        elapsed = run.active_elapsed(now)
        changed = False
        if run.level == MOVING_OBSTACLE_LEVEL and run.moving_obstacles:
            changed |= self.advance_moving(run, elapsed)
        if run.level == SHRINKING_LEVEL:
            changed |= self.apply_shrink(run, int(elapsed))
        return changed

    def advance_moving(self, run, elapsed: float) -> bool:
        steps = 0
        while (elapsed - run.obstacle_clock) * 1000 >= self.step_interval:
            run.obstacle_sign = step_moving_obstacles(run.moving_obstacles, run.obstacle_sign, self.size)
            run.obstacle_clock += self.step_interval / 1000
            steps += 1
        return steps > 0

    def apply_shrink(self, run, elapsed_seconds: int) -> bool:
        if elapsed_seconds % SHRINK_INTERVAL != 0:
            run.shrink_latch = False
            return False
        if elapsed_seconds <= 0 or run.shrink_latch:
            return False
        run.shrink_latch = True

        ring = elapsed_seconds // SHRINK_INTERVAL
        if ring > MAX_SHRINK_RING:
            return False

        protected = set(run.snake.segments)
        for zone in run.teleport_zones:
            protected.add(zone.source)
            protected.add(zone.target)
        added = ring_cells(ring, self.size) - protected - run.obstacles
        run.obstacles |= added
        run.shrink_level = ring
        logger.info("maze shrink: ring %d added %d walls (%d total)", ring, len(added), len(run.obstacles))
        return True
