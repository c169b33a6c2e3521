"""Core game state and logic."""

import copy
import logging
import random
from datetime import datetime
from typing import Optional, Union

from .animator import ObstacleAnimator, level_multiplier, MOVING_OBSTACLE_LEVEL
from .constants import (
    GRID_SIZE, MIN_SPEED, SPEED_INCREMENT, FOOD_POINTS, SPECIAL_FOOD_POINTS,
)
from .errors import InvalidConfiguration, SpawnExhausted
from .grid import Grid
from .levels import layout_for, initial_speed
from .models import (
    Cell, Difficulty, Direction, MovingObstacle, Outcome, RunStatus,
    ScoreSubmission, SpecialFood,
)
from .session import ScoreSession
from .snake import Snake
from .spawner import Spawner, expire_special_food

logger = logging.getLogger(__name__)


class GameState:
    """One run of the game: snake, food, obstacles, score and run status.

    The engine never reads the clock itself; every time-dependent call takes
    ``now`` in seconds so the caller (the scheduler, or a test) owns time.
    """

    def __init__(self, level: int = 1, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                 rng: Optional[random.Random] = None, size: int = GRID_SIZE):
        self.grid = Grid(size, rng)
        self.spawner = Spawner(self.grid)
        self.animator = ObstacleAnimator(size)
        self.reset(level, difficulty)

    # ── Lifecycle ──────────────────────────────────────────────────

    def reset(self, level: Optional[int] = None, difficulty: Union[Difficulty, str, None] = None):
        level = self.level if level is None else level
        difficulty = self.difficulty if difficulty is None else difficulty
        if isinstance(level, bool) or not isinstance(level, int):
            raise InvalidConfiguration(f"level must be an integer, got {level!r}")
        if not isinstance(difficulty, Difficulty):
            try:
                difficulty = Difficulty(difficulty)
            except ValueError:
                raise InvalidConfiguration(f"unknown difficulty {difficulty!r}") from None

        self.layout = layout_for(level, self.grid.size)
        self.level = level
        self.difficulty = difficulty
        self.speed = initial_speed(level, difficulty.value)
        self.status = RunStatus.IDLE
        self.outcome: Optional[Outcome] = None

        self.snake = Snake()
        self.obstacles: set[Cell] = set(self.layout.obstacles)
        self.base_obstacle_count = len(self.obstacles)
        self.teleport_zones = list(self.layout.teleport_zones)
        self.moving_obstacles: list[MovingObstacle] = copy.deepcopy(self.layout.moving_obstacle_seeds)
        self.obstacle_sign = 1
        self.obstacle_clock = 0.0
        self.shrink_latch = False
        self.shrink_level = 0

        self.started_at: Optional[float] = None
        self.paused_at: Optional[float] = None
        self.ended_at: Optional[float] = None
        self.paused_total = 0.0
        self.tick_count = 0

        self.session = ScoreSession(level, len(self.snake))
        self.special_food: Optional[SpecialFood] = None
        self.food: Optional[Cell] = self.spawner.place_food(self.blocked_cells())
        logger.info("run reset: level %d, %s, speed %dms", level, difficulty.value, self.speed)

    def start(self, now: float) -> RunStatus:
        if self.status is RunStatus.TERMINATED:
            self.reset()
        if self.status is RunStatus.IDLE:
            self.started_at = now
            self.status = RunStatus.RUNNING
            logger.info("run started: level %d", self.level)
        elif self.status is RunStatus.PAUSED:
            self.toggle_pause(now)
        return self.status

    def toggle_pause(self, now: float) -> RunStatus:
        if self.status is RunStatus.RUNNING:
            self.status = RunStatus.PAUSED
            self.paused_at = now
        elif self.status is RunStatus.PAUSED:
            self.paused_total += now - self.paused_at
            self.paused_at = None
            self.status = RunStatus.RUNNING
        logger.debug("pause toggled: %s", self.status.value)
        return self.status

    def set_intended_direction(self, direction: Union[Direction, str]) -> bool:
        if self.status is RunStatus.TERMINATED:
            return False
        if not isinstance(direction, Direction):
            direction = Direction(direction)
        return self.snake.request_direction(direction)

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def multiplier(self) -> float:
        return level_multiplier(self.level, len(self.obstacles), self.base_obstacle_count)

    def active_elapsed(self, now: float) -> float:
        """Seconds the run has spent running, excluding pauses."""
        if self.started_at is None:
            return 0.0
        if self.status is RunStatus.PAUSED:
            now = self.paused_at
        elif self.status is RunStatus.TERMINATED:
            now = self.ended_at
        return max(0.0, now - self.started_at - self.paused_total)

    def blocked_cells(self) -> set[Cell]:
        blocked = set(self.snake.segments) | self.obstacles
        blocked.update(m.cell for m in self.moving_obstacles)
        blocked.update(z.source for z in self.teleport_zones)
        return blocked

    # ── Simulation ─────────────────────────────────────────────────

    def tick(self, now: float) -> Optional[Outcome]:
        """Advance the run by one step; returns None when the run isn't running."""
        if self.status is not RunStatus.RUNNING:
            return None

        self.tick_count += 1
        self.special_food = expire_special_food(self.special_food, now)

        self.snake.commit_direction()
        head = self.snake.next_head()

        target = self.layout.teleport_target(head)
        if target is not None:
            head = target

        if not self.grid.contains(head):
            return self._terminate(Outcome.WALL_COLLISION, now)
        if head in self.obstacles:
            return self._terminate(Outcome.OBSTACLE_COLLISION, now)
        if self.level == MOVING_OBSTACLE_LEVEL and any(m.cell == head for m in self.moving_obstacles):
            return self._terminate(Outcome.MOVING_OBSTACLE_COLLISION, now)
        if self.snake.hits_body(head):
            return self._terminate(Outcome.SELF_COLLISION, now)

        multiplier = self.multiplier
        if head == self.food:
            self.snake.advance(head)
            self.session.add(int(FOOD_POINTS * multiplier), len(self.snake))
            try:
                self.food = self.spawner.place_food(self.blocked_cells() | self._special_cells())
                self.special_food = self.spawner.maybe_place_special_food(
                    self.food, self.blocked_cells(), self.special_food, now)
            except SpawnExhausted:
                self._fail(now)
                raise
            self.speed = max(MIN_SPEED, self.speed - SPEED_INCREMENT)
        elif self.special_food is not None and head == self.special_food.cell:
            self.snake.advance(head, grow=True)
            self.session.add(int(SPECIAL_FOOD_POINTS * multiplier), len(self.snake))
            self.special_food = None
        else:
            self.snake.advance(head)
        return Outcome.CONTINUE

    def advance_environment(self, now: float) -> bool:
        """Time-keyed effects: special-food expiry and obstacle animation.

        Called every scheduler frame, never in the middle of ``tick``.
        Returns True when anything visible changed.
        """
        if self.status not in (RunStatus.RUNNING, RunStatus.PAUSED):
            return False

        special = self.special_food
        self.special_food = expire_special_food(special, now)
        changed = special is not self.special_food

        if self.status is RunStatus.RUNNING and self.animator.advance(self, now):
            try:
                self._relocate_covered_food(now)
            except SpawnExhausted:
                self._fail(now)
                raise
            changed = True
        return changed

    def _special_cells(self) -> set[Cell]:
        return {self.special_food.cell} if self.special_food else set()

    def _relocate_covered_food(self, now: float):
        covered = self.obstacles | {m.cell for m in self.moving_obstacles}
        if self.special_food is not None and self.special_food.cell in covered:
            self.special_food = None
        if self.food in covered:
            self.food = self.spawner.place_food(self.blocked_cells() | self._special_cells())

    def _terminate(self, outcome: Outcome, now: float) -> Outcome:
        self.status = RunStatus.TERMINATED
        self.outcome = outcome
        self.ended_at = now
        self.session.finalize(len(self.snake))
        logger.info("game over: %s, score %d, length %d", outcome.value, self.score, len(self.snake))
        return outcome

    def _fail(self, now: float):
        # No free cell left: the run cannot continue and has no food to show.
        self.status = RunStatus.TERMINATED
        self.ended_at = now
        self.food = None
        self.session.finalize(len(self.snake))
        logger.error("run aborted: board saturated, score %d, length %d", self.score, len(self.snake))

    # ── Outputs ────────────────────────────────────────────────────

    def submit_score(self, player_name: str, date: Optional[datetime] = None) -> ScoreSubmission:
        """Build the submission for a finished run, then reset for another go."""
        entry = self.session.submission(player_name, date)
        self.reset()
        return entry

    def snapshot(self, now: float) -> dict:
        special = None
        if self.special_food is not None:
            special = {
                "cell": list(self.special_food.cell),
                "remaining_ms": self.special_food.remaining_ms(now),
            }
        return {
            "level": self.level,
            "difficulty": self.difficulty.value,
            "status": self.status.value,
            "outcome": self.outcome.value if self.outcome else None,
            "snake": [list(s) for s in self.snake.segments],
            "direction": self.snake.direction.value,
            "food": list(self.food) if self.food else None,
            "special_food": special,
            "obstacles": [list(c) for c in sorted(self.obstacles)],
            "moving_obstacles": [
                {"cell": list(m.cell), "axis": m.axis.value} for m in self.moving_obstacles
            ],
            "teleport_zones": [
                {"source": list(z.source), "target": list(z.target)} for z in self.teleport_zones
            ],
            "score": self.score,
            "length": len(self.snake),
            "speed": self.speed,
            "multiplier": self.multiplier,
            "shrink_level": self.shrink_level,
            "elapsed": round(self.active_elapsed(now), 3),
            "ticks": self.tick_count,
        }
