"""Data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import DIRECTIONS, OPPOSITES

Cell = tuple[int, int]


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Cell:
        return DIRECTIONS[self.value]

    @property
    def opposite(self) -> "Direction":
        return Direction(OPPOSITES[self.value])


class Axis(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class RunStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    TERMINATED = "terminated"


class Outcome(Enum):
    CONTINUE = "continue"
    WALL_COLLISION = "wall_collision"
    SELF_COLLISION = "self_collision"
    OBSTACLE_COLLISION = "obstacle_collision"
    MOVING_OBSTACLE_COLLISION = "moving_obstacle_collision"

    @property
    def terminal(self) -> bool:
        return self is not Outcome.CONTINUE


@dataclass
class SpecialFood:
    cell: Cell
    expires_at: float

    def expired(self, now: float) -> bool:
        return now > self.expires_at

    def remaining_ms(self, now: float) -> int:
        return max(0, int((self.expires_at - now) * 1000))


@dataclass
class MovingObstacle:
    cell: Cell
    axis: Axis


@dataclass(frozen=True)
class TeleportZone:
    source: Cell
    target: Cell


@dataclass
class LevelLayout:
    level: int
    obstacles: set[Cell] = field(default_factory=set)
    teleport_zones: list[TeleportZone] = field(default_factory=list)
    moving_obstacle_seeds: list[MovingObstacle] = field(default_factory=list)

    def teleport_target(self, cell: Cell) -> Optional[Cell]:
        for zone in self.teleport_zones:
            if zone.source == cell:
                return zone.target
        return None


@dataclass(frozen=True)
class ScoreSubmission:
    player_name: str
    score: int
    date: str
    level: int
    snake_length: int

    def to_dict(self) -> dict:
        return {
            "playerName": self.player_name,
            "score": self.score,
            "date": self.date,
            "level": self.level,
            "snakeLength": self.snake_length,
        }
