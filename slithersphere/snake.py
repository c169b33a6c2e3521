"""The player's snake: body segments head-first plus directional state."""

from typing import Optional

from .constants import START_SEGMENTS, START_DIRECTION
from .models import Cell, Direction


class Snake:
    def __init__(self, segments: Optional[list[Cell]] = None, direction: Direction = Direction(START_DIRECTION)):
        self.segments: list[Cell] = list(segments or START_SEGMENTS)
        if not self.segments:
            raise ValueError("a snake needs at least one segment")
        self.direction = direction
        self.next_direction = direction

    def __len__(self):
        return len(self.segments)

    def head(self) -> Cell:
        return self.segments[0]

    def tail(self) -> Cell:
        return self.segments[-1]

    def request_direction(self, direction: Direction) -> bool:
        """Queue a turn for the next tick; reversing the current heading is refused."""
        if direction is self.direction.opposite:
            return False
        self.next_direction = direction
        return True

    def commit_direction(self) -> Direction:
        if self.next_direction is not self.direction.opposite:
            self.direction = self.next_direction
        else:
            self.next_direction = self.direction
        return self.direction

    def next_head(self) -> Cell:
        dx, dy = self.direction.delta
        hx, hy = self.head()
        return (hx + dx, hy + dy)

    def hits_body(self, cell: Cell) -> bool:
        # The tail is about to move out of the way.
        return cell in self.segments[:-1]

    def advance(self, head: Cell, grow: bool = False):
        self.segments.insert(0, head)
        if not grow:
            self.segments.pop()
