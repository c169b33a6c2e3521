"""Score tracking for a run and the in-memory leaderboard."""

import logging
from datetime import datetime, timezone
from typing import Optional

from .constants import TOP_SCORES
from .errors import RunNotTerminated
from .models import ScoreSubmission

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


class ScoreSession:
    def __init__(self, level: int, length: int):
        self.level = level
        self.score = 0
        self.length = length
        self.finalized = False
        self.submitted = False

    def add(self, points: int, length: int):
        if self.finalized:
            return
        self.score += points
        self.length = length

    def finalize(self, length: int):
        if not self.finalized:
            self.length = length
            self.finalized = True

    def submission(self, player_name: str, now: Optional[datetime] = None) -> ScoreSubmission:
        if not self.finalized:
            raise RunNotTerminated("score can only be submitted once the run is over")
        if self.submitted:
            raise RunNotTerminated("score for this run was already submitted")
        self.submitted = True
        name = str(player_name or "").strip()[:16] or ANONYMOUS
        date = (now or datetime.now(timezone.utc)).isoformat()
        return ScoreSubmission(
            player_name=name,
            score=self.score,
            date=date,
            level=self.level,
            snake_length=self.length,
        )


class ScoreBoard:
    """Top-N scores, best first."""

    def __init__(self, limit: int = TOP_SCORES):
        self.limit = limit
        self.entries: list[ScoreSubmission] = []

    @property
    def best(self) -> int:
        return self.entries[0].score if self.entries else 0

    def add(self, entry: ScoreSubmission) -> bool:
        """Record ``entry``; returns True if it beats the previous best."""
        new_high = entry.score > self.best
        self.entries.append(entry)
        self.entries.sort(key=lambda e: e.score, reverse=True)
        del self.entries[self.limit:]
        logger.info("score saved: %s %d (level %d)%s", entry.player_name, entry.score, entry.level,
                    " new high score" if new_high else "")
        return new_high

    def clear(self):
        self.entries.clear()

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.entries]
