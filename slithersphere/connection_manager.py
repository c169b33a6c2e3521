"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket, WebSocketDisconnect

from .game import GameState
from .models import LevelLayout, Outcome
from .session import ScoreBoard

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: dict[WebSocket, GameState] = {}

    def connect(self, ws: WebSocket, game: GameState):
        self.connections[ws] = game
        logger.info("client connected (%d active)", len(self.connections))

    def disconnect(self, ws: WebSocket):
        self.connections.pop(ws, None)
        logger.info("client disconnected (%d active)", len(self.connections))

    async def send(self, ws: WebSocket, message: str) -> bool:
        try:
            await ws.send_text(message)
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            logger.debug("send failed, dropping client: %s", exc)
            self.disconnect(ws)
            return False
        return True


def walls_to_list(walls) -> list[list[int]]:
    return [[x, y] for x, y in sorted(walls)]


def layout_to_dict(layout: LevelLayout) -> dict:
    return {
        "level": layout.level,
        "obstacles": walls_to_list(layout.obstacles),
        "teleport_zones": [
            {"source": list(z.source), "target": list(z.target)} for z in layout.teleport_zones
        ],
        "moving_obstacles": [
            {"cell": list(m.cell), "axis": m.axis.value} for m in layout.moving_obstacle_seeds
        ],
    }


def build_layout_msg(game: GameState) -> str:
    return json.dumps({
        "type": "layout",
        "grid": [game.grid.size, game.grid.size],
        "level": game.level,
        "difficulty": game.difficulty.value,
        "walls": walls_to_list(game.obstacles),
        "teleports": [
            {"source": list(z.source), "target": list(z.target)} for z in game.teleport_zones
        ],
    })


def build_state_msg(game: GameState, now: float) -> str:
    return json.dumps({"type": "state", **game.snapshot(now)})


def build_game_over_msg(game: GameState, outcome: Outcome) -> str:
    return json.dumps({
        "type": "game_over",
        "outcome": outcome.value,
        "score": game.score,
        "length": len(game.snake),
        "level": game.level,
    })


def build_scores_msg(board: ScoreBoard, entry=None, new_high: bool = False) -> str:
    msg = {"type": "score_saved" if entry else "scores", "scores": board.to_list()}
    if entry:
        msg["entry"] = entry.to_dict()
        msg["new_high"] = new_high
    return json.dumps(msg)


def build_error_msg(message: str) -> str:
    return json.dumps({"type": "error", "message": message})
