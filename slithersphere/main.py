"""FastAPI application: HTTP routes, WebSocket endpoint, per-connection game loop."""

import json
import logging
import time

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect

from .connection_manager import (
    ConnectionManager, build_error_msg, build_game_over_msg, build_layout_msg,
    build_scores_msg, build_state_msg, layout_to_dict,
)
from .constants import DIFFICULTY_OFFSETS, DIRECTIONS, HOST, PORT, LOG_LEVEL
from .errors import InvalidConfiguration, RunNotTerminated, SpawnExhausted
from .game import GameState
from .levels import LEVEL_NAMES, layout_for, initial_speed
from .models import RunStatus
from .scheduler import TickScheduler
from .session import ScoreBoard

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="SlitherSphere")
manager = ConnectionManager()
board = ScoreBoard()


@app.get("/health")
async def health():
    return {"status": "ok", "connections": len(manager.connections)}


@app.get("/levels/{level}")
async def describe_level(level: int):
    if level not in LEVEL_NAMES:
        raise HTTPException(status_code=404, detail=f"unknown level {level}")
    return {
        "name": LEVEL_NAMES[level],
        "speeds": {d: initial_speed(level, d) for d in DIFFICULTY_OFFSETS},
        **layout_to_dict(layout_for(level)),
    }


@app.get("/scores")
async def list_scores():
    return board.to_list()


@app.delete("/scores")
async def clear_scores():
    board.clear()
    logger.info("high scores reset")
    return {"cleared": True}


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await ws.accept()
    game = GameState()
    scheduler = TickScheduler()
    manager.connect(ws, game)

    async def on_tick(now: float):
        try:
            outcome = game.tick(now)
        except SpawnExhausted as exc:
            logger.error("spawn failed, stopping run: %s", exc)
            scheduler.stop()
            await manager.send(ws, build_error_msg(str(exc)))
            return
        if outcome is None:
            return
        await manager.send(ws, build_state_msg(game, now))
        if outcome.terminal:
            scheduler.stop()
            await manager.send(ws, build_game_over_msg(game, outcome))

    async def on_frame(now: float):
        try:
            changed = game.advance_environment(now)
        except SpawnExhausted as exc:
            logger.error("spawn failed, stopping run: %s", exc)
            scheduler.stop()
            await manager.send(ws, build_error_msg(str(exc)))
            return
        if changed:
            await manager.send(ws, build_state_msg(game, now))

    def resume():
        if not scheduler.running:
            scheduler.start(on_tick, lambda: game.speed, on_frame)

    await manager.send(ws, build_layout_msg(game))
    try:
        while True:
            raw = await ws.receive_text()
            now = time.time()
            try:
                msg = json.loads(raw)
                if not isinstance(msg, dict):
                    raise ValueError("message must be a JSON object")
                kind = msg.get("type")

                if kind == "reset":
                    scheduler.stop()
                    game.reset(msg.get("level", game.level), msg.get("difficulty", game.difficulty))
                    await manager.send(ws, build_layout_msg(game))
                    await manager.send(ws, build_state_msg(game, now))
                elif kind == "start":
                    was_over = game.status is RunStatus.TERMINATED
                    game.start(now)
                    resume()
                    if was_over:
                        await manager.send(ws, build_layout_msg(game))
                    await manager.send(ws, build_state_msg(game, now))
                elif kind == "pause":
                    status = game.toggle_pause(now)
                    if status is RunStatus.RUNNING:
                        resume()
                    else:
                        scheduler.stop()
                    await manager.send(ws, json.dumps({
                        "type": "pause_state",
                        "status": status.value,
                        "paused": status is RunStatus.PAUSED,
                    }))
                elif kind == "input":
                    d = msg.get("direction")
                    if d in DIRECTIONS:
                        game.set_intended_direction(d)
                elif kind == "submit_score":
                    entry = game.submit_score(msg.get("name", ""))
                    new_high = board.add(entry)
                    await manager.send(ws, build_scores_msg(board, entry, new_high))
                    await manager.send(ws, build_layout_msg(game))
                elif kind == "scores":
                    await manager.send(ws, build_scores_msg(board))
                else:
                    raise ValueError(f"unknown message type {kind!r}")
            except (InvalidConfiguration, RunNotTerminated, SpawnExhausted, ValueError) as exc:
                logger.warning("rejected client message: %s", exc)
                await manager.send(ws, build_error_msg(str(exc)))
    except WebSocketDisconnect:
        pass
    finally:
        scheduler.stop()
        manager.disconnect(ws)


if __name__ == "__main__":
    import uvicorn
    logger.info("SlitherSphere server starting on http://%s:%d", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)
