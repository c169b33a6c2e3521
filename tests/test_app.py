import pytest
from fastapi.testclient import TestClient

from slithersphere.main import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        c.delete("/scores")
        yield c


def receive_until(ws, kind):
    for _ in range(200):
        msg = ws.receive_json()
        if msg["type"] == kind:
            return msg
    raise AssertionError(f"no {kind} message received")


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_describe_level(client):
    body = client.get("/levels/4").json()
    assert body["name"] == "Shrinking Maze"
    assert body["speeds"] == {"easy": 160, "medium": 110, "hard": 80}
    assert {"source": [3, 3], "target": [16, 16]} in body["teleport_zones"]


def test_unknown_level_is_404(client):
    assert client.get("/levels/9").status_code == 404


def test_scores_start_empty(client):
    assert client.get("/scores").json() == []


def test_websocket_reset_and_errors(client):
    with client.websocket_connect("/ws") as ws:
        layout = ws.receive_json()
        assert layout["type"] == "layout"
        assert layout["level"] == 1
        assert layout["grid"] == [20, 20]

        ws.send_json({"type": "reset", "level": 3, "difficulty": "hard"})
        layout = receive_until(ws, "layout")
        assert layout["level"] == 3
        assert layout["difficulty"] == "hard"
        state = receive_until(ws, "state")
        assert state["status"] == "idle"
        assert len(state["moving_obstacles"]) == 3
        assert state["speed"] == 90

        ws.send_json({"type": "reset", "level": 8})
        assert "unknown level" in receive_until(ws, "error")["message"]

        ws.send_text("not json")
        receive_until(ws, "error")

        ws.send_json({"type": "submit_score", "name": "ann"})
        assert "over" in receive_until(ws, "error")["message"]

        ws.send_json({"type": "bogus"})
        receive_until(ws, "error")


def test_websocket_start_pause_and_input(client):
    with client.websocket_connect("/ws") as ws:
        receive_until(ws, "layout")
        ws.send_json({"type": "input", "direction": "down"})
        ws.send_json({"type": "start"})
        state = receive_until(ws, "state")
        assert state["status"] == "running"

        ws.send_json({"type": "pause"})
        paused = receive_until(ws, "pause_state")
        assert paused["paused"] is True

        ws.send_json({"type": "pause"})
        resumed = receive_until(ws, "pause_state")
        assert resumed["status"] == "running"
