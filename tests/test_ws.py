"""Tests for the WebSocket gateway.

Critical scenarios tested:
- Initialize and moves broadcast the full state to every connection
- Rejections go to the sender only (invalidMove / outOfTurn)
- Game over is broadcast after the final state
- Malformed frames are answered with an error and never reach the match
"""

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.main import app

WS_URL = "/api/v1/ws"

ROSTER_A = [
    {"id": "p1", "type": "P", "position": {"x": 0, "y": 0}},
    {"id": "h1", "type": "H1", "position": {"x": 1, "y": 0}},
]
ROSTER_B = [
    {"id": "p1", "type": "P", "position": {"x": 0, "y": 4}},
    {"id": "h2", "type": "H2", "position": {"x": 3, "y": 4}},
]


def initialize_message(roster_a=ROSTER_A, roster_b=ROSTER_B) -> dict:
    return {"type": "initialize", "data": {"playerA": roster_a, "playerB": roster_b}}


def move_message(player: str, piece_id: str, move: str) -> dict:
    return {"type": "move", "data": {"player": player, "pieceId": piece_id, "move": move}}


def sync(ws) -> None:
    """Round-trip an origin-only error so the connection is known to be registered."""
    ws.send_json({"type": "move", "data": {}})
    assert ws.receive_json()["type"] == "error"


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestInitialize:
    """Test the initialize command."""

    def test_initialize_broadcasts_game_state(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json(initialize_message())
            message = ws.receive_json()

        assert message["type"] == "gameState"
        state = message["state"]
        assert state["phase"] == "in_progress"
        assert state["currentPlayer"] == "A"
        assert state["board"][0][:2] == ["p1", "h1"]
        assert [p["id"] for p in state["players"]["A"]["pieces"]] == ["p1", "h1"]
        assert [p["id"] for p in state["players"]["B"]["pieces"]] == ["p1", "h2"]

    def test_overlapping_roster_is_rejected(self, client: TestClient):
        clash = [{"id": "x", "type": "P", "position": {"x": 0, "y": 0}}]

        with client.websocket_connect(WS_URL) as ws:
            ws.send_json(initialize_message(roster_b=clash))
            message = ws.receive_json()

        assert message["type"] == "error"
        assert message["reason"] == "INVALID_ROSTER"
        assert "Overlapping" in message["message"]

    def test_second_initialize_is_rejected(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json(initialize_message())
            ws.receive_json()
            ws.send_json(initialize_message())
            message = ws.receive_json()

        assert message["type"] == "error"
        assert message["reason"] == "MATCH_ALREADY_STARTED"


class TestMoves:
    """Test move handling across connections."""

    def test_valid_move_is_broadcast_to_all(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws1, client.websocket_connect(WS_URL) as ws2:
            sync(ws1)
            sync(ws2)

            ws1.send_json(initialize_message())
            assert ws1.receive_json()["type"] == "gameState"
            assert ws2.receive_json()["type"] == "gameState"

            ws1.send_json(move_message("A", "p1", "F"))
            for ws in (ws1, ws2):
                message = ws.receive_json()
                assert message["type"] == "gameState"
                assert message["state"]["currentPlayer"] == "B"
                assert message["state"]["board"][1][0] == "p1"

    def test_out_of_turn_goes_to_sender_only(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws1, client.websocket_connect(WS_URL) as ws2:
            sync(ws1)
            sync(ws2)
            ws1.send_json(initialize_message())
            ws1.receive_json()
            ws2.receive_json()

            ws2.send_json(move_message("B", "p1", "F"))
            rejection = ws2.receive_json()
            assert rejection["type"] == "outOfTurn"
            assert rejection["reason"] == "OUT_OF_TURN"

            # ws1's next message is the following broadcast, not the rejection
            ws1.send_json(move_message("A", "p1", "F"))
            assert ws1.receive_json()["type"] == "gameState"
            assert ws2.receive_json()["type"] == "gameState"

    def test_invalid_move_carries_reason(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json(initialize_message())
            ws.receive_json()

            ws.send_json(move_message("A", "p1", "R"))
            message = ws.receive_json()

        assert message["type"] == "invalidMove"
        assert message["reason"] == "FRIENDLY_FIRE"

    def test_move_before_initialize_is_invalid(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json(move_message("A", "p1", "F"))
            message = ws.receive_json()

        assert message["type"] == "invalidMove"
        assert message["reason"] == "MATCH_NOT_STARTED"

    def test_final_capture_broadcasts_game_over(self, client: TestClient):
        roster_a = [{"id": "pa", "type": "P", "position": {"x": 2, "y": 2}}]
        roster_b = [{"id": "pb", "type": "P", "position": {"x": 2, "y": 3}}]

        with client.websocket_connect(WS_URL) as ws:
            ws.send_json(initialize_message(roster_a, roster_b))
            ws.receive_json()

            ws.send_json(move_message("A", "pa", "F"))
            state_message = ws.receive_json()
            over_message = ws.receive_json()

            ws.send_json(move_message("B", "pb", "F"))
            frozen = ws.receive_json()

        assert state_message["type"] == "gameState"
        assert state_message["state"]["phase"] == "finished"
        assert state_message["state"]["winner"] == "A"
        assert over_message == {"type": "gameOver", "winner": "A"}
        assert frozen["type"] == "invalidMove"
        assert frozen["reason"] == "MATCH_FINISHED"


class TestReset:
    """Test the reset command."""

    def test_reset_allows_new_match(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json(initialize_message())
            ws.receive_json()

            ws.send_json({"type": "reset"})
            reset_state = ws.receive_json()

            ws.send_json(initialize_message())
            restarted = ws.receive_json()

        assert reset_state["state"]["phase"] == "uninitialized"
        assert reset_state["state"].get("currentPlayer") is None
        assert restarted["state"]["phase"] == "in_progress"


class TestMalformedFrames:
    """Test gateway-level errors."""

    def test_invalid_json(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_text("{not json")
            message = ws.receive_json()

        assert message["type"] == "error"
        assert message["reason"] == "INVALID_JSON"

    def test_unknown_message_type(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json({"type": "teleport", "data": {}})
            message = ws.receive_json()

        assert message["reason"] == "INVALID_MESSAGE"

    def test_server_message_type_is_not_accepted(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json({"type": "gameState"})
            message = ws.receive_json()

        assert message["reason"] == "UNKNOWN_MESSAGE_TYPE"

    def test_move_with_missing_fields(self, client: TestClient):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_json({"type": "move", "data": {"player": "A"}})
            message = ws.receive_json()

        assert message["type"] == "error"
        assert message["reason"] == "INVALID_MESSAGE"


class TestGatewayLimits:
    """Test the frame size and rate limits applied before dispatch."""

    def test_oversized_frame_is_rejected(self, client: TestClient):
        limit = get_settings().WS_MAX_MESSAGE_SIZE

        with client.websocket_connect(WS_URL) as ws:
            ws.send_text("x" * (limit + 1))
            message = ws.receive_json()

        assert message["type"] == "error"
        assert message["reason"] == "MESSAGE_TOO_LARGE"

    def test_burst_over_rate_limit_is_rejected(self, client: TestClient):
        limit = get_settings().WS_MAX_MESSAGES_PER_SECOND

        with client.websocket_connect(WS_URL) as ws:
            for _ in range(limit + 1):
                ws.send_json({"type": "move", "data": {}})
            replies = [ws.receive_json() for _ in range(limit + 1)]

        assert replies[0]["reason"] == "INVALID_MESSAGE"
        assert replies[-1]["type"] == "error"
        assert replies[-1]["reason"] == "RATE_LIMITED"


class TestHttp:
    """Test the plain HTTP endpoints."""

    def test_health_reports_phase(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "phase": "uninitialized", "connections": 0}
