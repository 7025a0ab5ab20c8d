from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel

from app.schemas.game_engine import PlayerId


class MessageType(str, Enum):
    """WebSocket message types."""

    # Client -> server
    INITIALIZE = "initialize"
    MOVE = "move"
    RESET = "reset"

    # Server -> client
    GAME_STATE = "gameState"
    GAME_OVER = "gameOver"
    INVALID_MOVE = "invalidMove"
    OUT_OF_TURN = "outOfTurn"
    ERROR = "error"


class WSCloseCode:
    """WebSocket close codes (RFC 6455)."""

    GOING_AWAY = 1001


class WSClientMessage(BaseModel):
    """Message sent from client to server."""

    type: MessageType
    data: dict[str, Any] | None = None


class WSServerMessage(BaseModel):
    """Message sent from server to client.

    Only the fields relevant to each type are set; the rest are dropped when
    the message is sent.
    """

    type: MessageType
    state: dict[str, Any] | None = None
    winner: PlayerId | None = None
    reason: str | None = None
    message: str | None = None

    @classmethod
    def game_state(cls, state: dict[str, Any]) -> WSServerMessage:
        return cls(type=MessageType.GAME_STATE, state=state)

    @classmethod
    def game_over(cls, winner: PlayerId) -> WSServerMessage:
        return cls(type=MessageType.GAME_OVER, winner=winner)

    @classmethod
    def error(
        cls, reason: str, message: str, type: MessageType = MessageType.ERROR
    ) -> WSServerMessage:
        return cls(type=type, reason=reason, message=message)
