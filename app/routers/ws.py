import json
import logging
import time
from collections import defaultdict

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from starlette.websockets import WebSocketState

from app.config import get_settings
from app.schemas.ws import WSClientMessage, WSServerMessage
from app.services.game import MatchService
from app.services.websocket.handlers import HandlerContext, dispatch
from app.services.websocket.manager import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


class RateLimiter:
    """Simple sliding-window rate limiter per connection."""

    def __init__(self, max_tokens: int, window: float):
        self.max_tokens = max_tokens
        self.window = window
        self._tokens: dict[str, list[float]] = defaultdict(list)

    def is_allowed(self, connection_id: str) -> bool:
        """Check if a message is allowed under rate limiting."""
        now = time.monotonic()
        cutoff = now - self.window

        # Remove expired timestamps
        self._tokens[connection_id] = [t for t in self._tokens[connection_id] if t > cutoff]

        # Check if under limit
        if len(self._tokens[connection_id]) >= self.max_tokens:
            return False

        # Record this message
        self._tokens[connection_id].append(now)
        return True

    def remove(self, connection_id: str) -> None:
        """Remove rate limit tracking for a connection."""
        self._tokens.pop(connection_id, None)


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """WebSocket endpoint for the match.

    Clients connect with: ws://host/api/v1/ws

    Every connection may initialize, move or reset. Successful actions are
    broadcast to all connections; rejections go back to the sender only.
    """
    settings = get_settings()
    manager: ConnectionManager = websocket.app.state.connection_manager
    match: MatchService = websocket.app.state.match_service
    rate_limiter: RateLimiter = websocket.app.state.rate_limiter

    await websocket.accept()
    connection = await manager.connect(websocket)

    try:
        while True:
            # Check if connection is still open
            if websocket.client_state != WebSocketState.CONNECTED:
                logger.debug("WebSocket no longer connected, exiting loop")
                break

            message_data = await websocket.receive()

            # Handle disconnect message
            if message_data.get("type") == "websocket.disconnect":
                break

            # Get raw bytes/text for size check
            raw_text = message_data.get("text")
            raw_bytes = message_data.get("bytes")

            if raw_text:
                message_size = len(raw_text.encode("utf-8"))
            elif raw_bytes:
                message_size = len(raw_bytes)
            else:
                continue

            # Check message size limit
            if message_size > settings.WS_MAX_MESSAGE_SIZE:
                logger.warning(
                    "Message too large from connection %s: %d bytes (max %d)",
                    connection.connection_id,
                    message_size,
                    settings.WS_MAX_MESSAGE_SIZE,
                )
                await manager.send_to_connection(
                    connection.connection_id,
                    WSServerMessage.error(
                        "MESSAGE_TOO_LARGE",
                        f"Message exceeds maximum size of {settings.WS_MAX_MESSAGE_SIZE} bytes",
                    ),
                )
                continue

            # Check rate limit
            if not rate_limiter.is_allowed(connection.connection_id):
                logger.warning(
                    "Rate limit exceeded for connection %s",
                    connection.connection_id,
                )
                await manager.send_to_connection(
                    connection.connection_id,
                    WSServerMessage.error("RATE_LIMITED", "Too many messages, please slow down"),
                )
                continue

            # Parse JSON from raw text or bytes
            try:
                data = json.loads(raw_text if raw_text else raw_bytes)
            except (json.JSONDecodeError, UnicodeDecodeError):
                logger.warning(
                    "Invalid JSON from connection %s",
                    connection.connection_id,
                )
                await manager.send_to_connection(
                    connection.connection_id,
                    WSServerMessage.error("INVALID_JSON", "Invalid JSON format"),
                )
                continue

            # Parse and validate message envelope
            try:
                message = WSClientMessage.model_validate(data)
            except ValidationError as e:
                logger.warning(
                    "Invalid message from connection %s: %s",
                    connection.connection_id,
                    e,
                )
                await manager.send_to_connection(
                    connection.connection_id,
                    WSServerMessage.error("INVALID_MESSAGE", "Invalid message format"),
                )
                continue

            logger.debug("Received message: type=%s, data=%s", message.type.value, message.data)

            # Dispatch message to handler
            ctx = HandlerContext(
                connection_id=connection.connection_id,
                message=message,
                manager=manager,
                match=match,
            )

            result = await dispatch(ctx)

            if result is None:
                await manager.send_to_connection(
                    connection.connection_id,
                    WSServerMessage.error(
                        "UNKNOWN_MESSAGE_TYPE",
                        f"Message type '{message.type.value}' is not accepted",
                    ),
                )
                continue

            # Send response to requester
            if result.response:
                await manager.send_to_connection(connection.connection_id, result.response)

    except WebSocketDisconnect as e:
        logger.info(
            "WS disconnected: connection %s, code %s",
            connection.connection_id,
            e.code,
        )
    except Exception:
        logger.exception("WS error for connection %s", connection.connection_id)
    finally:
        rate_limiter.remove(connection.connection_id)
        await manager.disconnect(connection.connection_id)
