import logging
import uuid
from dataclasses import dataclass

from fastapi import WebSocket

from app.schemas.ws import WSCloseCode, WSServerMessage

logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """Represents an active WebSocket connection."""

    connection_id: str
    websocket: WebSocket


class ConnectionManager:
    """Tracks the sockets subscribed to the match.

    The match engine never touches sockets; handlers return messages and the
    router asks the manager to deliver them.

    Local storage:
        - _connections: connection_id -> Connection
    """

    def __init__(self):
        self._connections: dict[str, Connection] = {}
        logger.info("ConnectionManager initialized")

    async def connect(self, websocket: WebSocket) -> Connection:
        """Register an accepted WebSocket connection.

        Args:
            websocket: The accepted WebSocket instance.

        Returns:
            The created Connection object.
        """
        connection = Connection(connection_id=str(uuid.uuid4()), websocket=websocket)
        self._connections[connection.connection_id] = connection

        logger.info(
            "Connection %s established (%d active)",
            connection.connection_id,
            len(self._connections),
        )
        return connection

    async def disconnect(self, connection_id: str) -> None:
        """Remove a WebSocket connection.

        Args:
            connection_id: The connection to remove.
        """
        connection = self._connections.pop(connection_id, None)
        if connection is None:
            logger.debug("Connection %s not found for disconnect", connection_id)
            return

        logger.info(
            "Connection %s disconnected (%d active)",
            connection_id,
            len(self._connections),
        )

    async def close_all_connections(self) -> None:
        """Close all active WebSocket connections gracefully."""
        logger.info("Closing all %d connections", len(self._connections))
        for conn_id in list(self._connections.keys()):
            connection = self._connections.get(conn_id)
            if connection:
                try:
                    await connection.websocket.close(code=WSCloseCode.GOING_AWAY)
                except Exception as e:
                    logger.debug("Error closing websocket %s: %s", conn_id, e)
            await self.disconnect(conn_id)

    async def send_to_connection(
        self, connection_id: str, message: WSServerMessage
    ) -> bool:
        """Send a message to a specific connection.

        Args:
            connection_id: The target connection.
            message: The message to send.

        Returns:
            True if sent successfully, False otherwise.
        """
        connection = self._connections.get(connection_id)
        if connection is None:
            logger.debug("Connection %s not found for sending", connection_id)
            return False

        try:
            await connection.websocket.send_json(message.model_dump(mode="json", exclude_none=True))
            return True
        except Exception as e:
            logger.warning("Failed to send to connection %s: %s", connection_id, e)
            await self.disconnect(connection_id)
            return False

    async def broadcast(self, message: WSServerMessage) -> int:
        """Broadcast a message to every connection.

        Args:
            message: The message to broadcast.

        Returns:
            Number of connections the message was sent to.
        """
        sent = 0
        for conn_id in list(self._connections.keys()):
            if await self.send_to_connection(conn_id, message):
                sent += 1
        logger.debug("Broadcast %s to %d connections", message.type.value, sent)
        return sent

    def get_total_connection_count(self) -> int:
        """Get the total number of connections."""
        return len(self._connections)
