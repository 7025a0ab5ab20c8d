"""Base types and helpers for WebSocket message handlers."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.schemas.ws import MessageType, WSClientMessage, WSServerMessage
from app.services.game import (
    GameAction,
    MatchService,
    ProcessResult,
    RejectionReason,
    build_action_from_payload,
)
from app.services.game.engine import MatchFinished

if TYPE_CHECKING:
    from app.services.websocket.manager import ConnectionManager


@dataclass
class HandlerContext:
    """Context passed to each message handler."""

    connection_id: str
    message: WSClientMessage
    manager: "ConnectionManager"
    match: MatchService


@dataclass
class HandlerResult:
    """Result returned by message handlers.

    response goes to the originating connection only. Broadcasts are sent by
    submit_and_broadcast while the match is still locked.
    """

    success: bool
    response: WSServerMessage | None = None


def build_action(ctx: HandlerContext) -> tuple[GameAction | None, HandlerResult | None]:
    """Validate the message data into a typed action.

    Returns:
        Tuple of (action, error_result). One will be None.
    """
    try:
        action = build_action_from_payload(ctx.message.type.value, ctx.message.data)
        return action, None
    except ValidationError as e:
        return None, error_response("INVALID_MESSAGE", str(e))
    except ValueError as e:
        return None, error_response("UNKNOWN_ACTION", str(e))


def error_response(
    error_code: str,
    message: str,
    error_type: MessageType = MessageType.ERROR,
) -> HandlerResult:
    """Build an error HandlerResult addressed to the origin only."""
    return HandlerResult(
        success=False,
        response=WSServerMessage.error(error_code, message, type=error_type),
    )


def rejection_response(result: ProcessResult, error_type: MessageType) -> HandlerResult:
    """Turn a failed ProcessResult into an origin-only error."""
    code = result.error_code or RejectionReason.UNKNOWN_ACTION
    return error_response(code.value, result.error_message or "Action rejected", error_type)


def state_broadcast(result: ProcessResult) -> list[WSServerMessage]:
    """Full snapshot of the new state, plus gameOver if this action ended the match."""
    if result.state is None:
        return []

    messages = [
        WSServerMessage.game_state(result.state.model_dump(mode="json", by_alias=True))
    ]
    for event in result.events:
        if isinstance(event, MatchFinished):
            messages.append(WSServerMessage.game_over(event.winner))
    return messages


async def submit_and_broadcast(ctx: HandlerContext, action: GameAction) -> ProcessResult:
    """Submit an action and broadcast its new state before the next action runs."""

    async def publish(result: ProcessResult) -> None:
        for outbound in state_broadcast(result):
            await ctx.manager.broadcast(outbound)

    return await ctx.match.submit(action, on_commit=publish)
