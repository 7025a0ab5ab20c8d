"""Handler for MOVE messages."""

import logging

from app.schemas.ws import MessageType
from app.services.game import RejectionReason

from . import handler
from .base import (
    HandlerContext,
    HandlerResult,
    build_action,
    rejection_response,
    submit_and_broadcast,
)

logger = logging.getLogger(__name__)


@handler(MessageType.MOVE)
async def handle_move(ctx: HandlerContext) -> HandlerResult:
    """Handle MOVE by running it through the match engine.

    Flow:
    1. Validate data into a MoveAction
    2. Submit to the match service
    3. On success, broadcast the new state (and gameOver if the match ended)
    4. On rejection, reply to the origin only: outOfTurn for turn order,
       invalidMove for everything else

    Returns:
        HandlerResult; on rejection it carries the origin-only reply.
    """
    action, validation_error = build_action(ctx)
    if validation_error:
        logger.warning("Malformed move from connection %s", ctx.connection_id)
        return validation_error

    result = await submit_and_broadcast(ctx, action)

    if not result.success:
        logger.info(
            "Move rejected for connection %s: %s - %s",
            ctx.connection_id,
            result.error_code,
            result.error_message,
        )
        if result.error_code is RejectionReason.OUT_OF_TURN:
            return rejection_response(result, MessageType.OUT_OF_TURN)
        return rejection_response(result, MessageType.INVALID_MOVE)

    logger.info(
        "Move processed for connection %s: %d events",
        ctx.connection_id,
        len(result.events),
    )
    return HandlerResult(success=True)
