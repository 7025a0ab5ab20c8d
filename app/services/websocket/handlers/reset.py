"""Handler for RESET messages."""

import logging

from app.schemas.ws import MessageType

from . import handler
from .base import HandlerContext, HandlerResult, build_action, rejection_response, submit_and_broadcast

logger = logging.getLogger(__name__)


@handler(MessageType.RESET)
async def handle_reset(ctx: HandlerContext) -> HandlerResult:
    """Handle RESET by discarding the match and broadcasting the empty state."""
    action, validation_error = build_action(ctx)
    if validation_error:
        return validation_error

    result = await submit_and_broadcast(ctx, action)
    if not result.success:
        return rejection_response(result, MessageType.ERROR)

    logger.info("Match reset by connection %s", ctx.connection_id)
    return HandlerResult(success=True)
