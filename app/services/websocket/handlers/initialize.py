"""Handler for INITIALIZE messages."""

import logging

from app.schemas.ws import MessageType

from . import handler
from .base import (
    HandlerContext,
    HandlerResult,
    build_action,
    rejection_response,
    submit_and_broadcast,
)

logger = logging.getLogger(__name__)


@handler(MessageType.INITIALIZE)
async def handle_initialize(ctx: HandlerContext) -> HandlerResult:
    """Handle INITIALIZE by placing both starting rosters and starting the match.

    Flow:
    1. Validate data into an InitializeAction (positions, piece types)
    2. Submit to the match service (phase and roster checks)
    3. Broadcast the new state to every connection

    Returns:
        HandlerResult; on rejection it carries the origin-only error.
    """
    action, validation_error = build_action(ctx)
    if validation_error:
        logger.warning("Malformed initialize from connection %s", ctx.connection_id)
        return validation_error

    result = await submit_and_broadcast(ctx, action)
    if not result.success:
        logger.info(
            "Initialize rejected for connection %s: %s - %s",
            ctx.connection_id,
            result.error_code,
            result.error_message,
        )
        return rejection_response(result, MessageType.ERROR)

    logger.info("Match initialized by connection %s", ctx.connection_id)
    return HandlerResult(success=True)
