"""Validation layer for match actions and ProcessResult pattern.

Separates validation from processing logic:
- validate_action() checks phase and turn order before any rule is evaluated
- ProcessResult replaces exceptions for control flow
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)

from app.schemas.game_engine import GamePhase, MatchState

from .actions import GameAction, InitializeAction, MoveAction, ResetAction
from .events import AnyGameEvent


class RejectionReason(str, Enum):
    """Error codes returned to the originating client."""

    # Move legality
    UNKNOWN_PIECE = "UNKNOWN_PIECE"
    INVALID_COMMAND = "INVALID_COMMAND"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    FRIENDLY_FIRE = "FRIENDLY_FIRE"
    BLOCKED_BY_FRIENDLY = "BLOCKED_BY_FRIENDLY"
    OUT_OF_TURN = "OUT_OF_TURN"

    # Match lifecycle
    MATCH_NOT_STARTED = "MATCH_NOT_STARTED"
    MATCH_FINISHED = "MATCH_FINISHED"
    MATCH_ALREADY_STARTED = "MATCH_ALREADY_STARTED"
    INVALID_ROSTER = "INVALID_ROSTER"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"


@dataclass
class ProcessResult:
    """Result of processing a match action.

    Replaces exceptions for control flow, providing explicit success/failure
    with error codes suitable for client localization.
    """

    state: MatchState | None = None
    events: list[AnyGameEvent] = field(default_factory=list)
    success: bool = True
    error_code: RejectionReason | None = None
    error_message: str | None = None

    @classmethod
    def ok(
        cls,
        state: MatchState,
        events: list[AnyGameEvent] | None = None,
    ) -> "ProcessResult":
        """Create a successful result with new state and events."""
        return cls(
            state=state,
            events=events or [],
            success=True,
        )

    @classmethod
    def failure(cls, code: RejectionReason, message: str) -> "ProcessResult":
        """Create a failure result with error details."""
        return cls(
            state=None,
            events=[],
            success=False,
            error_code=code,
            error_message=message,
        )


@dataclass
class ValidationResult:
    """Result of validating an action before processing."""

    is_valid: bool = True
    error_code: RejectionReason | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(cls, code: RejectionReason, message: str) -> "ValidationResult":
        """Create a validation failure with error details."""
        return cls(
            is_valid=False,
            error_code=code,
            error_message=message,
        )


def validate_action(
    state: MatchState,
    action: GameAction,
    allow_reinitialize: bool = False,
) -> ValidationResult:
    """Validate an action against the match phase and turn order.

    Checks:
    - Initialize is only accepted before the match starts (unless
      re-initialization is allowed)
    - Moves are only accepted while the match is in progress
    - The moving player is the current player

    Rule legality (pieces, bounds, occupancy) is left to the capture engine.

    Args:
        state: Current match state.
        action: The action to validate.
        allow_reinitialize: Accept initialize in any phase.

    Returns:
        ValidationResult indicating success or failure with error details.
    """
    action_type = type(action).__name__
    logger.debug("Validating action: type=%s, phase=%s", action_type, state.phase.value)

    if isinstance(action, ResetAction):
        return ValidationResult.ok()

    if isinstance(action, InitializeAction):
        if state.phase != GamePhase.UNINITIALIZED and not allow_reinitialize:
            logger.warning(
                "Validation failed: MATCH_ALREADY_STARTED, current_phase=%s",
                state.phase.value,
            )
            return ValidationResult.error(
                RejectionReason.MATCH_ALREADY_STARTED,
                "A match has already been initialized; reset it first",
            )
        return ValidationResult.ok()

    if isinstance(action, MoveAction):
        if state.phase == GamePhase.UNINITIALIZED:
            logger.warning("Validation failed: MATCH_NOT_STARTED")
            return ValidationResult.error(
                RejectionReason.MATCH_NOT_STARTED,
                "Match has not been initialized yet",
            )

        if state.phase == GamePhase.FINISHED:
            logger.warning("Validation failed: MATCH_FINISHED, winner=%s", state.winner)
            return ValidationResult.error(
                RejectionReason.MATCH_FINISHED,
                "Match has already finished",
            )

        if action.player != state.current_player:
            logger.warning(
                "Validation failed: OUT_OF_TURN, current=%s, attempted=%s",
                state.current_player,
                action.player.value,
            )
            return ValidationResult.error(
                RejectionReason.OUT_OF_TURN,
                "It's not your turn",
            )

        logger.debug("Action validated successfully: type=%s", action_type)
        return ValidationResult.ok()

    logger.warning("Validation failed: UNKNOWN_ACTION, type=%s", action_type)
    return ValidationResult.error(
        RejectionReason.UNKNOWN_ACTION,
        f"Unknown action type: {action_type}",
    )
