"""Main entry point for match action processing.

This module provides the primary interface for processing match actions:
- process_action(): Validates and processes any match action
- Dispatches to specialized handlers based on action type
- Returns ProcessResult with new state and events
"""

import logging

logger = logging.getLogger(__name__)

from app.schemas.game_engine import GamePhase, MatchState, PlayerId

from ..initialize import initialize_match
from .actions import GameAction, InitializeAction, MoveAction, ResetAction
from .captures import apply_move
from .events import AnyGameEvent, MatchFinished, MatchReset, MatchStarted, TurnPassed
from .validation import ProcessResult, RejectionReason, validate_action


def process_action(
    state: MatchState,
    action: GameAction,
    allow_reinitialize: bool = False,
) -> ProcessResult:
    """Process a match action and return the result.

    This is the main entry point for all match actions. It:
    1. Validates the action against phase and turn order
    2. Dispatches to the appropriate handler
    3. Assigns sequence numbers to events
    4. Returns ProcessResult with new state and events

    Args:
        state: Current match state. Never mutated.
        action: The action to process.
        allow_reinitialize: Let initialize overwrite a match in any phase.

    Returns:
        ProcessResult containing:
        - success: Whether the action was processed successfully
        - state: The new match state (if successful)
        - events: List of events that occurred (with seq numbers)
        - error_code/error_message: Error details (if failed)

    Example:
        >>> result = process_action(state, MoveAction(player="A", piece_id="p1", move="F"))
        >>> if result.success:
        ...     new_state = result.state
        ... else:
        ...     send_error(result.error_code, result.error_message)
    """
    action_type = type(action).__name__
    logger.info("Processing action: type=%s, phase=%s", action_type, state.phase.value)
    logger.debug("Action details: %s", action)

    validation = validate_action(state, action, allow_reinitialize)
    if not validation.is_valid:
        return ProcessResult.failure(
            validation.error_code or RejectionReason.UNKNOWN_ACTION,
            validation.error_message or "Invalid action",
        )

    if isinstance(action, InitializeAction):
        result = process_initialize(state, action)

    elif isinstance(action, MoveAction):
        result = process_move(state, action)

    elif isinstance(action, ResetAction):
        result = process_reset(state)

    else:
        logger.error("Unknown action type received: %s", action_type)
        return ProcessResult.failure(
            RejectionReason.UNKNOWN_ACTION,
            f"Unknown action type: {action_type}",
        )

    if result.success and result.state is not None:
        result = _assign_event_sequences(result)
        logger.info(
            "Action processed successfully: type=%s, events_generated=%d",
            action_type,
            len(result.events),
        )
        logger.debug("Generated events: %s", [type(e).__name__ for e in result.events])
    else:
        logger.warning(
            "Action processing failed: type=%s, error=%s, message=%s",
            action_type,
            result.error_code,
            result.error_message,
        )

    return result


def _assign_event_sequences(result: ProcessResult) -> ProcessResult:
    """Assign monotonically increasing sequence numbers to events.

    Updates each event's seq field and increments the state's event_seq counter.
    """
    if result.state is None or not result.events:
        return result

    current_seq = result.state.event_seq
    for event in result.events:
        event.seq = current_seq
        current_seq += 1

    new_state = result.state.model_copy(update={"event_seq": current_seq})

    return ProcessResult.ok(new_state, result.events)


def process_initialize(state: MatchState, action: InitializeAction) -> ProcessResult:
    """Place both starting rosters and hand the first turn to player A."""
    try:
        new_state = initialize_match(action.player_a, action.player_b)
    except ValueError as e:
        return ProcessResult.failure(RejectionReason.INVALID_ROSTER, str(e))

    # Sequence numbers keep counting across re-initialization
    new_state = new_state.model_copy(update={"event_seq": state.event_seq})

    events: list[AnyGameEvent] = [
        MatchStarted(
            first_player=PlayerId.A,
            piece_counts={
                PlayerId.A: len(action.player_a),
                PlayerId.B: len(action.player_b),
            },
        )
    ]
    logger.info(
        "Match started: pieces_a=%d, pieces_b=%d",
        len(action.player_a),
        len(action.player_b),
    )
    return ProcessResult.ok(new_state, events)


def process_reset(state: MatchState) -> ProcessResult:
    """Discard the match and return to UNINITIALIZED."""
    logger.info("Resetting match from phase=%s", state.phase.value)
    return ProcessResult.ok(MatchState(event_seq=state.event_seq), [MatchReset()])


def process_move(state: MatchState, action: MoveAction) -> ProcessResult:
    """Apply a validated-in-turn move, pass the turn and check for a winner."""
    result = apply_move(state, action.player, action.piece_id, action.move)
    if not result.success or result.state is None:
        return result

    new_state = result.state.model_copy(update={"current_player": action.player.opponent})
    events = list(result.events)
    events.append(TurnPassed(previous_player=action.player, next_player=action.player.opponent))

    winner = check_win_condition(new_state)
    if winner is not None:
        new_state = new_state.model_copy(
            update={"phase": GamePhase.FINISHED, "winner": winner}
        )
        events.append(MatchFinished(winner=winner, loser=winner.opponent))
        logger.info("Match finished: winner=%s", winner.value)

    return ProcessResult.ok(new_state, events)


def check_win_condition(state: MatchState) -> PlayerId | None:
    """Check if a player has won the match.

    A player wins when the opponent's roster is empty.

    Args:
        state: Current match state.

    Returns:
        The winning player, or None if no winner yet.
    """
    for player in state.players.both():
        logger.debug("Win check: player=%s, pieces=%d", player.id.value, len(player.pieces))
        if not player.pieces:
            logger.info("Winner detected: player=%s", player.id.opponent.value)
            return player.id.opponent
    return None
