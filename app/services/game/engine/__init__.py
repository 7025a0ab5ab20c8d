"""Match engine module - pure functional game logic.

This module provides the core match engine with:
- Action types for explicit user inputs
- Event types describing each accepted action
- ProcessResult pattern for error handling
- Move resolution, legality and capture rules

Usage:
    from app.services.game.engine import (
        process_action,
        ProcessResult,
        MoveAction,
    )

    # Process an action
    result = process_action(state, MoveAction(player="A", piece_id="p1", move="F"))

    if result.success:
        new_state = result.state
        events = result.events
    else:
        # Handle error
        print(f"Error: {result.error_code} - {result.error_message}")
"""

# Actions - explicit user inputs
from .actions import (
    GameAction,
    InitializeAction,
    MoveAction,
    ResetAction,
    build_action_from_payload,
)

# Board index
from .board import build_board, find_occupant, is_within_bounds, path_between

# Legality and captures
from .captures import apply_move, collect_captures

# Events
from .events import (
    AnyGameEvent,
    GameEvent,
    MatchFinished,
    MatchReset,
    MatchStarted,
    PieceCaptured,
    PieceMoved,
    TurnPassed,
)

# Move resolution
from .movement import resolve_destination, resolve_offset

# Main processing
from .process import check_win_condition, process_action

# Result types
from .validation import ProcessResult, RejectionReason, ValidationResult, validate_action

__all__ = [
    # Actions
    "GameAction",
    "InitializeAction",
    "MoveAction",
    "ResetAction",
    "build_action_from_payload",
    # Board
    "build_board",
    "find_occupant",
    "is_within_bounds",
    "path_between",
    # Captures
    "apply_move",
    "collect_captures",
    # Events
    "GameEvent",
    "AnyGameEvent",
    "MatchStarted",
    "MatchReset",
    "PieceMoved",
    "PieceCaptured",
    "TurnPassed",
    "MatchFinished",
    # Movement
    "resolve_offset",
    "resolve_destination",
    # Processing
    "process_action",
    "check_win_condition",
    # Validation
    "ProcessResult",
    "RejectionReason",
    "ValidationResult",
    "validate_action",
]
