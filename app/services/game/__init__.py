"""Game service module.

Provides:
- Match initialization (initialize.py)
- Match engine processing (engine/)
- The serialization point owning the match state (service.py)
"""

# Re-export from engine for convenience
from .engine import (
    GameAction,
    InitializeAction,
    MoveAction,
    ProcessResult,
    RejectionReason,
    ResetAction,
    build_action_from_payload,
    process_action,
)
from .initialize import initialize_match, validate_rosters
from .service import MatchService

__all__ = [
    # Initialization
    "initialize_match",
    "validate_rosters",
    # Engine
    "GameAction",
    "ProcessResult",
    "RejectionReason",
    "InitializeAction",
    "MoveAction",
    "ResetAction",
    "process_action",
    "build_action_from_payload",
    # Service
    "MatchService",
]
