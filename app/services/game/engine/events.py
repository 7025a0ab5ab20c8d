"""Match event types - emitted during state transitions.

Events describe what happened during an action, enabling:
- Structured logging of every accepted action
- Deciding which broadcasts the gateway sends (e.g. game over)
- Action replay / audit logging
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from app.schemas.game_engine import Command, PieceType, PlayerId, Position


class GameEvent(BaseModel):
    """Base class for all match events."""

    event_type: str
    seq: int = 0  # Sequence number assigned during processing


class MatchStarted(GameEvent):
    """Match has transitioned from UNINITIALIZED to IN_PROGRESS."""

    event_type: Literal["match_started"] = "match_started"
    first_player: PlayerId
    piece_counts: dict[PlayerId, int] = Field(
        ..., description="Starting roster size per player"
    )


class MatchReset(GameEvent):
    """Match was discarded and returned to UNINITIALIZED."""

    event_type: Literal["match_reset"] = "match_reset"


class PieceMoved(GameEvent):
    """A piece moved to a new cell."""

    event_type: Literal["piece_moved"] = "piece_moved"
    player: PlayerId
    piece_id: str
    piece_type: PieceType
    command: Command
    from_position: Position
    to_position: Position


class PieceCaptured(GameEvent):
    """An opponent piece was removed by a move."""

    event_type: Literal["piece_captured"] = "piece_captured"
    capturing_player: PlayerId
    capturing_piece_id: str
    captured_player: PlayerId
    captured_piece_id: str
    position: Position
    in_path: bool = Field(
        ..., description="True if captured on a path cell rather than the destination"
    )


class TurnPassed(GameEvent):
    """The turn moved to the other player."""

    event_type: Literal["turn_passed"] = "turn_passed"
    previous_player: PlayerId
    next_player: PlayerId


class MatchFinished(GameEvent):
    """A roster was emptied and the match is over."""

    event_type: Literal["match_finished"] = "match_finished"
    winner: PlayerId
    loser: PlayerId


# Union of all event types for type checking
AnyGameEvent = Annotated[
    MatchStarted | MatchReset | PieceMoved | PieceCaptured | TurnPassed | MatchFinished,
    Field(discriminator="event_type"),
]
