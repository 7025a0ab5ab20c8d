"""Match action types - explicit inputs separated from match state."""

from typing import Annotated, Literal

from pydantic import Field

from app.schemas.game_engine import CamelModel, Piece, PlayerId


class InitializeAction(CamelModel):
    """Start a match from two caller-supplied starting rosters."""

    action_type: Literal["initialize"] = "initialize"
    player_a: list[Piece] = Field(..., description="Player A's starting pieces")
    player_b: list[Piece] = Field(..., description="Player B's starting pieces")


class MoveAction(CamelModel):
    """A player moves one of their pieces."""

    action_type: Literal["move"] = "move"
    player: PlayerId
    piece_id: str = Field(..., description="ID of the piece to move")
    # Kept as a plain string so unknown commands surface as INVALID_COMMAND
    move: str = Field(..., description="Directional command, e.g. 'F' or 'BL'")


class ResetAction(CamelModel):
    """Discard the current match and return to UNINITIALIZED."""

    action_type: Literal["reset"] = "reset"


# Union type for all match actions
GameAction = Annotated[
    InitializeAction | MoveAction | ResetAction,
    Field(discriminator="action_type"),
]


def build_action_from_payload(action_type: str, data: dict | None) -> GameAction:
    """Build a typed action from a message type and its raw data.

    Args:
        action_type: The inbound message type ('initialize', 'move', 'reset').
        data: The message's data dict (camelCase keys).

    Returns:
        The appropriate GameAction subtype.

    Raises:
        ValueError: If action_type is unknown.
        pydantic.ValidationError: If data does not match the action schema.
    """
    payload = dict(data or {})
    payload.pop("action_type", None)

    if action_type == "initialize":
        return InitializeAction.model_validate(payload)
    elif action_type == "move":
        return MoveAction.model_validate(payload)
    elif action_type == "reset":
        return ResetAction.model_validate(payload)
    else:
        raise ValueError(f"Unknown action type: {action_type}")
