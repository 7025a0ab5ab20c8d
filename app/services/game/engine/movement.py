"""Move resolution: maps a piece type and directional command to an offset.

Offsets are written from player A's point of view, where Forward increases y.
Player B faces the other way, so the y component is mirrored for B. Left and
Right are absolute and never mirrored.
"""

import logging

from app.schemas.game_engine import Command, Piece, PieceType, PlayerId

logger = logging.getLogger(__name__)

_STRAIGHT_STEPS: dict[Command, tuple[int, int]] = {
    Command.LEFT: (-1, 0),
    Command.RIGHT: (1, 0),
    Command.FORWARD: (0, 1),
    Command.BACKWARD: (0, -1),
}

_DIAGONAL_STEPS: dict[Command, tuple[int, int]] = {
    Command.FORWARD_LEFT: (-1, 1),
    Command.FORWARD_RIGHT: (1, 1),
    Command.BACKWARD_LEFT: (-1, -1),
    Command.BACKWARD_RIGHT: (1, -1),
}

# piece type -> (allowed steps, magnitude)
_MOVE_TABLE: dict[PieceType, tuple[dict[Command, tuple[int, int]], int]] = {
    PieceType.PAWN: (_STRAIGHT_STEPS, 1),
    PieceType.HERO_STRAIGHT: (_STRAIGHT_STEPS, 2),
    PieceType.HERO_DIAGONAL: (_DIAGONAL_STEPS, 2),
}

_FORWARD_SIGN: dict[PlayerId, int] = {
    PlayerId.A: 1,
    PlayerId.B: -1,
}


def resolve_offset(
    piece_type: PieceType | str,
    player: PlayerId,
    command: Command | str,
) -> tuple[int, int] | None:
    """Resolve the (dx, dy) offset for a command.

    Args:
        piece_type: The moving piece's type.
        player: The piece's owner, which fixes its forward orientation.
        command: Directional command such as 'F' or 'BL'.

    Returns:
        The offset, or None if the command is unknown or not allowed for the
        piece type.
    """
    try:
        piece_type = PieceType(piece_type)
        command = Command(command)
    except ValueError:
        logger.debug("Unrecognized piece type or command: type=%s, command=%s", piece_type, command)
        return None

    steps, magnitude = _MOVE_TABLE[piece_type]
    step = steps.get(command)
    if step is None:
        return None

    dx, dy = step
    return dx * magnitude, dy * magnitude * _FORWARD_SIGN[player]


def resolve_destination(
    piece: Piece, player: PlayerId, command: Command | str
) -> tuple[int, int] | None:
    """Absolute target cell for a piece, possibly off the board."""
    offset = resolve_offset(piece.type, player, command)
    if offset is None:
        return None
    return piece.position.x + offset[0], piece.position.y + offset[1]
