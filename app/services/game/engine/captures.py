"""Move legality, capture detection and commit.

A move is evaluated in two phases: every gate and every capture is computed
against the unchanged input state first, and only a fully legal move is
committed into a new MatchState. A rejected move therefore never removes a
piece.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

from app.schemas.game_engine import (
    Command,
    MatchState,
    Piece,
    PieceType,
    Player,
    PlayerId,
    Position,
)

from .board import build_board, find_occupant, is_within_bounds, path_between
from .events import AnyGameEvent, PieceCaptured, PieceMoved
from .movement import resolve_destination
from .validation import ProcessResult, RejectionReason

# Pieces whose path cells interact with occupants
LONG_RANGE_TYPES = frozenset({PieceType.HERO_STRAIGHT, PieceType.HERO_DIAGONAL})


@dataclass(frozen=True)
class Capture:
    """A piece marked for removal by a pending move."""

    player: PlayerId
    piece: Piece
    in_path: bool


def find_piece(player: Player, piece_id: str) -> Piece | None:
    """Look up a piece by id within one roster."""
    return next((p for p in player.pieces if p.id == piece_id), None)


def collect_captures(
    state: MatchState,
    mover: PlayerId,
    piece: Piece,
    destination: Position,
) -> tuple[list[Capture], RejectionReason | None]:
    """Mark opponent pieces hit by a move, or find the reason it is illegal.

    The destination cell is checked first, then each path cell in order.
    Path cells only matter for long-range pieces.

    Returns:
        (captures, None) for a legal move, or ([], reason) if the destination
        holds a friendly piece or a friendly piece blocks the path.
    """
    captures: list[Capture] = []

    occupant = find_occupant(state.players, destination.x, destination.y)
    if occupant is not None:
        owner, target = occupant
        if owner == mover:
            logger.debug("Friendly fire: %s would land on own piece %s", piece.id, target.id)
            return [], RejectionReason.FRIENDLY_FIRE
        captures.append(Capture(player=owner, piece=target, in_path=False))

    if piece.type in LONG_RANGE_TYPES:
        for x, y in path_between(piece.position, destination):
            occupant = find_occupant(state.players, x, y)
            if occupant is None:
                continue
            owner, target = occupant
            if owner == mover:
                logger.debug(
                    "Path blocked: %s cannot pass own piece %s at (%d, %d)",
                    piece.id,
                    target.id,
                    x,
                    y,
                )
                return [], RejectionReason.BLOCKED_BY_FRIENDLY
            captures.append(Capture(player=owner, piece=target, in_path=True))

    return captures, None


def apply_move(
    state: MatchState,
    player_id: PlayerId,
    piece_id: str,
    command: Command | str,
) -> ProcessResult:
    """Validate a move against the board and commit it if legal.

    Gates, in order: unknown piece, unresolvable command, out of bounds,
    friendly piece on the destination, friendly piece on the path.

    Args:
        state: Current match state (not mutated).
        player_id: The moving player.
        piece_id: ID of the piece within the mover's roster.
        command: Directional command.

    Returns:
        ProcessResult with the new state plus PieceCaptured/PieceMoved events,
        or a failure carrying the rejection reason.
    """
    mover = state.players.get(player_id)
    piece = find_piece(mover, piece_id)
    if piece is None:
        return ProcessResult.failure(
            RejectionReason.UNKNOWN_PIECE,
            f"Player {player_id.value} has no piece '{piece_id}'",
        )

    target = resolve_destination(piece, player_id, command)
    if target is None:
        return ProcessResult.failure(
            RejectionReason.INVALID_COMMAND,
            f"Command '{command}' is not valid for piece type {piece.type.value}",
        )

    if not is_within_bounds(*target):
        return ProcessResult.failure(
            RejectionReason.OUT_OF_BOUNDS,
            f"Destination ({target[0]}, {target[1]}) is outside the board",
        )

    destination = Position(x=target[0], y=target[1])
    captures, rejection = collect_captures(state, player_id, piece, destination)
    if rejection is RejectionReason.FRIENDLY_FIRE:
        return ProcessResult.failure(
            rejection, f"Destination ({destination.x}, {destination.y}) holds your own piece"
        )
    if rejection is RejectionReason.BLOCKED_BY_FRIENDLY:
        return ProcessResult.failure(rejection, "Your own piece blocks the path")

    new_state = _commit(state, player_id, piece, destination, captures)

    events: list[AnyGameEvent] = [
        PieceCaptured(
            capturing_player=player_id,
            capturing_piece_id=piece.id,
            captured_player=capture.player,
            captured_piece_id=capture.piece.id,
            position=capture.piece.position,
            in_path=capture.in_path,
        )
        for capture in captures
    ]
    events.append(
        PieceMoved(
            player=player_id,
            piece_id=piece.id,
            piece_type=piece.type,
            command=Command(command),
            from_position=piece.position,
            to_position=destination,
        )
    )

    logger.info(
        "Move committed: player=%s, piece=%s, (%d, %d) -> (%d, %d), captures=%d",
        player_id.value,
        piece.id,
        piece.position.x,
        piece.position.y,
        destination.x,
        destination.y,
        len(captures),
    )
    return ProcessResult.ok(new_state, events)


def _commit(
    state: MatchState,
    player_id: PlayerId,
    piece: Piece,
    destination: Position,
    captures: list[Capture],
) -> MatchState:
    """Build the post-move state: filter captures, relocate the mover, rebuild the board."""
    players = state.players
    for owner in players.both():
        captured_ids = {c.piece.id for c in captures if c.player == owner.id}
        moved_ids = {piece.id} if owner.id == player_id else set()
        if not captured_ids and not moved_ids:
            continue

        pieces = [
            p.model_copy(update={"position": destination}) if p.id in moved_ids else p
            for p in owner.pieces
            if p.id not in captured_ids
        ]
        eliminated = owner.eliminated + [p for p in owner.pieces if p.id in captured_ids]
        players = players.replace(
            owner.model_copy(update={"pieces": pieces, "eliminated": eliminated})
        )

    return state.model_copy(update={"players": players, "board": build_board(players)})
