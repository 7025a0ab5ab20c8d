from app.schemas.game_engine import (
    GamePhase,
    MatchState,
    Piece,
    Player,
    PlayerId,
    Players,
)

from .engine.board import build_board


def validate_rosters(roster_a: list[Piece], roster_b: list[Piece]) -> None:
    """Validate both starting rosters before initializing a match.

    Positions and piece types are already checked by the schema; this covers
    the rules that span pieces.
    """
    occupied: dict[tuple[int, int], str] = {}
    for player_id, roster in ((PlayerId.A, roster_a), (PlayerId.B, roster_b)):
        if not roster:
            raise ValueError(f"Player {player_id.value} must start with at least one piece.")

        piece_ids: set[str] = set()
        for piece in roster:
            if piece.id in piece_ids:
                raise ValueError(
                    f"Duplicate piece ID found for player {player_id.value}: {piece.id}"
                )
            piece_ids.add(piece.id)

            cell = (piece.position.x, piece.position.y)
            if cell in occupied:
                raise ValueError(
                    f"Overlapping starting position ({cell[0]}, {cell[1]}): "
                    f"{occupied[cell]} and {player_id.value}:{piece.id}"
                )
            occupied[cell] = f"{player_id.value}:{piece.id}"


def initialize_match(roster_a: list[Piece], roster_b: list[Piece]) -> MatchState:
    """
    Validate starting rosters and return a match ready for player A's first move.

    Args:
        roster_a: Player A's pieces at their absolute starting positions.
        roster_b: Player B's pieces at their absolute starting positions.

    Returns:
        A MatchState in IN_PROGRESS with the board built from both rosters.

    Raises:
        ValueError: If the rosters are empty, reuse a piece ID or overlap.
    """
    validate_rosters(roster_a, roster_b)

    players = Players(
        a=Player(id=PlayerId.A, pieces=list(roster_a)),
        b=Player(id=PlayerId.B, pieces=list(roster_b)),
    )

    return MatchState(
        phase=GamePhase.IN_PROGRESS,
        board=build_board(players),
        players=players,
        current_player=PlayerId.A,
        winner=None,
    )
