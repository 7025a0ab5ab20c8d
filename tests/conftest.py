"""Shared fixtures for match engine tests."""

import pytest

from app.schemas.game_engine import (
    GamePhase,
    MatchState,
    Piece,
    PieceType,
    Player,
    PlayerId,
    Players,
    Position,
)
from app.services.game.engine import build_board


def create_piece(piece_id: str, piece_type: PieceType, x: int, y: int) -> Piece:
    """Helper to create a piece."""
    return Piece(id=piece_id, type=piece_type, position=Position(x=x, y=y))


def create_state(
    pieces_a: list[Piece],
    pieces_b: list[Piece],
    current_player: PlayerId = PlayerId.A,
    phase: GamePhase = GamePhase.IN_PROGRESS,
) -> MatchState:
    """Helper to create a match state with a consistent board."""
    players = Players(
        a=Player(id=PlayerId.A, pieces=pieces_a),
        b=Player(id=PlayerId.B, pieces=pieces_b),
    )
    return MatchState(
        phase=phase,
        board=build_board(players),
        players=players,
        current_player=current_player,
    )


def piece_ids(state: MatchState, player_id: PlayerId) -> list[str]:
    """IDs of a player's surviving pieces, in roster order."""
    return [p.id for p in state.players.get(player_id).pieces]


def position_of(state: MatchState, player_id: PlayerId, piece_id: str) -> tuple[int, int]:
    """Current (x, y) of a piece."""
    piece = next(p for p in state.players.get(player_id).pieces if p.id == piece_id)
    return piece.position.x, piece.position.y


@pytest.fixture
def starting_roster_a() -> list[Piece]:
    """Player A's back row: pawns flanking both heroes."""
    return [
        create_piece("p1", PieceType.PAWN, 0, 0),
        create_piece("h1", PieceType.HERO_STRAIGHT, 1, 0),
        create_piece("p2", PieceType.PAWN, 2, 0),
        create_piece("h2", PieceType.HERO_DIAGONAL, 3, 0),
        create_piece("p3", PieceType.PAWN, 4, 0),
    ]


@pytest.fixture
def starting_roster_b() -> list[Piece]:
    """Player B's back row, mirrored on the far side."""
    return [
        create_piece("p1", PieceType.PAWN, 0, 4),
        create_piece("h1", PieceType.HERO_STRAIGHT, 1, 4),
        create_piece("p2", PieceType.PAWN, 2, 4),
        create_piece("h2", PieceType.HERO_DIAGONAL, 3, 4),
        create_piece("p3", PieceType.PAWN, 4, 4),
    ]


@pytest.fixture
def uninitialized_state() -> MatchState:
    """Fresh match waiting for an initialize command."""
    return MatchState()


@pytest.fixture
def standard_match(starting_roster_a: list[Piece], starting_roster_b: list[Piece]) -> MatchState:
    """Match in progress with both full back rows, player A to move."""
    return create_state(starting_roster_a, starting_roster_b)


@pytest.fixture
def centre_pawn_match() -> MatchState:
    """A's pawn on (2, 2), B's pawn out of the way on (0, 4)."""
    return create_state(
        [create_piece("pa", PieceType.PAWN, 2, 2)],
        [create_piece("pb", PieceType.PAWN, 0, 4)],
    )
