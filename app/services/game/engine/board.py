"""Board index helpers.

The grid only mirrors roster positions; every function here derives its
answer from the rosters so the two can never drift apart.
"""

from app.schemas.game_engine import BOARD_SIZE, Piece, PlayerId, Players, Position, empty_board


def is_within_bounds(x: int, y: int) -> bool:
    """Check if a coordinate lies on the 5x5 grid."""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def build_board(players: Players) -> list[list[str | None]]:
    """Derive the board[y][x] occupancy grid from both rosters."""
    board = empty_board()
    for player in players.both():
        for piece in player.pieces:
            board[piece.position.y][piece.position.x] = piece.id
    return board


def find_occupant(players: Players, x: int, y: int) -> tuple[PlayerId, Piece] | None:
    """Return the owner and piece standing on (x, y), if any."""
    for player in players.both():
        for piece in player.pieces:
            if piece.position.x == x and piece.position.y == y:
                return player.id, piece
    return None


def path_between(origin: Position, destination: Position) -> list[tuple[int, int]]:
    """Cells strictly between origin and destination.

    Steps by the sign of each axis delta, so single-step moves yield an empty
    path and two-cell straight or diagonal moves yield exactly one cell.

    Raises:
        ValueError: If the two cells are not on a common row, column or diagonal.
    """
    delta_x = destination.x - origin.x
    delta_y = destination.y - origin.y
    if delta_x and delta_y and abs(delta_x) != abs(delta_y):
        raise ValueError(f"No straight path from {origin} to {destination}")

    dx = _sign(delta_x)
    dy = _sign(delta_y)
    path: list[tuple[int, int]] = []

    cx, cy = origin.x + dx, origin.y + dy
    while (cx, cy) != (destination.x, destination.y):
        path.append((cx, cy))
        cx += dx
        cy += dy
    return path


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)
