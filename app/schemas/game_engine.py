from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BOARD_SIZE = 5


# Match phases
class GamePhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class PlayerId(str, Enum):
    A = "A"
    B = "B"

    @property
    def opponent(self) -> "PlayerId":
        return PlayerId.B if self is PlayerId.A else PlayerId.A


# Values are the client wire codes
class PieceType(str, Enum):
    PAWN = "P"
    HERO_STRAIGHT = "H1"
    HERO_DIAGONAL = "H2"


class Command(str, Enum):
    LEFT = "L"
    RIGHT = "R"
    FORWARD = "F"
    BACKWARD = "B"
    FORWARD_LEFT = "FL"
    FORWARD_RIGHT = "FR"
    BACKWARD_LEFT = "BL"
    BACKWARD_RIGHT = "BR"


class CamelModel(BaseModel):
    """Base model serializing with the camelCase keys clients expect."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Position(CamelModel):
    x: int = Field(..., ge=0, lt=BOARD_SIZE)
    y: int = Field(..., ge=0, lt=BOARD_SIZE)


class Piece(CamelModel):
    id: str = Field(..., min_length=1)
    type: PieceType
    position: Position


class Player(CamelModel):
    id: PlayerId
    pieces: list[Piece] = []
    eliminated: list[Piece] = []  # Captured pieces, history only


class Players(CamelModel):
    """Fixed two-slot roster pair, serialized under keys 'A' and 'B'."""

    a: Player = Field(default_factory=lambda: Player(id=PlayerId.A), alias="A")
    b: Player = Field(default_factory=lambda: Player(id=PlayerId.B), alias="B")

    def get(self, player_id: PlayerId) -> Player:
        return self.a if player_id is PlayerId.A else self.b

    def replace(self, player: Player) -> "Players":
        if player.id is PlayerId.A:
            return self.model_copy(update={"a": player})
        return self.model_copy(update={"b": player})

    def both(self) -> tuple[Player, Player]:
        return (self.a, self.b)


def empty_board() -> list[list[str | None]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


# Match state for broadcasting and game flow
class MatchState(CamelModel):
    """Authoritative state of the single match.

    The board is a lookup index derived from the rosters, indexed board[y][x].
    It is rebuilt on every commit and never consulted as a source of truth.
    """

    phase: GamePhase = GamePhase.UNINITIALIZED
    board: list[list[str | None]] = Field(default_factory=empty_board)
    players: Players = Field(default_factory=Players)
    current_player: PlayerId | None = None
    winner: PlayerId | None = None
    event_seq: int = 0  # Next sequence number for events (monotonically increasing)
