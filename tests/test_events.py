"""Tests for event generation and sequencing.

Critical scenarios tested:
- Events have sequential seq numbers
- Seq numbers continue across actions, initialize and reset
- Event ordering for a capturing move
"""

from app.schemas.game_engine import MatchState, Piece, PieceType, PlayerId
from app.services.game.engine import (
    InitializeAction,
    MatchReset,
    MatchStarted,
    MoveAction,
    PieceCaptured,
    PieceMoved,
    ResetAction,
    TurnPassed,
    process_action,
)

from .conftest import create_piece, create_state


class TestEventSequencing:
    """Test that events have proper sequence numbers."""

    def test_initialize_emits_match_started(
        self, uninitialized_state: MatchState, starting_roster_a: list[Piece], starting_roster_b: list[Piece]
    ):
        result = process_action(
            uninitialized_state,
            InitializeAction(player_a=starting_roster_a, player_b=starting_roster_b),
        )

        assert len(result.events) == 1
        started = result.events[0]
        assert isinstance(started, MatchStarted)
        assert started.seq == 0
        assert started.first_player == PlayerId.A
        assert started.piece_counts == {PlayerId.A: 5, PlayerId.B: 5}
        assert result.state.event_seq == 1

    def test_seq_numbers_continue_across_actions(self, standard_match: MatchState):
        result = process_action(standard_match, MoveAction(player=PlayerId.A, piece_id="p1", move="F"))
        first_last_seq = result.events[-1].seq

        result = process_action(result.state, MoveAction(player=PlayerId.B, piece_id="p1", move="F"))

        assert result.events[0].seq == first_last_seq + 1
        assert [e.seq for e in result.events] == list(
            range(result.events[0].seq, result.events[0].seq + len(result.events))
        )

    def test_reset_keeps_counting(self, standard_match: MatchState):
        moved = process_action(standard_match, MoveAction(player=PlayerId.A, piece_id="p1", move="F"))

        result = process_action(moved.state, ResetAction())

        assert isinstance(result.events[0], MatchReset)
        assert result.events[0].seq == moved.state.event_seq
        assert result.state.players.a.pieces == []

    def test_rejected_action_emits_nothing(self, standard_match: MatchState):
        result = process_action(standard_match, MoveAction(player=PlayerId.A, piece_id="p1", move="L"))

        assert result.events == []


class TestEventOrdering:
    """Test event order within one move."""

    def test_capture_then_move_then_turn(self):
        state = create_state(
            [create_piece("h", PieceType.HERO_STRAIGHT, 0, 0)],
            [create_piece("pb", PieceType.PAWN, 0, 1), create_piece("pc", PieceType.PAWN, 4, 4)],
        )

        result = process_action(state, MoveAction(player=PlayerId.A, piece_id="h", move="F"))

        assert [type(e) for e in result.events] == [PieceCaptured, PieceMoved, TurnPassed]
        assert [e.seq for e in result.events] == [0, 1, 2]
