"""
Unit Tests for Move Generation

Tests focusing on:
    - Perft node counts on the reference positions
    - Legal move sets (checked against python-chess)
    - Pins, promotions, en passant and castling rules
    - Board-edge wraparound for jumps and rays
"""

import chess
import pytest

from mailbox_chess.board import (
    Move,
    PieceKind,
    Position,
    generate_legal_moves,
    generate_pseudo_legal,
    make_move,
    parse_square,
    parse_uci,
)
from mailbox_chess.utils.testing import PERFT_POSITIONS, divide, perft, run_perft_suite


def legal_uci(position):
    return {move.uci() for move in generate_legal_moves(position)}


def reference_uci(fen):
    return {move.uci() for move in chess.Board(fen).legal_moves}


def reference_perft(board, depth):
    if depth == 0:
        return 1
    total = 0
    for move in list(board.legal_moves):
        board.push(move)
        total += reference_perft(board, depth - 1)
        board.pop()
    return total


class TestPerft:
    """Node counts of the full legal move tree."""

    def test_start_position_depth_1(self):
        assert perft(Position.starting(), 1) == 20

    def test_start_position_depth_2(self):
        assert perft(Position.starting(), 2) == 400

    def test_start_position_depth_3(self):
        assert perft(Position.starting(), 3) == 8902

    @pytest.mark.parametrize("entry", PERFT_POSITIONS, ids=lambda e: e.id)
    def test_reference_positions_shallow(self, entry):
        """Depths 1 and 2 of every reference position."""
        position = Position.from_fen(entry.fen)

        for depth in (1, 2):
            assert perft(position, depth) == entry.counts[depth - 1]

    @pytest.mark.parametrize("entry", PERFT_POSITIONS, ids=lambda e: e.id)
    def test_reference_table_matches_python_chess(self, entry):
        """The stored FEN and its depth-1/2 counts describe the same position."""
        board = chess.Board(entry.fen)

        assert board.fen() == entry.fen
        for depth in (1, 2):
            assert reference_perft(board, depth) == entry.counts[depth - 1]

    def test_suite_runner(self):
        result = run_perft_suite(max_depth=1, verbose=False)

        assert result['total'] == len(PERFT_POSITIONS)
        assert result['score'] == result['total']
        assert all(r.correct for r in result['results'])

    def test_perft_does_not_modify_position(self):
        position = Position.from_fen(PERFT_POSITIONS[1].fen)
        snapshot = position.copy()

        perft(position, 2)

        assert position == snapshot

    def test_divide_sums_to_perft(self):
        position = Position.starting()
        counts = divide(position, 2)

        assert len(counts) == 20
        assert all(count == 20 for count in counts.values())
        assert sum(counts.values()) == 400


class TestLegalMovesAgainstReference:
    """Legal move sets compared with python-chess."""

    @pytest.mark.parametrize("entry", PERFT_POSITIONS, ids=lambda e: e.id)
    def test_root_moves(self, entry):
        position = Position.from_fen(entry.fen)

        assert legal_uci(position) == reference_uci(entry.fen)

    @pytest.mark.parametrize("entry", PERFT_POSITIONS[:3], ids=lambda e: e.id)
    def test_moves_after_each_reply(self, entry):
        """Every position one ply deep agrees as well."""
        position = Position.from_fen(entry.fen)
        board = chess.Board(entry.fen)

        for move in generate_legal_moves(position):
            child = position.copy()
            make_move(child, move)
            board.push(chess.Move.from_uci(move.uci()))
            assert legal_uci(child) == {m.uci() for m in board.legal_moves}, move.uci()
            board.pop()


class TestPseudoLegal:
    """Movement rules before the king-safety filter."""

    def test_pinned_piece_filtered(self):
        """A bishop pinned to its king has pseudo-legal moves but no legal ones."""
        position = Position.from_fen("4r1k1/8/8/8/8/8/4B3/4K3 w - - 0 1")
        bishop = parse_square("e2")

        pseudo = [m for m in generate_pseudo_legal(position) if m.from_square == bishop]
        legal = [m for m in generate_legal_moves(position) if m.from_square == bishop]

        assert pseudo
        assert legal == []

    def test_board_scan_order(self):
        """Origin squares never decrease through the list."""
        moves = generate_pseudo_legal(Position.from_fen(PERFT_POSITIONS[1].fen))
        origins = [move.from_square for move in moves]

        assert origins == sorted(origins)

    def test_knight_in_corner(self):
        position = Position.from_fen("k7/8/8/8/8/8/8/N6K w - - 0 1")
        targets = {m.to_square for m in generate_pseudo_legal(position) if m.from_square == 0}

        assert targets == {parse_square("b3"), parse_square("c2")}

    def test_rook_does_not_wrap(self):
        position = Position.from_fen("k7/8/8/8/8/8/8/K6R w - - 0 1")
        targets = {m.to_square for m in generate_pseudo_legal(position) if m.from_square == 7}

        assert parse_square("a2") not in targets
        assert parse_square("b1") in targets
        assert parse_square("h8") in targets

    def test_captures_are_annotated(self):
        position = Position.from_fen("4k3/8/8/3q4/4P3/8/8/4K3 w - - 0 1")
        capture = next(m for m in generate_legal_moves(position) if m.uci() == "e4d5")

        assert capture.captured is not None
        assert capture.captured.kind == PieceKind.QUEEN

    def test_no_legal_moves_when_mated(self):
        position = Position.from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )

        assert generate_legal_moves(position) == []

    def test_no_legal_moves_when_stalemated(self):
        position = Position.from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")

        assert not position.is_check()
        assert generate_legal_moves(position) == []


class TestPawnMoves:
    """Pushes, promotions and en passant."""

    def test_double_push_needs_both_squares_empty(self):
        position = Position.from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")

        assert not any(m.from_square == parse_square("e2") for m in generate_legal_moves(position))

    def test_promotions_in_fixed_order(self):
        position = Position.from_fen("8/P6k/8/8/8/8/8/K7 w - - 0 1")
        promotions = [m for m in generate_legal_moves(position) if m.from_square == parse_square("a7")]

        assert [m.promotion for m in promotions] == [
            PieceKind.QUEEN,
            PieceKind.ROOK,
            PieceKind.BISHOP,
            PieceKind.KNIGHT,
        ]
        assert [m.uci() for m in promotions] == ["a7a8q", "a7a8r", "a7a8b", "a7a8n"]

    def test_en_passant_generated(self):
        position = Position.from_fen(
            "rnbqkbnr/ppp1pppp/8/8/3pP3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 3"
        )

        assert parse_uci("d4e3") in generate_legal_moves(position)

    def test_en_passant_needs_passed_pawn(self):
        """A stale target square with no pawn behind it gives no capture."""
        position = Position.from_fen("4k3/8/8/8/3p4/8/8/4K3 b - e3 0 1")

        assert parse_uci("d4e3") not in generate_legal_moves(position)

    def test_en_passant_exposing_king_is_illegal(self):
        """Removing both pawns from the rank would expose the king to the rook."""
        position = Position.from_fen("8/8/8/8/k2pP2R/8/8/4K3 b - e3 0 1")

        assert parse_uci("d4e3") not in generate_legal_moves(position)
        assert parse_uci("d4e3") in generate_pseudo_legal(position)


class TestCastling:
    """Castling generation rules."""

    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_both_sides_available(self):
        moves = legal_uci(Position.from_fen(self.FEN))

        assert "e1g1" in moves
        assert "e1c1" in moves

    def test_black_both_sides_available(self):
        moves = legal_uci(Position.from_fen(self.FEN.replace(" w ", " b ")))

        assert "e8g8" in moves
        assert "e8c8" in moves

    def test_no_castling_without_right(self):
        moves = legal_uci(Position.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Q - 0 1"))

        assert "e1g1" not in moves
        assert "e1c1" in moves

    def test_no_castling_through_attacked_square(self):
        position = Position.from_fen("4k3/8/8/8/8/8/5r2/R3K2R w KQ - 0 1")
        moves = legal_uci(position)

        assert "e1g1" not in moves
        assert "e1c1" in moves

    def test_no_castling_out_of_check(self):
        moves = legal_uci(Position.from_fen("4k3/4r3/8/8/8/8/8/R3K2R w KQ - 0 1"))

        assert "e1g1" not in moves
        assert "e1c1" not in moves

    def test_no_castling_when_blocked(self):
        moves = legal_uci(Position.from_fen("4k3/8/8/8/8/8/8/RN2K1NR w KQ - 0 1"))

        assert "e1g1" not in moves
        assert "e1c1" not in moves

    def test_queenside_b_file_attack_does_not_matter(self):
        """Only the king's path must be safe; b1 may be attacked."""
        moves = legal_uci(Position.from_fen("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1"))

        assert "e1c1" in moves

    def test_no_castling_without_rook(self):
        moves = legal_uci(Position.from_fen("4k3/8/8/8/8/8/8/4K2R w KQ - 0 1"))

        assert "e1g1" in moves
        assert "e1c1" not in moves

    def test_castle_move_is_plain_king_move(self):
        castle = next(
            m for m in generate_legal_moves(Position.from_fen(self.FEN)) if m.uci() == "e1g1"
        )

        assert castle == Move(parse_square("e1"), parse_square("g1"))
