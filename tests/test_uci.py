"""
Unit Tests for UCI Interface

Tests for UCI protocol implementation, focusing on:
    - Command parsing: uci, isready, ucinewgame, position, go, quit
    - Position setup: FEN parsing, move application, promotions
    - Output format: Proper UCI responses
    - Error handling: Bad FEN, illegal moves, unknown commands
"""

from unittest.mock import patch

import chess
import pytest

from mailbox_chess.board import WHITE, Move, Piece, PieceKind, Position, parse_square
from mailbox_chess.evaluation import Weights
from mailbox_chess.search import SearchResult
from mailbox_chess.uci import UCIEngine
from mailbox_chess.uci import interface
from mailbox_chess.uci.interface import find_legal_move

MATED_FEN = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


@pytest.fixture
def engine(tmp_path, monkeypatch):
    """UCI engine with default weights, shallow default depth, logging to tmp."""
    monkeypatch.setattr(interface, "LOG_DIR", tmp_path / "logs")
    return UCIEngine(weights_path=tmp_path / "missing.txt", default_depth=1)


def output_lines(capsys):
    return capsys.readouterr().out.splitlines()


class TestUCICommands:
    """Tests for UCI command handling."""

    def test_handle_uci(self, engine, capsys):
        """Test 'uci' command response."""
        engine.handle_uci()

        lines = output_lines(capsys)

        assert lines[0].startswith("id name MailboxChess")
        assert lines[1].startswith("id author")
        assert lines[-1] == "uciok"

    def test_handle_isready(self, engine, capsys):
        engine.handle_isready()

        assert output_lines(capsys) == ["readyok"]

    def test_handle_ucinewgame(self, engine):
        engine.handle_command("position startpos moves e2e4 e7e5")
        engine.handle_command("ucinewgame")

        assert engine.position == Position.starting()

    def test_quit_stops_loop(self, engine):
        assert engine.handle_command("quit") is False

    def test_unknown_command_ignored(self, engine, capsys):
        assert engine.handle_command("xyzzy 42") is True
        assert engine.handle_command("   ") is True
        assert output_lines(capsys) == []

    def test_log_file_written(self, engine, tmp_path):
        engine.handle_command("isready")

        assert (tmp_path / "logs" / "engine.log").exists()

    def test_weights_loaded_from_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(interface, "LOG_DIR", tmp_path / "logs")
        path = tmp_path / "weights.txt"
        Weights.simplified().save(path)

        engine = UCIEngine(weights_path=path)

        assert engine.engine.weights == Weights.simplified()
        assert engine.default_depth == 4


class TestPositionCommand:
    """Tests for 'position'."""

    def test_startpos(self, engine):
        engine.handle_command("position fen 4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        engine.handle_command("position startpos")

        assert engine.position == Position.starting()

    def test_startpos_with_moves(self, engine):
        engine.handle_command("position startpos moves e2e4 e7e5 g1f3")

        board = chess.Board()
        for text in ("e2e4", "e7e5", "g1f3"):
            board.push_uci(text)

        assert engine.position.fen() == board.fen(en_passant="fen")

    def test_en_passant_square_after_double_push(self, engine):
        engine.handle_command("position startpos moves e2e4")

        assert engine.position.fen() == (
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_fen(self, engine):
        fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        engine.handle_command(f"position fen {fen}")

        assert engine.position.fen() == fen

    def test_fen_with_moves(self, engine):
        fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        engine.handle_command(f"position fen {fen} moves e1g1 a6e2")

        board = chess.Board(fen)
        board.push_uci("e1g1")
        board.push_uci("a6e2")

        assert engine.position.fen() == board.fen(en_passant="fen")

    def test_fen_extra_tokens_before_moves_ignored(self, engine, capsys):
        """Only the six FEN fields are read; trailing junk before 'moves' is dropped."""
        fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        engine.handle_command(f"position fen {fen} extra junk moves e1g1")

        board = chess.Board(fen)
        board.push_uci("e1g1")

        assert output_lines(capsys) == []
        assert engine.position.fen() == board.fen(en_passant="fen")

    def test_bad_fen_falls_back_to_startpos(self, engine, capsys):
        engine.handle_command("position fen this is not a fen at all")

        assert output_lines(capsys) == ["info string [WARN] bad fen, falling back to startpos"]
        assert engine.position == Position.starting()

    def test_bad_fen_still_applies_moves(self, engine):
        engine.handle_command("position fen garbage moves e2e4")

        assert engine.position.piece_at(parse_square("e4")) == Piece(WHITE, PieceKind.PAWN)

    def test_illegal_move_stops_application(self, engine, capsys):
        engine.handle_command("position startpos moves e2e4 e7e5 e1e3 g1f3")

        assert output_lines(capsys) == ["info string [ERR] cannot parse move e1e3"]

        board = chess.Board()
        board.push_uci("e2e4")
        board.push_uci("e7e5")
        assert engine.position.fen() == board.fen(en_passant="fen")

    def test_malformed_move_text(self, engine, capsys):
        engine.handle_command("position startpos moves e2")

        assert output_lines(capsys) == ["info string [ERR] cannot parse move e2"]
        assert engine.position == Position.starting()

    def test_promotion_letter(self, engine):
        engine.handle_command("position fen 8/P6k/8/8/8/8/8/K7 w - - 0 1 moves a7a8n")

        assert engine.position.piece_at(parse_square("a8")) == Piece(WHITE, PieceKind.KNIGHT)

    def test_promotion_defaults_to_queen(self, engine):
        engine.handle_command("position fen 8/P6k/8/8/8/8/8/K7 w - - 0 1 moves a7a8")

        assert engine.position.piece_at(parse_square("a8")) == Piece(WHITE, PieceKind.QUEEN)

    def test_find_legal_move(self):
        position = Position.starting()

        assert find_legal_move(position, "e2e4") == Move(parse_square("e2"), parse_square("e4"))
        assert find_legal_move(position, "e2e5") is None
        assert find_legal_move(position, "zz") is None


class TestGoCommand:
    """Tests for 'go' and bestmove output."""

    def test_bestmove_is_legal(self, engine, capsys):
        engine.handle_command("position startpos moves e2e4")
        engine.handle_command("go depth 2")

        lines = output_lines(capsys)
        assert lines[-1].startswith("bestmove ")

        legal = {m.uci() for m in chess.Board(
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"
        ).legal_moves}
        assert lines[-1].split()[1] in legal

    def test_info_line_format(self, engine, capsys):
        engine.handle_command("go depth 1")

        info, bestmove = output_lines(capsys)
        tokens = info.split()

        assert tokens[:5] == ["info", "depth", "1", "score", "cp"]
        assert tokens[6] == "nodes"
        assert tokens[8] == "time"
        assert int(tokens[5]) == 0
        assert bestmove == "bestmove b1c3"

    def test_default_depth(self, engine, capsys):
        engine.handle_command("go")

        assert output_lines(capsys)[0].startswith("info depth 1 ")

    def test_other_parameters_ignored(self, engine, capsys):
        engine.handle_command("go wtime 1000 btime 1000 depth 1")

        assert output_lines(capsys)[0].startswith("info depth 1 ")

    def test_bad_depth_uses_default(self, engine, capsys):
        engine.handle_command("go depth deep")

        assert output_lines(capsys)[0].startswith("info depth 1 ")

    def test_no_legal_moves(self, engine, capsys):
        engine.handle_command(f"position fen {MATED_FEN}")
        engine.handle_command("go depth 2")

        assert output_lines(capsys) == ["bestmove 0000"]

    def test_illegal_search_result_is_replaced(self, engine, capsys, monkeypatch):
        monkeypatch.setattr(
            engine.engine, "search",
            lambda position, depth: SearchResult(Move(0, 63), 5, 1),
        )

        engine.handle_command("go depth 1")

        assert output_lines(capsys)[-1] == "bestmove b1c3"

    def test_go_does_not_change_position(self, engine):
        engine.handle_command("position startpos moves d2d4")
        before = engine.position.copy()

        engine.handle_command("go depth 2")

        assert engine.position == before


class TestCommandLoop:
    """Tests for the stdin loop."""

    def test_session(self, engine, capsys):
        commands = ["uci", "isready", "position startpos moves e2e4", "go depth 1", "quit", "isready"]
        with patch("builtins.input", side_effect=commands):
            engine.run()

        lines = output_lines(capsys)

        assert "uciok" in lines
        assert lines.count("readyok") == 1
        assert lines[-1].startswith("bestmove ")

    def test_end_of_input(self, engine, capsys):
        with patch("builtins.input", side_effect=["isready", EOFError()]):
            engine.run()

        assert output_lines(capsys) == ["readyok"]

    def test_command_error_does_not_stop_loop(self, engine, capsys, monkeypatch):
        def broken(tokens):
            raise RuntimeError("search exploded")

        monkeypatch.setattr(engine, "handle_go", broken)

        with patch("builtins.input", side_effect=["go", "isready", "quit"]):
            engine.run()

        captured = capsys.readouterr()
        assert "search exploded" in captured.err
        assert "readyok" in captured.out.splitlines()
