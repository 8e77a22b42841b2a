"""
UCI Protocol Implementation

This module implements the Universal Chess Interface (UCI) protocol for
communication between the engine and GUI applications.

UCI Commands Supported:
    - uci: Identify engine
    - isready: Synchronization check
    - ucinewgame: Start new game
    - position: Set board position
    - go [depth N]: Search to a fixed depth and answer with bestmove
    - quit: Shutdown engine

Searching:
    Searches run to completion on the calling thread. There is no time
    control and no 'stop'; a 'go' answers once its depth is done.

Failure Handling:
    - Bad FEN: warn, fall back to the start position
    - Unknown/illegal move in 'position ... moves': report it, stop
      applying the remaining moves
    - Search result not in the legal move list: replaced by the first legal
      move, or '0000' if there is none

References:
    - UCI Protocol: https://www.chessprogramming.org/UCI
"""

import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Union

from mailbox_chess import __version__
from mailbox_chess.board import (
    Move,
    Position,
    generate_legal_moves,
    make_move,
    parse_uci,
)
from mailbox_chess.evaluation import Weights
from mailbox_chess.search import Engine

DEFAULT_DEPTH = 4
LOG_DIR = Path.home() / ".mailbox_chess"
FEN_FIELDS = 6


def setup_logger(debug=True):
    """
    Setup file-based logger for UCI debugging.

    stdout belongs to the protocol, so the engine logs to
    ~/.mailbox_chess/engine.log instead.

    Args:
        debug: If True, log at DEBUG level; otherwise INFO level

    Returns:
        Configured logger instance
    """
    LOG_DIR.mkdir(exist_ok=True)
    log_file = LOG_DIR / "engine.log"

    logger = logging.getLogger("mailbox_chess")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    logger.handlers.clear()

    handler = logging.FileHandler(log_file, mode='w')
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def find_legal_move(position: Position, text: str) -> Optional[Move]:
    """
    Look up UCI move text among the legal moves of ``position``.

    Without a (recognised) promotion letter the first matching legal move is
    returned, which for a promotion is the queen.

    Returns:
        The matching legal move, or None if the text is malformed or no
        legal move matches
    """
    try:
        wanted = parse_uci(text)
    except ValueError:
        return None

    for move in generate_legal_moves(position):
        if move.from_square != wanted.from_square or move.to_square != wanted.to_square:
            continue
        if wanted.promotion is None or move.promotion == wanted.promotion:
            return move
    return None


class UCIEngine:
    """
    UCI-compliant chess engine interface.

    This class handles all UCI communication and drives the Engine.

    Attributes:
        position: Current game position
        engine: Weights + search
        default_depth: Depth used by 'go' without 'depth N'

    Methods:
        run: Main UCI command loop
        handle_command: Dispatch one command line
        handle_uci: Respond to 'uci' command
        handle_isready: Respond to 'isready' command
        handle_position: Set board position
        handle_go: Search and print bestmove
    """

    def __init__(
        self,
        weights_path: Union[str, Path] = "weights.txt",
        default_depth: int = DEFAULT_DEPTH,
        debug=True,
    ):
        """
        Initialize UCI engine.

        Args:
            weights_path: Weight file; default weights are kept if missing
            default_depth: Search depth for 'go' without a depth
            debug: Enable debug logging (default: True)
        """
        self.logger = setup_logger(debug=debug)
        self.logger.info("=== MailboxChess Engine Started ===")
        self.logger.info(f"Log file: {LOG_DIR / 'engine.log'}")

        self.position = Position.starting()
        self.engine = Engine(Weights.load_or_default(weights_path))
        self.default_depth = default_depth

        # Engine info
        self.name = "MailboxChess"
        self.version = __version__
        self.author = "MailboxChess developers"

    def send(self, line: str) -> None:
        """Write one protocol line to stdout and log it."""
        print(line)
        sys.stdout.flush()
        self.logger.debug(f"<<< {line}")

    def run(self):
        """
        Main UCI command loop.

        Reads commands from stdin until 'quit' or end of input.
        """
        while True:
            try:
                command = input()
            except EOFError:
                self.logger.info("EOF received, shutting down")
                break

            try:
                if not self.handle_command(command):
                    break
            except Exception as e:
                self.logger.error(f"Command error: {e}", exc_info=True)
                print(f"# Error: {e}", file=sys.stderr)

        self.logger.info("=== MailboxChess Engine Stopped ===")

    def handle_command(self, command: str) -> bool:
        """
        Dispatch one command line.

        Returns:
            False if the loop should terminate ('quit'), True otherwise
        """
        command = command.strip()
        if not command:
            return True

        self.logger.debug(f">>> {command}")

        tokens = command.split()
        cmd = tokens[0].lower()

        if cmd == "uci":
            self.handle_uci()
        elif cmd == "isready":
            self.handle_isready()
        elif cmd == "ucinewgame":
            self.handle_ucinewgame()
        elif cmd == "position":
            self.handle_position(tokens)
        elif cmd == "go":
            self.handle_go(tokens)
        elif cmd == "quit":
            self.logger.info("Handling: quit - shutting down engine")
            return False
        else:
            # Unknown command - UCI spec says to ignore
            self.logger.debug(f"Unknown command ignored: {command}")

        return True

    def handle_uci(self):
        """
        Handle 'uci' command - identify engine.

        Response:
            id name MailboxChess <version>
            id author <author>
            uciok
        """
        self.logger.info("Handling: uci")
        self.send(f"id name {self.name} {self.version}")
        self.send(f"id author {self.author}")
        self.send("uciok")

    def handle_isready(self):
        """Handle 'isready' command - synchronization."""
        self.logger.info("Handling: isready")
        self.send("readyok")

    def handle_ucinewgame(self):
        """Handle 'ucinewgame' command - reset for new game."""
        self.logger.info("Handling: ucinewgame - resetting position")
        self.position = Position.starting()

    def handle_position(self, tokens: List[str]):
        """
        Handle 'position' command - set board position.

        Formats:
            position startpos
            position startpos moves e2e4 e7e5
            position fen <FEN string>
            position fen <FEN string> moves e2e4

        Args:
            tokens: Command tokens (e.g., ['position', 'startpos', 'moves', 'e2e4'])
        """
        self.logger.info(f"Handling: position {' '.join(tokens[1:])}")

        if len(tokens) < 2:
            self.logger.warning("Position command with insufficient arguments")
            return

        if "moves" in tokens:
            move_index = tokens.index("moves")
        else:
            move_index = len(tokens)

        if tokens[1] == "startpos":
            self.position = Position.starting()
        elif tokens[1] == "fen":
            fen_tokens = tokens[2:move_index]
            # A FEN has six fields; anything after them up to 'moves' is ignored
            if len(fen_tokens) > FEN_FIELDS:
                self.logger.debug(f"Ignoring extra FEN tokens: {' '.join(fen_tokens[FEN_FIELDS:])}")
                fen_tokens = fen_tokens[:FEN_FIELDS]
            fen = " ".join(fen_tokens)
            try:
                self.position = Position.from_fen(fen)
                self.logger.debug(f"Set position from FEN: {fen}")
            except ValueError as e:
                self.logger.warning(f"Invalid FEN: {e}")
                self.send("info string [WARN] bad fen, falling back to startpos")
                self.position = Position.starting()
        else:
            self.logger.warning(f"Unknown position type: {tokens[1]}")
            return

        moves_applied = []
        for move_text in tokens[move_index + 1:]:
            move = find_legal_move(self.position, move_text)
            if move is None:
                self.logger.error(f"Illegal or malformed move: {move_text}")
                self.send(f"info string [ERR] cannot parse move {move_text}")
                break
            make_move(self.position, move)
            moves_applied.append(move_text)

        if moves_applied:
            self.logger.debug(f"Applied moves: {' '.join(moves_applied)}")

        self.logger.info(f"Position updated: {self.position.fen()}")

    def handle_go(self, tokens: List[str]):
        """
        Handle 'go' command - search and answer with bestmove.

        Formats:
            go
            go depth 5

        Other 'go' parameters (wtime, movetime, ...) are accepted and ignored.

        Output:
            info depth X score cp Y nodes Z time T
            bestmove <move>
        """
        self.logger.info(f"Handling: go {' '.join(tokens[1:])}")

        depth = self.default_depth
        i = 1
        while i < len(tokens):
            if tokens[i] == "depth" and i + 1 < len(tokens):
                try:
                    depth = int(tokens[i + 1])
                except ValueError:
                    self.logger.warning(f"Invalid depth {tokens[i + 1]!r}, using {depth}")
                i += 2
            else:
                i += 1

        start_time = time.time()
        result = self.engine.search(self.position, depth)
        elapsed_ms = int((time.time() - start_time) * 1000)

        best = result.move
        legal = generate_legal_moves(self.position)
        if best not in legal:
            if best:
                self.logger.error(f"Search returned illegal move {best.uci()}, substituting")
            best = legal[0] if legal else Move.null()

        self.logger.info(
            f"Search complete: best_move={best.uci()}, score={result.score}, "
            f"nodes={result.nodes}, time={elapsed_ms}ms"
        )

        if result.score is not None:
            self.send(
                f"info depth {depth} score cp {result.score} "
                f"nodes {result.nodes} time {elapsed_ms}"
            )
        self.send(f"bestmove {best.uci()}")
