"""
Move Generator Verification (Perft)

Perft counts the leaf nodes of the legal move tree to a fixed depth. The
counts for a handful of well-known positions are published, so any
difference points to a move generation or make/unmake bug.

Test Positions:
    1. Start position
    2. "Kiwipete": castling, en passant, promotions, pins
    3. Sparse endgame with en passant pins along a rank
    4. Promotions with captures, castling only for Black
    5. Promotion-heavy middlegame
    6. Quiet symmetric middlegame

Evaluation Metrics:
    - Correct: node count equals the published count
    - Time and nodes per second

References:
    - Perft: https://www.chessprogramming.org/Perft
    - Results: https://www.chessprogramming.org/Perft_Results
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List

from mailbox_chess.board import (
    STARTING_FEN,
    Position,
    generate_legal_moves,
    make_move,
    unmake_move,
)


@dataclass
class PerftPosition:
    """
    A position with published perft counts.

    Attributes:
        fen: Board position in FEN notation
        counts: Leaf counts for depth 1, 2, 3, ...
        description: Human-readable description of the position
        id: Position identifier
    """
    fen: str
    counts: List[int]
    description: str = ""
    id: str = ""


@dataclass
class PerftResult:
    """
    Result of running perft on one position.

    Attributes:
        position: The test position
        depth: Depth searched
        nodes: Leaf count found
        expected: Published leaf count
        time_taken: Seconds spent
    """
    position: PerftPosition
    depth: int
    nodes: int
    expected: int
    time_taken: float

    @property
    def correct(self) -> bool:
        return self.nodes == self.expected


PERFT_POSITIONS = [
    PerftPosition(
        id="PERFT.1",
        fen=STARTING_FEN,
        counts=[20, 400, 8902, 197281],
        description="Start position",
    ),
    PerftPosition(
        id="PERFT.2",
        fen="r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
        counts=[48, 2039, 97862],
        description="Kiwipete",
    ),
    PerftPosition(
        id="PERFT.3",
        fen="8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        counts=[14, 191, 2812, 43238],
        description="Rook endgame with en passant pins",
    ),
    PerftPosition(
        id="PERFT.4",
        fen="r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
        counts=[6, 264, 9467],
        description="White in check, promotions",
    ),
    PerftPosition(
        id="PERFT.5",
        fen="rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8",
        counts=[44, 1486, 62379],
        description="Promotion on d8",
    ),
    PerftPosition(
        id="PERFT.6",
        fen="r4rk1/1pp1qppp/p1np1n2/2b1p1B1/2B1P1b1/P1NP1N2/1PP1QPPP/R4RK1 w - - 0 10",
        counts=[46, 2079, 89890],
        description="Symmetric middlegame",
    ),
]


def perft(position: Position, depth: int) -> int:
    """
    Count leaf nodes of the legal move tree.

    The position is mutated with make/unmake pairs and restored on return.
    """
    if depth <= 0:
        return 1

    moves = generate_legal_moves(position)
    if depth == 1:
        return len(moves)

    nodes = 0
    for move in moves:
        undo = make_move(position, move)
        nodes += perft(position, depth - 1)
        unmake_move(position, move, undo)
    return nodes


def divide(position: Position, depth: int) -> Dict[str, int]:
    """Perft split by root move (UCI text -> leaf count)."""
    counts = {}
    for move in generate_legal_moves(position):
        undo = make_move(position, move)
        counts[move.uci()] = perft(position, depth - 1)
        unmake_move(position, move, undo)
    return counts


def run_perft_suite(max_depth: int = 2, verbose: bool = True) -> Dict[str, Any]:
    """
    Run perft on every test position up to ``max_depth``.

    Depths beyond a position's published counts are skipped.

    Args:
        max_depth: Deepest depth to check
        verbose: If True, print detailed results

    Returns:
        Dictionary with test results:
            - score: Number of correct (position, depth) pairs
            - total: Number of pairs checked
            - results: List of PerftResult objects
            - total_time: Seconds spent
    """
    if verbose:
        print("=" * 70)
        print("PERFT SUITE")
        print("=" * 70)

    results = []
    for test in PERFT_POSITIONS:
        position = Position.from_fen(test.fen)
        for depth in range(1, min(max_depth, len(test.counts)) + 1):
            start_time = time.time()
            nodes = perft(position, depth)
            result = PerftResult(
                position=test,
                depth=depth,
                nodes=nodes,
                expected=test.counts[depth - 1],
                time_taken=time.time() - start_time,
            )
            results.append(result)

            if verbose:
                status = "OK  " if result.correct else "FAIL"
                print(
                    f"{status} {test.id} depth {depth}: {nodes} "
                    f"(expected {result.expected}) {result.time_taken:.2f}s"
                )

    correct_count = sum(1 for r in results if r.correct)
    total_time = sum(r.time_taken for r in results)

    if verbose:
        print("\n" + "=" * 70)
        print("SUMMARY")
        print("=" * 70)
        print(f"Score: {correct_count}/{len(results)}")
        print(f"Total time: {total_time:.2f}s")

    return {
        'score': correct_count,
        'total': len(results),
        'results': results,
        'total_time': total_time,
    }
