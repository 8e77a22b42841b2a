"""
Self-Play Matches

Plays engine-vs-engine games to score one weight set against another.
Games are cut short by evaluation adjudication, so a match of a few
hundred games at low depth stays affordable.

Game Flow:
    1. The first ``random_opening_plies`` plies are uniformly random
       (breaks symmetry between games)
    2. Then each side plays its engine's best move, exploring with
       probability ``epsilon`` (decays every ply)
    3. After every ply White's evaluation is checked: beyond
       ±adjudicate_margin the game is decided
    4. A side with no legal moves loses (mate and stalemate alike)
    5. After ``max_plies`` the final evaluation decides with
       ``final_margin``

Results are always from White's view: +1 White wins, 0 draw, -1 Black wins.
"""

import logging
import random
import time
from dataclasses import dataclass

from mailbox_chess.board import WHITE, Position, generate_legal_moves, make_move
from mailbox_chess.evaluation import Weights
from mailbox_chess.search import Engine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchSettings:
    """How a single self-play game is run and adjudicated."""

    random_opening_plies: int = 4
    """Uniformly random plies at the start of each game"""

    epsilon: float = 0.15
    """Initial exploration rate passed to best_move"""

    epsilon_decay: float = 0.997
    """Multiplier applied to epsilon after every ply"""

    adjudicate_margin: int = 200
    """Decide the game once |eval| exceeds this (centipawns)"""

    final_margin: int = 30
    """Margin used to score the game when max_plies is reached"""

    max_plies: int = 220
    """Maximum game length in plies"""

    def __post_init__(self):
        """Validate settings."""
        if self.random_opening_plies < 0:
            raise ValueError(f"random_opening_plies must be >= 0, got {self.random_opening_plies}")
        if not 0.0 <= self.epsilon <= 1.0:
            raise ValueError(f"epsilon must be in [0, 1], got {self.epsilon}")
        if self.max_plies <= 0:
            raise ValueError(f"max_plies must be positive, got {self.max_plies}")
        if self.adjudicate_margin < 0 or self.final_margin < 0:
            raise ValueError("margins must be non-negative")


TRAINING_MATCH = MatchSettings()
BENCH_MATCH = MatchSettings(
    random_opening_plies=8,
    epsilon=0.10,
    adjudicate_margin=600,
    final_margin=80,
)


@dataclass
class BenchResult:
    """Outcome of a benchmark match from the trained engine's view."""

    games: int
    wins: int
    draws: int
    losses: int
    elapsed: float

    @property
    def score(self) -> float:
        """Points per game (win = 1, draw = 0.5)."""
        return (self.wins + 0.5 * self.draws) / self.games if self.games else 0.0


def play_game(
    white: Engine,
    black: Engine,
    depth: int,
    rng: random.Random,
    settings: MatchSettings = TRAINING_MATCH,
) -> int:
    """
    Play one game between two engines.

    Adjudication always uses White's engine for the evaluation.

    Args:
        white: Engine playing White
        black: Engine playing Black
        depth: Search depth for both sides
        rng: Random source for the opening and exploration
        settings: Game and adjudication settings

    Returns:
        +1 White wins, 0 draw, -1 Black wins
    """
    position = Position.starting()
    epsilon = settings.epsilon

    for ply in range(settings.max_plies):
        moves = generate_legal_moves(position)
        if not moves:
            return -1 if position.turn == WHITE else 1

        if ply < settings.random_opening_plies:
            move = moves[rng.randrange(len(moves))]
        else:
            side = white if position.turn == WHITE else black
            move = side.best_move(position, depth, epsilon, rng)

        make_move(position, move)

        score = white.eval(position)
        if score > settings.adjudicate_margin:
            return 1
        if score < -settings.adjudicate_margin:
            return -1

        epsilon *= settings.epsilon_decay

    score = white.eval(position)
    if score > settings.final_margin:
        return 1
    if score < -settings.final_margin:
        return -1
    return 0


def match_score(
    weights_a: Weights,
    weights_b: Weights,
    games: int,
    depth: int,
    rng: random.Random,
    settings: MatchSettings = TRAINING_MATCH,
) -> float:
    """
    Average points of A against B (win 1, draw 0.5, loss 0).

    A plays White in even-numbered games and Black in odd-numbered ones.
    """
    if games <= 0:
        raise ValueError(f"games must be positive, got {games}")

    engine_a = Engine(weights_a)
    engine_b = Engine(weights_b)

    total = 0.0
    for i in range(games):
        a_is_white = i % 2 == 0
        if a_is_white:
            result = play_game(engine_a, engine_b, depth, rng, settings)
        else:
            result = play_game(engine_b, engine_a, depth, rng, settings)

        points = 0.5
        if result == 1:
            points = 1.0 if a_is_white else 0.0
        elif result == -1:
            points = 0.0 if a_is_white else 1.0
        total += points

    return total / games


def run_bench(
    trained: Weights,
    baseline: Weights,
    games: int,
    depth: int,
    rng: random.Random,
    settings: MatchSettings = BENCH_MATCH,
    report_every: int = 20,
) -> BenchResult:
    """
    Play ``trained`` against ``baseline`` and count wins, draws and losses.

    Progress is logged every ``report_every`` games.
    """
    if games <= 0:
        raise ValueError(f"games must be positive, got {games}")

    engine_a = Engine(trained)
    engine_b = Engine(baseline)
    wins = draws = losses = 0

    start_time = time.time()
    for i in range(games):
        a_is_white = i % 2 == 0
        if a_is_white:
            result = play_game(engine_a, engine_b, depth, rng, settings)
        else:
            result = play_game(engine_b, engine_a, depth, rng, settings)

        if result == 0:
            draws += 1
        elif (result == 1) == a_is_white:
            wins += 1
        else:
            losses += 1

        if report_every and (i + 1) % report_every == 0:
            score = (wins + 0.5 * draws) / (i + 1)
            logger.info(f"[bench] {i + 1}/{games} W/D/L={wins}/{draws}/{losses} score={score:.3f}")

    return BenchResult(games, wins, draws, losses, time.time() - start_time)
