"""
Training configuration for SPSA weight tuning.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from mailbox_chess.training.match import TRAINING_MATCH, MatchSettings


@dataclass
class SPSAConfig:
    """Configuration for SPSA weight tuning.

    This dataclass encapsulates the SPSA gains, match sizes, paths
    and cadences in one place for easy experimentation and reproducibility.
    """

    # Run length
    iterations: int = 20000
    """Number of SPSA iterations"""

    games_per_eval: int = 200
    """Games per match when scoring a perturbed pair or current vs base"""

    depth: int = 3
    """Search depth used in self-play games"""

    verify_games: int = 400
    """Games used to confirm a candidate best before saving it"""

    # SPSA gain sequences: a_k = a / (A + k + 1)^alpha, c_k = c / (k + 1)^gamma
    a: float = 8.0
    """Step size numerator"""

    c: float = 10.0
    """Perturbation size numerator (large enough to survive rounding)"""

    big_a: float = 200.0
    """Stability constant A in the step size denominator"""

    alpha: float = 0.602
    """Step size decay exponent"""

    gamma: float = 0.101
    """Perturbation decay exponent"""

    # Cadence
    print_every: int = 20
    """Log progress every N iterations"""

    checkpoint_every: int = 50
    """Save the current vector every N iterations"""

    # Files
    weights_path: Path = Path("weights.txt")
    """Starting weights; verified improvements are written back here"""

    checkpoint_path: Path = Path("checkpoint.bin")
    """Resume/checkpoint file"""

    # Games
    match: MatchSettings = field(default_factory=lambda: TRAINING_MATCH)
    """Self-play game settings"""

    # Reproducibility
    seed: Optional[int] = None
    """Random seed (None for time based)"""

    show_progress: bool = True
    """Show a tqdm progress bar over iterations"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.weights_path = Path(self.weights_path)
        self.checkpoint_path = Path(self.checkpoint_path)

        if self.iterations <= 0:
            raise ValueError(f"iterations must be positive, got {self.iterations}")

        if self.games_per_eval <= 0:
            raise ValueError(f"games_per_eval must be positive, got {self.games_per_eval}")

        if self.verify_games <= 0:
            raise ValueError(f"verify_games must be positive, got {self.verify_games}")

        if self.depth <= 0:
            raise ValueError(f"depth must be positive, got {self.depth}")

        if self.a <= 0 or self.c <= 0:
            raise ValueError(f"a and c must be positive, got a={self.a}, c={self.c}")

        if self.print_every <= 0 or self.checkpoint_every <= 0:
            raise ValueError("print_every and checkpoint_every must be positive")

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"SPSAConfig(\n"
            f"  Run: iterations={self.iterations}, games={self.games_per_eval}, "
            f"depth={self.depth}, verify_games={self.verify_games}\n"
            f"  Gains: a={self.a}, c={self.c}, A={self.big_a}, "
            f"alpha={self.alpha}, gamma={self.gamma}\n"
            f"  Files: weights={self.weights_path}, checkpoint={self.checkpoint_path}\n"
            f")"
        )
