"""
MailboxChess Engine

A UCI chess engine with its own rules engine, a weighted material +
square table evaluation, fixed-depth alpha-beta search and a self-play SPSA
tuner for the evaluation weights.

## Architecture

The engine is organized into several key modules:

1. **board**: Rules engine
   - 64-square mailbox Position, FEN import/export
   - Attack queries, pseudo-legal and legal move generation
   - Reversible make/unmake

2. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - WeightedEvaluator: material + pawn/knight square tables
   - Weights: tunable parameters and their text file

3. **search**: Search algorithms
   - Negamax with alpha-beta pruning, fixed depth
   - Captures-first move ordering
   - Randomized root exploration for self-play
   - Engine: weights + search in one object

4. **uci**: Universal Chess Interface protocol
   - UCI command handling
   - Compatible with chess GUIs

5. **training**: Weight tuning
   - Self-play matches and benchmark
   - SPSA loop with resumable checkpoints

6. **utils**: Perft move generator verification

## Quick Start

### As a Python Library

```python
from mailbox_chess.board import Position
from mailbox_chess.evaluation import Weights
from mailbox_chess.search import Engine

engine = Engine(Weights.simplified())
position = Position.starting()

move = engine.best_move(position, depth=3)
print(f"Best move: {move}")
```

### As a UCI Engine

```bash
python -m mailbox_chess.uci
```

Then connect with a chess GUI (Arena, CuteChess, etc.)

## Version

0.1.0
"""

__version__ = "0.1.0"
__license__ = "MIT"

from mailbox_chess.board import Move, Position
from mailbox_chess.evaluation import WeightedEvaluator, Weights
from mailbox_chess.search import Engine

__all__ = [
    'Engine',
    'Move',
    'Position',
    'WeightedEvaluator',
    'Weights',
]
