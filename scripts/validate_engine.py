#!/usr/bin/env python3
"""
Validate the engine against known tic-tac-toe results.

Checks:
1. Empty board value is a draw, best move is cell 0 (lowest-index tie-break)
2. Known forced replies (corner opening -> center, center opening -> corner)
3. Hard vs hard self-play always draws
4. Hard never loses to easy or medium over a batch of games
"""

import sys
import time
import random
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tictactoe_engine.core import Board, Mark
from tictactoe_engine.solver import search, optimal_move, run_matches

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,
)

logger = logging.getLogger(__name__)


def check(label: str, expected, actual) -> bool:
    if expected == actual:
        logger.info(f"OK   {label}: {actual}")
        return True
    logger.error(f"FAIL {label}")
    logger.error(f"   Expected: {expected}")
    logger.error(f"   Got:      {actual}")
    return False


def main():
    # Configuration
    NUM_GAMES = 200
    SEED = 1234

    logger.info("=" * 70)
    logger.info("ENGINE VALIDATION")
    logger.info("=" * 70)

    start_time = time.time()
    success = True

    # Phase 1: Root search
    root = search(Board.empty(), Mark.X, Mark.O)
    logger.info(f"Empty board: {root.nodes:,} positions, {root.prunes:,} cutoffs")
    success &= check("Empty board value", 0, root.score)
    success &= check("Empty board best move", 0, root.move)

    # Phase 2: Forced replies
    success &= check("Reply to corner", 4, optimal_move(Board.from_string("X........"), Mark.O, Mark.X))
    success &= check("Reply to center", 0, optimal_move(Board.from_string("....X...."), Mark.O, Mark.X))

    # Phase 3: Self-play
    rng = random.Random(SEED)
    hard = run_matches(10, "hard", "hard", rng=rng)
    success &= check("Hard vs hard draws", 10, hard.draws)

    for weaker in ("easy", "medium"):
        as_x = run_matches(NUM_GAMES, "hard", weaker, rng=rng)
        success &= check(f"{weaker.capitalize()} wins as O", 0, as_x.second_wins)
        as_o = run_matches(NUM_GAMES, weaker, "hard", rng=rng)
        success &= check(f"{weaker.capitalize()} wins as X", 0, as_o.first_wins)

    total_time = time.time() - start_time
    logger.info("")
    logger.info(f"Total Time: {total_time:.1f}s")

    if success:
        logger.info("VALIDATION PASSED")
        return 0
    logger.error("VALIDATION FAILED")
    return 1


if __name__ == "__main__":
    sys.exit(main())
