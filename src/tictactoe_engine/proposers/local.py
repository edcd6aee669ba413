"""Move proposer backed by the local search engine."""

from typing import Optional

from ..core import Board, Mark
from ..solver.policy import DEFAULT_DIFFICULTY, Difficulty, RandomSource, choose_move
from .base import MoveProposer


class LocalSearchProposer(MoveProposer):
    """Delegates to the difficulty-tiered policy."""

    name = "local"

    def __init__(self, rng: Optional[RandomSource] = None):
        """
        Initialize local proposer.

        Args:
            rng: Random source for easy/medium tiers (fresh per call if omitted)
        """
        self.rng = rng

    def propose(
        self,
        board: Board,
        me: Mark,
        opp: Mark,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
    ) -> Optional[int]:
        return choose_move(board, me, opp, difficulty, rng=self.rng)
