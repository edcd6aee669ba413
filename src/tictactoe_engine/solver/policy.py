"""
Difficulty-tiered move selection.

All tiers share the same solver (optimal_move) and tactical heuristic; they
only differ in how often they sample from it versus weaker moves:

- hard:   always optimal
- medium: win/block if available, else 75% optimal / 25% uniform random
- easy:   20% take an immediate win, 20% optimal, otherwise an edge cell

By default choose_move() never passes up an immediate win, whatever the tier.

The random source is passed in per call so tiers can be tested with a fixed
or stubbed generator.
"""

import logging
import random
from enum import Enum
from typing import Optional, Protocol, Sequence, Tuple, TypeVar, Union

from ..core import (
    EDGE_CELLS,
    Board,
    Mark,
    NoLegalMovesError,
    ensure_board,
    is_legal_move,
    legal_moves,
)
from .minimax import optimal_move
from .tactical import find_winning_move, tactical_move

logger = logging.getLogger(__name__)

T = TypeVar("T")

MEDIUM_OPTIMAL_PROBABILITY = 0.75
EASY_WIN_PROBABILITY = 0.2
EASY_OPTIMAL_PROBABILITY = 0.2


class Difficulty(Enum):
    """How far the engine strays from optimal play."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: Union["Difficulty", str, None]) -> "Difficulty":
        """Accept a Difficulty or a case-insensitive name. None means HARD."""
        if value is None:
            return DEFAULT_DIFFICULTY
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown difficulty {value!r}") from None

    def __str__(self) -> str:
        return self.value


DEFAULT_DIFFICULTY = Difficulty.HARD


class RandomSource(Protocol):
    """The slice of random.Random the policy needs."""

    def random(self) -> float:
        ...

    def choice(self, seq: Sequence[T]) -> T:
        ...


def validate_marks(me: Union[Mark, str], opp: Union[Mark, str]) -> Tuple[Mark, Mark]:
    """Parse both marks and check they differ."""
    me = Mark.parse(me)
    opp = Mark.parse(opp)
    if me == opp:
        raise ValueError(f"Acting mark and opponent mark are both {me}")
    return me, opp


def weak_move(board: Board, rng: RandomSource) -> int:
    """
    Pick a deliberately poor move.

    Prefers edge cells (1, 3, 5, 7); falls back to any legal cell.
    """
    moves = legal_moves(board)
    edges = [m for m in moves if m in EDGE_CELLS]
    return rng.choice(edges if edges else moves)


def _pick(
    board: Board, me: Mark, opp: Mark, difficulty: Difficulty, rng: RandomSource
) -> Optional[int]:
    """Apply the tier's sampling policy. May return None on a terminal board."""
    if difficulty is Difficulty.HARD:
        return optimal_move(board, me, opp)

    if difficulty is Difficulty.MEDIUM:
        move = tactical_move(board, me, opp)
        if move is not None:
            return move
        if rng.random() < MEDIUM_OPTIMAL_PROBABILITY:
            return optimal_move(board, me, opp)
        return rng.choice(legal_moves(board))

    # Easy
    if rng.random() < EASY_WIN_PROBABILITY:
        move = find_winning_move(board, me)
        if move is not None:
            return move
    if rng.random() < EASY_OPTIMAL_PROBABILITY:
        return optimal_move(board, me, opp)
    return weak_move(board, rng)


def choose_move(
    board: Board,
    me: Union[Mark, str],
    opp: Union[Mark, str],
    difficulty: Union[Difficulty, str, None] = DEFAULT_DIFFICULTY,
    rng: Optional[RandomSource] = None,
    always_take_win: bool = True,
) -> int:
    """
    Choose a move for me at the given difficulty.

    Args:
        board: Current board (must have at least one empty cell)
        me: Mark to move
        opp: Opponent's mark
        difficulty: Tier, defaults to hard
        rng: Random source; a fresh random.Random() is used if omitted
        always_take_win: Take an immediate win in every tier. When False the
            easy tier only takes it on its win roll.

    Returns:
        A legal cell index

    Raises:
        InvalidBoardError: board is not 9 valid cells
        NoLegalMovesError: board is full
        ValueError: unknown or identical marks, unknown difficulty
    """
    board = ensure_board(board)
    me, opp = validate_marks(me, opp)
    difficulty = Difficulty.parse(difficulty)

    moves = legal_moves(board)
    if not moves:
        raise NoLegalMovesError("Board is full, no move to choose")

    if rng is None:
        rng = random.Random()

    move = find_winning_move(board, me) if always_take_win else None
    if move is None:
        move = _pick(board, me, opp, difficulty, rng)

    if move is None or not is_legal_move(board, move):
        logger.warning(
            f"{difficulty} policy produced unusable move {move!r}, "
            f"falling back to {moves[0]}"
        )
        return moves[0]

    return move
