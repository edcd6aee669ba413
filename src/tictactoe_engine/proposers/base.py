"""Abstract base class for move proposers."""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Union

from ..core import Board, Mark, NoLegalMovesError, ensure_board, is_legal_move, legal_moves
from ..solver.policy import DEFAULT_DIFFICULTY, Difficulty, validate_marks

logger = logging.getLogger(__name__)


class MoveProposer(ABC):
    """
    Abstract source of move suggestions.

    A proposal is only a suggestion: it may be None or illegal, and is always
    checked by select_move() before use.
    """

    name = "proposer"

    @abstractmethod
    def propose(
        self,
        board: Board,
        me: Mark,
        opp: Mark,
        difficulty: Difficulty = DEFAULT_DIFFICULTY,
    ) -> Optional[int]:
        """
        Suggest a move.

        Args:
            board: Current board (at least one empty cell)
            me: Mark to move
            opp: Opponent's mark
            difficulty: Requested tier (sources may ignore it)

        Returns:
            Suggested cell index, or None if no suggestion
        """
        pass


def select_move(
    proposer: MoveProposer,
    board: Board,
    me: Union[Mark, str],
    opp: Union[Mark, str],
    difficulty: Union[Difficulty, str, None] = DEFAULT_DIFFICULTY,
) -> int:
    """
    Ask a proposer for a move and make sure it is legal.

    A missing or illegal proposal is replaced by the lowest legal index.

    Args:
        proposer: Move source
        board: Current board
        me: Mark to move
        opp: Opponent's mark
        difficulty: Requested tier

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
        raise NoLegalMovesError("Board is full, no move to select")

    move = proposer.propose(board, me, opp, difficulty)

    if move is None or not is_legal_move(board, move):
        logger.warning(
            f"{proposer.name} proposed unusable move {move!r}, falling back to {moves[0]}"
        )
        return moves[0]

    return move
