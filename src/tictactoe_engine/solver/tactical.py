"""
One-ply tactical lookahead.

Finds immediate wins and forced blocks without running a full search.
"""

from typing import Optional

from ..core import Board, Mark, apply_move, legal_moves, winner


def find_winning_move(board: Board, mark: Mark) -> Optional[int]:
    """
    Find a move that wins on the spot for mark.

    Args:
        board: Current board
        mark: Mark to test

    Returns:
        Lowest index completing a line for mark, or None
    """
    for move in legal_moves(board):
        if winner(apply_move(board, move, mark)) == mark:
            return move
    return None


def tactical_move(board: Board, me: Mark, opp: Mark) -> Optional[int]:
    """
    Win if possible, otherwise block.

    The win scan always runs first, so when both a win and a block exist the
    win is returned.

    Args:
        board: Current board
        me: Mark to move
        opp: Opponent's mark

    Returns:
        Winning index, else blocking index, else None
    """
    move = find_winning_move(board, me)
    if move is not None:
        return move

    # Where opp would win is where me has to go
    return find_winning_move(board, opp)
