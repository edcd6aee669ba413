"""
Minimax search with alpha-beta pruning.

Searches the full game tree from the given board (at most 9 plies), scoring
terminal positions from the acting player's perspective:

- win for me:  10 - depth  (prefer faster wins)
- win for opp: depth - 10  (prefer slower losses)
- draw:        0

Moves are always explored in ascending cell order and a move only replaces
the current best on a strictly better score, so ties go to the lowest index.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core import (
    Board,
    Mark,
    apply_move,
    ensure_board,
    is_draw,
    is_terminal,
    legal_moves,
    winner,
)
from .tactical import find_winning_move

logger = logging.getLogger(__name__)

WIN_SCORE = 10


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a root search."""

    score: int
    move: Optional[int]  # None if the root was already terminal
    nodes: int = 0  # Positions visited
    prunes: int = 0  # Cutoffs taken


class AlphaBetaSearch:
    """
    Single-use alpha-beta searcher.

    Holds the two marks and the node counters for one root search. A new
    instance is created per call, so searches never share state.
    """

    def __init__(self, me: Mark, opp: Mark):
        """
        Initialize searcher.

        Args:
            me: Maximizing mark (the one we pick a move for)
            opp: Minimizing mark
        """
        self.me = me
        self.opp = opp
        self.nodes = 0
        self.prunes = 0

    def run(self, board: Board) -> SearchResult:
        """Search from board with me to move at depth 0."""
        score, move = self._minimax(
            board, self.me, depth=0, alpha=float("-inf"), beta=float("inf")
        )
        return SearchResult(score=score, move=move, nodes=self.nodes, prunes=self.prunes)

    def _evaluate_terminal(self, board: Board, depth: int) -> Optional[int]:
        """Score a terminal board, or None if play continues."""
        mark = winner(board)
        if mark == self.me:
            return WIN_SCORE - depth
        if mark == self.opp:
            return depth - WIN_SCORE
        if is_draw(board):
            return 0
        return None

    def _minimax(
        self,
        board: Board,
        turn: Mark,
        depth: int,
        alpha: float,
        beta: float,
    ) -> Tuple[int, Optional[int]]:
        """
        Recursive alpha-beta minimax.

        Args:
            board: Position to evaluate
            turn: Mark to move at this node
            depth: Plies played since the root
            alpha: Best score the maximizer is assured of
            beta: Best score the minimizer is assured of

        Returns:
            (score, best_move)
        """
        self.nodes += 1

        terminal = self._evaluate_terminal(board, depth)
        if terminal is not None:
            return terminal, None

        best_move = None

        if turn == self.me:
            best_score = float("-inf")
            for move in legal_moves(board):
                child = apply_move(board, move, turn)
                score, _ = self._minimax(child, self.opp, depth + 1, alpha, beta)
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
                if beta <= alpha:
                    self.prunes += 1
                    break
        else:
            best_score = float("inf")
            for move in legal_moves(board):
                child = apply_move(board, move, turn)
                score, _ = self._minimax(child, self.me, depth + 1, alpha, beta)
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)
                if beta <= alpha:
                    self.prunes += 1
                    break

        return best_score, best_move


def search(board: Board, me: Mark, opp: Mark) -> SearchResult:
    """
    Run a full alpha-beta search with me to move.

    Args:
        board: Current board
        me: Mark to move
        opp: Opponent's mark

    Returns:
        SearchResult with score, chosen move and node counts
    """
    board = ensure_board(board)
    result = AlphaBetaSearch(me, opp).run(board)
    logger.debug(
        f"Searched {result.nodes:,} positions ({result.prunes:,} cutoffs): "
        f"move={result.move} score={result.score}"
    )
    return result


def optimal_move(board: Board, me: Mark, opp: Mark) -> Optional[int]:
    """
    Best move for me against a perfect opponent.

    Takes an immediate win without searching; otherwise runs the full search.

    Args:
        board: Current (non-terminal) board
        me: Mark to move
        opp: Opponent's mark

    Returns:
        Cell index, or None if the board is already terminal
    """
    board = ensure_board(board)
    if is_terminal(board):
        return None

    win = find_winning_move(board, me)
    if win is not None:
        return win

    return search(board, me, opp).move
