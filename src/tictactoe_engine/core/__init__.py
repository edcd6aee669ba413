"""Core board representation and rules."""

from .board import Board, Mark, Cell, WIN_LINES, EDGE_CELLS, BOARD_SIZE
from .errors import EngineError, InvalidBoardError, IllegalMoveError, NoLegalMovesError
from .rules import (
    ensure_board,
    create_empty_board,
    is_legal_move,
    apply_move,
    winner,
    winning_line,
    is_draw,
    is_terminal,
    legal_moves,
    next_to_move,
    render,
    get_game_result,
)

__all__ = [
    "Board",
    "Mark",
    "Cell",
    "WIN_LINES",
    "EDGE_CELLS",
    "BOARD_SIZE",
    "EngineError",
    "InvalidBoardError",
    "IllegalMoveError",
    "NoLegalMovesError",
    "ensure_board",
    "create_empty_board",
    "is_legal_move",
    "apply_move",
    "winner",
    "winning_line",
    "is_draw",
    "is_terminal",
    "legal_moves",
    "next_to_move",
    "render",
    "get_game_result",
]
