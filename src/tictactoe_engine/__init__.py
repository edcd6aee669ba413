"""Tic-tac-toe decision engine: board rules, alpha-beta search and difficulty tiers."""

from .core import (
    Board,
    Mark,
    EngineError,
    InvalidBoardError,
    IllegalMoveError,
    NoLegalMovesError,
)
from .solver import Difficulty, choose_move, optimal_move, tactical_move

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Mark",
    "EngineError",
    "InvalidBoardError",
    "IllegalMoveError",
    "NoLegalMovesError",
    "Difficulty",
    "choose_move",
    "optimal_move",
    "tactical_move",
]
