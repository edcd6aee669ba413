"""
Move request handling for JSON-style payloads.

Payload:
    {"board": [...9 cells...], "aiMark": "O", "playerMark": "X", "difficulty": "hard"}

Response:
    {"move": n}        a legal move
    {"move": None}     board has no empty cell
    {"error": "..."}   malformed request
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from .core import Board, EngineError, InvalidBoardError, Mark, legal_moves
from .proposers import LocalSearchProposer, MoveProposer, select_move
from .solver.policy import DEFAULT_DIFFICULTY, Difficulty

logger = logging.getLogger(__name__)


def handle_move_request(
    payload: Mapping[str, Any],
    proposer: Optional[MoveProposer] = None,
    default_difficulty: Union[Difficulty, str] = DEFAULT_DIFFICULTY,
) -> Dict[str, Any]:
    """
    Turn a move request into a response dict.

    Args:
        payload: Decoded request body
        proposer: Move source (local search if omitted)
        default_difficulty: Tier used when the payload has none

    Returns:
        Response dict with either "move" or "error"
    """
    if not isinstance(payload, Mapping):
        return {"error": "Bad request"}

    raw_board = payload.get("board")
    if not isinstance(raw_board, list) or len(raw_board) != 9:
        return {"error": "Invalid board"}

    try:
        board = Board.from_cells(raw_board)
    except InvalidBoardError as e:
        logger.info(f"Rejected move request: {e}")
        return {"error": "Invalid board"}

    try:
        me = Mark.parse(payload.get("aiMark"))
        opp = Mark.parse(payload.get("playerMark"))
    except ValueError as e:
        logger.info(f"Rejected move request: {e}")
        return {"error": "Bad request"}

    if not legal_moves(board):
        return {"move": None}

    try:
        difficulty = Difficulty.parse(payload.get("difficulty") or default_difficulty)
        move = select_move(proposer or LocalSearchProposer(), board, me, opp, difficulty)
    except (EngineError, ValueError) as e:
        logger.info(f"Rejected move request: {e}")
        return {"error": "Bad request"}

    return {"move": move}
