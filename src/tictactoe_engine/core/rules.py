"""
Tic-tac-toe rules implementation.

Implements the classic rules:
- Players alternate placing one mark in an empty cell
- Three identical marks in a row, column or diagonal win
- A full board with no line is a draw
"""

from typing import List, Optional, Sequence, Tuple, Union

from .board import BOARD_SIZE, EMPTY_SYMBOL, WIN_LINES, Board, Mark
from .errors import IllegalMoveError, InvalidBoardError

BoardLike = Union[Board, Sequence]


def ensure_board(board: BoardLike) -> Board:
    """
    Coerce input to a validated Board.

    Args:
        board: Board, or a sequence of 9 cells

    Returns:
        Board

    Raises:
        InvalidBoardError: if the input is not exactly 9 valid cells
    """
    if isinstance(board, Board):
        return board
    try:
        return Board.from_cells(board)
    except TypeError:
        raise InvalidBoardError(f"Cannot build a board from {type(board).__name__}") from None


def create_empty_board() -> Board:
    """Create the initial board."""
    return Board.empty()


def is_legal_move(board: BoardLike, index: int) -> bool:
    """
    Check whether a mark may be placed at index.

    A move is legal if:
    - index is an integer in [0, 8]
    - the cell is empty

    Args:
        board: Current board
        index: Cell index

    Returns:
        True if the move is legal
    """
    board = ensure_board(board)
    if isinstance(index, bool) or not isinstance(index, int):
        return False
    if index < 0 or index >= BOARD_SIZE:
        return False
    return board[index] is None


def apply_move(board: BoardLike, index: int, mark: Mark) -> Board:
    """
    Place mark at index and return the resulting board.

    The input board is left untouched.

    Args:
        board: Current board
        index: Cell to occupy
        mark: Mark to place

    Returns:
        New Board after the move

    Raises:
        IllegalMoveError: if the index is out of range or the cell is occupied
    """
    board = ensure_board(board)
    if not is_legal_move(board, index):
        if isinstance(index, int) and 0 <= index < BOARD_SIZE:
            raise IllegalMoveError(f"Cell {index} is already occupied by {board[index]}")
        raise IllegalMoveError(f"Cell index {index!r} is out of range 0-{BOARD_SIZE - 1}")

    cells = list(board.cells)
    cells[index] = Mark.parse(mark)
    return Board(tuple(cells))


def winning_line(board: BoardLike) -> Optional[Tuple[int, int, int]]:
    """
    Get the first completed line, or None.

    Lines are scanned rows first, then columns, then diagonals.
    """
    board = ensure_board(board)
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def winner(board: BoardLike) -> Optional[Mark]:
    """
    Get the mark owning a completed line.

    Args:
        board: Board to check

    Returns:
        The winning Mark, or None if no line is complete
    """
    line = winning_line(board)
    if line is None:
        return None
    return ensure_board(board)[line[0]]


def is_draw(board: BoardLike) -> bool:
    """True if the board is full and nobody has won."""
    board = ensure_board(board)
    return winner(board) is None and all(cell is not None for cell in board)


def is_terminal(board: BoardLike) -> bool:
    """True if the game has ended (win or draw)."""
    return winner(board) is not None or is_draw(board)


def legal_moves(board: BoardLike) -> List[int]:
    """
    Generate all legal moves.

    Args:
        board: Current board

    Returns:
        Empty cell indices in ascending order
    """
    board = ensure_board(board)
    return [i for i, cell in enumerate(board) if cell is None]


def next_to_move(board: BoardLike, first: Mark = Mark.X, second: Mark = Mark.O) -> Mark:
    """
    Work out whose turn it is from the mark counts.

    The first player moves whenever both have placed the same number of marks.
    """
    board = ensure_board(board)
    return first if board.count(first) <= board.count(second) else second


def render(board: BoardLike) -> str:
    """
    Render the board as three rows of three characters.

    Empty cells are shown as '.'. Used for prompts and diagnostics.
    """
    board = ensure_board(board)
    symbols = "".join(cell.value if cell is not None else EMPTY_SYMBOL for cell in board)
    return "\n".join(symbols[r : r + 3] for r in range(0, BOARD_SIZE, 3))


def get_game_result(board: BoardLike) -> Optional[str]:
    """
    Get human-readable game result.

    Args:
        board: Board to describe

    Returns:
        Result string or None if not terminal
    """
    mark = winner(board)
    if mark is not None:
        return f"{mark} wins"
    if is_draw(board):
        return "Draw"
    return None
