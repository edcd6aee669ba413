"""
Board representation for 3x3 tic-tac-toe.

A board is an immutable tuple of 9 cells, laid out row-major:

     0 | 1 | 2
    ---+---+---
     3 | 4 | 5
    ---+---+---
     6 | 7 | 8

Each cell is either None (empty) or a Mark. Moves never mutate a board;
apply_move() in rules.py builds a new one, so search branches never alias.
"""

from enum import Enum
from typing import Iterable, Optional, Tuple, Union
from dataclasses import dataclass

from .errors import InvalidBoardError

BOARD_SIZE = 9

EMPTY_SYMBOL = "."

# Characters accepted as an empty cell when parsing a board string
_EMPTY_CHARS = frozenset(".-_ ")

# Rows, columns, diagonals - checked in this order
WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

# Non-corner, non-center cells
EDGE_CELLS: Tuple[int, ...] = (1, 3, 5, 7)


class Mark(Enum):
    """A symbol a player places. Two of these take part in any one game."""

    X = "X"
    O = "O"
    CHECK = "✓"

    @classmethod
    def parse(cls, value: Union["Mark", str]) -> "Mark":
        """Accept a Mark or its symbol ('X', 'O', '✓')."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown mark {value!r}") from None

    def __str__(self) -> str:
        return self.value


Cell = Optional[Mark]


@dataclass(frozen=True)
class Board:
    """
    Immutable 9-cell board.

    Construct with Board.empty(), Board.from_cells() or Board.from_string().
    Validation happens on construction so every Board in circulation is
    well-formed.
    """

    cells: Tuple[Cell, ...] = (None,) * BOARD_SIZE

    def __post_init__(self) -> None:
        """Validate board invariants."""
        if not isinstance(self.cells, tuple):
            raise InvalidBoardError(
                f"Board cells must be a tuple, got {type(self.cells).__name__}"
            )
        if len(self.cells) != BOARD_SIZE:
            raise InvalidBoardError(
                f"Board has {len(self.cells)} cells, expected {BOARD_SIZE}"
            )
        for i, cell in enumerate(self.cells):
            if cell is not None and not isinstance(cell, Mark):
                raise InvalidBoardError(f"Cell {i} holds {cell!r}, not a Mark")

    @classmethod
    def empty(cls) -> "Board":
        """Board at the start of a game."""
        return cls()

    @classmethod
    def from_cells(cls, cells: Iterable[Union[Cell, str]]) -> "Board":
        """
        Build a board from a sequence of 9 cells.

        Cells may be Marks, mark symbols, None, or "" / "." for empty.

        Args:
            cells: Row-major cell values

        Returns:
            New Board
        """
        if isinstance(cells, Board):
            return cells
        if isinstance(cells, str):
            return cls.from_string(cells)

        parsed = []
        for i, cell in enumerate(cells):
            if cell is None or (isinstance(cell, str) and cell in _EMPTY_CHARS | {""}):
                parsed.append(None)
                continue
            try:
                parsed.append(Mark.parse(cell))
            except ValueError:
                raise InvalidBoardError(f"Cell {i} holds {cell!r}, not a Mark") from None

        return cls(tuple(parsed))

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Parse a board from text like "XX.OO...." or the output of render().

        Newlines are ignored. '.', '-', '_' and space mean empty.
        """
        symbols = [ch for ch in text if ch not in "\r\n"]
        return cls.from_cells(None if ch in _EMPTY_CHARS else ch for ch in symbols)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def count(self, mark: Mark) -> int:
        """Number of cells holding mark."""
        return sum(1 for cell in self.cells if cell == mark)

    @property
    def filled(self) -> int:
        """Number of occupied cells."""
        return sum(1 for cell in self.cells if cell is not None)

    def to_list(self) -> list:
        """Cells as symbols, None for empty (payload form)."""
        return [cell.value if cell is not None else None for cell in self.cells]

    def __str__(self) -> str:
        """Human-readable grid."""
        rows = []
        for r in range(3):
            row = self.cells[r * 3 : r * 3 + 3]
            rows.append(" | ".join(c.value if c is not None else " " for c in row))
        return "\n---+---+---\n".join(f" {row} " for row in rows)
