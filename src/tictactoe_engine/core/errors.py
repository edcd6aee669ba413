"""Errors raised for bad caller input."""


class EngineError(ValueError):
    """Base class for all engine input errors."""


class InvalidBoardError(EngineError):
    """Board does not have exactly 9 cells, or holds something that is not a mark."""


class IllegalMoveError(EngineError):
    """Move index is out of range or targets an occupied cell."""


class NoLegalMovesError(EngineError):
    """A move was requested on a board with no empty cells."""
