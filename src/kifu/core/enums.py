"""Core enumerations for the Go domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Stone(IntEnum):
    """Content of a board point."""

    EMPTY = 0
    BLACK = 1
    WHITE = 2

    @property
    def opposite(self) -> Stone:
        if self == Stone.BLACK:
            return Stone.WHITE
        if self == Stone.WHITE:
            return Stone.BLACK
        return Stone.EMPTY

    @property
    def sgf(self) -> str:
        """SGF color letter (``"B"`` / ``"W"``), empty for :attr:`EMPTY`."""
        if self == Stone.BLACK:
            return "B"
        if self == Stone.WHITE:
            return "W"
        return ""

    @classmethod
    def from_sgf(cls, letter: str) -> Stone:
        """Parse ``"B"`` / ``"W"``; anything else is :attr:`EMPTY`."""
        letter = letter.strip().upper()
        if letter == "B":
            return cls.BLACK
        if letter == "W":
            return cls.WHITE
        return cls.EMPTY

    def __str__(self) -> str:
        return self.name.lower()


class MarkerType(Enum):
    """Overlay drawn on top of a board point."""

    TRIANGLE = "triangle"
    SQUARE = "square"
    CIRCLE = "circle"
    EX = "ex"
    TERRITORY_WHITE = "territory-white"
    TERRITORY_BLACK = "territory-black"
    DIM = "dim"
    LABEL = "label"
    LINE = "line"
    ARROW = "arrow"
    CURRENT = "current"  # last played stone
    SIBLING_BLACK = "s-stone-b"  # alternative continuation
    SIBLING_WHITE = "s-stone-w"

    @classmethod
    def sibling(cls, color: Stone) -> MarkerType:
        return cls.SIBLING_WHITE if color == Stone.WHITE else cls.SIBLING_BLACK


class MarkTool(Enum):
    """Editing tools accepted by :meth:`ReplayEngine.mark`."""

    ADD_BLACK = "add_b"
    ADD_WHITE = "add_w"
    TRIANGLE = "tr"
    SQUARE = "sq"
    CIRCLE = "cr"
    EX = "x"
    DIM = "dim"
    NUMBER = "number"
    LETTER = "letter"
    LABEL = "label"
    CLEAR = "clear"
