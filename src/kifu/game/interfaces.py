"""Interfaces of the collaborators the replay engine consumes.

The engine depends on these abstractions, not on a concrete rule engine or
drawing surface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol

from kifu.core.enums import Stone

if TYPE_CHECKING:
    from kifu.core.board import BoardState, Marker
    from kifu.core.types import Point


class IRuleEngine(ABC):
    """Capture and legality rules operating on a :class:`BoardState`."""

    @abstractmethod
    def apply(self, point: Point, color: Stone) -> None:
        """Resolve captures after *color* played on *point*.

        The stone is already on the board when this runs.
        """

    @abstractmethod
    def check_legal(self, point: Point, color: Stone) -> bool:
        """Whether *color* may play on *point*.

        Checked in order: the point is free; the resulting group keeps a
        liberty after captures; the resulting position does not repeat the
        previous one (simple ko). ``False`` means the move must not be
        committed.
        """


class PlacementOnlyRules(IRuleEngine):
    """Null rule engine: no captures, any free point is legal."""

    __slots__ = ("_board",)

    def __init__(self, board: BoardState) -> None:
        self._board = board

    def apply(self, point: Point, color: Stone) -> None:
        return None

    def check_legal(self, point: Point, color: Stone) -> bool:
        return self._board.is_free(point)


class IRenderer(Protocol):
    """Narrow drawing surface fed by :meth:`BoardState.render`.

    A full repaint is bracketed by :meth:`start_redraw` and
    :meth:`finish_redraw`. The engine never reads anything back.
    """

    def set_size(self, size: int) -> None: ...

    def start_redraw(self) -> None: ...

    def draw_stone(self, x: int, y: int, color: Stone) -> None: ...

    def draw_marker(self, x: int, y: int, marker: Marker, color: Stone) -> None: ...

    def finish_redraw(self) -> None: ...
