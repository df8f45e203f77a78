"""BoardState - stone grid, marker overlay, captures and snapshot history."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from kifu.core.enums import MarkerType, Stone
from kifu.core.types import MAX_BOARD_SIZE, Point

if TYPE_CHECKING:
    from kifu.game.interfaces import IRenderer

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Marker:
    """Overlay on a single point.

    ``target`` is the second point of a line or arrow, ``label`` the text of a
    label marker.
    """

    kind: MarkerType
    target: Point | None = None
    label: str | None = None


@dataclass(frozen=True, slots=True)
class HistoryFrame:
    """Immutable snapshot pushed by :meth:`BoardState.commit`."""

    stones: tuple[Stone, ...]
    fingerprint: str
    captures: tuple[int, int]  # (black, white)


def fingerprint_of(stones: tuple[Stone, ...] | list[Stone]) -> str:
    """Canonical string for a row-major stone grid.

    Every occupied offset is emitted in order, prefixed with ``-`` for White.
    White on offset 0 therefore reads ``"-0"`` while Black reads ``"0"``.
    """
    parts: list[str] = []
    for offset, stone in enumerate(stones):
        if stone == Stone.BLACK:
            parts.append(str(offset))
        elif stone == Stone.WHITE:
            parts.append(f"-{offset}")
    return ",".join(parts)


class BoardState:
    """Mutable N x N board mirroring the root-to-cursor path as a frame stack.

    Forward steps mutate the grid and :meth:`commit`; backward steps
    :meth:`revert` to the frame below. Ko checks scan only that stack.
    """

    __slots__ = ("size", "_stones", "_markers", "_captures", "_history")

    def __init__(self, size: int = MAX_BOARD_SIZE) -> None:
        if not (1 <= size <= MAX_BOARD_SIZE):
            raise ValueError(f"Unsupported board size: {size}")
        self.size = size
        self._stones: list[Stone] = [Stone.EMPTY] * (size * size)
        self._markers: dict[int, Marker] = {}
        self._captures: dict[Stone, int] = {Stone.BLACK: 0, Stone.WHITE: 0}
        self._history: list[HistoryFrame] = []

    # -- Stones -------------------------------------------------------------

    def add_stone(self, pt: Point, stone: Stone) -> None:
        self._stones[pt.offset(self.size)] = stone

    def get_stone(self, pt: Point) -> Stone:
        return self._stones[pt.offset(self.size)]

    def is_occupied(self, pt: Point) -> bool:
        return self.get_stone(pt) != Stone.EMPTY

    def is_free(self, pt: Point) -> bool:
        return self.get_stone(pt) == Stone.EMPTY

    def stones(self) -> tuple[Stone, ...]:
        """Copy of the row-major grid."""
        return tuple(self._stones)

    def stone_points(self) -> list[tuple[Stone, Point]]:
        """All placed stones in row-major order."""
        return [
            (stone, Point.from_offset(offset, self.size))
            for offset, stone in enumerate(self._stones)
            if stone != Stone.EMPTY
        ]

    def region(self, top: int, left: int, width: int, height: int) -> list[Stone]:
        """Row-major copy of a rectangular part of the grid."""
        return [
            self.get_stone(Point(x, y))
            for y in range(top, top + height)
            for x in range(left, left + width)
        ]

    # -- Markers ------------------------------------------------------------

    def add_marker(
        self,
        pt: Point,
        kind: MarkerType,
        target: Point | None = None,
        label: str | None = None,
    ) -> None:
        self._markers[pt.offset(self.size)] = Marker(kind, target, label)

    def get_marker(self, pt: Point) -> Marker | None:
        return self._markers.get(pt.offset(self.size))

    def markers(self) -> Iterator[tuple[Point, Marker]]:
        for offset in sorted(self._markers):
            yield Point.from_offset(offset, self.size), self._markers[offset]

    # -- Captures -----------------------------------------------------------

    def captures(self, color: Stone) -> int:
        """Stones captured by *color*."""
        return self._captures[color]

    def add_captures(self, color: Stone, count: int) -> None:
        self._captures[color] += count

    # -- Clearing -----------------------------------------------------------

    def clear_stones(self) -> None:
        self._stones = [Stone.EMPTY] * (self.size * self.size)

    def clear_markers(self) -> None:
        self._markers.clear()

    def clear_captures(self) -> None:
        self._captures = {Stone.BLACK: 0, Stone.WHITE: 0}

    def clear(self) -> None:
        """Empty stones, markers and captures; history is kept."""
        self.clear_stones()
        self.clear_markers()
        self.clear_captures()

    def reset(self) -> None:
        """Back to a fresh board with an empty history."""
        _LOGGER.debug("board reset")
        self.clear()
        self._history.clear()

    # -- History ------------------------------------------------------------

    def fingerprint(self) -> str:
        return fingerprint_of(self._stones)

    @property
    def history_depth(self) -> int:
        return len(self._history)

    def history(self) -> tuple[HistoryFrame, ...]:
        return tuple(self._history)

    def commit(self) -> HistoryFrame:
        """Push a snapshot of the current stones, fingerprint and captures."""
        frame = HistoryFrame(
            stones=tuple(self._stones),
            fingerprint=self.fingerprint(),
            captures=(self._captures[Stone.BLACK], self._captures[Stone.WHITE]),
        )
        self._history.append(frame)
        _LOGGER.debug("board commit (depth %d)", len(self._history))
        return frame

    def rollback(self) -> None:
        """Discard uncommitted changes by restoring the top frame."""
        if not self._history:
            self.clear()
            return
        frame = self._history[-1]
        self._stones = list(frame.stones)
        self._captures = {Stone.BLACK: frame.captures[0], Stone.WHITE: frame.captures[1]}

    def revert(self, steps: int = 1) -> None:
        """Pop *steps* frames, then restore the new top (or clear if none)."""
        _LOGGER.debug("board revert %d (depth %d)", steps, len(self._history))
        for _ in range(steps):
            if not self._history:
                break
            self._history.pop()
        self.rollback()

    def check_state_repeated(self, fingerprint: str) -> bool:
        """Whether *fingerprint* occurs anywhere on the current path."""
        return any(frame.fingerprint == fingerprint for frame in self._history)

    # -- Rendering ----------------------------------------------------------

    def render(self, renderer: IRenderer) -> None:
        """Repaint everything through *renderer*."""
        renderer.start_redraw()
        for offset in range(self.size * self.size):
            pt = Point.from_offset(offset, self.size)
            stone = self._stones[offset]
            marker = self._markers.get(offset)
            if marker is not None:
                renderer.draw_marker(pt.x, pt.y, marker, stone)
            if stone != Stone.EMPTY:
                renderer.draw_stone(pt.x, pt.y, stone)
        renderer.finish_redraw()

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.size == other.size and self._stones == other._stones

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(self.size):
            row = []
            for x in range(self.size):
                stone = self.get_stone(Point(x, y))
                row.append("X" if stone == Stone.BLACK else "O" if stone == Stone.WHITE else ".")
            rows.append(" ".join(row))
        return "\n".join(rows)
