"""AsciiRenderer - draws a board as text for terminals and tests."""

from __future__ import annotations

from collections.abc import Callable

from kifu.core.board import Marker
from kifu.core.enums import MarkerType, Stone
from kifu.core.types import MAX_BOARD_SIZE

BLACK_STONE = "●"  # U+25CF
WHITE_STONE = "○"  # U+25CB
EMPTY_POINT = "·"  # U+00B7

# Single-glyph markers shown on empty points; stones always win.
_MARKER_GLYPHS: dict[MarkerType, str] = {
    MarkerType.TRIANGLE: "△",
    MarkerType.SQUARE: "□",
    MarkerType.CIRCLE: "◯",
    MarkerType.EX: "×",
    MarkerType.TERRITORY_BLACK: "▪",
    MarkerType.TERRITORY_WHITE: "▫",
    MarkerType.DIM: "░",
    MarkerType.SIBLING_BLACK: "b",
    MarkerType.SIBLING_WHITE: "w",
}


class AsciiRenderer:
    """Collects one redraw into lines of text, top row first."""

    __slots__ = ("size", "_grid", "_frames")

    def __init__(self, size: int = MAX_BOARD_SIZE) -> None:
        self.size = size
        self._grid: list[list[str]] = []
        self._frames = 0
        self._blank()

    def _blank(self) -> None:
        self._grid = [[EMPTY_POINT] * self.size for _ in range(self.size)]

    # ── Renderer protocol ────────────────────────────────────────────────

    def set_size(self, size: int) -> None:
        self.size = size
        self._blank()

    def start_redraw(self) -> None:
        self._blank()

    def draw_stone(self, x: int, y: int, color: Stone) -> None:
        self._grid[y][x] = BLACK_STONE if color == Stone.BLACK else WHITE_STONE

    def draw_marker(self, x: int, y: int, marker: Marker, color: Stone) -> None:
        if color != Stone.EMPTY:
            return
        if marker.kind == MarkerType.LABEL and marker.label:
            self._grid[y][x] = marker.label[0]
            return
        glyph = _MARKER_GLYPHS.get(marker.kind)
        if glyph is not None:
            self._grid[y][x] = glyph

    def finish_redraw(self) -> None:
        self._frames += 1

    # ── Output ───────────────────────────────────────────────────────────

    @property
    def frames(self) -> int:
        """Number of completed redraws."""
        return self._frames

    def lines(self) -> list[str]:
        return [" ".join(row) for row in self._grid]

    def show(self, *, header: str | None = None, out: Callable[..., object] = print) -> None:
        """Pretty-print the last frame."""
        if header:
            out(header)
        for line in self.lines():
            out(line)
        out()  # blank line
