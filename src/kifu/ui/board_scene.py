"""GoBoardScene - QGraphicsScene that draws the goban, stones and markers.

Implements the renderer protocol consumed by :meth:`BoardState.render`.
"""

from __future__ import annotations

from PyQt6.QtCore import QLineF, QObject, QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainterPath, QPen, QPolygonF
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsLineItem,
    QGraphicsPathItem,
    QGraphicsPolygonItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
)

from kifu.core.board import Marker
from kifu.core.enums import MarkerType, Stone
from kifu.core.types import MAX_BOARD_SIZE
from kifu.ui.theme import BoardTheme

COLUMN_LABELS = "ABCDEFGHJKLMNOPQRST"  # no I, as on printed boards


def star_points(size: int) -> list[tuple[int, int]]:
    """Hoshi positions for common board sizes."""
    if size < 7:
        return []
    edge = 2 if size < 13 else 3
    far = size - 1 - edge
    points = [(edge, edge), (edge, far), (far, edge), (far, far)]
    if size % 2 == 1:
        mid = size // 2
        points.append((mid, mid))
        if size >= 13:
            points += [(edge, mid), (far, mid), (mid, edge), (mid, far)]
    return points


class GoBoardScene(QGraphicsScene):
    """Renders the grid, coordinates, stones and overlay markers."""

    TILE = 32  # px between lines

    # Z layers
    _Z_GRID = 0.0
    _Z_STONE = 1.0
    _Z_MARKER = 2.0

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.kaya()
        self._size = MAX_BOARD_SIZE
        self._show_coordinates = True

        self._grid_items: list[QGraphicsItem] = []
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._stone_items: dict[tuple[int, int], QGraphicsEllipseItem] = {}
        self._marker_items: list[QGraphicsItem] = []

        self._draw_board()

    # ── Renderer protocol ────────────────────────────────────────────────

    def set_size(self, size: int) -> None:
        self._size = size
        self._draw_board()

    def start_redraw(self) -> None:
        for stone in self._stone_items.values():
            self.removeItem(stone)
        self._stone_items.clear()
        self._clear_items(self._marker_items)

    def draw_stone(self, x: int, y: int, color: Stone) -> None:
        if color == Stone.EMPTY:
            return
        t = self.TILE
        radius = t * 0.48
        center = self._center(x, y)
        item = QGraphicsEllipseItem(center.x() - radius, center.y() - radius, 2 * radius, 2 * radius)
        fill = self._theme.black_stone if color == Stone.BLACK else self._theme.white_stone
        item.setBrush(QBrush(fill))
        item.setPen(QPen(self._theme.stone_outline, 1))
        item.setZValue(self._Z_STONE)
        self.addItem(item)
        self._stone_items[(x, y)] = item

    def draw_marker(self, x: int, y: int, marker: Marker, color: Stone) -> None:
        ink = self._theme.mark_on_dark if color == Stone.BLACK else self._theme.mark_on_light
        pen = QPen(ink, 2)
        center = self._center(x, y)
        r = self.TILE * 0.25
        kind = marker.kind
        item: QGraphicsItem

        if kind == MarkerType.TRIANGLE:
            item = QGraphicsPolygonItem(
                QPolygonF(
                    [
                        QPointF(center.x(), center.y() - r),
                        QPointF(center.x() + r * 0.9, center.y() + r * 0.6),
                        QPointF(center.x() - r * 0.9, center.y() + r * 0.6),
                    ]
                )
            )
            item.setPen(pen)
        elif kind == MarkerType.SQUARE:
            item = QGraphicsRectItem(QRectF(center.x() - r, center.y() - r, 2 * r, 2 * r))
            item.setPen(pen)
        elif kind == MarkerType.CIRCLE:
            item = QGraphicsEllipseItem(center.x() - r, center.y() - r, 2 * r, 2 * r)
            item.setPen(pen)
        elif kind == MarkerType.EX:
            path = QPainterPath()
            path.moveTo(center.x() - r, center.y() - r)
            path.lineTo(center.x() + r, center.y() + r)
            path.moveTo(center.x() + r, center.y() - r)
            path.lineTo(center.x() - r, center.y() + r)
            item = QGraphicsPathItem(path)
            item.setPen(pen)
        elif kind in (MarkerType.TERRITORY_BLACK, MarkerType.TERRITORY_WHITE):
            fill = (
                self._theme.black_stone
                if kind == MarkerType.TERRITORY_BLACK
                else self._theme.white_stone
            )
            half = r * 0.6
            item = QGraphicsRectItem(QRectF(center.x() - half, center.y() - half, 2 * half, 2 * half))
            item.setBrush(QBrush(fill))
            item.setPen(QPen(self._theme.stone_outline, 1))
        elif kind == MarkerType.DIM:
            t = self.TILE
            item = QGraphicsRectItem(QRectF(center.x() - t / 2, center.y() - t / 2, t, t))
            item.setBrush(QBrush(self._theme.dim))
            item.setPen(QPen(Qt.PenStyle.NoPen))
        elif kind == MarkerType.LABEL:
            if color == Stone.EMPTY:
                # Knock out the grid behind the text.
                backdrop = QGraphicsRectItem(QRectF(center.x() - r, center.y() - r, 2 * r, 2 * r))
                backdrop.setBrush(QBrush(self._theme.board))
                backdrop.setPen(QPen(Qt.PenStyle.NoPen))
                self._add_marker_item(backdrop)
            text = QGraphicsSimpleTextItem(marker.label or "")
            text.setFont(QFont("Sans Serif", max(8, self.TILE // 3)))
            text.setBrush(QBrush(ink))
            bounds = text.boundingRect()
            text.setPos(center.x() - bounds.width() / 2, center.y() - bounds.height() / 2)
            item = text
        elif kind in (MarkerType.LINE, MarkerType.ARROW):
            if marker.target is None:
                return
            end = self._center(marker.target.x, marker.target.y)
            line_pen = QPen(self._theme.mark_on_light, 2)
            if kind == MarkerType.ARROW:
                self._add_marker_item(self._arrow_head(center, end, line_pen))
            item = QGraphicsLineItem(QLineF(center, end))
            item.setPen(line_pen)
        elif kind == MarkerType.CURRENT:
            small = r * 0.7
            item = QGraphicsEllipseItem(center.x() - small, center.y() - small, 2 * small, 2 * small)
            item.setPen(QPen(self._theme.current_move, 2))
        else:
            # Sibling variation: a faint stone of that color.
            fill = QColor(
                self._theme.black_stone
                if kind == MarkerType.SIBLING_BLACK
                else self._theme.white_stone
            )
            fill.setAlpha(110)
            small = self.TILE * 0.3
            item = QGraphicsEllipseItem(center.x() - small, center.y() - small, 2 * small, 2 * small)
            item.setBrush(QBrush(fill))
            item.setPen(QPen(Qt.PenStyle.NoPen))

        self._add_marker_item(item)

    def finish_redraw(self) -> None:
        self.update()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self._size

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide the row/column labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def stone_at(self, x: int, y: int) -> Stone:
        """Color of the stone item currently drawn on (x, y)."""
        item = self._stone_items.get((x, y))
        if item is None:
            return Stone.EMPTY
        if item.brush().color() == self._theme.black_stone:
            return Stone.BLACK
        return Stone.WHITE

    def marker_count(self) -> int:
        return len(self._marker_items)

    # ── Drawing helpers ──────────────────────────────────────────────────

    def _center(self, x: int, y: int) -> QPointF:
        t = self.TILE
        return QPointF(t + x * t, t + y * t)

    def _add_marker_item(self, item: QGraphicsItem) -> None:
        item.setZValue(self._Z_MARKER)
        self.addItem(item)
        self._marker_items.append(item)

    def _arrow_head(self, start: QPointF, end: QPointF, pen: QPen) -> QGraphicsPolygonItem:
        line = QLineF(end, start)
        length = self.TILE * 0.3
        left = QLineF.fromPolar(length, line.angle() + 25).translated(end)
        right = QLineF.fromPolar(length, line.angle() - 25).translated(end)
        head = QGraphicsPolygonItem(QPolygonF([end, left.p2(), right.p2()]))
        head.setBrush(QBrush(pen.color()))
        head.setPen(pen)
        return head

    def _clear_items(self, items: list[QGraphicsItem]) -> None:
        for item in items:
            self.removeItem(item)
        items.clear()

    def _draw_board(self) -> None:
        """Draw or redraw the wood, grid lines, star points and coordinates."""
        self._clear_items(self._grid_items)
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        n = self._size
        extent = (n + 1) * t

        wood = QGraphicsRectItem(0, 0, extent, extent)
        wood.setBrush(QBrush(self._theme.board))
        wood.setPen(QPen(Qt.PenStyle.NoPen))
        wood.setZValue(self._Z_GRID - 0.1)
        self.addItem(wood)
        self._grid_items.append(wood)

        grid_pen = QPen(self._theme.grid, 1)
        for i in range(n):
            for line in (
                QLineF(self._center(0, i), self._center(n - 1, i)),
                QLineF(self._center(i, 0), self._center(i, n - 1)),
            ):
                item = QGraphicsLineItem(line)
                item.setPen(grid_pen)
                item.setZValue(self._Z_GRID)
                self.addItem(item)
                self._grid_items.append(item)

        dot = t * 0.1
        for x, y in star_points(n):
            center = self._center(x, y)
            hoshi = QGraphicsEllipseItem(center.x() - dot, center.y() - dot, 2 * dot, 2 * dot)
            hoshi.setBrush(QBrush(self._theme.star_point))
            hoshi.setPen(QPen(Qt.PenStyle.NoPen))
            hoshi.setZValue(self._Z_GRID)
            self.addItem(hoshi)
            self._grid_items.append(hoshi)

        font = QFont("Sans Serif", max(7, t // 4))
        for i in range(n):
            labels = (
                (COLUMN_LABELS[i], self._center(i, 0) - QPointF(4, t * 0.8)),
                (str(n - i), self._center(0, i) - QPointF(t * 0.85, 7)),
            )
            for text, pos in labels:
                txt = QGraphicsSimpleTextItem(text)
                txt.setFont(font)
                txt.setBrush(QBrush(self._theme.coord))
                txt.setPos(pos)
                txt.setZValue(self._Z_GRID + 0.3)
                txt.setVisible(self._show_coordinates)
                self.addItem(txt)
                self._coord_items.append(txt)

        self.setSceneRect(0, 0, extent, extent)
