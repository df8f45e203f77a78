"""ViewerWindow - read-only window replaying a loaded game record."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QResizeEvent
from PyQt6.QtWidgets import (
    QGraphicsView,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QStatusBar,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from kifu.config import ReplaySettings
from kifu.core.cursor import Path
from kifu.core.node import GameNode
from kifu.game.replay import NodeInfo, ReplayEngine
from kifu.ui.board_scene import GoBoardScene
from kifu.ui.i18n import t
from kifu.ui.node_text import describe_node, status_text
from kifu.ui.theme import theme_by_name


class BoardView(QGraphicsView):
    """Displays the board scene, scaled to fit the widget."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._scene = GoBoardScene()
        super().__init__(self._scene, parent)

        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)

    @property
    def board_scene(self) -> GoBoardScene:
        return self._scene

    def resizeEvent(self, event: QResizeEvent | None) -> None:
        super().resizeEvent(event)
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)


class ViewerWindow(QMainWindow):
    """Board on the left, node text and navigation on the right."""

    def __init__(self, settings: ReplaySettings | None = None) -> None:
        super().__init__()
        self._settings = settings if settings is not None else ReplaySettings()
        s = t()
        self.setWindowTitle(s.window_title)
        self.resize(1000, 720)

        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        # Board (left)
        self._board_view = BoardView()
        scene = self._board_view.board_scene
        scene.set_theme(theme_by_name(self._settings.board_theme))
        scene.set_show_coordinates(self._settings.show_coordinates)
        root.addWidget(self._board_view, stretch=3)

        # Right panel
        right = QVBoxLayout()
        right.setSpacing(6)
        self._title_label = QLabel("")
        self._title_label.setWordWrap(True)
        right.addWidget(self._title_label)
        right.addWidget(QLabel(s.comments_header))
        self._comments = QTextBrowser()
        right.addWidget(self._comments, stretch=1)

        buttons = QHBoxLayout()
        self._btn_first = QPushButton(s.btn_first)
        self._btn_back = QPushButton(s.btn_back)
        self._btn_forward = QPushButton(s.btn_forward)
        self._btn_last = QPushButton(s.btn_last)
        for btn in (self._btn_first, self._btn_back, self._btn_forward, self._btn_last):
            buttons.addWidget(btn)
        right.addLayout(buttons)
        self._btn_variation = QPushButton(s.btn_next_variation)
        right.addWidget(self._btn_variation)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(300)
        root.addWidget(right_widget)

        # Status bar
        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel(s.status_ready)
        self._status.addWidget(self._status_label)

        self._engine = ReplayEngine(renderer=scene, settings=self._settings)
        self._engine.events.on_node.append(self._on_node)

        self._btn_first.clicked.connect(self._engine.first)
        self._btn_back.clicked.connect(lambda: self._engine.back())
        self._btn_forward.clicked.connect(lambda: self._engine.forward())
        self._btn_last.clicked.connect(self._engine.last)
        self._btn_variation.clicked.connect(self._engine.next_sibling)
        self._btn_back.setShortcut("Left")
        self._btn_forward.setShortcut("Right")
        self._btn_first.setShortcut("Home")
        self._btn_last.setShortcut("End")

        self._engine.refresh()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def engine(self) -> ReplayEngine:
        return self._engine

    @property
    def board_scene(self) -> GoBoardScene:
        return self._board_view.board_scene

    def load_tree(self, data: Mapping[str, Any], name: str = "") -> None:
        self._engine.load_tree(data)
        self._title_label.setText(self._engine.game_description())
        if name:
            self._status.showMessage(t().status_loaded.format(name=name), 3000)

    def go_to(self, path: Path) -> None:
        self._engine.go_to(path)

    def comments_text(self) -> str:
        return self._comments.toPlainText()

    def status_label_text(self) -> str:
        return self._status_label.text()

    # ── Engine callbacks ─────────────────────────────────────────────────

    def _on_node(self, node: GameNode, info: NodeInfo) -> None:
        self._comments.setPlainText("\n\n".join(describe_node(info)))
        self._status_label.setText(status_text(self._engine))
        self._btn_back.setEnabled(self._engine.cursor.has_previous())
        self._btn_first.setEnabled(self._engine.cursor.has_previous())
        self._btn_forward.setEnabled(self._engine.cursor.has_next())
        self._btn_last.setEnabled(self._engine.cursor.has_next())
        self._btn_variation.setEnabled(len(node.get_siblings()) > 1)
