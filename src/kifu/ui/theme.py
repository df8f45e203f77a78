"""Visual theme constants for the Kifu board."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the goban."""

    board: QColor  # wood
    grid: QColor
    star_point: QColor
    black_stone: QColor
    white_stone: QColor
    stone_outline: QColor
    mark_on_light: QColor  # markers over empty points and white stones
    mark_on_dark: QColor  # markers over black stones
    current_move: QColor
    dim: QColor  # DD overlay
    coord: QColor

    @classmethod
    def kaya(cls) -> BoardTheme:
        return cls(
            board=QColor(220, 179, 92),
            grid=QColor(40, 30, 20),
            star_point=QColor(40, 30, 20),
            black_stone=QColor(20, 20, 20),
            white_stone=QColor(245, 245, 240),
            stone_outline=QColor(30, 30, 30),
            mark_on_light=QColor(20, 20, 20),
            mark_on_dark=QColor(245, 245, 245),
            current_move=QColor(200, 40, 40),
            dim=QColor(220, 179, 92, 150),
            coord=QColor(70, 50, 30),
        )

    @classmethod
    def shinkaya(cls) -> BoardTheme:
        return cls(
            board=QColor(238, 203, 130),
            grid=QColor(60, 45, 30),
            star_point=QColor(60, 45, 30),
            black_stone=QColor(25, 25, 25),
            white_stone=QColor(250, 250, 246),
            stone_outline=QColor(40, 40, 40),
            mark_on_light=QColor(25, 25, 25),
            mark_on_dark=QColor(250, 250, 250),
            current_move=QColor(200, 40, 40),
            dim=QColor(238, 203, 130, 150),
            coord=QColor(90, 65, 40),
        )

    @classmethod
    def slate(cls) -> BoardTheme:
        return cls(
            board=QColor(150, 160, 170),
            grid=QColor(35, 40, 48),
            star_point=QColor(35, 40, 48),
            black_stone=QColor(15, 15, 18),
            white_stone=QColor(235, 237, 240),
            stone_outline=QColor(25, 25, 30),
            mark_on_light=QColor(15, 15, 18),
            mark_on_dark=QColor(240, 240, 240),
            current_move=QColor(230, 90, 40),
            dim=QColor(150, 160, 170, 150),
            coord=QColor(35, 40, 48),
        )


BOARD_THEMES: dict[str, Callable[[], BoardTheme]] = {
    "Kaya": BoardTheme.kaya,
    "Shin-kaya": BoardTheme.shinkaya,
    "Slate": BoardTheme.slate,
}


def theme_by_name(name: str) -> BoardTheme:
    """Look up a preset; unknown names fall back to Kaya."""
    return BOARD_THEMES.get(name, BoardTheme.kaya)()


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
}

QTextBrowser {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-size: 13px;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:disabled {
    color: #666;
    background: #2b2b2b;
}

QStatusBar {
    background: #1e1e1e;
    color: #aaa;
}
"""
