"""Tests for the viewer window and its node text."""

from __future__ import annotations

from typing import Any

import pytest

from kifu.config import ReplaySettings
from kifu.core.enums import Stone
from kifu.core.properties import PropertyCode
from kifu.game.replay import Annotation, NodeInfo, Note, NoteKind
from kifu.ui.i18n import LANGUAGES, set_language, t
from kifu.ui.node_text import describe_node
from kifu.ui.viewer import ViewerWindow


@pytest.fixture
def window(sample_record: dict[str, Any]) -> ViewerWindow:
    win = ViewerWindow()
    win.load_tree(sample_record, "sample.json")
    return win


def test_loads_and_shows_title(window: ViewerWindow) -> None:
    assert window._title_label.text() == "Sample - Inoue vs Honinbo"
    assert window.board_scene.size == 9
    assert window.status_label_text().startswith("Move 0")


def test_forward_button_updates_board_and_comments(window: ViewerWindow) -> None:
    window._btn_forward.click()
    assert window.board_scene.stone_at(4, 4) == Stone.BLACK
    assert "Tengen opening" in window.comments_text()
    assert window._btn_back.isEnabled()


def test_go_to_and_navigation_buttons(window: ViewerWindow) -> None:
    window.go_to(3)
    assert window.engine.node.get_move() == "gg"
    assert not window._btn_forward.isEnabled()
    assert window._btn_variation.isEnabled()
    assert "2 variations" not in window.status_label_text()

    window._btn_variation.click()
    assert window.engine.node.get_move() == "gc"

    window._btn_first.click()
    assert window.engine.node is window.engine.game_root
    assert not window._btn_back.isEnabled()

    window._btn_last.click()
    assert not window.engine.cursor.has_next()


def test_variation_count_in_status(window: ViewerWindow) -> None:
    window.go_to(2)
    assert "2 variations" in window.status_label_text()


def test_settings_reach_scene(sample_record: dict[str, Any]) -> None:
    win = ViewerWindow(ReplaySettings(show_coordinates=False))
    assert all(not item.isVisible() for item in win.board_scene._coord_items)


def test_describe_node_orders_text() -> None:
    info = NodeInfo(
        comments=["Nice."],
        annotations=[Annotation(PropertyCode.GB, "2"), Annotation(PropertyCode.N, "Joseki")],
        notes=[Note(NoteKind.PASS, Stone.WHITE)],
        time_black="2:05",
    )
    assert describe_node(info) == [
        "White passed",
        "Very good for Black",
        "Position: Joseki",
        "Black: 2:05",
        "Nice.",
    ]


def test_describe_node_localized() -> None:
    set_language("Russian")
    info = NodeInfo(notes=[Note(NoteKind.RESIGN, Stone.BLACK)])
    assert describe_node(info) == ["Чёрные сдались"]


def test_unknown_language_falls_back() -> None:
    assert LANGUAGES == ["English", "Russian"]
    set_language("Klingon")
    assert t().color_black == "Black"


def test_constructs_without_record() -> None:
    win = ViewerWindow()
    assert win.engine.node is win.engine.game_root
    assert not win._btn_last.isEnabled()
