"""Tests for the text renderer."""

from __future__ import annotations

from typing import Any

from kifu.core.board import BoardState
from kifu.core.enums import MarkerType, Stone
from kifu.core.types import Point
from kifu.game.replay import ReplayEngine
from kifu.ui.ascii import BLACK_STONE, EMPTY_POINT, WHITE_STONE, AsciiRenderer


def test_blank_board() -> None:
    renderer = AsciiRenderer(3)
    assert renderer.lines() == [" ".join([EMPTY_POINT] * 3)] * 3


def test_render_rows_top_first() -> None:
    board = BoardState(3)
    board.add_stone(Point(0, 0), Stone.BLACK)
    board.add_stone(Point(2, 1), Stone.WHITE)
    board.add_marker(Point(1, 2), MarkerType.TRIANGLE)
    board.add_marker(Point(0, 0), MarkerType.CURRENT)
    renderer = AsciiRenderer(3)

    board.render(renderer)

    assert renderer.lines() == [
        f"{BLACK_STONE} · ·",
        f"· · {WHITE_STONE}",
        "· △ ·",
    ]
    assert renderer.frames == 1


def test_label_shows_first_character() -> None:
    board = BoardState(2)
    board.add_marker(Point(1, 0), MarkerType.LABEL, label="A")
    renderer = AsciiRenderer(2)
    board.render(renderer)
    assert renderer.lines()[0] == "· A"


def test_follows_engine(sample_record: dict[str, Any]) -> None:
    renderer = AsciiRenderer()
    engine = ReplayEngine(renderer=renderer)
    engine.load_tree(sample_record)
    engine.go_to(2)
    assert renderer.size == 9
    text = "\n".join(renderer.lines())
    assert text.count(BLACK_STONE) == 1
    assert text.count(WHITE_STONE) == 1


def test_show_prints_header_and_blank_line() -> None:
    out: list[str] = []
    renderer = AsciiRenderer(2)
    renderer.show(header="Move 0", out=lambda *args: out.append(" ".join(args)))
    assert out == ["Move 0", "· ·", "· ·", ""]
