"""Tests for GameCursor navigation and path addressing."""

import gc
from typing import Any

import pytest

from kifu.core.cursor import GameCursor, is_game_root, max_move_count
from kifu.core.enums import Stone
from kifu.core.node import GameNode


def _cursor(data: dict[str, Any]) -> GameCursor:
    root = GameNode()
    root.load_json(data)
    return GameCursor(root.children[0])


@pytest.fixture
def cursor(sample_record: dict[str, Any]) -> GameCursor:
    return _cursor(sample_record)


class TestStepping:
    def test_next_follows_preferred(self, cursor: GameCursor) -> None:
        assert cursor.next()
        assert cursor.node.get_move() == "ee"

    def test_next_out_of_range_fails(self, cursor: GameCursor) -> None:
        game = cursor.node
        assert not cursor.next(5)
        assert cursor.node is game

    def test_next_remembers_choice(self, cursor: GameCursor) -> None:
        cursor.next()
        cursor.next()
        branch = cursor.node
        assert cursor.next(1)
        assert branch.preferred_child == 1

    def test_previous_stops_at_game_root(self, cursor: GameCursor) -> None:
        assert not cursor.has_previous()
        assert not cursor.previous()
        cursor.next()
        assert cursor.previous()
        assert is_game_root(cursor.node)

    def test_cursor_keeps_tree_alive(self, sample_record: dict[str, Any]) -> None:
        cursor = _cursor(sample_record)
        gc.collect()
        assert is_game_root(cursor.node)
        cursor.next()
        assert cursor.previous()
        cursor.go_to(2)
        assert cursor.get_path() == [0, 2]

    def test_leaf_has_no_next(self, cursor: GameCursor) -> None:
        cursor.go_to(3)
        assert not cursor.has_next()
        assert not cursor.next()


class TestQueries:
    def test_next_moves_and_color(self, cursor: GameCursor) -> None:
        cursor.go_to(2)
        assert cursor.next_moves() == {"gg": 0, "gc": 1}
        assert cursor.next_color() == Stone.BLACK

    def test_next_node_with_variations(self, cursor: GameCursor) -> None:
        node = cursor.next_node_with_variations()
        assert node.get_move() == "cc"

    def test_next_sibling_wraps(self, cursor: GameCursor) -> None:
        cursor.go_to([0, 1, 0])
        sibling, idx = cursor.next_sibling()
        assert idx == 0
        assert sibling.get_move() == "gg"

    def test_move_number(self, cursor: GameCursor) -> None:
        assert cursor.get_move_number() == 0
        cursor.go_to(3)
        assert cursor.get_move_number() == 3

    def test_pass_counts_toward_move_number(self) -> None:
        cursor = _cursor({"_children": [{"_children": [{"B": "aa", "_children": [{"W": ""}]}]}]})
        cursor.go_to(2)
        assert cursor.get_move_number() == 2

    def test_max_move_count_is_pure(self, cursor: GameCursor) -> None:
        cursor.go_to([0, 1, 1])
        cursor.go_to(0)
        branch = cursor.node.children[0].children[0]
        assert branch.preferred_child == 1
        assert cursor.get_max_move_count() == 4
        assert branch.preferred_child == 1
        assert max_move_count(cursor.node) == 4

    def test_game_root(self, cursor: GameCursor) -> None:
        game = cursor.node
        cursor.go_to(3)
        assert cursor.game_root() is game


class TestPaths:
    @pytest.mark.parametrize(
        ("count", "moves", "branch", "expected"),
        [
            (2, ["ee", "cc"], [0, 2], "cc"),
            (3, ["ee", "cc", "gg"], [0, 0, 0], "gg"),
        ],
    )
    def test_three_forms_agree(
        self,
        cursor: GameCursor,
        count: int,
        moves: list[str],
        branch: list[int],
        expected: str,
    ) -> None:
        cursor.go_to(count)
        by_count = cursor.node
        cursor.go_to(moves)
        by_moves = cursor.node
        cursor.go_to(branch)
        by_branch = cursor.node
        assert by_count is by_moves is by_branch
        assert by_count.get_move() == expected
        assert cursor.get_path() == branch

    def test_branch_form_into_variation(self, cursor: GameCursor) -> None:
        cursor.go_to([0, 1, 1])
        assert cursor.path_moves() == ["ee", "cc", "gc", "gg"]

    def test_get_path_identity(self, cursor: GameCursor) -> None:
        for node in cursor.node.walk():
            cursor.node = node
            path = cursor.get_path()
            cursor.go_to(path)
            assert cursor.node is node, path

    def test_get_path_shapes(self, cursor: GameCursor) -> None:
        assert cursor.get_path() == [0, 0]
        cursor.go_to(["ee", "cc", "gc"])
        assert cursor.get_path() == [0, 1, 0]
        cursor.go_to(["ee", "cc", "gc", "gg"])
        assert cursor.get_path() == [0, 1, 1]

    def test_numeric_string(self, cursor: GameCursor) -> None:
        cursor.go_to("2")
        assert cursor.node.get_move() == "cc"

    def test_unmatched_move_stops_at_last_resolved(self, cursor: GameCursor) -> None:
        cursor.go_to(["ee", "zz", "gg"])
        assert cursor.node.get_move() == "ee"

    def test_count_beyond_end_stops_at_leaf(self, cursor: GameCursor) -> None:
        cursor.go_to(99)
        assert cursor.node.get_move() == "gg"
        assert not cursor.has_next()

    def test_on_step_runs_for_each_step(self, cursor: GameCursor) -> None:
        steps: list[str | None] = []
        cursor.go_to(2, on_step=lambda: steps.append(cursor.node.get_move()))
        assert steps == [None, "ee", "cc"]

    def test_int_form_uses_current_game(self) -> None:
        root = GameNode()
        root.load_json(
            {
                "_children": [
                    {"_children": [{"B": "aa"}]},
                    {"_children": [{"B": "bb"}]},
                ]
            }
        )
        cursor = GameCursor(root.children[1])
        cursor.go_to(1)
        assert cursor.node.get_move() == "bb"
        cursor.go_to([0, 1])
        assert cursor.node.get_move() == "aa"
