"""Tests for GameNode and NodeIdAllocator."""

import gc
import re

from kifu.core.enums import Stone
from kifu.core.node import GameNode, NodeIdAllocator


class TestStructure:
    def test_append_returns_index_and_links_parent(self) -> None:
        root = GameNode()
        a = GameNode(ids=root.ids)
        b = GameNode(ids=root.ids)
        assert root.append_child(a) == 0
        assert root.append_child(b) == 1
        assert a.parent is root
        assert b.get_position() == 1
        assert a.get_siblings() == [a, b]

    def test_root_has_no_position(self) -> None:
        root = GameNode()
        assert root.get_position() is None
        assert root.get_siblings() == []

    def test_remove_child(self) -> None:
        root = GameNode()
        a = GameNode(ids=root.ids)
        b = GameNode(ids=root.ids)
        root.append_child(a)
        root.append_child(b)
        assert root.remove_child(a) == 0
        assert a.parent is None
        assert root.children == [b]
        assert root.remove_child(a) is None

    def test_parent_link_does_not_own(self) -> None:
        root = GameNode()
        child = GameNode(ids=root.ids)
        root.append_child(child)
        del root
        gc.collect()
        assert child.parent is None

    def test_walk_is_preorder(self) -> None:
        root = GameNode()
        root.load_json({"_children": [{"B": "aa", "_children": [{"W": "bb"}]}, {"B": "cc"}]})
        moves = [node.get_move() for node in root.walk()]
        assert moves == [None, "aa", "bb", "cc"]


class TestIds:
    def test_ids_unique_and_increasing(self) -> None:
        ids = NodeIdAllocator()
        first = GameNode(ids=ids)
        second = GameNode(ids=ids)
        assert first.id == 100000
        assert second.id == 100001

    def test_explicit_id_moves_counter(self) -> None:
        root = GameNode()
        root.load_json({"_children": [{"_id": 200000}]})
        assert root.children[0].id == 200000
        assert GameNode(ids=root.ids).id == 200001

    def test_non_numeric_id_ignored(self) -> None:
        root = GameNode()
        root.load_json({"_children": [{"_id": "abc", "B": "aa"}]})
        child = root.children[0]
        assert isinstance(child.id, int)
        assert "_id" not in child

    def test_adopted_subtree_gets_fresh_ids(self) -> None:
        root = GameNode()
        foreign = GameNode()  # its own allocator starts at 100000 too
        foreign.append_child(GameNode(ids=foreign.ids))
        root.append_child(foreign)
        all_ids = [node.id for node in root.walk()]
        assert len(all_ids) == len(set(all_ids))
        assert foreign.ids is root.ids


class TestProperties:
    def test_push_is_idempotent(self) -> None:
        node = GameNode()
        node.push_property("TR", "aa")
        node.push_property("TR", "aa")
        assert node.get("TR") == "aa"

    def test_push_promotes_to_list(self) -> None:
        node = GameNode()
        node.push_property("TR", "aa")
        node.push_property("TR", "bb")
        node.push_property("TR", "aa")
        assert node.get("TR") == ["aa", "bb"]

    def test_has_property_value(self) -> None:
        node = GameNode(properties={"TR": ["aa", "bb"], "C": "hi"})
        assert node.has_property_value("TR", "bb")
        assert node.has_property_value("C", "hi")
        assert not node.has_property_value("SQ", "aa")

    def test_delete_literal_drops_empty_property(self) -> None:
        node = GameNode(properties={"TR": ["aa", "bb"]})
        node.delete_property_value("TR", "aa")
        assert node.get("TR") == "bb"
        node.delete_property_value("TR", "bb")
        assert "TR" not in node

    def test_delete_scalar_value(self) -> None:
        node = GameNode(properties={"CR": "cc"})
        node.delete_property_value("CR", "cc")
        assert "CR" not in node

    def test_delete_by_pattern_across_keys(self) -> None:
        node = GameNode(properties={"TR": "dd", "LB": ["dd:A", "ee:B"], "SQ": "ff"})
        node.delete_property_value(("TR", "LB", "SQ"), re.compile("^dd"))
        assert node.get_properties() == {"LB": "ee:B", "SQ": "ff"}

    def test_get_properties_is_a_copy(self) -> None:
        node = GameNode(properties={"AB": ["aa", "bb"]})
        props = node.get_properties()
        props["AB"].append("cc")
        assert node.get("AB") == ["aa", "bb"]

    def test_empty_point_setup(self) -> None:
        node = GameNode(properties={"AB": ["aa", "bb"], "AW": "cc"})
        assert node.empty_point("aa") == "aa"
        assert node.get("AB") == "bb"
        assert node.empty_point("cc") == "cc"
        assert "AW" not in node

    def test_empty_point_move(self) -> None:
        node = GameNode(properties={"B": "dd"})
        assert node.empty_point("dd") == "dd"
        assert not node.has_move()

    def test_empty_point_miss(self) -> None:
        node = GameNode(properties={"B": "dd"})
        assert node.empty_point("ee") is None
        assert node.get_move() == "dd"


class TestMoves:
    def test_color_and_move(self) -> None:
        assert GameNode(properties={"W": "pp"}).get_color() == Stone.WHITE
        black = GameNode(properties={"B": "dd"})
        assert black.get_color() == Stone.BLACK
        assert black.get_move() == "dd"

    def test_pass_counts_as_move(self) -> None:
        node = GameNode(properties={"B": ""})
        assert node.has_move()
        assert node.get_move() == ""

    def test_no_move(self) -> None:
        node = GameNode(properties={"AB": "dd"})
        assert node.get_color() is None
        assert node.get_move() is None


class TestJson:
    def test_scalars_become_strings(self) -> None:
        node = GameNode(properties={"SZ": 19, "AB": ["aa", "bb"]})
        assert node.get("SZ") == "19"
        assert node.get("AB") == ["aa", "bb"]

    def test_unknown_codes_kept_verbatim(self) -> None:
        node = GameNode(properties={"XY": "whatever"})
        assert node.get("XY") == "whatever"

    def test_incremental_load_keeps_identity(self) -> None:
        root = GameNode()
        root.load_json({"_children": [{"SZ": "9", "_children": [{"B": "ee"}]}]})
        game = root.children[0]
        first = game.children[0]

        root.load_json(
            {
                "_children": [
                    {
                        "SZ": "9",
                        "_children": [
                            {"B": "ee", "C": "now with comment", "_children": [{"W": "cc"}]},
                            {"B": "dd"},
                        ],
                    }
                ]
            }
        )

        assert root.children[0] is game
        assert game.children[0] is first
        assert first.get("C") == "now with comment"
        assert first.children[0].get_move() == "cc"
        assert game.children[1].get_move() == "dd"

    def test_to_json_round_trip(self) -> None:
        data = {"_children": [{"SZ": "9", "_children": [{"B": "ee"}, {"B": "dd", "TR": ["aa", "bb"]}]}]}
        root = GameNode()
        root.load_json(data)
        assert root.to_json() == data

    def test_deep_tree_does_not_recurse(self) -> None:
        data: dict = {}
        leaf = data
        for _ in range(5000):
            child: dict = {"B": "aa"}
            leaf["_children"] = [child]
            leaf = child
        root = GameNode()
        root.load_json(data)
        assert sum(1 for _ in root.walk()) == 5001

        out = root.to_json()
        depth = 0
        while "_children" in out:
            out = out["_children"][0]
            depth += 1
        assert depth == 5000
        assert len(root.to_sgf()) > 5000
