"""Core domain layer - board, game tree and cursor with zero external dependencies.

Quick start::

    from kifu.core import BoardState, GameNode, GameCursor

    root = GameNode()
    root.load_json({"_children": [{"SZ": "9", "_children": [{"B": "ee"}]}]})
    cursor = GameCursor(root.children[0])
    cursor.next()
    print(cursor.get_move_number(), cursor.get_path())
"""

from kifu.core.board import BoardState, HistoryFrame, Marker, fingerprint_of
from kifu.core.cursor import GameCursor, Path, is_game_root, max_move_count
from kifu.core.enums import MarkerType, MarkTool, Stone
from kifu.core.node import GameNode, NodeIdAllocator
from kifu.core.notation import escape_value, node_to_sgf, properties_to_sgf
from kifu.core.properties import PropertyCode, PropertyKind, parse_code
from kifu.core.types import (
    MAX_BOARD_SIZE,
    PASS_TOKEN,
    Point,
    expand_compressed_points,
    is_pass,
    point_to_sgf,
    sgf_to_point,
)

__all__ = [
    # Enums
    "MarkTool",
    "MarkerType",
    "PropertyCode",
    "PropertyKind",
    "Stone",
    # Types / helpers
    "MAX_BOARD_SIZE",
    "PASS_TOKEN",
    "Path",
    "Point",
    "expand_compressed_points",
    "fingerprint_of",
    "is_game_root",
    "is_pass",
    "max_move_count",
    "parse_code",
    "point_to_sgf",
    "sgf_to_point",
    # Domain objects
    "BoardState",
    "GameCursor",
    "GameNode",
    "HistoryFrame",
    "Marker",
    "NodeIdAllocator",
    # Notation
    "escape_value",
    "node_to_sgf",
    "properties_to_sgf",
]
