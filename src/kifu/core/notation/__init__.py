"""Notation package: SGF serialization."""

from kifu.core.notation.sgf import escape_value, node_to_sgf, properties_to_sgf

__all__ = [
    "escape_value",
    "node_to_sgf",
    "properties_to_sgf",
]
