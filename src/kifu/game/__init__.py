"""Replay layer - the engine that drives a board through a game tree.

Quick start::

    from kifu.game import ReplayEngine

    engine = ReplayEngine()
    engine.load_tree({"_children": [{"SZ": "9", "_children": [{"B": "ee"}]}]})
    engine.go_to(1)
    print(engine.board)
"""

from kifu.game.interfaces import IRenderer, IRuleEngine, PlacementOnlyRules
from kifu.game.replay import (
    Annotation,
    NodeInfo,
    Note,
    NoteKind,
    ReplayEngine,
    ReplayEvents,
    Variation,
)

__all__ = [
    # Interfaces
    "IRenderer",
    "IRuleEngine",
    "PlacementOnlyRules",
    # Concrete
    "Annotation",
    "NodeInfo",
    "Note",
    "NoteKind",
    "ReplayEngine",
    "ReplayEvents",
    "Variation",
]
