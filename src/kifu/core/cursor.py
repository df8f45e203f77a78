"""GameCursor - navigation over a game tree and path addressing.

The tree root is the collection sentinel; its children are game roots. The
cursor rests on game roots or below, never on the sentinel.

Paths come in three interchangeable forms:

* ``int``: move count along preferred children from the current game root;
* ``["dd", "pp", ...]``: moves to follow from the current game root;
* ``[game, branch, ..., count]``: the game index, one index per branch point,
  and a trailing count of main-line steps (what :meth:`GameCursor.get_path`
  returns).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeAlias

from kifu.core.enums import Stone
from kifu.core.node import GameNode

Path: TypeAlias = "int | str | Sequence[int] | Sequence[str | None]"
StepCallback: TypeAlias = Callable[[], None]


def max_move_count(node: GameNode) -> int:
    """Steps needed to exhaust the preferred line below *node*.

    Pure: neither the tree's preferences nor any cursor are touched.
    """
    count = 0
    while node.children:
        idx = node.preferred_child
        if not (0 <= idx < len(node.children)):
            idx = 0
        node = node.children[idx]
        count += 1
    return count


def is_game_root(node: GameNode) -> bool:
    parent = node.parent
    return parent is not None and parent.parent is None


class GameCursor:
    """Points at the current node and moves it around the tree.

    Parent links are weak, so the cursor holds the topmost ancestor of its
    starting node to keep the whole tree alive.
    """

    __slots__ = ("node", "_tree")

    def __init__(self, node: GameNode) -> None:
        self.node = node
        tree = node
        while tree.parent is not None:
            tree = tree.parent
        self._tree = tree

    # ── Stepping ─────────────────────────────────────────────────────────

    def next(self, variation: int | None = None) -> bool:
        """Step into a child, remembering it as the preferred one."""
        if not self.has_next():
            return False
        idx = self.node.preferred_child if variation is None else variation
        if not (0 <= idx < len(self.node.children)):
            return False
        self.node.preferred_child = idx
        self.node = self.node.children[idx]
        return True

    def previous(self) -> bool:
        """Step to the parent; fails on a game root."""
        if not self.has_previous():
            return False
        parent = self.node.parent
        assert parent is not None
        self.node = parent
        return True

    def has_next(self) -> bool:
        return bool(self.node.children)

    def has_previous(self) -> bool:
        parent = self.node.parent
        return parent is not None and parent.parent is not None

    # ── Queries ──────────────────────────────────────────────────────────

    def next_moves(self) -> dict[str | None, int]:
        """Move coordinate of every child mapped to its index."""
        moves: dict[str | None, int] = {}
        for idx, child in enumerate(self.node.children):
            moves.setdefault(child.get_move(), idx)
        return moves

    def next_color(self) -> Stone | None:
        """Color of the first child that carries a move."""
        for child in self.node.children:
            color = child.get_color()
            if color is not None:
                return color
        return None

    def next_node_with_variations(self) -> GameNode:
        """First node at or below the cursor with other than one child."""
        node = self.node
        while len(node.children) == 1:
            node = node.children[0]
        return node

    def next_sibling(self) -> tuple[GameNode, int] | None:
        """The sibling after the current node, wrapping to the first."""
        siblings = self.node.get_siblings()
        if not siblings:
            return None
        idx = self.node.get_position()
        if idx is None:
            return None
        nxt = (idx + 1) % len(siblings)
        return siblings[nxt], nxt

    def game_root(self) -> GameNode:
        """Root of the game the cursor is in (first game on the sentinel)."""
        node = self.node
        if node.parent is None:
            return node.children[0] if node.children else node
        while not is_game_root(node):
            parent = node.parent
            assert parent is not None
            node = parent
        return node

    def get_move_number(self) -> int:
        """Nodes carrying a move from the cursor up to the root, inclusive."""
        num = 0
        node: GameNode | None = self.node
        while node is not None:
            if node.has_move():
                num += 1
            node = node.parent
        return num

    def get_max_move_count(self) -> int:
        return max_move_count(self.node)

    # ── Paths ────────────────────────────────────────────────────────────

    def get_path(self) -> list[int]:
        """``[game, branch indices..., count]`` for the current node."""
        node = self.node
        count = 0
        while True:
            parent = node.parent
            if parent is None or parent.parent is None or len(parent.children) != 1:
                break
            count += 1
            node = parent

        reversed_path = [count]
        cur: GameNode | None = node
        while cur is not None:
            parent = cur.parent
            if parent is not None and (len(parent.children) > 1 or parent.parent is None):
                reversed_path.append(cur.get_position() or 0)
            cur = parent
        return list(reversed(reversed_path))

    def path_moves(self) -> list[str | None]:
        """Moves of every node below the game root down to the cursor."""
        moves: list[str | None] = []
        node = self.node
        while not is_game_root(node):
            parent = node.parent
            if parent is None:
                break
            moves.append(node.get_move())
            node = parent
        return list(reversed(moves))

    def go_to(self, path: Path, on_step: StepCallback | None = None) -> None:
        """Navigate from the sentinel to *path*.

        ``on_step`` runs after every successful step, including entering the
        game root. Unmatched coordinates or indices stop navigation at the
        last resolved step.
        """
        game = self.game_root().get_position() or 0
        while self._tree.parent is not None:
            self._tree = self._tree.parent
        self.node = self._tree

        def step(variation: int | None) -> bool:
            if not self.next(variation):
                return False
            if on_step is not None:
                on_step()
            return True

        if isinstance(path, str):
            path = int(path) if path.strip().lstrip("-").isdigit() else [path]

        if isinstance(path, int):
            if not step(game):
                return
            for _ in range(path):
                if not step(None):
                    return
            return

        items = list(path)
        if not items or not all(isinstance(item, int) for item in items):
            # Moves form; an empty path just enters the game.
            if not step(game):
                return
            for coord in items:
                idx = self.next_moves().get(coord)
                if idx is None or not step(idx):
                    return
            return

        *branches, count = items
        if branches:
            if not step(branches[0]):
                return
            for idx in branches[1:]:
                while len(self.node.children) == 1:
                    if not step(0):
                        return
                if not step(idx):
                    return
        elif not step(game):
            return
        for _ in range(count):
            if not step(0):
                return
