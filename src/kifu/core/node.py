"""GameNode - a game-tree node holding an SGF property bag."""

from __future__ import annotations

import logging
import re
import weakref
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from kifu.core.enums import Stone
from kifu.core.notation.sgf import node_to_sgf
from kifu.core.properties import (
    MOVE_CODES,
    STONE_SETUP_CODES,
    PropertyValue,
    is_private_key,
)

_LOGGER = logging.getLogger(__name__)

Matcher = str | re.Pattern[str]


class NodeIdAllocator:
    """Session-scoped source of unique node ids.

    Ids start high so they do not collide with ids of trees that are loaded
    later; loading an explicit ``_id`` moves the counter past it.
    """

    __slots__ = ("_next",)

    def __init__(self, start: int = 100000) -> None:
        self._next = start

    def allocate(self) -> int:
        node_id = self._next
        self._next += 1
        return node_id

    def observe(self, node_id: int) -> None:
        self._next = max(self._next, node_id + 1)

    @property
    def peek(self) -> int:
        return self._next


class GameNode:
    """A node of the game tree.

    Children are owned and ordered, ``children[0]`` being the main line. The
    parent link is a weak reference so ownership flows only root to leaves;
    something must hold the tree root (a :class:`GameCursor` does) for
    ``parent`` to stay valid.
    ``preferred_child`` is the variation followed by default.
    """

    __slots__ = (
        "id",
        "children",
        "preferred_child",
        "_parent_ref",
        "_properties",
        "_ids",
        "__weakref__",
    )

    def __init__(
        self,
        parent: GameNode | None = None,
        properties: Mapping[str, Any] | None = None,
        *,
        ids: NodeIdAllocator | None = None,
        node_id: int | None = None,
    ) -> None:
        if ids is None:
            ids = parent._ids if parent is not None else NodeIdAllocator()
        self._ids = ids
        self.id = ids.allocate() if node_id is None else node_id
        if node_id is not None:
            ids.observe(node_id)
        self._parent_ref: weakref.ref[GameNode] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self.children: list[GameNode] = []
        self.preferred_child = 0
        self._properties: dict[str, PropertyValue] = {}
        if properties:
            self.load_json(properties)

    # ── Tree structure ───────────────────────────────────────────────────

    @property
    def parent(self) -> GameNode | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def ids(self) -> NodeIdAllocator:
        return self._ids

    def append_child(self, node: GameNode) -> int:
        """Adopt *node* as the last variation; returns its index."""
        node._parent_ref = weakref.ref(self)
        if node._ids is not self._ids:
            # Adopted subtrees get ids from this tree's allocator.
            for adopted in node.walk():
                adopted._ids = self._ids
                adopted.id = self._ids.allocate()
        self.children.append(node)
        return len(self.children) - 1

    def remove_child(self, node: GameNode) -> int | None:
        """Detach *node*; returns the index it had, ``None`` if not a child."""
        for idx, child in enumerate(self.children):
            if child is node:
                del self.children[idx]
                node._parent_ref = None
                return idx
        return None

    def get_siblings(self) -> list[GameNode]:
        """All children of the parent (including this node)."""
        parent = self.parent
        if parent is None:
            return []
        return parent.children

    def get_position(self) -> int | None:
        """Index within the parent's children, ``None`` for the root."""
        parent = self.parent
        if parent is None:
            return None
        for idx, sibling in enumerate(parent.children):
            if sibling is self:
                return idx
        return None

    def walk(self) -> Iterator[GameNode]:
        """Depth-first pre-order traversal, children in order."""
        stack: list[GameNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    # ── Properties ───────────────────────────────────────────────────────

    def get_properties(self) -> dict[str, PropertyValue]:
        """Copy of every stored property, in insertion order."""
        return {
            key: list(value) if isinstance(value, list) else value
            for key, value in self._properties.items()
        }

    def get(self, key: str, default: PropertyValue | None = None) -> PropertyValue | None:
        return self._properties.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def set_property(self, key: str, value: PropertyValue) -> None:
        """Overwrite *key* with *value*."""
        self._store(key, value if isinstance(value, list) else [value])

    def _store(self, key: str, values: list[str]) -> None:
        # Scalar until a second value arrives, as SGF reads it back.
        if not values:
            self._properties.pop(key, None)
        elif len(values) == 1:
            self._properties[key] = values[0]
        else:
            self._properties[key] = list(values)

    def push_property(self, key: str, value: str) -> None:
        """Add *value* under *key* without replacing existing values.

        An absent key becomes a scalar; a second distinct value promotes it to
        a list. A value already present is never added twice.
        """
        if key not in self._properties:
            self._properties[key] = value
            return
        current = self._properties[key]
        if not isinstance(current, list):
            if current == value:
                return
            current = [current]
            self._properties[key] = current
        if value not in current:
            current.append(value)

    def has_property_value(self, key: str, value: str) -> bool:
        current = self._properties.get(key)
        if current is None:
            return False
        if isinstance(current, list):
            return value in current
        return current == value

    def delete_property_value(self, keys: str | Iterable[str], matcher: Matcher) -> None:
        """Remove values of *keys* matching *matcher*.

        *matcher* is either a literal string or a compiled pattern (matched
        with ``search``). A property whose last value goes is dropped.
        """
        if isinstance(matcher, re.Pattern):
            pattern = matcher

            def test(v: str) -> bool:
                return pattern.search(v) is not None

        else:
            literal = matcher

            def test(v: str) -> bool:
                return v == literal

        for key in [keys] if isinstance(keys, str) else keys:
            current = self._properties.get(key)
            if current is None:
                continue
            if isinstance(current, list):
                self._store(key, [v for v in current if not test(v)])
            elif test(current):
                del self._properties[key]

    def empty_point(self, coord: str) -> str | None:
        """Remove *coord* from stone setups or a matching played move.

        Returns the removed value, ``None`` if nothing matched.
        """
        deleted: str | None = None
        for key in list(self._properties):
            value = self._properties[key]
            if key in STONE_SETUP_CODES:
                values = value if isinstance(value, list) else [value]
                kept = [v for v in values if v != coord]
                if len(kept) != len(values):
                    deleted = coord
                    self._store(key, kept)
            elif key in MOVE_CODES and value == coord:
                deleted = coord
                del self._properties[key]
        return deleted

    # ── Move helpers ─────────────────────────────────────────────────────

    def get_color(self) -> Stone | None:
        """Color of the move played in this node, if any."""
        if "W" in self._properties:
            return Stone.WHITE
        if "B" in self._properties:
            return Stone.BLACK
        return None

    def get_move(self) -> str | None:
        """Raw SGF coordinate of the played move (``""`` for a pass)."""
        for key in ("W", "B"):
            value = self._properties.get(key)
            if value is not None:
                return value[0] if isinstance(value, list) else value
        return None

    def has_move(self) -> bool:
        return "B" in self._properties or "W" in self._properties

    # ── Loading / export ─────────────────────────────────────────────────

    def load_json(self, data: Mapping[str, Any]) -> None:
        """Load a parser property tree ``{CODE: value, "_children": [...]}``.

        Existing properties are overwritten and children are matched by
        position, so loading a larger tree into a partially loaded one extends
        it in place. Uses an explicit stack instead of recursion.
        """
        json_stack: list[Mapping[str, Any]] = [data]
        node_stack: list[GameNode] = [self]
        while json_stack:
            json_node = json_stack.pop()
            game_node = node_stack.pop()
            game_node._load_json_node(json_node)
            for idx, child_data in enumerate(json_node.get("_children") or ()):
                if idx >= len(game_node.children):
                    game_node.append_child(GameNode(ids=game_node._ids))
                json_stack.append(child_data)
                node_stack.append(game_node.children[idx])

    def _load_json_node(self, data: Mapping[str, Any]) -> None:
        for key, value in data.items():
            if key == "_id":
                try:
                    self.id = int(value)
                except (TypeError, ValueError):
                    _LOGGER.warning("Ignoring non-numeric node id %r", value)
                    continue
                self._ids.observe(self.id)
                continue
            if is_private_key(key):
                continue
            if isinstance(value, (list, tuple)):
                self._store(key, [str(v) for v in value])
            else:
                self._properties[key] = str(value)

    def to_json(self) -> dict[str, Any]:
        """Export the subtree as a property tree accepted by :meth:`load_json`."""
        root: dict[str, Any] = self.get_properties()
        stack: list[tuple[GameNode, dict[str, Any]]] = [(self, root)]
        while stack:
            node, out = stack.pop()
            if not node.children:
                continue
            out["_children"] = []
            for child in node.children:
                child_out: dict[str, Any] = child.get_properties()
                out["_children"].append(child_out)
                stack.append((child, child_out))
        return root

    def to_sgf(self) -> str:
        return node_to_sgf(self)

    def __repr__(self) -> str:
        return f"GameNode(id={self.id}, props={self._properties!r}, children={len(self.children)})"
