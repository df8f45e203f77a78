"""SGF serialization of game trees.

A node with a parent is wrapped in parentheses. Its properties are written
as ``;CODE[value]`` (multiple values become adjacent bracket groups), then
the whole single-child chain below it is flattened into the same run. The
children of the first node with several variations are appended as separate
parenthesized branches::

    (;B[dd];W[pp](;B[dp])(;B[pd]))
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kifu.core.node import GameNode
    from kifu.core.properties import PropertyValue


def escape_value(value: object) -> str:
    """Escape backslashes and closing brackets inside a property value."""
    return str(value).replace("\\", "\\\\").replace("]", "\\]")


def properties_to_sgf(properties: Mapping[str, PropertyValue]) -> str:
    """Serialize one node: ``;`` followed by every property group."""
    parts = [";"]
    for key, value in properties.items():
        values = value if isinstance(value, list) else [value]
        parts.append(key)
        parts.append("".join(f"[{escape_value(v)}]" for v in values))
    return "".join(parts)


def node_to_sgf(node: GameNode) -> str:
    """Serialize *node* and its whole subtree.

    Works off an explicit stack so arbitrarily deep records do not hit the
    recursion limit.
    """
    out: list[str] = []
    stack: list[GameNode | str] = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            out.append(item)
            continue

        wrapped = item.parent is not None
        if wrapped:
            out.append("(")
        out.append(properties_to_sgf(item.get_properties()))

        current = item
        while len(current.children) == 1:
            current = current.children[0]
            out.append(properties_to_sgf(current.get_properties()))

        if wrapped:
            stack.append(")")
        stack.extend(reversed(current.children))
    return "".join(out)
