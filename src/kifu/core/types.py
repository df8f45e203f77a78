"""Point type and SGF coordinate helpers.

Coordinates use one lowercase letter per axis, ``a`` = 0 ... ``s`` = 18,
x (column) first::

    "aa" -> Point(0, 0)
    "pd" -> Point(15, 3)
    "tt" / "" -> None   (pass)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

PASS_TOKEN: Final = "tt"
MAX_BOARD_SIZE: Final = 19

_COORD_LETTERS: Final = "abcdefghijklmnopqrs"


@dataclass(frozen=True, slots=True)
class Point:
    """A board intersection, ``0 <= x, y < size``."""

    x: int
    y: int

    def offset(self, size: int) -> int:
        """Row-major index into a ``size * size`` grid."""
        return self.y * size + self.x

    @classmethod
    def from_offset(cls, offset: int, size: int) -> Point:
        return cls(offset % size, offset // size)


def is_pass(coord: str | None) -> bool:
    """Whether *coord* denotes a pass (absent, empty or ``tt``)."""
    return not coord or coord == PASS_TOKEN


def sgf_to_point(coord: str | None) -> Point | None:
    """Parse a two-letter SGF coordinate.

    Passes and anything that is not exactly two letters in ``a..s`` map to
    ``None``, which is distinct from ``Point(0, 0)``.
    """
    if is_pass(coord):
        return None
    assert coord is not None
    if len(coord) != 2:
        return None
    x = _COORD_LETTERS.find(coord[0])
    y = _COORD_LETTERS.find(coord[1])
    if x < 0 or y < 0:
        return None
    return Point(x, y)


def point_to_sgf(pt: Point | None, size: int = MAX_BOARD_SIZE) -> str | None:
    """Inverse of :func:`sgf_to_point`; out-of-bounds points give ``None``."""
    if pt is None:
        return None
    if not (0 <= pt.x < size and 0 <= pt.y < size):
        return None
    if max(pt.x, pt.y) >= len(_COORD_LETTERS):
        return None
    return _COORD_LETTERS[pt.x] + _COORD_LETTERS[pt.y]


def split_compound(value: str) -> tuple[str, str | None]:
    """Split ``"dd:A"`` / ``"aa:cc"`` into its two halves."""
    head, sep, tail = value.partition(":")
    return head, (tail if sep else None)


def expand_compressed_points(coords: Iterable[str]) -> list[str]:
    """Expand ``"UL:LR"`` rectangles into every contained coordinate.

    The original tokens are kept in front, expanded coordinates follow in
    column-major order. Values whose second half is not a point (labels such
    as ``"dd:A"``) are not expanded. The input is never modified.
    """
    coords = list(coords)
    expanded: list[str] = []
    for coord in coords:
        head, tail = split_compound(coord)
        if tail is None:
            continue
        upper_left = sgf_to_point(head)
        lower_right = sgf_to_point(tail)
        if upper_left is None or lower_right is None:
            continue
        for x in range(upper_left.x, lower_right.x + 1):
            for y in range(upper_left.y, lower_right.y + 1):
                token = point_to_sgf(Point(x, y))
                if token is not None:
                    expanded.append(token)
    return coords + expanded
