"""Recognised SGF property codes and their kinds.

Property bags store raw string keys so that unknown codes survive a
load/serialize round trip untouched. :func:`parse_code` is the single place
that maps a raw key onto the closed :class:`PropertyCode` set; ``None`` is
the escape case for codes the engine stores but never dispatches.
"""

from __future__ import annotations

from enum import Enum, IntEnum, auto
from typing import TypeAlias

PropertyValue: TypeAlias = "str | list[str]"


class PropertyKind(IntEnum):
    """How the replay engine treats a property."""

    MOVE = auto()
    SETUP = auto()
    MARKUP = auto()
    MOVE_NUMBER = auto()
    PLAYER = auto()
    COMMENT = auto()
    ANNOTATION = auto()
    TIMING = auto()
    GAME_INFO = auto()
    FLAG = auto()


class PropertyCode(str, Enum):
    """Closed set of property codes the engine knows about."""

    kind: PropertyKind

    def __new__(cls, code: str, kind: PropertyKind) -> PropertyCode:
        obj = str.__new__(cls, code)
        obj._value_ = code
        obj.kind = kind
        return obj

    # Moves
    B = ("B", PropertyKind.MOVE)
    W = ("W", PropertyKind.MOVE)
    KO = ("KO", PropertyKind.FLAG)
    MN = ("MN", PropertyKind.MOVE_NUMBER)

    # Setup
    AB = ("AB", PropertyKind.SETUP)
    AW = ("AW", PropertyKind.SETUP)
    AE = ("AE", PropertyKind.SETUP)
    PL = ("PL", PropertyKind.PLAYER)

    # Markup
    CR = ("CR", PropertyKind.MARKUP)
    LB = ("LB", PropertyKind.MARKUP)
    TR = ("TR", PropertyKind.MARKUP)
    MA = ("MA", PropertyKind.MARKUP)
    SQ = ("SQ", PropertyKind.MARKUP)
    TW = ("TW", PropertyKind.MARKUP)
    TB = ("TB", PropertyKind.MARKUP)
    LN = ("LN", PropertyKind.MARKUP)
    AR = ("AR", PropertyKind.MARKUP)
    DD = ("DD", PropertyKind.MARKUP)

    # Commentary
    C = ("C", PropertyKind.COMMENT)
    N = ("N", PropertyKind.ANNOTATION)
    GB = ("GB", PropertyKind.ANNOTATION)
    GW = ("GW", PropertyKind.ANNOTATION)
    DM = ("DM", PropertyKind.ANNOTATION)
    HO = ("HO", PropertyKind.ANNOTATION)
    UC = ("UC", PropertyKind.ANNOTATION)
    V = ("V", PropertyKind.ANNOTATION)
    BM = ("BM", PropertyKind.ANNOTATION)
    DO = ("DO", PropertyKind.ANNOTATION)
    IT = ("IT", PropertyKind.ANNOTATION)
    TE = ("TE", PropertyKind.ANNOTATION)

    # Timing
    BL = ("BL", PropertyKind.TIMING)
    OB = ("OB", PropertyKind.TIMING)
    WL = ("WL", PropertyKind.TIMING)
    OW = ("OW", PropertyKind.TIMING)

    # Game info (root node)
    GM = ("GM", PropertyKind.GAME_INFO)
    FF = ("FF", PropertyKind.GAME_INFO)
    CA = ("CA", PropertyKind.GAME_INFO)
    AP = ("AP", PropertyKind.GAME_INFO)
    SZ = ("SZ", PropertyKind.GAME_INFO)
    HA = ("HA", PropertyKind.GAME_INFO)
    KM = ("KM", PropertyKind.GAME_INFO)
    GN = ("GN", PropertyKind.GAME_INFO)
    PB = ("PB", PropertyKind.GAME_INFO)
    PW = ("PW", PropertyKind.GAME_INFO)
    BR = ("BR", PropertyKind.GAME_INFO)
    WR = ("WR", PropertyKind.GAME_INFO)
    RE = ("RE", PropertyKind.GAME_INFO)
    DT = ("DT", PropertyKind.GAME_INFO)
    EV = ("EV", PropertyKind.GAME_INFO)
    RO = ("RO", PropertyKind.GAME_INFO)
    PC = ("PC", PropertyKind.GAME_INFO)
    RU = ("RU", PropertyKind.GAME_INFO)
    TM = ("TM", PropertyKind.GAME_INFO)
    GC = ("GC", PropertyKind.GAME_INFO)

    def __str__(self) -> str:
        return self.value


_BY_CODE: dict[str, PropertyCode] = {code.value: code for code in PropertyCode}

MOVE_CODES: frozenset[str] = frozenset({"B", "W"})
STONE_SETUP_CODES: frozenset[str] = frozenset({"AB", "AW", "AE"})
MARKUP_TOGGLE_CODES: tuple[str, ...] = ("TR", "SQ", "CR", "MA", "DD", "LB")


def parse_code(key: str) -> PropertyCode | None:
    """Map a raw key onto :class:`PropertyCode`; unknown keys give ``None``."""
    return _BY_CODE.get(key)


def is_private_key(key: str) -> bool:
    """Keys starting with ``_`` carry loader metadata, never properties."""
    return key.startswith("_")


def as_list(value: PropertyValue) -> list[str]:
    """Uniform list view of a scalar-or-list property value."""
    if isinstance(value, list):
        return list(value)
    return [value]
