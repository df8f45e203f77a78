"""ReplayEngine - the central orchestrator of game-record replay.

Coordinates: GameCursor, BoardState, rule engine, renderer.
Dispatches node properties into board mutations and emits events via simple
callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import Any

from kifu.config import ReplaySettings
from kifu.core.board import BoardState
from kifu.core.cursor import GameCursor, Path
from kifu.core.enums import MarkerType, MarkTool, Stone
from kifu.core.node import GameNode
from kifu.core.properties import (
    MARKUP_TOGGLE_CODES,
    PropertyCode,
    PropertyKind,
    as_list,
    parse_code,
)
from kifu.core.types import (
    MAX_BOARD_SIZE,
    PASS_TOKEN,
    Point,
    expand_compressed_points,
    is_pass,
    point_to_sgf,
    sgf_to_point,
    split_compound,
)
from kifu.game.interfaces import IRenderer, IRuleEngine, PlacementOnlyRules

_LOGGER = logging.getLogger(__name__)

RESIGN_TOKEN = "resign"

_SETUP_STONES: dict[PropertyCode, Stone] = {
    PropertyCode.AB: Stone.BLACK,
    PropertyCode.AW: Stone.WHITE,
    PropertyCode.AE: Stone.EMPTY,
}

_MARKUP_KINDS: dict[PropertyCode, MarkerType] = {
    PropertyCode.TR: MarkerType.TRIANGLE,
    PropertyCode.SQ: MarkerType.SQUARE,
    PropertyCode.CR: MarkerType.CIRCLE,
    PropertyCode.MA: MarkerType.EX,
    PropertyCode.TW: MarkerType.TERRITORY_WHITE,
    PropertyCode.TB: MarkerType.TERRITORY_BLACK,
    PropertyCode.DD: MarkerType.DIM,
    PropertyCode.LB: MarkerType.LABEL,
    PropertyCode.LN: MarkerType.LINE,
    PropertyCode.AR: MarkerType.ARROW,
}

_TOOL_CODES: dict[MarkTool, str] = {
    MarkTool.TRIANGLE: "TR",
    MarkTool.SQUARE: "SQ",
    MarkTool.CIRCLE: "CR",
    MarkTool.EX: "MA",
    MarkTool.DIM: "DD",
    MarkTool.NUMBER: "LB",
    MarkTool.LETTER: "LB",
    MarkTool.LABEL: "LB",
}


# ── Node presentation data ───────────────────────────────────────────────────


class NoteKind(IntEnum):
    PASS = auto()
    RESIGN = auto()


@dataclass(slots=True)
class Note:
    """A pass or resignation made in the current node."""

    kind: NoteKind
    color: Stone


@dataclass(slots=True)
class Annotation:
    """A judgement such as "good for black" or a node name."""

    code: PropertyCode
    value: str

    @property
    def emphasized(self) -> bool:
        """SGF double-valued annotations (``GB[2]``: "very good for black")."""
        return self.value.strip() == "2"


@dataclass
class NodeInfo:
    """Text shown next to the board for the current node."""

    comments: list[str] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    time_black: str = ""
    time_white: str = ""

    def clear_node_text(self) -> None:
        """Forget per-node text; running clock strings carry over."""
        self.comments.clear()
        self.annotations.clear()
        self.notes.clear()


@dataclass(slots=True)
class Variation:
    """A child of the current node."""

    move: str | None
    index: int
    node: GameNode


# ── Event definitions ────────────────────────────────────────────────────────

NodeCallback = Callable[[GameNode, NodeInfo], None]
IllegalMoveCallback = Callable[[Point, Stone], None]
PruneCallback = Callable[[GameNode], None]
RulesFactory = Callable[[BoardState], IRuleEngine]
PropertyHandler = Callable[[list[str], PropertyCode, bool], None]


@dataclass
class ReplayEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_node: list[NodeCallback] = field(default_factory=list)
    on_illegal_move: list[IllegalMoveCallback] = field(default_factory=list)
    on_node_pruned: list[PruneCallback] = field(default_factory=list)


# ── Engine ───────────────────────────────────────────────────────────────────


class ReplayEngine:
    """Replays a branching game record onto a :class:`BoardState`.

    The board's history stack always holds one frame per node on the path
    from the game root to the cursor. Forward steps execute the node and
    commit; backward steps revert.

    Thread-safety: single-threaded by design, call from the owning thread.
    """

    __slots__ = (
        "settings",
        "events",
        "root",
        "game_root",
        "board",
        "rules",
        "cursor",
        "current_color",
        "move_number",
        "label_number",
        "label_letter",
        "info",
        "variations",
        "_renderer",
        "_rules_factory",
        "_confirm_prune",
        "_handlers",
        "__weakref__",
    )

    def __init__(
        self,
        renderer: IRenderer | None = None,
        rules_factory: RulesFactory | None = None,
        settings: ReplaySettings | None = None,
        confirm_prune: Callable[[], bool] | None = None,
    ) -> None:
        self.settings = settings if settings is not None else ReplaySettings()
        self.events = ReplayEvents()
        self._renderer = renderer
        self._rules_factory: RulesFactory = (
            rules_factory if rules_factory is not None else PlacementOnlyRules
        )
        self._confirm_prune = confirm_prune
        self._handlers: dict[PropertyKind, PropertyHandler] = {
            PropertyKind.MOVE: self._play_move,
            PropertyKind.MOVE_NUMBER: self._set_move_number,
            PropertyKind.SETUP: self._add_stones,
            PropertyKind.MARKUP: self._add_markers,
            PropertyKind.PLAYER: self._set_color,
            PropertyKind.COMMENT: self._show_comments,
            PropertyKind.ANNOTATION: self._show_annotation,
            PropertyKind.TIMING: self._show_time,
        }

        self.current_color = Stone.BLACK
        self.move_number = 0
        self.label_number = 1
        self.label_letter = "A"
        self.info = NodeInfo()
        self.variations: list[Variation] = []

        self.root = GameNode()
        self.root.append_child(GameNode(ids=self.root.ids))
        self.game_root = self.root.children[0]
        self.board = BoardState(self.settings.default_board_size)
        self.rules = self._rules_factory(self.board)
        self.cursor = GameCursor(self.game_root)
        self.init_game(self.game_root)

    # ── Loading ──────────────────────────────────────────────────────────

    def load_tree(self, data: Mapping[str, Any]) -> None:
        """Replace the session with a parser property tree and show game 1."""
        root = GameNode()
        root.load_json(data)
        if not root.children:
            _LOGGER.warning("Property tree holds no game; starting an empty one")
            root.append_child(GameNode(ids=root.ids))
        self.root = root
        _LOGGER.info("Loaded %d game(s)", len(root.children))
        self.init_game(root.children[0])
        self.refresh()

    def load_more(self, data: Mapping[str, Any]) -> None:
        """Merge a larger version of the loaded tree in place."""
        self.root.load_json(data)
        self.refresh()

    def init_game(self, game_node: GameNode) -> None:
        """Set up board, rules and cursor for *game_node*."""
        self.game_root = game_node
        size = self._board_size(game_node)
        if self._renderer is not None:
            self._renderer.set_size(size)
        self.board = BoardState(size)
        self.rules = self._rules_factory(self.board)
        self.cursor = GameCursor(game_node)
        self.info = NodeInfo()
        self.reset_cursor(fast=True)
        _LOGGER.debug("Game initialised, %d moves on the main line", self.cursor.get_max_move_count())
        self.move_number = 0
        self.find_variations()

    def _board_size(self, game_node: GameNode) -> int:
        raw = game_node.get("SZ")
        if raw is None:
            return self.settings.default_board_size
        text = as_list(raw)[0]
        try:
            size = int(split_compound(text)[0])
        except ValueError:
            _LOGGER.warning("Invalid board size %r, using default", text)
            return self.settings.default_board_size
        if not (1 <= size <= MAX_BOARD_SIZE):
            _LOGGER.warning("Unsupported board size %d, using default", size)
            return self.settings.default_board_size
        return size

    # ── Transient state ──────────────────────────────────────────────────

    def reset_label_counter(self) -> None:
        self.label_number = 1
        self.label_letter = "A"

    def reset_current_color(self) -> None:
        """Black starts, unless the game has a handicap of two or more."""
        self.current_color = Stone.BLACK
        raw = self.game_root.get("HA")
        if raw is None:
            return
        try:
            handicap = int(as_list(raw)[0])
        except ValueError:
            _LOGGER.warning("Invalid handicap %r", raw)
            return
        if handicap > 1:
            self.current_color = Stone.WHITE

    # ── Navigation ───────────────────────────────────────────────────────

    def reset_cursor(self, fast: bool = False) -> None:
        """Rebuild the board history from scratch at the game root."""
        self.board.reset()
        self.reset_current_color()
        self.cursor.node = self.game_root
        self.move_number = _move_weight(self.game_root)
        self.refresh(fast)

    def refresh(self, fast: bool = False) -> None:
        """Re-execute the current node on top of its parent's frame."""
        self.move_number -= _move_weight(self.cursor.node)
        self.board.revert(1)
        self.exec_node(fast)

    def go_to(self, path: Path) -> None:
        """Jump to *path* (move count, move list or branch path)."""
        game = self._game_for_path(path)
        if game is not self.game_root:
            self.init_game(game)
        self.board.reset()
        self.reset_current_color()
        self.reset_label_counter()
        self.move_number = 0
        self.cursor.go_to(path, on_step=self._fast_step)
        if self.cursor.node.parent is None:
            _LOGGER.warning("Path %r did not resolve to a game", path)
            self.reset_cursor()
            return
        self.refresh()

    def _game_for_path(self, path: Path) -> GameNode:
        if (
            isinstance(path, Sequence)
            and not isinstance(path, str)
            and len(path) > 1
            and all(isinstance(item, int) for item in path)
        ):
            idx = path[0]
            assert isinstance(idx, int)
            if 0 <= idx < len(self.root.children):
                return self.root.children[idx]
        return self.game_root

    def _fast_step(self) -> None:
        self.exec_node(fast=True)
        self.reset_label_counter()

    def variation(self, index: int | None = None, fast: bool = False) -> bool:
        """Step into child *index* (default: the preferred one)."""
        if not self.cursor.next(index):
            return False
        self.exec_node(fast)
        self.reset_label_counter()
        return True

    def forward(self, fast: bool = False) -> bool:
        return self.variation(None, fast)

    def back(self, fast: bool = False) -> bool:
        left = self.cursor.node
        if not self.cursor.previous():
            return False
        self.move_number -= _move_weight(left)
        self.board.revert(1)
        self.refresh(fast)
        self.reset_label_counter()
        return True

    def first(self) -> None:
        if not self.cursor.has_previous():
            return
        self.reset_cursor()

    def last(self) -> None:
        if not self.cursor.has_next():
            return
        while self.variation(None, fast=True):
            pass
        self.refresh()

    def next_sibling(self) -> bool:
        """Switch to the following variation of the current node."""
        target = self.cursor.next_sibling()
        if target is None or not self.back(fast=True):
            return False
        return self.variation(target[1])

    def pass_move(self) -> None:
        """Follow an existing pass variation or create one."""
        for var in self.variations:
            if var.node.has_move() and is_pass(var.move):
                self.variation(var.index)
                return
        self.create_move(PASS_TOKEN)

    def create_move(self, coord: str) -> None:
        """Add an unplayed move for the current color and go to it."""
        node = GameNode(properties={self.current_color.sgf: coord}, ids=self.root.ids)
        idx = self.cursor.node.append_child(node)
        self.variation(idx)

    # ── Node execution ───────────────────────────────────────────────────

    def exec_node(self, fast: bool = False) -> None:
        """Apply every property of the node under the cursor and commit.

        A *fast* pass neither clears nor synthesizes markers and does not
        render; it still commits so history stays in step with the cursor.
        """
        node = self.cursor.node
        if not fast:
            self.board.clear_markers()
            self.info.clear_node_text()
            self.move_number = self.cursor.get_move_number()
        else:
            self.move_number += _move_weight(node)

        if self.move_number < 1:
            self.reset_current_color()

        for key, value in node.get_properties().items():
            code = parse_code(key)
            if code is None:
                _LOGGER.debug("Keeping unrecognised property %s verbatim", key)
                continue
            handler = self._handlers.get(code.kind)
            if handler is not None:
                handler(as_list(value), code, fast)

        if not fast:
            if self.settings.show_sibling_markers:
                self._mark_siblings(node)
            self.find_variations()
        self.board.commit()
        if not fast:
            self.render()
            self._emit_node(node)

    def render(self) -> None:
        if self._renderer is not None:
            self.board.render(self._renderer)

    def _mark_siblings(self, node: GameNode) -> None:
        current = node.get_move()
        for sibling in node.get_siblings():
            move = sibling.get_move()
            if move == current:
                continue
            color = sibling.get_color()
            pt = sgf_to_point(move)
            if color is None or pt is None or not self._on_board(pt):
                continue
            self.board.add_marker(pt, MarkerType.sibling(color))

    def find_variations(self) -> None:
        self.variations = self.get_variations()

    def get_variations(self) -> list[Variation]:
        return [
            Variation(move=child.get_move(), index=idx, node=child)
            for idx, child in enumerate(self.cursor.node.children)
        ]

    def _on_board(self, pt: Point) -> bool:
        return pt.x < self.board.size and pt.y < self.board.size

    def _point(self, coord: str) -> Point | None:
        pt = sgf_to_point(coord)
        if pt is None or not self._on_board(pt):
            _LOGGER.debug("Skipping coordinate %r", coord)
            return None
        return pt

    # ── Property handlers ────────────────────────────────────────────────

    def _play_move(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        """Play a stone and let the rule engine resolve captures."""
        coord = values[0] if values else ""
        color = Stone.from_sgf(code.value)
        self.current_color = color.opposite

        if is_pass(coord):
            if not fast:
                self.info.notes.append(Note(NoteKind.PASS, color))
            return
        if coord == RESIGN_TOKEN:
            if not fast:
                self.info.notes.append(Note(NoteKind.RESIGN, color))
            return

        pt = self._point(coord)
        if pt is None:
            return
        self.board.add_stone(pt, color)
        self.rules.apply(pt, color)
        if not fast:
            self.board.add_marker(pt, MarkerType.CURRENT)

    def _set_move_number(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        try:
            self.move_number = int(values[0])
        except (IndexError, ValueError):
            _LOGGER.warning("Invalid move number %r", values)

    def _set_color(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        color = Stone.from_sgf(values[0]) if values else Stone.EMPTY
        if color == Stone.EMPTY:
            _LOGGER.warning("Invalid player to move %r", values)
            return
        self.current_color = color

    def _add_stones(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        """Place setup stones directly, without asking the rule engine."""
        stone = _SETUP_STONES[code]
        for token in expand_compressed_points(values):
            if split_compound(token)[1] is not None:
                continue  # rectangle token, its points follow expanded
            pt = self._point(token)
            if pt is not None:
                self.board.add_stone(pt, stone)

    def _add_markers(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        kind = _MARKUP_KINDS[code]
        if code in (PropertyCode.LN, PropertyCode.AR):
            for value in values:
                head, tail = split_compound(value)
                pt = self._point(head)
                target = self._point(tail) if tail is not None else None
                if pt is not None and target is not None:
                    self.board.add_marker(pt, kind, target=target)
            return

        for token in expand_compressed_points(values):
            head, tail = split_compound(token)
            if code == PropertyCode.LB:
                pt = self._point(head)
                if pt is not None:
                    self.board.add_marker(pt, kind, label=tail or "")
                continue
            if tail is not None:
                continue
            pt = self._point(head)
            if pt is not None:
                self.board.add_marker(pt, kind)

    def _show_comments(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        if fast:
            return
        self.info.comments.extend(v.lstrip() for v in values if v.strip())

    def _show_annotation(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        if fast:
            return
        for value in values:
            self.info.annotations.append(Annotation(code, value))

    def _show_time(self, values: list[str], code: PropertyCode, fast: bool) -> None:
        if fast or not values:
            return
        value = values[0]
        black = code in (PropertyCode.BL, PropertyCode.OB)
        if code in (PropertyCode.BL, PropertyCode.WL):
            try:
                seconds = float(value)
            except ValueError:
                _LOGGER.warning("Invalid time left %r", value)
                return
            mins, secs = divmod(round(seconds), 60)
            text = f"{mins}:{secs:02d}"
        else:
            text = (self.info.time_black if black else self.info.time_white) + f" ({value})"
        if black:
            self.info.time_black = text
        else:
            self.info.time_white = text

    # ── Editing ──────────────────────────────────────────────────────────

    def play(self, point: Point) -> bool:
        """Play *point* for the current color, reusing an existing variation.

        An illegal move leaves board, history and tree untouched.
        """
        coord = point_to_sgf(point, self.board.size)
        if coord is None:
            return False
        color = self.current_color
        if not self.rules.check_legal(point, color):
            _LOGGER.info("Illegal move %s for %s", coord, color)
            for cb in self.events.on_illegal_move:
                cb(point, color)
            return False
        next_moves = self.cursor.next_moves()
        if coord in next_moves:
            self.variation(next_moves[coord])
        else:
            self.create_move(coord)
        return True

    def mark(self, point: Point, tool: MarkTool, label: str | None = None) -> bool:
        """Toggle a stone or markup on the current node.

        Returns ``True`` when the node became empty and was pruned.
        """
        coord = point_to_sgf(point, self.board.size)
        if coord is None:
            return False
        node = self.cursor.node
        prop: str | None = None

        if tool in (MarkTool.ADD_BLACK, MarkTool.ADD_WHITE):
            stone = self.board.get_stone(point)
            deleted = node.empty_point(coord)
            if stone != Stone.BLACK and tool == MarkTool.ADD_BLACK:
                prop = "AB"
            elif stone != Stone.WHITE and tool == MarkTool.ADD_WHITE:
                prop = "AW"
            elif stone != Stone.EMPTY and deleted is None:
                prop = "AE"
        elif tool == MarkTool.CLEAR:
            node.delete_property_value(MARKUP_TOGGLE_CODES, re.compile("^" + re.escape(coord)))
        else:
            prop = _TOOL_CODES[tool]
            if tool == MarkTool.NUMBER:
                coord = f"{coord}:{self.label_number}"
                self.label_number += 1
            elif tool == MarkTool.LETTER:
                coord = f"{coord}:{self.label_letter}"
                self.label_letter = chr(ord(self.label_letter) + 1)
            elif tool == MarkTool.LABEL:
                coord = f"{coord}:{label or ''}"
            if node.has_property_value(prop, coord):
                node.delete_property_value(prop, coord)
                prop = None

        if prop is not None:
            node.push_property(prop, coord)

        pruned = self.check_for_empty_node_removal()
        self.refresh()
        return pruned

    def check_for_empty_node_removal(self) -> bool:
        """Prune the current node if it lost every property and removal is
        confirmed by the injected callback."""
        node = self.cursor.node
        if node.get_properties():
            return False
        if self._confirm_prune is None or not self._confirm_prune():
            return False
        if not self.back():
            return False
        parent = self.cursor.node
        index = parent.remove_child(node)
        if index and parent.preferred_child >= index:
            parent.preferred_child -= 1
        self.find_variations()
        _LOGGER.info("Pruned empty node %d", node.id)
        for cb in self.events.on_node_pruned:
            cb(node)
        return True

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def node(self) -> GameNode:
        return self.cursor.node

    def game_description(self) -> str:
        root = self.game_root
        desc = _scalar(root.get("GN"))
        white, black = _scalar(root.get("PW")), _scalar(root.get("PB"))
        if white and black:
            wr = _scalar(root.get("WR"))
            br = _scalar(root.get("BR"))
            players = f"{white}{' ' + wr if wr else ''} vs {black}{' ' + br if br else ''}"
            desc = f"{desc} - {players}" if desc else players
        return desc

    def to_sgf(self) -> str:
        """The whole collection as SGF text."""
        return "".join(game.to_sgf() for game in self.root.children)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_node(self, node: GameNode) -> None:
        for cb in self.events.on_node:
            cb(node, self.info)


def _move_weight(node: GameNode) -> int:
    return 1 if node.has_move() else 0


def _scalar(value: str | list[str] | None) -> str:
    if value is None:
        return ""
    return as_list(value)[0]
