"""Turns engine state into the localized text shown beside the board."""

from __future__ import annotations

from kifu.core.enums import Stone
from kifu.core.properties import PropertyCode
from kifu.game.replay import Annotation, NodeInfo, NoteKind, ReplayEngine
from kifu.ui.i18n import Strings, t


def color_name(color: Stone) -> str:
    s = t()
    return s.color_white if color == Stone.WHITE else s.color_black


def _annotation_text(s: Strings, ann: Annotation) -> str | None:
    strong = ann.emphasized
    code = ann.code
    if code == PropertyCode.GB:
        return s.ann_very_good_black if strong else s.ann_good_black
    if code == PropertyCode.GW:
        return s.ann_very_good_white if strong else s.ann_good_white
    if code == PropertyCode.DM:
        return s.ann_very_even if strong else s.ann_even
    if code == PropertyCode.UC:
        return s.ann_very_unclear if strong else s.ann_unclear
    if code == PropertyCode.BM:
        return s.ann_very_bad_move if strong else s.ann_bad_move
    if code == PropertyCode.TE:
        return s.ann_very_tesuji if strong else s.ann_tesuji
    if code == PropertyCode.HO:
        return s.ann_hotspot
    if code == PropertyCode.DO:
        return s.ann_doubtful
    if code == PropertyCode.IT:
        return s.ann_interesting
    if code == PropertyCode.N:
        return s.ann_node_name.format(value=ann.value)
    if code == PropertyCode.V:
        return s.ann_value.format(value=ann.value)
    return None


def describe_node(info: NodeInfo) -> list[str]:
    """Notes, annotations, clocks and comments, in display order."""
    s = t()
    lines: list[str] = []
    for note in info.notes:
        template = s.passed if note.kind == NoteKind.PASS else s.resigned
        lines.append(template.format(color=color_name(note.color)))
    for ann in info.annotations:
        text = _annotation_text(s, ann)
        if text is not None:
            lines.append(text)
    if info.time_black:
        lines.append(s.time_left.format(color=s.color_black, time=info.time_black))
    if info.time_white:
        lines.append(s.time_left.format(color=s.color_white, time=info.time_white))
    lines.extend(info.comments)
    return lines


def status_text(engine: ReplayEngine) -> str:
    """Move number, side to play and variation count."""
    s = t()
    parts = [
        s.status_move.format(number=engine.move_number),
        s.status_to_play.format(color=color_name(engine.current_color)),
    ]
    if len(engine.variations) > 1:
        parts.append(s.status_variations.format(count=len(engine.variations)))
    return " | ".join(parts)
