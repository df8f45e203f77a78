"""Internationalisation strings for the Kifu viewer and CLI.

Usage::

    from kifu.ui.i18n import t, set_language

    set_language("Russian")
    print(t().btn_forward)        # "Вперёд"
    print(t().passed.format(color=t().color_black))
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Main window ──────────────────────────────────────────────────────
    window_title: str
    comments_header: str

    status_ready: str
    status_loaded: str  # "Loaded {name}"
    status_move: str  # "Move {number}"
    status_variations: str  # "{count} variations"
    status_to_play: str  # "{color} to play"
    status_pruned: str
    status_illegal: str  # "Illegal move at {coord}"

    color_black: str
    color_white: str

    # ── Node notes ───────────────────────────────────────────────────────
    passed: str  # "{color} passed"
    resigned: str  # "{color} resigned"
    time_left: str  # "{color}: {time}"

    # Annotations (GB/GW/DM/UC/HO/BM/DO/IT/TE/N/V)
    ann_good_black: str
    ann_very_good_black: str
    ann_good_white: str
    ann_very_good_white: str
    ann_even: str
    ann_very_even: str
    ann_unclear: str
    ann_very_unclear: str
    ann_hotspot: str
    ann_bad_move: str
    ann_very_bad_move: str
    ann_doubtful: str
    ann_interesting: str
    ann_tesuji: str
    ann_very_tesuji: str
    ann_node_name: str  # "Position: {value}"
    ann_value: str  # "Estimated score: {value}"

    # ── Navigation ───────────────────────────────────────────────────────
    btn_first: str
    btn_back: str
    btn_forward: str
    btn_last: str
    btn_next_variation: str

    # ── CLI ──────────────────────────────────────────────────────────────
    cli_cannot_read: str  # "Cannot read {path}: {exc}"


# ── Built-in locales ─────────────────────────────────────────────────────────

_EN = Strings(
    window_title="Kifu",
    comments_header="Comments",
    status_ready="Ready",
    status_loaded="Loaded {name}",
    status_move="Move {number}",
    status_variations="{count} variations",
    status_to_play="{color} to play",
    status_pruned="Empty node removed",
    status_illegal="Illegal move at {coord}",
    color_black="Black",
    color_white="White",
    passed="{color} passed",
    resigned="{color} resigned",
    time_left="{color}: {time}",
    ann_good_black="Good for Black",
    ann_very_good_black="Very good for Black",
    ann_good_white="Good for White",
    ann_very_good_white="Very good for White",
    ann_even="Even position",
    ann_very_even="Very even position",
    ann_unclear="Unclear position",
    ann_very_unclear="Very unclear position",
    ann_hotspot="Hotspot",
    ann_bad_move="Bad move",
    ann_very_bad_move="Very bad move",
    ann_doubtful="Doubtful move",
    ann_interesting="Interesting move",
    ann_tesuji="Tesuji",
    ann_very_tesuji="Brilliant tesuji",
    ann_node_name="Position: {value}",
    ann_value="Estimated score: {value}",
    btn_first="⏮ First",
    btn_back="◀ Back",
    btn_forward="Forward ▶",
    btn_last="Last ⏭",
    btn_next_variation="Next variation",
    cli_cannot_read="Cannot read {path}: {exc}",
)

_RU = Strings(
    window_title="Kifu",
    comments_header="Комментарии",
    status_ready="Готово",
    status_loaded="Загружено: {name}",
    status_move="Ход {number}",
    status_variations="Вариантов: {count}",
    status_to_play="Ход: {color}",
    status_pruned="Пустой узел удалён",
    status_illegal="Недопустимый ход: {coord}",
    color_black="Чёрные",
    color_white="Белые",
    passed="{color}: пас",
    resigned="{color} сдались",
    time_left="{color}: {time}",
    ann_good_black="Хорошо для чёрных",
    ann_very_good_black="Очень хорошо для чёрных",
    ann_good_white="Хорошо для белых",
    ann_very_good_white="Очень хорошо для белых",
    ann_even="Равная позиция",
    ann_very_even="Совершенно равная позиция",
    ann_unclear="Неясная позиция",
    ann_very_unclear="Очень неясная позиция",
    ann_hotspot="Ключевой момент",
    ann_bad_move="Плохой ход",
    ann_very_bad_move="Очень плохой ход",
    ann_doubtful="Сомнительный ход",
    ann_interesting="Интересный ход",
    ann_tesuji="Тесудзи",
    ann_very_tesuji="Блестящее тесудзи",
    ann_node_name="Позиция: {value}",
    ann_value="Оценка: {value}",
    btn_first="⏮ В начало",
    btn_back="◀ Назад",
    btn_forward="Вперёд ▶",
    btn_last="В конец ⏭",
    btn_next_variation="Следующий вариант",
    cli_cannot_read="Не удалось прочитать {path}: {exc}",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
