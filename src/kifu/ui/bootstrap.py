"""Command line and Qt application bootstrap helpers."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Mapping
from functools import partial
from pathlib import Path as FilePath
from typing import Any, TextIO

from kifu.config import ReplaySettings
from kifu.core.cursor import Path
from kifu.ui.i18n import LANGUAGES, set_language, t

_LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def parse_path(text: str) -> Path:
    """``"12"`` -> 12, ``"0,2,5"`` -> branch path, ``"dd,pp"`` -> moves."""
    text = text.strip()
    if text.isdigit():
        return int(text)
    items = [item.strip() for item in text.split(",") if item.strip()]
    if items and all(item.isdigit() for item in items):
        return [int(item) for item in items]
    return items


def load_record(path: FilePath) -> dict[str, Any]:
    """Read a parser property tree saved as JSON."""
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError("record must be a JSON object")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kifu",
        description="Replay a Go game record stored as a JSON property tree.",
    )
    parser.add_argument("record", type=FilePath, help="property tree JSON file")
    parser.add_argument(
        "--goto",
        metavar="PATH",
        help="move count (12), branch path (0,2,5) or moves (dd,pp)",
    )
    parser.add_argument("--ascii", action="store_true", help="print the position and exit")
    parser.add_argument("--sgf", action="store_true", help="print the record as SGF and exit")
    parser.add_argument("--language", choices=LANGUAGES, default=ReplaySettings.language)
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=ReplaySettings.log_level,
        type=str.upper,
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> ReplaySettings:
    """Overlay command line flags onto the default settings."""
    return ReplaySettings(language=args.language, log_level=args.log_level)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_text(
    settings: ReplaySettings,
    data: Mapping[str, Any],
    goto: Path | None,
    *,
    ascii_board: bool,
    sgf: bool,
    out: TextIO,
) -> None:
    from kifu.game.replay import ReplayEngine
    from kifu.ui.ascii import AsciiRenderer
    from kifu.ui.node_text import describe_node, status_text

    renderer = AsciiRenderer(settings.default_board_size)
    engine = ReplayEngine(renderer=renderer, settings=settings)
    engine.load_tree(data)
    if goto is not None:
        engine.go_to(goto)

    emit = partial(print, file=out)
    if sgf:
        emit(engine.to_sgf())
    if ascii_board:
        description = engine.game_description()
        if description:
            emit(description)
        renderer.show(header=status_text(engine), out=emit)
        for line in describe_node(engine.info):
            emit(line)


def run_application(
    settings: ReplaySettings,
    data: Mapping[str, Any],
    goto: Path | None = None,
    name: str = "",
    argv: list[str] | None = None,
) -> int:
    """Create and run the viewer window."""
    from PyQt6.QtWidgets import QApplication

    from kifu.ui.theme import APP_STYLE
    from kifu.ui.viewer import ViewerWindow

    app = QApplication(sys.argv if argv is None else argv)
    app.setApplicationName("Kifu")
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)

    window = ViewerWindow(settings)
    window.load_tree(data, name)
    if goto is not None:
        window.go_to(goto)
    window.show()

    return app.exec()


def run_cli(argv: list[str] | None = None, out: TextIO | None = None) -> int:
    """Entry point shared by ``kifu`` and ``python -m kifu.app``."""
    args = build_parser().parse_args(argv)
    settings = settings_from_args(args)
    _configure_logging(settings.log_level)
    set_language(settings.language)

    try:
        data = load_record(args.record)
    except (OSError, ValueError) as exc:
        _LOGGER.error("Failed to load %s: %s", args.record, exc)
        print(t().cli_cannot_read.format(path=args.record, exc=exc), file=sys.stderr)
        return 1

    goto = parse_path(args.goto) if args.goto is not None else None
    if args.ascii or args.sgf:
        _print_text(
            settings,
            data,
            goto,
            ascii_board=args.ascii,
            sgf=args.sgf,
            out=out if out is not None else sys.stdout,
        )
        return 0
    return run_application(settings, data, goto, name=args.record.name)
