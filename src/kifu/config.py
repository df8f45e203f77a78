"""User-configurable settings shared by the engine, viewer and CLI."""

from __future__ import annotations

from dataclasses import dataclass

from kifu.core.types import MAX_BOARD_SIZE


@dataclass
class ReplaySettings:
    """All user-configurable settings."""

    # General
    language: str = "English"
    log_level: str = "WARNING"

    # Board
    board_theme: str = "Kaya"
    show_coordinates: bool = True
    show_sibling_markers: bool = True  # mark alternative continuations
    default_board_size: int = MAX_BOARD_SIZE  # records without SZ
