"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _reset_language() -> Iterator[None]:
    """Reset shared i18n state between tests."""
    from kifu.ui.i18n import set_language

    set_language("English")
    yield
    set_language("English")


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()


# ── SGF reading for round-trip tests ─────────────────────────────────────────


def _read_sgf(text: str) -> dict[str, Any]:
    """Tiny SGF reader producing the property tree shape the loader accepts.

    Only what the serializer emits is supported: no whitespace handling
    inside property identifiers and no soft line breaks.
    """
    root: dict[str, Any] = {}
    current = root
    stack: list[dict[str, Any]] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "(":
            stack.append(current)
            i += 1
        elif ch == ")":
            current = stack.pop()
            i += 1
        elif ch == ";":
            node: dict[str, Any] = {}
            current.setdefault("_children", []).append(node)
            current = node
            i += 1
        elif ch.isupper():
            start = i
            while i < n and text[i].isupper():
                i += 1
            key = text[start:i]
            values: list[str] = []
            while i < n and text[i] == "[":
                i += 1
                buf: list[str] = []
                while text[i] != "]":
                    if text[i] == "\\":
                        i += 1
                    buf.append(text[i])
                    i += 1
                i += 1
                values.append("".join(buf))
            current[key] = values[0] if len(values) == 1 else values
        else:
            i += 1
    return root


@pytest.fixture
def read_sgf() -> Callable[[str], dict[str, Any]]:
    return _read_sgf


@pytest.fixture
def sample_record() -> dict[str, Any]:
    """A 9x9 game with a branch after the second move.

    Main line: B ee, W cc, B gg; variation at move 3: B gc, W gg.
    """
    return {
        "_children": [
            {
                "GM": "1",
                "SZ": "9",
                "PB": "Honinbo",
                "PW": "Inoue",
                "GN": "Sample",
                "_children": [
                    {
                        "B": "ee",
                        "C": "Tengen opening",
                        "_children": [
                            {
                                "W": "cc",
                                "_children": [
                                    {"B": "gg", "TR": ["cc", "ee"]},
                                    {"B": "gc", "_children": [{"W": "gg"}]},
                                ],
                            }
                        ],
                    }
                ],
            }
        ]
    }
