"""Tests for the command line front end."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any

import pytest

from kifu.ui.ascii import BLACK_STONE, WHITE_STONE
from kifu.ui.bootstrap import build_parser, load_record, parse_path, run_cli, settings_from_args


@pytest.fixture
def record_file(tmp_path: Path, sample_record: dict[str, Any]) -> Path:
    path = tmp_path / "sample.json"
    path.write_text(json.dumps(sample_record), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("12", 12),
        ("0,2,5", [0, 2, 5]),
        ("dd, pp", ["dd", "pp"]),
        ("", []),
    ],
)
def test_parse_path(text: str, expected: object) -> None:
    assert parse_path(text) == expected


def test_settings_from_args() -> None:
    args = build_parser().parse_args(["x.json", "--language", "Russian", "--log-level", "debug"])
    settings = settings_from_args(args)
    assert settings.language == "Russian"
    assert settings.log_level == "DEBUG"
    assert settings.show_sibling_markers


def test_ascii_output(record_file: Path) -> None:
    out = io.StringIO()
    code = run_cli([str(record_file), "--ascii", "--goto", "2"], out=out)
    text = out.getvalue()
    assert code == 0
    assert text.splitlines()[0] == "Sample - Inoue vs Honinbo"
    assert "Move 2" in text
    assert text.count(BLACK_STONE) == 1
    assert text.count(WHITE_STONE) == 1


def test_ascii_shows_comments(record_file: Path) -> None:
    out = io.StringIO()
    run_cli([str(record_file), "--ascii", "--goto", "ee"], out=out)
    assert "Tengen opening" in out.getvalue()


def test_sgf_output(record_file: Path) -> None:
    out = io.StringIO()
    assert run_cli([str(record_file), "--sgf"], out=out) == 0
    assert out.getvalue().strip() == (
        "(;GM[1]SZ[9]PB[Honinbo]PW[Inoue]GN[Sample]"
        ";B[ee]C[Tengen opening];W[cc](;B[gg]TR[cc][ee])(;B[gc];W[gg]))"
    )


def test_unreadable_file_exits_with_error(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    missing = tmp_path / "missing.json"
    assert run_cli([str(missing), "--ascii"]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_non_object_record_rejected(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_record(path)
    assert run_cli([str(path), "--sgf"]) == 1
