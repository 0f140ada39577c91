"""Tests covering the command line entry point."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from mdselect import app
from mdselect.core.ranges import Position
from mdselect.editor.document_model import TextDocument
from mdselect.services.settings import SmartSelectSettings


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(app, "configure_logging", lambda *args, **kwargs: None)


@pytest.fixture
def markdown_file(tmp_path: Path) -> Path:
    target = tmp_path / "notes.md"
    target.write_text("# Title\n\nBody text.\n", encoding="utf-8")
    return target


@pytest.fixture
def settings_path(tmp_path: Path) -> str:
    return str(tmp_path / "settings.json")


def test_json_output_lists_chain_per_position(markdown_file: Path, settings_path: str) -> None:
    buffer = io.StringIO()

    exit_code = app.main(
        [str(markdown_file), "-p", "2:1", "-p", "0:0", "--json", "--settings-path", settings_path],
        stdout=buffer,
    )

    assert exit_code == 0
    payload = json.loads(buffer.getvalue())
    assert payload[0]["position"] == {"line": 2, "character": 1}
    assert [(item["start"]["line"], item["end"]["line"]) for item in payload[0]["ranges"]] == [
        (2, 2),
        (1, 3),
        (0, 3),
    ]
    assert payload[0]["ranges"][0]["end"]["character"] == 10
    assert payload[1]["ranges"] == [{"start": {"line": 0, "character": 0}, "end": {"line": 3, "character": 0}}]


def test_text_output_marks_positions_without_structure(tmp_path: Path, settings_path: str) -> None:
    target = tmp_path / "blank.md"
    target.write_text("text\n\n\n", encoding="utf-8")
    buffer = io.StringIO()

    exit_code = app.main([str(target), "-p", "0:0", "-p", "2:0", "--settings-path", settings_path], stdout=buffer)

    assert exit_code == 0
    assert buffer.getvalue().splitlines() == [
        "0:0",
        "  [0] 0:0-0:4",
        "2:0",
        "  (no enclosing structure)",
    ]


def test_show_text_includes_snippets(markdown_file: Path, settings_path: str) -> None:
    buffer = io.StringIO()

    app.main([str(markdown_file), "-p", "2:0", "--show-text", "--settings-path", settings_path], stdout=buffer)

    assert "'Body text.'" in buffer.getvalue()
    assert "'# Title'" in buffer.getvalue()


def test_missing_file_is_a_usage_error(tmp_path: Path, settings_path: str, capsys) -> None:
    exit_code = app.main([str(tmp_path / "missing.md"), "--settings-path", settings_path], stdout=io.StringIO())

    assert exit_code == 2
    assert "missing.md" in capsys.readouterr().err


def test_missing_path_argument_is_a_usage_error(settings_path: str) -> None:
    assert app.main(["--settings-path", settings_path], stdout=io.StringIO()) == 2


def test_bad_position_is_a_usage_error(markdown_file: Path, settings_path: str) -> None:
    exit_code = app.main([str(markdown_file), "-p", "two:three", "--settings-path", settings_path], stdout=io.StringIO())

    assert exit_code == 2


def test_dump_settings_reports_overrides(settings_path: str) -> None:
    buffer = io.StringIO()

    exit_code = app.main(
        ["--dump-settings", "--set", "list_depth_cap=5", "--settings-path", settings_path],
        stdout=buffer,
    )

    assert exit_code == 0
    payload = json.loads(buffer.getvalue())
    assert payload["settings"]["list_depth_cap"] == 5
    assert payload["meta"]["path"] == settings_path
    assert payload["meta"]["cli_overrides"] == ["list_depth_cap"]


def test_unknown_override_is_rejected(settings_path: str, capsys) -> None:
    exit_code = app.main(["--dump-settings", "--set", "colour=blue", "--settings-path", settings_path])

    assert exit_code == 2
    assert "Unknown setting" in capsys.readouterr().err


def test_invalid_override_value_is_rejected(settings_path: str) -> None:
    assert app.main(["--dump-settings", "--set", "list_depth_cap=0", "--settings-path", settings_path]) == 2


def test_settings_path_can_come_from_environment(
    monkeypatch: pytest.MonkeyPatch, settings_path: str
) -> None:
    Path(settings_path).write_text(json.dumps({"list_depth_cap": 2}), encoding="utf-8")
    monkeypatch.setenv("MDSELECT_SETTINGS_PATH", settings_path)
    buffer = io.StringIO()

    app.main(["--dump-settings"], stdout=buffer)

    payload = json.loads(buffer.getvalue())
    assert payload["settings"]["list_depth_cap"] == 2
    assert payload["meta"]["environment_variables"] == ["MDSELECT_SETTINGS_PATH"]


def test_compute_chains_keeps_positions_without_structure() -> None:
    document = TextDocument(text="para\n\n")

    results = app.compute_chains(document, [Position(0, 0), Position(1, 0)], SmartSelectSettings())

    assert [position for position, _ in results] == [Position(0, 0), Position(1, 0)]
    assert results[0][1] is not None
    assert results[1][1] is None
