"""CLI batch run integration tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest
from api_bindgen.cli import main

SAMPLES = Path(__file__).resolve().parents[3] / "samples"


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    target = tmp_path / "schemas"
    target.mkdir()
    for sample in ("app.json", "clipboard.json"):
        shutil.copy(SAMPLES / sample, target / sample)
    return target


def test_single_file_is_written_to_the_output_directory(tmp_path: Path) -> None:
    out_dir = tmp_path / "gen"

    exit_code = main([str(SAMPLES / "app.json"), "-o", str(out_dir)])

    assert exit_code == 0
    code = (out_dir / "app.go").read_text(encoding="utf-8")
    assert code.startswith("// Code generated by api-bindgen from ")
    assert "package electron\n" in code
    assert 'EvtAppBeforeQuit = "before-quit"' in code
    assert "type AppModule struct {" in code
    assert "type BrowserWindow struct {" in code
    assert "type Rectangle struct {" in code
    assert "GetAllWindows" not in code


def test_directory_inputs_produce_one_file_per_schema(schema_dir: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "gen"

    exit_code = main([str(schema_dir), "-o", str(out_dir)])

    assert exit_code == 0
    assert sorted(path.name for path in out_dir.iterdir()) == ["app.go", "clipboard.go"]
    clipboard = (out_dir / "clipboard.go").read_text(encoding="utf-8")
    assert "type ClipboardModule struct {" in clipboard
    assert "type ClipboardReadTextType string" in clipboard


def test_unreadable_file_fails_the_run_but_not_the_batch(schema_dir: Path, tmp_path: Path) -> None:
    (schema_dir / "broken.json").write_text("{not json", encoding="utf-8")
    (schema_dir / "object.json").write_text(json.dumps({"name": "app"}), encoding="utf-8")
    out_dir = tmp_path / "gen"

    exit_code = main([str(schema_dir), "-o", str(out_dir)])

    assert exit_code == 1
    assert (out_dir / "app.go").exists()
    assert (out_dir / "clipboard.go").exists()
    assert not (out_dir / "broken.go").exists()
    assert not (out_dir / "object.go").exists()


def test_per_block_output(tmp_path: Path) -> None:
    out_dir = tmp_path / "gen"

    exit_code = main([str(SAMPLES / "app.json"), "-o", str(out_dir), "--per-block"])

    assert exit_code == 0
    assert "package appmodule\n" in (out_dir / "appmodule" / "appmodule.go").read_text(encoding="utf-8")
    assert (out_dir / "browserwindow" / "browserwindow.go").exists()
    assert (out_dir / "rectangle" / "rectangle.go").exists()


def test_process_filter(tmp_path: Path) -> None:
    out_dir = tmp_path / "gen"

    exit_code = main([str(SAMPLES / "app.json"), "-o", str(out_dir), "--process", "renderer"])

    assert exit_code == 0
    code = (out_dir / "app.go").read_text(encoding="utf-8")
    assert "AppModule" not in code
    assert "type BrowserWindow struct" not in code
    assert "type Rectangle struct {" in code


def test_generation_flags(tmp_path: Path) -> None:
    out_dir = tmp_path / "gen"

    exit_code = main(
        [
            str(SAMPLES / "app.json"),
            "-o",
            str(out_dir),
            "--package",
            "bindings",
            "--no-tags",
            "--no-comments",
            "--host-handle",
            "",
        ]
    )

    assert exit_code == 0
    code = (out_dir / "app.go").read_text(encoding="utf-8")
    assert "package bindings\n" in code
    assert "`js:" not in code
    assert "// Version:" not in code
    assert "type Rectangle struct {\n\t*js.Object\n" in code


def test_strict_events_fail_the_block_only(tmp_path: Path) -> None:
    schema = tmp_path / "events.json"
    schema.write_text(
        json.dumps(
            [
                {"name": "app", "type": "Module", "events": [{"name": "bad event"}]},
                {"name": "Rectangle", "type": "Structure"},
            ]
        ),
        encoding="utf-8",
    )
    out_dir = tmp_path / "gen"

    exit_code = main([str(schema), "-o", str(out_dir), "--strict-events"])

    assert exit_code == 0
    code = (out_dir / "events.go").read_text(encoding="utf-8")
    assert "AppModule" not in code
    assert "type Rectangle struct {" in code


def test_single_input_prints_to_stdout(capsys) -> None:
    exit_code = main([str(SAMPLES / "clipboard.json")])

    assert exit_code == 0
    assert "ClipboardModule" in capsys.readouterr().out


def test_missing_input_and_missing_output_directory(tmp_path: Path, schema_dir: Path) -> None:
    assert main([str(tmp_path / "missing.json"), "-o", str(tmp_path)]) == 1
    assert main([str(schema_dir)]) == 1
    assert main([]) == 1


def test_empty_directory_is_a_failure(tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()

    assert main([str(empty), "-o", str(tmp_path / "gen")]) == 1


def test_informational_commands() -> None:
    assert main(["--list-languages"]) == 0
    assert main(["--language-info", "golang"]) == 0
    assert main(["--language-info", "cobol"]) == 1
    assert main(["-l", "cobol", str(SAMPLES / "app.json")]) == 1


def test_write_config(tmp_path: Path) -> None:
    target = tmp_path / "bindgen.json"

    exit_code = main(["--write-config", str(target), "--package", "bindings", "--strict-events"])

    assert exit_code == 0
    saved = json.loads(target.read_text(encoding="utf-8"))
    assert saved["package_name"] == "bindings"
    assert saved["event_literal_mode"] == "strict"
    assert saved["custom"]["int_type"] == "int64"


def test_config_file_is_applied(tmp_path: Path) -> None:
    config_file = tmp_path / "bindgen.json"
    config_file.write_text(json.dumps({"package_name": "fromfile"}), encoding="utf-8")
    out_dir = tmp_path / "gen"

    exit_code = main([str(SAMPLES / "app.json"), "-o", str(out_dir), "--config", str(config_file)])

    assert exit_code == 0
    assert "package fromfile\n" in (out_dir / "app.go").read_text(encoding="utf-8")


def test_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"

    main([str(SAMPLES / "app.json"), "-o", str(tmp_path / "gen"), "--log-level", "info", "--log-file", str(log_file)])

    assert "Processing app" in log_file.read_text(encoding="utf-8")
