from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from grid_puzzles.cli import main
from grid_puzzles.puzzles import (
    CYCLES_ENV_VAR,
    PUZZLE_ENV_VAR,
    PuzzleLoader,
    read_cycles,
    read_puzzle,
    resolve_puzzle_root,
)


def test_resolve_puzzle_root_returns_package_default(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(PUZZLE_ENV_VAR, raising=False)

    root = resolve_puzzle_root()

    assert root.exists()
    assert (root / "beam_contraption.txt").exists()


def test_resolve_puzzle_root_honours_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(PUZZLE_ENV_VAR, str(tmp_path))

    assert resolve_puzzle_root() == tmp_path


def test_resolve_puzzle_root_errors_on_missing_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(PUZZLE_ENV_VAR, str(tmp_path / "missing"))

    with pytest.raises(FileNotFoundError):
        resolve_puzzle_root()
    assert resolve_puzzle_root(check_exists=False) == tmp_path / "missing"


def test_loader_lists_and_loads_puzzles(tmp_path: Path):
    (tmp_path / "tiny.txt").write_text("..\n..\n")
    (tmp_path / "notes.md").write_text("ignored")
    loader = PuzzleLoader(tmp_path)

    assert loader.available() == ["tiny"]
    assert loader.load("tiny") == "..\n..\n"
    with pytest.raises(FileNotFoundError):
        loader.load("absent")


def test_read_puzzle_prefers_existing_file(tmp_path: Path):
    path = tmp_path / "input.txt"
    path.write_text("|.\n..\n")
    loader = PuzzleLoader(tmp_path / "elsewhere")

    assert read_puzzle(str(path), loader) == "|.\n..\n"


def test_read_cycles_uses_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(CYCLES_ENV_VAR, raising=False)
    assert read_cycles(7) == 7

    monkeypatch.setenv(CYCLES_ENV_VAR, "12")
    assert read_cycles(7) == 12

    monkeypatch.setenv(CYCLES_ENV_VAR, "many")
    with pytest.raises(ValueError):
        read_cycles(7)


def test_cli_lists_puzzles(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(PUZZLE_ENV_VAR, raising=False)

    exit_code = main(["list"])
    output = capsys.readouterr().out

    assert exit_code == 0
    assert "Available puzzles" in output
    assert "rocks_platform" in output


def test_cli_solves_bundled_beam_puzzle(capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(PUZZLE_ENV_VAR, raising=False)

    exit_code = main(["beam", "beam_contraption"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "Result: 46"


def test_cli_spin_reads_cycles_from_environment(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.delenv(PUZZLE_ENV_VAR, raising=False)
    monkeypatch.setenv(CYCLES_ENV_VAR, "1000000000")

    exit_code = main(["spin", "rocks_platform"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "Result: 64"


def test_cli_spin_with_zero_cycles(capsys: pytest.CaptureFixture[str], tmp_path: Path):
    path = tmp_path / "field.txt"
    path.write_text("O.\n..\n")

    exit_code = main(["spin", str(path), "--cycles", "0"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "Result: 2"


def test_cli_reports_parse_errors(capsys: pytest.CaptureFixture[str], tmp_path: Path):
    path = tmp_path / "broken.txt"
    path.write_text(".x\n..\n")

    exit_code = main(["beam", str(path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Invalid tile character 'x'" in captured.err
    assert captured.out == ""


def test_cli_explicit_path_ignores_missing_puzzle_root(
    capsys: pytest.CaptureFixture[str], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv(PUZZLE_ENV_VAR, str(tmp_path / "missing"))
    path = tmp_path / "input.txt"
    path.write_text(".|-\n/|/\n/-/\n")

    exit_code = main(["beam", str(path)])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "Result: 7"


def test_cli_named_puzzle_with_missing_root_reports_error(
    capsys: pytest.CaptureFixture[str], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv(PUZZLE_ENV_VAR, str(tmp_path / "missing"))

    assert main(["beam", "beam_small"]) == 1
    assert "beam_small.txt" in capsys.readouterr().err


def test_cli_list_requires_puzzle_root(
    capsys: pytest.CaptureFixture[str], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setenv(PUZZLE_ENV_VAR, str(tmp_path / "missing"))

    assert main(["list"]) == 1
    assert "Puzzle directory does not exist" in capsys.readouterr().err
