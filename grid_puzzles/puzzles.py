"""Locate and load puzzle input files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Union

PUZZLE_ENV_VAR = "GRID_PUZZLES_ROOT"
CYCLES_ENV_VAR = "GRID_PUZZLES_CYCLES"

PUZZLE_SUFFIX = ".txt"


def _default_puzzle_root() -> Path:
    return Path(__file__).resolve().parent / "puzzles"


def _read_directory(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return fallback


def read_cycles(fallback: int) -> int:
    """Return the cycle count from the environment, or ``fallback`` when unset."""

    value = os.environ.get(CYCLES_ENV_VAR)
    if not value:
        return fallback
    try:
        cycles = int(value)
    except ValueError as exc:
        raise ValueError(f"{CYCLES_ENV_VAR} must be an integer, got {value!r}") from exc
    if cycles < 0:
        raise ValueError(f"{CYCLES_ENV_VAR} must be non-negative, got {cycles}")
    return cycles


def resolve_puzzle_root(check_exists: bool = True) -> Path:
    """Resolve the puzzle directory, honouring ``GRID_PUZZLES_ROOT``.

    Parameters
    ----------
    check_exists:
        When *True*, raise :class:`FileNotFoundError` if the resolved directory
        does not exist.
    """

    root = _read_directory(PUZZLE_ENV_VAR, _default_puzzle_root())
    if check_exists and not root.exists():
        raise FileNotFoundError(f"Puzzle directory does not exist: {root}")
    return root


class PuzzleLoader:
    """Load puzzle inputs stored as plain text files."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}{PUZZLE_SUFFIX}"

    def load(self, name: str) -> str:
        path = self.path_for(name)
        if not path.exists():
            raise FileNotFoundError(path)
        return path.read_text()

    def available(self) -> List[str]:
        return sorted(path.stem for path in self.root.glob(f"*{PUZZLE_SUFFIX}"))


def read_puzzle(target: str, loader: PuzzleLoader) -> str:
    """Read ``target`` as a file path, falling back to a named puzzle."""

    path = Path(target).expanduser()
    if path.is_file():
        return path.read_text()
    return loader.load(target)
