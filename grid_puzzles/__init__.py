"""Grid puzzle solvers: beam tracing and spin-cycle rock simulation."""

from .beam import (
    BeamState,
    Direction,
    Grid,
    Origin,
    Tile,
    energized_count,
    parse_grid,
    parse_tile,
    solve_beam,
    trace,
)
from .errors import (
    GridPuzzleError,
    InvalidTileError,
    InvariantViolation,
    MissingSeparatorError,
    ParseError,
    RaggedInputError,
)
from .puzzles import PuzzleLoader, resolve_puzzle_root
from .rocks import (
    CycleReport,
    PositionState,
    SpinCycleRunner,
    calculate_load,
    field_load,
    parse_field,
    rotate_clockwise,
    spin_cycle,
    tilt,
    total_load_after,
)

__all__ = [
    "BeamState",
    "CycleReport",
    "Direction",
    "Grid",
    "GridPuzzleError",
    "InvalidTileError",
    "InvariantViolation",
    "MissingSeparatorError",
    "Origin",
    "ParseError",
    "PositionState",
    "PuzzleLoader",
    "RaggedInputError",
    "SpinCycleRunner",
    "Tile",
    "calculate_load",
    "energized_count",
    "field_load",
    "parse_field",
    "parse_grid",
    "parse_tile",
    "resolve_puzzle_root",
    "rotate_clockwise",
    "solve_beam",
    "spin_cycle",
    "tilt",
    "total_load_after",
    "trace",
]
