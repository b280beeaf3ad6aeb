"""Rock field tilting, spin cycles and load scoring."""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .errors import InvariantViolation, MissingSeparatorError, ParseError, RaggedInputError

logger = logging.getLogger(__name__)

DEFAULT_CYCLES = 1_000_000_000


class PositionState(Enum):
    ROUND_ROCK = "O"
    CUBE_ROCK = "#"
    EMPTY = "."


Column = Tuple[PositionState, ...]
Field = Tuple[Column, ...]

_STATE_BY_SYMBOL: Dict[str, PositionState] = {state.value: state for state in PositionState}


def parse_field(text: str) -> Field:
    """Parse a rock map into columns.

    Column ``0`` is the leftmost input column. Each column is stored bottom
    row first, so the highest index of a column is its northern end.
    Characters outside ``O.#`` are ignored and lines without any cells are
    skipped; the first remaining row sets the row length.
    """

    if not any(char.isspace() for char in text):
        raise MissingSeparatorError()

    cells: List[PositionState] = []
    row_length: Optional[int] = None
    rows = 0
    for line in text.splitlines():
        raw = line.strip()
        row = [_STATE_BY_SYMBOL[char] for char in raw if char in _STATE_BY_SYMBOL]
        if not row:
            continue
        if row_length is None:
            row_length = len(row)
        elif len(row) != row_length:
            raise RaggedInputError(rows, row_length, len(row), ignored=len(raw) - len(row))
        cells.extend(row)
        rows += 1
    if row_length is None:
        raise ParseError("Rock field contains no cells")

    columns = []
    for index in range(row_length):
        column = cells[index::row_length]
        column.reverse()
        columns.append(tuple(column))
    return tuple(columns)


def field_to_text(field: Field) -> str:
    """Render ``field`` back into the row-major text it was parsed from."""

    if not field:
        return ""
    height = len(field[0])
    rows = []
    for depth in range(height - 1, -1, -1):
        rows.append("".join(column[depth].value for column in field))
    return "\n".join(rows)


def tilt(column: Sequence[PositionState]) -> Column:
    """Slide every round rock toward the high-index end of ``column``.

    One reverse scan: ``last_available_space`` is the slot the next round rock
    lands in, or ``None`` while nothing is open. Cube rocks close the slot.
    """

    if not column:
        raise InvariantViolation("Cannot tilt an empty column")

    positions: List[PositionState] = list(column)
    last_available_space: Optional[int] = None

    for current in range(len(positions) - 1, -1, -1):
        state = positions[current]
        if last_available_space is None:
            if state is PositionState.EMPTY:
                last_available_space = current
        elif state is PositionState.ROUND_ROCK:
            positions[last_available_space] = PositionState.ROUND_ROCK
            positions[current] = PositionState.EMPTY
            last_available_space -= 1
        elif state is PositionState.CUBE_ROCK:
            last_available_space = None

    return tuple(positions)


def rotate_clockwise(field: Field) -> Field:
    """Rotate a column-major field by 90 degrees.

    ``n`` columns of length ``m`` become ``m`` columns of length ``n`` with
    ``result[j][n - 1 - i] == field[i][j]``.
    """

    n = len(field)
    m = len(field[0])
    result = [[PositionState.EMPTY] * n for _ in range(m)]
    for i in range(n):
        for j in range(m):
            result[j][n - i - 1] = field[i][j]
    return tuple(tuple(column) for column in result)


def calculate_load(column: Iterable[PositionState]) -> int:
    return sum(
        index + 1
        for index, state in enumerate(column)
        if state is PositionState.ROUND_ROCK
    )


def field_load(field: Field) -> int:
    return sum(calculate_load(column) for column in field)


def tilt_field(field: Field, executor: Optional[Executor] = None) -> Field:
    """Tilt every column; all tilts finish before the result is returned."""

    mapper = executor.map if executor is not None else map
    return tuple(mapper(tilt, field))


def spin_cycle(field: Field, executor: Optional[Executor] = None) -> Field:
    """Run one spin cycle: four rounds of tilt followed by a clockwise turn."""

    for _ in range(4):
        field = rotate_clockwise(tilt_field(field, executor))
    return field


@dataclass
class CycleReport:
    """Bookkeeping from the most recent :meth:`SpinCycleRunner.run`."""

    total_cycles: int
    cycles_performed: int = 0
    cycle_start: int = 0
    cycle_length: int = 0
    load: int = 0

    @property
    def repeat_found(self) -> bool:
        return self.cycle_length > 0


class SpinCycleRunner:
    """Spin a field many times, skipping ahead once the states start repeating."""

    def __init__(self, executor: Optional[Executor] = None):
        self.executor = executor
        self.last_report: Optional[CycleReport] = None

    def run(self, field: Field, total_cycles: int = DEFAULT_CYCLES) -> int:
        if total_cycles < 0:
            raise ValueError(f"total_cycles must be non-negative, got {total_cycles}")
        if total_cycles and any(len(column) != len(field) for column in field):
            raise InvariantViolation("Spin cycles need a square field")

        report = CycleReport(total_cycles=total_cycles)
        seen: Dict[Field, int] = {}

        for i in range(total_cycles):
            previous = seen.get(field)
            if previous is not None:
                report.cycle_start = previous
                report.cycle_length = i - previous
                break
            seen[field] = i
            field = spin_cycle(field, self.executor)
            report.cycles_performed += 1

        if report.cycle_length > 0:
            remaining = (total_cycles - report.cycle_start) % report.cycle_length
            logger.debug(
                "Field repeats every %d cycles from cycle %d; running %d more",
                report.cycle_length,
                report.cycle_start,
                remaining,
            )
            for _ in range(remaining):
                field = spin_cycle(field, self.executor)
            report.cycles_performed += remaining

        report.load = field_load(field)
        self.last_report = report
        return report.load


def total_load_after(
    text: str,
    cycles: int = DEFAULT_CYCLES,
    executor: Optional[Executor] = None,
) -> int:
    """Parse ``text`` and return the north load after ``cycles`` spin cycles."""

    return SpinCycleRunner(executor).run(parse_field(text), cycles)


def north_load_after_tilt(text: str) -> int:
    return field_load(tilt_field(parse_field(text)))
