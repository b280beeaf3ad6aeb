"""Beam tracing through a grid of mirrors and splitters."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Set, Tuple

from .errors import InvalidTileError, InvariantViolation, ParseError, RaggedInputError

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class Tile(Enum):
    """Optical behaviour of a single grid cell."""

    EMPTY = "."
    MIRROR_FORWARD = "/"
    MIRROR_BACKWARD = "\\"
    SPLITTER_HORIZONTAL = "-"
    SPLITTER_VERTICAL = "|"

    @property
    def symbol(self) -> str:
        return self.value


class Origin(Enum):
    """Side of the cell the beam entered from.

    The value is the unit step the beam takes when it keeps going, so a beam
    with origin ``WEST`` travels east. ``y`` grows downward.
    """

    NORTH = (0, 1)
    EAST = (-1, 0)
    SOUTH = (0, -1)
    WEST = (1, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value


# The beam tracer talks about origins; other callers know them as directions.
Direction = Origin


class BeamState(NamedTuple):
    position: Position
    origin: Origin


_TILE_BY_SYMBOL: Dict[str, Tile] = {tile.value: tile for tile in Tile}

_MIRROR_FORWARD = {
    Origin.NORTH: Origin.EAST,
    Origin.EAST: Origin.NORTH,
    Origin.SOUTH: Origin.WEST,
    Origin.WEST: Origin.SOUTH,
}

_MIRROR_BACKWARD = {
    Origin.NORTH: Origin.WEST,
    Origin.EAST: Origin.SOUTH,
    Origin.SOUTH: Origin.EAST,
    Origin.WEST: Origin.NORTH,
}


def parse_tile(symbol: str) -> Tile:
    try:
        return _TILE_BY_SYMBOL[symbol]
    except KeyError:
        raise InvalidTileError(symbol) from None


def redirect(tile: Tile, origin: Origin) -> Tuple[Origin, ...]:
    """Return the origins the beam leaves ``tile`` with.

    Mirrors turn the beam by 90 degrees. A splitter hit on its flat side sends
    the beam out of both ends; hit end-on it behaves like an empty cell.
    """

    if tile is Tile.EMPTY:
        return (origin,)
    if tile is Tile.MIRROR_FORWARD:
        return (_MIRROR_FORWARD[origin],)
    if tile is Tile.MIRROR_BACKWARD:
        return (_MIRROR_BACKWARD[origin],)
    if tile is Tile.SPLITTER_HORIZONTAL:
        if origin in (Origin.NORTH, Origin.SOUTH):
            return (Origin.EAST, Origin.WEST)
        return (origin,)
    if tile is Tile.SPLITTER_VERTICAL:
        if origin in (Origin.EAST, Origin.WEST):
            return (Origin.NORTH, Origin.SOUTH)
        return (origin,)
    raise InvariantViolation(f"Unhandled tile: {tile!r}")


@dataclass(frozen=True)
class Grid:
    """Sparse map of tiles plus the inclusive ``(max_x, max_y)`` extents."""

    tiles: Dict[Position, Tile] = field(default_factory=dict)
    extents: Tuple[int, int] = (0, 0)

    @property
    def width(self) -> int:
        return self.extents[0] + 1

    @property
    def height(self) -> int:
        return self.extents[1] + 1

    def inside(self, position: Position) -> bool:
        x, y = position
        return 0 <= x <= self.extents[0] and 0 <= y <= self.extents[1]

    def tile_at(self, position: Position) -> Tile:
        try:
            return self.tiles[position]
        except KeyError:
            raise InvariantViolation(f"No tile recorded at {position}") from None

    def step(self, position: Position, origin: Origin) -> Optional[BeamState]:
        """Move one cell in the travel direction of ``origin``.

        Returns ``None`` when the beam would leave the grid.
        """

        dx, dy = origin.vector
        candidate = (position[0] + dx, position[1] + dy)
        if not self.inside(candidate):
            return None
        return BeamState(candidate, origin)

    def next_steps(self, position: Position, origin: Origin) -> List[BeamState]:
        tile = self.tile_at(position)
        steps: List[BeamState] = []
        for outgoing in redirect(tile, origin):
            state = self.step(position, outgoing)
            if state is not None:
                steps.append(state)
        return steps

    def to_text(self) -> str:
        rows = []
        for y in range(self.height):
            rows.append("".join(self.tile_at((x, y)).symbol for x in range(self.width)))
        return "\n".join(rows)


def parse_grid(text: str) -> Grid:
    """Parse one line per row into a :class:`Grid`.

    Blank lines are skipped. Every other row must be as long as the first
    one; ragged input is rejected rather than leaving holes in the tile map.
    """

    tiles: Dict[Position, Tile] = {}
    max_x = 0
    max_y = 0
    row_length = None
    rows = (line for line in text.splitlines() if line.strip())
    for y, line in enumerate(rows):
        if row_length is None:
            row_length = len(line)
        elif len(line) != row_length:
            raise RaggedInputError(y, row_length, len(line))
        for x, symbol in enumerate(line):
            max_x = max(max_x, x)
            try:
                tiles[(x, y)] = parse_tile(symbol)
            except InvalidTileError as exc:
                raise InvalidTileError(exc.character, (x, y)) from None
        max_y = max(max_y, y)

    if not tiles:
        raise ParseError("Grid input contains no tiles")

    grid = Grid(tiles=tiles, extents=(max_x, max_y))
    logger.debug("Parsed %dx%d beam grid", grid.width, grid.height)
    return grid


def trace(
    grid: Grid,
    start: Position = (0, 0),
    origin: Origin = Origin.WEST,
) -> Set[Position]:
    """Return every position the beam passes through.

    Depth-first over ``(position, origin)`` states with an explicit stack. A
    state is marked as seen when it is pushed, so each one is expanded at most
    once and the search always terminates.
    """

    if not grid.inside(start):
        raise InvariantViolation(f"Beam start {start} is outside the grid")

    energized: Set[Position] = set()
    first = BeamState(start, origin)
    seen_states: Set[BeamState] = {first}
    stack: List[BeamState] = [first]

    while stack:
        position, incoming = stack.pop()
        energized.add(position)
        for state in grid.next_steps(position, incoming):
            if state in seen_states:
                continue
            seen_states.add(state)
            stack.append(state)

    logger.debug(
        "Beam from %s (%s) energized %d tiles over %d states",
        start,
        origin.name,
        len(energized),
        len(seen_states),
    )
    return energized


def energized_count(
    grid: Grid,
    start: Position = (0, 0),
    origin: Origin = Origin.WEST,
) -> int:
    return len(trace(grid, start, origin))


def solve_beam(text: str) -> int:
    """Parse ``text`` and count the tiles energized by a beam entering at the top left."""

    return energized_count(parse_grid(text))
