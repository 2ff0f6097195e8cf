"""
Board pieces and beam geometry for the Hall of Mirrors solver.

Coordinates are (x, y) with (0, 0) at the top-left corner of the boundary
ring. The playable interior spans 1..size on both axes; row/column 0 and
size+1 form the ring where beams enter and exit.

Direction encoding (clockwise, so opposite = +2 mod 4):
    0 = Up    (y decreases)
    1 = Right (x increases)
    2 = Down  (y increases)
    3 = Left  (x decreases)
"""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple

from factors import FactorCache, DEFAULT_CACHE


class Direction(IntEnum):
    """Travel direction of a beam."""
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def opposite(self) -> 'Direction':
        """Return the opposite direction."""
        return Direction((self + 2) % 4)

    @property
    def delta(self) -> Tuple[int, int]:
        """Return (dx, dy) for moving one cell in this direction."""
        return _DELTAS[self]

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> 'Direction':
        """Inverse of delta. Only the four unit vectors are accepted."""
        for direction, vector in _DELTAS.items():
            if vector == (dx, dy):
                return direction
        raise ValueError(f"Not an axis-aligned unit vector: ({dx}, {dy})")

    @property
    def symbol(self) -> str:
        """Arrow symbol for this direction."""
        return _ARROWS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

_ARROWS = {
    Direction.UP: '^',
    Direction.RIGHT: '>',
    Direction.DOWN: 'v',
    Direction.LEFT: '<',
}


class MirrorOrientation(IntEnum):
    """
    Orientation of a mirror cell.

    NONE is only used as the reflection rule of a cell without a mirror.
    UNDECIDED marks a placed mirror whose diagonal has not been forced yet.
    """
    NONE = 0
    UNDECIDED = 1
    SLASH = 2
    BACKSLASH = 3

    @property
    def symbol(self) -> str:
        return _ORIENTATION_SYMBOLS[self]


_ORIENTATION_SYMBOLS = {
    MirrorOrientation.NONE: ' ',
    MirrorOrientation.UNDECIDED: 'x',
    MirrorOrientation.SLASH: '/',
    MirrorOrientation.BACKSLASH: '\\',
}


@dataclass(frozen=True)
class Mirror:
    """A mirror occupying one interior cell."""
    x: int
    y: int
    orientation: MirrorOrientation = MirrorOrientation.UNDECIDED

    @property
    def is_decided(self) -> bool:
        return self.orientation in (MirrorOrientation.SLASH, MirrorOrientation.BACKSLASH)

    def with_orientation(self, orientation: MirrorOrientation) -> 'Mirror':
        """Return a copy with the given orientation."""
        return replace(self, orientation=orientation)


@dataclass(frozen=True)
class Node:
    """
    An active light beam.

    Attributes:
        x, y: Current cell
        direction: Direction the beam last travelled (or entered with)
        value: Remaining value; only its divisors are legal step lengths
        move_set: Divisors of value, largest first
    """
    x: int
    y: int
    direction: Direction
    value: int
    move_set: Tuple[int, ...] = ()

    @classmethod
    def create(cls, x: int, y: int, direction: Direction, value: int,
               factor_cache: Optional[FactorCache] = None) -> 'Node':
        """Build a node with its move set filled in."""
        cache = factor_cache if factor_cache is not None else DEFAULT_CACHE
        return cls(x, y, Direction(direction), value, cache.get_factors(value))

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def moved_to(self, x: int, y: int, direction: Direction,
                 factor_cache: Optional[FactorCache] = None) -> 'Node':
        """
        Return the node after stepping to (x, y).

        The value is divided by the Manhattan distance travelled and the
        move set is recomputed for the new value.
        """
        dist = abs(self.x - x) + abs(self.y - y)
        if dist == 0 or self.value % dist != 0:
            raise ValueError(
                f"Step of {dist} from ({self.x}, {self.y}) does not divide value {self.value}"
            )
        return Node.create(x, y, direction, self.value // dist, factor_cache)


class CellKind(IntEnum):
    """Occupancy of a grid cell."""
    EMPTY = 0
    BEAM = 1
    MIRROR = 2


@dataclass(frozen=True)
class Cell:
    """
    One cell of the occupancy grid.

    BEAM cells were swept by a beam (or sit next to a new mirror): no mirror
    may be placed there and no beam may stop there, but beams may pass.
    MIRROR cells carry the index of their mirror in Board.mirrors.
    """
    kind: CellKind = CellKind.EMPTY
    mirror_index: Optional[int] = None

    def __post_init__(self):
        if (self.kind == CellKind.MIRROR) != (self.mirror_index is not None):
            raise ValueError(f"Invalid cell: {self.kind.name} with index {self.mirror_index}")

    @classmethod
    def mirror(cls, index: int) -> 'Cell':
        return cls(CellKind.MIRROR, index)

    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def is_beam(self) -> bool:
        return self.kind == CellKind.BEAM

    @property
    def is_mirror(self) -> bool:
        return self.kind == CellKind.MIRROR


EMPTY_CELL = Cell(CellKind.EMPTY)
BEAM_CELL = Cell(CellKind.BEAM)


# Reflection tables keyed by travel direction
BACKSLASH_REFLECTIONS = {
    Direction.UP: Direction.LEFT,
    Direction.LEFT: Direction.UP,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
}

SLASH_REFLECTIONS = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.DOWN,
}


def direction_to_vector(direction: Direction) -> Tuple[int, int]:
    """Unit vector (dx, dy) for a direction."""
    return Direction(direction).delta


def reflect(direction: Direction, orientation: MirrorOrientation) -> List[Direction]:
    """
    Outgoing directions for a beam travelling `direction` through a cell.

    Args:
        direction: Travel direction of the beam entering the cell
        orientation: Orientation of the mirror in the cell (NONE if empty)

    Returns:
        List of possible outgoing directions. An undecided mirror allows
        both perpendicular exits; every other case has exactly one.
    """
    if orientation == MirrorOrientation.NONE:
        return [direction]
    if orientation == MirrorOrientation.UNDECIDED:
        dx, dy = direction.delta
        return [Direction.from_delta(-dy, dx), Direction.from_delta(dy, -dx)]
    if orientation == MirrorOrientation.BACKSLASH:
        return [BACKSLASH_REFLECTIONS[direction]]
    return [SLASH_REFLECTIONS[direction]]


def distance_to_boundary(x: int, y: int, size: int, direction: Direction) -> int:
    """
    Exclusive bound on walk steps from (x, y) towards the edge.

    Steps 1..distance-1 stay on the board; step distance-1 lands on the
    boundary ring.
    """
    dx, dy = direction.delta if isinstance(direction, Direction) else direction
    if (dx, dy) == (0, 1):
        return (size + 2) - y
    if (dx, dy) == (0, -1):
        return y + 1
    if (dx, dy) == (1, 0):
        return (size + 2) - x
    if (dx, dy) == (-1, 0):
        return x + 1
    raise ValueError(f"Not an axis-aligned unit vector: ({dx}, {dy})")


def travel_direction(x0: int, y0: int, x1: int, y1: int) -> Direction:
    """Direction of a straight move from (x0, y0) to (x1, y1)."""
    if x1 != x0 and y1 != y0:
        raise ValueError(f"Move ({x0}, {y0}) -> ({x1}, {y1}) is not axis-aligned")
    if x1 > x0:
        return Direction.RIGHT
    if x1 < x0:
        return Direction.LEFT
    if y1 > y0:
        return Direction.DOWN
    if y1 < y0:
        return Direction.UP
    raise ValueError(f"Move from ({x0}, {y0}) to itself")


def commit_orientation(dx: int, dy: int, direction: Direction) -> MirrorOrientation:
    """
    Orientation forced on an undecided mirror by a beam leaving it.

    Args:
        dx, dy: Signed displacement of the move leaving the mirror
        direction: Direction the beam was travelling when it reached the mirror

    Returns:
        SLASH or BACKSLASH, or UNDECIDED if the move does not turn the beam
    """
    if dx < 0:
        return {Direction.DOWN: MirrorOrientation.SLASH,
                Direction.UP: MirrorOrientation.BACKSLASH}.get(direction, MirrorOrientation.UNDECIDED)
    if dx > 0:
        return {Direction.UP: MirrorOrientation.SLASH,
                Direction.DOWN: MirrorOrientation.BACKSLASH}.get(direction, MirrorOrientation.UNDECIDED)
    if dy < 0:
        return {Direction.RIGHT: MirrorOrientation.SLASH,
                Direction.LEFT: MirrorOrientation.BACKSLASH}.get(direction, MirrorOrientation.UNDECIDED)
    if dy > 0:
        return {Direction.LEFT: MirrorOrientation.SLASH,
                Direction.RIGHT: MirrorOrientation.BACKSLASH}.get(direction, MirrorOrientation.UNDECIDED)
    return MirrorOrientation.UNDECIDED
