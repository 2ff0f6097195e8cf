"""
Board state management for the Hall of Mirrors solver.

The board is a square interior of `size` x `size` cells surrounded by a
one-cell boundary ring, so the grid is (size+2) x (size+2) and indexed
grid[x][y]. Boards are treated as values: every operation that moves or
places something returns a new Board and leaves the original untouched,
which is what lets the solver branch without undoing anything.
"""

from typing import Dict, List, Optional, Tuple

import numpy as np

from factors import FactorCache, DEFAULT_CACHE
from pieces import (
    Direction, MirrorOrientation, Mirror, Node, Cell, CellKind,
    EMPTY_CELL, BEAM_CELL, reflect, distance_to_boundary,
    travel_direction, commit_orientation,
)


class Board:
    """
    Represents one snapshot of the puzzle.

    Attributes:
        size: Interior side length
        grid: (size+2) x (size+2) cells indexed [x][y]
        mirrors: Mirrors in creation order; MIRROR cells index into this
        nodes: Queue of active beams, solved front to back
        factor_cache: Divisor cache shared by every board derived from this one
    """

    def __init__(self, size: int, factor_cache: Optional[FactorCache] = None):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size
        self.factor_cache = factor_cache if factor_cache is not None else DEFAULT_CACHE
        self.grid: List[List[Cell]] = [[EMPTY_CELL] * (size + 2) for _ in range(size + 2)]
        self.mirrors: Tuple[Mirror, ...] = ()
        self.nodes: Tuple[Node, ...] = ()

    def __repr__(self) -> str:
        return f"Board(size={self.size}, mirrors={len(self.mirrors)}, nodes={len(self.nodes)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.size == other.size and self.grid == other.grid
                and self.mirrors == other.mirrors and self.nodes == other.nodes)

    __hash__ = None

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        new_board = Board.__new__(Board)
        new_board.size = self.size
        new_board.factor_cache = self.factor_cache
        # Cells, mirrors and nodes are immutable, so copying the columns is enough
        new_board.grid = [column[:] for column in self.grid]
        new_board.mirrors = self.mirrors
        new_board.nodes = self.nodes
        return new_board

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is on the grid, boundary ring included."""
        return 0 <= x <= self.size + 1 and 0 <= y <= self.size + 1

    def is_interior(self, x: int, y: int) -> bool:
        """Check if position is inside the playable interior."""
        return 0 < x < self.size + 1 and 0 < y < self.size + 1

    def is_boundary(self, x: int, y: int) -> bool:
        """Check if position lies on the boundary ring."""
        return self.in_bounds(x, y) and not self.is_interior(x, y)

    def get_cell(self, x: int, y: int) -> Cell:
        return self.grid[x][y]

    def get_mirror(self, x: int, y: int) -> Optional[Mirror]:
        """Get the mirror at position, or None if there is none."""
        cell = self.grid[x][y]
        if cell.is_mirror:
            return self.mirrors[cell.mirror_index]
        return None

    def get_node_at(self, x: int, y: int) -> Optional[Node]:
        """Get the first active beam standing on (x, y)."""
        for node in self.nodes:
            if node.x == x and node.y == y:
                return node
        return None

    def entry_points(self) -> List[Tuple[int, int]]:
        """Positions of all active beams, in queue order."""
        return [node.position for node in self.nodes]

    def inward_direction(self, x: int, y: int) -> Direction:
        """Direction pointing into the board from boundary cell (x, y)."""
        if x == 0:
            return Direction.RIGHT
        if x == self.size + 1:
            return Direction.LEFT
        if y == 0:
            return Direction.DOWN
        return Direction.UP

    def is_corner(self, x: int, y: int) -> bool:
        return x in (0, self.size + 1) and y in (0, self.size + 1)

    @property
    def is_solved(self) -> bool:
        return not self.nodes

    def with_placed_node(self, x: int, y: int, direction: Direction, value: int) -> 'Board':
        """
        Return a new board with one more beam queued.

        Args:
            x, y: Boundary cell the beam enters from
            direction: Direction the beam travels into the board
            value: Starting value of the beam

        Returns:
            New Board; this board is unchanged
        """
        if not self.is_boundary(x, y):
            raise ValueError(f"Beams must enter from the boundary ring, got ({x}, {y})")
        if self.is_corner(x, y):
            raise ValueError(f"Beams cannot enter from a corner, got ({x}, {y})")
        inward = self.inward_direction(x, y)
        if Direction(direction) != inward:
            raise ValueError(
                f"Beam at ({x}, {y}) must travel {inward.name}, "
                f"got {Direction(direction).name}"
            )
        if value < 1:
            raise ValueError(f"Beam value must be positive, got {value}")

        new_board = self.copy()
        node = Node.create(x, y, direction, value, self.factor_cache)
        new_board.nodes = self.nodes + (node,)
        return new_board

    def with_mirror(self, x: int, y: int,
                    orientation: MirrorOrientation = MirrorOrientation.UNDECIDED) -> 'Board':
        """
        Return a new board with a mirror placed on an empty interior cell.

        Unlike mirrors created by moves, no neighbouring cells are blocked.
        """
        if not self.is_interior(x, y):
            raise ValueError(f"Mirrors must be placed inside the board, got ({x}, {y})")
        if not self.grid[x][y].is_empty:
            raise ValueError(f"Cell ({x}, {y}) is occupied")
        if orientation == MirrorOrientation.NONE:
            raise ValueError("Cannot place a mirror without an orientation")

        new_board = self.copy()
        new_board._add_mirror(x, y, orientation)
        return new_board

    def ordered_by_factor_count(self) -> 'Board':
        """
        Return a new board with beams re-queued by ascending divisor count.

        Beams with fewer divisors have fewer candidate moves, so resolving
        them first keeps the branching factor low near the root.
        """
        new_board = self.copy()
        new_board.nodes = tuple(sorted(self.nodes, key=lambda node: len(node.move_set)))
        return new_board

    def find_possible_moves(self, node_index: int = 0) -> List[Tuple[int, int]]:
        """
        Find legal destinations for a beam.

        For each direction the beam can leave its cell in, walk towards the
        edge. A step whose length divides the beam's value is a candidate
        unless the target was swept by a beam. The walk ends at the first
        mirror, which is still a candidate itself.

        Args:
            node_index: Position of the beam in the queue

        Returns:
            List of (x, y) destinations, largest step first within each
            direction
        """
        node = self.nodes[node_index]
        mirror = self.get_mirror(node.x, node.y)
        orientation = mirror.orientation if mirror else MirrorOrientation.NONE

        moves = []
        for direction in reflect(node.direction, orientation):
            dx, dy = direction.delta
            dist = distance_to_boundary(node.x, node.y, self.size, direction)

            found = []
            for step in range(1, dist):
                nx = node.x + step * dx
                ny = node.y + step * dy
                cell = self.grid[nx][ny]

                if step in node.move_set and not cell.is_beam:
                    found.append((nx, ny))

                if cell.is_mirror:
                    break

            found.reverse()
            moves.extend(found)

        return moves

    def with_moved_node(self, node_index: int, x: int, y: int) -> 'Board':
        """
        Return a new board with a beam moved to (x, y).

        Leaving an undecided mirror commits its orientation. Cells passed
        over are marked as beam path. Landing on an empty interior cell
        creates an undecided mirror there; landing on the boundary with a
        value of 1 resolves the beam and removes it from the queue. Stopping
        on a beam path cell is an error.
        """
        node = self.nodes[node_index]
        direction = travel_direction(node.x, node.y, x, y)
        if self.grid[x][y].is_beam:
            raise ValueError(f"Cannot stop on beam path at ({x}, {y})")

        new_board = self.copy()

        mirror = self.get_mirror(node.x, node.y)
        if mirror is not None and mirror.orientation == MirrorOrientation.UNDECIDED:
            committed = commit_orientation(x - node.x, y - node.y, node.direction)
            if committed == MirrorOrientation.UNDECIDED:
                raise ValueError(
                    f"Move ({node.x}, {node.y}) -> ({x}, {y}) does not turn "
                    f"a beam travelling {node.direction.name}"
                )
            mirrors = list(new_board.mirrors)
            index = self.grid[node.x][node.y].mirror_index
            mirrors[index] = mirror.with_orientation(committed)
            new_board.mirrors = tuple(mirrors)

        dx, dy = direction.delta
        dist = abs(x - node.x) + abs(y - node.y)
        for step in range(1, dist):
            new_board.grid[node.x + step * dx][node.y + step * dy] = BEAM_CELL

        moved = node.moved_to(x, y, direction, self.factor_cache)
        nodes = list(self.nodes)
        nodes[node_index] = moved

        if self.is_interior(x, y):
            if new_board.grid[x][y].is_empty:
                new_board._add_mirror(x, y, MirrorOrientation.UNDECIDED)
                new_board._block_neighbours(x, y)
        elif moved.value == 1:
            new_board.grid[x][y] = BEAM_CELL
            del nodes[node_index]

        new_board.nodes = tuple(nodes)
        return new_board

    def _add_mirror(self, x: int, y: int, orientation: MirrorOrientation) -> None:
        self.grid[x][y] = Cell.mirror(len(self.mirrors))
        self.mirrors = self.mirrors + (Mirror(x, y, orientation),)

    def _block_neighbours(self, x: int, y: int) -> None:
        # No two mirrors may be orthogonally adjacent
        for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nx, ny = x + dx, y + dy
            if self.is_interior(nx, ny) and self.grid[nx][ny].is_empty:
                self.grid[nx][ny] = BEAM_CELL

    def get_state_tensor(self) -> np.ndarray:
        """
        Get the board as a tensor for analysis tooling.

        Returns:
            numpy array of shape (channels, size+2, size+2) indexed [c, y, x]

        Channels:
            0: Empty cell
            1: Beam path marker
            2: Undecided mirror
            3: Slash mirror
            4: Backslash mirror
            5: Remaining value of a beam standing on the cell (0 elsewhere)
        """
        side = self.size + 2
        state = np.zeros((6, side, side), dtype=np.float32)

        for x in range(side):
            for y in range(side):
                cell = self.grid[x][y]
                if cell.kind == CellKind.EMPTY:
                    state[0, y, x] = 1.0
                elif cell.kind == CellKind.BEAM:
                    state[1, y, x] = 1.0
                else:
                    orientation = self.mirrors[cell.mirror_index].orientation
                    state[_ORIENTATION_CHANNELS[orientation], y, x] = 1.0

        for node in self.nodes:
            state[5, node.y, node.x] = node.value

        return state

    def mirror_map(self) -> Dict[Tuple[int, int], MirrorOrientation]:
        """Return dict of mirror positions to orientations."""
        return {(m.x, m.y): m.orientation for m in self.mirrors}


_ORIENTATION_CHANNELS = {
    MirrorOrientation.UNDECIDED: 2,
    MirrorOrientation.SLASH: 3,
    MirrorOrientation.BACKSLASH: 4,
}
