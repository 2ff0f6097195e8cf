"""
Beam tracing over a solved board.

Once every beam is resolved the mirrors are fixed, so a fresh beam fired
from any boundary cell follows a single deterministic path. The product of
the segment lengths along that path is the value a beam entering there
would have needed. Summing those per edge and multiplying the four edge
sums gives the puzzle's final answer.
"""

from typing import Collection, Iterable, Optional, Set, Tuple

from board import Board
from pieces import Direction, MirrorOrientation, reflect, distance_to_boundary


def entry_direction(board: Board, x: int, y: int) -> Direction:
    """Direction a beam entering from boundary cell (x, y) travels."""
    return board.inward_direction(x, y)


def trace_beam(board: Board, x: int, y: int,
               excluded: Optional[Collection[Tuple[int, int]]] = None) -> int:
    """
    Trace a beam entering at (x, y) and return its segment-length product.

    Args:
        board: Solved board (no undecided mirrors on the path)
        x, y: Boundary cell the beam enters from
        excluded: Positions that contribute 0, normally the original beam
                  entry points

    Returns:
        Product of the distances between successive mirrors, ending with
        the distance from the last mirror to the edge
    """
    if excluded is not None and (x, y) in excluded:
        return 0

    result = 1
    direction = entry_direction(board, x, y)

    while True:
        mirror = board.get_mirror(x, y)
        orientation = mirror.orientation if mirror else MirrorOrientation.NONE
        if orientation == MirrorOrientation.UNDECIDED:
            raise ValueError(f"Undecided mirror at ({x}, {y}); board is not solved")

        direction = reflect(direction, orientation)[0]
        dx, dy = direction.delta
        dist = distance_to_boundary(x, y, board.size, direction)

        for step in range(1, dist):
            nx, ny = x + step * dx, y + step * dy
            if board.get_cell(nx, ny).is_mirror:
                x, y = nx, ny
                result *= step
                break
            if step == dist - 1:
                return result * step
        else:
            # Already standing on the edge, facing out
            return result


def edge_positions(board: Board, edge: str) -> Iterable[Tuple[int, int]]:
    """Boundary cells along one edge, corners excluded."""
    last = board.size + 1
    cells = range(1, board.size + 1)
    if edge == 'top':
        return [(i, 0) for i in cells]
    if edge == 'bottom':
        return [(i, last) for i in cells]
    if edge == 'left':
        return [(0, i) for i in cells]
    if edge == 'right':
        return [(last, i) for i in cells]
    raise ValueError(f"Unknown edge: {edge}")


EDGES = ('top', 'bottom', 'left', 'right')


def edge_sums(board: Board,
              excluded: Optional[Iterable[Tuple[int, int]]] = None) -> Tuple[int, int, int, int]:
    """Sum of trace products along each edge, in EDGES order."""
    banned: Set[Tuple[int, int]] = set(excluded or ())
    return tuple(
        sum(trace_beam(board, x, y, banned) for x, y in edge_positions(board, edge))
        for edge in EDGES
    )


def score_board(board: Board,
                excluded: Optional[Iterable[Tuple[int, int]]] = None) -> int:
    """Product of the four edge sums."""
    score = 1
    for total in edge_sums(board, excluded):
        score *= total
    return score
