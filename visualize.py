"""
Text rendering for the Hall of Mirrors solver.

Draws the full grid, boundary ring included, one line per row. Each cell is
five characters wide:
    " 112 " - Beam standing on the cell, showing its remaining value
    "  /  " - Mirror (x = undecided)
    "     " - Cell swept by a beam
    "[   ]" - Empty interior cell
    "  -  " - Empty boundary cell
"""

from typing import Dict, Tuple

from board import Board
from pieces import Node


CELL_WIDTH = 5
EMPTY_INTERIOR = '[   ]'
EMPTY_BOUNDARY = '  -  '
BEAM_PATH = ' ' * CELL_WIDTH


def render_cell(board: Board, x: int, y: int, nodes: Dict[Tuple[int, int], Node]) -> str:
    """Render a single cell as a CELL_WIDTH string."""
    node = nodes.get((x, y))
    if node is not None:
        return f'{node.value:4} '

    cell = board.get_cell(x, y)
    if cell.is_mirror:
        return f'  {board.mirrors[cell.mirror_index].orientation.symbol}  '
    if cell.is_beam:
        return BEAM_PATH
    if board.is_boundary(x, y):
        return EMPTY_BOUNDARY
    return EMPTY_INTERIOR


def render_board(board: Board, show_coords: bool = False) -> str:
    """
    Render the board as text.

    Args:
        board: Board to render
        show_coords: Whether to show x/y coordinates

    Returns:
        Multi-line string representation of the board
    """
    side = board.size + 2
    lines = []

    # First beam in the queue wins when two share a cell
    nodes: Dict[Tuple[int, int], Node] = {}
    for node in board.nodes:
        nodes.setdefault(node.position, node)

    if show_coords:
        header = '    '
        for x in range(side):
            header += f'{x:^{CELL_WIDTH}}'
        lines.append(header.rstrip())

    for y in range(side):
        row_str = ''.join(render_cell(board, x, y, nodes) for x in range(side))
        if show_coords:
            row_str = f'{y:>3} ' + row_str
        lines.append(row_str)

    return '\n'.join(lines)


def print_board(board: Board, show_coords: bool = False) -> None:
    """Print the board to stdout, followed by a blank line."""
    print(render_board(board, show_coords))
    print()


def render_compact(board: Board) -> str:
    """
    Render one character per cell.
    Useful for logging or test assertions.
    """
    side = board.size + 2
    positions = {node.position for node in board.nodes}
    lines = []
    for y in range(side):
        row_str = ''
        for x in range(side):
            cell = board.get_cell(x, y)
            if (x, y) in positions:
                row_str += '*'
            elif cell.is_mirror:
                row_str += board.mirrors[cell.mirror_index].orientation.symbol
            elif cell.is_beam:
                row_str += '+'
            elif board.is_boundary(x, y):
                row_str += '-'
            else:
                row_str += '.'
        lines.append(row_str)
    return '\n'.join(lines)
