"""
File I/O for the Hall of Mirrors solver.

Handles loading and saving puzzles and solved boards in JSON format:

    {
      "size": 5,
      "nodes": [{"x": 3, "y": 0, "direction": "down", "value": 9}, ...],
      "mirrors": [{"x": 2, "y": 3, "orientation": "slash"}, ...]
    }

"mirrors" is optional. Beam path markers are not stored; a loaded board
only carries its beams and mirrors.
"""

import json
from pathlib import Path
from typing import Union

from board import Board
from factors import FactorCache
from pieces import Direction, MirrorOrientation


def save_board(board: Board, filepath: Union[str, Path]) -> None:
    """
    Save board state to a JSON file.

    Args:
        board: Board to save
        filepath: Path to output file
    """
    data = board_to_dict(board)

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)


def load_board(filepath: Union[str, Path], factor_cache: FactorCache = None) -> Board:
    """
    Load a puzzle or board from a JSON file.

    Args:
        filepath: Path to JSON file
        factor_cache: Optional divisor cache for the new board

    Returns:
        Loaded Board instance
    """
    with open(filepath, 'r') as f:
        data = json.load(f)

    return board_from_dict(data, factor_cache)


def board_to_dict(board: Board) -> dict:
    """
    Convert board to dictionary for JSON serialization.

    Args:
        board: Board to convert

    Returns:
        Dictionary representation
    """
    nodes = [
        {
            'x': node.x,
            'y': node.y,
            'direction': DIRECTION_TO_NAME[node.direction],
            'value': node.value,
        }
        for node in board.nodes
    ]

    mirrors = [
        {
            'x': mirror.x,
            'y': mirror.y,
            'orientation': ORIENTATION_TO_NAME[mirror.orientation],
        }
        for mirror in board.mirrors
    ]

    data = {
        'size': board.size,
        'nodes': nodes,
    }
    # Only include mirrors if there are any (to keep puzzle files clean)
    if mirrors:
        data['mirrors'] = mirrors
    return data


def board_from_dict(data: dict, factor_cache: FactorCache = None) -> Board:
    """
    Create board from dictionary.

    Args:
        data: Dictionary with board data
        factor_cache: Optional divisor cache for the new board

    Returns:
        Board instance
    """
    if 'size' not in data:
        raise ValueError("Board data has no 'size'")
    board = Board(int(data['size']), factor_cache)

    for mirror_data in data.get('mirrors', []):
        board = board.with_mirror(
            mirror_data['x'],
            mirror_data['y'],
            _lookup(NAME_TO_ORIENTATION, mirror_data.get('orientation', 'undecided'), 'orientation'),
        )

    for node_data in data.get('nodes', []):
        board = board.with_placed_node(
            node_data['x'],
            node_data['y'],
            _lookup(NAME_TO_DIRECTION, node_data['direction'], 'direction'),
            int(node_data['value']),
        )

    return board


def _lookup(table: dict, name: str, kind: str):
    try:
        return table[str(name).lower()]
    except KeyError:
        raise ValueError(f"Unknown {kind}: {name}") from None


def board_to_json(board: Board) -> str:
    """Convert board to JSON string."""
    return json.dumps(board_to_dict(board), indent=2)


def board_from_json(json_str: str) -> Board:
    """Create board from JSON string."""
    return board_from_dict(json.loads(json_str))


# Mapping between enums and string names
DIRECTION_TO_NAME = {
    Direction.UP: 'up',
    Direction.RIGHT: 'right',
    Direction.DOWN: 'down',
    Direction.LEFT: 'left',
}

NAME_TO_DIRECTION = {v: k for k, v in DIRECTION_TO_NAME.items()}

ORIENTATION_TO_NAME = {
    MirrorOrientation.UNDECIDED: 'undecided',
    MirrorOrientation.SLASH: 'slash',
    MirrorOrientation.BACKSLASH: 'backslash',
}

NAME_TO_ORIENTATION = {v: k for k, v in ORIENTATION_TO_NAME.items()}
