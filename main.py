"""
CLI entry point for the Hall of Mirrors solver.

Loads a puzzle, solves it, and prints the solved board and final score.
"""

import argparse
import sys
from pathlib import Path

import numpy as np

from file_io import load_board
from solver import solve_puzzle
from visualize import print_board


PUZZLE_DIR = Path(__file__).parent / 'puzzles'
DEFAULT_PUZZLE = PUZZLE_DIR / 'hall_of_mirrors_3.json'


def run(filepath: Path, sort_nodes: bool = True, max_nodes: int = None,
        quiet: bool = False, show_coords: bool = False, state_path: Path = None) -> int:
    """Solve one puzzle file and report. Returns the process exit code."""
    try:
        board = load_board(filepath)
    except (OSError, ValueError, KeyError) as e:
        print(f"Error loading {filepath}: {e}")
        return 2

    if not quiet:
        print("Initial board state:")
        print_board(board, show_coords=show_coords)

    result = solve_puzzle(board, sort_nodes=sort_nodes, verbose=not quiet,
                          max_nodes=max_nodes)

    if not result.solved:
        reason = "" if result.exhausted else f" (stopped after {max_nodes} boards)"
        print(f"No solution found after {result.elapsed:.2f}s{reason}.")
        return 1

    print(f"Solution found in {result.elapsed:.2f}s "
          f"({result.nodes_visited} boards, {result.depth} moves):")
    if not quiet:
        print_board(result.board, show_coords=show_coords)
    print(f"Final solution: {result.score}")

    if state_path is not None:
        np.save(state_path, result.board.get_state_tensor())
        print(f"Saved board state to {state_path}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description='Hall of Mirrors Solver')
    parser.add_argument('file', nargs='?', default=str(DEFAULT_PUZZLE),
                        help='Puzzle JSON file (default: %(default)s)')
    parser.add_argument('--no-sort', action='store_true',
                        help='Keep beams in file order instead of sorting by divisor count')
    parser.add_argument('--max-nodes', type=int, default=None,
                        help='Give up after visiting this many boards')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only print the result line')
    parser.add_argument('--coords', action='store_true',
                        help='Show coordinates around printed boards')
    parser.add_argument('--save-state', metavar='PATH', default=None,
                        help='Save the solved board as a numpy state tensor (.npy)')

    args = parser.parse_args(argv)

    return run(Path(args.file), sort_nodes=not args.no_sort, max_nodes=args.max_nodes,
               quiet=args.quiet, show_coords=args.coords,
               state_path=Path(args.save_state) if args.save_state else None)


if __name__ == '__main__':
    sys.exit(main())
