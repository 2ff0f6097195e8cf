"""
Depth-first puzzle solver.

The search always advances the beam at the front of the queue:
1. Enumerate that beam's legal destinations
2. Build the board that results from each move and recurse
3. Return the first board whose queue is empty

Boards are snapshots, so backtracking is just returning to the caller and
dropping the board that did not work out.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, List, Optional, Tuple, Union

from board import Board
from laser import trace_beam, score_board
from visualize import print_board


class Solver:
    """
    Depth-first search over board snapshots.

    Attributes:
        board: Initial board
        verbose: Print a line when a solution is found
        max_nodes: Stop after visiting this many boards (None = no limit)
        nodes_visited: Boards visited by the last solve()
        solution_depth: Number of moves in the last solution, if any
        exhausted: False if the last solve() stopped at max_nodes
    """

    def __init__(self, board: Board, verbose: bool = False, max_nodes: Optional[int] = None):
        self.board = board
        self.verbose = verbose
        self.max_nodes = max_nodes
        self.nodes_visited = 0
        self.solution_depth: Optional[int] = None
        self.exhausted = True

    def solve(self) -> Optional[Board]:
        """
        Search for a board with every beam resolved.

        Returns:
            The solved board, or None if no sequence of moves resolves
            every beam
        """
        self.nodes_visited = 0
        self.solution_depth = None
        self.exhausted = True
        return self._dfs(self.board, 0)

    def _dfs(self, board: Board, depth: int) -> Optional[Board]:
        if self.max_nodes is not None and self.nodes_visited >= self.max_nodes:
            self.exhausted = False
            return None
        self.nodes_visited += 1

        if not board.nodes:
            self.solution_depth = depth
            if self.verbose:
                print(f"Solution found at depth {depth}")
            return board

        for nx, ny in board.find_possible_moves(0):
            new_board = board.with_moved_node(0, nx, ny)

            solution = self._dfs(new_board, depth + 1)
            if solution is not None:
                return solution

            if not self.exhausted:
                return None

        return None

    @staticmethod
    def board_traverse(board: Board, x: int, y: int,
                       excluded: Optional[Collection[Tuple[int, int]]] = None) -> int:
        """Trace product for a beam entering a solved board at (x, y)."""
        return trace_beam(board, x, y, excluded)

    @staticmethod
    def score(board: Board, excluded: Optional[Collection[Tuple[int, int]]] = None) -> int:
        """Final score of a solved board."""
        return score_board(board, excluded)

    @staticmethod
    def print_state(board: Board) -> None:
        """Print the board to stdout."""
        print_board(board)


@dataclass
class SolverResult:
    """Result of solving a puzzle."""
    solved: bool
    board: Optional[Board]
    nodes_visited: int
    depth: Optional[int] = None
    elapsed: float = 0.0
    score: Optional[int] = None
    exhausted: bool = True


def solve_puzzle(board: Board, sort_nodes: bool = True, verbose: bool = False,
                 max_nodes: Optional[int] = None) -> SolverResult:
    """
    Solve a puzzle and score the result.

    Args:
        board: Initial board with every beam placed
        sort_nodes: Re-queue beams by ascending divisor count before searching
        verbose: Print progress from the solver
        max_nodes: Optional cap on boards visited

    Returns:
        SolverResult; score is computed against the original entry points
    """
    entry_points: List[Tuple[int, int]] = board.entry_points()
    start_board = board.ordered_by_factor_count() if sort_nodes else board

    solver = Solver(start_board, verbose=verbose, max_nodes=max_nodes)
    start = time.perf_counter()
    solution = solver.solve()
    elapsed = time.perf_counter() - start

    score = None
    if solution is not None:
        score = score_board(solution, set(entry_points))

    return SolverResult(
        solved=solution is not None,
        board=solution,
        nodes_visited=solver.nodes_visited,
        depth=solver.solution_depth,
        elapsed=elapsed,
        score=score,
        exhausted=solver.exhausted,
    )


def solve_puzzle_file(filepath: Union[str, Path], **kwargs) -> SolverResult:
    """
    Solve a puzzle from a JSON file.

    Args:
        filepath: Path to puzzle JSON
        **kwargs: Passed through to solve_puzzle

    Returns:
        SolverResult
    """
    from file_io import load_board

    return solve_puzzle(load_board(filepath), **kwargs)
