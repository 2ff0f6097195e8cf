"""Unit tests for file_io.py - JSON serialization."""

import json
from pathlib import Path

import pytest
from board import Board
from file_io import (
    save_board, load_board, board_to_dict, board_from_dict,
    board_to_json, board_from_json, DIRECTION_TO_NAME, NAME_TO_ORIENTATION,
)
from pieces import Direction, MirrorOrientation
from solver import Solver


PUZZLE_DIR = Path(__file__).parent.parent / 'puzzles'


class TestBoardToDict:
    """Tests for board_to_dict."""

    def test_empty_board(self):
        data = board_to_dict(Board(5))
        assert data == {'size': 5, 'nodes': []}

    def test_board_with_nodes_and_mirrors(self):
        board = (Board(5)
                 .with_mirror(2, 3, MirrorOrientation.BACKSLASH)
                 .with_placed_node(3, 0, Direction.DOWN, 9))
        data = board_to_dict(board)
        assert data['nodes'] == [{'x': 3, 'y': 0, 'direction': 'down', 'value': 9}]
        assert data['mirrors'] == [{'x': 2, 'y': 3, 'orientation': 'backslash'}]


class TestBoardFromDict:
    """Tests for board_from_dict."""

    def test_nodes_keep_order(self):
        data = {
            'size': 5,
            'nodes': [
                {'x': 3, 'y': 0, 'direction': 'down', 'value': 9},
                {'x': 0, 'y': 4, 'direction': 'Right', 'value': 16},
            ],
        }
        board = board_from_dict(data)
        assert board.size == 5
        assert board.entry_points() == [(3, 0), (0, 4)]
        assert board.nodes[1].direction == Direction.RIGHT

    def test_mirrors_default_undecided(self):
        board = board_from_dict({'size': 3, 'nodes': [], 'mirrors': [{'x': 1, 'y': 1}]})
        assert board.get_mirror(1, 1).orientation == MirrorOrientation.UNDECIDED

    def test_unknown_names(self):
        with pytest.raises(ValueError):
            board_from_dict({'size': 3, 'nodes': [{'x': 0, 'y': 1, 'direction': 'north', 'value': 2}]})
        with pytest.raises(ValueError):
            board_from_dict({'size': 3, 'mirrors': [{'x': 1, 'y': 1, 'orientation': 'pipe'}]})

    def test_missing_size(self):
        with pytest.raises(ValueError):
            board_from_dict({'nodes': []})

    def test_invalid_entry_point(self):
        with pytest.raises(ValueError):
            board_from_dict({'size': 3, 'nodes': [{'x': 2, 'y': 2, 'direction': 'up', 'value': 2}]})


class TestRoundTrip:
    """Tests for saving and reloading."""

    def test_solved_board_keeps_mirrors(self, tmp_path):
        """Test a solved board reloads with the same mirrors."""
        board = Board(1).with_placed_node(1, 0, Direction.DOWN, 1)
        solution = Solver(board).solve()
        path = tmp_path / 'solved.json'
        save_board(solution, path)

        loaded = load_board(path)
        assert loaded.mirror_map() == solution.mirror_map()
        assert loaded.mirror_map() == {(1, 1): MirrorOrientation.SLASH}

    def test_json_strings(self):
        board = Board(4).with_placed_node(5, 2, Direction.LEFT, 12)
        text = board_to_json(board)
        assert json.loads(text)['size'] == 4
        restored = board_from_json(text)
        assert restored.nodes == board.nodes

    def test_name_tables(self):
        assert set(DIRECTION_TO_NAME) == set(Direction)
        assert 'none' not in NAME_TO_ORIENTATION


class TestShippedPuzzles:
    """Tests that the bundled puzzle files load."""

    def test_example(self):
        board = load_board(PUZZLE_DIR / 'example_5x5.json')
        assert board.size == 5
        assert [node.value for node in board.nodes] == [9, 36, 16, 75]

    def test_hall_of_mirrors(self):
        board = load_board(PUZZLE_DIR / 'hall_of_mirrors_3.json')
        assert board.size == 10
        assert len(board.nodes) == 16
        assert all(board.is_boundary(x, y) for x, y in board.entry_points())
