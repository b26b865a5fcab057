import random

import pytest

from gemboard.components.board import Board
from gemboard.components.tile import GemKind
from gemboard.errors import ConfigurationError
from gemboard.systems.board_ops import (
    clear_cells,
    collapse_column,
    fill_empties,
    initialize_board,
    is_adjacent,
    swap_cells,
)
from gemboard.systems.match import find_matches
from gemboard.systems.move_validator import has_legal_move
from tests.helpers import R, G, B, Y


@pytest.mark.parametrize("seed", range(25))
def test_initial_board_has_no_matches(seed):
    board = initialize_board(8, 8, 7, random.Random(seed))
    assert not find_matches(board), 'Initial board should not contain any matches'
    assert board.empty_count() == 0
    assert board.filled_count() == 64


def test_initial_board_minimum_palette_is_match_free():
    for seed in range(10):
        board = initialize_board(8, 8, 3, random.Random(seed))
        assert not find_matches(board)
        assert all(0 <= t < 3 for t in board.types)


def test_initial_board_with_required_move():
    board = initialize_board(5, 5, 4, random.Random(7), require_move=True)
    assert not find_matches(board)
    assert has_legal_move(board)


def test_initialize_is_reproducible_from_seed():
    first = initialize_board(6, 7, 5, random.Random(99))
    second = initialize_board(6, 7, 5, random.Random(99))
    assert first.snapshot() == second.snapshot()


@pytest.mark.parametrize("rows,cols,colors", [(2, 8, 7), (8, 2, 7), (8, 8, 2), (0, 0, 0)])
def test_initialize_rejects_degenerate_configuration(rows, cols, colors):
    with pytest.raises(ConfigurationError):
        initialize_board(rows, cols, colors, random.Random(1))


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        initialize_board(3, 3, 1, random.Random(1))


def test_is_adjacent_requires_manhattan_distance_one():
    assert is_adjacent((2, 2), (2, 3))
    assert is_adjacent((2, 2), (1, 2))
    assert not is_adjacent((2, 2), (3, 3))
    assert not is_adjacent((2, 2), (2, 2))
    assert not is_adjacent((2, 2), (2, 4))


def test_swap_exchanges_type_empty_and_kind():
    board = Board.from_rows([[R, G, B], [B, R, G], [G, B, R]])
    board.kinds[board.index(0, 1)] = GemKind.COLOR_BOMB
    board.empty[board.index(0, 0)] = True
    assert swap_cells(board, (0, 0), (0, 1))
    assert board.cell(0, 0).type == G
    assert board.cell(0, 0).kind is GemKind.COLOR_BOMB
    assert not board.cell(0, 0).empty
    assert board.cell(0, 1).type == R
    assert board.cell(0, 1).empty


def test_swap_non_adjacent_is_a_noop():
    board = Board.from_rows([[R, G, B], [B, R, G], [G, B, R]])
    before = board.state()
    assert not swap_cells(board, (0, 0), (1, 1))
    assert not swap_cells(board, (0, 0), (0, 2))
    assert not swap_cells(board, (0, 2), (0, 3))
    assert board.state() == before


def test_swap_then_swap_back_restores_grid():
    board = Board.from_rows([[R, R, G], [B, R, G], [B, B, Y]])
    before = board.state()
    swap_cells(board, (0, 0), (1, 0))
    assert [board.type_at(r, 0) for r in range(3)] == [B, R, B]
    swap_cells(board, (1, 0), (0, 0))
    assert board.state() == before


def test_collapse_column_preserves_order_and_leaves_empties_on_top():
    board = Board.from_rows([[R], [G], [B], [Y], [R]])
    clear_cells(board, [(1, 0), (3, 0)])
    moves = collapse_column(board, 0)
    assert board.snapshot() == ((None,), (None,), (R,), (B,), (R,))
    assert [(m.source, m.target) for m in moves] == [((2, 0), (3, 0)), ((0, 0), (2, 0))]


def test_collapse_column_without_empties_does_nothing():
    board = Board.from_rows([[R, G], [G, R], [B, B]])
    before = board.state()
    assert collapse_column(board, 1) == []
    assert board.state() == before


def test_fill_empties_only_touches_empty_cells():
    board = Board.from_rows([[R, G, B], [B, R, G], [G, B, R]])
    clear_cells(board, [(0, 1), (2, 2)])
    spawned = fill_empties(board, random.Random(3), 3)
    assert spawned == [(0, 1), (2, 2)]
    assert board.empty_count() == 0
    assert board.type_at(0, 0) == R and board.type_at(1, 1) == R
