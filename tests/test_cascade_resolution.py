import random

import pytest

from gemboard.components.board import Board
from gemboard.errors import CascadeLimitExceeded
from gemboard.systems.match import find_matches
from gemboard.systems.match_resolution import (
    CascadePhase,
    CascadeResolver,
    iter_cascade,
    pass_limit,
)
from tests.helpers import R, G, B, ScriptedRandom

# Column 0 holds a vertical triple; once cleared, the two gems above it drop
# next to the 1s on the bottom row and form a second, indirect match.
CHAIN_ROWS = [
    [2, 3, 4],
    [1, 4, 2],
    [0, 3, 4],
    [0, 2, 3],
    [0, 1, 1],
]
CHAIN_REFILLS = [0, 3, 0, 1, 2, 1]
CHAIN_FINAL = ((1, 2, 1), (0, 3, 4), (3, 4, 2), (0, 3, 4), (2, 2, 3))

# A single top-row match whose refill creates nothing new.
SINGLE_ROWS = [[R, R, R], [B, G, G], [B, B, G]]
SINGLE_REFILLS = [G, R, B]


def random_board(rows, cols, colors, rng):
    return Board(rows=rows, cols=cols, types=[rng.randrange(colors) for _ in range(rows * cols)])


def test_two_step_cascade_scores_by_depth():
    board = Board.from_rows(CHAIN_ROWS)
    resolver = CascadeResolver(ScriptedRandom(CHAIN_REFILLS), color_count=5, base_points=10)
    result = resolver.resolve(board)
    assert result.depth == 2
    assert result.removed == 6
    assert result.points == 3 * 10 * 1 + 3 * 10 * 2
    assert board.snapshot() == CHAIN_FINAL
    assert result.final_grid == CHAIN_FINAL


def test_cascade_outscores_two_isolated_matches():
    chain = CascadeResolver(ScriptedRandom(CHAIN_REFILLS), color_count=5).resolve(Board.from_rows(CHAIN_ROWS))
    isolated = 0
    for _ in range(2):
        single = CascadeResolver(ScriptedRandom(SINGLE_REFILLS), color_count=3).resolve(Board.from_rows(SINGLE_ROWS))
        assert single.depth == 1 and single.removed == 3
        isolated += single.points
    assert chain.removed == 6
    assert chain.points > isolated


def test_cascade_steps_follow_phase_order():
    board = Board.from_rows(CHAIN_ROWS)
    result = CascadeResolver(ScriptedRandom(CHAIN_REFILLS), color_count=5).resolve(board)
    phases = [step.phase for step in result.steps]
    assert phases == [
        CascadePhase.HIGHLIGHT, CascadePhase.REMOVAL, CascadePhase.COLLAPSE, CascadePhase.REFILL,
    ] * 2
    highlight, removal, collapse, refill = result.steps[:4]
    assert highlight.positions == ((2, 0), (3, 0), (4, 0))
    assert highlight.grid == tuple(tuple(row) for row in CHAIN_ROWS)
    assert removal.points == 30
    assert removal.grid[2][0] is None and removal.grid[4][0] is None
    assert collapse.positions == ((3, 0), (4, 0))
    assert [row[0] for row in collapse.grid] == [None, None, None, 2, 1]
    assert refill.positions == ((0, 0), (1, 0), (2, 0))
    assert all(value is not None for row in refill.grid for value in row)
    assert result.steps[4].positions == ((4, 0), (4, 1), (4, 2))
    assert result.steps[5].points == 60


def test_resolve_on_settled_board_is_noop():
    board = Board.from_rows([[R, G, R], [G, R, G], [R, G, R]])
    before = board.state()
    result = CascadeResolver(random.Random(5), color_count=3).resolve(board)
    assert result.points == 0
    assert result.depth == 0
    assert result.steps == ()
    assert board.state() == before
    assert result.final_grid == board.snapshot()


@pytest.mark.parametrize("seed", range(30))
def test_cascade_terminates_and_conserves_cells(seed):
    rng = random.Random(seed)
    board = random_board(8, 8, 4, rng)
    limit = pass_limit(board)
    result = CascadeResolver(rng, color_count=4).resolve(board)
    assert result.depth <= limit
    assert board.empty_count() == 0
    assert board.filled_count() == 64
    assert not find_matches(board)


def test_cascade_is_deterministic_for_a_seed():
    seed_board = random_board(8, 8, 4, random.Random(42))
    first = Board(rows=8, cols=8, types=list(seed_board.types))
    second = Board(rows=8, cols=8, types=list(seed_board.types))
    a = CascadeResolver(random.Random(7), color_count=4).resolve(first)
    b = CascadeResolver(random.Random(7), color_count=4).resolve(second)
    assert a.steps == b.steps
    assert first.state() == second.state()


def test_lazy_stepping_matches_eager_resolution():
    seed_board = random_board(8, 8, 4, random.Random(11))
    eager_board = Board(rows=8, cols=8, types=list(seed_board.types))
    lazy_board = Board(rows=8, cols=8, types=list(seed_board.types))
    eager = CascadeResolver(random.Random(3), color_count=4).resolve(eager_board)

    stepper = iter_cascade(lazy_board, random.Random(3), color_count=4)
    lazy_steps = []
    while True:
        try:
            lazy_steps.append(next(stepper))
        except StopIteration:
            break
    assert tuple(lazy_steps) == eager.steps
    assert lazy_board.state() == eager_board.state()


def test_cascade_result_replays_from_the_start():
    result = CascadeResolver(ScriptedRandom(CHAIN_REFILLS), color_count=5).resolve(Board.from_rows(CHAIN_ROWS))
    assert list(result) == list(result)
    assert list(result)[0].phase is CascadePhase.HIGHLIGHT


def test_pass_limit_guards_runaway_cascades():
    board = Board.from_rows(SINGLE_ROWS)
    with pytest.raises(CascadeLimitExceeded):
        list(iter_cascade(board, random.Random(1), color_count=3, max_passes=0))
    assert pass_limit(Board(rows=8, cols=8)) == 8 * 8 * 10


def test_closing_the_step_generator_still_settles_the_board():
    board = Board.from_rows(CHAIN_ROWS)
    stepper = iter_cascade(board, ScriptedRandom(CHAIN_REFILLS), color_count=5)
    for step in stepper:
        if step.phase is CascadePhase.REMOVAL:
            break
    assert board.empty_count() == 3

    stepper.close()

    assert board.empty_count() == 0
    assert not find_matches(board)
    assert board.snapshot() == CHAIN_FINAL
