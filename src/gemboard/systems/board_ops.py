from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from gemboard.components.board import Board
from gemboard.components.config import validate_dimensions
from gemboard.components.tile import GemKind
from gemboard.constants import MAX_INIT_ATTEMPTS, MIN_RUN_LENGTH
from gemboard.errors import ConfigurationError
from gemboard.systems.match import find_matches

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    type_id: int


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1


def swap_cells(board: Board, src: Position, dst: Position) -> bool:
    """Exchange type, empty flag and kind of two orthogonally adjacent cells.

    Returns False and leaves the board untouched when the cells are out of
    bounds or not exactly one step apart.
    """
    if not (board.in_bounds(*src) and board.in_bounds(*dst)):
        return False
    if not is_adjacent(src, dst):
        return False
    a = board.index(*src)
    b = board.index(*dst)
    board.types[a], board.types[b] = board.types[b], board.types[a]
    board.empty[a], board.empty[b] = board.empty[b], board.empty[a]
    board.kinds[a], board.kinds[b] = board.kinds[b], board.kinds[a]
    return True


def clear_cells(board: Board, positions: Iterable[Position]) -> List[Position]:
    """Mark cells empty; returns the positions that were actually cleared."""
    cleared: List[Position] = []
    for row, col in sorted(positions):
        idx = board.index(row, col)
        if board.empty[idx]:
            continue
        board.empty[idx] = True
        cleared.append((row, col))
    return cleared


def collapse_column(board: Board, col: int) -> List[GravityMove]:
    """Compact the non-empty cells of one column downward, keeping their order."""
    moves: List[GravityMove] = []
    target_row = board.rows - 1
    for row in range(board.rows - 1, -1, -1):
        src = board.index(row, col)
        if board.empty[src]:
            continue
        if row != target_row:
            dst = board.index(target_row, col)
            board.types[dst] = board.types[src]
            board.kinds[dst] = board.kinds[src]
            board.empty[dst] = False
            board.empty[src] = True
            moves.append(GravityMove(source=(row, col), target=(target_row, col), type_id=board.types[dst]))
        target_row -= 1
    return moves


def fill_empties(board: Board, rng: random.Random, color_count: int) -> List[Position]:
    """Give every empty cell a fresh random normal gem."""
    spawned: List[Position] = []
    for idx, is_empty in enumerate(board.empty):
        if not is_empty:
            continue
        board.types[idx] = rng.randrange(color_count)
        board.kinds[idx] = GemKind.NORMAL
        board.empty[idx] = False
        spawned.append(board.position(idx))
    return spawned


def _completes_run(board: Board, row: int, col: int, type_id: int) -> bool:
    """True when type_id at (row, col) would finish a run with the two cells left or above."""
    if col >= MIN_RUN_LENGTH - 1:
        if all(board.types[board.index(row, col - k)] == type_id for k in range(1, MIN_RUN_LENGTH)):
            return True
    if row >= MIN_RUN_LENGTH - 1:
        if all(board.types[board.index(row - k, col)] == type_id for k in range(1, MIN_RUN_LENGTH)):
            return True
    return False


def _fill_without_runs(board: Board, rng: random.Random, color_count: int) -> None:
    # Each cell is re-rolled until it does not close a run with its left or upper neighbours.
    for row in range(board.rows):
        for col in range(board.cols):
            idx = board.index(row, col)
            type_id = rng.randrange(color_count)
            while _completes_run(board, row, col, type_id):
                type_id = rng.randrange(color_count)
            board.types[idx] = type_id
            board.empty[idx] = False
            board.kinds[idx] = GemKind.NORMAL


def initialize_board(
    rows: int,
    cols: int,
    color_count: int,
    rng: random.Random | None = None,
    *,
    require_move: bool = False,
    max_attempts: int = MAX_INIT_ATTEMPTS,
) -> Board:
    """Create a fully populated board with no pending matches.

    With ``require_move`` the board is also regenerated until at least one legal
    swap exists. Raises ConfigurationError when the dimensions or palette are too
    small, or when no acceptable board turns up within ``max_attempts``.
    """
    validate_dimensions(rows, cols, color_count)
    rng = rng or random.Random()
    board = Board(rows=rows, cols=cols)
    for attempt in range(1, max_attempts + 1):
        _fill_without_runs(board, rng, color_count)
        if find_matches(board):
            continue
        if require_move:
            # Local import: move_validator depends on this module.
            from gemboard.systems.move_validator import has_legal_move
            if not has_legal_move(board):
                continue
        logger.debug("initialised %dx%d board with %d colours after %d attempt(s)", rows, cols, color_count, attempt)
        return board
    logger.warning("no playable %dx%d board with %d colours after %d attempts", rows, cols, color_count, max_attempts)
    raise ConfigurationError(
        f"unable to generate a playable {rows}x{cols} board with {color_count} colours"
    )
