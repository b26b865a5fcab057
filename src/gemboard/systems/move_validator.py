"""Deadlock detection: is there any single adjacent swap that produces a match?

Every candidate swap is tried in place on the live board and undone before the
next one, so the check never allocates a board copy and always leaves the board
exactly as it found it.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from gemboard.components.board import Board
from gemboard.systems.board_ops import swap_cells
from gemboard.systems.match import find_matches

Position = Tuple[int, int]
SwapPair = Tuple[Position, Position]


@contextmanager
def trial_swap(board: Board, src: Position, dst: Position) -> Iterator[bool]:
    """Swap two cells for the duration of the block, then swap them back."""
    swapped = swap_cells(board, src, dst)
    try:
        yield swapped
    finally:
        if swapped:
            swap_cells(board, dst, src)


def _candidate_swaps(board: Board) -> Iterator[SwapPair]:
    for row in range(board.rows):
        for col in range(board.cols - 1):
            yield (row, col), (row, col + 1)
    for row in range(board.rows - 1):
        for col in range(board.cols):
            yield (row, col), (row + 1, col)


def swap_creates_match(board: Board, src: Position, dst: Position) -> bool:
    with trial_swap(board, src, dst) as swapped:
        return swapped and bool(find_matches(board))


def find_valid_swaps(board: Board) -> List[SwapPair]:
    """Enumerate adjacent swaps that would produce a match."""
    return [pair for pair in _candidate_swaps(board) if swap_creates_match(board, *pair)]


def find_hint(board: Board) -> Optional[SwapPair]:
    for pair in _candidate_swaps(board):
        if swap_creates_match(board, *pair):
            return pair
    return None


def has_legal_move(board: Board) -> bool:
    return find_hint(board) is not None
