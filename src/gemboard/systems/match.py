from typing import List, Set, Tuple

from gemboard.components.board import Board
from gemboard.constants import MIN_RUN_LENGTH

Position = Tuple[int, int]


def _scan_line(board: Board, line: List[Position]) -> List[List[Position]]:
    """Return the runs of >= MIN_RUN_LENGTH equal, non-empty types along one line."""
    runs: List[List[Position]] = []
    run: List[Position] = []
    last_type = None
    for pos in line:
        tval = board.type_at(*pos)
        if tval is not None and tval == last_type:
            run.append(pos)
            continue
        if len(run) >= MIN_RUN_LENGTH:
            runs.append(run)
        run = [pos] if tval is not None else []
        last_type = tval
    if len(run) >= MIN_RUN_LENGTH:
        runs.append(run)
    return runs


def find_match_groups(board: Board) -> List[List[Position]]:
    """Every horizontal run (row by row) followed by every vertical run."""
    groups: List[List[Position]] = []
    for r in range(board.rows):
        groups.extend(_scan_line(board, [(r, c) for c in range(board.cols)]))
    for c in range(board.cols):
        groups.extend(_scan_line(board, [(r, c) for r in range(board.rows)]))
    return groups


def find_matches(board: Board) -> Set[Position]:
    """Detect all cells that belong to a horizontal or vertical run of length >= 3."""
    matched: Set[Position] = set()
    for group in find_match_groups(board):
        matched.update(group)
    return matched
