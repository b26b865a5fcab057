from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple

from gemboard.components.board import Board, Grid
from gemboard.constants import BASE_POINTS_PER_GEM, CASCADE_PASS_FACTOR, COLOR_COUNT
from gemboard.errors import CascadeLimitExceeded
from gemboard.systems.board_ops import clear_cells, collapse_column, fill_empties
from gemboard.systems.match import find_matches

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class CascadePhase(Enum):
    HIGHLIGHT = "highlight"
    REMOVAL = "removal"
    COLLAPSE = "collapse"
    REFILL = "refill"


@dataclass(frozen=True, slots=True)
class CascadeStep:
    """One presentable moment of a cascade pass.

    ``positions`` are the matched cells for HIGHLIGHT/REMOVAL, the landing cells
    of falling gems for COLLAPSE and the spawned cells for REFILL. ``points`` is
    what this step credits to the score (non-zero only on REMOVAL).
    """
    phase: CascadePhase
    depth: int
    positions: Tuple[Position, ...]
    points: int
    grid: Grid


@dataclass(slots=True)
class CascadeResult:
    points: int = 0
    depth: int = 0
    removed: int = 0
    steps: Tuple[CascadeStep, ...] = field(default_factory=tuple)
    final_grid: Grid = field(default_factory=tuple)

    def __iter__(self) -> Iterator[CascadeStep]:
        # Iterating again always starts from the first step.
        return iter(self.steps)


def pass_limit(board: Board, pass_factor: int = CASCADE_PASS_FACTOR) -> int:
    return board.rows * board.cols * pass_factor


def _settle(board: Board, rng: random.Random, color_count: int, depth: int, limit: int) -> None:
    """Finish an interrupted cascade without recording steps."""
    for col in range(board.cols):
        collapse_column(board, col)
    fill_empties(board, rng, color_count)
    while True:
        matches = find_matches(board)
        if not matches:
            return
        depth += 1
        if depth > limit:
            raise CascadeLimitExceeded(depth - 1, limit)
        clear_cells(board, matches)
        for col in range(board.cols):
            collapse_column(board, col)
        fill_empties(board, rng, color_count)


def iter_cascade(
    board: Board,
    rng: random.Random,
    *,
    color_count: int = COLOR_COUNT,
    base_points: int = BASE_POINTS_PER_GEM,
    max_passes: int | None = None,
) -> Iterator[CascadeStep]:
    """Lazily run remove/collapse/refill/detect passes until the board settles.

    The board is mutated as the generator advances. Closing it early settles
    the board on the spot; points of the unfinished passes are not reported.
    """
    limit = max_passes if max_passes is not None else pass_limit(board)
    depth = 0
    try:
        while True:
            matches = find_matches(board)
            if not matches:
                return
            depth += 1
            if depth > limit:
                raise CascadeLimitExceeded(depth - 1, limit)
            positions = tuple(sorted(matches))
            yield CascadeStep(CascadePhase.HIGHLIGHT, depth, positions, 0, board.snapshot())

            cleared = clear_cells(board, positions)
            points = len(cleared) * base_points * depth
            yield CascadeStep(CascadePhase.REMOVAL, depth, positions, points, board.snapshot())

            landed: List[Position] = []
            for col in range(board.cols):
                landed.extend(move.target for move in collapse_column(board, col))
            yield CascadeStep(CascadePhase.COLLAPSE, depth, tuple(sorted(landed)), 0, board.snapshot())

            spawned = fill_empties(board, rng, color_count)
            yield CascadeStep(CascadePhase.REFILL, depth, tuple(spawned), 0, board.snapshot())
    except GeneratorExit:
        logger.debug("cascade closed at depth %d; settling board", depth)
        _settle(board, rng, color_count, depth, limit)
        raise


class CascadeResolver:
    """Drives a cascade to stability and records every intermediate snapshot."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        color_count: int = COLOR_COUNT,
        base_points: int = BASE_POINTS_PER_GEM,
        pass_factor: int = CASCADE_PASS_FACTOR,
    ):
        self.rng = rng or random.Random()
        self.color_count = color_count
        self.base_points = base_points
        self.pass_factor = pass_factor

    def steps(self, board: Board) -> Iterator[CascadeStep]:
        return iter_cascade(
            board,
            self.rng,
            color_count=self.color_count,
            base_points=self.base_points,
            max_passes=pass_limit(board, self.pass_factor),
        )

    def resolve(self, board: Board) -> CascadeResult:
        result = CascadeResult()
        steps: List[CascadeStep] = []
        for step in self.steps(board):
            steps.append(step)
            if step.phase is CascadePhase.REMOVAL:
                result.points += step.points
                result.removed += len(step.positions)
                result.depth = step.depth
        result.steps = tuple(steps)
        result.final_grid = board.snapshot()
        if result.depth:
            logger.debug(
                "cascade settled: depth=%d removed=%d points=%d",
                result.depth, result.removed, result.points,
            )
        return result
