"""Game state machine: Idle -> Swapping -> Resolving -> Idle | GameOver."""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Tuple

from esper import World

from gemboard.components.board import Board, Grid
from gemboard.components.game_state import GameSnapshot, GameStatus, Session
from gemboard.errors import CascadeLimitExceeded
from gemboard.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GAME_OVER,
    EVENT_LEVEL_UP,
    EVENT_MATCH_FOUND,
    EVENT_SWAP_REJECTED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
    EventBus,
)
from gemboard.systems.board import BoardSystem
from gemboard.systems.board_ops import is_adjacent, swap_cells
from gemboard.systems.match import find_matches
from gemboard.systems.match_resolution import CascadePhase, CascadeResolver, CascadeResult
from gemboard.systems.move_validator import find_hint, has_legal_move
from gemboard.utils.game_state import get_session, publish_snapshot, set_status, snapshot_of
from gemboard.utils.scoring import award_points
from gemboard.world import get_config, get_selection

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

REASON_INVALID_SWAP = "invalid_swap"
REASON_ILLEGAL_STATE = "illegal_state"


class SwapOutcome(Enum):
    RESOLVED = "resolved"
    REVERTED = "reverted"
    GAME_OVER = "game_over"
    REJECTED_INVALID = "rejected_invalid"
    REJECTED_ILLEGAL_STATE = "rejected_illegal_state"


class GameFlowSystem:
    """Orchestrates selection, swaps, cascades, scoring and game over for one world.

    Rejected requests (non-adjacent swaps, input while busy, anything after game
    over) are no-ops: they return a rejection outcome and emit
    ``EVENT_SWAP_REJECTED`` but never raise.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        board_system: BoardSystem | None = None,
        resolver: CascadeResolver | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system or BoardSystem(world, event_bus)
        config = get_config(world)
        self.resolver = resolver or CascadeResolver(
            getattr(world, "random", None),
            color_count=config.color_count,
            base_points=config.base_points,
            pass_factor=config.pass_factor,
        )
        self.last_result: CascadeResult | None = None

        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return get_session(self.world)

    @property
    def board(self) -> Board:
        return self.board_system.board

    def grid(self) -> Grid:
        return self.board.snapshot()

    def snapshot(self) -> GameSnapshot:
        return snapshot_of(self.session)

    def hint(self) -> Optional[Tuple[Position, Position]]:
        if self.session.status is not GameStatus.IDLE:
            return None
        return find_hint(self.board)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> GameSnapshot:
        """Begin a new session on a fresh board."""
        config = get_config(self.world)
        session = self.session
        session.score = 0
        session.level = 1
        session.level_score = 0
        session.score_to_next_level = config.initial_threshold
        session.moves = 0
        session.best_cascade = 0
        get_selection(self.world).position = None
        self.last_result = None
        self.board_system.new_board()
        set_status(self.world, self.event_bus, GameStatus.IDLE)
        logger.debug("session started")
        return publish_snapshot(self.world, self.event_bus)

    def reset(self) -> GameSnapshot:
        return self.start()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select_cell(row, col)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.attempt_swap(tuple(src), tuple(dst))

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def select_cell(self, row: int, col: int) -> Optional[SwapOutcome]:
        """Select a cell; a second, adjacent selection triggers a swap.

        Returns the swap outcome when a swap was attempted or the click was
        rejected, None when only the selection changed.
        """
        pos = (row, col)
        status = self.session.status
        if status is GameStatus.GAME_OVER:
            return self._reject(pos, None, REASON_ILLEGAL_STATE)
        if status is not GameStatus.IDLE or not self.board.in_bounds(row, col):
            return self._reject(pos, None, REASON_INVALID_SWAP)
        selection = get_selection(self.world)
        prev = selection.position
        if prev is None:
            selection.position = pos
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
            return None
        if prev == pos:
            selection.position = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='reselect', prev_row=row, prev_col=col)
            return None
        if not is_adjacent(prev, pos):
            selection.position = pos
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
            return None
        selection.position = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason='swap', prev_row=prev[0], prev_col=prev[1])
        return self.attempt_swap(prev, pos)

    def attempt_swap(self, src: Position, dst: Position) -> SwapOutcome:
        """Swap two adjacent cells and resolve the resulting cascade.

        A runaway cascade restores the pre-swap board, ends the game and
        re-raises ``CascadeLimitExceeded``.
        """
        session = self.session
        if session.status is GameStatus.GAME_OVER:
            return self._reject(src, dst, REASON_ILLEGAL_STATE)
        board = self.board
        if (
            session.status is not GameStatus.IDLE
            or not board.in_bounds(*src)
            or not board.in_bounds(*dst)
            or not is_adjacent(src, dst)
        ):
            return self._reject(src, dst, REASON_INVALID_SWAP)

        self._transition(GameStatus.SWAPPING)
        before = board.state()
        swap_cells(board, src, dst)
        matches = find_matches(board)
        if not matches:
            swap_cells(board, dst, src)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
            self._transition(GameStatus.IDLE)
            return SwapOutcome.REVERTED

        session.moves += 1
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        flat_positions = sorted(matches)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=flat_positions, size=len(flat_positions))
        self._transition(GameStatus.RESOLVING)
        try:
            self._resolve(board)
        except CascadeLimitExceeded:
            # Nothing has been credited yet; put the pre-swap board back and stop the game.
            logger.error("cascade limit hit after swap %s -> %s; ending game", src, dst)
            board.restore(before)
            session.moves -= 1
            self._end_game()
            raise

        if not has_legal_move(board):
            self._end_game()
            return SwapOutcome.GAME_OVER
        self._transition(GameStatus.IDLE)
        return SwapOutcome.RESOLVED

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, board: Board) -> CascadeResult:
        session = self.session
        config = get_config(self.world)
        result = self.resolver.resolve(board)
        for step in result.steps:
            self.event_bus.emit(EVENT_CASCADE_STEP, step=step, depth=step.depth, phase=step.phase)
            if step.phase is not CascadePhase.REMOVAL:
                continue
            # Score is credited pass by pass so a long cascade can cross several levels.
            if award_points(session, step.points, config.threshold_factor):
                logger.info("level up: level=%d next=%d", session.level, session.score_to_next_level)
                self.event_bus.emit(EVENT_LEVEL_UP, level=session.level, threshold=session.score_to_next_level)
        session.best_cascade = max(session.best_cascade, result.depth)
        self.last_result = result
        self.event_bus.emit(
            EVENT_CASCADE_COMPLETE, result=result, depth=result.depth, best=session.best_cascade,
        )
        return result

    def _end_game(self) -> None:
        session = self.session
        self._transition(GameStatus.GAME_OVER)
        logger.info("game over: score=%d level=%d", session.score, session.level)
        self.event_bus.emit(EVENT_GAME_OVER, score=session.score, level=session.level)

    def _transition(self, status: GameStatus) -> None:
        set_status(self.world, self.event_bus, status)
        publish_snapshot(self.world, self.event_bus)

    def _reject(self, src: Position, dst: Optional[Position], reason: str) -> SwapOutcome:
        logger.debug("rejected %s -> %s: %s", src, dst, reason)
        self.event_bus.emit(EVENT_SWAP_REJECTED, src=src, dst=dst, reason=reason)
        if reason == REASON_ILLEGAL_STATE:
            return SwapOutcome.REJECTED_ILLEGAL_STATE
        return SwapOutcome.REJECTED_INVALID
