from __future__ import annotations

import logging
from typing import Optional

from esper import World

from gemboard.components.board import Board, Grid
from gemboard.events.bus import EVENT_BOARD_CREATED, EventBus
from gemboard.systems.board_ops import initialize_board
from gemboard.world import get_config

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the single board entity of a world and (re)generates its contents."""

    def __init__(self, world: World, event_bus: EventBus, *, require_move: bool = True):
        self.world = world
        self.event_bus = event_bus
        self.require_move = require_move
        self.board_entity: Optional[int] = None

    @property
    def board(self) -> Board:
        if self.board_entity is None:
            return self.new_board()
        return self.world.component_for_entity(self.board_entity, Board)

    def new_board(self) -> Board:
        """Replace the board with a freshly generated, match-free one."""
        config = get_config(self.world)
        board = initialize_board(
            config.rows,
            config.cols,
            config.color_count,
            getattr(self.world, "random", None),
            require_move=self.require_move,
        )
        if self.board_entity is None:
            self.board_entity = self.world.create_entity(board)
        else:
            self.world.add_component(self.board_entity, board)
        logger.debug("new %dx%d board on entity %s", board.rows, board.cols, self.board_entity)
        self.event_bus.emit(EVENT_BOARD_CREATED, rows=board.rows, cols=board.cols)
        return board

    def set_board(self, board: Board) -> Board:
        """Install an externally built board (tests, replays)."""
        if self.board_entity is None:
            self.board_entity = self.world.create_entity(board)
        else:
            self.world.add_component(self.board_entity, board)
        return board

    def grid(self) -> Grid:
        return self.board.snapshot()
