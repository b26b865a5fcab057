"""Session state for one game instance."""
from dataclasses import dataclass
from enum import Enum

from gemboard.constants import INITIAL_LEVEL_THRESHOLD


class GameStatus(Enum):
    """Lifecycle states of the game state machine."""
    IDLE = "idle"
    SWAPPING = "swapping"
    RESOLVING = "resolving"
    GAME_OVER = "gameover"


@dataclass(slots=True)
class Session:
    """Singleton component holding score, level progress and status."""
    score: int = 0
    level: int = 1
    level_score: int = 0
    score_to_next_level: int = INITIAL_LEVEL_THRESHOLD
    status: GameStatus = GameStatus.IDLE
    moves: int = 0
    best_cascade: int = 0

    @property
    def progress(self) -> float:
        if self.score_to_next_level <= 0:
            return 100.0
        return min(100.0, self.level_score / self.score_to_next_level * 100)


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Outward report emitted after every state transition."""
    status: GameStatus
    score: int
    level: int
    progress: float
