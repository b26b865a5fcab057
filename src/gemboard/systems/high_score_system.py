from __future__ import annotations

import logging
from typing import Dict, Protocol

from gemboard.constants import HIGH_SCORE_KEY
from gemboard.events.bus import EVENT_GAME_OVER, EventBus

logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    """Key/value collaborator used to keep the best score between sessions."""

    def get(self, key: str, default: int = 0) -> int: ...

    def put(self, key: str, value: int) -> None: ...


class InMemoryHighScoreStore:
    def __init__(self) -> None:
        self._values: Dict[str, int] = {}

    def get(self, key: str, default: int = 0) -> int:
        return self._values.get(key, default)

    def put(self, key: str, value: int) -> None:
        self._values[key] = value


class HighScoreSystem:
    """Records the final score of each finished game when it beats the stored best."""

    def __init__(self, event_bus: EventBus, store: HighScoreStore, key: str = HIGH_SCORE_KEY):
        self.event_bus = event_bus
        self.store = store
        self.key = key
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    @property
    def high_score(self) -> int:
        return self.store.get(self.key, 0)

    def on_game_over(self, sender, **kwargs):
        score = kwargs.get('score')
        if score is None:
            return
        if score > self.high_score:
            logger.info("new high score %d", score)
            self.store.put(self.key, int(score))
