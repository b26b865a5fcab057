from typing import Optional, Tuple

from gemboard.components.board import Grid
from gemboard.constants import STEP_SECONDS
from gemboard.events.bus import EVENT_CASCADE_COMPLETE, EVENT_TICK, EventBus
from gemboard.systems.match_resolution import CascadeResult, CascadeStep


class AnimationSystem:
    """Paces the recorded cascade snapshots over tick time.

    The logical board is already settled when a cascade result arrives; this
    system only decides which snapshot a renderer should show right now.
    """
    def __init__(self, event_bus: EventBus, step_seconds: float = STEP_SECONDS):
        self.event_bus = event_bus
        self.step_seconds = step_seconds
        self._steps: Tuple[CascadeStep, ...] = ()
        self._final_grid: Optional[Grid] = None
        self._cursor = 0
        self._elapsed = 0.0
        event_bus.subscribe(EVENT_CASCADE_COMPLETE, self.on_cascade_complete)
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    @property
    def active(self) -> bool:
        return self._cursor < len(self._steps)

    @property
    def current_step(self) -> Optional[CascadeStep]:
        if not self.active:
            return None
        return self._steps[self._cursor]

    def current_grid(self, fallback: Optional[Grid] = None) -> Optional[Grid]:
        step = self.current_step
        if step is not None:
            return step.grid
        return fallback if fallback is not None else self._final_grid

    def on_cascade_complete(self, sender, **kwargs):
        result: Optional[CascadeResult] = kwargs.get('result')
        if result is None:
            return
        self.play(result)

    def play(self, result: CascadeResult) -> None:
        self._steps = tuple(result)
        self._final_grid = result.final_grid
        self._cursor = 0
        self._elapsed = 0.0

    def on_tick(self, sender, **kwargs):
        if not self.active:
            return
        dt = kwargs.get('dt', 1/60)
        self._elapsed += dt
        while self.active and self._elapsed >= self.step_seconds:
            self._elapsed -= self.step_seconds
            self._cursor += 1

    def skip(self) -> Optional[Grid]:
        """Abandon the remaining steps and snap to the settled grid."""
        self._cursor = len(self._steps)
        self._elapsed = 0.0
        return self._final_grid
