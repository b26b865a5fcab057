"""Entry point for the gem board demo.

Sets up the ECS world, event bus, systems and an Arcade window.
"""
import logging

from arcade import Window, run, color

from gemboard.components.game_state import GameStatus
from gemboard.constants import WINDOW_HEIGHT, WINDOW_WIDTH
from gemboard.events.bus import EventBus, EVENT_GAME_OVER, EVENT_MOUSE_PRESS, EVENT_TICK
from gemboard.systems.animation import AnimationSystem
from gemboard.systems.game_flow_system import GameFlowSystem
from gemboard.systems.high_score_system import HighScoreSystem, InMemoryHighScoreStore
from gemboard.systems.input import InputSystem
from gemboard.systems.render import RenderSystem
from gemboard.world import create_world, get_config

logger = logging.getLogger(__name__)


class GemBoardWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Gem Board")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world()
        config = get_config(self.world)
        self.game_flow = GameFlowSystem(self.world, self.event_bus)
        self.animation_system = AnimationSystem(self.event_bus)
        self.render_system = RenderSystem(self.event_bus, self, self.animation_system, self.game_flow.grid)
        self.input_system = InputSystem(self.event_bus, self, config.rows, config.cols)
        self.high_scores = HighScoreSystem(self.event_bus, InMemoryHighScoreStore())
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)
        self.background_color = color.BLACK
        self.game_flow.start()

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        # Clicks during a cascade animation jump straight to the settled board.
        if self.animation_system.active:
            self.animation_system.skip()
            return
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        # Any key restarts after game over.
        if self.game_flow.snapshot().status is GameStatus.GAME_OVER:
            self.animation_system.skip()
            self.game_flow.reset()

    def on_game_over(self, sender, **kwargs):
        logger.info("final score %s, best %s", kwargs.get('score'), self.high_scores.high_score)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    GemBoardWindow()
    run()

if __name__ == "__main__":
    main()
