from typing import Any, Dict, List, Optional, Tuple

from gemboard.components.board import Grid
from gemboard.constants import PALETTE
from gemboard.events.bus import (
    EventBus,
    EVENT_STATE_CHANGED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
)
from gemboard.systems.animation import AnimationSystem
from gemboard.ui.layout import cell_center, compute_board_geometry

GEM_RADIUS_PCT = 0.4
HUD_COLOR = (220, 225, 230)
SELECTION_COLOR = (255, 255, 255)


class RenderSystem:
    """Draws whichever grid the animation system currently shows, plus a score line."""
    def __init__(self, event_bus: EventBus, window, animation: AnimationSystem, grid_source):
        self.event_bus = event_bus
        self.window = window
        self.animation = animation
        # Callable returning the settled logical grid.
        self.grid_source = grid_source
        self.selected: Optional[Tuple[int, int]] = None
        self.hud: Dict[str, Any] = {}
        self.event_bus.subscribe(EVENT_TILE_SELECTED, self.on_tile_selected)
        self.event_bus.subscribe(EVENT_TILE_DESELECTED, self.on_tile_deselected)
        self.event_bus.subscribe(EVENT_STATE_CHANGED, self.on_state_changed)

    def on_tile_selected(self, sender, **kwargs):
        self.selected = (kwargs.get('row'), kwargs.get('col'))

    def on_tile_deselected(self, sender, **kwargs):
        self.selected = None

    def on_state_changed(self, sender, **kwargs):
        self.hud = dict(kwargs)

    def build_draw_list(self) -> List[Dict[str, Any]]:
        grid: Grid = self.animation.current_grid(fallback=self.grid_source())
        if not grid:
            return []
        rows = len(grid)
        cols = len(grid[0])
        tile_size, _, _ = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        items: List[Dict[str, Any]] = []
        for row, values in enumerate(grid):
            for col, gem in enumerate(values):
                if gem is None:
                    continue
                x, y = cell_center(row, col, self.window.width, self.window.height, rows, cols)
                items.append({
                    'pos': (row, col),
                    'x': x,
                    'y': y,
                    'radius': tile_size * GEM_RADIUS_PCT,
                    'color': PALETTE[gem % len(PALETTE)],
                    'selected': self.selected == (row, col),
                })
        return items

    def hud_text(self) -> str:
        if not self.hud:
            return ""
        status = self.hud.get('status')
        status_name = getattr(status, 'value', status)
        return (
            f"Score {self.hud.get('score', 0)}  Level {self.hud.get('level', 1)}  "
            f"{self.hud.get('progress', 0.0):.0f}%  {status_name}"
        )

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        items = self.build_draw_list()
        try:
            arcade.get_window()
        except Exception:
            return items
        for item in items:
            arcade.draw_circle_filled(item['x'], item['y'], item['radius'], item['color'])
            if item['selected']:
                arcade.draw_circle_outline(item['x'], item['y'], item['radius'] + 3, SELECTION_COLOR, 3)
        arcade.draw_text(self.hud_text(), 10, self.window.height - 30, HUD_COLOR, 16)
        return items
