from gemboard.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from gemboard.ui.layout import cell_at_point

# Arcade reports the left mouse button as 1.
LEFT_BUTTON = 1


class InputSystem:
    """Translates left clicks on the board area into tile clicks."""
    def __init__(self, event_bus: EventBus, window, rows: int, cols: int):
        self.event_bus = event_bus
        self.window = window
        self.rows = rows
        self.cols = cols
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        if kwargs.get('button', LEFT_BUTTON) != LEFT_BUTTON:
            return
        cell = cell_at_point(x, y, self.window.width, self.window.height, self.rows, self.cols)
        if cell is None:
            return
        row, col = cell
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
