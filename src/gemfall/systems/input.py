from gemfall.constants import KEY_PAUSE, KEY_RESET, MOUSE_BUTTON_LEFT
from gemfall.engine import Engine
from gemfall.events.bus import EventBus, EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EVENT_TOKEN_CLICK
from gemfall.systems.grid import board_dimensions, token_at
from gemfall.ui.layout import cell_at_point

class InputSystem:
    """Turns window input into engine requests.

    Board clicks become token_click events (handled by the SessionSystem) and are
    dropped while the playback queue is still showing earlier phases.
    """
    def __init__(self, event_bus: EventBus, window, engine: Engine, playback=None):
        self.event_bus = event_bus
        self.window = window
        self.engine = engine
        self.playback = playback
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        if not self.engine.initialized:
            return
        if self.playback is not None and self.playback.busy:
            return
        rows, cols = board_dimensions(self.engine.world)
        cell = cell_at_point(x, y, self.window.width, self.window.height, rows, cols)
        if cell is None:
            return
        token_id = token_at(self.engine.world, *cell)
        if token_id is None:
            return
        self.event_bus.emit(EVENT_TOKEN_CLICK, token_id=token_id)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None or not self.engine.initialized:
            return
        if symbol == KEY_PAUSE:
            self.engine.set_paused(not self.engine.snapshot().paused)
        elif symbol == KEY_RESET:
            self.engine.reset()
