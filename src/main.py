"""Entry point for the Gemfall match-three board.

Sets up the engine, event bus, presentation systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from gemfall.engine import Engine
from gemfall.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EVENT_TICK, EventBus
from gemfall.systems.input import InputSystem
from gemfall.systems.playback import PlaybackSystem
from gemfall.systems.render import RenderSystem

class GemfallWindow(Window):
    def __init__(self):
        super().__init__(800, 700, "Gemfall")
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.engine = Engine(self.event_bus)
        self.playback_system = PlaybackSystem(self.event_bus)
        self.engine.initialize()
        self.input_system = InputSystem(self.event_bus, self, self.engine, self.playback_system)
        self.render_system = RenderSystem(self, self.engine, self.playback_system)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

def main():
    logging.basicConfig(level=logging.INFO)
    window = GemfallWindow()
    run()

if __name__ == "__main__":
    main()
