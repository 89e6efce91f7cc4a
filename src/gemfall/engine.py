"""Boundary offered to a presentation/input layer.

An Engine wraps one world and its SessionSystem. ``initialize`` may be called
again to start over with a different configuration.
"""
from __future__ import annotations

import random

from esper import World

from gemfall.config import BoardConfig
from gemfall.events.bus import EventBus
from gemfall.snapshot import BoardSnapshot, SessionSnapshot
from gemfall.systems.grid import board_snapshot
from gemfall.systems.session import SessionSystem
from gemfall.world import create_world


class Engine:
    def __init__(self, event_bus: EventBus | None = None, *, rng: random.Random | None = None):
        self.event_bus = event_bus or EventBus()
        self.rng = rng or random.Random()
        self.world: World | None = None
        self.session: SessionSystem | None = None

    def initialize(self, config: BoardConfig | None = None) -> BoardSnapshot:
        if config is None:
            config = BoardConfig.default(self.rng)
        world = create_world(config, rng=self.rng)
        if self.session is not None:
            self.session.detach()
        self.world = world
        self.session = SessionSystem(world, self.event_bus)
        return board_snapshot(world)

    def select(self, token_id: int) -> SessionSnapshot:
        return self._require_session().select(token_id)

    def reset(self) -> SessionSnapshot:
        return self._require_session().reset()

    def set_paused(self, paused: bool) -> SessionSnapshot:
        return self._require_session().set_paused(paused)

    def snapshot(self) -> SessionSnapshot:
        return self._require_session().snapshot()

    @property
    def initialized(self) -> bool:
        return self.session is not None

    def _require_session(self) -> SessionSystem:
        if self.session is None:
            raise RuntimeError("Engine not initialized; call initialize() first")
        return self.session
