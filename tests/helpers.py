from __future__ import annotations

from collections import deque
from itertools import cycle
from typing import Callable, Iterable, Sequence

from esper import World

from gemfall.config import BoardConfig
from gemfall.events.bus import EventBus
from gemfall.systems.grid import apply_layout, get_board, layout, spawn_token
from gemfall.systems.match import find_matches
from gemfall.systems.swap import try_swap
from gemfall.world import create_world

KINDS = ('A', 'B', 'C', 'D', 'E', 'F')


class ScriptedPicker:
    """Kind picker that hands out a fixed script, then falls back to a cycle if given one."""

    def __init__(self, kinds: Iterable[str] = (), fallback: Iterable[str] | None = None):
        self._queue = deque(kinds)
        self._fallback = cycle(fallback) if fallback is not None else None
        self.calls = 0

    def extend(self, kinds: Iterable[str]) -> None:
        self._queue.extend(kinds)

    def __call__(self) -> str:
        self.calls += 1
        if self._queue:
            return self._queue.popleft()
        if self._fallback is None:
            raise AssertionError("Kind picker script exhausted")
        return next(self._fallback)


def build_board(
    rows: Sequence[str],
    *,
    refill: Iterable[str] = (),
    fallback: Iterable[str] | None = None,
    kinds: Sequence[str] = KINDS,
) -> tuple[World, list[list[int]], ScriptedPicker]:
    """Lay out tokens from strings, one character per kind, row 0 first.

    Returns the world, the grid of token ids and the picker used for refills.
    """
    picker = ScriptedPicker(refill, fallback)
    config = BoardConfig(width=len(rows[0]), height=len(rows), kinds=kinds, kind_picker=picker)
    world = create_world(config, fill=False)
    ids = [[spawn_token(world, r, c, kind) for c, kind in enumerate(row)] for r, row in enumerate(rows)]
    return world, ids, picker


def find_matching_swap(world: World) -> tuple[int, int] | None:
    """Return a pair of adjacent token ids whose swap would create a match."""
    board = get_board(world)
    before = layout(world)
    for row in range(board.rows):
        for col in range(board.cols):
            for d_row, d_col in ((0, 1), (1, 0)):
                n_row, n_col = row + d_row, col + d_col
                if n_row >= board.rows or n_col >= board.cols:
                    continue
                a = board.cells[row][col]
                b = board.cells[n_row][n_col]
                try_swap(world, a, b)
                matched = bool(find_matches(world))
                apply_layout(world, before)
                if matched:
                    return a, b
    return None


class EventRecorder:
    """Captures (event_name, payload) pairs for the events it is asked to watch."""

    def __init__(self, bus: EventBus):
        self.bus = bus
        self.received: list[tuple[str, dict]] = []

    def watch(self, *names: str) -> "EventRecorder":
        for name in names:
            self.bus.subscribe(name, self._handler_for(name))
        return self

    def _handler_for(self, name: str) -> Callable:
        def handler(sender, **payload):
            self.received.append((name, payload))
        return handler

    def names(self) -> list[str]:
        return [name for name, _ in self.received]

    def payloads(self, name: str) -> list[dict]:
        return [payload for event, payload in self.received if event == name]
