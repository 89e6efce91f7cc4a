from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional

from gemfall.constants import PHASE_DURATIONS
from gemfall.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_CASCADE_COMPLETE,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_PAUSE_CHANGED,
    EVENT_REFILL_COMPLETED,
    EVENT_SESSION_RESET,
    EVENT_SWAP_APPLIED,
    EVENT_SWAP_REVERTED,
    EVENT_TICK,
    EVENT_TOKEN_DESELECTED,
    EVENT_TOKEN_SELECTED,
)
from gemfall.snapshot import SessionSnapshot


@dataclass(slots=True)
class PhaseFrame:
    kind: str  # 'swap', 'revert', 'match', 'clear', 'gravity', 'refill', ...
    snapshot: SessionSnapshot
    duration: float = 0.0
    elapsed: float = 0.0


PHASE_EVENTS = {
    EVENT_TOKEN_SELECTED: 'selected',
    EVENT_TOKEN_DESELECTED: 'deselected',
    EVENT_SWAP_APPLIED: 'swap',
    EVENT_SWAP_REVERTED: 'revert',
    EVENT_MATCH_FOUND: 'match',
    EVENT_MATCH_CLEARED: 'clear',
    EVENT_GRAVITY_APPLIED: 'gravity',
    EVENT_REFILL_COMPLETED: 'refill',
    EVENT_CASCADE_COMPLETE: 'settled',
    EVENT_PAUSE_CHANGED: 'pause',
}


class PlaybackSystem:
    """Replays engine phase snapshots one at a time, paced by tick events.

    The engine resolves a whole swap synchronously; this queue is what turns the
    ordered snapshots into something a renderer can show step by step.
    """
    def __init__(self, event_bus: EventBus, durations: Optional[Dict[str, float]] = None):
        self.event_bus = event_bus
        self.durations = dict(PHASE_DURATIONS)
        if durations:
            self.durations.update(durations)
        self.queue: Deque[PhaseFrame] = deque()
        self.active: Optional[PhaseFrame] = None
        self.last_shown: Optional[SessionSnapshot] = None
        for event_name, kind in PHASE_EVENTS.items():
            self.event_bus.subscribe(event_name, lambda s, _kind=kind, **k: self.enqueue(_kind, k.get('snapshot')))
        self.event_bus.subscribe(EVENT_SESSION_RESET, self.on_session_reset)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    @property
    def busy(self) -> bool:
        return self.active is not None or bool(self.queue)

    @property
    def current(self) -> Optional[SessionSnapshot]:
        if self.active is not None:
            return self.active.snapshot
        return self.last_shown

    def enqueue(self, kind: str, snapshot: Optional[SessionSnapshot]):
        if snapshot is None:
            return
        frame = PhaseFrame(kind=kind, snapshot=snapshot, duration=self.durations.get(kind, 0.0))
        self.queue.append(frame)
        if self.active is None:
            self._start_next()

    def on_session_reset(self, sender, **kwargs):
        snapshot = kwargs.get('snapshot')
        self.queue.clear()
        self.active = None
        if snapshot is not None:
            self.last_shown = snapshot

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        frame = self.active
        if frame is None:
            return
        frame.elapsed += dt
        while frame is not None and frame.elapsed >= frame.duration:
            leftover = frame.elapsed - frame.duration
            self._finish(frame)
            frame = self._start_next()
            if frame is not None:
                frame.elapsed += leftover

    def _start_next(self) -> Optional[PhaseFrame]:
        if not self.queue:
            self.active = None
            return None
        self.active = self.queue.popleft()
        self.event_bus.emit(EVENT_ANIMATION_START, kind=self.active.kind, snapshot=self.active.snapshot)
        return self.active

    def _finish(self, frame: PhaseFrame):
        self.last_shown = frame.snapshot
        self.active = None
        self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind=frame.kind, snapshot=frame.snapshot)
