from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else references alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button
EVENT_KEY_PRESS = "key_press"                      # payload: symbol, modifiers
EVENT_TOKEN_CLICK = "token_click"                  # payload: token_id=int


# ============================================================================
# SESSION
# ============================================================================
EVENT_TOKEN_SELECTED = "token_selected"            # payload: token_id=int, snapshot
EVENT_TOKEN_DESELECTED = "token_deselected"        # payload: token_id=int, reason=str, snapshot
EVENT_STATE_CHANGED = "state_changed"              # payload: previous=SessionPhase, new=SessionPhase, snapshot
EVENT_PAUSE_CHANGED = "pause_changed"              # payload: paused=bool, snapshot
EVENT_SESSION_RESET = "session_reset"              # payload: snapshot
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_SWAP_APPLIED = "swap_applied"                # payload: src=id, dst=id, snapshot
EVENT_SWAP_REVERTED = "swap_reverted"              # payload: src=id, dst=id, snapshot
EVENT_MATCH_FOUND = "match_found"                  # payload: token_ids=frozenset, runs=list[tuple], depth=int, snapshot
EVENT_MATCH_CLEARED = "match_cleared"              # payload: token_ids=frozenset, score_delta=int, depth=int, snapshot
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove], depth=int, snapshot
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: token_ids=list[int], depth=int, snapshot
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, multiplier=int, score_delta=int
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, score_delta=int, snapshot


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, snapshot
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, snapshot
