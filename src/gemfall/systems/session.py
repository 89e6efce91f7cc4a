from __future__ import annotations

import logging

from esper import World

from gemfall.components.session_state import SessionPhase, SessionState
from gemfall.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_PAUSE_CHANGED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_SESSION_RESET,
    EVENT_STATE_CHANGED,
    EVENT_SWAP_APPLIED,
    EVENT_SWAP_REVERTED,
    EVENT_TOKEN_CLICK,
    EVENT_TOKEN_DESELECTED,
    EVENT_TOKEN_SELECTED,
)
from gemfall.snapshot import SessionSnapshot
from gemfall.systems.cascade import CascadeRound, resolve_cascade
from gemfall.systems.grid import apply_layout, board_snapshot, clear_board, fill_board, has_token, layout
from gemfall.systems.match import find_matches
from gemfall.systems.swap import try_swap
from gemfall.world import get_session_state

logger = logging.getLogger(__name__)


class SessionSystem:
    """Selection state machine and score owner for a single board.

    Flow:
      - Idle: a selection moves to Selected(id).
      - Selected(a): selecting a again deselects; an adjacent b swaps and resolves;
        a non-adjacent b replaces the selection.
      - Processing: the swap and its cascade run to completion; further selections
        are ignored until the session is Idle again.
    Every phase transition is published with a SessionSnapshot payload.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TOKEN_CLICK, self.on_token_click)
        get_session_state(self.world)  # requires the SessionState singleton

    def detach(self) -> None:
        self.event_bus.unsubscribe(EVENT_TOKEN_CLICK, self.on_token_click)

    @property
    def state(self) -> SessionState:
        return get_session_state(self.world)

    def snapshot(self) -> SessionSnapshot:
        state = self.state
        return SessionSnapshot(
            phase=state.phase,
            selected_id=state.selected_id,
            score=state.score,
            paused=state.paused,
            board=board_snapshot(self.world),
            last_removed_ids=state.last_removed_ids,
        )

    def on_token_click(self, sender, **kwargs):
        token_id = kwargs.get('token_id')
        if token_id is None:
            return
        self.select(token_id)

    def select(self, token_id: int) -> SessionSnapshot:
        if not has_token(self.world, token_id):
            raise KeyError(f"Token {token_id} is not on the board")
        state = self.state
        if state.phase is SessionPhase.PROCESSING or state.paused:
            return self.snapshot()
        if state.phase is SessionPhase.IDLE:
            self._select(token_id)
            return self.snapshot()
        selected = state.selected_id
        if selected == token_id:
            self._deselect(reason='toggle')
            return self.snapshot()
        before = layout(self.world)
        result = try_swap(self.world, selected, token_id)
        if not result.applied:
            self._select(token_id)
            return self.snapshot()
        state.selected_id = None
        self._set_phase(SessionPhase.PROCESSING)
        self.event_bus.emit(EVENT_SWAP_APPLIED, src=selected, dst=token_id, snapshot=self.snapshot())
        if find_matches(self.world):
            self._resolve()
        else:
            apply_layout(self.world, before)
            state.last_removed_ids = frozenset()
            logger.debug("Swap %s<->%s made no match, reverted", selected, token_id)
            self.event_bus.emit(EVENT_SWAP_REVERTED, src=selected, dst=token_id, snapshot=self.snapshot())
        self._set_phase(SessionPhase.IDLE)
        if state.reset_pending:
            self.reset()
        return self.snapshot()

    def reset(self) -> SessionSnapshot:
        state = self.state
        if state.phase is SessionPhase.PROCESSING:
            # Applied once the running cascade has finished.
            state.reset_pending = True
            return self.snapshot()
        state.reset_pending = False
        clear_board(self.world)
        fill_board(self.world)
        previous_score = state.score
        state.score = 0
        state.selected_id = None
        state.last_removed_ids = frozenset()
        self._set_phase(SessionPhase.IDLE)
        logger.debug("Session reset")
        if previous_score:
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=-previous_score)
        self.event_bus.emit(EVENT_SESSION_RESET, snapshot=self.snapshot())
        return self.snapshot()

    def set_paused(self, paused: bool) -> SessionSnapshot:
        state = self.state
        paused = bool(paused)
        if state.paused != paused:
            state.paused = paused
            self.event_bus.emit(EVENT_PAUSE_CHANGED, paused=paused, snapshot=self.snapshot())
        return self.snapshot()

    def _resolve(self) -> None:
        state = self.state
        result = resolve_cascade(self.world, observer=self._on_cascade_stage)
        state.last_removed_ids = result.removed_ids
        logger.debug("Cascade finished after %d rounds, +%d", result.rounds_run, result.score_delta)
        self.event_bus.emit(
            EVENT_CASCADE_COMPLETE,
            depth=result.rounds_run,
            score_delta=result.score_delta,
            snapshot=self.snapshot(),
        )

    def _on_cascade_stage(self, stage: str, rnd: CascadeRound) -> None:
        state = self.state
        if stage == 'match':
            self.event_bus.emit(
                EVENT_MATCH_FOUND,
                token_ids=rnd.matched_ids,
                runs=list(rnd.runs),
                depth=rnd.depth,
                snapshot=self.snapshot(),
            )
        elif stage == 'clear':
            self.event_bus.emit(
                EVENT_MATCH_CLEARED,
                token_ids=rnd.matched_ids,
                score_delta=rnd.score_delta,
                depth=rnd.depth,
                snapshot=self.snapshot(),
            )
        elif stage == 'gravity':
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=list(rnd.moves), depth=rnd.depth, snapshot=self.snapshot())
        elif stage == 'refill':
            state.score += rnd.score_delta
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=rnd.score_delta)
            self.event_bus.emit(
                EVENT_CASCADE_STEP,
                depth=rnd.depth,
                multiplier=rnd.multiplier,
                score_delta=rnd.score_delta,
            )
            self.event_bus.emit(
                EVENT_REFILL_COMPLETED,
                token_ids=list(rnd.spawned_ids),
                depth=rnd.depth,
                snapshot=self.snapshot(),
            )

    def _select(self, token_id: int) -> None:
        state = self.state
        state.selected_id = token_id
        self._set_phase(SessionPhase.SELECTED)
        self.event_bus.emit(EVENT_TOKEN_SELECTED, token_id=token_id, snapshot=self.snapshot())

    def _deselect(self, reason: str) -> None:
        state = self.state
        previous = state.selected_id
        state.selected_id = None
        self._set_phase(SessionPhase.IDLE)
        self.event_bus.emit(EVENT_TOKEN_DESELECTED, token_id=previous, reason=reason, snapshot=self.snapshot())

    def _set_phase(self, phase: SessionPhase) -> None:
        state = self.state
        previous = state.phase
        if previous is phase:
            return
        state.phase = phase
        logger.debug("Session %s -> %s", previous.name, phase.name)
        self.event_bus.emit(EVENT_STATE_CHANGED, previous=previous, new=phase, snapshot=self.snapshot())
