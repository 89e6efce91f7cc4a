import random

import pytest

from gemfall.components.session_state import SessionPhase
from gemfall.config import BoardConfig
from gemfall.constants import DEFAULT_KINDS
from gemfall.engine import Engine
from gemfall.events.bus import EventBus, EVENT_TOKEN_CLICK
from gemfall.systems.match import find_matches
from helpers import find_matching_swap


def test_engine_requires_initialize():
    engine = Engine()
    assert not engine.initialized
    for call in (lambda: engine.select(1), engine.reset, lambda: engine.set_paused(True), engine.snapshot):
        with pytest.raises(RuntimeError):
            call()


def test_default_initialize_builds_eight_by_eight_board():
    engine = Engine(rng=random.Random(11))
    board = engine.initialize()
    assert (board.width, board.height) == (8, 8)
    assert len(board.tokens) == 64
    assert {t.kind for t in board.tokens} <= set(DEFAULT_KINDS)
    assert not find_matches(engine.world)
    snap = engine.snapshot()
    assert snap.state == "Idle"
    assert snap.score == 0 and not snap.paused
    assert snap.board == board


def test_initialize_with_invalid_config_raises():
    engine = Engine()
    with pytest.raises(ValueError):
        engine.initialize(BoardConfig(width=0, height=4))
    assert not engine.initialized


def test_reinitialize_replaces_session():
    bus = EventBus()
    engine = Engine(bus, rng=random.Random(5))
    engine.initialize()
    old_session = engine.session
    board = engine.initialize(BoardConfig(width=5, height=4, kinds=('A', 'B', 'C', 'D')))
    assert (board.width, board.height) == (5, 4)
    assert engine.session is not old_session
    target = board.tokens[0].id
    bus.emit(EVENT_TOKEN_CLICK, token_id=target)
    assert engine.snapshot().selected_id == target


def test_play_a_matching_swap_through_the_engine():
    engine = Engine(rng=random.Random(21))
    pair = None
    for _ in range(10):
        engine.initialize()
        pair = find_matching_swap(engine.world)
        if pair is not None:
            break
    assert pair is not None
    first, second = pair
    assert engine.select(first).phase is SessionPhase.SELECTED
    snap = engine.select(second)
    assert snap.phase is SessionPhase.IDLE
    assert snap.score >= 30
    assert snap.score % 10 == 0
    assert len(snap.tokens) == 64
    assert snap.last_removed_ids
    assert not snap.last_removed_ids & set(snap.board.by_id())
    assert not find_matches(engine.world)

    paused = engine.set_paused(True)
    assert paused.paused
    reset = engine.reset()
    assert reset.score == 0
    assert reset.paused
    assert reset.last_removed_ids == frozenset()
