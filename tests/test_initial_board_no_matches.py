import random

import pytest

from gemfall.config import BoardConfig
from gemfall.systems.grid import all_tokens, is_full
from gemfall.systems.match import find_matches
from gemfall.world import create_world
from helpers import ScriptedPicker


@pytest.mark.parametrize('seed', range(20))
def test_initial_board_has_no_matches(seed):
    rng = random.Random(seed)
    world = create_world(BoardConfig.default(rng), rng=rng)
    assert is_full(world)
    assert not find_matches(world), 'Initial board should not contain any matches'


def test_small_alphabet_board_still_fills_without_matches():
    rng = random.Random(3)
    world = create_world(BoardConfig(width=6, height=6, kinds=('A', 'B', 'C')), rng=rng)
    assert is_full(world)
    assert not find_matches(world)


def test_fill_redraws_kind_that_completes_a_row_triple():
    picker = ScriptedPicker(['A', 'A', 'A', 'B'])
    world = create_world(BoardConfig(width=3, height=1, kinds=('A', 'B'), kind_picker=picker))
    assert [t.kind for t in all_tokens(world)] == ['A', 'A', 'B']
    assert picker.calls == 4


def test_fill_redraws_kind_that_completes_a_column_triple():
    picker = ScriptedPicker(['A', 'A', 'A', 'C'])
    world = create_world(BoardConfig(width=1, height=3, kinds=('A', 'C'), kind_picker=picker))
    assert [t.kind for t in all_tokens(world)] == ['A', 'A', 'C']


def test_fill_gives_up_when_only_one_kind_exists():
    with pytest.raises(RuntimeError):
        create_world(BoardConfig(width=3, height=1, kinds=('A',)))


def test_single_kind_board_too_small_for_runs_fills():
    world = create_world(BoardConfig(width=2, height=2, kinds=('A',)))
    assert [t.kind for t in all_tokens(world)] == ['A'] * 4
