import pytest

from esper import World

from gemfall.components.board import Board
from gemfall.components.session_state import SessionState
from gemfall.config import BoardConfig
from gemfall.events.bus import EventBus
from gemfall.systems.grid import all_tokens, board_dimensions, is_full, layout, token_at
from gemfall.systems.session import SessionSystem
from gemfall.world import create_world, get_session_state


def test_board_component_exists():
    world = create_world(BoardConfig(width=7, height=6, kinds=('A', 'B', 'C')))
    boards = list(world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.rows == 6 and comp.cols == 7
    assert board_dimensions(world) == (6, 7)


def test_default_world_is_eight_by_eight_and_full():
    world = create_world()
    assert board_dimensions(world) == (8, 8)
    assert is_full(world)
    tokens = all_tokens(world)
    assert len(tokens) == 64
    assert len({t.id for t in tokens}) == 64
    assert {(t.row, t.col) for t in tokens} == {(r, c) for r in range(8) for c in range(8)}


def test_all_tokens_is_row_major_and_agrees_with_layout():
    world = create_world(BoardConfig(width=4, height=3, kinds=('A', 'B', 'C')))
    tokens = all_tokens(world)
    assert [(t.row, t.col) for t in tokens] == [(r, c) for r in range(3) for c in range(4)]
    assert {t.id: (t.row, t.col) for t in tokens} == layout(world)
    for t in tokens:
        assert token_at(world, t.row, t.col) == t.id


@pytest.mark.parametrize('row,col', [(-1, 0), (0, -1), (3, 0), (0, 4)])
def test_token_at_outside_board_raises(row, col):
    world = create_world(BoardConfig(width=4, height=3, kinds=('A', 'B', 'C')))
    with pytest.raises(IndexError):
        token_at(world, row, col)


@pytest.mark.parametrize('config', [
    BoardConfig(width=0),
    BoardConfig(height=-2),
    BoardConfig(width=3.5),
    BoardConfig(kinds=()),
    BoardConfig(kinds=('A', 'A', 'B')),
    BoardConfig(kind_picker='A'),
])
def test_invalid_config_rejected(config):
    with pytest.raises(ValueError):
        create_world(config)


def test_picker_outside_alphabet_rejected():
    with pytest.raises(ValueError):
        create_world(BoardConfig(width=2, height=2, kinds=('A', 'B'), kind_picker=lambda: 'Z'))


def test_missing_session_state_fails_fast():
    with pytest.raises(RuntimeError):
        get_session_state(World())
    world = create_world(BoardConfig(width=3, height=3, kinds=('A', 'B', 'C')))
    for ent, _ in list(world.get_component(SessionState)):
        world.delete_entity(ent, immediate=True)
    with pytest.raises(RuntimeError):
        SessionSystem(world, EventBus())
