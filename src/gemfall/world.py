import random

from esper import World

from gemfall.config import BoardConfig
from gemfall.components.board import Board
from gemfall.components.session_state import SessionState
from gemfall.components.token_kinds import TokenKinds
from gemfall.systems.grid import fill_board


def create_world(
    config: BoardConfig | None = None,
    *,
    rng: random.Random | None = None,
    fill: bool = True,
) -> World:
    """Build a world holding the board, kind registry and session state singletons.

    With ``fill`` the board is populated using the initial anti-match fill; tests
    pass ``fill=False`` to lay out tokens themselves.
    """
    config = config or BoardConfig()
    config.validate()
    world = World()
    setattr(world, "random", rng or random.Random())

    world.create_entity(TokenKinds(kinds=list(config.kinds), picker=config.kind_picker))
    world.create_entity(Board(rows=config.height, cols=config.width))
    world.create_entity(SessionState())

    if fill:
        fill_board(world)
    return world


def get_session_state(world: World) -> SessionState:
    for _, state in world.get_component(SessionState):
        return state
    raise RuntimeError("SessionState not found")
