from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from esper import World

from gemfall.systems.grid import Layout, layout, move_token, position_of


@dataclass(slots=True)
class SwapResult:
    applied: bool
    layout: Layout


def is_adjacent(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1


def try_swap(world: World, id_a: int, id_b: int) -> SwapResult:
    """Exchange the positions of two orthogonally adjacent tokens.

    Kinds and ids are untouched. When the tokens are not adjacent nothing changes
    and ``applied`` is False. Whether to keep the tentative layout is up to the caller.
    """
    pos_a = position_of(world, id_a)
    pos_b = position_of(world, id_b)
    if not is_adjacent(pos_a, pos_b):
        return SwapResult(applied=False, layout=layout(world))
    move_token(world, id_a, *pos_b)
    move_token(world, id_b, *pos_a)
    return SwapResult(applied=True, layout=layout(world))
