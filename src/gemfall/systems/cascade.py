from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional, Tuple

from esper import World

from gemfall.components.board_position import BoardPosition
from gemfall.constants import POINTS_PER_TOKEN
from gemfall.snapshot import TokenView
from gemfall.systems.grid import Layout, Position, get_board, layout, remove_tokens, spawn_token
from gemfall.systems.match import find_matches, find_runs

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GravityMove:
    token_id: int
    source: Position
    target: Position


@dataclass(slots=True)
class CascadeRound:
    """Everything that happened during one detect/remove/compact/refill round."""

    depth: int
    multiplier: int
    matched_ids: FrozenSet[int]
    runs: List[Tuple[int, ...]] = field(default_factory=list)
    score_delta: int = 0
    removed: List[TokenView] = field(default_factory=list)
    moves: List[GravityMove] = field(default_factory=list)
    spawned_ids: List[int] = field(default_factory=list)


@dataclass(slots=True)
class CascadeResult:
    layout: Layout
    score_delta: int
    rounds_run: int
    rounds: List[CascadeRound] = field(default_factory=list)

    @property
    def removed_ids(self) -> FrozenSet[int]:
        return frozenset(token_id for rnd in self.rounds for token_id in rnd.matched_ids)


# Called after each stage of a round: 'match', 'clear', 'gravity', 'refill'.
RoundObserver = Callable[[str, CascadeRound], None]


def score_for(matched: int, multiplier: int) -> int:
    return matched * POINTS_PER_TOKEN * multiplier


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Plan where surviving tokens land once vacated cells below them close up.

    Survivors keep their top-to-bottom order and stack at the bottom of their column.
    """
    board = get_board(world)
    moves: List[GravityMove] = []
    for col in range(board.cols):
        survivors = [(row, board.cells[row][col]) for row in range(board.rows) if board.cells[row][col] is not None]
        missing = board.rows - len(survivors)
        for index, (row, token_id) in enumerate(survivors):
            target_row = missing + index
            if target_row != row:
                moves.append(GravityMove(token_id=token_id, source=(row, col), target=(target_row, col)))
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    board = get_board(world)
    for move in moves:
        row, col = move.source
        if board.cells[row][col] == move.token_id:
            board.cells[row][col] = None
    for move in moves:
        row, col = move.target
        pos = world.component_for_entity(move.token_id, BoardPosition)
        pos.row, pos.col = row, col
        board.cells[row][col] = move.token_id


def refill_vacated(world: World) -> List[int]:
    """Spawn fresh tokens into every empty cell, column by column, top to bottom."""
    board = get_board(world)
    spawned: List[int] = []
    for col in range(board.cols):
        for row in range(board.rows):
            if board.cells[row][col] is None:
                spawned.append(spawn_token(world, row, col))
    return spawned


def resolve_round(
    world: World,
    multiplier: int = 1,
    *,
    depth: Optional[int] = None,
    observer: Optional[RoundObserver] = None,
) -> Optional[CascadeRound]:
    """Run a single resolution round; None when the board holds no match."""
    matched = find_matches(world)
    if not matched:
        return None
    rnd = CascadeRound(
        depth=depth if depth is not None else multiplier,
        multiplier=multiplier,
        matched_ids=frozenset(matched),
        runs=find_runs(world),
        score_delta=score_for(len(matched), multiplier),
    )
    if observer:
        observer('match', rnd)
    rnd.removed = remove_tokens(world, matched)
    if observer:
        observer('clear', rnd)
    rnd.moves = compute_gravity_moves(world)
    apply_gravity_moves(world, rnd.moves)
    if observer:
        observer('gravity', rnd)
    rnd.spawned_ids = refill_vacated(world)
    if observer:
        observer('refill', rnd)
    logger.debug(
        "Cascade round %d: %d matched x%d -> +%d, %d fell, %d spawned",
        rnd.depth, len(matched), multiplier, rnd.score_delta, len(rnd.moves), len(rnd.spawned_ids),
    )
    return rnd


def resolve_cascade(
    world: World,
    multiplier: int = 1,
    *,
    observer: Optional[RoundObserver] = None,
) -> CascadeResult:
    """Resolve rounds until the board is stable, raising the multiplier each round.

    There is no round cap: every continuing round removes at least three tokens and
    refills draw kinds independently.
    """
    rounds: List[CascadeRound] = []
    total = 0
    depth = 1
    while True:
        rnd = resolve_round(world, multiplier, depth=depth, observer=observer)
        if rnd is None:
            break
        rounds.append(rnd)
        total += rnd.score_delta
        multiplier += 1
        depth += 1
    return CascadeResult(layout=layout(world), score_delta=total, rounds_run=len(rounds), rounds=rounds)
