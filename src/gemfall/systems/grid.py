from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Tuple

from esper import World

from gemfall.components.board import Board
from gemfall.components.board_position import BoardPosition
from gemfall.components.token import TokenKind
from gemfall.components.token_kinds import TokenKinds
from gemfall.constants import MAX_FILL_DRAWS
from gemfall.snapshot import BoardSnapshot, TokenView

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Layout = Dict[int, Position]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_kind_registry(world: World) -> TokenKinds:
    for _, registry in world.get_component(TokenKinds):
        return registry
    raise RuntimeError("TokenKinds definitions not found")


def board_dimensions(world: World) -> Tuple[int, int]:
    board = get_board(world)
    return board.rows, board.cols


def token_at(world: World, row: int, col: int) -> int | None:
    """Return the token id at (row, col), or None while the cell is vacated."""
    board = get_board(world)
    if not board.in_bounds(row, col):
        raise IndexError(f"Cell {(row, col)} outside {board.rows}x{board.cols} board")
    return board.cells[row][col]


def kind_of(world: World, token_id: int) -> str:
    try:
        return world.component_for_entity(token_id, TokenKind).kind
    except KeyError as exc:
        raise KeyError(f"Token {token_id} is not on the board") from exc


def position_of(world: World, token_id: int) -> Position:
    try:
        pos = world.component_for_entity(token_id, BoardPosition)
    except KeyError as exc:
        raise KeyError(f"Token {token_id} is not on the board") from exc
    return pos.row, pos.col


def has_token(world: World, token_id: int) -> bool:
    try:
        world.component_for_entity(token_id, TokenKind)
    except KeyError:
        return False
    return True


def all_tokens(world: World) -> List[TokenView]:
    """Snapshot of the live tokens in row-major order."""
    board = get_board(world)
    views: List[TokenView] = []
    for row in range(board.rows):
        for col in range(board.cols):
            token_id = board.cells[row][col]
            if token_id is None:
                continue
            views.append(TokenView(id=token_id, col=col, row=row, kind=kind_of(world, token_id)))
    return views


def board_snapshot(world: World) -> BoardSnapshot:
    board = get_board(world)
    return BoardSnapshot(width=board.cols, height=board.rows, tokens=tuple(all_tokens(world)))


def layout(world: World) -> Layout:
    """Current id -> (row, col) mapping of every live token."""
    return {token_id: (pos.row, pos.col) for token_id, pos in world.get_component(BoardPosition)}


def is_full(world: World) -> bool:
    board = get_board(world)
    return all(token_id is not None for row in board.cells for token_id in row)


def require_full(world: World) -> None:
    board = get_board(world)
    for row in range(board.rows):
        for col in range(board.cols):
            if board.cells[row][col] is None:
                raise RuntimeError(f"Board invariant violated: cell {(row, col)} is empty")


def draw_kind(world: World) -> str:
    registry = get_kind_registry(world)
    if registry.picker is not None:
        kind = registry.picker()
    else:
        rng = getattr(world, "random", None)
        if not isinstance(rng, random.Random):
            rng = random
        kind = rng.choice(registry.kinds)
    if kind not in registry:
        raise ValueError(f"Kind picker returned {kind!r}, not one of {registry.kinds!r}")
    return kind


def spawn_token(world: World, row: int, col: int, kind: str | None = None) -> int:
    """Create a token in an empty cell and return its id."""
    board = get_board(world)
    if not board.in_bounds(row, col):
        raise IndexError(f"Cell {(row, col)} outside {board.rows}x{board.cols} board")
    if board.cells[row][col] is not None:
        raise ValueError(f"Cell {(row, col)} already holds token {board.cells[row][col]}")
    if kind is None:
        kind = draw_kind(world)
    elif kind not in get_kind_registry(world):
        raise ValueError(f"Unknown token kind {kind!r}")
    token_id = world.create_entity(TokenKind(kind=kind), BoardPosition(row=row, col=col))
    board.cells[row][col] = token_id
    return token_id


def move_token(world: World, token_id: int, row: int, col: int) -> None:
    """Move a token to (row, col), releasing its previous cell if it still owns it."""
    board = get_board(world)
    if not board.in_bounds(row, col):
        raise IndexError(f"Cell {(row, col)} outside {board.rows}x{board.cols} board")
    try:
        pos = world.component_for_entity(token_id, BoardPosition)
    except KeyError as exc:
        raise KeyError(f"Token {token_id} is not on the board") from exc
    if board.cells[pos.row][pos.col] == token_id:
        board.cells[pos.row][pos.col] = None
    pos.row, pos.col = row, col
    board.cells[row][col] = token_id


def remove_tokens(world: World, token_ids: Iterable[int]) -> List[TokenView]:
    """Delete tokens from the live set, leaving their cells vacated."""
    board = get_board(world)
    removed: List[TokenView] = []
    for token_id in sorted(set(token_ids)):
        row, col = position_of(world, token_id)
        removed.append(TokenView(id=token_id, col=col, row=row, kind=kind_of(world, token_id)))
        if board.cells[row][col] == token_id:
            board.cells[row][col] = None
        world.delete_entity(token_id, immediate=True)
    return removed


def apply_layout(world: World, target: Layout) -> None:
    """Place every live token at the position given by ``target``.

    ``target`` must cover exactly the live tokens and assign distinct in-bounds cells.
    """
    board = get_board(world)
    current = layout(world)
    if set(target) != set(current):
        raise ValueError("Layout does not describe the live token set")
    occupied = set(target.values())
    if len(occupied) != len(target):
        raise ValueError("Layout assigns more than one token to a cell")
    for row, col in occupied:
        if not board.in_bounds(row, col):
            raise IndexError(f"Cell {(row, col)} outside {board.rows}x{board.cols} board")
    board.cells = [[None] * board.cols for _ in range(board.rows)]
    for token_id, (row, col) in target.items():
        pos = world.component_for_entity(token_id, BoardPosition)
        pos.row, pos.col = row, col
        board.cells[row][col] = token_id


def clear_board(world: World) -> List[TokenView]:
    return remove_tokens(world, list(layout(world)))


def fill_board(world: World) -> List[int]:
    """Fill an empty board row-major, redrawing kinds that complete an immediate triple.

    Only the two cells to the left and the two cells above are inspected, so the
    result is free of runs that could be formed during row-major placement.
    """
    board = get_board(world)
    spawned: List[int] = []
    redraws = 0
    for row in range(board.rows):
        for col in range(board.cols):
            left = _kinds_at(world, board, [(row, col - 1), (row, col - 2)]) if col >= 2 else []
            above = _kinds_at(world, board, [(row - 1, col), (row - 2, col)]) if row >= 2 else []
            for _ in range(MAX_FILL_DRAWS):
                kind = draw_kind(world)
                if left and left[0] == left[1] == kind:
                    redraws += 1
                    continue
                if above and above[0] == above[1] == kind:
                    redraws += 1
                    continue
                break
            else:
                raise RuntimeError(f"Unable to fill cell {(row, col)} without an immediate match")
            spawned.append(spawn_token(world, row, col, kind))
    logger.debug("Filled %dx%d board with %d redraws", board.rows, board.cols, redraws)
    return spawned


def _kinds_at(world: World, board: Board, cells: List[Position]) -> List[str]:
    kinds: List[str] = []
    for row, col in cells:
        token_id = board.cells[row][col]
        if token_id is None:
            raise RuntimeError(f"Board invariant violated: cell {(row, col)} is empty")
        kinds.append(kind_of(world, token_id))
    return kinds
