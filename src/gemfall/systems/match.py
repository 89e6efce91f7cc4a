from __future__ import annotations

from typing import List, Set, Tuple

from esper import World

from gemfall.constants import MATCH_MIN
from gemfall.systems.grid import get_board, kind_of, require_full


def _kind_grid(world: World) -> Tuple[List[List[int]], List[List[str]]]:
    require_full(world)
    board = get_board(world)
    ids = [list(row) for row in board.cells]
    kinds = [[kind_of(world, token_id) for token_id in row] for row in ids]
    return ids, kinds


def find_matches(world: World) -> Set[int]:
    """Return the ids of every token that is part of a horizontal or vertical run of >= 3.

    The board must be full. The world is only read.
    """
    ids, kinds = _kind_grid(world)
    rows = len(ids)
    cols = len(ids[0]) if ids else 0
    matched: Set[int] = set()
    # Horizontal windows, extended rightward
    for r in range(rows):
        for c in range(cols - (MATCH_MIN - 1)):
            kind = kinds[r][c]
            if all(kinds[r][c + i] == kind for i in range(1, MATCH_MIN)):
                matched.update(ids[r][c:c + MATCH_MIN])
                k = c + MATCH_MIN
                while k < cols and kinds[r][k] == kind:
                    matched.add(ids[r][k])
                    k += 1
    # Vertical windows, extended downward
    for c in range(cols):
        for r in range(rows - (MATCH_MIN - 1)):
            kind = kinds[r][c]
            if all(kinds[r + i][c] == kind for i in range(1, MATCH_MIN)):
                matched.update(ids[r + i][c] for i in range(MATCH_MIN))
                k = r + MATCH_MIN
                while k < rows and kinds[k][c] == kind:
                    matched.add(ids[k][c])
                    k += 1
    return matched


def find_runs(world: World) -> List[Tuple[int, ...]]:
    """Return every maximal run of >= 3 as a tuple of ids, rows first then columns."""
    ids, kinds = _kind_grid(world)
    rows = len(ids)
    cols = len(ids[0]) if ids else 0
    runs: List[Tuple[int, ...]] = []
    for r in range(rows):
        run: List[int] = []
        last_kind = None
        for c in range(cols):
            if kinds[r][c] == last_kind:
                run.append(ids[r][c])
            else:
                if len(run) >= MATCH_MIN:
                    runs.append(tuple(run))
                run = [ids[r][c]]
                last_kind = kinds[r][c]
        if len(run) >= MATCH_MIN:
            runs.append(tuple(run))
    for c in range(cols):
        run = []
        last_kind = None
        for r in range(rows):
            if kinds[r][c] == last_kind:
                run.append(ids[r][c])
            else:
                if len(run) >= MATCH_MIN:
                    runs.append(tuple(run))
                run = [ids[r][c]]
                last_kind = kinds[r][c]
        if len(run) >= MATCH_MIN:
            runs.append(tuple(run))
    return runs
