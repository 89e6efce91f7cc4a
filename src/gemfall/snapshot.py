"""Read-only views of the board and session handed to the presentation layer."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from gemfall.components.session_state import SessionPhase


@dataclass(frozen=True, slots=True)
class TokenView:
    id: int
    col: int
    row: int
    kind: str


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    width: int
    height: int
    tokens: Tuple[TokenView, ...]

    def by_id(self) -> Dict[int, TokenView]:
        return {token.id: token for token in self.tokens}

    def token_at(self, row: int, col: int) -> Optional[TokenView]:
        for token in self.tokens:
            if token.row == row and token.col == col:
                return token
        return None


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    phase: SessionPhase
    selected_id: Optional[int]
    score: int
    paused: bool
    board: BoardSnapshot
    last_removed_ids: FrozenSet[int] = frozenset()

    @property
    def state(self) -> str:
        if self.phase is SessionPhase.SELECTED:
            return f"Selected({self.selected_id})"
        if self.phase is SessionPhase.PROCESSING:
            return "Processing"
        return "Idle"

    @property
    def tokens(self) -> Tuple[TokenView, ...]:
        return self.board.tokens
