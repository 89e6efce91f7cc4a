from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Sequence

from gemfall.constants import DEFAULT_KINDS, GRID_COLS, GRID_ROWS

KindPicker = Callable[[], str]


@dataclass(slots=True)
class BoardConfig:
    """Board dimensions plus the token-kind alphabet and how kinds are drawn.

    ``kind_picker`` is called once per draw (initial fill and refill). When it is
    left unset the world's RNG picks uniformly from ``kinds``.
    """

    width: int = GRID_COLS
    height: int = GRID_ROWS
    kinds: Sequence[str] = DEFAULT_KINDS
    kind_picker: KindPicker | None = field(default=None, repr=False)

    def validate(self) -> None:
        if not isinstance(self.width, int) or self.width <= 0:
            raise ValueError(f"Board width must be a positive int, got {self.width!r}")
        if not isinstance(self.height, int) or self.height <= 0:
            raise ValueError(f"Board height must be a positive int, got {self.height!r}")
        if not self.kinds:
            raise ValueError("Token kind alphabet must not be empty")
        if len(set(self.kinds)) != len(self.kinds):
            raise ValueError(f"Token kinds must be unique, got {list(self.kinds)!r}")
        if self.kind_picker is not None and not callable(self.kind_picker):
            raise ValueError("kind_picker must be callable")

    @classmethod
    def default(cls, rng: random.Random | None = None) -> "BoardConfig":
        rng = rng or random.Random()
        kinds = tuple(DEFAULT_KINDS)
        return cls(kinds=kinds, kind_picker=lambda: rng.choice(kinds))
