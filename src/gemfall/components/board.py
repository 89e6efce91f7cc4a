from dataclasses import dataclass, field
from typing import List, Optional

@dataclass(slots=True)
class Board:
    """Board dimensions plus a row/column index of the token occupying each cell.

    ``cells[row][col]`` holds the token entity id or None while a cell is vacated
    between removal and refill. Row 0 is the top of the board.
    """
    rows: int
    cols: int
    cells: List[List[Optional[int]]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.cells = [[None] * self.cols for _ in range(self.rows)]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
