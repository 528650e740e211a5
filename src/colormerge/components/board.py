from dataclasses import dataclass, field
from typing import List, Optional

from colormerge.components.tile import Tile

Cells = List[List[Optional[Tile]]]


@dataclass(slots=True)
class Board:
    size: int
    cells: Cells = field(default_factory=list)
    # Next id handed to a spawned or merged tile; monotonic for the session.
    next_tile_id: int = 1

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError(f"Board size must be positive, got {self.size}")
        if not self.cells:
            self.cells = [[None] * self.size for _ in range(self.size)]
