from dataclasses import dataclass

@dataclass(slots=True, frozen=True)
class Tile:
    """A numbered tile on the board.

    ``level`` is the exponent of the displayed value (level 1 shows 2). ``id``
    only follows the tile across a single turn for animation purposes.
    """
    id: int
    level: int

    @property
    def value(self) -> int:
        return 2 ** self.level
