from dataclasses import dataclass
from typing import Tuple

BoardPos = Tuple[int, int]


@dataclass(slots=True)
class SlideAnimation:
    tile_id: int
    src: BoardPos
    dst: BoardPos
    progress: float = 0.0  # 0..1


@dataclass(slots=True)
class MergePulse:
    tile_id: int
    progress: float = 0.0


@dataclass(slots=True)
class SpawnPop:
    tile_id: int
    progress: float = 0.0


@dataclass(slots=True)
class ScorePopup:
    row: int
    col: int
    points: int
    tier: str = "mid"
    delay_ms: float = 0.0
    age_ms: float = 0.0
