from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class RhythmMeter:
    """Combo and beat bookkeeping for the rhythm variant.

    Health lives in the sibling ``Health`` component on the same entity.
    """

    combo: int = 0
    multiplier: float = 1.0
    beat_index: int = 0
    base_time: float = 0.0
    last_grade: str = "READY"
    # Timestamp (ms) after which the grade label falls back to "KEEP".
    label_expires_at: Optional[float] = None


@dataclass(slots=True)
class RhythmLane:
    """Decorative lane cursor state; purely visual."""

    cursor: float = 0.5
    segment: str = "a"
