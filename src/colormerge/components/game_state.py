"""Game state resource describing the session phase and scoring variant."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GamePhase(Enum):
    """Lifecycle phases of a single play session."""
    READY = auto()
    PLAYING = auto()
    BOARD_LOCKED = auto()
    HEALTH_DEPLETED = auto()
    TIMED_OUT = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GamePhase.BOARD_LOCKED, GamePhase.HEALTH_DEPLETED, GamePhase.TIMED_OUT)


class ScoringVariant(Enum):
    """Which bonus rules a world is built with. Chosen once per world."""
    RHYTHM = "rhythm"
    TIMER = "timer"

    @classmethod
    def parse(cls, value: "str | ScoringVariant") -> "ScoringVariant":
        if isinstance(value, ScoringVariant):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(v.value for v in cls)
            raise ValueError(f"Unknown scoring variant {value!r} (expected one of: {valid})") from None


@dataclass
class GameState:
    """Singleton component storing the session phase."""
    phase: GamePhase = GamePhase.READY
    variant: ScoringVariant = ScoringVariant.RHYTHM
    reason: Optional[str] = None
