from dataclasses import dataclass


@dataclass(slots=True)
class TurnTimer:
    """Per-turn countdown for the timer variant. Times are in milliseconds."""

    limit: float
    deadline: float
    last_multiplier: float = 1.0
    last_bonus: int = 0

    def remaining(self, now: float) -> float:
        return max(0.0, self.deadline - now)
