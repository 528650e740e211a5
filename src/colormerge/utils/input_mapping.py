from __future__ import annotations

from colormerge.components.direction import Direction

KEY_DIRECTIONS: dict[str, Direction] = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


def direction_for_key(key: str | None) -> Direction | None:
    """Map a key name such as ``"ArrowUp"`` or ``"w"`` to a direction."""
    if not isinstance(key, str):
        return None
    return KEY_DIRECTIONS.get(key.lower())
