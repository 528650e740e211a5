from enum import Enum


class Direction(Enum):
    """Direction of travel for a move."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
