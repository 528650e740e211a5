from __future__ import annotations

from dataclasses import dataclass, field

from colormerge.components.direction import Direction
from colormerge.constants import SWIPE_THRESHOLD


@dataclass(slots=True)
class SwipeTracker:
	"""Turns a pointer down/up pair into a direction.

	Short drags (below ``threshold`` on both axes) are ignored. The larger
	axis displacement wins; ties go to the horizontal axis. ``y_axis_up``
	flips the vertical reading for coordinate systems where y grows upward.
	"""

	threshold: float = SWIPE_THRESHOLD
	y_axis_up: bool = False

	_start: tuple[float, float] | None = field(init=False, default=None, repr=False)

	def press(self, x: float, y: float) -> None:
		self._start = (float(x), float(y))

	def release(self, x: float, y: float) -> Direction | None:
		start = self._start
		self._start = None
		if start is None:
			return None
		return swipe_direction(
			float(x) - start[0],
			float(y) - start[1],
			threshold=self.threshold,
			y_axis_up=self.y_axis_up,
		)

	def reset(self) -> None:
		self._start = None

	@property
	def pressed(self) -> bool:
		return self._start is not None


def swipe_direction(
	dx: float,
	dy: float,
	*,
	threshold: float = SWIPE_THRESHOLD,
	y_axis_up: bool = False,
) -> Direction | None:
	if max(abs(dx), abs(dy)) < threshold:
		return None
	if abs(dx) >= abs(dy):
		return Direction.RIGHT if dx > 0 else Direction.LEFT
	if y_axis_up:
		dy = -dy
	return Direction.DOWN if dy > 0 else Direction.UP
