from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from esper import World

from colormerge.components.animations import MergePulse, ScorePopup, SlideAnimation, SpawnPop
from colormerge.ui.layout import cell_center

BoardPos = Tuple[int, int]


@dataclass(slots=True)
class RenderContext:
    """Frame-scoped rendering data shared across renderer subcomponents."""

    world: World
    window_width: int
    window_height: int
    tile_size: int
    board_left: float
    board_bottom: float
    board_size: int
    slide_by_tile: Dict[int, SlideAnimation] = field(default_factory=dict)
    pulse_by_tile: Dict[int, float] = field(default_factory=dict)
    spawn_by_tile: Dict[int, float] = field(default_factory=dict)
    popups: List[ScorePopup] = field(default_factory=list)

    @property
    def board_width(self) -> float:
        return self.tile_size * self.board_size

    @property
    def board_top(self) -> float:
        return self.board_bottom + self.board_width

    @property
    def board_right(self) -> float:
        return self.board_left + self.board_width

    def center_of(self, pos: BoardPos) -> Tuple[float, float]:
        return cell_center(pos[0], pos[1], self.tile_size, self.board_left, self.board_bottom, self.board_size)

    def tile_scale(self, tile_id: int) -> float:
        spawn = self.spawn_by_tile.get(tile_id)
        if spawn is not None:
            return 0.6 + 0.4 * spawn
        pulse = self.pulse_by_tile.get(tile_id)
        if pulse is not None:
            return 1.0 + 0.12 * math.sin(math.pi * pulse)
        return 1.0


def build_render_context(
    world: World,
    window_width: int,
    window_height: int,
    board_size: int,
    tile_size: int,
    board_left: float,
    board_bottom: float,
) -> RenderContext:
    """Populate a RenderContext for the current frame."""

    slide_by_tile: Dict[int, SlideAnimation] = {}
    for _, slide in world.get_component(SlideAnimation):
        slide_by_tile[slide.tile_id] = slide

    pulse_by_tile: Dict[int, float] = {}
    for _, pulse in world.get_component(MergePulse):
        pulse_by_tile[pulse.tile_id] = pulse.progress

    spawn_by_tile: Dict[int, float] = {}
    for _, pop in world.get_component(SpawnPop):
        spawn_by_tile[pop.tile_id] = pop.progress

    popups = [popup for _, popup in world.get_component(ScorePopup)]

    return RenderContext(
        world=world,
        window_width=window_width,
        window_height=window_height,
        tile_size=tile_size,
        board_left=board_left,
        board_bottom=board_bottom,
        board_size=board_size,
        slide_by_tile=slide_by_tile,
        pulse_by_tile=pulse_by_tile,
        spawn_by_tile=spawn_by_tile,
        popups=popups,
    )
