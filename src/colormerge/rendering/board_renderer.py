from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Tuple

from colormerge.constants import TILE_GAP, POPUP_LIFETIME_MS
from colormerge.rendering.colors import (
    BOARD_BACKGROUND,
    EMPTY_CELL,
    POPUP_COLORS,
    color_for_level,
    text_color_for_level,
)
from colormerge.systems.board_ops import get_board, iter_tiles

if TYPE_CHECKING:
    from colormerge.rendering.context import RenderContext


def ease_out(p: float) -> float:
    return 1 - (1 - p) * (1 - p)


class BoardRenderer:
    def __init__(self, padding: int = TILE_GAP):
        self._padding = padding
        # tile id -> (center x, center y, half extent) from the last frame
        self.layout_cache: Dict[int, Tuple[float, float, float]] = {}

    def render(self, arcade, ctx: RenderContext, headless: bool) -> None:
        board = get_board(ctx.world)
        pad = self._padding
        half_cell = (ctx.tile_size - pad) / 2

        if not headless:
            arcade.draw_lrbt_rectangle_filled(
                ctx.board_left - pad / 2, ctx.board_right + pad / 2,
                ctx.board_bottom - pad / 2, ctx.board_top + pad / 2,
                BOARD_BACKGROUND,
            )
            for row in range(ctx.board_size):
                for col in range(ctx.board_size):
                    cx, cy = ctx.center_of((row, col))
                    arcade.draw_lrbt_rectangle_filled(
                        cx - half_cell, cx + half_cell, cy - half_cell, cy + half_cell, EMPTY_CELL,
                    )

        self.layout_cache = {}
        for row, col, tile in iter_tiles(board.cells):
            draw_x, draw_y = ctx.center_of((row, col))
            slide = ctx.slide_by_tile.get(tile.id)
            if slide is not None:
                src_x, src_y = ctx.center_of(slide.src)
                dst_x, dst_y = ctx.center_of(slide.dst)
                p = ease_out(slide.progress)
                draw_x = src_x + (dst_x - src_x) * p
                draw_y = src_y + (dst_y - src_y) * p
            half = half_cell * ctx.tile_scale(tile.id)
            self.layout_cache[tile.id] = (draw_x, draw_y, half)
            if headless:
                continue
            arcade.draw_lrbt_rectangle_filled(
                draw_x - half, draw_x + half, draw_y - half, draw_y + half, color_for_level(tile.level),
            )
            arcade.draw_text(
                str(tile.level), draw_x, draw_y, text_color_for_level(tile.level),
                max(10, int(half * 0.7)), anchor_x="center", anchor_y="center", bold=True,
            )

        if not headless:
            self._render_popups(arcade, ctx)

    def _render_popups(self, arcade, ctx: RenderContext) -> None:
        for popup in ctx.popups:
            shown = popup.age_ms - popup.delay_ms
            if shown < 0:
                continue
            p = min(1.0, shown / POPUP_LIFETIME_MS)
            cx, cy = ctx.center_of((popup.row, popup.col))
            r, g, b = POPUP_COLORS.get(popup.tier, POPUP_COLORS["mid"])
            alpha = int(255 * (1 - p))
            size = 16 if popup.tier == "mid" else 20 if popup.tier == "high" else 24
            arcade.draw_text(
                f"+{popup.points}", cx, cy + ctx.tile_size * 0.4 * p, (r, g, b, alpha), size,
                anchor_x="center", anchor_y="center", bold=True,
            )
