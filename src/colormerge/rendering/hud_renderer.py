from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from colormerge.components.game_state import ScoringVariant
from colormerge.components.health import Health
from colormerge.components.rhythm_meter import RhythmLane, RhythmMeter
from colormerge.components.score_tracker import ScoreTracker
from colormerge.components.turn_timer import TurnTimer
from colormerge.rendering.colors import (
    BAND_COLORS,
    GRADE_COLORS,
    LIGHT_TEXT,
    MUTED_TEXT,
    TIER_COLORS,
)
from colormerge.systems.scoring.rhythm import health_band, multiplier_tier
from colormerge.utils.game_state import get_game_state, state_component

if TYPE_CHECKING:
    from colormerge.rendering.context import RenderContext

EMPTY_LEADERBOARD_TEXT = "No records yet"
RESTART_HINT = "Press R to play again"


@dataclass(slots=True)
class HudSnapshot:
    """Everything the HUD shows for one frame, independent of arcade."""

    score: int
    best: int
    variant: ScoringVariant
    leaderboard_lines: List[str] = field(default_factory=list)
    multiplier_text: str = ""
    multiplier_tier: str = "base"
    grade: str | None = None
    health_fraction: float | None = None
    health_band: str | None = None
    lane_cursor: float | None = None
    countdown_fraction: float | None = None
    game_over: bool = False
    reason: str | None = None


def build_hud_snapshot(world, now: float) -> HudSnapshot:
    state = get_game_state(world)
    tracker = state_component(world, ScoreTracker) or ScoreTracker()
    snapshot = HudSnapshot(
        score=tracker.score,
        best=tracker.best,
        variant=state.variant,
        leaderboard_lines=[f"{rank}. {value}" for rank, value in enumerate(tracker.leaderboard, start=1)]
        or [EMPTY_LEADERBOARD_TEXT],
        game_over=state.phase.is_terminal,
        reason=state.reason,
    )
    meter = state_component(world, RhythmMeter)
    if meter is not None:
        snapshot.multiplier_text = f"x{meter.multiplier:.2f}"
        snapshot.multiplier_tier = multiplier_tier(meter.multiplier)
        snapshot.grade = meter.last_grade
        health = state_component(world, Health)
        if health is not None:
            snapshot.health_fraction = health.fraction
            snapshot.health_band = health_band(health.current)
        lane = state_component(world, RhythmLane)
        if lane is not None:
            snapshot.lane_cursor = lane.cursor
    timer = state_component(world, TurnTimer)
    if timer is not None:
        # Shown empty once the session has ended.
        remaining = 0.0 if snapshot.game_over else timer.remaining(now)
        snapshot.countdown_fraction = remaining / timer.limit if timer.limit > 0 else 0.0
        snapshot.multiplier_text = f"x{timer.last_multiplier:.2f} +{timer.last_bonus}"
    return snapshot


class HudRenderer:
    def __init__(self, font_size: int = 16):
        self.font_size = font_size
        self.last_snapshot: HudSnapshot | None = None

    def render(self, arcade, ctx: RenderContext, now: float, headless: bool) -> None:
        snap = build_hud_snapshot(ctx.world, now)
        self.last_snapshot = snap
        if headless:
            return
        top = ctx.window_height - 30
        left = 24
        arcade.draw_text(f"Score {snap.score}", left, top, LIGHT_TEXT, self.font_size + 4, bold=True)
        arcade.draw_text(f"Best {snap.best}", left, top - 28, MUTED_TEXT, self.font_size)

        gauge_left = ctx.board_left
        gauge_width = ctx.board_width
        gauge_bottom = ctx.board_top + 24

        arcade.draw_text(
            snap.multiplier_text, ctx.board_right, top, TIER_COLORS.get(snap.multiplier_tier, LIGHT_TEXT),
            self.font_size + 2, anchor_x="right", bold=True,
        )
        if snap.grade is not None:
            arcade.draw_text(
                snap.grade, ctx.board_right, top - 28, GRADE_COLORS.get(snap.grade, MUTED_TEXT),
                self.font_size, anchor_x="right",
            )
        if snap.health_fraction is not None:
            self._gauge(arcade, gauge_left, gauge_bottom, gauge_width, snap.health_fraction,
                        BAND_COLORS.get(snap.health_band or "good"))
            arcade.draw_text("HP", gauge_left, gauge_bottom + 14, MUTED_TEXT, 11)
        if snap.countdown_fraction is not None:
            self._gauge(arcade, gauge_left, gauge_bottom, gauge_width, snap.countdown_fraction, TIER_COLORS["mid"])
        if snap.lane_cursor is not None:
            lane_bottom = gauge_bottom + 40
            arcade.draw_lrbt_rectangle_filled(gauge_left, gauge_left + gauge_width, lane_bottom, lane_bottom + 4, MUTED_TEXT)
            cursor_x = gauge_left + gauge_width * snap.lane_cursor
            arcade.draw_lrbt_rectangle_filled(cursor_x - 3, cursor_x + 3, lane_bottom - 6, lane_bottom + 10, LIGHT_TEXT)

        board_x = ctx.board_right + 16
        if board_x + 80 < ctx.window_width:
            arcade.draw_text("Top scores", board_x, ctx.board_top - 18, MUTED_TEXT, 12)
            for index, line in enumerate(snap.leaderboard_lines):
                arcade.draw_text(line, board_x, ctx.board_top - 40 - index * 18, LIGHT_TEXT, 12)

        if snap.game_over:
            self._overlay(arcade, ctx, snap)

    def _gauge(self, arcade, left: float, bottom: float, width: float, fraction: float, color) -> None:
        fraction = max(0.0, min(1.0, fraction))
        arcade.draw_lrbt_rectangle_filled(left, left + width, bottom, bottom + 10, (60, 64, 84))
        if fraction > 0:
            arcade.draw_lrbt_rectangle_filled(left, left + width * fraction, bottom, bottom + 10, color)

    def _overlay(self, arcade, ctx: RenderContext, snap: HudSnapshot) -> None:
        arcade.draw_lrbt_rectangle_filled(
            ctx.board_left, ctx.board_right, ctx.board_bottom, ctx.board_top, (10, 12, 20, 190),
        )
        cx = ctx.board_left + ctx.board_width / 2
        cy = ctx.board_bottom + ctx.board_width / 2
        arcade.draw_text(snap.reason or "Game over", cx, cy + 20, LIGHT_TEXT, 28,
                         anchor_x="center", anchor_y="center", bold=True)
        arcade.draw_text(f"Score {snap.score}", cx, cy - 16, LIGHT_TEXT, 16, anchor_x="center", anchor_y="center")
        arcade.draw_text(RESTART_HINT, cx, cy - 44, MUTED_TEXT, 13, anchor_x="center", anchor_y="center")
