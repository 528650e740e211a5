from esper import World

from colormerge.events.bus import EVENT_TICK, EventBus
from colormerge.rendering.board_renderer import BoardRenderer
from colormerge.rendering.context import RenderContext, build_render_context
from colormerge.rendering.hud_renderer import HudRenderer
from colormerge.systems.board_ops import get_board
from colormerge.ui.layout import compute_board_geometry
from colormerge.world import world_now


class RenderSystem:
    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self._time = 0.0
        self._render_ctx: RenderContext | None = None
        self._board_renderer = BoardRenderer()
        self._hud_renderer = HudRenderer()

    @property
    def board_renderer(self) -> BoardRenderer:
        return self._board_renderer

    @property
    def hud_renderer(self) -> HudRenderer:
        return self._hud_renderer

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        try:
            self._time += float(dt)
        except (TypeError, ValueError):
            self._time += 1/60

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        # Headless safeguard: without an active window skip draw calls but still build layout caches.
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        board = get_board(self.world)
        tile_size, board_left, board_bottom = compute_board_geometry(
            self.window.width, self.window.height, board.size,
        )
        ctx = build_render_context(
            world=self.world,
            window_width=self.window.width,
            window_height=self.window.height,
            board_size=board.size,
            tile_size=tile_size,
            board_left=board_left,
            board_bottom=board_bottom,
        )
        self._render_ctx = ctx
        self._board_renderer.render(arcade, ctx, headless=headless)
        self._hud_renderer.render(arcade, ctx, world_now(self.world), headless=headless)
