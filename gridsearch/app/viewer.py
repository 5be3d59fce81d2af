# gridsearch/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Visualizer: grid editor + playback + metrics

- Mouse:
    left click / drag on the grid -> use the active tool
- Keyboard:
    [W]/[S]/[E]      -> tool: wall / start / end
    [1]/[2]/[3]/[4]  -> algorithm: BFS / DFS / Dijkstra / A*
    [C]              -> comparison mode (Dijkstra vs A*)
    [SPACE]          -> visualize
    [R]              -> reset grid
    [+]/[-]          -> speed preset
    [Q]/[ESC]        -> quit

Configuration: see gridsearch.app.settings (GRIDSEARCH_* env, --key=value flags).
"""

import logging
import sys
from typing import Dict, List, Optional, Tuple

import pygame

from gridsearch.app.settings import Settings, resolve_settings
from gridsearch.core import engine
from gridsearch.core import grid as grid_ops
from gridsearch.core.errors import GridEditError, GridSearchError
from gridsearch.core.metrics import AlgorithmMetrics, collect
from gridsearch.core.playback import PlaybackScheduler
from gridsearch.core.types import AlgorithmKind, Cell, DisplayTag, Grid

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font
COMPARE_KINDS = (AlgorithmKind.DIJKSTRA, AlgorithmKind.ASTAR)
TOOLS = ("wall", "start", "end")

# Colors
WHITE       = (255,255,255)
GRID_LINE   = (226,232,240)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)
NOTICE_RED  = (245,101,101)
BG_TOP      = (24,26,32)
BG_BOT      = (36,40,48)

TAG_COLORS: Dict[DisplayTag, Tuple[int, int, int]] = {
    DisplayTag.EMPTY:            (255,255,255),
    DisplayTag.WALL:             ( 45, 55, 72),
    DisplayTag.START:            ( 72,187,120),
    DisplayTag.END:              (245,101,101),
    DisplayTag.VISITED:          (144,205,244),
    DisplayTag.PATH:             ( 66,153,225),
    DisplayTag.VISITED_BFS:      (154,230,180),
    DisplayTag.PATH_BFS:         ( 56,161,105),
    DisplayTag.VISITED_DFS:      (250,240,137),
    DisplayTag.PATH_DFS:         (214,158, 46),
    DisplayTag.VISITED_DIJKSTRA: (144,205,244),
    DisplayTag.PATH_DIJKSTRA:    ( 66,153,225),
    DisplayTag.VISITED_ASTAR:    (214,188,250),
    DisplayTag.PATH_ASTAR:       (159,122,234),
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state
        self.enabled = True

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)  # bluish active
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover and self.enabled:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        color = (235,238,242) if self.enabled else (110,116,128)
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.enabled:
                    self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Optional[Settings] = None):
        pygame.init()

        self.settings = settings or Settings()
        self.grid: Grid = Grid.create(self.settings.rows, self.settings.cols)
        self.cell_size = self.settings.cell_size
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        grid_px_w = GRID_MARGIN*2 + self.grid.cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + self.grid.rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 640)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[UIButton] = []

        self.playback = PlaybackScheduler(self.grid)
        self.clock = pygame.time.Clock()
        self.tool = "wall"
        self.selected_algo = self.settings.algorithm
        self.compare_mode = False
        self.speed = self.settings.speed
        self.mouse_pressed = False
        self._drag_wall = True
        self.state = "Idle"
        self.notice: Optional[str] = None
        self.metrics: Dict[AlgorithmKind, AlgorithmMetrics] = {}

        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid on the left."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(0, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        c = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return c if self.grid.in_bounds(c) else None

    def run(self):
        while True:
            self.frame()
            self.clock.tick(60)

    def frame(self):
        self._handle_events()
        self._tick_playback()
        self._draw()

    # ---------- playback ----------
    def _tick_playback(self):
        self.playback.tick()
        if self.state == "Running" and not self.playback.running:
            self.state = "Done"
            if any(not m.path_found for m in self.metrics.values()):
                self.notice = "No path found!"
            self._refresh_active_states()

    @property
    def is_running(self) -> bool:
        return self.state == "Running"

    def can_visualize(self) -> bool:
        return not self.is_running and self.grid.start is not None and self.grid.end is not None

    def visualize(self):
        if not self.can_visualize():
            return
        # stop the previous playback before anything on the grid changes
        self.playback.cancel()
        grid_ops.clear_visualization(self.grid)
        self.metrics.clear()
        self.notice = None

        try:
            if self.compare_mode:
                comparison = engine.compare(COMPARE_KINDS, self.grid, self.grid.start, self.grid.end)
                self.metrics = {k: c.metrics for k, c in comparison.items()}
                self.playback.schedule({k: c.result for k, c in comparison.items()}, self.speed)
            else:
                result, elapsed = engine.timed_run(self.selected_algo, self.grid, self.grid.start, self.grid.end)
                self.metrics[self.selected_algo] = collect(result, elapsed)
                self.playback.schedule(result, self.speed)
        except GridSearchError as ex:
            logger.warning("Run refused: %s", ex)
            self.notice = str(ex)
            return

        for kind, m in self.metrics.items():
            logger.info("%s: %s", kind.label, m.summary())
        self.state = "Running"
        self._refresh_active_states()

    def reset(self):
        if self.is_running:
            return
        self.playback.cancel()
        grid_ops.clear(self.grid)
        self.metrics.clear()
        self.notice = None
        self.state = "Idle"
        self._refresh_active_states()

    # ---------- editing ----------
    def apply_tool(self, cell: Cell, dragging: bool = False):
        if self.is_running:
            return
        if self.state == "Done":
            # editing after a run: drop the stale overlays first
            grid_ops.clear_visualization(self.grid)
            self.state = "Idle"
        try:
            if self.tool == "start" and not dragging:
                grid_ops.place_start(self.grid, cell)
            elif self.tool == "end" and not dragging:
                grid_ops.place_end(self.grid, cell)
            elif self.tool == "wall":
                if dragging:
                    grid_ops.set_wall(self.grid, cell, self._drag_wall)
                else:
                    toggled = grid_ops.toggle_wall(self.grid, cell)
                    # a drag starting on an endpoint paints walls
                    self._drag_wall = self.grid.node(cell).is_wall if toggled else True
        except GridEditError as ex:
            logger.info("Edit ignored: %s", ex)
        self._refresh_active_states()

    def set_tool(self, tool: str):
        if self.is_running or tool not in TOOLS:
            return
        self.tool = tool
        self._refresh_active_states()

    def select_algo(self, kind: AlgorithmKind):
        if self.is_running:
            return
        self.selected_algo = kind
        self.compare_mode = False
        self._refresh_active_states()

    def toggle_compare(self):
        if self.is_running:
            return
        self.compare_mode = not self.compare_mode
        self._refresh_active_states()

    def bump_speed(self, faster: bool):
        # takes effect from the next visualize
        self.speed = self.speed.faster() if faster else self.speed.slower()

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                self._handle_mouse(e)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key == pygame.K_SPACE:
            self.visualize()
        elif key == pygame.K_r:
            self.reset()
        elif key == pygame.K_w:
            self.set_tool("wall")
        elif key == pygame.K_s:
            self.set_tool("start")
        elif key == pygame.K_e:
            self.set_tool("end")
        elif key == pygame.K_c:
            self.toggle_compare()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self.bump_speed(faster=True)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self.bump_speed(faster=False)
        elif key == pygame.K_1:
            self.select_algo(AlgorithmKind.BFS)
        elif key == pygame.K_2:
            self.select_algo(AlgorithmKind.DFS)
        elif key == pygame.K_3:
            self.select_algo(AlgorithmKind.DIJKSTRA)
        elif key == pygame.K_4:
            self.select_algo(AlgorithmKind.ASTAR)

    def _handle_mouse(self, e: pygame.event.Event):
        for b in self._buttons:
            if b.handle_mouse(e):
                return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            cell = self.cell_at(e.pos)
            if cell is not None:
                self.mouse_pressed = self.tool == "wall"
                self.apply_tool(cell)
        elif e.type == pygame.MOUSEMOTION and self.mouse_pressed:
            cell = self.cell_at(e.pos)
            if cell is not None:
                self.apply_tool(cell, dragging=True)
        elif e.type == pygame.MOUSEBUTTONUP:
            self.mouse_pressed = False

    def _quit(self):
        self.playback.cancel()
        pygame.quit(); sys.exit(0)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(BG_TOP[0] + (BG_BOT[0]-BG_TOP[0]) * t),
                int(BG_TOP[1] + (BG_BOT[1]-BG_TOP[1]) * t),
                int(BG_TOP[2] + (BG_BOT[2]-BG_TOP[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        tracks = [k.value for k in COMPARE_KINDS]

        for node in self.grid:
            rect = pygame.Rect(ox + node.col*cs, oy + node.row*cs, cs, cs)
            pygame.draw.rect(self.screen, TAG_COLORS[node.display], rect)

            # comparison channels: one vertical slice per track
            if node.overlays:
                slice_w = max(1, cs // len(tracks))
                for i, track in enumerate(tracks):
                    tag = node.overlays.get(track)
                    if tag is None:
                        continue
                    part = pygame.Rect(rect.x + i*slice_w, rect.y, slice_w, cs)
                    pygame.draw.rect(self.screen, TAG_COLORS[tag], part)

            pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 270  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2
        quarter = (w - 24) // 4

        def add(label, cb, rect, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Visualize", self.visualize, pygame.Rect(x, y, half, h), store_as="btn_run")
        add("Reset", self.reset, pygame.Rect(x + half + 8, y, half, h), store_as="btn_reset"); y += h + gap

        for i, tool in enumerate(TOOLS):
            third = (w - 16) // 3
            add(tool.title(), lambda t=tool: self.set_tool(t), pygame.Rect(x + i*(third + 8), y, third, h),
                togglable=True, store_as=f"btn_tool_{tool}")
        y += h + gap

        for i, kind in enumerate(AlgorithmKind):
            add(kind.label, lambda k=kind: self.select_algo(k), pygame.Rect(x + i*(quarter + 8), y, quarter, h),
                togglable=True, store_as=f"btn_algo_{kind.value}")
        y += h + gap

        add("Compare Dijkstra vs A*", self.toggle_compare, pygame.Rect(x, y, w, h),
            togglable=True, store_as="btn_compare"); y += h + gap

        add("Speed -", lambda: self.bump_speed(faster=False), pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self.bump_speed(faster=True), pygame.Rect(x + half + 8, y, half, h))

        self._refresh_active_states()

    def _refresh_active_states(self):
        if not hasattr(self, "btn_run"):
            return
        self.btn_run.enabled = self.can_visualize()
        self.btn_reset.enabled = not self.is_running
        for tool in TOOLS:
            getattr(self, f"btn_tool_{tool}").set_active(self.tool == tool)
        for kind in AlgorithmKind:
            getattr(self, f"btn_algo_{kind.value}").set_active(
                not self.compare_mode and self.selected_algo is kind)
        self.btn_compare.set_active(self.compare_mode)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 250
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT, small=False):
            nonlocal y0
            f = self.font_big if big else (self.font_small if small else self.font)
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 5

        algo = "Dijkstra vs A*" if self.compare_mode else self.selected_algo.label
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Algo: {algo}   Speed: {self.speed.label}")
        line(f"Tool: {self.tool.title()}   State: {self.state}")
        for kind, m in self.metrics.items():
            line(f"{kind.label} results", color=ACCENT_GOLD)
            line(f"Time {m.execution_time:.2f}ms  Visited {m.nodes_visited}", small=True)
            line(f"Path length {m.path_length}  Found {'Yes' if m.path_found else 'No'}", small=True)
        if self.notice:
            line(self.notice, color=NOTICE_RED)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    try:
        settings = resolve_settings(argv)
    except (GridSearchError, ValueError) as ex:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
        logger.error("Invalid configuration: %s", ex)
        sys.exit(2)
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO),
                        format="%(levelname)s %(name)s: %(message)s")
    Viewer(settings).run()

if __name__ == "__main__":
    main()
