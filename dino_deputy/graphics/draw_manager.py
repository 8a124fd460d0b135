"""
draw_manager.py
---------------
Layered rendering of the world snapshot, HUD and state overlays.

Responsibilities:
- Maintain a per-frame layered queue of primitive shapes and text
- Turn GameWorld state (scenery, visible entities, effects) into shapes
- HUD: score, high score, level or free play, combo
- Overlays: title, pause, game over (initials + leaderboard), victory
- Apply screen shake to world layers only; HUD and overlays stay still
"""

import pygame

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Colors, Debug, Display, Physics
from dino_deputy.core.runtime.game_state import GameState
from dino_deputy.core.services.leaderboard import SCOPE_TODAY
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.graphics.background_manager import sky_state


LAYER_SKY = 0
LAYER_SCENERY = 1
LAYER_ENTITIES = 2
LAYER_PARTICLES = 3
LAYER_FLASH = 4
LAYER_HUD = 5
LAYER_OVERLAY = 6

SHAKEN_LAYERS = (LAYER_SKY, LAYER_SCENERY, LAYER_ENTITIES, LAYER_PARTICLES)

ENEMY_BULLET_COLOR = (200, 60, 40)
HITBOX_COLOR = (255, 255, 0)
PANEL_COLOR = (0, 0, 0)


class DrawManager:
    """Handles all rendering operations with layered batching."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self):
        self.shape_layers = {}      # {layer: [(shape_type, rect, color, kwargs), ...]}
        self.text_layers = {}       # {layer: [(text, pos, size, color, alpha, anchor), ...]}
        self._fonts = {}
        self._overlay_cache = {}
        self.fps = None

        DebugLogger.init_entry("DrawManager")

    def _font(self, size):
        font = self._fonts.get(size)
        if font is None:
            font = self._fonts[size] = pygame.font.Font(None, size)
        return font

    # ===========================================================
    # Queue Management
    # ===========================================================

    def clear(self):
        """Clear all draw queues for new frame."""
        for items in self.shape_layers.values():
            items.clear()
        for items in self.text_layers.values():
            items.clear()

    def queue_shape(self, shape_type, rect, color, layer=LAYER_ENTITIES, **kwargs):
        """
        Queue a primitive shape.

        Args:
            shape_type: "rect", "circle", "ellipse", "polygon", "line" or "overlay"
            rect: (x, y, w, h) bounds
            color: RGB tuple
            layer: Render layer (lower = first)
            **kwargs: Shape-specific params (width, points, alpha, radius)
        """
        self.shape_layers.setdefault(layer, []).append((shape_type, rect, color, kwargs))

    def queue_text(self, text, pos, size=24, color=Colors.INK, layer=LAYER_HUD,
                   alpha=1.0, anchor="center"):
        self.text_layers.setdefault(layer, []).append((text, pos, size, color, alpha, anchor))

    # ===========================================================
    # Rendering
    # ===========================================================

    def render(self, target_surface, shake_offset=(0, 0)):
        """
        Render all queued items to target surface.

        Args:
            target_surface: Main display surface
            shake_offset: Pixel offset applied to world layers
        """
        layers = sorted(set(self.shape_layers) | set(self.text_layers))
        for layer in layers:
            offset = shake_offset if layer in SHAKEN_LAYERS else (0, 0)
            for shape_type, rect, color, kwargs in self.shape_layers.get(layer, ()):
                self._draw_shape(target_surface, shape_type, rect, color, offset, **kwargs)
            for text, pos, size, color, alpha, anchor in self.text_layers.get(layer, ()):
                self._draw_text(target_surface, text, pos, size, color, alpha, anchor, offset)

    def _draw_shape(self, surface, shape_type, rect, color, offset, **kwargs):
        width = kwargs.get("width", 0)
        dx, dy = offset
        rect = pygame.Rect(round(rect[0] + dx), round(rect[1] + dy), round(rect[2]), round(rect[3]))

        if shape_type == "rect":
            pygame.draw.rect(surface, color, rect, width)
        elif shape_type == "circle":
            pygame.draw.circle(surface, color, rect.center, kwargs.get("radius", rect.width // 2), width)
        elif shape_type == "ellipse":
            pygame.draw.ellipse(surface, color, rect, width)
        elif shape_type == "polygon":
            points = [(x + dx, y + dy) for x, y in kwargs.get("points", ())]
            if len(points) >= 3:
                pygame.draw.polygon(surface, color, points, width)
        elif shape_type == "line":
            start, end = kwargs.get("start_pos"), kwargs.get("end_pos")
            if start and end:
                pygame.draw.line(surface, color, (start[0] + dx, start[1] + dy),
                                 (end[0] + dx, end[1] + dy), max(width, 1))
        elif shape_type == "overlay":
            self._draw_overlay(surface, rect, color, kwargs.get("alpha", 1.0))
        else:
            DebugLogger.warn(f"Unknown shape type: {shape_type}", category="render")

    def _draw_overlay(self, surface, rect, color, alpha):
        """Translucent fill; surfaces are cached per size and colour."""
        if alpha <= 0:
            return
        key = (rect.size, color)
        overlay = self._overlay_cache.get(key)
        if overlay is None:
            overlay = self._overlay_cache[key] = pygame.Surface(rect.size)
            overlay.fill(color)
        overlay.set_alpha(int(min(alpha, 1.0) * 255))
        surface.blit(overlay, rect.topleft)

    def _draw_text(self, surface, text, pos, size, color, alpha, anchor, offset):
        if alpha <= 0:
            return
        rendered = self._font(size).render(text, True, color)
        if alpha < 1.0:
            rendered.set_alpha(int(alpha * 255))
        x, y = pos[0] + offset[0], pos[1] + offset[1]
        rect = rendered.get_rect(**{anchor: (round(x), round(y))})
        surface.blit(rendered, rect)

    # ===========================================================
    # World Frame
    # ===========================================================

    def draw_world(self, world, panel=None):
        """
        Queue a complete frame for a world.

        Args:
            world: GameWorld to draw
            panel: Game-over panel state (initials, board, rank), if any
        """
        self.clear()
        self._queue_scenery(world)
        for entity in world.visible_entities():
            self._queue_entity(entity)
        if Debug.HITBOX_VISIBLE:
            self._queue_hitboxes(world)
        self._queue_flashes(world.effects)
        self._queue_hud(world)
        self._queue_overlay(world, panel)

    # ===========================================================
    # Scenery
    # ===========================================================

    def _queue_scenery(self, world):
        sky = sky_state(world.level)
        band_height = Physics.GROUND_Y / 2
        self.queue_shape("rect", (0, 0, Display.WIDTH, band_height), sky.sky_top, LAYER_SKY)
        self.queue_shape("rect", (0, band_height, Display.WIDTH, band_height), sky.sky_bottom, LAYER_SKY)
        r = sky.sun_radius
        self.queue_shape("circle", (sky.sun_x - r, sky.sun_y - r, 2 * r, 2 * r), sky.sun_color,
                         LAYER_SKY, radius=round(r))

        for cloud in world.background.clouds:
            self.queue_shape("ellipse", (cloud.x, cloud.y, cloud.width, cloud.width * 0.4),
                             Colors.WHITE, LAYER_SCENERY)

        height = world.background.landmark_height
        if height > 0:
            tower_x = Display.WIDTH - 140
            leg_top = Physics.GROUND_Y - height
            self.queue_shape("rect", (tower_x, leg_top, 4, height), Colors.DARK, LAYER_SCENERY)
            self.queue_shape("rect", (tower_x + 36, leg_top, 4, height), Colors.DARK, LAYER_SCENERY)
            self.queue_shape("rect", (tower_x - 6, leg_top - 30, 52, 30), Colors.DARK, LAYER_SCENERY)

        ground_y = Physics.GROUND_Y
        self.queue_shape("rect", (0, ground_y, Display.WIDTH, Display.HEIGHT - ground_y),
                         Colors.SAND, LAYER_SCENERY)
        self.queue_shape("line", (0, 0, 0, 0), Colors.DARK, LAYER_SCENERY, width=2,
                         start_pos=(0, ground_y), end_pos=(Display.WIDTH, ground_y))
        for line in world.background.ground_lines:
            self.queue_shape("line", (0, 0, 0, 0), Colors.PARTICLE, LAYER_SCENERY, width=1,
                             start_pos=(line.x, ground_y + 10), end_pos=(line.x + line.width, ground_y + 10))

    # ===========================================================
    # Entities
    # ===========================================================

    def _queue_entity(self, e):
        if e.kind is EntityKind.PLAYER:
            self._queue_player(e)
        elif e.kind is EntityKind.CACTUS:
            self._queue_cactus(e)
        elif e.kind is EntityKind.BANDIT:
            self._queue_bandit(e)
        elif e.kind is EntityKind.FLYING_THIEF:
            self._queue_thief(e)
        elif e.kind is EntityKind.PLAYER_BULLET:
            self.queue_shape("rect", (e.x, e.y, e.width, e.height), Colors.GOLD)
        elif e.kind is EntityKind.ENEMY_BULLET:
            self.queue_shape("rect", (e.x, e.y, e.width, e.height), ENEMY_BULLET_COLOR)
        elif e.kind is EntityKind.PARTICLE:
            self.queue_shape("rect", (e.x, e.y, e.width, e.height), e.attrs["color"], LAYER_PARTICLES)
        elif e.kind is EntityKind.BONUS_TEXT:
            self.queue_text(e.attrs["text"], (e.x, e.y), 26, e.attrs["color"],
                            LAYER_PARTICLES, alpha=e.attrs["alpha"])

    def _queue_player(self, e):
        color = ENEMY_BULLET_COLOR if e.attrs["dead"] else Colors.DARK
        x, y, w, h = e.x, e.y, e.width, e.height
        self.queue_shape("rect", (x, y + 12, w - 8, h - 22), color)          # body
        self.queue_shape("rect", (x + 14, y + 4, w - 10, 18), color)         # head
        self.queue_shape("rect", (x + 10, y, w, 4), Colors.INK)              # hat brim
        self.queue_shape("rect", (x + 16, y - 10, w - 16, 10), Colors.INK)   # hat crown
        self.queue_shape("rect", (x + w - 2, y + 8, 3, 3), Colors.WHITE)     # eye
        legs_up = e.attrs["is_jumping"]
        leg_h = 6 if legs_up else 10
        self.queue_shape("rect", (x + 6, y + h - 10, 6, leg_h), color)
        self.queue_shape("rect", (x + w - 20, y + h - 10, 6, leg_h), color)
        if e.attrs["is_shooting"]:
            self.queue_shape("rect", (x + w - 4, y + 16, 24, 5), Colors.INK)

    def _queue_cactus(self, e):
        x, y, w, h = e.x, e.y, e.width, e.height
        self.queue_shape("rect", (x + w * 0.3, y, w * 0.4, h), Colors.CACTUS)
        if h > 35:
            arm_y = y + h * 0.35
            self.queue_shape("rect", (x, arm_y, w * 0.3, 6), Colors.CACTUS)
            self.queue_shape("rect", (x, arm_y - 10, 5, 16), Colors.CACTUS)
            self.queue_shape("rect", (x + w * 0.7, arm_y + 6, w * 0.3, 6), Colors.CACTUS)
            self.queue_shape("rect", (x + w - 5, arm_y - 4, 5, 16), Colors.CACTUS)

    def _queue_bandit(self, e):
        x, y, w, h = e.x, e.y, e.width, e.height
        self.queue_shape("rect", (x + 5, y + 10, w - 10, h - 10), Colors.BANDIT)   # body
        self.queue_shape("rect", (x, y + 4, w, 4), Colors.INK)                    # brim
        self.queue_shape("rect", (x + 8, y - 6, w - 16, 10), Colors.INK)          # crown
        self.queue_shape("rect", (x + 5, y + 16, w - 10, 6), ENEMY_BULLET_COLOR)  # bandana
        self.queue_shape("rect", (x - 12, y + 20, 17, 4), Colors.INK)             # gun

    def _queue_thief(self, e):
        x, y, w, h = e.x, e.y, e.width, e.height
        self.queue_shape("ellipse", (x + 10, y + 10, w - 20, h - 10), Colors.THIEF)
        wing_tip = y - 10 if e.attrs["wings_up"] else y + h + 5
        mid = x + w / 2
        self.queue_shape("polygon", (0, 0, 0, 0), Colors.THIEF,
                         points=[(mid - 10, y + 15), (mid + 10, y + 15), (mid, wing_tip)])
        self.queue_shape("rect", (x + 4, y + 14, 10, 8), Colors.GOLD)    # loot bag

    def _queue_hitboxes(self, world):
        self.queue_shape("rect", tuple(world.player.hitbox()), HITBOX_COLOR, LAYER_PARTICLES, width=1)
        for pool in (world.cacti, world.bandits):
            for entity in pool:
                self.queue_shape("rect", tuple(entity.rect()), HITBOX_COLOR, LAYER_PARTICLES, width=1)
        for thief in world.thieves:
            self.queue_shape("rect", tuple(thief.body_rect()), HITBOX_COLOR, LAYER_PARTICLES, width=1)

    # ===========================================================
    # Effects & HUD
    # ===========================================================

    def _queue_flashes(self, effects):
        screen = (0, 0, Display.WIDTH, Display.HEIGHT)
        self.queue_shape("overlay", screen, Colors.CLOSE_CALL, LAYER_FLASH,
                         alpha=effects.close_call_alpha())
        self.queue_shape("overlay", screen, Colors.WHITE, LAYER_FLASH,
                         alpha=effects.level_up_alpha())
        self.queue_shape("overlay", screen, (255, 0, 0), LAYER_FLASH,
                         alpha=effects.death_flash_alpha())

    def _queue_hud(self, world):
        self.queue_text(f"SCORE {world.score:05d}", (Display.WIDTH - 20, 20), 28, Colors.INK,
                        anchor="topright")
        self.queue_text(f"HI {world.high_score:05d}", (Display.WIDTH - 20, 44), 22, Colors.DARK,
                        anchor="topright")
        label = "FREE PLAY" if world.free_play else f"LV {world.level}"
        self.queue_text(label, (20, 20), 28, Colors.INK, anchor="topleft")
        if world.combo.kill_combo >= 2:
            self.queue_text(f"x{world.combo.multiplier} COMBO", (20, 46), 24, Colors.GOLD,
                            anchor="topleft")
        if Debug.SHOW_FPS and self.fps is not None:
            self.queue_text(f"{self.fps:.0f} FPS", (Display.WIDTH / 2, 20), 20, Colors.DARK)

    # ===========================================================
    # Overlays
    # ===========================================================

    def _queue_overlay(self, world, panel):
        state = world.state
        center_x = Display.WIDTH / 2
        if state is GameState.START:
            self._dim(0.35)
            self.queue_text(Display.CAPTION.upper(), (center_x, 110), 64, Colors.WHITE, LAYER_OVERLAY)
            self.queue_text("SPACE to jump (twice for a double jump)   S to shoot",
                            (center_x, 180), 24, Colors.WHITE, LAYER_OVERLAY)
            self.queue_text("Press SPACE to start", (center_x, 230), 30, Colors.GOLD, LAYER_OVERLAY)
        elif state is GameState.PAUSED:
            self._dim(0.4)
            self.queue_text("PAUSED", (center_x, 150), 64, Colors.WHITE, LAYER_OVERLAY)
            self.queue_text("P to resume", (center_x, 210), 28, Colors.WHITE, LAYER_OVERLAY)
        elif state is GameState.GAMEOVER:
            self._dim(0.55)
            self.queue_text("GAME OVER", (center_x, 40), 56, Colors.WHITE, LAYER_OVERLAY)
            self.queue_text(f"Score {world.score}   Level {world.level}", (center_x, 80), 28,
                            Colors.WHITE, LAYER_OVERLAY)
            self._queue_panel(panel, center_x, "R to ride again")
        elif state is GameState.VICTORY:
            self._dim(0.45)
            self.queue_text("YOU TAMED THE FRONTIER!", (center_x, 40), 52, Colors.GOLD, LAYER_OVERLAY)
            self.queue_text(f"Score {world.score}", (center_x, 80), 28, Colors.WHITE, LAYER_OVERLAY)
            self._queue_panel(panel, center_x, "F: keep riding (free play)   R: new game")

    def _queue_panel(self, panel, center_x, footer):
        if panel is None or not panel.active:
            self.queue_text(footer, (center_x, Display.HEIGHT - 30), 26, Colors.WHITE, LAYER_OVERLAY)
            return

        if panel.accepting_input:
            initials = (panel.initials + "___")[:3]
            self.queue_text(f"Initials: {' '.join(initials)}   (ENTER to submit, ESC to skip)",
                            (center_x, 114), 26, Colors.GOLD, LAYER_OVERLAY)
        else:
            rank = f"Today's rank: #{panel.rank}" if panel.rank else panel.status
            self.queue_text(rank, (center_x, 114), 26, Colors.GOLD, LAYER_OVERLAY)

        title = "TODAY'S TOP SCORES" if panel.scope == SCOPE_TODAY else "ALL-TIME TOP SCORES"
        self.queue_text(f"{title}   (TAB to switch)", (center_x, 146), 24, Colors.WHITE, LAYER_OVERLAY)
        if not panel.board:
            self.queue_text(panel.status or "No scores yet", (center_x, 172), 22,
                            Colors.WHITE, LAYER_OVERLAY)
        for i, entry in enumerate(panel.board):
            star = "*" if entry.victory else " "
            line = f"{i + 1}. {entry.initials:<3} {entry.score:05d}{star}"
            self.queue_text(line, (center_x, 172 + i * 22), 22, Colors.WHITE, LAYER_OVERLAY)

        if not panel.accepting_input:
            self.queue_text(footer, (center_x, Display.HEIGHT - 30), 26, Colors.WHITE, LAYER_OVERLAY)

    def _dim(self, alpha):
        self.queue_shape("overlay", (0, 0, Display.WIDTH, Display.HEIGHT), PANEL_COLOR,
                         LAYER_OVERLAY, alpha=alpha)
