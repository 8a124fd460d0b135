"""
main_loop.py
------------
Core game loop orchestrating timing, input, simulation and rendering.

Responsibilities:
- Initialize pygame, the window and every adapter around GameWorld
- Run one logical tick per rendered frame at Display.FPS
- Translate key edges into state commands (start, pause, restart, free play)
- Drive the end-of-run panel: initials entry and leaderboard requests
"""

import os

import pygame

from dino_deputy.audio.sound_manager import SoundManager
from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Debug, Display
from dino_deputy.core.runtime.game_state import GameState
from dino_deputy.core.runtime.game_world import GameWorld
from dino_deputy.core.runtime.score_panel import BOARD_SIZE, ScorePanel
from dino_deputy.core.services.event_manager import GameOverEvent, VictoryEvent
from dino_deputy.core.services.high_score_store import HighScoreStore
from dino_deputy.core.services.input_manager import InputManager
from dino_deputy.core.services.leaderboard import (
    SCOPE_TODAY,
    JsonLeaderboardStore,
    LeaderboardClient,
    LeaderboardService,
)
from dino_deputy.core.services.settings_manager import SettingsManager
from dino_deputy.graphics.draw_manager import DrawManager


class MainLoop:
    """Owns the window and wires the adapters to one GameWorld."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, preset, seed=None, data_dir=".", muted=False):
        """
        Args:
            preset: GamePreset to play
            seed: Optional RNG seed for a reproducible run
            data_dir: Directory holding settings, high score and leaderboard
            muted: Start muted regardless of saved settings
        """
        DebugLogger.section("Initializing MainLoop")

        os.makedirs(data_dir, exist_ok=True)
        self.data_dir = data_dir

        self._init_pygame()
        self._init_services(muted)
        self._init_world(preset, seed)

        self.clock = pygame.time.Clock()
        self.running = True
        DebugLogger.init_entry("Main Loop Runtime")

    def _init_pygame(self):
        pygame.init()
        pygame.font.init()
        self.screen = pygame.display.set_mode((Display.WIDTH, Display.HEIGHT))
        pygame.display.set_caption(Display.CAPTION)
        DebugLogger.init_entry("Pygame")
        DebugLogger.init_sub(f"Window {Display.WIDTH}x{Display.HEIGHT} @ {Display.FPS} FPS")

    def _init_services(self, muted):
        self.settings = SettingsManager(os.path.join(self.data_dir, SettingsManager.SETTINGS_FILE))
        self.high_scores = HighScoreStore(os.path.join(self.data_dir, HighScoreStore.FILENAME))

        muted = muted or self.settings.get("audio", "muted", False)
        self.sound = SoundManager(muted=muted, volume=self.settings.get("audio", "volume", 100))

        store = JsonLeaderboardStore(os.path.join(self.data_dir, "leaderboard.json"))
        self.leaderboard = LeaderboardClient(LeaderboardService(store))

        self.input_manager = InputManager()
        self.draw_manager = DrawManager()
        self.panel = ScorePanel()

    def _init_world(self, preset, seed):
        self.world = GameWorld(preset, seed, high_score=self.high_scores.value)
        self.settings.set("game", "preset", preset.name)
        events = self.world.events
        self.high_scores.attach(events)
        self.sound.attach(events)
        events.subscribe(GameOverEvent, self._on_game_over)
        events.subscribe(VictoryEvent, self._on_victory)

    # ===========================================================
    # Main Loop
    # ===========================================================

    def run(self):
        """Execute the frame loop until the window is closed."""
        DebugLogger.section("Game Loop")

        while self.running:
            self.clock.tick(Display.FPS)

            self._handle_events()
            if not self.running:
                break

            self.input_manager.update()
            if not self._handle_actions():
                self.world.tick(self.input_manager.input_state())

            self.sound.update()
            self._poll_leaderboard()
            self._draw()

        self._shutdown()

    def _shutdown(self):
        self.high_scores.submit(self.world.high_score)
        self.settings.save()
        self.leaderboard.close()
        pygame.quit()
        DebugLogger.system("Pygame terminated")

    # ===========================================================
    # Event Handling
    # ===========================================================

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                DebugLogger.action("Quit signal received")
                break
            if event.type == pygame.KEYDOWN and self.panel.accepting_input:
                self.panel.type_char(event.unicode)

    def _handle_actions(self) -> bool:
        """
        Apply this frame's key edges.

        Returns:
            True if a state command ran (the world skips its tick so the
            key that started or resumed play is not also read as a jump)
        """
        im = self.input_manager
        if im.context == "entry":
            self._handle_entry_actions()
            return False

        if im.action_pressed("mute"):
            self.settings.set("audio", "muted", self.sound.toggle_mute())
        if im.action_pressed("toggle_hitboxes"):
            Debug.HITBOX_VISIBLE = not Debug.HITBOX_VISIBLE

        state = self.world.state
        if state is GameState.START and im.action_pressed("jump"):
            self._start()
            return True
        if state in (GameState.PLAYING, GameState.PAUSED):
            if im.action_pressed("pause") or (state is GameState.PAUSED and im.action_pressed("jump")):
                self.world.toggle_pause()
                return True
        if state.is_terminal:
            if im.action_pressed("scope"):
                self._request_board(self.panel.toggle_scope())
            if im.action_pressed("restart"):
                self._start()
                return True
            if state is GameState.VICTORY and im.action_pressed("free_play"):
                self.panel.close()
                self.world.continue_free_play()
                return True
        return False

    def _handle_entry_actions(self):
        im = self.input_manager
        if im.action_pressed("erase"):
            self.panel.erase()
        if im.action_pressed("scope"):
            self._request_board(self.panel.toggle_scope())
        if im.action_pressed("confirm") and self.panel.confirm():
            self.settings.set("player", "initials", self.panel.initials)
            self.leaderboard.submit(self.panel.initials, self.panel.score,
                                    self.panel.victory, tag="run")
            self.input_manager.set_context("gameplay")
        elif im.action_pressed("cancel"):
            self.panel.skip()
            self.input_manager.set_context("gameplay")

    def _start(self):
        self.panel.close()
        self.input_manager.set_context("gameplay")
        self.world.start_game()

    # ===========================================================
    # End-of-run Panel
    # ===========================================================

    def _on_game_over(self, event: GameOverEvent):
        self._open_panel(event.score, victory=False)

    def _on_victory(self, event: VictoryEvent):
        self._open_panel(event.score, victory=True)

    def _open_panel(self, score, victory):
        self.panel.open(score, victory, self.settings.get("player", "initials", ""))
        self.input_manager.set_context("entry")
        self._request_board(self.panel.scope)

    def _request_board(self, scope):
        self.leaderboard.query(scope, BOARD_SIZE, tag=scope)

    def _poll_leaderboard(self):
        for result in self.leaderboard.poll():
            if not self.panel.active:
                continue
            if self.panel.apply_result(result):
                self.leaderboard.rank(self.panel.score, SCOPE_TODAY, tag="run")
                self._request_board(self.panel.scope)

    # ===========================================================
    # Rendering
    # ===========================================================

    def _draw(self):
        self.draw_manager.fps = self.clock.get_fps()
        self.draw_manager.draw_world(self.world, self.panel)
        self.draw_manager.render(self.screen, self.world.effects.shake_offset())
        pygame.display.flip()
