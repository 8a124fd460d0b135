"""
input_manager.py
----------------
Keyboard bindings for the two logical buttons plus the menu toggles.

Provides:
- Context-based bindings ("gameplay" and "entry" for typing initials)
- Edge detection (pressed, held) per action
- The per-frame InputState snapshot consumed by GameWorld.tick()
"""

import pygame

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.entities.player import InputState


# ===========================================================
# Default Key Bindings
# ===========================================================

DEFAULT_KEY_BINDINGS = {
    "gameplay": {
        "jump": [pygame.K_SPACE, pygame.K_UP, pygame.K_j],
        "shoot": [pygame.K_s, pygame.K_o],
        "pause": [pygame.K_p, pygame.K_ESCAPE],
        "mute": [pygame.K_m],
        "restart": [pygame.K_d, pygame.K_r],
        "free_play": [pygame.K_f],
        "scope": [pygame.K_TAB],
        "toggle_hitboxes": [pygame.K_F3],
    },
    "entry": {
        "confirm": [pygame.K_RETURN, pygame.K_KP_ENTER],
        "erase": [pygame.K_BACKSPACE],
        "cancel": [pygame.K_ESCAPE],
        "scope": [pygame.K_TAB],
    },
}


class InputManager:
    """
    Polls the keyboard once per frame and answers action queries.

    Usage:
        input_manager.update()
        if input_manager.action_pressed("pause"):    # Rising edge
            world.toggle_pause()
        world.tick(input_manager.input_state())      # Held buttons
    """

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, key_bindings=None):
        """
        Args:
            key_bindings: Custom bindings dict (DEFAULT_KEY_BINDINGS if None)
        """
        DebugLogger.init_entry("InputManager")

        self.key_bindings = key_bindings or DEFAULT_KEY_BINDINGS
        self.context = "gameplay"
        self._actions = {
            action: {"pressed": False, "held": False}
            for actions in self.key_bindings.values()
            for action in actions
        }
        self._validate_bindings()

    def _validate_bindings(self):
        """Warn if one key triggers two actions in the same context."""
        for context, actions in self.key_bindings.items():
            seen = {}
            for action, keys in actions.items():
                for key in keys:
                    if key in seen:
                        DebugLogger.warn(
                            f"[{context}] key {key} bound to both '{seen[key]}' and '{action}'",
                            category="input"
                        )
                    seen[key] = action

    # ===========================================================
    # Context Management
    # ===========================================================

    def set_context(self, name: str, keys=None):
        """
        Switch binding context.

        Held state is synced to the current keys so the switch itself never
        produces a pressed edge.

        Args:
            name: "gameplay" or "entry"
            keys: Key state to sync against (pygame.key.get_pressed() if None)
        """
        if name not in self.key_bindings:
            DebugLogger.warn(f"Unknown input context: {name}", category="input")
            return
        if name == self.context:
            return

        self.context = name
        keys = pygame.key.get_pressed() if keys is None else keys
        for action, state in self._actions.items():
            state["pressed"] = False
            state["held"] = action in self.key_bindings[name] and self._is_down(action, keys)

        DebugLogger.state(f"Input context -> [{name.upper()}]", category="input")

    # ===========================================================
    # Frame Update
    # ===========================================================

    def update(self, keys=None):
        """
        Poll the keyboard. Call once per frame before querying.

        Args:
            keys: Indexable key state; pygame.key.get_pressed() if None
        """
        keys = pygame.key.get_pressed() if keys is None else keys
        for action in self.key_bindings[self.context]:
            state = self._actions[action]
            was_held = state["held"]
            is_held = self._is_down(action, keys)
            state["held"] = is_held
            state["pressed"] = is_held and not was_held

    def _is_down(self, action, keys) -> bool:
        return any(keys[key] for key in self.key_bindings[self.context].get(action, ()))

    # ===========================================================
    # Action Queries
    # ===========================================================

    def action_pressed(self, action: str) -> bool:
        """Rising edge this frame: state transitions, menu toggles."""
        state = self._actions.get(action)
        return state["pressed"] if state else False

    def action_held(self, action: str) -> bool:
        """Level state: physics input."""
        state = self._actions.get(action)
        return state["held"] if state else False

    def input_state(self) -> InputState:
        """Held jump/shoot snapshot for GameWorld.tick()."""
        if self.context != "gameplay":
            return InputState()
        return InputState(jump=self.action_held("jump"), shoot=self.action_held("shoot"))
