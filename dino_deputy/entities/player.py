"""
player.py
---------
Player controller: jump / double jump, single-action shooting, gravity.

Responsibilities
----------------
- Integrate vertical physics once per frame and clamp to the ground line.
- Gate jumps behind a release latch so holding jump never chains impulses.
- Gate shots behind a cooldown and, when the preset asks for it, a release
  latch (one pull of the trigger, one bullet).
- Derive the inset hitbox used by every collision check.
"""

from typing import NamedTuple

from dino_deputy.core.runtime.game_settings import Physics, PlayerDims
from dino_deputy.systems.collision.geometry import Rect


# ===========================================================
# Input / Output Records
# ===========================================================

class InputState(NamedTuple):
    """Level-triggered logical buttons sampled once per frame."""
    jump: bool = False
    shoot: bool = False


class PlayerActions(NamedTuple):
    """What the player did this frame, for the world to act on."""
    jump_number: int = 0  # 0 = no jump, 1 = ground jump, 2 = double jump
    shot: bool = False


# ===========================================================
# Player
# ===========================================================

class Player:
    """The deputy. `y` is the feet line; the sprite extends `height` above it."""

    def __init__(self, preset):
        self.preset = preset
        self.x = PlayerDims.X
        self.width = PlayerDims.WIDTH
        self.height = PlayerDims.HEIGHT
        self.reset()

    def reset(self):
        """Put the player back on the ground with all latches armed."""
        self.y = Physics.GROUND_Y
        self.velocity_y = 0.0
        self.is_jumping = False
        self.jump_count = 0
        self.can_jump_again = True

        self.shoot_cooldown = 0
        self.shoot_released = True
        self.is_shooting = False
        self.shoot_anim_frames = 0

    # ===========================================================
    # Frame Update
    # ===========================================================

    def update(self, input_state: InputState) -> PlayerActions:
        """
        Advance the player by one frame.

        Args:
            input_state: Held state of the jump and shoot buttons

        Returns:
            PlayerActions describing any jump or shot that happened
        """
        jump_number = self._update_jump(input_state.jump)
        shot = self._update_shooting(input_state.shoot)
        self._apply_gravity()

        if self.shoot_cooldown > 0:
            self.shoot_cooldown -= 1

        return PlayerActions(jump_number, shot)

    def _update_jump(self, jump_held: bool) -> int:
        jump_number = 0
        if jump_held and self.can_jump_again and self.jump_count < Physics.MAX_JUMPS:
            self.velocity_y = Physics.JUMP_FORCE
            self.is_jumping = True
            self.jump_count += 1
            self.can_jump_again = False
            jump_number = self.jump_count

        if not jump_held:
            self.can_jump_again = True
        return jump_number

    def _update_shooting(self, shoot_held: bool) -> bool:
        trigger_ready = self.shoot_released or not self.preset.shoot_requires_release
        shot = False
        if shoot_held and self.shoot_cooldown <= 0 and trigger_ready:
            self.is_shooting = True
            self.shoot_anim_frames = PlayerDims.SHOOT_ANIM_FRAMES
            self.shoot_cooldown = self.preset.shoot_cooldown
            self.shoot_released = False
            shot = True

        if not shoot_held:
            self.shoot_released = True

        if self.shoot_anim_frames > 0:
            self.shoot_anim_frames -= 1
            if self.shoot_anim_frames == 0:
                self.is_shooting = False
        return shot

    def _apply_gravity(self):
        self.velocity_y += Physics.GRAVITY
        self.y += self.velocity_y

        if self.y >= Physics.GROUND_Y:
            self.y = Physics.GROUND_Y
            self.velocity_y = 0.0
            self.is_jumping = False
            self.jump_count = 0

    # ===========================================================
    # Queries & Reactions
    # ===========================================================

    @property
    def is_falling(self) -> bool:
        return self.velocity_y > 0

    def hitbox(self) -> Rect:
        """Collision box, inset from the sprite at the top and the right."""
        return Rect(
            self.x,
            self.y - self.height + PlayerDims.HITBOX_TOP_INSET,
            self.width - PlayerDims.HITBOX_RIGHT_INSET,
            self.height - PlayerDims.HITBOX_TOP_INSET,
        )

    def muzzle(self) -> tuple:
        return (
            self.x + PlayerDims.MUZZLE_OFFSET_X,
            self.y - self.height + PlayerDims.MUZZLE_OFFSET_Y,
        )

    def bounce(self, velocity: float):
        """Kick the player upward after a stomp. Jump count is left alone."""
        self.velocity_y = velocity
