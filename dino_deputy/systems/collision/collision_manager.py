"""
collision_manager.py
--------------------
Per-frame collision resolution, kill scoring and near-miss bonuses.

Responsibilities
----------------
- Run every pairwise check in one fixed order each playing frame:
    1. bullets (both sides) vs cacti
    2. player bullets vs bandits, then vs flying thieves
    3. stomps on bandits, then on thieves
    4. enemy bullets vs player          (fatal)
    5. player vs cacti, bandits, thieves (fatal)
    6. near misses on cacti and enemy bullets
- Route kills through the combo tracker and progression.
- Remember which cacti and enemy bullets already paid a near-miss bonus.

Pools are scanned back-to-front whenever the scan removes members. A bullet
is removed the moment it hits something, so it can kill at most one target.
Stomp geometry and the fatal side-collision test are mutually exclusive, so
a target stomped this frame is already gone when the fatal pass runs.
"""

from typing import Optional

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Colors, Physics, Scoring
from dino_deputy.core.services.event_manager import EnemyKilledEvent, NearMissEvent
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.graphics.particles.particle_manager import BURSTS
from dino_deputy.systems.collision.geometry import Rect, overlaps, overlaps_horizontally


class CollisionManager:
    """Detects collisions and applies their in-game consequences."""

    BANDIT_STOMP_MARGIN = 10        # extra horizontal reach for bandit stomps
    BANDIT_STOMP_DEPTH = 0.7        # feet must land in the top 70% of a bandit
    BANDIT_STOMP_BOUNCE = -10
    THIEF_FEET_HEIGHT = 15
    THIEF_FEET_RISE = 10
    THIEF_STOMP_DEPTH = 0.6
    THIEF_SAFE_DEPTH = 0.4
    THIEF_STOMP_BOUNCE = Physics.JUMP_FORCE * 0.7

    def __init__(self, world):
        """
        Args:
            world: GameWorld owning the pools, player, combo and progression
        """
        self.world = world
        self.passed_cacti = set()
        self.dodged_bullets = set()
        DebugLogger.init_entry("CollisionManager")

    def reset(self):
        self.passed_cacti.clear()
        self.dodged_bullets.clear()

    def forget(self, entity):
        """Cull hook: drop a departing entity's near-miss record."""
        if entity.kind is EntityKind.CACTUS:
            self.passed_cacti.discard(entity.entity_id)
        elif entity.kind is EntityKind.ENEMY_BULLET:
            self.dodged_bullets.discard(entity.entity_id)

    # ===========================================================
    # Frame Entry Point
    # ===========================================================

    def update(self) -> Optional[EntityKind]:
        """
        Resolve all collisions for the current frame.

        Returns:
            The kind of entity that killed the player, or None
        """
        self._bullets_vs_cacti()
        self._bullets_vs_bandits()
        self._bullets_vs_thieves()
        self._stomp_bandits()
        self._stomp_thieves()

        cause = self._fatal_collision()
        if cause is not None:
            DebugLogger.state(f"Fatal collision with {cause.value}", category="collision")
            return cause

        self._cactus_near_misses()
        self._bullet_near_misses()
        return None

    # ===========================================================
    # 1. Bullets vs Cacti
    # ===========================================================

    def _bullets_vs_cacti(self):
        world = self.world
        particles = world.particles

        for pool, style in ((world.bullets, "bullet_impact"),
                            (world.enemy_bullets, "enemy_bullet_impact")):
            for i in pool.indices_reversed():
                bullet = pool[i]
                bullet_rect = bullet.rect()
                for cactus in world.cacti:
                    if overlaps(bullet_rect, cactus.rect()):
                        if bullet.kind is EntityKind.PLAYER_BULLET:
                            x, count = bullet_rect.right, 5
                        else:
                            x, count = bullet_rect.x, 4
                        particles.burst(x, bullet_rect.center_y, BURSTS[style], count)
                        pool.remove_at(i)
                        break

    # ===========================================================
    # 2. Player Bullets vs Enemies
    # ===========================================================

    def _bullets_vs_bandits(self):
        world = self.world
        bullets, bandits = world.bullets, world.bandits

        for i in bullets.indices_reversed():
            bullet_rect = bullets[i].rect()
            for j in bandits.indices_reversed():
                bandit = bandits[j]
                if overlaps(bullet_rect, bandit.rect()):
                    bullets.remove_at(i)
                    bandits.remove_at(j)
                    self._kill_bandit(bandit, stomped=False)
                    break

    def _bullets_vs_thieves(self):
        world = self.world
        bullets, thieves = world.bullets, world.thieves

        for i in bullets.indices_reversed():
            bullet_rect = bullets[i].rect()
            for j in thieves.indices_reversed():
                thief = thieves[j]
                if overlaps(bullet_rect, thief.shot_rect()):
                    bullets.remove_at(i)
                    thieves.remove_at(j)
                    self._kill_thief(thief, stomped=False)
                    break

    # ===========================================================
    # 3. Stomps
    # ===========================================================

    def is_bandit_stomp(self, bandit) -> bool:
        """Falling feet inside the widened top 70% band of a bandit."""
        player = self.world.player
        if not (player.is_jumping and player.is_falling):
            return False
        hitbox = player.hitbox()
        band = Rect(bandit.x - self.BANDIT_STOMP_MARGIN, bandit.top,
                    bandit.width + 2 * self.BANDIT_STOMP_MARGIN, bandit.height)
        landing = bandit.top <= hitbox.bottom <= bandit.top + bandit.height * self.BANDIT_STOMP_DEPTH
        return overlaps_horizontally(hitbox, band) and landing

    def is_thief_stomp(self, thief) -> bool:
        """Falling feet strip overlapping the top 60% of a thief."""
        player = self.world.player
        if not player.is_falling:
            return False
        hitbox = player.hitbox()
        feet = Rect(hitbox.x, hitbox.bottom - self.THIEF_FEET_RISE,
                    hitbox.width, self.THIEF_FEET_HEIGHT)
        top_band = Rect(thief.x, thief.y, thief.width, thief.height * self.THIEF_STOMP_DEPTH)
        return overlaps(feet, top_band)

    def _stomp_bandits(self):
        bandits = self.world.bandits
        for j in bandits.indices_reversed():
            bandit = bandits[j]
            if self.is_bandit_stomp(bandit):
                bandits.remove_at(j)
                self.world.player.bounce(self.BANDIT_STOMP_BOUNCE)
                self._kill_bandit(bandit, stomped=True)

    def _stomp_thieves(self):
        thieves = self.world.thieves
        for j in thieves.indices_reversed():
            thief = thieves[j]
            if self.is_thief_stomp(thief):
                thieves.remove_at(j)
                self.world.player.bounce(self.THIEF_STOMP_BOUNCE)
                self._kill_thief(thief, stomped=True)

    # ===========================================================
    # Kill Scoring
    # ===========================================================

    def _kill_bandit(self, bandit, stomped: bool):
        world = self.world
        combo = world.combo
        points = combo.register_kill(Scoring.BANDIT_BASE)
        world.level_manager.add_score(points)

        top = bandit.top
        if combo.kill_combo > 1:
            world.particles.text(bandit.x, top - 25, f"{combo.kill_combo}x COMBO!", Colors.DARK)
        label = "STOMP!" if stomped else "BANDIT!"
        world.particles.text(bandit.x, top - 10, f"{label} +{points}", Colors.DARK)

        center = (bandit.x + bandit.width / 2, bandit.y - bandit.height / 2)
        world.particles.burst(*center, BURSTS["bandit_death"], 10 + combo.kill_combo * 2)
        self._announce_kill(bandit, center, points, stomped)

    def _kill_thief(self, thief, stomped: bool):
        world = self.world
        combo = world.combo
        points = combo.register_kill(Scoring.THIEF_BASE)
        world.level_manager.add_score(points)

        if stomped:
            world.particles.text(thief.x, thief.y - 20, f"STOMP! +{points}", Colors.BANDIT)
        elif combo.kill_combo > 1:
            world.particles.text(thief.x, thief.y, f"COMBO x{combo.multiplier}! +{points}", Colors.BANDIT)
        else:
            world.particles.text(thief.x, thief.y, f"+{points}", Colors.BANDIT)

        center = (thief.x + thief.width / 2, thief.y + thief.height / 2)
        if stomped:
            world.particles.burst(*center, BURSTS["thief_stomp"], 10)
        else:
            world.particles.burst(*center, BURSTS["thief_shot"], 12)
        self._announce_kill(thief, center, points, stomped)

    def _announce_kill(self, enemy, center, points, stomped):
        combo = self.world.combo.kill_combo
        DebugLogger.action(
            f"{enemy.kind.value} #{enemy.entity_id} {'stomped' if stomped else 'shot'} "
            f"(combo {combo}, +{points})",
            category="combo"
        )
        self.world.events.dispatch(EnemyKilledEvent(enemy.kind, center, combo, points, stomped))

    # ===========================================================
    # 4-5. Fatal Collisions
    # ===========================================================

    def _fatal_collision(self) -> Optional[EntityKind]:
        world = self.world
        hitbox = world.player.hitbox()

        for bullet in world.enemy_bullets:
            if overlaps(bullet.rect(), hitbox):
                return EntityKind.ENEMY_BULLET

        for cactus in world.cacti:
            if overlaps(hitbox, cactus.rect()):
                return EntityKind.CACTUS

        for bandit in world.bandits:
            if overlaps(hitbox, bandit.rect()) and not self._is_landing_on_bandit(bandit, hitbox):
                return EntityKind.BANDIT

        for thief in world.thieves:
            body = thief.body_rect()
            if overlaps(hitbox, body) and not self._is_landing_on_thief(body, hitbox):
                return EntityKind.FLYING_THIEF

        return None

    def _is_landing_on_bandit(self, bandit, hitbox: Rect) -> bool:
        player = self.world.player
        return player.is_falling and hitbox.bottom <= bandit.top + bandit.height * self.BANDIT_STOMP_DEPTH

    def _is_landing_on_thief(self, body: Rect, hitbox: Rect) -> bool:
        player = self.world.player
        return player.is_falling and hitbox.bottom < body.y + body.height * self.THIEF_SAFE_DEPTH

    # ===========================================================
    # 6. Near Misses
    # ===========================================================

    def _cactus_near_misses(self):
        world = self.world
        player = world.player
        if not player.is_jumping:
            return

        hitbox = player.hitbox()
        for cactus in world.cacti:
            if cactus.entity_id in self.passed_cacti:
                continue
            rect = cactus.rect()
            clearance = rect.y - hitbox.bottom
            if overlaps_horizontally(hitbox, rect) and 0 < clearance < Scoring.CLOSE_CALL_CLEARANCE:
                self.passed_cacti.add(cactus.entity_id)
                self._award_near_miss(
                    cactus, Scoring.CLOSE_CALL_BONUS,
                    rect.center_x, rect.y - 20, "CLOSE!"
                )

    def _bullet_near_misses(self):
        world = self.world
        hitbox = world.player.hitbox()

        for bullet in world.enemy_bullets:
            if bullet.entity_id in self.dodged_bullets:
                continue
            rect = bullet.rect()
            behind = rect.right < hitbox.x
            close = abs(rect.center_y - hitbox.center_y) < Scoring.DODGE_BAND
            if behind and close:
                self.dodged_bullets.add(bullet.entity_id)
                self._award_near_miss(
                    bullet, Scoring.DODGE_BONUS,
                    world.player.x, hitbox.y - 10, "DODGE!"
                )

        if len(self.dodged_bullets) > Scoring.DODGE_ID_CAP:
            live = {bullet.entity_id for bullet in world.enemy_bullets}
            self.dodged_bullets &= live

    def _award_near_miss(self, entity, points, text_x, text_y, label):
        world = self.world
        world.level_manager.add_score(points)
        world.particles.text(text_x, text_y, f"{label} +{points}", Colors.DARK)
        world.effects.close_call()
        DebugLogger.trace(f"{label} {entity.kind.value} #{entity.entity_id}", category="collision")
        world.events.dispatch(NearMissEvent(entity.kind, entity.entity_id, points))
