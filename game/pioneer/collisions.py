"""
CollisionResolver - circle overlap tests and the state changes they cause.

Architecture
------------
Each pass scans one pairing and flags losers with ``alive = False``; the
store sweeps them at the end of the tick. A flagged entity is skipped by
every later pass in the same tick, so an enemy can only die once and a
bullet can only be spent once.

Passes, in tick order:

  1. ``fuse_bullets()``: a player bullet within 60 units of any enemy
     detonates into a shockwave without direct damage.
  2. ``cull_bullets()``: bullets that left the playfield.
  3. ``resolve_enemies()``: bottom-edge escapes (score penalty) and
     enemy-player contact (shield or health loss, then invincibility).
  4. ``collect_power_ups()`` / ``collect_coins()``: player pickups.
  5. ``resolve_direct_hits()``: bullet-enemy overlap.
  6. ``apply_shockwaves()``: ring damage from every active shockwave.

Kill consequences (score, coin, particles, power-up roll, charge,
achievements, level-up) all go through ``destroy_enemy()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from .constants import (
    CHARGE_DIRECT_KILL,
    CHARGE_RING_KILL,
    ESCAPE_PENALTY,
    PARTICLES_ABILITY_KILL,
    PARTICLES_DIRECT_KILL,
    PARTICLES_PLAYER_HIT,
    PARTICLES_RING_KILL,
    POWERUP_CONFIG,
    PROXIMITY_FUSE_RANGE,
    SHOCKWAVE_BAND,
    SHOCKWAVE_DAMAGE,
    SHOCKWAVE_MAX_RADIUS,
)
from .entities import Bullet, Enemy, PowerUpType, Shockwave
from .events import (
    CoinCollected,
    EnemyDestroyed,
    EnemyEscaped,
    EventLog,
    HealthChanged,
    PlayerHit,
    PowerUpCollected,
)
from .spawner import create_coin
from .utils import circle_collide, distance

if TYPE_CHECKING:
    from .ability import AbilitySystem
    from .economy import EconomyLedger
    from .progression import ProgressionTracker
    from .spawner import Spawner
    from .store import EntityStore

DIRECT = "direct"
RING = "ring"
ABILITY = "ability"

_KILL_PARTICLES = {
    DIRECT: PARTICLES_DIRECT_KILL,
    RING: PARTICLES_RING_KILL,
    ABILITY: PARTICLES_ABILITY_KILL,
}

_KILL_CHARGE = {
    DIRECT: CHARGE_DIRECT_KILL,
    RING: CHARGE_RING_KILL,
    ABILITY: 0,
}


class CollisionResolver:
    """Applies collision outcomes to the entities of one world."""

    def __init__(
        self,
        store: EntityStore,
        spawner: Spawner,
        tracker: ProgressionTracker,
        ability: AbilitySystem,
        ledger: EconomyLedger,
        log: EventLog,
    ) -> None:
        self.store = store
        self.spawner = spawner
        self.tracker = tracker
        self.ability = ability
        self.ledger = ledger
        self.log = log

    # -- Effects ----------------------------------------------------------------

    def raise_shockwave(self, x: float, y: float, color: str) -> Shockwave:
        sw = Shockwave(x=x, y=y, max_radius=SHOCKWAVE_MAX_RADIUS, color=color)
        self.store.shockwaves.append(sw)
        return sw

    def burst(self, x: float, y: float, color: str, count: int) -> None:
        self.store.particles.extend(self.spawner.particles(x, y, color, count))

    # -- Kills ------------------------------------------------------------------

    def destroy_enemy(self, enemy: Enemy, cause: str, evaluate_level: bool = True) -> None:
        """Remove a dead enemy and apply every consequence of the kill."""
        enemy.alive = False
        self.log.emit(
            EnemyDestroyed,
            enemy_type=enemy.type.value,
            cause=cause,
            x=enemy.x,
            y=enemy.y,
            score_value=enemy.score_value,
        )
        self.tracker.record_kill(enemy.score_value)
        if evaluate_level:
            self.tracker.check_level_up(self.store.clear_enemies)

        power_up = self.spawner.roll_power_up(enemy.x, enemy.y)
        if power_up is not None:
            self.store.power_ups.append(power_up)
        self.store.coins.append(create_coin(enemy.x, enemy.y))

        charge = _KILL_CHARGE[cause]
        if charge:
            self.ability.add_charge(charge)
        self.burst(enemy.x, enemy.y, enemy.color, _KILL_PARTICLES[cause])

    def destroy_all_enemies(self) -> int:
        """Ability sweep: every live enemy dies, triggers evaluated afterwards."""
        targets = self.store.live_enemies()
        for enemy in targets:
            self.destroy_enemy(enemy, ABILITY, evaluate_level=False)
        self.tracker.check_level_up(self.store.clear_enemies)
        return len(targets)

    # -- Bullets ----------------------------------------------------------------

    def _near_enemy(self, bullet: Bullet) -> bool:
        for enemy in self.store.enemies:
            if enemy.alive and distance(bullet.x, bullet.y, enemy.x, enemy.y) < PROXIMITY_FUSE_RANGE:
                return True
        return False

    def fuse_bullets(self) -> int:
        """Proximity fuse: detonate player bullets close to any enemy."""
        detonated = 0
        for bullet in self.store.bullets:
            if not (bullet.alive and bullet.is_player_bullet):
                continue
            if self._near_enemy(bullet):
                bullet.alive = False
                self.raise_shockwave(bullet.x, bullet.y, bullet.color)
                detonated += 1
        return detonated

    def cull_bullets(self) -> None:
        for bullet in self.store.bullets:
            if bullet.alive and not self.store.in_bounds(bullet.x, bullet.y):
                bullet.alive = False

    def resolve_direct_hits(self) -> int:
        hits = 0
        for bullet in self.store.bullets:
            if not (bullet.alive and bullet.is_player_bullet):
                continue
            for enemy in self.store.enemies:
                if not enemy.alive or not circle_collide(bullet, enemy):
                    continue
                self.raise_shockwave(bullet.x, bullet.y, bullet.color)
                enemy.health -= bullet.damage
                bullet.alive = False
                hits += 1
                if enemy.health <= 0:
                    self.destroy_enemy(enemy, DIRECT)
                break
        return hits

    # -- Enemies vs player / boundary -------------------------------------------

    def hit_player(self, enemy: Enemy) -> bool:
        """Contact damage; returns True when the player is out of health."""
        player = self.store.player
        shielded = player.power_ups.shield
        if shielded:
            player.power_ups.shield = False
        else:
            player.health = max(0, player.health - 1)
        player.grant_invincibility()
        self.log.emit(PlayerHit, shielded=shielded)
        if not shielded:
            self.log.emit(HealthChanged, health=player.health)

        self.burst(enemy.x, enemy.y, enemy.color, PARTICLES_PLAYER_HIT)
        enemy.alive = False
        return player.health <= 0

    def resolve_enemies(self) -> bool:
        """Escapes and player contact. Returns True on game over."""
        player = self.store.player
        for enemy in self.store.enemies:
            if not enemy.alive:
                continue
            if enemy.y > self.store.height + enemy.radius:
                enemy.alive = False
                self.tracker.penalize(ESCAPE_PENALTY)
                self.log.emit(EnemyEscaped, enemy_type=enemy.type.value, penalty=ESCAPE_PENALTY)
                continue
            if not player.invincible and circle_collide(player, enemy):
                if self.hit_player(enemy):
                    logger.debug("Player destroyed by {}", enemy.type.value)
                    return True
        return False

    # -- Pickups ----------------------------------------------------------------

    def collect_power_ups(self) -> None:
        player = self.store.player
        for pu in self.store.power_ups:
            if not pu.alive:
                continue
            if circle_collide(player, pu):
                if pu.type is PowerUpType.TRIPLE_SHOT:
                    player.power_ups.triple_shot = POWERUP_CONFIG["TRIPLE_SHOT"]["duration"]
                elif pu.type is PowerUpType.SHIELD:
                    player.power_ups.shield = True
                pu.alive = False
                self.tracker.record_pickup()
                self.log.emit(PowerUpCollected, power_up=pu.type.value, total=self.tracker.pickups)
            elif pu.y > self.store.height:
                pu.alive = False

    def collect_coins(self) -> None:
        player = self.store.player
        for coin in self.store.coins:
            if not coin.alive:
                continue
            if circle_collide(player, coin):
                coin.alive = False
                self.ledger.deposit(coin.value)
                self.log.emit(CoinCollected, value=coin.value)
            elif coin.y > self.store.height:
                coin.alive = False

    # -- Shockwaves -------------------------------------------------------------

    def apply_shockwaves(self) -> None:
        """Ring damage: enemies strictly inside radius +/- 20 take 0.2."""
        for sw in list(self.store.shockwaves):
            for enemy in self.store.enemies:
                if not enemy.alive:
                    continue
                d = distance(sw.x, sw.y, enemy.x, enemy.y)
                if sw.radius - SHOCKWAVE_BAND < d < sw.radius + SHOCKWAVE_BAND:
                    enemy.health -= SHOCKWAVE_DAMAGE
                    if enemy.health <= 0:
                        self.destroy_enemy(enemy, RING)
