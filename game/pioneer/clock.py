"""
SimulationClock - runs one fixed logical step over a World.

Tick order:
  input -> player move -> enemy spawn -> fire -> ability -> buff timers
  -> bullets (move, proximity fuse, leave field)
  -> enemies (move, escape, player contact)
  -> power-ups / coins (move, pickup)
  -> direct hits -> particles -> shockwaves (grow, ring damage)
  -> level-up re-check -> prune -> publish events
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from .constants import BULLET_ANGLE, FPS, SHOT_COOLDOWN, TRIPLE_SHOT_SPREAD
from .controls import IDLE, InputState
from .events import ShotFired, TickResult
from .spawner import create_bullet
from .world import World


class SimulationClock:
    """Drives one World; a finished world ignores further ticks."""

    def __init__(self, world: World):
        self.world = world

    def tick(self, inputs: Optional[InputState] = None, elapsed: float = 1.0 / FPS) -> TickResult:
        w = self.world
        if w.over:
            return TickResult(events=w.log.drain(), view=None, ran=False)

        inputs = inputs or IDLE
        w.tick_count += 1
        w.time += elapsed
        w.log.tick = w.tick_count
        store = w.store
        resolver = w.resolver

        store.move_player(inputs)

        enemy = w.spawner.tick(w.tracker.level)
        if enemy is not None:
            store.enemies.append(enemy)

        if inputs.firing:
            self._fire()
        if inputs.ability and w.ability.ready:
            w.ability.activate(resolver)

        self._advance_timers()

        store.move_stars()
        store.move_bullets()
        resolver.fuse_bullets()
        resolver.cull_bullets()

        store.move_enemies()
        if resolver.resolve_enemies():
            w.over = True
            w.tracker.game_over()
            store.prune()
            return TickResult(events=w.log.drain(), view=store.view())

        store.move_power_ups()
        resolver.collect_power_ups()
        store.move_coins()
        resolver.collect_coins()

        resolver.resolve_direct_hits()

        store.advance_particles()
        store.grow_shockwaves()
        resolver.apply_shockwaves()

        w.tracker.check_level_up(store.clear_enemies)
        store.prune()
        return TickResult(events=w.log.drain(), view=store.view())

    def _fire(self):
        w = self.world
        if w.time - w.last_shot_time <= SHOT_COOLDOWN:
            return
        p = w.store.player
        if p.power_ups.triple_shot > 0:
            angles = (BULLET_ANGLE, BULLET_ANGLE - TRIPLE_SHOT_SPREAD, BULLET_ANGLE + TRIPLE_SHOT_SPREAD)
        else:
            angles = (BULLET_ANGLE,)
        for angle in angles:
            w.store.bullets.append(create_bullet(p.x, p.y, True, angle))
        w.last_shot_time = w.time
        w.log.emit(ShotFired, bullets=len(angles))

    def _advance_timers(self):
        p = self.world.store.player
        if p.invincible:
            p.invincible_timer -= 1
            if p.invincible_timer <= 0:
                p.invincible = False
                logger.debug("Invincibility expired at tick {}", self.world.tick_count)
        if p.power_ups.triple_shot > 0:
            p.power_ups.triple_shot -= 1
