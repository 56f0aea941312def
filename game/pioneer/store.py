"""
EntityStore - owns every live entity collection and integrates movement.

Collision passes never remove entities mid-scan. They flag an entity with
``alive = False`` and ``prune()`` sweeps the collections once the pass is
over, so iteration order is never disturbed by removal.
"""

from __future__ import annotations

import copy
import math
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constants import GAME_HEIGHT, GAME_WIDTH, PARTICLE_DECAY, SHOCKWAVE_FADE, SHOCKWAVE_GROWTH
from .controls import InputState
from .entities import Bullet, Coin, Enemy, Particle, Player, PowerUp, Shockwave, Star
from .utils import clamp


@dataclass(frozen=True)
class RenderView:
    """Read-only copy of the world handed to the presentation layer"""
    player: Player
    enemies: Tuple[Enemy, ...]
    bullets: Tuple[Bullet, ...]
    power_ups: Tuple[PowerUp, ...]
    coins: Tuple[Coin, ...]
    particles: Tuple[Particle, ...]
    shockwaves: Tuple[Shockwave, ...]
    stars: Tuple[Star, ...]


class EntityStore:
    """Entity collections for one play session"""

    def __init__(
        self,
        player: Player,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
        stars: Optional[List[Star]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()

        self.player = player
        self.enemies: List[Enemy] = []
        self.bullets: List[Bullet] = []
        self.power_ups: List[PowerUp] = []
        self.coins: List[Coin] = []
        self.particles: List[Particle] = []
        self.shockwaves: List[Shockwave] = []
        self.stars: List[Star] = stars if stars is not None else []

    # ----------------------------
    # Queries
    # ----------------------------

    def live_enemies(self) -> List[Enemy]:
        return [e for e in self.enemies if e.alive]

    def in_bounds(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height

    # ----------------------------
    # Movement
    # ----------------------------

    def move_player(self, inputs: InputState):
        p = self.player
        if inputs.pointer is not None:
            p.x, p.y = inputs.pointer
        else:
            if inputs.up:
                p.y -= p.speed
            if inputs.down:
                p.y += p.speed
            if inputs.left:
                p.x -= p.speed
            if inputs.right:
                p.x += p.speed
        self.clamp_player()

    def clamp_player(self):
        p = self.player
        p.x = clamp(p.x, p.radius, self.width - p.radius)
        p.y = clamp(p.y, p.radius, self.height - p.radius)

    def move_stars(self):
        for star in self.stars:
            star.y += star.speed
            if star.y > self.height:
                star.y = 0.0
                star.x = self.rng.random() * self.width

    def move_bullets(self):
        for b in self.bullets:
            if not b.alive:
                continue
            b.x += math.cos(b.angle) * b.speed
            b.y += math.sin(b.angle) * b.speed

    def move_enemies(self):
        for e in self.enemies:
            if e.alive:
                e.y += e.speed

    def move_power_ups(self):
        for pu in self.power_ups:
            if pu.alive:
                pu.y += pu.speed

    def move_coins(self):
        for c in self.coins:
            if c.alive:
                c.y += c.speed

    def advance_particles(self):
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= PARTICLE_DECAY
            p.alpha = p.life

    def grow_shockwaves(self):
        for sw in self.shockwaves:
            sw.age += 1
            sw.radius += SHOCKWAVE_GROWTH
            # derived from age so the lifetime does not drift with float error
            sw.alpha = 1.0 - sw.age * SHOCKWAVE_FADE

    def tick(self, inputs: Optional[InputState] = None):
        """Advance every entity one step without resolving collisions"""
        self.move_player(inputs or InputState())
        self.move_stars()
        self.move_bullets()
        self.move_enemies()
        self.move_power_ups()
        self.move_coins()
        self.advance_particles()
        self.grow_shockwaves()

    # ----------------------------
    # Removal
    # ----------------------------

    def clear_enemies(self) -> int:
        """Flag every live enemy as removed; returns how many were cleared"""
        cleared = 0
        for e in self.enemies:
            if e.alive:
                e.alive = False
                cleared += 1
        return cleared

    def prune(self):
        """Sweep flagged, expired and off-field entities"""
        self.enemies = [e for e in self.enemies if e.alive]
        self.bullets = [b for b in self.bullets if b.alive]
        self.power_ups = [pu for pu in self.power_ups if pu.alive]
        self.coins = [c for c in self.coins if c.alive]
        self.particles = [p for p in self.particles if p.life > 0]
        self.shockwaves = [sw for sw in self.shockwaves if sw.alpha > 0]

    def view(self) -> RenderView:
        def frozen(items):
            return tuple(copy.copy(i) for i in items)

        player = copy.copy(self.player)
        player.power_ups = copy.copy(self.player.power_ups)
        return RenderView(
            player=player,
            enemies=frozen(self.enemies),
            bullets=frozen(self.bullets),
            power_ups=frozen(self.power_ups),
            coins=frozen(self.coins),
            particles=frozen(self.particles),
            shockwaves=frozen(self.shockwaves),
            stars=frozen(self.stars),
        )
