"""
Spawner - decides when and what to create.

Enemies arrive on a timer that shortens with level; power-ups and coins
only appear as byproducts of enemy kills.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional, Union

from .constants import (
    BULLET_ANGLE,
    BULLET_DAMAGE,
    BULLET_RADIUS,
    BULLET_SPEED,
    COIN_COLOR,
    COIN_RADIUS,
    COIN_SPEED,
    COIN_VALUE,
    ENEMY_BULLET_COLOR,
    ENEMY_CONFIG,
    ENEMY_HEALTH_LEVEL_STEP,
    ENEMY_SPEED_PER_LEVEL,
    ENEMY_TYPE_RULES,
    GAME_HEIGHT,
    GAME_WIDTH,
    PLAYER_BULLET_COLOR,
    POWERUP_CONFIG,
    POWERUP_DROP_CHANCE,
    POWERUP_SPEED,
    SPAWN_BASE_TICKS,
    SPAWN_MIN_TICKS,
    SPAWN_TICKS_PER_LEVEL,
    STAR_COUNT,
)
from .entities import Bullet, Coin, Enemy, EnemyType, Particle, PowerUp, PowerUpType, Star


def spawn_interval(level: int) -> int:
    """Ticks between enemy spawns at a given level"""
    return max(SPAWN_MIN_TICKS, SPAWN_BASE_TICKS - level * SPAWN_TICKS_PER_LEVEL)


def select_enemy_type(level: int, draw: float) -> EnemyType:
    """
    Pick an enemy type from the level and a uniform draw in [0, 1).
    Rules run in order and the last matching one wins, so a later rule
    can override an earlier one even where it looks narrower.
    """
    enemy_type = EnemyType.BASIC
    for min_level, threshold, name in ENEMY_TYPE_RULES:
        if level >= min_level and draw > threshold:
            enemy_type = EnemyType(name)
    return enemy_type


def create_enemy(
    level: int,
    enemy_type: Union[EnemyType, str],
    x: float,
    y: Optional[float] = None,
) -> Enemy:
    # EnemyType() raises ValueError for unknown names
    enemy_type = EnemyType(enemy_type)
    config = ENEMY_CONFIG[enemy_type.value]
    radius = config["radius"]
    return Enemy(
        x=x,
        y=-radius if y is None else y,
        type=enemy_type,
        radius=radius,
        speed=config["speed"] + level * ENEMY_SPEED_PER_LEVEL,
        health=config["health"] + level // ENEMY_HEALTH_LEVEL_STEP,
        score_value=config["score_value"],
        color=config["color"],
    )


def create_power_up(x: float, y: float, power_up_type: Union[PowerUpType, str]) -> PowerUp:
    power_up_type = PowerUpType(power_up_type)
    config = POWERUP_CONFIG[power_up_type.value]
    return PowerUp(
        x=x,
        y=y,
        type=power_up_type,
        radius=config["radius"],
        speed=POWERUP_SPEED,
        color=config["color"],
    )


def create_coin(x: float, y: float) -> Coin:
    return Coin(x=x, y=y, radius=COIN_RADIUS, speed=COIN_SPEED, value=COIN_VALUE, color=COIN_COLOR)


def create_bullet(x: float, y: float, is_player: bool = True, angle: float = BULLET_ANGLE) -> Bullet:
    return Bullet(
        x=x,
        y=y,
        radius=BULLET_RADIUS,
        speed=BULLET_SPEED,
        damage=BULLET_DAMAGE,
        is_player_bullet=is_player,
        color=PLAYER_BULLET_COLOR if is_player else ENEMY_BULLET_COLOR,
        angle=angle,
    )


class Spawner:
    """Enemy timer plus the factories for kill byproducts"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
    ):
        self.rng = rng or random.Random()
        self.width = width
        self.height = height
        self.timer = 0

    def tick(self, level: int) -> Optional[Enemy]:
        """Advance the spawn timer; returns a new enemy when it fires"""
        self.timer += 1
        if self.timer > spawn_interval(level):
            self.timer = 0
            return self.spawn_enemy(level)
        return None

    def spawn_enemy(self, level: int) -> Enemy:
        enemy_type = select_enemy_type(level, self.rng.random())
        radius = ENEMY_CONFIG[enemy_type.value]["radius"]
        x = self.rng.random() * (self.width - radius * 2) + radius
        return create_enemy(level, enemy_type, x)

    def roll_power_up(self, x: float, y: float) -> Optional[PowerUp]:
        if self.rng.random() >= POWERUP_DROP_CHANCE:
            return None
        kind = PowerUpType.TRIPLE_SHOT if self.rng.random() > 0.5 else PowerUpType.SHIELD
        return create_power_up(x, y, kind)

    def particles(self, x: float, y: float, color: str, count: int) -> List[Particle]:
        out = []
        for _ in range(count):
            angle = self.rng.random() * math.pi * 2
            speed = self.rng.random() * 3 + 1
            out.append(Particle(
                x=x,
                y=y,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                radius=self.rng.random() * 3 + 1,
                color=color,
            ))
        return out

    def stars(self, count: int = STAR_COUNT) -> List[Star]:
        return [
            Star(
                x=self.rng.random() * self.width,
                y=self.rng.random() * self.height,
                size=self.rng.random() * 2,
                speed=self.rng.random() * 2 + 0.5,
                opacity=self.rng.random(),
            )
            for _ in range(count)
        ]
