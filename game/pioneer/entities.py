"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from enum import Enum

from .constants import (
    BULLET_ANGLE,
    INVINCIBILITY_TICKS,
    PLAYER_COLOR,
    PLAYER_MAX_HEALTH,
    PLAYER_RADIUS,
    PLAYER_SPEED,
)


class EnemyType(str, Enum):
    BASIC = "BASIC"
    FAST = "FAST"
    HEAVY = "HEAVY"


class PowerUpType(str, Enum):
    TRIPLE_SHOT = "TRIPLE_SHOT"
    SHIELD = "SHIELD"


@dataclass
class PowerUpState:
    """Timed and one-shot buffs held by the player"""
    triple_shot: int = 0  # ticks left
    shield: bool = False


@dataclass
class Player:
    """Player ship; exactly one per world"""
    x: float
    y: float
    radius: float = PLAYER_RADIUS
    color: str = PLAYER_COLOR
    speed: float = PLAYER_SPEED
    health: int = PLAYER_MAX_HEALTH
    max_health: int = PLAYER_MAX_HEALTH
    invincible: bool = False
    invincible_timer: int = 0
    power_ups: PowerUpState = field(default_factory=PowerUpState)
    ultimate_charge: int = 0  # [0, 100]

    def grant_invincibility(self, ticks: int = INVINCIBILITY_TICKS):
        self.invincible = True
        self.invincible_timer = ticks


@dataclass
class Enemy:
    """Enemy ship falling down the playfield"""
    x: float
    y: float
    type: EnemyType
    radius: float
    speed: float
    health: float
    score_value: int
    color: str
    alive: bool = True


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    radius: float
    speed: float
    damage: float
    is_player_bullet: bool
    color: str
    angle: float = BULLET_ANGLE
    alive: bool = True


@dataclass
class PowerUp:
    """Collectible power-up"""
    x: float
    y: float
    type: PowerUpType
    radius: float
    speed: float
    color: str
    alive: bool = True


@dataclass
class Coin:
    """Collectible coin"""
    x: float
    y: float
    radius: float
    speed: float
    value: int
    color: str
    alive: bool = True


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: str
    life: float = 1.0
    alpha: float = 1.0


@dataclass
class Shockwave:
    """Expanding ring that damages enemies caught in its edge"""
    x: float
    y: float
    max_radius: float
    color: str
    radius: float = 0.0
    alpha: float = 1.0
    age: int = 0  # ticks since raised


@dataclass
class Star:
    x: float
    y: float
    size: float
    speed: float
    opacity: float
