"""Shared fixtures: deterministic worlds and entity placement helpers."""

from __future__ import annotations

import random

import pytest

from game.pioneer.clock import SimulationClock
from game.pioneer.spawner import create_bullet, create_enemy
from game.pioneer.world import World


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same draw."""

    def __init__(self, value: float = 0.5) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def add_enemy(world: World, x: float, y: float, enemy_type: str = "BASIC", level: int = 1):
    enemy = create_enemy(level, enemy_type, x, y)
    world.store.enemies.append(enemy)
    return enemy


def add_bullet(world: World, x: float, y: float, is_player: bool = True):
    bullet = create_bullet(x, y, is_player)
    world.store.bullets.append(bullet)
    return bullet


@pytest.fixture
def rng() -> FixedRandom:
    return FixedRandom(0.5)


@pytest.fixture
def world(rng) -> World:
    return World(rng=rng, star_count=0)


@pytest.fixture
def clock(world) -> SimulationClock:
    return SimulationClock(world)
