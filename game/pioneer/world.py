"""
World - the explicit aggregate of everything one play session mutates.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional

from .ability import AbilitySystem
from .collisions import CollisionResolver
from .constants import GAME_HEIGHT, GAME_WIDTH, STAR_COUNT
from .entities import Player
from .events import EventLog
from .economy import EconomyLedger
from .progression import ProgressionTracker
from .spawner import Spawner
from .store import EntityStore


def new_player(width: int = GAME_WIDTH, height: int = GAME_HEIGHT) -> Player:
    return Player(x=width / 2, y=height - 50)


class World:
    """
    Player, entity collections, counters, achievement state and timers.
    Components share one event log and one random source.
    """

    def __init__(
        self,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
        rng: Optional[random.Random] = None,
        coins: int = 0,
        unlocked: Optional[Iterable[str]] = None,
        star_count: int = STAR_COUNT,
    ):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.log = EventLog()

        self.spawner = Spawner(self.rng, width, height)
        self.store = EntityStore(
            new_player(width, height),
            width,
            height,
            stars=self.spawner.stars(star_count),
            rng=self.rng,
        )
        self.tracker = ProgressionTracker(self.log, unlocked=unlocked)
        self.ability = AbilitySystem(self.store.player, self.log)
        self.ledger = EconomyLedger(self.log, coins)
        self.resolver = CollisionResolver(
            self.store, self.spawner, self.tracker, self.ability, self.ledger, self.log,
        )

        self.tick_count = 0
        self.time = 0.0  # seconds of host clock seen so far
        self.last_shot_time = float("-inf")
        self.over = False

    @property
    def player(self) -> Player:
        return self.store.player

    @property
    def score(self) -> int:
        return self.tracker.score

    @property
    def level(self) -> int:
        return self.tracker.level

    @property
    def coins(self) -> int:
        return self.ledger.balance

    def purchase(self, item, price: int) -> bool:
        return self.ledger.purchase(item, price, self.store.player, self.ability)

    def view(self):
        return self.store.view()
