"""
EconomyLedger - coin balance and shop purchases.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from loguru import logger

from .constants import POWERUP_CONFIG, SHOP_PRICES
from .entities import Player
from .events import CoinsChanged, EventLog, HealthChanged

if TYPE_CHECKING:
    from .ability import AbilitySystem


class ShopItem(str, Enum):
    TRIPLE_SHOT = "TRIPLE_SHOT"
    SHIELD = "SHIELD"
    HEALTH = "HEALTH"
    ULTIMATE = "ULTIMATE"

    @property
    def price(self) -> int:
        return SHOP_PRICES[self.value]


def parse_item(item: Union[ShopItem, str]) -> Optional[ShopItem]:
    try:
        return ShopItem(item)
    except ValueError:
        return None


class EconomyLedger:
    """Coin balance; increased only by coin pickups, spent only in the shop"""

    def __init__(self, log: EventLog, balance: int = 0):
        if balance < 0:
            raise ValueError(f"Balance cannot be negative: {balance}")
        self.log = log
        self.balance = balance

    def deposit(self, amount: int):
        self.balance += amount
        self.log.emit(CoinsChanged, balance=self.balance)

    def can_afford(self, price: int) -> bool:
        return self.balance >= price

    def purchase(
        self,
        item: Union[ShopItem, str],
        price: int,
        player: Player,
        ability: "AbilitySystem",
    ) -> bool:
        """
        Buy ``item`` for ``price``. Either the balance drops by exactly
        ``price`` and the effect is applied, or nothing changes and False
        is returned.
        """
        shop_item = parse_item(item)
        if shop_item is None:
            logger.debug("Purchase rejected: unknown item {!r}", item)
            return False
        if price < 0:
            logger.debug("Purchase rejected: negative price {}", price)
            return False
        if not self.can_afford(price):
            logger.debug("Purchase rejected: {} costs {}, balance {}", shop_item.value, price, self.balance)
            return False
        if shop_item is ShopItem.HEALTH and player.health >= player.max_health:
            logger.debug("Purchase rejected: health already full")
            return False

        self.balance -= price
        if shop_item is ShopItem.TRIPLE_SHOT:
            player.power_ups.triple_shot = POWERUP_CONFIG["TRIPLE_SHOT"]["duration"]
        elif shop_item is ShopItem.SHIELD:
            player.power_ups.shield = True
        elif shop_item is ShopItem.HEALTH:
            player.health += 1
            self.log.emit(HealthChanged, health=player.health)
        elif shop_item is ShopItem.ULTIMATE:
            ability.fill()
        self.log.emit(CoinsChanged, balance=self.balance)
        logger.info("Purchased {} for {} coins", shop_item.value, price)
        return True
