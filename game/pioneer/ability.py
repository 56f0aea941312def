"""
AbilitySystem - the player's special-charge meter and screen clear.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from .constants import ABILITY_SHOCKWAVE_MAX_RADIUS, MAX_CHARGE
from .entities import Player, Shockwave
from .events import AbilityActivated, ChargeChanged, EventLog

if TYPE_CHECKING:
    from .collisions import CollisionResolver


class AbilitySystem:
    """Charge lives on the player so the render view can show it"""

    def __init__(self, player: Player, log: EventLog):
        self.player = player
        self.log = log

    @property
    def charge(self) -> int:
        return self.player.ultimate_charge

    @property
    def ready(self) -> bool:
        return self.player.ultimate_charge >= MAX_CHARGE

    def add_charge(self, amount: int) -> int:
        self.player.ultimate_charge = min(MAX_CHARGE, self.player.ultimate_charge + amount)
        self.log.emit(ChargeChanged, charge=self.player.ultimate_charge)
        return self.player.ultimate_charge

    def fill(self):
        self.player.ultimate_charge = MAX_CHARGE
        self.log.emit(ChargeChanged, charge=MAX_CHARGE)

    def activate(self, resolver: "CollisionResolver") -> bool:
        """
        Spend a full meter: raise a large shockwave at the player and destroy
        every live enemy as a normal kill, without charge gain.
        """
        if not self.ready:
            return False
        p = self.player
        p.ultimate_charge = 0
        self.log.emit(ChargeChanged, charge=0)
        resolver.store.shockwaves.append(Shockwave(
            x=p.x, y=p.y, max_radius=ABILITY_SHOCKWAVE_MAX_RADIUS, color=p.color,
        ))
        destroyed = resolver.destroy_all_enemies()
        logger.debug("Ability activated, destroyed {} enemies", destroyed)
        self.log.emit(AbilityActivated, destroyed=destroyed)
        return True
