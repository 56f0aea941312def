"""
Events emitted by the simulation during a tick.

The core never calls back into the host. Every observable change is
appended to the tick's event log in the order it happened, and the host
drains ``TickResult.events`` after the tick completes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Achievement:
    """Immutable achievement snapshot handed to the host"""
    id: str
    title: str
    description: str
    icon: str
    unlocked: bool = False


@dataclass(frozen=True, kw_only=True)
class BaseEvent:
    """Marker base class so you can type on 'list[BaseEvent]'."""
    type: ClassVar[str] = "event"
    tick: int

    def to_payload_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["type"] = self.type
        return payload


@dataclass(frozen=True, kw_only=True)
class ScoreChanged(BaseEvent):
    type: ClassVar[str] = "score_changed"
    score: int


@dataclass(frozen=True, kw_only=True)
class HealthChanged(BaseEvent):
    type: ClassVar[str] = "health_changed"
    health: int


@dataclass(frozen=True, kw_only=True)
class LevelChanged(BaseEvent):
    type: ClassVar[str] = "level_changed"
    level: int
    cleared: int = 0  # enemies removed by the level-up sweep


@dataclass(frozen=True, kw_only=True)
class CoinsChanged(BaseEvent):
    type: ClassVar[str] = "coins_changed"
    balance: int


@dataclass(frozen=True, kw_only=True)
class ChargeChanged(BaseEvent):
    type: ClassVar[str] = "charge_changed"
    charge: int


@dataclass(frozen=True, kw_only=True)
class AchievementUnlocked(BaseEvent):
    type: ClassVar[str] = "achievement_unlocked"
    achievement: Achievement


@dataclass(frozen=True, kw_only=True)
class MilestoneReached(BaseEvent):
    type: ClassVar[str] = "milestone_reached"
    score: int


@dataclass(frozen=True, kw_only=True)
class GameOver(BaseEvent):
    type: ClassVar[str] = "game_over"
    score: int
    level: int
    achievements: Tuple[Achievement, ...]


@dataclass(frozen=True, kw_only=True)
class ShotFired(BaseEvent):
    type: ClassVar[str] = "shot_fired"
    bullets: int


@dataclass(frozen=True, kw_only=True)
class EnemyDestroyed(BaseEvent):
    type: ClassVar[str] = "enemy_destroyed"
    enemy_type: str
    cause: str  # "direct", "ring" or "ability"
    x: float
    y: float
    score_value: int


@dataclass(frozen=True, kw_only=True)
class EnemyEscaped(BaseEvent):
    type: ClassVar[str] = "enemy_escaped"
    enemy_type: str
    penalty: int


@dataclass(frozen=True, kw_only=True)
class PlayerHit(BaseEvent):
    type: ClassVar[str] = "player_hit"
    shielded: bool


@dataclass(frozen=True, kw_only=True)
class PowerUpCollected(BaseEvent):
    type: ClassVar[str] = "powerup_collected"
    power_up: str
    total: int


@dataclass(frozen=True, kw_only=True)
class CoinCollected(BaseEvent):
    type: ClassVar[str] = "coin_collected"
    value: int


@dataclass(frozen=True, kw_only=True)
class AbilityActivated(BaseEvent):
    type: ClassVar[str] = "ability_activated"
    destroyed: int


class EventLog:
    """Ordered event sink shared by the components of one world"""

    def __init__(self):
        self.tick = 0
        self._events: List[BaseEvent] = []

    def emit(self, event_cls, **fields) -> BaseEvent:
        event = event_cls(tick=self.tick, **fields)
        self._events.append(event)
        return event

    def drain(self) -> Tuple[BaseEvent, ...]:
        events = tuple(self._events)
        self._events.clear()
        return events

    def __len__(self) -> int:
        return len(self._events)


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick: ordered events plus the render view"""
    events: Tuple[BaseEvent, ...] = ()
    view: Optional[Any] = None
    ran: bool = True

    def of_type(self, event_cls) -> List[BaseEvent]:
        return [e for e in self.events if isinstance(e, event_cls)]

    def to_payload_list(self) -> List[Dict[str, Any]]:
        return [e.to_payload_dict() for e in self.events]
