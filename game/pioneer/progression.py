"""
ProgressionTracker - score, level, kill counters and the achievement catalog.
"""

from __future__ import annotations

from typing import Callable, FrozenSet, Iterable, Optional, Tuple

from loguru import logger

from .constants import (
    ACE_PILOT_KILLS,
    ACHIEVEMENTS,
    LEVEL_SCORE_FACTOR,
    MILESTONE_SCORE,
    POWER_COLLECTOR_PICKUPS,
    SURVIVOR_LEVEL,
)
from .events import (
    Achievement,
    AchievementUnlocked,
    EventLog,
    GameOver,
    LevelChanged,
    MilestoneReached,
    ScoreChanged,
)

CATALOG: Tuple[Achievement, ...] = tuple(Achievement(**a) for a in ACHIEVEMENTS)


def level_threshold(level: int) -> int:
    """Score needed to leave ``level``"""
    return level * level * LEVEL_SCORE_FACTOR


class ProgressionTracker:
    """
    Derives level-ups, milestones and achievement unlocks from score and
    counter changes. The catalog is immutable; unlock state is the set of
    unlocked ids, and the host only ever sees copied snapshots.
    """

    def __init__(
        self,
        log: EventLog,
        unlocked: Optional[Iterable[str]] = None,
        catalog: Tuple[Achievement, ...] = CATALOG,
    ):
        self.log = log
        self.catalog = catalog
        self._by_id = {a.id: a for a in catalog}
        self._unlocked = set(unlocked or ())
        unknown = self._unlocked - set(self._by_id)
        if unknown:
            raise ValueError(f"Unknown achievement ids: {sorted(unknown)}")

        self.score = 0
        self.level = 1
        self.kills = 0
        self.pickups = 0
        self.milestone_reached = False

    # ----------------------------
    # Achievements
    # ----------------------------

    @property
    def unlocked(self) -> FrozenSet[str]:
        return frozenset(self._unlocked)

    def is_unlocked(self, achievement_id: str) -> bool:
        return achievement_id in self._unlocked

    def unlock(self, achievement_id: str) -> bool:
        """Unlock an achievement; returns False if it already was"""
        if achievement_id not in self._by_id:
            raise ValueError(f"Unknown achievement id: {achievement_id}")
        if achievement_id in self._unlocked:
            return False
        self._unlocked.add(achievement_id)
        snapshot = self._snapshot(self._by_id[achievement_id])
        logger.info("Achievement unlocked: {}", achievement_id)
        self.log.emit(AchievementUnlocked, achievement=snapshot)
        return True

    def achievements(self) -> Tuple[Achievement, ...]:
        return tuple(self._snapshot(a) for a in self.catalog)

    def _snapshot(self, achievement: Achievement) -> Achievement:
        return Achievement(
            id=achievement.id,
            title=achievement.title,
            description=achievement.description,
            icon=achievement.icon,
            unlocked=achievement.id in self._unlocked,
        )

    # ----------------------------
    # Score
    # ----------------------------

    def add_score(self, amount: int):
        self.score = max(0, self.score + amount)
        self.log.emit(ScoreChanged, score=self.score)
        self._check_score_triggers()

    def penalize(self, amount: int):
        self.add_score(-amount)

    def _check_score_triggers(self):
        if self.score < MILESTONE_SCORE:
            return
        self.unlock("sharpshooter")
        if not self.milestone_reached:
            self.milestone_reached = True
            logger.info("Milestone reached at score {}", self.score)
            self.log.emit(MilestoneReached, score=self.score)

    # ----------------------------
    # Counters
    # ----------------------------

    def record_kill(self, score_value: int):
        self.kills += 1
        self.add_score(score_value)
        if self.kills == 1:
            self.unlock("first_blood")
        if self.kills >= ACE_PILOT_KILLS:
            self.unlock("ace_pilot")

    def record_pickup(self):
        self.pickups += 1
        if self.pickups >= POWER_COLLECTOR_PICKUPS:
            self.unlock("power_collector")

    # ----------------------------
    # Level
    # ----------------------------

    def check_level_up(self, clear_enemies: Callable[[], int]) -> bool:
        """
        Advance one level if the score reached the current threshold.
        ``clear_enemies`` removes the whole enemy wave without penalty.
        """
        if self.score < level_threshold(self.level):
            return False
        self.level += 1
        cleared = clear_enemies()
        logger.info("Level up -> {} (cleared {} enemies)", self.level, cleared)
        self.log.emit(LevelChanged, level=self.level, cleared=cleared)
        if self.level == SURVIVOR_LEVEL:
            self.unlock("survivor")
        return True

    def game_over(self) -> GameOver:
        logger.info("Game over: score={} level={}", self.score, self.level)
        return self.log.emit(GameOver, score=self.score, level=self.level, achievements=self.achievements())
