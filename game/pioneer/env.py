"""
PioneerEnv - the game as a gymnasium environment
------------------------------------------------
- Runs the real simulation core (GameSession) headless
- Gymnasium API
- MultiDiscrete action space: [move(5), fire(2), ability(2)]
- Vector observation: player state + top-K nearest enemies + top-M nearest pickups
- Reward shaped from tick events (kills, pickups, hits, escapes, level-ups)

Quick test:
    python -m game.pioneer.env
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .constants import FPS, GAME_HEIGHT, GAME_WIDTH, MAX_CHARGE
from .controls import InputState
from .events import (
    CoinCollected,
    EnemyDestroyed,
    EnemyEscaped,
    LevelChanged,
    PlayerHit,
    PowerUpCollected,
    ShotFired,
)
from .session import GameSession, GameState
from .utils import clamp, seed_everything

DEFAULT_REWARDS = {
    "R_KILL": 1.0,       # per enemy destroyed
    "R_COIN": 0.2,       # per coin picked up
    "R_POWERUP": 0.5,    # per power-up picked up
    "R_LEVEL": 2.0,      # per level gained
    "R_DAMAGE": 1.0,     # per health lost (shield hits cost half)
    "R_ESCAPE": 0.2,     # per enemy that reached the bottom
    "R_SHOT": 0.01,      # per volley fired
    "R_TIME": 0.001,     # per step
    "R_DEATH": 5.0,      # on game over
}

# move: 0 stay, 1 up, 2 down, 3 left, 4 right
_MOVES = {
    0: {},
    1: {"up": True},
    2: {"down": True},
    3: {"left": True},
    4: {"right": True},
}


class PioneerEnv(gym.Env):
    """Interstellar Pioneers as an RL environment"""

    metadata = {"render_modes": ["human"], "render_fps": FPS}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = GAME_WIDTH,
        height: int = GAME_HEIGHT,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        m_pickups: int = 3,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.width = width
        self.height = height
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_pickups = m_pickups
        self.rewards = dict(DEFAULT_REWARDS)
        if rewards:
            self.rewards.update({k: v for k, v in rewards.items() if k.startswith("R_")})

        self.action_space = spaces.MultiDiscrete([5, 2, 2])

        # Player: pos(2) health(1) charge(1) shield(1) triple(1) invincible(1)
        # Each enemy: rel pos(2) speed(1)
        # Each pickup: rel pos(2)
        obs_dim = 7 + (self.k_enemies * 3) + (self.m_pickups * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.session: GameSession = None  # type: ignore
        self._step_count = 0
        self._events: Dict[str, float] = {}
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        rng = seed_everything(seed)

        self._step_count = 0
        self._totals = {"kills": 0.0, "coins": 0.0, "powerups": 0.0, "damage": 0.0}
        self.session = GameSession(self.width, self.height, rng=rng)
        self.session.start()
        if self._window is not None:
            self._window.session = self.session

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, fire, ability = int(action[0]), int(action[1]), int(action[2])
        keys = dict(_MOVES.get(move, {}))
        keys["fire"] = fire == 1
        keys["ability"] = ability == 1

        result = self.session.tick(InputState.from_keys(keys), 1.0 / FPS)
        # milestone screen pauses the game; an agent just keeps playing
        if self.session.state is GameState.MILESTONE_VICTORY:
            self.session.resume()

        self._events = self._count_events(result.events)
        for key in self._totals:
            self._totals[key] += self._events.get(key, 0.0)

        reward = self._compute_reward()

        terminated = self.session.state is GameState.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    @staticmethod
    def _count_events(events) -> Dict[str, float]:
        counts = {"kills": 0.0, "coins": 0.0, "powerups": 0.0, "damage": 0.0,
                  "escapes": 0.0, "shots": 0.0, "levels": 0.0}
        for e in events:
            if isinstance(e, EnemyDestroyed):
                counts["kills"] += 1
            elif isinstance(e, CoinCollected):
                counts["coins"] += e.value
            elif isinstance(e, PowerUpCollected):
                counts["powerups"] += 1
            elif isinstance(e, PlayerHit):
                counts["damage"] += 0.5 if e.shielded else 1.0
            elif isinstance(e, EnemyEscaped):
                counts["escapes"] += 1
            elif isinstance(e, ShotFired):
                counts["shots"] += 1
            elif isinstance(e, LevelChanged):
                counts["levels"] += 1
        return counts

    def _compute_reward(self) -> float:
        r = self.rewards
        ev = self._events
        reward = 0.0
        reward += r["R_KILL"] * ev.get("kills", 0.0)
        reward += r["R_COIN"] * ev.get("coins", 0.0)
        reward += r["R_POWERUP"] * ev.get("powerups", 0.0)
        reward += r["R_LEVEL"] * ev.get("levels", 0.0)

        reward -= r["R_DAMAGE"] * ev.get("damage", 0.0)
        reward -= r["R_ESCAPE"] * ev.get("escapes", 0.0)
        reward -= r["R_SHOT"] * ev.get("shots", 0.0)
        reward -= r["R_TIME"]

        if self.session.state is GameState.GAME_OVER:
            reward -= r["R_DEATH"]

        return float(reward)

    def _get_obs(self) -> np.ndarray:
        world = self.session.world
        p = world.player

        obs_parts = [
            (p.x / self.width) * 2 - 1,
            (p.y / self.height) * 2 - 1,
            (p.health / p.max_health) * 2 - 1,
            (p.ultimate_charge / MAX_CHARGE) * 2 - 1,
            1.0 if p.power_ups.shield else -1.0,
            1.0 if p.power_ups.triple_shot > 0 else -1.0,
            1.0 if p.invincible else -1.0,
        ]

        def nearest(items, k):
            return sorted(items, key=lambda o: (o.x - p.x) ** 2 + (o.y - p.y) ** 2)[:k]

        enemies = nearest(world.store.live_enemies(), self.k_enemies)
        for i in range(self.k_enemies):
            if i < len(enemies):
                e = enemies[i]
                obs_parts += [
                    clamp((e.x - p.x) / self.width, -1, 1),
                    clamp((e.y - p.y) / self.height, -1, 1),
                    clamp(e.speed / 10.0, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        pickups = [c for c in world.store.coins if c.alive] + [pu for pu in world.store.power_ups if pu.alive]
        pickups = nearest(pickups, self.m_pickups)
        for i in range(self.m_pickups):
            if i < len(pickups):
                o = pickups[i]
                obs_parts += [
                    clamp((o.x - p.x) / self.width, -1, 1),
                    clamp((o.y - p.y) / self.height, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _get_info(self) -> Dict[str, Any]:
        world = self.session.world
        return {
            "score": world.score,
            "level": world.level,
            "health": world.player.health,
            "coins": world.coins,
            "charge": world.player.ultimate_charge,
            "enemies_killed": world.tracker.kills,
            "powerups_collected": world.tracker.pickups,
            "coins_collected": self._totals.get("coins", 0.0),
            "damage_taken": self._totals.get("damage", 0.0),
            "num_enemies": len(world.store.enemies),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import PioneerWindow
            self._window = PioneerWindow(self.session, self.width, self.height, autoplay=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: int = 42):
    """Run a random episode for testing"""
    env = PioneerEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  score: {info['score']}  level: {info['level']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
