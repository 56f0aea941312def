"""
Custom callback for tracking game metrics during training.
Records: score, level reached, enemies killed, coins, damage taken.
"""

import os
import csv
from typing import Dict, List, Any, Optional
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log game metrics per episode.
    Saves to CSV for easy plotting.
    """

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        # Episode tracking
        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[float] = []
        self.episode_levels: List[float] = []
        self.episode_kills: List[float] = []
        self.episode_coins: List[float] = []

        # CSV file
        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow([
            "timestep", "episode", "reward", "length",
            "score", "level", "kills", "coins", "damage", "survived"
        ])
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor wrapper adds episode info on the final step
            if not (done and "episode" in info):
                continue
            ep_info = info["episode"]
            ep_reward = ep_info["r"]
            ep_length = ep_info["l"]

            score = info.get("score", 0)
            level = info.get("level", 1)
            kills = info.get("enemies_killed", 0)
            coins = info.get("coins_collected", 0)
            damage = info.get("damage_taken", 0)
            survived = 1.0 if info.get("health", 0) > 0 else 0.0

            self.episode_rewards.append(ep_reward)
            self.episode_lengths.append(ep_length)
            self.episode_scores.append(score)
            self.episode_levels.append(level)
            self.episode_kills.append(kills)
            self.episode_coins.append(coins)

            if self.csv_writer:
                self.csv_writer.writerow([
                    self.num_timesteps,
                    len(self.episode_rewards),
                    ep_reward,
                    ep_length,
                    score,
                    level,
                    kills,
                    coins,
                    damage,
                    survived,
                ])
                self.csv_file.flush()

            if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                avg_reward = sum(self.episode_rewards[-10:]) / 10
                avg_score = sum(self.episode_scores[-10:]) / 10
                print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                      f"Timestep {self.num_timesteps}, "
                      f"Avg Reward (10 ep): {avg_reward:.2f}, "
                      f"Avg Score (10 ep): {avg_score:.0f}")

        return True

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        import numpy as np
        return {
            "mean_reward": np.mean(self.episode_rewards),
            "std_reward": np.std(self.episode_rewards),
            "mean_length": np.mean(self.episode_lengths),
            "total_episodes": len(self.episode_rewards),
            "mean_score": np.mean(self.episode_scores),
            "max_level": max(self.episode_levels),
            "mean_kills": np.mean(self.episode_kills),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs game metrics to TensorBoard at the end of each episode.
    """

    def __init__(self, verbose: int = 0):
        super().__init__(verbose)

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                ep = info["episode"]
                self.logger.record("custom/episode_reward", ep["r"])
                self.logger.record("custom/episode_length", ep["l"])
                for key in ("score", "level", "enemies_killed", "coins_collected"):
                    if key in info:
                        self.logger.record(f"custom/{key}", info[key])

        return True
