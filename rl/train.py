"""
Training script for the Interstellar Pioneers environment using Stable-Baselines3
Supports PPO and DQN with per-episode game metrics tracking.
"""

import os
import argparse
from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.pioneer import PioneerEnv
from rl.configs.pioneer_config import ENV_CONFIG, REWARD_CONFIG, PPO_CONFIG, DQN_CONFIG, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


class MultiDiscreteToDiscreteWrapper(gym.ActionWrapper):
    """
    Wrapper to convert MultiDiscrete action space to Discrete for DQN.
    Flattens MultiDiscrete([5, 2, 2]) to Discrete(5*2*2=20).
    """

    def __init__(self, env):
        super().__init__(env)
        self.orig_action_space = env.action_space
        self._nvec = env.action_space.nvec
        self.n_total = int(np.prod(self._nvec))
        self.action_space = spaces.Discrete(self.n_total)

    def action(self, action):
        """Convert flat discrete action to MultiDiscrete."""
        indices = []
        remaining = int(action)
        for n in reversed(self._nvec):
            indices.append(remaining % n)
            remaining //= n
        return np.array(list(reversed(indices)), dtype=np.int64)


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None,
             wrap_for_dqn: bool = False):
    """Factory function to create the environment"""
    def _init():
        env = PioneerEnv(render_mode=render_mode, rewards=REWARD_CONFIG, **ENV_CONFIG)
        if wrap_for_dqn:
            env = MultiDiscreteToDiscreteWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def _print_summary(algo: str, final_path: str, metrics_callback: MetricsCallback):
    print(f"\n{'='*60}")
    print(f"{algo} Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.0f}  Max Level: {summary['max_level']}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")


def train_ppo(
    total_timesteps: int = None,
    save_dir: str = "./models/ppo",
    log_dir: str = "./logs/ppo",
    tensorboard_log: str = "./tensorboard_logs/ppo",
    n_envs: int = 4,
):
    """Train PPO agent on the pioneer environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=TRAINING_CONFIG["save_freq"] // n_envs,
        save_path=save_dir,
        name_prefix="ppo_pioneer",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 5000) // n_envs,
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="ppo", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = PPO(env=env, tensorboard_log=tensorboard_log, **PPO_CONFIG)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "ppo_pioneer_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    _print_summary("PPO", final_path, metrics_callback)
    return model, metrics_callback


def train_dqn(
    total_timesteps: int = None,
    save_dir: str = "./models/dqn",
    log_dir: str = "./logs/dqn",
    tensorboard_log: str = "./tensorboard_logs/dqn",
):
    """Train DQN agent on the pioneer environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training DQN for {total_timesteps:,} timesteps...")
    print(f"Using MultiDiscrete->Discrete action wrapper (20 actions)")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=0, wrap_for_dqn=True)])
    eval_env = DummyVecEnv([make_env(seed=100, wrap_for_dqn=True)])

    checkpoint_callback = CheckpointCallback(
        save_freq=TRAINING_CONFIG["save_freq"],
        save_path=save_dir,
        name_prefix="dqn_pioneer",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=TRAINING_CONFIG.get("eval_freq", 10000),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(log_dir=log_dir, algo_name="dqn", verbose=1)
    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = DQN(env=env, tensorboard_log=tensorboard_log, **DQN_CONFIG)
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "dqn_pioneer_final")
    model.save(final_path)

    _print_summary("DQN", final_path, metrics_callback)
    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on Interstellar Pioneers")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )

    args = parser.parse_args()

    if args.algo == "ppo":
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs)
    elif args.algo == "dqn":
        train_dqn(total_timesteps=args.timesteps)
    elif args.algo == "all":
        print("Training all algorithms sequentially...")
        train_dqn(total_timesteps=args.timesteps)
        train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()
