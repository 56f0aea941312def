"""Interstellar Pioneers - arcade shooter simulation core"""

from .clock import SimulationClock
from .controls import InputState
from .economy import EconomyLedger, ShopItem
from .entities import EnemyType, PowerUpType
from .env import PioneerEnv, run_random_episode
from .events import Achievement, TickResult
from .session import GameSession, GameState
from .world import World

__all__ = [
    'Achievement',
    'EconomyLedger',
    'EnemyType',
    'GameSession',
    'GameState',
    'InputState',
    'PioneerEnv',
    'PowerUpType',
    'ShopItem',
    'SimulationClock',
    'TickResult',
    'World',
    'run_random_episode',
]
