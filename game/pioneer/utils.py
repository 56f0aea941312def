"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def circle_collide(a, b) -> bool:
    """Check if two circular entities overlap (strictly)"""
    return distance(a.x, a.y, b.x, b.y) < a.radius + b.radius


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """'#rrggbb' -> (r, g, b)"""
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def seed_everything(py_seed: Optional[int]) -> random.Random:
    """Seed all random number generators and return a dedicated Random"""
    if py_seed is None:
        return random.Random()
    random.seed(py_seed)
    np.random.seed(py_seed)
    return random.Random(py_seed)
